"""
Membership commands: list and watch the children of a node.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import threading

import click

from ..constants import (
    DEFAULT_HOSTS,
    DEFAULT_TIMEOUT,
    ENV_HOSTS,
    ENV_TIMEOUT,
    EXIT_NOT_FOUND,
    EXIT_REMOTE_ERROR,
    EXIT_USAGE,
)
from ..core.client import ZooKeeperClient
from ..core.safe_map import SafeMap
from ..core.watch_operations import ChildrenWatcher
from ..exceptions import CoordinationError, NodeNotFoundError
from ..logging_config import get_logger, setup_logging
from ..models import MemberState, WatcherState
from ..utils import output_error, output_json, output_text, validate_path

logger = get_logger(__name__)

# Seconds between checks for Ctrl-C while waiting on the watcher
POLL_INTERVAL = 0.2


@click.command("children")
@click.argument("path")
@click.option("--hosts", envvar=ENV_HOSTS, default=DEFAULT_HOSTS, help="ZooKeeper hosts")
@click.option(
    "--timeout", envvar=ENV_TIMEOUT, type=float, default=DEFAULT_TIMEOUT, help="Connect timeout"
)
@click.option("--text", is_flag=True, help="Output as human-readable text")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v INFO, -vv DEBUG, -vvv TRACE)",
)
@click.pass_context
def children_command(
    ctx: click.Context,
    path: str,
    hosts: str,
    timeout: float,
    text: bool,
    verbose: int,
) -> None:
    """List the children of a node.

    Examples:

    \b
        # List live workers
        zk-primitives-tool coordination children /prod/workers

    \b
    Output Format:
        Returns JSON:
        {"path": "/prod/workers", "members": ["w1", "w2"], "count": 2}
    """
    setup_logging(verbose)

    try:
        validate_path(path)
        with ZooKeeperClient(hosts, timeout) as client:
            members = sorted(client.get_children(path))

        if text:
            output_text(f"{path} has {len(members)} child(ren):")
            for member in members:
                output_text(f"  {member}")
        else:
            output_json({"path": path, "members": members, "count": len(members)})

    except ValueError as e:
        output_error(str(e), "Pass an absolute path such as /cluster/workers", EXIT_USAGE, text)
        ctx.exit(EXIT_USAGE)
    except NodeNotFoundError as e:
        output_error(str(e), "Check the path exists", EXIT_NOT_FOUND, text)
        ctx.exit(EXIT_NOT_FOUND)
    except CoordinationError as e:
        output_error(str(e), "Check ZooKeeper is reachable at --hosts", EXIT_REMOTE_ERROR, text)
        ctx.exit(EXIT_REMOTE_ERROR)


@click.command("watch")
@click.argument("path")
@click.option(
    "--count",
    type=click.IntRange(min=0),
    default=0,
    help="Stop after N changes (0 watches until interrupted)",
)
@click.option("--hosts", envvar=ENV_HOSTS, default=DEFAULT_HOSTS, help="ZooKeeper hosts")
@click.option(
    "--timeout", envvar=ENV_TIMEOUT, type=float, default=DEFAULT_TIMEOUT, help="Connect timeout"
)
@click.option("--text", is_flag=True, help="Output as human-readable text")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v INFO, -vv DEBUG, -vvv TRACE)",
)
@click.pass_context
def watch_command(
    ctx: click.Context,
    path: str,
    count: int,
    hosts: str,
    timeout: float,
    text: bool,
    verbose: int,
) -> None:
    """Follow the children of a node.

    Prints the current members, then one line per change until
    interrupted (Ctrl-C) or --count changes have been seen. If the watch
    dies (node deleted, session lost) the command exits with code 3.

    Examples:

    \b
        # Follow worker membership
        zk-primitives-tool coordination watch /prod/workers

    \b
        # Wait for the next membership change only
        zk-primitives-tool coordination watch /prod/workers --count 1

    \b
    Output Format:
        Returns one JSON object per line:
        {"path": "/prod/workers", "members": ["w2", "w3"],
         "added": ["w3"], "removed": ["w1"], "count": 2}
    """
    setup_logging(verbose)

    done = threading.Event()
    # Keeps the initial line ahead of the first change line
    output_lock = threading.Lock()
    seen = 0

    def report(members: list[str], added: list[str], removed: list[str]) -> None:
        if text:
            output_text(
                f"{path}: {len(members)} member(s) "
                f"+{','.join(added) or '-'} -{','.join(removed) or '-'}"
            )
        else:
            output_json(
                {
                    "path": path,
                    "members": members,
                    "added": added,
                    "removed": removed,
                    "count": len(members),
                }
            )

    def on_change(children: SafeMap[MemberState]) -> None:
        nonlocal seen
        delta = watcher.last_delta
        with output_lock:
            report(sorted(children.keys()), delta.added, delta.removed)
        seen += 1
        if count and seen >= count:
            done.set()

    def on_error(error: Exception) -> None:
        done.set()

    try:
        validate_path(path)
        with ZooKeeperClient(hosts, timeout) as client:
            watcher = ChildrenWatcher(client, path, on_change=on_change, on_error=on_error)
            with output_lock:
                watcher.start()
                seed = watcher.last_delta
                report(seed.added, seed.added, [])

            try:
                while not done.wait(POLL_INTERVAL):
                    pass
            except KeyboardInterrupt:
                logger.info(f"Interrupted, stopping watch on {path}")
            finally:
                watcher.cancel()
                watcher.join(timeout)

        if watcher.state is WatcherState.FAILED:
            output_error(
                f"Watch on {path} ended: {watcher.error}",
                "Check the node still exists and ZooKeeper is reachable",
                EXIT_REMOTE_ERROR,
                text,
            )
            ctx.exit(EXIT_REMOTE_ERROR)

    except ValueError as e:
        output_error(str(e), "Pass an absolute path such as /cluster/workers", EXIT_USAGE, text)
        ctx.exit(EXIT_USAGE)
    except NodeNotFoundError as e:
        output_error(str(e), "Check the path exists", EXIT_NOT_FOUND, text)
        ctx.exit(EXIT_NOT_FOUND)
    except CoordinationError as e:
        output_error(str(e), "Check ZooKeeper is reachable at --hosts", EXIT_REMOTE_ERROR, text)
        ctx.exit(EXIT_REMOTE_ERROR)
