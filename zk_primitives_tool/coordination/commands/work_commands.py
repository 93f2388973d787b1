"""
Work record commands.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import json

import click

from ..constants import (
    DEFAULT_HOSTS,
    DEFAULT_TIMEOUT,
    DEFAULT_WORK_PATH,
    ENV_CLUSTER,
    ENV_HOSTS,
    ENV_TIMEOUT,
    ENV_WORK_PATH,
    EXIT_CONFLICT,
    EXIT_NOT_FOUND,
    EXIT_REMOTE_ERROR,
    EXIT_USAGE,
)
from ..core.client import ZooKeeperClient
from ..core.work_operations import complete_work, create_work, get_work, list_work
from ..exceptions import (
    ConflictError,
    CoordinationError,
    NodeNotFoundError,
    SerializationError,
)
from ..logging_config import get_logger, setup_logging
from ..models import LedgerConfig
from ..utils import output_error, output_json, output_text

logger = get_logger(__name__)


@click.command("work-create")
@click.argument("work_id")
@click.option("--data", default="{}", help="Payload as a JSON object")
@click.option("--makepath", is_flag=True, help="Create missing parent nodes")
@click.option("--cluster", envvar=ENV_CLUSTER, required=True, help="Cluster name")
@click.option(
    "--work-path",
    envvar=ENV_WORK_PATH,
    default=DEFAULT_WORK_PATH,
    show_default=True,
    help="Work root path segment",
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
def work_create_command(
    ctx: click.Context,
    work_id: str,
    data: str,
    makepath: bool,
    cluster: str,
    work_path: str,
    hosts: str,
    timeout: float,
    text: bool,
    verbose: int,
) -> None:
    """Create a work record.

    Stores the JSON payload at /CLUSTER/WORK_PATH/WORK_ID. Fails if a
    record already exists at that path (records are never overwritten).

    Examples:

    \b
        # Create a work record
        zk-primitives-tool coordination work-create job1 --cluster prod \\
            --data '{"input": "s3://bucket/key"}'

    \b
        # Create the work root on first use
        zk-primitives-tool coordination work-create job1 --cluster prod --makepath

    \b
    Output Format:
        Returns JSON:
        {"work": "job1", "path": "/prod/work/job1", "created": true}
    """
    setup_logging(verbose)

    try:
        payload = json.loads(data)
    except ValueError as e:
        logger.error(f"Invalid --data: {e}")
        output_error(f"Invalid JSON in --data: {e}", "Pass a JSON object", EXIT_USAGE, text)
        ctx.exit(EXIT_USAGE)

    try:
        logger.info(f"Creating work '{work_id}' in cluster '{cluster}'")
        logger.debug(f"Hosts: {hosts}, Work path: {work_path}")

        config = LedgerConfig(cluster, work_path)
        with ZooKeeperClient(hosts, timeout) as client:
            result = create_work(client, config, work_id, payload, makepath=makepath)

        if text:
            output_text(f"✅ Created work {result['path']}")
        else:
            output_json(result)

    except ConflictError as e:
        output_error(str(e), "Complete the existing work or pick another id", EXIT_CONFLICT, text)
        ctx.exit(EXIT_CONFLICT)
    except SerializationError as e:
        output_error(str(e), "Payload must be a JSON object", EXIT_USAGE, text)
        ctx.exit(EXIT_USAGE)
    except NodeNotFoundError as e:
        output_error(str(e), "Create the work root or pass --makepath", EXIT_REMOTE_ERROR, text)
        ctx.exit(EXIT_REMOTE_ERROR)
    except ValueError as e:
        output_error(str(e), "Pass non-empty --cluster, --work-path and work id", EXIT_USAGE, text)
        ctx.exit(EXIT_USAGE)
    except CoordinationError as e:
        output_error(str(e), "Check ZooKeeper is reachable at --hosts", EXIT_REMOTE_ERROR, text)
        ctx.exit(EXIT_REMOTE_ERROR)


@click.command("work-complete")
@click.argument("work_id")
@click.option("--cluster", envvar=ENV_CLUSTER, required=True, help="Cluster name")
@click.option(
    "--work-path",
    envvar=ENV_WORK_PATH,
    default=DEFAULT_WORK_PATH,
    show_default=True,
    help="Work root path segment",
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
def work_complete_command(
    ctx: click.Context,
    work_id: str,
    cluster: str,
    work_path: str,
    hosts: str,
    timeout: float,
    text: bool,
    verbose: int,
) -> None:
    """Mark work as done by deleting its record.

    The delete ignores the node version. A failed delete is logged and
    reported in the output but never fails the command (exit code 0).

    Examples:

    \b
        # Complete a work record
        zk-primitives-tool coordination work-complete job1 --cluster prod

    \b
    Output Format:
        Returns JSON:
        {"work": "job1", "path": "/prod/work/job1", "deleted": true, "error": null}
    """
    setup_logging(verbose)

    try:
        config = LedgerConfig(cluster, work_path)
        with ZooKeeperClient(hosts, timeout) as client:
            result = complete_work(client, config, work_id)

        if text:
            if result["deleted"]:
                output_text(f"✅ Deleted work {result['path']}")
            else:
                output_text(f"⚠️  Work {result['path']} not deleted: {result['error']}")
        else:
            output_json(result)

    except ValueError as e:
        output_error(str(e), "Pass non-empty --cluster, --work-path and work id", EXIT_USAGE, text)
        ctx.exit(EXIT_USAGE)
    except CoordinationError as e:
        output_error(str(e), "Check ZooKeeper is reachable at --hosts", EXIT_REMOTE_ERROR, text)
        ctx.exit(EXIT_REMOTE_ERROR)


@click.command("work-get")
@click.argument("work_id")
@click.option("--cluster", envvar=ENV_CLUSTER, required=True, help="Cluster name")
@click.option(
    "--work-path",
    envvar=ENV_WORK_PATH,
    default=DEFAULT_WORK_PATH,
    show_default=True,
    help="Work root path segment",
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
def work_get_command(
    ctx: click.Context,
    work_id: str,
    cluster: str,
    work_path: str,
    hosts: str,
    timeout: float,
    text: bool,
    verbose: int,
) -> None:
    """Show the payload of a work record.

    Exit codes:
    - 0: Record found
    - 1: No record at the path
    - 3: ZooKeeper or decoding error

    Examples:

    \b
        # Read a work record
        zk-primitives-tool coordination work-get job1 --cluster prod

    \b
        # Extract a field with jq
        zk-primitives-tool coordination work-get job1 --cluster prod | jq -r '.payload.input'

    \b
    Output Format:
        Returns JSON:
        {"work": "job1", "path": "/prod/work/job1", "payload": {...}, "version": 0}
    """
    setup_logging(verbose)

    try:
        config = LedgerConfig(cluster, work_path)
        with ZooKeeperClient(hosts, timeout) as client:
            record = get_work(client, config, work_id)

        if text:
            output_text(f"Work {record.path} (version {record.version}):")
            for key, value in record.payload.items():
                output_text(f"  {key}: {value}")
        else:
            output_json(
                {
                    "work": record.work_id,
                    "path": record.path,
                    "payload": record.payload,
                    "version": record.version,
                    "created_at": record.created_at,
                }
            )

    except NodeNotFoundError as e:
        output_error(str(e), "Check the work id and --cluster", EXIT_NOT_FOUND, text)
        ctx.exit(EXIT_NOT_FOUND)
    except ValueError as e:
        output_error(str(e), "Pass non-empty --cluster, --work-path and work id", EXIT_USAGE, text)
        ctx.exit(EXIT_USAGE)
    except CoordinationError as e:
        output_error(str(e), "Check ZooKeeper is reachable at --hosts", EXIT_REMOTE_ERROR, text)
        ctx.exit(EXIT_REMOTE_ERROR)


@click.command("work-list")
@click.option("--cluster", envvar=ENV_CLUSTER, required=True, help="Cluster name")
@click.option(
    "--work-path",
    envvar=ENV_WORK_PATH,
    default=DEFAULT_WORK_PATH,
    show_default=True,
    help="Work root path segment",
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
def work_list_command(
    ctx: click.Context,
    cluster: str,
    work_path: str,
    hosts: str,
    timeout: float,
    text: bool,
    verbose: int,
) -> None:
    """List outstanding work ids of a cluster.

    Examples:

    \b
        # List work
        zk-primitives-tool coordination work-list --cluster prod

    \b
        # Iterate over work ids
        for id in $(zk-primitives-tool coordination work-list --cluster prod | jq -r '.work[]'); do
            echo "Pending: $id"
        done

    \b
    Output Format:
        Returns JSON:
        {"cluster": "prod", "path": "/prod/work", "work": ["job1"], "count": 1}
    """
    setup_logging(verbose)

    try:
        config = LedgerConfig(cluster, work_path)
        with ZooKeeperClient(hosts, timeout) as client:
            result = list_work(client, config)

        if text:
            if result["count"] == 0:
                output_text(f"No outstanding work under {result['path']}")
            else:
                output_text(f"{result['count']} work item(s) under {result['path']}:")
                for work_id in result["work"]:
                    output_text(f"  {work_id}")
        else:
            output_json(result)

    except ValueError as e:
        output_error(str(e), "Pass non-empty --cluster, --work-path and work id", EXIT_USAGE, text)
        ctx.exit(EXIT_USAGE)
    except CoordinationError as e:
        output_error(str(e), "Check ZooKeeper is reachable at --hosts", EXIT_REMOTE_ERROR, text)
        ctx.exit(EXIT_REMOTE_ERROR)
