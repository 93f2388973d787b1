"""
Children watch operations.

A watcher keeps a SafeMap in sync with the child set of a ZooKeeper node.
ZooKeeper child watches are one-shot: every notification is followed by a
re-list that both fetches the fresh child set and arms the next watch.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import queue
import threading
from collections.abc import Callable, Iterable
from typing import Any

from kazoo.protocol.states import EventType, WatchedEvent

from ..exceptions import CoordinationError, WatcherError
from ..logging_config import get_logger
from ..models import ChildrenDelta, MemberState, WatcherState
from ..utils import validate_path
from .client import ZooKeeperClient
from .safe_map import SafeMap

logger = get_logger(__name__)

ChangeCallback = Callable[[SafeMap[MemberState]], Any]
ErrorCallback = Callable[[Exception], Any]

_CANCEL = object()


def reconcile(children: SafeMap[MemberState], nodes: Iterable[str]) -> ChildrenDelta:
    """
    Replace the contents of a node set with a freshly fetched child list.

    Runs in one exclusive span: mark every key stale, mark every fetched
    node live (reviving survivors and inserting new names), then prune what
    is still stale. Readers only see the set before or after the pass.

    Args:
        children: Node set to update in place
        nodes: Fresh child names

    Returns:
        Names added and removed by this pass
    """
    delta = ChildrenDelta()

    with children.extended() as members:
        for key in members:
            members[key] = MemberState.STALE

        for node in nodes:
            if node not in members:
                delta.added.append(node)
            members[node] = MemberState.LIVE

        stale = [key for key, state in members.items() if state is MemberState.STALE]
        for key in stale:
            del members[key]
        delta.removed.extend(stale)

    delta.added.sort()
    delta.removed.sort()
    return delta


class ChildrenWatcher:
    """
    Mirror the children of a node into a SafeMap until cancelled.

    ``start()`` seeds the map synchronously and raises if the node cannot be
    listed. After that a daemon thread applies every change and calls
    ``on_change(children)`` inline, so a slow callback delays later passes.

    ``last_delta`` holds the names added and removed by the most recent pass
    (the seed counts as one); it is stable while ``on_change`` runs.

    A failing re-list (or a raising callback) ends the watch: the error is
    logged, stored in ``error``, passed to ``on_error`` and ``state`` becomes
    ``WatcherState.FAILED``.
    """

    def __init__(
        self,
        client: ZooKeeperClient,
        path: str,
        children: SafeMap[MemberState] | None = None,
        on_change: ChangeCallback | None = None,
        on_error: ErrorCallback | None = None,
    ):
        validate_path(path)
        self.client = client
        self.path = path
        self.children: SafeMap[MemberState] = children if children is not None else SafeMap()
        self.on_change = on_change
        self.on_error = on_error
        self.error: Exception | None = None
        self.passes = 0
        self.last_delta: ChildrenDelta | None = None

        self._state = WatcherState.UNINITIALIZED
        self._events: queue.Queue[Any] = queue.Queue()
        self._cancelled = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> WatcherState:
        return self._state

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "ChildrenWatcher":
        """
        Seed the node set and start watching.

        Returns:
            self

        Raises:
            WatcherError: If the watcher was already started
            NodeNotFoundError: If the watched node does not exist
            RemoteCallError: For other ZooKeeper errors
        """
        if self._state is not WatcherState.UNINITIALIZED:
            raise WatcherError(f"Watcher on '{self.path}' already started ({self._state.value})")

        try:
            nodes = self.client.get_children(self.path, watch=self._notify)
        except CoordinationError as e:
            logger.error(f"Failed to set up watcher on {self.path}: {e}")
            raise
        self.last_delta = reconcile(self.children, nodes)

        self._state = WatcherState.WATCHING
        self._thread = threading.Thread(
            target=self._run, name=f"children-watcher:{self.path}", daemon=True
        )
        self._thread.start()
        logger.info(f"watcher setup on {self.path}")
        return self

    def cancel(self) -> None:
        """Request termination. Returns without waiting for the loop to exit."""
        self._cancelled.set()
        self._events.put(_CANCEL)

    def join(self, timeout: float | None = None) -> bool:
        """
        Wait for the watch loop to exit.

        Returns:
            True if the loop has exited
        """
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def __enter__(self) -> "ChildrenWatcher":
        return self.start()

    def __exit__(self, *exc_info: Any) -> None:
        self.cancel()
        self.join()

    def _notify(self, event: WatchedEvent) -> None:
        # Runs on the kazoo event thread
        if not self._cancelled.is_set():
            self._events.put(event)

    def _run(self) -> None:
        while True:
            item = self._events.get()
            if item is _CANCEL or self._cancelled.is_set():
                self._state = WatcherState.CANCELLED
                logger.info(f"watcher on {self.path} cancelled")
                return

            try:
                self._apply(item)
            except CoordinationError as e:
                self._fail(e, f"Error in children watcher on {self.path}: {e}")
                return
            except Exception as e:
                self._fail(e, f"Change callback for {self.path} raised {type(e).__name__}: {e}")
                return

    def _apply(self, event: WatchedEvent) -> None:
        nodes = self.client.get_children(self.path, watch=self._notify)
        delta = reconcile(self.children, nodes)
        self.last_delta = delta
        self.passes += 1

        if event.type != EventType.CHILD:
            logger.debug(
                f"Re-armed watch on {self.path} after {event.type} event ({event.state})"
            )
            if not delta.changed:
                return

        logger.debug(
            f"Children of {self.path} changed: +{delta.added} -{delta.removed} "
            f"({len(self.children)} total)"
        )
        if self.on_change is not None:
            self.on_change(self.children)

    def _fail(self, error: Exception, message: str) -> None:
        self.error = error
        self._state = WatcherState.FAILED
        logger.error(message)
        if self.on_error is not None:
            try:
                self.on_error(error)
            except Exception:
                logger.exception(f"Error callback for {self.path} raised")


def watch_children(
    client: ZooKeeperClient,
    path: str,
    on_change: ChangeCallback,
    children: SafeMap[MemberState] | None = None,
    on_error: ErrorCallback | None = None,
) -> ChildrenWatcher:
    """
    Watch the children of path until the returned watcher is cancelled.

    Uses the SafeMap as a set: check entries with ``contains()``.

    Args:
        client: ZooKeeper client
        path: Node whose children are watched
        on_change: Called with the node set after every change
        children: Node set to keep in sync (a new one is created if omitted)
        on_error: Called once with the error that ended the watch

    Returns:
        The started watcher

    Raises:
        NodeNotFoundError: If path does not exist
        RemoteCallError: For other ZooKeeper errors
    """
    watcher = ChildrenWatcher(client, path, children, on_change=on_change, on_error=on_error)
    return watcher.start()
