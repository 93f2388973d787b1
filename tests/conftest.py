"""Shared fixtures: an in-memory stand-in for a started KazooClient."""

import posixpath
import threading
import time

import pytest
from kazoo.exceptions import NodeExistsError, NoNodeError, NotEmptyError
from kazoo.protocol.states import EventType, KeeperState, WatchedEvent, ZnodeStat

from zk_primitives_tool.coordination.core.client import ZooKeeperClient
from zk_primitives_tool.coordination.models import LedgerConfig


class FakeZooKeeper:
    """
    Node tree with one-shot child watches, exposing the kazoo calls the
    project makes. Watches fire on a separate thread like kazoo's event
    thread does.
    """

    def __init__(self):
        self.nodes: dict[str, bytes] = {"/": b""}
        self.ctimes: dict[str, int] = {"/": 0}
        self.child_watches: dict[str, list] = {}
        self.started = False
        self.fail_get_children: Exception | None = None
        self._lock = threading.RLock()

    # kazoo client surface

    def start(self, timeout=None):
        self.started = True

    def stop(self):
        self.started = False

    def close(self):
        pass

    def get_children(self, path, watch=None):
        with self._lock:
            if self.fail_get_children is not None:
                raise self.fail_get_children
            if path not in self.nodes:
                raise NoNodeError()
            if watch is not None:
                self.child_watches.setdefault(path, []).append(watch)
            return self._children(path)

    def create(self, path, value=b"", acl=None, makepath=False):
        with self._lock:
            if path in self.nodes:
                raise NodeExistsError()
            parent = posixpath.dirname(path)
            if parent not in self.nodes:
                if not makepath:
                    raise NoNodeError()
                self.create(parent, makepath=True)
            self.nodes[path] = value
            self.ctimes[path] = int(time.time() * 1000)
            watches = self.child_watches.pop(parent, [])
        self._fire(watches, EventType.CHILD, parent)
        return path

    def delete(self, path, version=-1):
        with self._lock:
            if path not in self.nodes:
                raise NoNodeError()
            if self._children(path):
                raise NotEmptyError()
            del self.nodes[path]
            own = self.child_watches.pop(path, [])
            parent = posixpath.dirname(path)
            watches = self.child_watches.pop(parent, [])
        self._fire(own, EventType.DELETED, path)
        self._fire(watches, EventType.CHILD, parent)

    def get(self, path, watch=None):
        with self._lock:
            if path not in self.nodes:
                raise NoNodeError()
            data = self.nodes[path]
            ctime = self.ctimes[path]
        stat = ZnodeStat(0, 0, ctime, ctime, 0, 0, 0, 0, len(data), 0, 0)
        return data, stat

    # test helpers

    def replace_children(self, path, names):
        """Swap the whole child set of path in one step, firing one CHILD event."""
        with self._lock:
            for child in self._children(path):
                del self.nodes[posixpath.join(path, child)]
            for name in names:
                self.nodes[posixpath.join(path, name)] = b""
                self.ctimes[posixpath.join(path, name)] = 0
            watches = self.child_watches.pop(path, [])
        self._fire(watches, EventType.CHILD, path)

    def fire_session_event(self, path, state=KeeperState.CONNECTED):
        with self._lock:
            watches = self.child_watches.pop(path, [])
        self._fire(watches, EventType.NONE, path, state)

    def wait_for_watch(self, path, timeout=2.0):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            with self._lock:
                if self.child_watches.get(path):
                    return True
            time.sleep(0.01)
        return False

    def _children(self, path):
        prefix = path.rstrip("/") + "/"
        return sorted(
            node[len(prefix):]
            for node in self.nodes
            if node != path and node.startswith(prefix) and "/" not in node[len(prefix):]
        )

    @staticmethod
    def _fire(watches, event_type, path, state=KeeperState.CONNECTED):
        if not watches:
            return
        event = WatchedEvent(event_type, state, path)

        def deliver():
            for watch in watches:
                watch(event)

        thread = threading.Thread(target=deliver, daemon=True)
        thread.start()
        thread.join()


@pytest.fixture
def fake_zk():
    return FakeZooKeeper()


@pytest.fixture
def client(fake_zk):
    return ZooKeeperClient("fake:2181", 1.0, zk=fake_zk).start()


@pytest.fixture
def ledger(fake_zk):
    fake_zk.create("/clusterX/work", makepath=True)
    return LedgerConfig("clusterX", "work")


@pytest.fixture
def members(fake_zk):
    fake_zk.create("/clusterX/members", makepath=True)
    fake_zk.create("/clusterX/members/a")
    fake_zk.create("/clusterX/members/b")
    return "/clusterX/members"
