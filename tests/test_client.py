import pytest
from kazoo.exceptions import ConnectionLoss, NodeExistsError, NoNodeError
from kazoo.handlers.threading import KazooTimeoutError

from zk_primitives_tool.coordination.core.client import ZooKeeperClient
from zk_primitives_tool.coordination.exceptions import (
    ConflictError,
    NodeNotFoundError,
    RemoteCallError,
)


class RaisingZooKeeper:
    def __init__(self, error):
        self.error = error
        self.stopped = False

    def start(self, timeout=None):
        raise self.error

    def stop(self):
        self.stopped = True

    def close(self):
        pass

    def get_children(self, path, watch=None):
        raise self.error

    def create(self, path, value=b"", acl=None, makepath=False):
        raise self.error

    def delete(self, path, version=-1):
        raise self.error

    def get(self, path):
        raise self.error


@pytest.mark.parametrize(
    "error, expected",
    [
        (NodeExistsError(), ConflictError),
        (NoNodeError(), NodeNotFoundError),
        (ConnectionLoss(), RemoteCallError),
        (KazooTimeoutError(), RemoteCallError),
    ],
)
def test_kazoo_errors_are_translated(error, expected):
    client = ZooKeeperClient(zk=RaisingZooKeeper(error))

    for call in (
        lambda: client.get_children("/p"),
        lambda: client.create("/p", b"x"),
        lambda: client.delete("/p"),
        lambda: client.get("/p"),
    ):
        with pytest.raises(expected):
            call()


def test_start_timeout_is_remote_error():
    client = ZooKeeperClient("nowhere:2181", 0.1, zk=RaisingZooKeeper(KazooTimeoutError()))
    with pytest.raises(RemoteCallError, match="nowhere:2181"):
        client.start()


def test_context_manager_starts_and_stops(fake_zk):
    with ZooKeeperClient(zk=fake_zk) as client:
        assert fake_zk.started
        assert client.get_children("/") == []
    assert not fake_zk.started


def test_create_defaults_to_open_acl(fake_zk):
    seen = {}

    def recording_create(path, value=b"", acl=None, makepath=False):
        seen["acl"] = acl
        return path

    fake_zk.create = recording_create
    ZooKeeperClient(zk=fake_zk).create("/p", b"")

    assert seen["acl"][0].perms == 31
    assert seen["acl"][0].id.scheme == "world"
