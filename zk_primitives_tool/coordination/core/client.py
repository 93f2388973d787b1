"""
ZooKeeper client wrapper with error handling.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from collections.abc import Callable
from typing import Any

from kazoo.client import KazooClient
from kazoo.exceptions import KazooException, NodeExistsError, NoNodeError
from kazoo.handlers.threading import KazooTimeoutError
from kazoo.protocol.states import WatchedEvent
from kazoo.security import OPEN_ACL_UNSAFE

from ..constants import ANY_VERSION, DEFAULT_HOSTS, DEFAULT_TIMEOUT
from ..exceptions import ConflictError, NodeNotFoundError, RemoteCallError
from ..logging_config import get_logger

logger = get_logger(__name__)

WatchFunc = Callable[[WatchedEvent], Any]

_REMOTE_ERRORS = (KazooException, KazooTimeoutError)


class ZooKeeperClient:
    """ZooKeeper client wrapper with error handling."""

    def __init__(
        self,
        hosts: str = DEFAULT_HOSTS,
        timeout: float = DEFAULT_TIMEOUT,
        zk: KazooClient | None = None,
    ):
        """
        Initialize ZooKeeper client.

        Args:
            hosts: Comma separated host:port list
            timeout: Seconds to wait for a session in start()
            zk: Existing kazoo client (optional, created from hosts otherwise)
        """
        self.hosts = hosts
        self.timeout = timeout
        self.zk = zk if zk is not None else KazooClient(hosts=hosts, timeout=timeout)

    def start(self) -> "ZooKeeperClient":
        """
        Connect and wait for a session.

        Raises:
            RemoteCallError: If no session is established within the timeout
        """
        logger.debug(f"Connecting to {self.hosts}")
        try:
            self.zk.start(timeout=self.timeout)
        except _REMOTE_ERRORS as e:
            raise RemoteCallError(
                f"Could not connect to ZooKeeper at {self.hosts}: {e}"
            ) from e
        return self

    def stop(self) -> None:
        """Close the session. Safe to call more than once."""
        try:
            self.zk.stop()
            self.zk.close()
        except _REMOTE_ERRORS as e:
            logger.warning(f"Error while closing ZooKeeper session: {e}")

    def __enter__(self) -> "ZooKeeperClient":
        return self.start()

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()

    def get_children(self, path: str, watch: WatchFunc | None = None) -> list[str]:
        """
        List children of a node, optionally arming a one-shot child watch.

        Args:
            path: Node path
            watch: Called once on the kazoo event thread with the next WatchedEvent

        Returns:
            Child names

        Raises:
            NodeNotFoundError: If path does not exist
            RemoteCallError: For other ZooKeeper errors
        """
        try:
            return list(self.zk.get_children(path, watch=watch))
        except _REMOTE_ERRORS as e:
            self._handle_error(e, path)
            raise  # For type checker

    def create(
        self,
        path: str,
        value: bytes = b"",
        acl: list[Any] | None = None,
        makepath: bool = False,
    ) -> str:
        """
        Create a node. Never overwrites an existing node.

        Args:
            path: Node path
            value: Payload bytes
            acl: Access control list (defaults to world read/write)
            makepath: Create missing parent nodes

        Returns:
            Path of the created node

        Raises:
            ConflictError: If the node already exists
            NodeNotFoundError: If a parent is missing and makepath is False
            RemoteCallError: For other ZooKeeper errors
        """
        try:
            return self.zk.create(
                path,
                value,
                acl=acl if acl is not None else OPEN_ACL_UNSAFE,
                makepath=makepath,
            )
        except _REMOTE_ERRORS as e:
            self._handle_error(e, path)
            raise  # For type checker

    def delete(self, path: str, version: int = ANY_VERSION) -> None:
        """
        Delete a node.

        Args:
            path: Node path
            version: Expected node version (-1 ignores the version)

        Raises:
            NodeNotFoundError: If the node does not exist
            RemoteCallError: For other ZooKeeper errors
        """
        try:
            self.zk.delete(path, version=version)
        except _REMOTE_ERRORS as e:
            self._handle_error(e, path)
            raise  # For type checker

    def get(self, path: str) -> tuple[bytes, Any]:
        """
        Read a node payload.

        Returns:
            Tuple of (payload bytes, ZnodeStat)

        Raises:
            NodeNotFoundError: If the node does not exist
            RemoteCallError: For other ZooKeeper errors
        """
        try:
            data, stat = self.zk.get(path)
            return data, stat
        except _REMOTE_ERRORS as e:
            self._handle_error(e, path)
            raise  # For type checker

    def _handle_error(self, error: Exception, path: str) -> None:
        """
        Convert kazoo errors to coordination exceptions.

        Args:
            error: Error raised by kazoo
            path: Node path the call was made against

        Raises:
            ConflictError: If the node already exists
            NodeNotFoundError: If the node does not exist
            RemoteCallError: For other errors
        """
        if isinstance(error, NodeExistsError):
            raise ConflictError(f"Node '{path}' already exists") from error
        elif isinstance(error, NoNodeError):
            raise NodeNotFoundError(f"Node '{path}' does not exist") from error
        elif isinstance(error, KazooTimeoutError):
            raise RemoteCallError(f"ZooKeeper call on '{path}' timed out") from error
        else:
            raise RemoteCallError(
                f"ZooKeeper error on '{path}': {type(error).__name__} {error}"
            ) from error
