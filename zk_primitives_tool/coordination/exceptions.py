"""
Custom exceptions for coordination operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""


class CoordinationError(Exception):
    """Base exception for coordination operations."""

    pass


class RemoteCallError(CoordinationError):
    """A list/create/delete/get call against ZooKeeper failed."""

    pass


class NodeNotFoundError(RemoteCallError):
    """Node does not exist at the requested path."""

    pass


class ConflictError(CoordinationError):
    """Node already exists (create never overwrites)."""

    pass


class WorkExistsError(ConflictError):
    """A work record already exists at the work path."""

    pass


class SerializationError(CoordinationError):
    """Payload could not be encoded or decoded."""

    pass


class WatcherError(CoordinationError):
    """Watcher was used outside its lifecycle (e.g. started twice)."""

    pass
