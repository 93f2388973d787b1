"""
Work record operations.

A work record is a node at /<cluster>/<work path>/<work id> holding a JSON
payload. Producers create it, consumers delete it when done.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from typing import Any

from ..constants import ANY_VERSION
from ..exceptions import (
    ConflictError,
    CoordinationError,
    NodeNotFoundError,
    WorkExistsError,
)
from ..logging_config import get_logger
from ..models import LedgerConfig, WorkPayload, WorkRecord
from ..utils import work_path, work_root_path
from .client import ZooKeeperClient
from .codec import deserialize_payload, serialize_payload

logger = get_logger(__name__)


def create_work(
    client: ZooKeeperClient,
    config: LedgerConfig,
    work_id: str,
    payload: WorkPayload,
    makepath: bool = False,
) -> dict[str, Any]:
    """
    Create a work record.

    The node is created with a world read/write ACL and is never
    overwritten.

    Args:
        client: ZooKeeper client
        config: Cluster name and work path
        work_id: Work identifier
        payload: Value bag stored on the node
        makepath: Create missing parent nodes

    Returns:
        Dictionary with work id, path, and created status

    Raises:
        SerializationError: If payload cannot be encoded
        WorkExistsError: If a record already exists at the path
        RemoteCallError: For other ZooKeeper errors
    """
    path = work_path(config.cluster_name, config.work_path, work_id)

    try:
        data = serialize_payload(payload)
        client.create(path, data, makepath=makepath)
    except ConflictError as e:
        logger.error(f"Failed to create work {work_id} ({path}): {e}")
        raise WorkExistsError(
            f"Work '{work_id}' already exists at '{path}'. "
            f"Use 'zk-primitives-tool coordination work-complete {work_id}' to remove it first."
        ) from e
    except CoordinationError as e:
        logger.error(f"Failed to create work {work_id} ({path}): {e}")
        raise

    logger.info(f"Created work {path}")
    return {"work": work_id, "path": path, "created": True}


def complete_work(
    client: ZooKeeperClient,
    config: LedgerConfig,
    work_id: str,
) -> dict[str, Any]:
    """
    Remove a work record, ignoring its version.

    Never raises for ZooKeeper failures: they are logged and reported in the
    returned dictionary.

    Args:
        client: ZooKeeper client
        config: Cluster name and work path
        work_id: Work identifier

    Returns:
        Dictionary with work id, path, deleted status, and error message (or None)

    Raises:
        ValueError: If a path segment is empty, contains '/', or is '.' or '..'
    """
    path = work_path(config.cluster_name, config.work_path, work_id)

    try:
        client.delete(path, version=ANY_VERSION)
    except CoordinationError as e:
        logger.error(f"Failed to delete work {work_id} ({path}): {e}")
        return {"work": work_id, "path": path, "deleted": False, "error": str(e)}

    logger.info(f"Deleted work {work_id} ({path})")
    return {"work": work_id, "path": path, "deleted": True, "error": None}


def get_work(
    client: ZooKeeperClient,
    config: LedgerConfig,
    work_id: str,
) -> WorkRecord:
    """
    Read and decode a work record.

    Args:
        client: ZooKeeper client
        config: Cluster name and work path
        work_id: Work identifier

    Returns:
        The decoded work record

    Raises:
        NodeNotFoundError: If no record exists at the path
        SerializationError: If the payload cannot be decoded
        RemoteCallError: For other ZooKeeper errors
    """
    path = work_path(config.cluster_name, config.work_path, work_id)

    try:
        data, stat = client.get(path)
        payload = deserialize_payload(data)
    except CoordinationError as e:
        logger.error(f"error on get for work {work_id} ({path}): {e}")
        raise

    return WorkRecord(
        work_id=work_id,
        path=path,
        payload=payload,
        version=getattr(stat, "version", 0),
        created_at=getattr(stat, "ctime", 0) // 1000,
    )


def list_work(client: ZooKeeperClient, config: LedgerConfig) -> dict[str, Any]:
    """
    List outstanding work ids of a cluster.

    A missing work root means no work has been created yet and yields an
    empty list.

    Args:
        client: ZooKeeper client
        config: Cluster name and work path

    Returns:
        Dictionary with cluster, path, sorted work ids, and count

    Raises:
        RemoteCallError: For ZooKeeper errors other than a missing work root
    """
    path = work_root_path(config.cluster_name, config.work_path)

    try:
        work_ids = sorted(client.get_children(path))
    except NodeNotFoundError:
        logger.debug(f"Work root {path} does not exist yet")
        work_ids = []

    return {
        "cluster": config.cluster_name,
        "path": path,
        "work": work_ids,
        "count": len(work_ids),
    }
