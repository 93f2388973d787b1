"""
Type models for coordination operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from .constants import DEFAULT_WORK_PATH

JSONValue = Union[str, int, float, bool, None, list[Any], dict[str, Any]]
WorkPayload = dict[str, JSONValue]


class MemberState(Enum):
    """Marker held by each key of a watched node set."""

    STALE = "stale"
    LIVE = "live"


class WatcherState(Enum):
    """Lifecycle of a children watcher."""

    UNINITIALIZED = "uninitialized"
    WATCHING = "watching"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class LedgerConfig:
    """Path namespace for work records of one cluster."""

    cluster_name: str
    work_path: str = DEFAULT_WORK_PATH


@dataclass
class ChildrenDelta:
    """Outcome of one reconciliation pass."""

    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


@dataclass
class WorkRecord:
    """A work record read back from ZooKeeper."""

    work_id: str
    path: str
    payload: WorkPayload
    version: int = 0
    created_at: int = 0
