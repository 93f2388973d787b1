"""
Coordination primitives on top of ZooKeeper.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from .core.safe_map import SafeMap
from .core.watch_operations import ChildrenWatcher, reconcile, watch_children
from .core.work_operations import complete_work, create_work, get_work, list_work
from .models import LedgerConfig, MemberState, WatcherState

__all__ = [
    "ChildrenWatcher",
    "LedgerConfig",
    "MemberState",
    "SafeMap",
    "WatcherState",
    "complete_work",
    "create_work",
    "get_work",
    "list_work",
    "reconcile",
    "watch_children",
]
