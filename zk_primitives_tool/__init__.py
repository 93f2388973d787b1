"""ZooKeeper-backed coordination primitives as composable CLI commands."""

__version__ = "0.1.0"
