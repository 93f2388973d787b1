"""
Thread-safe keyed container.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Generic, TypeVar

from .rwlock import ReadWriteLock

V = TypeVar("V")


class SafeMap(Generic[V]):
    """
    A dict guarded by a reader/writer lock.

    Point operations take the lock for a single call. Multi-key batches
    (read-then-conditionally-write across keys) go through ``extended()``,
    which hands out the backing dict while holding the exclusive lock.

    The map doubles as a set: use ``contains()`` for membership, values are
    then just markers.
    """

    def __init__(self, initial: Mapping[str, V] | None = None) -> None:
        self._map: dict[str, V] = dict(initial) if initial else {}
        self._lock = ReadWriteLock()

    def get(self, key: str, default: V | None = None) -> V | None:
        """Value stored at key, or default if absent."""
        with self._lock.read_locked():
            return self._map.get(key, default)

    def contains(self, key: str) -> bool:
        with self._lock.read_locked():
            return key in self._map

    def put(self, key: str, value: V) -> V | None:
        """
        Store value at key.

        Returns:
            The previously stored value, or None if key was absent
        """
        with self._lock.write_locked():
            old = self._map.get(key)
            self._map[key] = value
            return old

    def delete(self, key: str) -> V | None:
        """
        Remove key. Deleting an absent key is a no-op.

        Returns:
            The removed value, or None if key was absent
        """
        with self._lock.write_locked():
            return self._map.pop(key, None)

    def keys(self) -> list[str]:
        """Snapshot of the keys, in no particular order."""
        with self._lock.read_locked():
            return list(self._map)

    def copy(self) -> dict[str, V]:
        """Independent shallow copy of the contents."""
        with self._lock.read_locked():
            return dict(self._map)

    def clear(self) -> None:
        with self._lock.write_locked():
            self._map = {}

    def dump(self) -> str:
        """Human-readable listing, one entry per line."""
        with self._lock.read_locked():
            return "".join(f"(key: {k}, value: {v})\n" for k, v in self._map.items())

    def acquire_extended(self) -> dict[str, V]:
        """
        Take the exclusive lock and return the backing dict.

        The caller must call ``release_extended()`` exactly once and must not
        keep the returned dict afterwards. Prefer ``extended()``.
        """
        self._lock.acquire_write()
        return self._map

    def release_extended(self) -> None:
        self._lock.release_write()

    @contextmanager
    def extended(self) -> Iterator[dict[str, V]]:
        """Exclusive access to the backing dict for a batch of edits."""
        raw = self.acquire_extended()
        try:
            yield raw
        finally:
            self.release_extended()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._map)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"SafeMap({self.copy()!r})"
