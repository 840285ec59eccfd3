"""Expiring cache for immutable reference data."""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol, TypeVar

T = TypeVar("T")


class ReferenceCache(Protocol):
    """Cache for catalog lookups that never change after load."""

    def get_or_load(self, key: str, loader: Callable[[], T]) -> T:
        """Return the cached value for key, loading and storing it on a miss."""

    def clear(self) -> None:
        """Drop every cached entry."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


@dataclass
class InMemoryReferenceCache(ReferenceCache):
    """Process-local cache shared by concurrent readers."""

    ttl_seconds: int = 86400
    _entries: dict[str, _CacheEntry] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get_or_load(self, key: str, loader: Callable[[], T]) -> T:
        """Return a fresh cached value or call loader and store its result.

        Loader failures propagate and nothing is stored for the key.
        """
        now = datetime.now(tz=UTC)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                if now < entry.expires_at:
                    return entry.value  # type: ignore[return-value]
                self._entries.pop(key, None)
        value = loader()
        with self._lock:
            self._entries[key] = _CacheEntry(
                value=value, expires_at=now + timedelta(seconds=self.ttl_seconds)
            )
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


@dataclass
class NoCache(ReferenceCache):
    """Cache that always calls through to the loader."""

    def get_or_load(self, key: str, loader: Callable[[], T]) -> T:
        return loader()

    def clear(self) -> None:
        return None
