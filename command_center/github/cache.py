"""Short-lived in-memory cache of queue snapshots.

One ``QueueCache`` is shared by every request the process serves. Entries
expire a fixed time after they are stored and are evicted lazily: the first
``get`` after expiry deletes the entry. Nothing survives a restart.

Usage
-----
>>> cache = QueueCache(ttl_s=60.0)
>>> cache.get(queue_cache_key("needs-qa")) is None
True

"""

from __future__ import annotations

import dataclasses as dc
import time
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import QueueSnapshot

DEFAULT_CACHE_TTL_S = 60.0
_KEY_NAMESPACE = "github:queue:"


def queue_cache_key(queue: str) -> str:
    """Return the cache key for *queue*, namespaced per queue."""
    return f"{_KEY_NAMESPACE}{queue}"


@dc.dataclass(frozen=True, slots=True)
class CacheEntry:
    """A stored snapshot and the clock reading taken when it was stored."""

    payload: QueueSnapshot
    stored_at: float


class QueueCache:
    """TTL cache mapping queue keys to ``QueueSnapshot`` payloads.

    Parameters
    ----------
    ttl_s
        Seconds an entry stays valid after ``put``.
    clock
        Monotonic clock returning seconds; injectable for tests.

    """

    def __init__(
        self,
        *,
        ttl_s: float = DEFAULT_CACHE_TTL_S,
        clock: cabc.Callable[[], float] = time.monotonic,
    ) -> None:
        """Create an empty cache."""
        if ttl_s <= 0:
            msg = f"ttl_s must be positive, got: {ttl_s}"
            raise ValueError(msg)
        self._ttl_s = ttl_s
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl_s(self) -> float:
        """Return the entry lifetime in seconds."""
        return self._ttl_s

    def get(self, key: str) -> QueueSnapshot | None:
        """Return the live payload for *key*, evicting it if expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at < self._ttl_s:
            return entry.payload
        self._entries.pop(key, None)
        return None

    def put(self, key: str, payload: QueueSnapshot) -> None:
        """Store *payload* under *key*, replacing any existing entry."""
        self._entries[key] = CacheEntry(payload=payload, stored_at=self._clock())

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of stored entries, expired or not."""
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        """Return True when an entry, expired or not, is stored for *key*."""
        return key in self._entries


__all__ = ["DEFAULT_CACHE_TTL_S", "CacheEntry", "QueueCache", "queue_cache_key"]
