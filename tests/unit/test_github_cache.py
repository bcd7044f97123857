"""Unit tests for the queue snapshot cache."""

from __future__ import annotations

import pytest

from command_center.github.cache import QueueCache, queue_cache_key
from command_center.github.models import QueueSnapshot
from tests.helpers.github_search import FakeClock


def _snapshot(fetched_at: str = "2025-01-01T00:00:00.000Z") -> QueueSnapshot:
    return QueueSnapshot(cards=(), fetched_at=fetched_at)


@pytest.fixture
def clock() -> FakeClock:
    """Provide a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> QueueCache:
    """Provide an empty cache with a 60 second TTL."""
    return QueueCache(ttl_s=60.0, clock=clock)


def test_round_trip_within_ttl(cache: QueueCache, clock: FakeClock) -> None:
    """A stored payload is returned unchanged until the TTL elapses."""
    payload = _snapshot()
    cache.put("k", payload)

    assert cache.get("k") is payload
    clock.advance(59.9)
    assert cache.get("k") is payload


def test_expired_entry_is_evicted(cache: QueueCache, clock: FakeClock) -> None:
    """Reading an expired entry returns None and deletes it."""
    cache.put("k", _snapshot())
    clock.advance(60.0)

    assert cache.get("k") is None
    assert "k" not in cache
    assert cache.get("k") is None


def test_expiry_is_lazy(cache: QueueCache, clock: FakeClock) -> None:
    """Expired entries stay stored until they are read."""
    cache.put("k", _snapshot())
    clock.advance(120.0)

    assert len(cache) == 1
    cache.get("k")
    assert len(cache) == 0


def test_put_replaces_and_restamps(cache: QueueCache, clock: FakeClock) -> None:
    """A second put replaces the payload and restarts its TTL."""
    cache.put("k", _snapshot("first"))
    clock.advance(50.0)
    second = _snapshot("second")
    cache.put("k", second)
    clock.advance(50.0)

    assert cache.get("k") is second


def test_keys_do_not_collide(cache: QueueCache, clock: FakeClock) -> None:
    """Entries for different queues are independent."""
    qa_key = queue_cache_key("needs-qa")
    pm_key = queue_cache_key("needs-pm")
    qa = _snapshot("qa")
    cache.put(qa_key, qa)
    clock.advance(30.0)
    cache.put(pm_key, _snapshot("pm"))
    clock.advance(30.0)

    assert cache.get(qa_key) is None
    assert cache.get(pm_key) is not None


def test_missing_key(cache: QueueCache) -> None:
    """Unknown keys return None."""
    assert cache.get("nope") is None


def test_clear(cache: QueueCache) -> None:
    """clear drops every entry."""
    cache.put("a", _snapshot())
    cache.put("b", _snapshot())
    cache.clear()

    assert len(cache) == 0


def test_queue_cache_key_namespace() -> None:
    """Keys are namespaced per queue."""
    assert queue_cache_key("in-flight") == "github:queue:in-flight"


def test_rejects_non_positive_ttl() -> None:
    """A zero TTL is a configuration mistake."""
    with pytest.raises(ValueError, match="positive"):
        QueueCache(ttl_s=0)
