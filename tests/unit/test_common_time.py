"""Unit tests for time helpers."""

from __future__ import annotations

import datetime as dt

import pytest

from command_center.common.time import from_epoch_seconds, isoformat_z, utcnow


def test_isoformat_z_uses_millisecond_precision() -> None:
    """Timestamps render with milliseconds and a Z suffix."""
    value = dt.datetime(2025, 1, 2, 3, 4, 5, 678901, tzinfo=dt.UTC)
    assert isoformat_z(value) == "2025-01-02T03:04:05.678Z"


def test_isoformat_z_converts_to_utc() -> None:
    """Offsets are converted to UTC first."""
    tz = dt.timezone(dt.timedelta(hours=2))
    value = dt.datetime(2025, 1, 2, 3, 0, tzinfo=tz)
    assert isoformat_z(value) == "2025-01-02T01:00:00.000Z"


def test_isoformat_z_rejects_naive() -> None:
    """Naive datetimes are rejected."""
    with pytest.raises(ValueError, match="timezone-aware"):
        isoformat_z(dt.datetime(2025, 1, 1))  # noqa: DTZ001 - deliberately naive


def test_from_epoch_seconds() -> None:
    """Epoch seconds convert to aware UTC datetimes."""
    assert from_epoch_seconds(1704067200) == dt.datetime(2024, 1, 1, tzinfo=dt.UTC)


def test_utcnow_is_aware() -> None:
    """utcnow returns an aware UTC datetime."""
    assert utcnow().tzinfo is dt.UTC
