"""Common time utilities."""

from __future__ import annotations

import datetime as dt


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp."""
    return dt.datetime.now(dt.UTC)


def isoformat_z(value: dt.datetime) -> str:
    """Render an aware datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.

    This is the timestamp shape the dashboard UI already parses, so both
    ``fetchedAt`` values and rate-limit reset hints use it.
    """
    if value.tzinfo is None:
        msg = "value must be timezone-aware"
        raise ValueError(msg)
    utc = value.astimezone(dt.UTC)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def from_epoch_seconds(seconds: int) -> dt.datetime:
    """Return the aware UTC datetime for a Unix timestamp in seconds."""
    return dt.datetime.fromtimestamp(seconds, dt.UTC)
