"""Utility functions for time handling.

Stored records carry timestamps as integer epoch milliseconds (the browser
storage format). Internally all datetimes are UTC and timezone-aware.
"""

from __future__ import annotations

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Return current UTC time as an aware datetime."""
    return datetime.now(timezone.utc)


def iso_now(*, timespec: str | None = None) -> str:
    """Return current UTC time as an ISO8601 string (timezone-aware)."""
    now = utc_now()
    if timespec:
        return now.isoformat(timespec=timespec)
    return now.isoformat()


def epoch_millis(dt: datetime | None = None) -> int:
    """Epoch milliseconds for *dt* (naive values are taken as UTC), default now."""
    if dt is None:
        dt = utc_now()
    elif dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def from_epoch_millis(value: int | float) -> datetime:
    """Aware UTC datetime for an epoch-milliseconds value."""
    return datetime.fromtimestamp(float(value) / 1000.0, tz=timezone.utc)


def utc_date_of(millis: int | float) -> date:
    """Calendar day (UTC) an epoch-milliseconds timestamp falls on."""
    return from_epoch_millis(millis).date()
