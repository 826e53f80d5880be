"""Time helpers — timezone normalization for stored timestamps.

SQLite drops tzinfo on round-trip while PostgreSQL keeps it; comparisons
must always happen between aware UTC datetimes.
"""

from datetime import datetime, timezone


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_expired(expires_at: datetime | None, now: datetime) -> bool:
    if expires_at is None:
        return False
    return as_utc(expires_at) <= as_utc(now)
