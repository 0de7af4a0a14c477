# src/salarywatch/db/time.py
"""Time utilities for database models."""

from datetime import UTC, date, datetime, time, timedelta


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    SQLite hands timestamps back without tzinfo even when the column is
    declared with ``timezone=True``; those are treated as UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def start_of_day(day: date) -> datetime:
    """Return midnight UTC at the start of ``day``."""
    return datetime.combine(day, time.min, tzinfo=UTC)


def end_of_day(day: date) -> datetime:
    """Return the last representable instant of ``day`` in UTC."""
    return start_of_day(day) + timedelta(days=1) - timedelta(microseconds=1)
