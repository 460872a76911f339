"""Timestamp helpers shared by the reward calculators and read models."""

from datetime import datetime, timezone, timedelta
from typing import Optional, Union

Timestamp = Union[datetime, str]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[Timestamp]) -> Optional[datetime]:
    """
    Normalise a timestamp to a timezone-aware UTC datetime.

    Accepts datetimes (naive ones are taken to be UTC, which is how SQLite
    hands them back) and ISO-8601 strings, including a trailing 'Z'.

    Examples:
        >>> as_utc('2026-01-28T10:00:00Z')
        datetime(2026, 1, 28, 10, 0, tzinfo=timezone.utc)
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_day(now: datetime) -> datetime:
    now = as_utc(now)
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: datetime) -> datetime:
    """Sunday 00:00 of the week containing `now`."""
    day = start_of_day(now)
    return day - timedelta(days=(day.weekday() + 1) % 7)


def start_of_month(now: datetime) -> datetime:
    return start_of_day(now).replace(day=1)


def start_of_previous_month(now: datetime) -> datetime:
    return start_of_month(start_of_month(now) - timedelta(days=1))
