"""Date manipulation utilities"""

from datetime import datetime, timezone


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC, convert aware ones to UTC"""
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def whole_days_between(start: datetime, end: datetime) -> int:
    """Whole days elapsed from start to end (floored, may be negative)"""
    delta = ensure_utc(end) - ensure_utc(start)
    return delta.days


def hours_between(start: datetime, end: datetime) -> float:
    return (ensure_utc(end) - ensure_utc(start)).total_seconds() / 3600


def whole_minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes elapsed from start to end (floored)"""
    seconds = (ensure_utc(end) - ensure_utc(start)).total_seconds()
    return int(seconds // 60)
