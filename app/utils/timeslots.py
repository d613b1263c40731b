from datetime import date, datetime, time, timedelta, timezone
from typing import Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.core.errors import InvalidInput


def resolve_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidInput(f"unknown timezone '{name}'", cause=exc) from exc


def slot_window(slot_date: date, start: time, end: time, tz: ZoneInfo) -> Tuple[datetime, datetime]:
    """
    Absolute UTC instants of a time-of-day range on a calendar day in ``tz``.

    The day is anchored in ``tz`` first and only then converted to UTC, so a
    slot at 10:00 Asia/Tashkent lands at 05:00 UTC on the same date.
    An end that is not after the start belongs to the following day.
    """
    start_local = datetime.combine(slot_date, start, tzinfo=tz)
    end_day = slot_date if end > start else slot_date + timedelta(days=1)
    end_local = datetime.combine(end_day, end, tzinfo=tz)
    return start_local.astimezone(timezone.utc), end_local.astimezone(timezone.utc)


def day_bounds_utc(start: date, end: date) -> Tuple[datetime, datetime]:
    """Clamp a date range to [start 00:00:00, end 23:59:59] in UTC."""
    return (
        datetime.combine(start, time(0, 0, 0), tzinfo=timezone.utc),
        datetime.combine(end, time(23, 59, 59), tzinfo=timezone.utc),
    )


def as_utc(value: datetime) -> datetime:
    # Backends without timestamptz hand back naive values that are already UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
