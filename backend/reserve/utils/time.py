from datetime import date, datetime, time, timedelta, timezone
from typing import Union
from zoneinfo import ZoneInfo

from ..config import WEEKDAYS

_TIME_FORMATS = ("%I:%M %p", "%I:%M%p", "%H:%M", "%H:%M:%S")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def venue_now(tz: ZoneInfo) -> datetime:
    """Current wall-clock time at the venue, as a naive datetime."""
    return datetime.now(tz).replace(tzinfo=None)


def next_occurrence(today: date, weekday: str) -> date:
    """Return the first date on or after `today` that falls on `weekday`."""
    name = weekday.strip().lower()
    if name not in WEEKDAYS:
        raise ValueError(f"Invalid day: {weekday}")
    offset = (WEEKDAYS.index(name) - today.weekday()) % 7
    return today + timedelta(days=offset)


def parse_day(value: Union[date, str], *, today: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid day: {value!r}")
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        return next_occurrence(today, text)


def parse_time_of_day(value: Union[time, str]) -> time:
    if isinstance(value, datetime):
        value = value.time()
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    if not isinstance(value, str):
        raise ValueError(f"Invalid time: {value!r}")
    text = " ".join(value.strip().upper().split())
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time().replace(second=0)
        except ValueError:
            continue
    raise ValueError(f"Invalid time: {value}")
