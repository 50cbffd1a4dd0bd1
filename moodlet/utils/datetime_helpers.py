"""
Standardized Date/Time Handling Utilities

Every rule in the engine works on calendar days, never on raw timestamps:
- Streak gaps are whole calendar days between two check-ins
- The daily points cap counts entries on one calendar day
- Weekly reviews are keyed by the calendar day the week starts on

A Clock is injected wherever "now" is needed so rules are testable without
depending on the wall clock.
"""

import logging
from datetime import datetime, date, timedelta, timezone
from typing import Optional, Protocol, Union
from zoneinfo import ZoneInfo

from moodlet import config

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]

# date.weekday() values
MONDAY = 0
SUNDAY = 6

WEEK_START_WEEKDAYS = {
    "sunday": SUNDAY,
    "monday": MONDAY,
}


class Clock(Protocol):
    """Supplies the current instant and calendar day"""

    def now(self) -> datetime:
        ...

    def today(self) -> date:
        ...


class SystemClock:
    """Wall clock in the configured timezone"""

    def __init__(self, tz: Optional[str] = None):
        self.tz = ZoneInfo(tz or config.MOODLET_TIMEZONE)

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        return self.now().date()


class FixedClock:
    """
    Clock frozen at a given instant

    Used by tests and by hosts replaying events. advance() moves it forward.
    """

    def __init__(self, current: datetime):
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
        self.current = current

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()

    def advance(self, days: int = 0, hours: int = 0, minutes: int = 0) -> None:
        self.current = self.current + timedelta(days=days, hours=hours, minutes=minutes)


def to_day(value: DateLike) -> date:
    """Reduce a date or datetime to its calendar day"""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start: DateLike, end: DateLike) -> int:
    """
    Whole calendar days from start to end (negative if end is earlier)

    Time of day is ignored: 23:59 on Monday to 00:01 on Tuesday is 1 day.
    """
    return (to_day(end) - to_day(start)).days


def is_same_day(a: DateLike, b: DateLike) -> bool:
    return to_day(a) == to_day(b)


def start_of_week(value: DateLike, week_start_day: Optional[str] = None) -> date:
    """
    Get the first calendar day of the week containing value

    Args:
        value: Any date or datetime within the week
        week_start_day: 'sunday' or 'monday' (defaults to config.WEEK_START_DAY)

    Returns:
        The date the week starts on
    """
    first_weekday = WEEK_START_WEEKDAYS[week_start_day or config.WEEK_START_DAY]
    day = to_day(value)
    offset = (day.weekday() - first_weekday) % 7
    return day - timedelta(days=offset)


def end_of_week(value: DateLike, week_start_day: Optional[str] = None) -> date:
    """Last calendar day of the week containing value"""
    return start_of_week(value, week_start_day) + timedelta(days=6)
