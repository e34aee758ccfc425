"""Calendar helpers shared by the analysis services."""

import calendar
import math
from datetime import UTC, date, datetime, timedelta, tzinfo

SECONDS_PER_HOUR = 3600
DECEMBER = 12


def resolve_now(now: datetime | None) -> datetime:
    """Return the given moment or the current UTC time."""
    return now if now is not None else datetime.now(tz=UTC)


def to_local(moment: datetime, tz: tzinfo | None) -> datetime:
    """Convert a moment to a time zone, keeping its own offset when tz is None."""
    if tz is None:
        return moment
    return moment.astimezone(tz)


def local_day(moment: datetime, tz: tzinfo | None) -> date:
    """Return the calendar day of a moment in a time zone."""
    return to_local(moment, tz).date()


def day_of_week(moment: datetime) -> int:
    """Return the weekday with Sunday as 0."""
    return (moment.weekday() + 1) % 7


def start_of_day(moment: datetime) -> datetime:
    """Return midnight of the moment's day."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(moment: datetime) -> datetime:
    """Return midnight of the Sunday that starts the moment's week."""
    return start_of_day(moment) - timedelta(days=day_of_week(moment))


def start_of_month(moment: datetime) -> datetime:
    """Return midnight of the first day of the moment's month."""
    return start_of_day(moment).replace(day=1)


def start_of_next_month(moment: datetime) -> datetime:
    """Return midnight of the first day of the following month."""
    first = start_of_month(moment)
    if first.month == DECEMBER:
        return first.replace(year=first.year + 1, month=1)
    return first.replace(month=first.month + 1)


def days_in_month(moment: datetime) -> int:
    """Return the number of days in the moment's month."""
    return calendar.monthrange(moment.year, moment.month)[1]


def hours_between(start: datetime, end: datetime) -> float:
    """Return the signed number of hours from start to end."""
    return (end - start).total_seconds() / SECONDS_PER_HOUR


def round_half_up(value: float) -> int:
    """Round a value with halves going up."""
    return math.floor(value + 0.5)
