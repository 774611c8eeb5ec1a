"""
Time helpers shared by both rankers.
"""
from datetime import datetime, timedelta, timezone
import calendar


SECONDS_PER_HOUR = 3600.0


def _as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC so naive and aware values compare."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def hours_between(start: datetime, end: datetime) -> float:
    """Hours elapsed from start to end (negative if end is earlier)."""
    if (start.tzinfo is None) == (end.tzinfo is None):
        delta = end - start
    else:
        delta = _as_utc(end) - _as_utc(start)
    return delta.total_seconds() / SECONDS_PER_HOUR


def timestamp(moment: datetime) -> float:
    """POSIX timestamp, with naive datetimes read as UTC."""
    return _as_utc(moment).timestamp()


def subtract_months(moment: datetime, months: int) -> datetime:
    """
    Move a datetime back by calendar months, keeping the day of month.

    A day that does not exist in the target month rolls forward into the
    next month: 31 May minus 3 months is 3 March (non-leap year), not the
    last day of February.

    Results before year 1 clamp to `datetime.min` in the same timezone.
    """
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1

    if year < 1:
        return datetime.min.replace(tzinfo=moment.tzinfo)

    days_in_month = calendar.monthrange(year, month)[1]
    if moment.day <= days_in_month:
        return moment.replace(year=year, month=month)

    first = moment.replace(year=year, month=month, day=1)
    return first + timedelta(days=moment.day - 1)


def parse_hour(wall_clock: str) -> int:
    """Hour component of an "HH:MM" string."""
    return int(wall_clock.split(":")[0])
