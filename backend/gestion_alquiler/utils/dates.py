"""
Date utilities - Quarter arithmetic and stay duration

All timestamps handled here are integer UTC milliseconds. Calendar decisions
(which day or month an instant belongs to) are taken in the reference
timezone, Europe/Madrid unless told otherwise.
"""

from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from gestion_alquiler.core.exceptions import ValidationException

TZ = ZoneInfo("Europe/Madrid")
MS_PER_SECOND = 1000


@dataclass(frozen=True)
class QuarterWindow:
    """Inclusive [start, end] range of a quarter, in UTC milliseconds"""
    start: int
    end: int

    def contains(self, timestamp_ms: int) -> bool:
        return self.start <= timestamp_ms <= self.end


def now_ms() -> int:
    """Current instant in UTC milliseconds"""
    return int(datetime.now(timezone.utc).timestamp() * MS_PER_SECOND)


def to_datetime(timestamp_ms: int, tz: ZoneInfo = TZ) -> datetime:
    """Convert a UTC millisecond timestamp into an aware datetime in ``tz``"""
    return datetime.fromtimestamp(timestamp_ms / MS_PER_SECOND, tz)


def to_timestamp_ms(value: datetime) -> int:
    return int(round(value.timestamp() * MS_PER_SECOND))


def start_of_day(timestamp_ms: int, tz: ZoneInfo = TZ) -> datetime:
    """Midnight of the calendar day ``timestamp_ms`` falls in"""
    return datetime.combine(to_datetime(timestamp_ms, tz).date(), time.min, tzinfo=tz)


def end_of_day(timestamp_ms: int, tz: ZoneInfo = TZ) -> datetime:
    """Last millisecond (23:59:59.999) of the calendar day ``timestamp_ms`` falls in"""
    return datetime.combine(
        to_datetime(timestamp_ms, tz).date(), time(23, 59, 59, 999000), tzinfo=tz
    )


def start_of_day_ms(timestamp_ms: int, tz: ZoneInfo = TZ) -> int:
    return to_timestamp_ms(start_of_day(timestamp_ms, tz))


def end_of_day_ms(timestamp_ms: int, tz: ZoneInfo = TZ) -> int:
    return to_timestamp_ms(end_of_day(timestamp_ms, tz))


def nights_between(check_in_ms: int, check_out_ms: int, tz: ZoneInfo = TZ) -> int:
    """
    Number of nights of a stay

    Whole days between the start of the check-in day and the end of the
    check-out day. Differences are taken on wall-clock times so a DST switch
    inside the stay does not shift the count. Same-day stays give 0.

    Args:
        check_in_ms: Check-in instant (UTC ms)
        check_out_ms: Check-out instant (UTC ms)
        tz: Reference calendar

    Returns:
        Whole nights, truncated down. Not sanitized: callers must make sure
        check-out is after check-in.
    """
    start = start_of_day(check_in_ms, tz).replace(tzinfo=None)
    end = end_of_day(check_out_ms, tz).replace(tzinfo=None)
    return (end - start).days


def quarter_of(timestamp_ms: Optional[int] = None, tz: ZoneInfo = TZ) -> int:
    """
    Quarter (1-4) of an instant in the reference calendar

    Args:
        timestamp_ms: Instant in UTC ms, defaults to now
        tz: Reference calendar
    """
    if timestamp_ms is None:
        timestamp_ms = now_ms()
    month = to_datetime(timestamp_ms, tz).month
    return (month - 1) // 3 + 1


def current_year(tz: ZoneInfo = TZ) -> int:
    return datetime.now(tz).year


def quarter_bounds(year: Optional[int], quarter: int) -> QuarterWindow:
    """
    UTC boundaries of a quarter

    ``start`` is 00:00:00 UTC of the first day of the quarter and ``end`` the
    last whole second (23:59:59 UTC) of its last day, both in milliseconds.

    Args:
        year: Calendar year, defaults to the current one
        quarter: Quarter number (1-4)

    Returns:
        QuarterWindow with inclusive start and end

    Raises:
        ValidationException: If quarter is not in 1-4
    """
    if isinstance(quarter, bool) or not isinstance(quarter, int) or not 1 <= quarter <= 4:
        raise ValidationException(
            f"Quarter must be an integer between 1 and 4, got {quarter!r}",
            error_code="INVALID_QUARTER"
        )
    if year is None:
        year = current_year()

    start_month = (quarter - 1) * 3 + 1
    start = datetime(year, start_month, 1, tzinfo=timezone.utc)
    if quarter == 4:
        next_start = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        next_start = datetime(year, start_month + 3, 1, tzinfo=timezone.utc)
    end = next_start - timedelta(seconds=1)

    return QuarterWindow(
        start=int(start.timestamp()) * MS_PER_SECOND,
        end=int(end.timestamp()) * MS_PER_SECOND
    )


def day_range(start_ms: int, end_ms: int, label: str = "date", tz: ZoneInfo = TZ) -> Tuple[int, int]:
    """
    Widen a list filter range to whole days

    Raises:
        ValidationException: If the start day is after the end day or after today
    """
    start = start_of_day_ms(start_ms, tz)
    end = end_of_day_ms(end_ms, tz)
    if start > end:
        raise ValidationException(f"Start {label} must be before than end {label}")
    if start > end_of_day_ms(now_ms(), tz):
        raise ValidationException(f"Start {label} must be before or equal than today")
    return start, end
