"""
Time helpers for the SkateTrack dashboard.

Sessions carry wall-clock times as 12-hour strings ("10:30 AM") and durations
as short tokens ("1h", "1h 15m", "45m"). This module converts between those
strings and concrete datetimes so end times and time-outs can be computed.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])\s*$")
_MINUTES_RE = re.compile(r"^(\d+)\s*m?$")


class InvalidTimeFormat(ValueError):
    """Raised when a time-of-day string is not in 12-hour "hh:mm AM" form."""
    pass


class InvalidDurationFormat(ValueError):
    """Raised when a duration token cannot be parsed."""
    pass


@dataclass(frozen=True)
class Duration:
    """Parsed duration token."""

    hours: int = 0
    minutes: int = 0

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes

    def as_timedelta(self) -> timedelta:
        return timedelta(hours=self.hours, minutes=self.minutes)


def now_dt() -> datetime:
    """
    Get the current local wall-clock time.

    Returns:
        Current time as a naive datetime
    """
    return datetime.now()


def parse_time_of_day(text: str, reference_date: Optional[date] = None) -> datetime:
    """
    Parse a 12-hour clock string onto a calendar day.

    Args:
        text: Time string such as "10:30 AM" or "1:05 PM"
        reference_date: Day the time falls on (defaults to today)

    Returns:
        Datetime on ``reference_date`` at the given time

    Raises:
        InvalidTimeFormat: If the string is malformed

    Example:
        >>> parse_time_of_day("12:15 AM", date(2023, 6, 14))
        datetime.datetime(2023, 6, 14, 0, 15)
    """
    if not isinstance(text, str):
        raise InvalidTimeFormat(f"Time must be a string, got {type(text).__name__}")

    match = _TIME_RE.match(text)
    if not match:
        raise InvalidTimeFormat(f"Invalid time format: {text!r}")

    hours = int(match.group(1))
    minutes = int(match.group(2))
    period = match.group(3).upper()

    if not 1 <= hours <= 12 or not 0 <= minutes <= 59:
        raise InvalidTimeFormat(f"Time out of range: {text!r}")

    if period == "PM" and hours < 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0

    day = reference_date or now_dt().date()
    return datetime(day.year, day.month, day.day, hours, minutes)


def format_time_of_day(instant: datetime) -> str:
    """
    Format a datetime as a zero-padded 12-hour clock string.

    Example:
        >>> format_time_of_day(datetime(2023, 6, 14, 14, 15))
        '02:15 PM'
    """
    hour = instant.hour % 12 or 12
    period = "AM" if instant.hour < 12 else "PM"
    return f"{hour:02d}:{instant.minute:02d} {period}"


def parse_duration_token(text: str) -> Duration:
    """
    Parse a duration token into hours and minutes.

    Tokens without an "h" component are read as minutes only.

    Args:
        text: Token such as "1h", "2h", "1h 15m" or "45m"

    Returns:
        Parsed :class:`Duration`

    Raises:
        InvalidDurationFormat: If the token cannot be parsed
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidDurationFormat(f"Invalid duration: {text!r}")

    token = text.strip().lower()
    hours = 0
    rest = token

    if "h" in token:
        hour_part, rest = token.split("h", 1)
        hour_part = hour_part.strip()
        if not hour_part.isdigit():
            raise InvalidDurationFormat(f"Invalid duration: {text!r}")
        hours = int(hour_part)
        rest = rest.strip()
        if not rest:
            return Duration(hours=hours, minutes=0)

    match = _MINUTES_RE.match(rest)
    if not match:
        raise InvalidDurationFormat(f"Invalid duration: {text!r}")
    return Duration(hours=hours, minutes=int(match.group(1)))


def compute_end_time(start_time: str, duration_token: str) -> str:
    """
    Add a duration token to a start time and format the result.

    The result wraps across midnight since only the time of day is kept.

    Example:
        >>> compute_end_time("11:45 AM", "1h 15m")
        '01:00 PM'
    """
    start = parse_time_of_day(start_time)
    duration = parse_duration_token(duration_token)
    return format_time_of_day(start + duration.as_timedelta())


def has_elapsed(time_of_day: str, now: Optional[datetime] = None) -> bool:
    """
    Return True when ``now`` is strictly after ``time_of_day`` on now's day.

    Only the time of day is compared. An end time that wrapped past midnight
    (11:30 PM + 1h -> 12:30 AM) already counts as elapsed before midnight.
    """
    now = now or now_dt()
    return now > parse_time_of_day(time_of_day, now.date())
