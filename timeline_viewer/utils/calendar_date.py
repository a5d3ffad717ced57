"""
Calendar Date Utility for the Timeline Viewer
=============================================

``datetime.datetime`` stops at year 1, but a timeline has to reach back into
the BC millennia. This module provides ``CalendarDate``, an immutable
proleptic-Gregorian instant, together with the date-string encoding used by
timeline documents:

    [-]YYYY-MM-DD[-HH-MM-SS-MS]

A leading ``-N`` year means N BC, so ``-0001`` is 1 BC. Year 0 is kept so the
day arithmetic stays continuous; at year scale and finer the axis treats it as
a display gap and leaves its label blank. Either three (date only) or seven
(date and time) dash-separated numeric fields are accepted.

All instants are zone-less; the viewer treats them as UTC.
"""

import datetime
import logging
import re
from dataclasses import dataclass, replace
from typing import Union

from timeline_viewer.utils.errors import DateFormatError

# Configure logger
logger = logging.getLogger(__name__)

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

_DATE_PATTERN = re.compile(
    r'^(-?)(\d+)-(\d{1,2})-(\d{1,2})(?:-(\d{1,2})-(\d{1,2})-(\d{1,2})-(\d{1,3}))?$',
    re.ASCII,
)


def is_leap_year(year: int) -> bool:
    """Proleptic Gregorian leap rule, valid for astronomical (zero and negative) years."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """
    Number of days in a month.

    Args:
        year: Astronomical year
        month: Month number (1-12)

    Returns:
        int: 28 to 31
    """
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def days_from_civil(year: int, month: int, day: int) -> int:
    """Days since 1970-01-01 for a proleptic Gregorian date (negative before the epoch)."""
    year -= month <= 2
    era = year // 400
    year_of_era = year - era * 400
    shifted_month = (month + 9) % 12
    day_of_year = (153 * shifted_month + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * 146097 + day_of_era - 719468


def civil_from_days(days: int):
    """Inverse of ``days_from_civil``; returns a (year, month, day) tuple."""
    days += 719468
    era = days // 146097
    day_of_era = days - era * 146097
    year_of_era = (day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096) // 365
    year = year_of_era + era * 400
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    shifted_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
    return year + (month <= 2), month, day


@dataclass(frozen=True, order=True)
class CalendarDate:
    """
    A calendar instant with millisecond resolution.

    Field order makes the generated comparisons chronological.
    """

    year: int
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")
        if not 1 <= self.day <= days_in_month(self.year, self.month):
            raise ValueError(f"day {self.day} is out of range for {self.year}-{self.month:02d}")
        if not 0 <= self.hour < 24:
            raise ValueError(f"hour must be in 0..23, got {self.hour}")
        if not 0 <= self.minute < 60:
            raise ValueError(f"minute must be in 0..59, got {self.minute}")
        if not 0 <= self.second < 60:
            raise ValueError(f"second must be in 0..59, got {self.second}")
        if not 0 <= self.millisecond < 1000:
            raise ValueError(f"millisecond must be in 0..999, got {self.millisecond}")

    # ------------------------------------------------------------------
    # Epoch conversions
    # ------------------------------------------------------------------

    def to_epoch_ms(self) -> int:
        """Milliseconds since 1970-01-01T00:00:00.000 (negative before it)."""
        days = days_from_civil(self.year, self.month, self.day)
        return (days * MS_PER_DAY
                + self.hour * MS_PER_HOUR
                + self.minute * MS_PER_MINUTE
                + self.second * MS_PER_SECOND
                + self.millisecond)

    @classmethod
    def from_epoch_ms(cls, epoch_ms: int) -> 'CalendarDate':
        days, remainder = divmod(int(epoch_ms), MS_PER_DAY)
        year, month, day = civil_from_days(days)
        hour, remainder = divmod(remainder, MS_PER_HOUR)
        minute, remainder = divmod(remainder, MS_PER_MINUTE)
        second, millisecond = divmod(remainder, MS_PER_SECOND)
        return cls(year, month, day, hour, minute, second, millisecond)

    def day_of_year(self) -> int:
        """Zero-based day index within the year (Jan 1 is 0)."""
        return days_from_civil(self.year, self.month, self.day) - days_from_civil(self.year, 1, 1)

    def replace(self, **changes) -> 'CalendarDate':
        return replace(self, **changes)

    # ------------------------------------------------------------------
    # datetime interop
    # ------------------------------------------------------------------

    @classmethod
    def from_datetime(cls, value: datetime.datetime) -> 'CalendarDate':
        """Convert a datetime (or date); timezone-aware values are converted to UTC first."""
        if isinstance(value, datetime.datetime):
            if value.tzinfo is not None:
                value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
            return cls(value.year, value.month, value.day, value.hour, value.minute,
                       value.second, value.microsecond // 1000)
        return cls(value.year, value.month, value.day)

    # ------------------------------------------------------------------
    # String encoding
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> 'CalendarDate':
        """
        Parse the ``[-]YYYY-MM-DD[-HH-MM-SS-MS]`` encoding.

        Args:
            text: Date string, e.g. ``"2000-01-01"``, ``"-0500-03-15"`` or
                ``"1969-07-20-20-17-40-000"``

        Returns:
            CalendarDate: Parsed instant

        Raises:
            DateFormatError: If the string does not match the encoding or a
                field is out of range

        Examples:
            >>> CalendarDate.parse("-0044-03-15")
            CalendarDate(year=-44, month=3, day=15, hour=0, minute=0, second=0, millisecond=0)
        """
        if not isinstance(text, str):
            raise DateFormatError(text, "expected a string")

        match = _DATE_PATTERN.match(text.strip())
        if match is None:
            raise DateFormatError(text, "expected 3 or 7 dash-separated numeric fields")

        sign, year, month, day, hour, minute, second, millisecond = match.groups()
        year = -int(year) if sign else int(year)
        fields = [int(month), int(day)]
        if hour is not None:
            fields.extend(int(part) for part in (hour, minute, second, millisecond))

        try:
            return cls(year, *fields)
        except ValueError as e:
            raise DateFormatError(text, str(e)) from e

    def format(self) -> str:
        """Encode as ``[-]YYYY-MM-DD`` with ``-HH-MM-SS-MS`` appended when a time is set."""
        sign = '-' if self.year < 0 else ''
        text = f"{sign}{abs(self.year):04d}-{self.month:02d}-{self.day:02d}"
        if self.hour or self.minute or self.second or self.millisecond:
            text += f"-{self.hour:02d}-{self.minute:02d}-{self.second:02d}-{self.millisecond:03d}"
        return text

    def __str__(self):
        return self.format()

    @classmethod
    def coerce(cls, value: Union['CalendarDate', datetime.date, str]) -> 'CalendarDate':
        """
        Accept a CalendarDate, a datetime/date, or an encoded date string.

        Raises:
            DateFormatError: For strings that fail to parse or unsupported types
        """
        if isinstance(value, CalendarDate):
            return value
        if isinstance(value, (datetime.datetime, datetime.date)):
            return cls.from_datetime(value)
        if isinstance(value, str):
            return cls.parse(value)
        logger.debug(f"Cannot coerce {type(value).__name__} to CalendarDate")
        raise DateFormatError(value, f"unsupported type {type(value).__name__}")
