"""
Calendar Arithmetic - Unit stepping and component extraction for the time axis.

Every function here is pure. ``advance`` always returns a date aligned to the
start of a unit of the requested granularity (all finer fields zeroed), which
is what keeps generated grid lines on exact unit boundaries.
"""

from timeline_viewer.rendering.granularity import Granularity
from timeline_viewer.utils.calendar_date import CalendarDate
from timeline_viewer.utils.errors import GranularityError

MONTH_ABBREVIATIONS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
                       'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')


def _check(granularity):
    if not isinstance(granularity, Granularity):
        # Strings and raw ints are rejected rather than coerced
        raise GranularityError(granularity)
    return granularity


def advance(date: CalendarDate, granularity: Granularity, n: int) -> CalendarDate:
    """
    Step ``n`` units of ``granularity`` from the unit containing ``date``.

    Year-like units add ``n * unit_years`` and floor to the unit boundary,
    landing on Jan 1 00:00. MONTH moves to the first of the month before adding
    months. DAY through SECOND clear the finer fields before adding. MILLISECOND
    adds directly. Negative ``n`` walks backwards symmetrically and
    ``advance(date, g, 0)`` aligns a date to the start of its unit.

    Args:
        date: Starting instant
        granularity: Unit to step in
        n: Number of units (may be negative)

    Returns:
        CalendarDate: Aligned result

    Raises:
        GranularityError: If granularity is not a Granularity member
    """
    granularity = _check(granularity)
    n = int(n)

    if granularity.is_year_like:
        size = granularity.unit_years
        year = ((date.year + n * size) // size) * size
        return CalendarDate(year)

    if granularity is Granularity.MONTH:
        year, month_index = divmod(date.year * 12 + (date.month - 1) + n, 12)
        return CalendarDate(year, month_index + 1)

    unit = granularity.unit_ms
    epoch_ms = date.to_epoch_ms()
    aligned = (epoch_ms // unit) * unit
    return CalendarDate.from_epoch_ms(aligned + n * unit)


def align(date: CalendarDate, granularity: Granularity) -> CalendarDate:
    """Start of the unit of ``granularity`` that contains ``date``."""
    return advance(date, granularity, 0)


def value_at(date: CalendarDate, granularity: Granularity) -> int:
    """
    Natural component of ``date`` for a granularity.

    Returns the year for the year-like units, then month number (1-12),
    day of month, hour, minute, second or millisecond.
    """
    granularity = _check(granularity)
    if granularity.is_year_like:
        return date.year
    return {
        Granularity.MONTH: date.month,
        Granularity.DAY: date.day,
        Granularity.HOUR: date.hour,
        Granularity.MINUTE: date.minute,
        Granularity.SECOND: date.second,
        Granularity.MILLISECOND: date.millisecond,
    }[granularity]


def units_between(start: CalendarDate, end: CalendarDate, granularity: Granularity) -> int:
    """
    Whole units from the unit containing ``start`` to the unit containing ``end``.

    Satisfies ``advance(start, g, units_between(start, end, g)) == align(end, g)``.
    """
    granularity = _check(granularity)
    if granularity.is_year_like:
        size = granularity.unit_years
        return end.year // size - start.year // size
    if granularity is Granularity.MONTH:
        return (end.year * 12 + end.month) - (start.year * 12 + start.month)
    unit = granularity.unit_ms
    return end.to_epoch_ms() // unit - start.to_epoch_ms() // unit


def format_year(year: int) -> str:
    if year < 0:
        return f"{-year} BC"
    return str(year)


def format_label(date: CalendarDate, granularity: Granularity) -> str:
    """
    Axis label for a grid line.

    Year zero does not exist on the displayed calendar: for granularities
    finer than DECADE a line in year 0 keeps its position but gets an
    empty label.
    """
    granularity = _check(granularity)
    if granularity > Granularity.DECADE and date.year == 0:
        return ""

    if granularity.is_year_like:
        return format_year(date.year)
    if granularity is Granularity.MONTH:
        return f"{MONTH_ABBREVIATIONS[date.month - 1]} {format_year(date.year)}"
    if granularity is Granularity.DAY:
        return f"{MONTH_ABBREVIATIONS[date.month - 1]} {date.day}"
    if granularity is Granularity.HOUR:
        return f"{date.hour:02d}:00"
    if granularity is Granularity.MINUTE:
        return f"{date.hour:02d}:{date.minute:02d}"
    if granularity is Granularity.SECOND:
        return f"{date.hour:02d}:{date.minute:02d}:{date.second:02d}"
    return f"{date.second:02d}.{date.millisecond:03d}"
