"""
Date Mapper - Converts calendar dates to pixel positions on a built grid.

Grid lines sit on whole unit boundaries, so a date is placed by locating its
unit relative to the grid's first line and adding a fractional position
inside that unit:

- year-like units use the grid's end-to-end pixels-per-year plus
  ``day_of_year / 365``. The fixed 365-day divisor ignores leap years;
  positions depend on it, so it is kept as is.
- MONTH uses the day and hour over that month's actual length.
- DAY uses hour / 24, HOUR uses minute / 60.
- MINUTE, SECOND and MILLISECOND divide elapsed milliseconds by the unit.

Positions far outside the grid are clamped to a fixed overflow beyond the
viewport so that bar widths stay numerically tractable.
"""

import logging
import math
from typing import Optional

from timeline_viewer.rendering.calendar_arithmetic import advance, units_between
from timeline_viewer.rendering.grid_builder import Grid
from timeline_viewer.rendering.granularity import Granularity
from timeline_viewer.utils.calendar_date import (
    CalendarDate, MS_PER_DAY, MS_PER_HOUR, days_in_month
)

logger = logging.getLogger(__name__)

DAYS_PER_YEAR_APPROX = 365
DEFAULT_OVERFLOW_PX = 1000.0


def interpolation_fraction(date: CalendarDate, granularity: Granularity) -> float:
    """
    Position of ``date`` inside its unit of ``granularity``, in [0, 1].

    Uses the same per-unit rules as the pixel mapping.
    """
    if granularity.is_year_like:
        size = granularity.unit_years
        years_in = date.year - (date.year // size) * size
        return (years_in + (date.day_of_year() + date.hour / 24) / DAYS_PER_YEAR_APPROX) / size
    if granularity is Granularity.MONTH:
        length = days_in_month(date.year, date.month)
        return (date.day - 1) / length + date.hour / (24 * length)
    if granularity is Granularity.DAY:
        return date.hour / 24
    if granularity is Granularity.HOUR:
        return date.minute / 60
    unit = granularity.unit_ms
    return (date.to_epoch_ms() % unit) / unit


class DateToPixelMapper:
    """
    Maps dates to fractional pixel x positions against a grid, and back.
    """

    def __init__(self, overflow_px: float = DEFAULT_OVERFLOW_PX):
        """
        Args:
            overflow_px: How far beyond either viewport edge positions may extend
        """
        self.overflow_px = overflow_px

    def to_pixel_x(self, grid: Grid, date: CalendarDate) -> float:
        """
        Pixel x of a date on the grid.

        Args:
            grid: Grid built for the current view state
            date: Any instant, on or off screen

        Returns:
            float: Pixel position, clamped to the overflow band around the viewport
        """
        first = grid.first
        if first is None:
            logger.warning("Mapping against an empty grid, returning 0")
            return self._clamp(grid, 0.0)

        granularity = grid.granularity
        width = grid.unit_pixel_width

        if granularity.is_year_like:
            last = grid.last
            year_span = last.date.year - first.date.year
            if year_span:
                pixels_per_year = (last.pixel_x - first.pixel_x) / year_span
            else:
                pixels_per_year = width / granularity.unit_years
            year_offset = date.year - first.date.year
            fraction = (date.day_of_year() + date.hour / 24) / DAYS_PER_YEAR_APPROX
            x = first.pixel_x + (year_offset + fraction) * pixels_per_year
        elif granularity in (Granularity.MONTH, Granularity.DAY, Granularity.HOUR):
            units = units_between(first.date, date, granularity)
            x = first.pixel_x + (units + interpolation_fraction(date, granularity)) * width
        else:
            elapsed_ms = date.to_epoch_ms() - first.date.to_epoch_ms()
            x = first.pixel_x + elapsed_ms / granularity.unit_ms * width

        return self._clamp(grid, x)

    def to_date(self, grid: Grid, pixel_x: float) -> Optional[CalendarDate]:
        """
        Approximate inverse of ``to_pixel_x``.

        Resolution is one millisecond for fixed-length units, one hour inside a
        month and one day inside a year.

        Returns:
            CalendarDate or None: Date under ``pixel_x``, None for an empty grid
        """
        first = grid.first
        if first is None:
            return None

        granularity = grid.granularity
        offset = (pixel_x - first.pixel_x) / grid.unit_pixel_width
        whole = math.floor(offset)
        fraction = offset - whole
        base = advance(first.date, granularity, whole)

        if granularity.is_year_like:
            years = fraction * granularity.unit_years
            year = base.year + math.floor(years)
            day_index = math.floor((years - math.floor(years)) * DAYS_PER_YEAR_APPROX)
            return CalendarDate.from_epoch_ms(CalendarDate(year).to_epoch_ms() + day_index * MS_PER_DAY)

        if granularity is Granularity.MONTH:
            hours = math.floor(fraction * days_in_month(base.year, base.month) * 24)
            return CalendarDate.from_epoch_ms(base.to_epoch_ms() + hours * MS_PER_HOUR)

        return CalendarDate.from_epoch_ms(base.to_epoch_ms() + math.floor(fraction * granularity.unit_ms))

    def _clamp(self, grid: Grid, x: float) -> float:
        lower = -self.overflow_px
        upper = grid.viewport_width + self.overflow_px
        return max(lower, min(x, upper))
