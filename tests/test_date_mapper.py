"""
Tests for date to pixel mapping.
"""

import pytest
from hypothesis import given, strategies as st

from timeline_viewer.rendering.date_mapper import DateToPixelMapper, interpolation_fraction
from timeline_viewer.rendering.grid_builder import Grid, GridBuilder
from timeline_viewer.rendering.granularity import Granularity
from timeline_viewer.utils.calendar_date import CalendarDate

from conftest import make_state
from test_calendar_date import calendar_dates


def build(granularity, width=100.0, focus=CalendarDate(2000), focus_x=500.0, viewport=1000):
    return GridBuilder().build(viewport, make_state(granularity, width, focus, focus_x))


@pytest.fixture
def mapper():
    return DateToPixelMapper()


class TestYearLikeMapping:

    def test_mid_year_positions(self, mapper, year_grid):
        assert mapper.to_pixel_x(year_grid, CalendarDate(1999, 6, 1)) == pytest.approx(441.37, abs=0.01)
        assert mapper.to_pixel_x(year_grid, CalendarDate(2000, 6, 1)) == pytest.approx(541.64, abs=0.01)

    def test_grid_line_dates_map_to_lines(self, mapper, year_grid):
        for line in year_grid:
            assert mapper.to_pixel_x(year_grid, line.date) == pytest.approx(line.pixel_x)

    def test_fixed_year_divisor(self, mapper, year_grid):
        # Dec 31 of a leap year lands on the next year's line
        assert mapper.to_pixel_x(year_grid, CalendarDate(2000, 12, 31)) == pytest.approx(600)

    def test_century(self, mapper):
        grid = build(Granularity.CENTURY, focus=CalendarDate(2000))
        assert mapper.to_pixel_x(grid, CalendarDate(2050)) == pytest.approx(550)
        assert mapper.to_pixel_x(grid, CalendarDate(1900)) == pytest.approx(400)

    def test_bc_dates(self, mapper):
        grid = build(Granularity.CENTURY, focus=CalendarDate(0))
        assert mapper.to_pixel_x(grid, CalendarDate(-100)) == pytest.approx(400)
        assert mapper.to_pixel_x(grid, CalendarDate(-50)) == pytest.approx(450)


class TestFinerMapping:

    def test_month_uses_month_length(self, mapper):
        grid = build(Granularity.MONTH, focus=CalendarDate(2000, 1))
        assert mapper.to_pixel_x(grid, CalendarDate(2000, 1, 16)) == pytest.approx(500 + 15 / 31 * 100)
        assert mapper.to_pixel_x(grid, CalendarDate(2000, 2, 15, 12)) == pytest.approx(600 + 14.5 / 29 * 100)

    def test_day_uses_hours(self, mapper):
        grid = build(Granularity.DAY, focus=CalendarDate(2000))
        assert mapper.to_pixel_x(grid, CalendarDate(2000, 1, 1, 12)) == pytest.approx(550)
        assert mapper.to_pixel_x(grid, CalendarDate(2000, 1, 2, 6)) == pytest.approx(625)

    def test_hour_uses_minutes(self, mapper):
        grid = build(Granularity.HOUR, focus=CalendarDate(2000))
        assert mapper.to_pixel_x(grid, CalendarDate(2000, 1, 1, 1, 30)) == pytest.approx(650)

    def test_minute_uses_elapsed_time(self, mapper):
        grid = build(Granularity.MINUTE, width=60, focus=CalendarDate(2000))
        assert mapper.to_pixel_x(grid, CalendarDate(2000, 1, 1, 0, 1, 30)) == pytest.approx(590)

    def test_millisecond(self, mapper):
        grid = build(Granularity.MILLISECOND, width=10, focus=CalendarDate(2000))
        assert mapper.to_pixel_x(grid, CalendarDate(1999, 12, 31, 23, 59, 59, 990)) == pytest.approx(400)

    @given(
        st.sampled_from([Granularity.MONTH, Granularity.DAY, Granularity.HOUR,
                         Granularity.MINUTE, Granularity.SECOND, Granularity.MILLISECOND]),
        calendar_dates(min_year=1990, max_year=2010),
        calendar_dates(min_year=1990, max_year=2010),
    )
    def test_monotonic_below_year(self, granularity, a, b):
        mapper = DateToPixelMapper()
        grid = build(granularity)
        if b < a:
            a, b = b, a
        assert mapper.to_pixel_x(grid, a) <= mapper.to_pixel_x(grid, b)


class TestClamping:

    def test_far_past_clamped(self, mapper, year_grid):
        assert mapper.to_pixel_x(year_grid, CalendarDate(1000)) == -1000

    def test_far_future_clamped(self, mapper, year_grid):
        assert mapper.to_pixel_x(year_grid, CalendarDate(3000)) == 2000

    def test_custom_overflow(self, year_grid):
        assert DateToPixelMapper(overflow_px=50).to_pixel_x(year_grid, CalendarDate(3000)) == 1050

    def test_empty_grid(self, mapper):
        assert mapper.to_pixel_x(Grid(), CalendarDate(2000)) == 0
        assert mapper.to_date(Grid(), 10) is None


class TestInverse:

    def test_year(self, mapper, year_grid):
        assert mapper.to_date(year_grid, 500) == CalendarDate(2000)
        assert mapper.to_date(year_grid, 650).year == 2001

    def test_day(self, mapper):
        grid = build(Granularity.DAY, focus=CalendarDate(2000))
        assert mapper.to_date(grid, 550) == CalendarDate(2000, 1, 1, 12)

    def test_month(self, mapper):
        grid = build(Granularity.MONTH, focus=CalendarDate(2000, 2))
        assert mapper.to_date(grid, 550) == CalendarDate(2000, 2, 15, 12)


class TestInterpolationFraction:

    @pytest.mark.parametrize("date, granularity, expected", [
        (CalendarDate(2005), Granularity.DECADE, 0.5),
        (CalendarDate(2000, 1, 1, 12), Granularity.DAY, 0.5),
        (CalendarDate(2000, 1, 1, 0, 15), Granularity.HOUR, 0.25),
        (CalendarDate(2000, 4, 16), Granularity.MONTH, 0.5),
        (CalendarDate(2000, 1, 1, 0, 0, 0, 500), Granularity.SECOND, 0.5),
        (CalendarDate(1250), Granularity.MILLENNIUM, 0.25),
    ])
    def test_fraction(self, date, granularity, expected):
        assert interpolation_fraction(date, granularity) == pytest.approx(expected)
