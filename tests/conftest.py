"""
Shared fixtures for the timeline viewer tests.
"""

import os

import pytest

# Widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from timeline_viewer.data.models import Lane, TimePeriod, TimelineDocument
from timeline_viewer.rendering.grid_builder import GridBuilder, TimelineViewState
from timeline_viewer.rendering.granularity import Granularity
from timeline_viewer.utils.calendar_date import CalendarDate


def make_state(granularity=Granularity.YEAR, width=100.0, focus=CalendarDate(2000), focus_x=500.0):
    return TimelineViewState(
        focus_date=focus,
        focus_pixel_x=focus_x,
        granularity=granularity,
        unit_pixel_width=width,
    )


def make_period(name, start, end, **kwargs):
    return TimePeriod(name, CalendarDate.parse(start), CalendarDate.parse(end), **kwargs)


@pytest.fixture
def year_state():
    """YEAR at 100px per unit with 2000-01-01 at x=500."""
    return make_state()


@pytest.fixture
def year_grid(year_state):
    return GridBuilder().build(1000, year_state)


@pytest.fixture
def world_wars_document():
    return TimelineDocument(
        title="Twentieth Century",
        granularity=Granularity.YEAR,
        unit_pixel_width=100.0,
        focus_date=CalendarDate(1915),
        focus_pixel_x=500.0,
        lanes=[
            Lane("Wars", [
                make_period("A", "1914-07-28", "1918-11-11"),
                make_period("B", "1915-04-25", "1916-01-09"),
            ]),
            Lane("Science", [
                make_period("Relativity", "1915-11-25", "1915-11-25", approximate_start=True),
            ]),
        ],
    )


@pytest.fixture
def qapp():
    """QApplication for widget tests, skipped when PyQt5 is unavailable."""
    QtWidgets = pytest.importorskip("PyQt5.QtWidgets")
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    return app
