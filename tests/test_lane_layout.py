"""
Tests for lane stacking and period placement.
"""

import pytest

from timeline_viewer.config import LayoutSettings
from timeline_viewer.data.models import Lane
from timeline_viewer.rendering.grid_builder import GridBuilder
from timeline_viewer.rendering.lane_layout import LaneLayoutCoordinator
from timeline_viewer.rendering.text_metrics import FixedWidthTextMeasurer
from timeline_viewer.utils.calendar_date import CalendarDate

from conftest import make_period, make_state

BASELINE = 600


@pytest.fixture
def grid():
    return GridBuilder().build(1000, make_state(focus=CalendarDate(1915)))


@pytest.fixture
def coordinator():
    return LaneLayoutCoordinator()


class TestLaneLayout:

    def test_overlapping_periods_stack(self, coordinator, grid, world_wars_document):
        wars = world_wars_document.lanes[0]
        geometry = coordinator.layout([wars], grid, BASELINE)[0]

        assert wars.row_assignments == [0, 1]
        assert geometry.row_count == 2
        assert wars.height == 8 * 2 + 2 * 32
        assert geometry.bottom_y == BASELINE
        assert geometry.top_y == BASELINE - 80

        first, second = geometry.periods
        assert first.y == BASELINE - 8 - 32
        assert second.y == BASELINE - 8 - 64
        assert first.x == pytest.approx(400 + 208 / 365 * 100)

    def test_lanes_stack_upwards(self, coordinator, grid, world_wars_document):
        wars, science = coordinator.layout(world_wars_document.lanes, grid, BASELINE)
        assert science.bottom_y == wars.top_y - 6
        assert science.height == 8 * 2 + 32
        assert science.row_count == 1

    def test_hidden_lane_takes_no_space(self, coordinator, grid, world_wars_document):
        wars, science = world_wars_document.lanes
        wars.hidden = True
        hidden, visible = coordinator.layout([wars, science], grid, BASELINE)

        assert hidden.height == 0
        assert hidden.periods == []
        assert wars.row_assignments == []
        assert wars.height == 0
        assert visible.bottom_y == BASELINE

    def test_empty_lane_gets_minimum_height(self, coordinator, grid):
        lane = Lane("Empty")
        geometry = coordinator.layout([lane], grid, BASELINE)[0]
        assert geometry.height == 40
        assert lane.row_assignments == []

    def test_vertical_offset_shifts_every_lane(self, coordinator, grid, world_wars_document):
        plain = coordinator.layout(world_wars_document.lanes, grid, BASELINE)
        shifted = coordinator.layout(world_wars_document.lanes, grid, BASELINE, vertical_offset=25)
        for a, b in zip(plain, shifted):
            assert b.top_y == a.top_y + 25
            assert [p.y for p in b.periods] == [p.y + 25 for p in a.periods]

    def test_layout_is_idempotent(self, coordinator, grid, world_wars_document):
        first = coordinator.layout(world_wars_document.lanes, grid, BASELINE)
        assignments = [list(lane.row_assignments) for lane in world_wars_document.lanes]
        second = coordinator.layout(world_wars_document.lanes, grid, BASELINE)
        assert first == second
        assert assignments == [lane.row_assignments for lane in world_wars_document.lanes]

    def test_instant_has_zero_width_bar_and_label_box(self, coordinator, grid, world_wars_document):
        science = world_wars_document.lanes[1]
        geometry = coordinator.layout([science], grid, BASELINE)[0].periods[0]
        assert geometry.width == 0
        assert geometry.box_width == len("Relativity") * 8 + 10

    def test_hit_box_includes_label(self, coordinator, grid, world_wars_document):
        geometry = coordinator.layout(world_wars_document.lanes[:1], grid, BASELINE)[0].periods[0]
        assert geometry.contains(geometry.x + 1, geometry.y + 20, label_height=14)
        assert not geometry.contains(geometry.x + 1, geometry.y + 20)
        assert not geometry.contains(geometry.x - 1, geometry.y + 1)

    def test_custom_settings_and_measurer(self, grid, world_wars_document):
        settings = LayoutSettings(bar_height=10, label_height=10, row_spacing=0, lane_margin=0)
        coordinator = LaneLayoutCoordinator(settings, text_measurer=FixedWidthTextMeasurer(char_width=1000))
        geometry = coordinator.layout(world_wars_document.lanes[:1], grid, BASELINE)[0]
        assert geometry.row_count == 2
        assert geometry.height == 40
        assert geometry.periods[1].y == BASELINE - 40
