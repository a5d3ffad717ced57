"""
Tests for reading timeline documents.
"""

import json

import pytest

from timeline_viewer.data.timeline_loader import TimelineLoader
from timeline_viewer.rendering.granularity import Granularity
from timeline_viewer.utils.calendar_date import CalendarDate
from timeline_viewer.utils.errors import DateFormatError, GranularityError, TimelineLoadError

DOCUMENT = {
    "title": "Rome",
    "granularity": "century",
    "unitPixelWidth": 80,
    "focusDate": "-0100-01-01",
    "focusX": 300,
    "lanes": [
        {
            "title": "Rulers",
            "color": "#223344",
            "timePeriods": [
                {"name": "Augustus", "startDate": "-0026-01-16", "endDate": "0014-08-19",
                 "approximateStart": True, "description": "First emperor"},
                {"name": "Tiberius", "startDate": "0014-09-18", "endDate": "0037-03-16"},
            ],
        },
        {"title": "Wars", "hidden": True},
    ],
}


@pytest.fixture
def loader():
    return TimelineLoader()


def write(tmp_path, data):
    path = tmp_path / "timeline.json"
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return path


class TestLoad:

    def test_reads_document(self, loader, tmp_path):
        document = loader.load(write(tmp_path, DOCUMENT))

        assert document.title == "Rome"
        assert document.granularity is Granularity.CENTURY
        assert document.unit_pixel_width == 80
        assert document.focus_date == CalendarDate(-100)
        assert document.focus_pixel_x == 300
        assert [lane.name for lane in document.lanes] == ["Rulers", "Wars"]
        assert document.lanes[1].hidden
        assert document.lanes[1].periods == []

        augustus = document.lanes[0].periods[0]
        assert augustus.start_date == CalendarDate(-26, 1, 16)
        assert augustus.approximate_start
        assert not augustus.approximate_end
        assert augustus.description == "First emperor"

    def test_defaults(self, loader):
        document = loader.from_dict({"focusDate": "2000-01-01"})
        assert document.granularity is Granularity.YEAR
        assert document.unit_pixel_width == 100
        assert document.focus_pixel_x == 500
        assert document.lanes == []

    def test_date_granularity_alias(self, loader):
        assert loader.from_dict({"focusDate": "2000-01-01", "granularity": "date"}).granularity is Granularity.DAY

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(TimelineLoadError) as excinfo:
            loader.load(tmp_path / "missing.json")
        assert "missing.json" in excinfo.value.path

    def test_invalid_json(self, loader, tmp_path):
        with pytest.raises(TimelineLoadError):
            loader.load(write(tmp_path, "{not json"))

    def test_missing_focus_date(self, loader):
        with pytest.raises(TimelineLoadError):
            loader.from_dict({"title": "No focus"})

    def test_missing_lane_title(self, loader):
        with pytest.raises(TimelineLoadError):
            loader.from_dict({"focusDate": "2000-01-01", "lanes": [{"timePeriods": []}]})

    def test_non_object_document(self, loader):
        with pytest.raises(TimelineLoadError):
            loader.from_dict(["not", "a", "document"])

    def test_unknown_granularity(self, loader):
        with pytest.raises(GranularityError):
            loader.from_dict({"focusDate": "2000-01-01", "granularity": "fortnight"})

    def test_malformed_period_date(self, loader):
        data = {"focusDate": "2000-01-01",
                "lanes": [{"title": "L", "timePeriods": [
                    {"name": "Bad", "startDate": "2000-02-30", "endDate": "2000-03-01"}]}]}
        with pytest.raises(DateFormatError):
            loader.from_dict(data)
