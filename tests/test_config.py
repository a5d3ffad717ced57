"""
Tests for viewer configuration loading, validation and persistence.
"""

import json

import pytest

from timeline_viewer.config import LayoutSettings, ScaleBounds, ViewerConfig
from timeline_viewer.rendering.granularity import Granularity
from timeline_viewer.utils.errors import ConfigError


def write_config(tmp_path, data):
    path = tmp_path / "viewer.json"
    path.write_text(data if isinstance(data, str) else json.dumps(data))
    return str(path)


class TestDefaults:

    def test_scale_table(self):
        bounds = ViewerConfig().get_scale_bounds()
        assert set(bounds) == set(Granularity)
        assert bounds[Granularity.YEAR] == ScaleBounds(20, 200, 20, 100)
        assert bounds[Granularity.DAY] == ScaleBounds(10, 200, 10, 50)
        assert bounds[Granularity.MILLISECOND] == ScaleBounds(5, 200, 5, 100)

    def test_layout(self):
        settings = ViewerConfig().get_layout_settings()
        assert settings == LayoutSettings()
        assert settings.row_height == 32

    def test_defaults_are_valid(self):
        ViewerConfig().validate()

    def test_missing_file_uses_defaults(self, tmp_path):
        config = ViewerConfig(str(tmp_path / "absent.json"))
        assert config.get_zoom_step() == 15


class TestScaleBounds:

    def test_clamp_stays_below_max(self):
        bounds = ScaleBounds(20, 200, 20, 100)
        assert bounds.clamp(500) == 199
        assert bounds.clamp(1) == 20
        assert bounds.clamp(150) == 150

    def test_range_is_half_open(self):
        bounds = ScaleBounds(20, 200, 20, 100)
        assert bounds.contains(20)
        assert not bounds.contains(200)


class TestLoad:

    def test_merges_over_defaults(self, tmp_path):
        path = write_config(tmp_path, {
            "scale": {"zoom_step": 10, "granularities": {"Year": {"max_width": 300}}},
            "layout": {"bar_height": 20, "bogus": 1},
        })
        config = ViewerConfig(path)
        year = config.get_scale_bounds()[Granularity.YEAR]
        assert year.max_width == 300
        assert year.min_width == 20
        assert config.get_zoom_step() == 10
        assert config.get_layout_settings().bar_height == 20
        assert config.get_layout_settings().row_height == 38

    def test_invalid_json(self, tmp_path):
        with pytest.raises(ConfigError):
            ViewerConfig(write_config(tmp_path, "{oops"))

    def test_empty_range_rejected(self, tmp_path):
        with pytest.raises(ConfigError):
            ViewerConfig(write_config(tmp_path, {"scale": {"granularities": {"day": {"min_width": 300}}}}))

    def test_entry_outside_range_rejected(self, tmp_path):
        with pytest.raises(ConfigError):
            ViewerConfig(write_config(tmp_path, {"scale": {"granularities": {"hour": {"zoom_out_entry": 500}}}}))

    def test_non_positive_zoom_step_rejected(self, tmp_path):
        with pytest.raises(ConfigError):
            ViewerConfig(write_config(tmp_path, {"scale": {"zoom_step": 0}}))


class TestMalformedValues:

    @pytest.mark.parametrize("data", [
        {"scale": {"granularities": {"year": {"max_widht": 300}}}},
        {"scale": {"granularities": {"fortnight": {"max_width": 300}}}},
        {"scale": {"granularities": {"year": {"max_width": "wide"}}}},
        {"scale": {"granularities": {"year": 300}}},
        {"scale": {"zoom_step": "fast"}},
        {"layout": {"bar_height": "tall"}},
        {"layout": {"row_spacing": True}},
        {"layout": [1, 2]},
        [1, 2],
    ])
    def test_reported_as_config_error(self, tmp_path, data):
        with pytest.raises(ConfigError):
            ViewerConfig(write_config(tmp_path, data))

    def test_misspelled_key_is_named(self, tmp_path):
        with pytest.raises(ConfigError) as info:
            ViewerConfig(write_config(tmp_path, {"scale": {"granularities": {"year": {"max_widht": 300}}}}))
        assert "max_widht" in info.value.message
        assert "max_width" in info.value.details

    def test_date_alias_accepted(self, tmp_path):
        config = ViewerConfig(write_config(tmp_path, {"scale": {"granularities": {"date": {"max_width": 150}}}}))
        assert config.get_scale_bounds()[Granularity.DAY].max_width == 150
