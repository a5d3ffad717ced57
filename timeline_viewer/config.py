"""
Viewer Configuration Manager
Handles loading and saving of scale thresholds and lane layout settings.

The scale table holds, per granularity, the valid unit pixel width range
``[min_width, max_width)`` and the widths used when the scale state machine
enters that granularity while zooming in (from the coarser neighbour) or
zooming out (from the finer neighbour). These are tuned for visual smoothness
and can be overridden from a JSON file.
"""

import copy
import json
import logging
import os
from dataclasses import dataclass, fields
from typing import Dict

from timeline_viewer.rendering.granularity import Granularity
from timeline_viewer.utils.errors import ConfigError, GranularityError

logger = logging.getLogger(__name__)


def _number(value, name: str) -> float:
    """Coerce a configuration value to float, rejecting booleans and strings."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"Setting '{name}' must be a number", f"got {value!r}")
    return float(value)


def _section(value, name: str) -> dict:
    if not isinstance(value, dict):
        raise ConfigError(f"Section '{name}' must be a JSON object", f"got {value!r}")
    return value


@dataclass(frozen=True)
class ScaleBounds:
    """Unit pixel width limits for one granularity."""
    min_width: float
    max_width: float
    zoom_in_entry: float
    zoom_out_entry: float

    def clamp(self, width: float, upper_margin: float = 1.0) -> float:
        """Clamp into ``[min_width, max_width - upper_margin]``, inside the half-open range."""
        return max(self.min_width, min(width, self.max_width - upper_margin))

    def contains(self, width: float) -> bool:
        return self.min_width <= width < self.max_width


SCALE_FIELDS = tuple(f.name for f in fields(ScaleBounds))


@dataclass(frozen=True)
class LayoutSettings:
    """Lane and period geometry settings, in pixels."""
    bar_height: float = 14.0
    label_height: float = 14.0
    row_spacing: float = 4.0
    lane_margin: float = 8.0
    min_lane_height: float = 40.0
    lane_spacing: float = 6.0
    axis_height: float = 40.0
    overflow_px: float = 1000.0
    char_width: float = 8.0
    label_padding: float = 10.0

    @property
    def row_height(self) -> float:
        return self.bar_height + self.label_height + self.row_spacing


class ViewerConfig:
    """
    Manages scale and layout preferences for the timeline viewer.
    Preferences are stored in the ``scale`` and ``layout`` sections of a JSON file.
    """

    DEFAULT_CONFIG = {
        'scale': {
            'zoom_step': 15.0,
            'granularities': {
                'millennium': {'min_width': 20, 'max_width': 200, 'zoom_in_entry': 20, 'zoom_out_entry': 100},
                'century': {'min_width': 20, 'max_width': 200, 'zoom_in_entry': 20, 'zoom_out_entry': 100},
                'decade': {'min_width': 20, 'max_width': 200, 'zoom_in_entry': 20, 'zoom_out_entry': 100},
                'year': {'min_width': 20, 'max_width': 200, 'zoom_in_entry': 20, 'zoom_out_entry': 100},
                'month': {'min_width': 20, 'max_width': 200, 'zoom_in_entry': 20, 'zoom_out_entry': 100},
                'day': {'min_width': 10, 'max_width': 200, 'zoom_in_entry': 10, 'zoom_out_entry': 50},
                'hour': {'min_width': 10, 'max_width': 200, 'zoom_in_entry': 10, 'zoom_out_entry': 50},
                'minute': {'min_width': 5, 'max_width': 200, 'zoom_in_entry': 5, 'zoom_out_entry': 50},
                'second': {'min_width': 5, 'max_width': 200, 'zoom_in_entry': 5, 'zoom_out_entry': 50},
                'millisecond': {'min_width': 5, 'max_width': 200, 'zoom_in_entry': 5, 'zoom_out_entry': 100},
            },
        },
        'layout': {
            'bar_height': 14.0,
            'label_height': 14.0,
            'row_spacing': 4.0,
            'lane_margin': 8.0,
            'min_lane_height': 40.0,
            'lane_spacing': 6.0,
            'axis_height': 40.0,
            'overflow_px': 1000.0,
            'char_width': 8.0,
            'label_padding': 10.0,
        },
    }

    def __init__(self, config_file=None):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to configuration file (optional)
        """
        self.config_file = config_file
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file and os.path.exists(config_file):
            self.load()

    def load(self):
        """
        Merge preferences from the configuration file over the defaults.

        Raises:
            ConfigError: If the file is not valid JSON or holds invalid values
        """
        if not self.config_file or not os.path.exists(self.config_file):
            return

        if os.path.getsize(self.config_file) == 0:
            return

        try:
            with open(self.config_file, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not read configuration file {self.config_file}", str(e)) from e
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file {self.config_file} must hold a JSON object")

        scale = _section(data.get('scale', {}), 'scale')
        if 'zoom_step' in scale:
            self.config['scale']['zoom_step'] = _number(scale['zoom_step'], 'scale.zoom_step')
        for name, values in _section(scale.get('granularities', {}), 'scale.granularities').items():
            try:
                key = Granularity.from_name(name).label
            except GranularityError as e:
                raise ConfigError(f"Unknown granularity '{name}' in scale table", e.details) from e
            for field_name, value in _section(values, f"scale.granularities.{name}").items():
                if field_name not in SCALE_FIELDS:
                    raise ConfigError(
                        f"Unknown scale setting '{field_name}' for {key}",
                        f"expected one of: {', '.join(SCALE_FIELDS)}"
                    )
                self.config['scale']['granularities'][key][field_name] = _number(value, f"{key}.{field_name}")

        for key, value in _section(data.get('layout', {}), 'layout').items():
            if key not in self.DEFAULT_CONFIG['layout']:
                logger.warning(f"Ignoring unknown layout setting '{key}'")
                continue
            self.config['layout'][key] = _number(value, f"layout.{key}")
        self.validate()
        logger.debug(f"Loaded viewer configuration from {self.config_file}")

    def validate(self):
        """
        Check every scale entry is usable by the transition state machine.

        Raises:
            ConfigError: If a range is empty or an entry width falls outside it
        """
        for granularity, bounds in self.get_scale_bounds().items():
            if bounds.min_width <= 0 or bounds.min_width >= bounds.max_width:
                raise ConfigError(
                    f"Invalid width range for {granularity.label}",
                    f"min_width={bounds.min_width}, max_width={bounds.max_width}"
                )
            for entry in (bounds.zoom_in_entry, bounds.zoom_out_entry):
                if not bounds.min_width <= entry < bounds.max_width:
                    raise ConfigError(
                        f"Entry width for {granularity.label} outside its range",
                        f"entry={entry}, range=[{bounds.min_width}, {bounds.max_width})"
                    )
        if self.get_zoom_step() <= 0:
            raise ConfigError("zoom_step must be positive")

    def get_scale_bounds(self) -> Dict[Granularity, ScaleBounds]:
        """
        Get the scale table keyed by granularity.

        Returns:
            dict: Granularity -> ScaleBounds
        """
        table = self.config['scale']['granularities']
        return {
            granularity: ScaleBounds(**{k: float(v) for k, v in table[granularity.label].items()})
            for granularity in Granularity
        }

    def get_zoom_step(self) -> float:
        return float(self.config['scale']['zoom_step'])

    def get_layout_settings(self) -> LayoutSettings:
        """
        Get lane layout settings.

        Returns:
            LayoutSettings: Geometry settings for the lane coordinator
        """
        return LayoutSettings(**{k: float(v) for k, v in self.config['layout'].items()})
