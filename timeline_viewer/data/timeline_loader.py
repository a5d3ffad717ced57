"""
Timeline Loader
===============

Builds a TimelineDocument from the JSON timeline format:

    {
      "title": "...",
      "granularity": "year",
      "unitPixelWidth": 100,
      "focusDate": "2000-01-01",
      "focusX": 500,
      "lanes": [
        {"title": "...", "hidden": false, "color": "#...",
         "timePeriods": [
           {"name": "...", "startDate": "1914-07-28", "endDate": "1918-11-11",
            "approximateStart": false, "approximateEnd": false,
            "description": "...", "color": "#...", "textColor": "#..."}
         ]}
      ]
    }

Unknown granularity names and malformed date strings raise GranularityError
and DateFormatError respectively. Structural problems (unreadable file,
invalid JSON, missing required keys) raise TimelineLoadError.
"""

import json
import logging
import os

from timeline_viewer.data.models import (
    DEFAULT_LANE_COLOR, DEFAULT_PERIOD_COLOR, DEFAULT_TEXT_COLOR,
    Lane, TimePeriod, TimelineDocument
)
from timeline_viewer.rendering.granularity import Granularity
from timeline_viewer.utils.calendar_date import CalendarDate
from timeline_viewer.utils.errors import TimelineLoadError

logger = logging.getLogger(__name__)


class TimelineLoader:
    """
    Reads timeline documents from JSON files or already-decoded dictionaries.
    """

    DEFAULT_UNIT_PIXEL_WIDTH = 100.0
    DEFAULT_FOCUS_X = 500.0

    def load(self, path) -> TimelineDocument:
        """
        Load a timeline document from a JSON file.

        Args:
            path: Path to the document

        Returns:
            TimelineDocument: Parsed document

        Raises:
            TimelineLoadError: If the file cannot be read or is not valid JSON
        """
        path = os.fspath(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise TimelineLoadError("Could not read timeline document", path, e) from e
        except json.JSONDecodeError as e:
            raise TimelineLoadError("Timeline document is not valid JSON", path, e) from e

        document = self.from_dict(data, source_path=path)
        logger.info(
            f"Loaded timeline '{document.title}' from {path}: "
            f"{len(document.lanes)} lanes, "
            f"{sum(len(lane.periods) for lane in document.lanes)} periods"
        )
        return document

    def from_dict(self, data, source_path=None) -> TimelineDocument:
        """
        Build a document from decoded JSON.

        Args:
            data: Decoded document
            source_path: Where the data came from, for error messages

        Returns:
            TimelineDocument: Parsed document
        """
        if not isinstance(data, dict):
            raise TimelineLoadError("Timeline document must be a JSON object", source_path)

        try:
            lanes = [self._parse_lane(lane_data) for lane_data in data.get('lanes', [])]
            return TimelineDocument(
                title=str(data.get('title', '')),
                granularity=Granularity.from_name(data.get('granularity', 'year')),
                unit_pixel_width=float(data.get('unitPixelWidth', self.DEFAULT_UNIT_PIXEL_WIDTH)),
                focus_date=CalendarDate.parse(data['focusDate']),
                focus_pixel_x=float(data.get('focusX', self.DEFAULT_FOCUS_X)),
                lanes=lanes,
                source_path=source_path,
            )
        except KeyError as e:
            raise TimelineLoadError(f"Timeline document is missing required key {e}", source_path, e) from e
        except (TypeError, ValueError, AttributeError) as e:
            raise TimelineLoadError("Timeline document has an invalid value", source_path, e) from e

    def _parse_lane(self, data) -> Lane:
        return Lane(
            name=str(data['title']),
            periods=[self._parse_period(period) for period in data.get('timePeriods', [])],
            hidden=bool(data.get('hidden', False)),
            color=data.get('color', DEFAULT_LANE_COLOR),
        )

    def _parse_period(self, data) -> TimePeriod:
        return TimePeriod(
            name=str(data['name']),
            start_date=CalendarDate.parse(data['startDate']),
            end_date=CalendarDate.parse(data['endDate']),
            approximate_start=bool(data.get('approximateStart', False)),
            approximate_end=bool(data.get('approximateEnd', False)),
            description=str(data.get('description', '')),
            color=data.get('color', DEFAULT_PERIOD_COLOR),
            text_color=data.get('textColor', DEFAULT_TEXT_COLOR),
        )
