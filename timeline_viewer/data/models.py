"""
Timeline data model: time periods, lanes and the timeline document.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from timeline_viewer.rendering.granularity import Granularity
from timeline_viewer.utils.calendar_date import CalendarDate

DEFAULT_PERIOD_COLOR = '#3B82F6'
DEFAULT_TEXT_COLOR = '#E2E8F0'
DEFAULT_LANE_COLOR = '#1E293B'


@dataclass
class TimePeriod:
    """
    A named date range drawn as a bar.

    Only ``description`` can change after construction; assigning any other
    field raises AttributeError. A start after the end is a caller error and
    is not checked here.
    """
    name: str
    start_date: CalendarDate
    end_date: CalendarDate
    approximate_start: bool = False
    approximate_end: bool = False
    description: str = ""
    color: str = DEFAULT_PERIOD_COLOR
    text_color: str = DEFAULT_TEXT_COLOR

    def __setattr__(self, name, value):
        if name != "description" and name in self.__dict__:
            raise AttributeError(f"TimePeriod.{name} is read-only")
        super().__setattr__(name, value)


@dataclass
class Lane:
    """
    A horizontal track of time periods.

    ``row_assignments`` and ``height`` are derived by the lane layout pass and
    rebuilt whenever the scale or viewport changes.
    """
    name: str
    periods: List[TimePeriod] = field(default_factory=list)
    hidden: bool = False
    color: str = DEFAULT_LANE_COLOR
    row_assignments: List[int] = field(default_factory=list, compare=False, repr=False)
    height: float = field(default=0.0, compare=False, repr=False)


@dataclass
class TimelineDocument:
    """
    A timeline as described by a loaded document: initial view plus lanes.
    """
    title: str
    granularity: Granularity
    unit_pixel_width: float
    focus_date: CalendarDate
    focus_pixel_x: float
    lanes: List[Lane] = field(default_factory=list)
    source_path: Optional[str] = field(default=None, compare=False)

    def lane(self, name: str) -> Optional[Lane]:
        for lane in self.lanes:
            if lane.name == name:
                return lane
        return None
