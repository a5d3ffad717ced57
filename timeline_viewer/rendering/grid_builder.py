"""
Grid Builder - Generates the grid lines of the time axis.

Grid lines are laid out in whole units from the focus point: they cover the
viewport plus one line past the right edge and one line before the left edge.
The extra line on each side lets the date mapper interpolate periods that
begin or end off-screen.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from timeline_viewer.rendering.calendar_arithmetic import advance, format_label
from timeline_viewer.rendering.granularity import Granularity
from timeline_viewer.utils.calendar_date import CalendarDate

logger = logging.getLogger(__name__)

# Minimum step between grid lines, in pixels
MIN_STEP_PX = 1.0


@dataclass
class TimelineViewState:
    """
    Focus and scale of one timeline session.

    Attributes:
        focus_date: Instant the axis is anchored to
        focus_pixel_x: Pixel x of the focus date's grid line
        granularity: Active axis unit
        unit_pixel_width: Width of one unit in pixels
        vertical_offset: Vertical scroll of the lane stack
    """
    focus_date: CalendarDate
    focus_pixel_x: float
    granularity: Granularity
    unit_pixel_width: float
    vertical_offset: float = 0.0


@dataclass(frozen=True)
class GridLine:
    """One unit boundary on the axis."""
    date: CalendarDate
    pixel_x: float
    label: str = ""


@dataclass(frozen=True)
class Grid:
    """
    Grid lines sorted ascending by pixel x, with the geometry they were built from.
    """
    lines: List[GridLine] = field(default_factory=list)
    granularity: Granularity = Granularity.YEAR
    unit_pixel_width: float = MIN_STEP_PX
    viewport_width: float = 0.0

    def __len__(self):
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    def __getitem__(self, index):
        return self.lines[index]

    @property
    def first(self) -> Optional[GridLine]:
        return self.lines[0] if self.lines else None

    @property
    def last(self) -> Optional[GridLine]:
        return self.lines[-1] if self.lines else None

    def nearest(self, pixel_x: float) -> Optional[GridLine]:
        """
        Grid line closest to a pixel position.

        Ties go to the left-hand line.
        """
        if not self.lines:
            return None
        return min(self.lines, key=lambda line: abs(line.pixel_x - pixel_x))


class GridBuilder:
    """
    Builds the grid lines for a view state and viewport width.
    """

    def build(self, viewport_width: float, state: TimelineViewState) -> Grid:
        """
        Build the sorted grid for the viewport.

        Args:
            viewport_width: Width of the drawing area in pixels
            state: Current focus and scale

        Returns:
            Grid: Lines sorted by pixel x with strictly increasing dates. The
                line for the focus unit sits exactly at ``state.focus_pixel_x``.
        """
        granularity = state.granularity
        step = state.unit_pixel_width
        if step < MIN_STEP_PX:
            logger.warning(f"Unit width {step} below {MIN_STEP_PX}px, clamping for grid generation")
            step = MIN_STEP_PX

        focus = state.focus_date
        focus_x = state.focus_pixel_x

        if viewport_width > 0:
            # First unit index past the right edge, last one before the left edge.
            # Computed directly so a focus panned far off-screen costs nothing extra.
            k_forward = math.floor((viewport_width - focus_x) / step) + 1
            k_backward = math.ceil(-focus_x / step) - 1
            unit_offsets = range(k_backward, k_forward + 1)
        else:
            unit_offsets = range(0, 1)

        lines = []
        for k in unit_offsets:
            date = advance(focus, granularity, k)
            lines.append(GridLine(date, focus_x + k * step, format_label(date, granularity)))

        logger.debug(
            f"Built {len(lines)} grid lines at {granularity.label} "
            f"(width={step:.2f}px, focus={focus} @ {focus_x:.1f})"
        )

        return Grid(lines, granularity, step, max(0.0, float(viewport_width)))
