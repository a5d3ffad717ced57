"""
Timeline Session - The layout core's entry point for one open timeline.

A session owns the view state, the lanes and the most recent grid. The
rendering host calls the zoom/pan operations in response to input, then
``build_grid`` and ``layout_lanes`` once per redraw and draws what they
return. All operations are synchronous; a multi-threaded host must serialise
access to a session.
"""

import logging
from typing import List, Optional

from timeline_viewer.config import ViewerConfig
from timeline_viewer.data.models import Lane, TimelineDocument
from timeline_viewer.rendering.date_mapper import DateToPixelMapper
from timeline_viewer.rendering.grid_builder import Grid, GridBuilder, TimelineViewState
from timeline_viewer.rendering.granularity import Granularity
from timeline_viewer.rendering.lane_layout import LaneGeometry, LaneLayoutCoordinator, PeriodGeometry
from timeline_viewer.rendering.scale_controller import ScaleTransitionController
from timeline_viewer.utils.calendar_date import CalendarDate

logger = logging.getLogger(__name__)


class TimelineSession:
    """
    View state plus layout services for one timeline.
    """

    def __init__(self, document: TimelineDocument, config: Optional[ViewerConfig] = None,
                 text_measurer=None, viewport_width: float = 0.0, viewport_height: float = 0.0):
        """
        Initialize the session from a loaded document.

        Args:
            document: Timeline document providing the initial view and lanes
            config: Scale and layout configuration (default: built-in defaults)
            text_measurer: Label width measurer passed to the lane layout
            viewport_width: Initial drawing area width in pixels
            viewport_height: Initial drawing area height in pixels
        """
        self.document = document
        self.config = config or ViewerConfig()
        self.settings = self.config.get_layout_settings()

        self.grid_builder = GridBuilder()
        self.mapper = DateToPixelMapper(self.settings.overflow_px)
        self.controller = ScaleTransitionController(
            self.config.get_scale_bounds(), self.config.get_zoom_step()
        )
        self.coordinator = LaneLayoutCoordinator(
            self.settings, mapper=self.mapper, text_measurer=text_measurer
        )

        self.state = TimelineViewState(
            focus_date=document.focus_date,
            focus_pixel_x=document.focus_pixel_x,
            granularity=document.granularity,
            unit_pixel_width=document.unit_pixel_width,
        )
        self.controller.clamp(self.state)

        self.viewport_width = float(viewport_width)
        self.viewport_height = float(viewport_height)
        self._grid: Optional[Grid] = None
        self._lane_geometry: List[LaneGeometry] = []

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def title(self) -> str:
        return self.document.title

    @property
    def lanes(self) -> List[Lane]:
        return self.document.lanes

    @property
    def granularity(self) -> Granularity:
        return self.state.granularity

    @property
    def unit_pixel_width(self) -> float:
        return self.state.unit_pixel_width

    @property
    def focus_date(self) -> CalendarDate:
        return self.state.focus_date

    @property
    def focus_pixel_x(self) -> float:
        return self.state.focus_pixel_x

    @property
    def vertical_offset(self) -> float:
        return self.state.vertical_offset

    @property
    def lane_geometry(self) -> List[LaneGeometry]:
        """Geometry from the most recent ``layout_lanes`` call."""
        return self._lane_geometry

    @property
    def grid(self) -> Grid:
        """Grid for the current state, rebuilt if the state changed since the last build."""
        if self._grid is None:
            return self.build_grid()
        return self._grid

    @property
    def baseline_y(self) -> float:
        """Bottom of the lane stack: just above the axis."""
        return max(0.0, self.viewport_height - self.settings.axis_height)

    # ------------------------------------------------------------------
    # Viewport and input
    # ------------------------------------------------------------------

    def set_viewport(self, width: float, height: float):
        self.viewport_width = float(width)
        self.viewport_height = float(height)
        self._grid = None

    def rescale(self, delta: float, pivot_x: float) -> bool:
        """
        Zoom by a width delta around a pixel position.

        Returns:
            bool: True if the granularity changed
        """
        changed = self.controller.rescale(self.state, self.grid, delta, pivot_x)
        self._grid = None
        return changed

    def zoom_in(self) -> bool:
        return self.rescale(self.controller.zoom_step, self.viewport_width / 2)

    def zoom_out(self) -> bool:
        return self.rescale(-self.controller.zoom_step, self.viewport_width / 2)

    def can_zoom_in(self) -> bool:
        return self.controller.can_zoom_in(self.state)

    def can_zoom_out(self) -> bool:
        return self.controller.can_zoom_out(self.state)

    def pan_horizontal(self, delta: float):
        """Move the axis by ``delta`` pixels (positive moves content right)."""
        self.controller.pan_horizontal(self.state, delta)
        self._grid = None
        self._rebase_focus()

    def pan_vertical(self, delta: float):
        """Scroll the lane stack by ``delta`` pixels (positive moves lanes down)."""
        self.controller.pan_vertical(self.state, delta)

    def _rebase_focus(self):
        # Keep the focus inside the viewport so zoom pivots always find a nearby line
        if self.viewport_width <= 0 or 0 <= self.state.focus_pixel_x <= self.viewport_width:
            return
        anchor = self.grid.nearest(self.viewport_width / 2)
        if anchor is not None:
            logger.debug(f"Rebasing focus from x={self.state.focus_pixel_x:.1f} to {anchor.date}")
            self.state.focus_date = anchor.date
            self.state.focus_pixel_x = anchor.pixel_x
            self._grid = None

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def build_grid(self, viewport_width: Optional[float] = None) -> Grid:
        """
        Build the grid for the current state.

        Args:
            viewport_width: Drawing area width (default: the session viewport)

        Returns:
            Grid: Sorted grid lines
        """
        if viewport_width is not None:
            self.viewport_width = float(viewport_width)
        self._grid = self.grid_builder.build(self.viewport_width, self.state)
        return self._grid

    def layout_lanes(self, baseline_y: Optional[float] = None) -> List[LaneGeometry]:
        """
        Pack and stack every lane against the current grid.

        Args:
            baseline_y: Bottom of the first lane (default: just above the axis)

        Returns:
            list: One LaneGeometry per lane
        """
        if baseline_y is None:
            baseline_y = self.baseline_y
        self._lane_geometry = self.coordinator.layout(
            self.lanes, self.grid, baseline_y, self.state.vertical_offset
        )
        return self._lane_geometry

    def map_date_to_pixel(self, date) -> float:
        """
        Pixel x of a date under the current view.

        Args:
            date: CalendarDate, datetime or encoded date string
        """
        return self.mapper.to_pixel_x(self.grid, CalendarDate.coerce(date))

    def pixel_to_date(self, pixel_x: float) -> Optional[CalendarDate]:
        return self.mapper.to_date(self.grid, pixel_x)

    # ------------------------------------------------------------------
    # Lanes
    # ------------------------------------------------------------------

    def set_lane_hidden(self, name: str, hidden: bool) -> bool:
        """
        Show or hide a lane by name.

        Returns:
            bool: False if no lane has that name
        """
        lane = self.document.lane(name)
        if lane is None:
            logger.warning(f"No lane named '{name}'")
            return False
        lane.hidden = hidden
        return True

    def period_at(self, x: float, y: float) -> Optional[PeriodGeometry]:
        """
        Period drawn under a pixel, from the most recent layout.

        Returns:
            PeriodGeometry or None
        """
        for lane_geometry in self._lane_geometry:
            for period_geometry in lane_geometry.periods:
                if period_geometry.contains(x, y, self.settings.label_height):
                    return period_geometry
        return None

    def __repr__(self):
        return (
            f"TimelineSession(title='{self.title}', "
            f"granularity='{self.granularity.label}', "
            f"width={self.unit_pixel_width:.1f}, focus={self.focus_date} @ {self.focus_pixel_x:.1f})"
        )
