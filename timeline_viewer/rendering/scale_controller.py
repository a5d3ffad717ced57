"""
Scale Controller - Granularity state machine driven by zoom input.

This module provides the ScaleTransitionController class which manages:
- Unit pixel width changes from wheel/button zoom
- Re-anchoring the focus to the grid line under the zoom pivot
- Transitions to the coarser/finer granularity when the width leaves the
  range configured for the current granularity
- Clamping at the MILLENNIUM and MILLISECOND ends of the scale
"""

import logging
from typing import Dict, Optional

from timeline_viewer.config import ScaleBounds, ViewerConfig
from timeline_viewer.rendering.calendar_arithmetic import align
from timeline_viewer.rendering.date_mapper import interpolation_fraction
from timeline_viewer.rendering.grid_builder import Grid, TimelineViewState
from timeline_viewer.rendering.granularity import Granularity
from timeline_viewer.utils.errors import LayoutError

logger = logging.getLogger(__name__)


class ScaleTransitionController:
    """
    Applies zoom deltas to a view state and switches granularity at the bounds.

    Widths grow when zooming in. Reaching ``max_width`` moves to the next finer
    granularity, dropping below ``min_width`` moves to the next coarser one.
    The width in the new granularity starts from that granularity's entry
    width for the zoom direction, offset by the delta, so consecutive wheel
    steps keep moving in the same direction. A single call never moves more
    than one level.
    """

    def __init__(self, scale_bounds: Optional[Dict[Granularity, ScaleBounds]] = None,
                 zoom_step: Optional[float] = None):
        """
        Initialize the controller.

        Args:
            scale_bounds: Per-granularity width table (default: ViewerConfig defaults)
            zoom_step: Width delta used by zoom_in/zoom_out (default: config value)
        """
        defaults = ViewerConfig()
        self.scale_bounds = scale_bounds or defaults.get_scale_bounds()
        self.zoom_step = zoom_step if zoom_step is not None else defaults.get_zoom_step()

    def bounds_for(self, granularity: Granularity) -> ScaleBounds:
        """
        Width limits for a granularity.

        Raises:
            LayoutError: If the scale table has no entry for the granularity
        """
        try:
            return self.scale_bounds[granularity]
        except KeyError:
            raise LayoutError(
                f"No scale bounds configured for {granularity.label}",
                f"Scale table covers: {', '.join(g.label for g in sorted(self.scale_bounds))}"
            ) from None

    def clamp(self, state: TimelineViewState) -> TimelineViewState:
        """
        Re-establish the width invariant for the current granularity.

        Args:
            state: View state to fix in place

        Returns:
            TimelineViewState: The same state
        """
        bounds = self.bounds_for(state.granularity)
        if not bounds.contains(state.unit_pixel_width):
            clamped = bounds.clamp(state.unit_pixel_width)
            logger.debug(
                f"Clamped {state.granularity.label} width {state.unit_pixel_width} -> {clamped}"
            )
            state.unit_pixel_width = clamped
        return state

    def rescale(self, state: TimelineViewState, grid: Optional[Grid],
                delta: float, pivot_x: float) -> bool:
        """
        Zoom around a pivot.

        Args:
            state: View state, mutated in place
            grid: Grid built for ``state`` before this zoom step
            delta: Width change in pixels (positive zooms in)
            pivot_x: Pixel x that should stay visually fixed (usually the cursor)

        Returns:
            bool: True if the granularity changed
        """
        old_granularity = state.granularity
        state.unit_pixel_width += delta

        self._reanchor(state, grid, pivot_x)

        bounds = self.bounds_for(old_granularity)
        width = state.unit_pixel_width

        if width >= bounds.max_width:
            finer = old_granularity.finer
            if finer is None:
                self.clamp(state)
                return False
            self._enter(state, finer, self.bounds_for(finer).zoom_in_entry + delta)
            return True

        if width < bounds.min_width:
            coarser = old_granularity.coarser
            if coarser is None:
                self.clamp(state)
                return False
            entry_width = self.bounds_for(coarser).clamp(self.bounds_for(coarser).zoom_out_entry + delta)
            # Keep the focus date where it was: the coarser unit starts earlier
            state.focus_pixel_x -= interpolation_fraction(state.focus_date, coarser) * entry_width
            state.focus_date = align(state.focus_date, coarser)
            self._enter(state, coarser, entry_width)
            return True

        return False

    def _reanchor(self, state: TimelineViewState, grid: Optional[Grid], pivot_x: float):
        if grid is None or grid.granularity is not state.granularity:
            logger.debug("No current grid to re-anchor against, keeping focus")
            return
        anchor = grid.nearest(pivot_x)
        if anchor is None:
            return
        state.focus_date = anchor.date
        state.focus_pixel_x = anchor.pixel_x

    def _enter(self, state: TimelineViewState, granularity: Granularity, width: float):
        previous = state.granularity
        state.granularity = granularity
        state.unit_pixel_width = self.bounds_for(granularity).clamp(width)
        logger.debug(
            f"Scale transition {previous.label} -> {granularity.label} "
            f"(width={state.unit_pixel_width:.2f}px)"
        )

    def pan_horizontal(self, state: TimelineViewState, delta: float):
        """Shift the axis; positive delta moves the content right."""
        state.focus_pixel_x += delta

    def pan_vertical(self, state: TimelineViewState, delta: float):
        """Scroll the lane stack; positive delta moves lanes down."""
        state.vertical_offset += delta

    def can_zoom_in(self, state: TimelineViewState) -> bool:
        """
        Check if zooming in is possible.

        Returns:
            bool: False only at the finest granularity's maximum width
        """
        bounds = self.bounds_for(state.granularity)
        return (state.granularity.finer is not None
                or state.unit_pixel_width < bounds.clamp(bounds.max_width))

    def can_zoom_out(self, state: TimelineViewState) -> bool:
        """
        Check if zooming out is possible.

        Returns:
            bool: False only at the coarsest granularity's minimum width
        """
        bounds = self.bounds_for(state.granularity)
        return state.granularity.coarser is not None or state.unit_pixel_width > bounds.min_width

    def __repr__(self):
        return f"ScaleTransitionController(zoom_step={self.zoom_step})"
