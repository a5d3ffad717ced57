"""
Lane Layout - Stacks lanes and places their periods for drawing.

For every visible lane the coordinator maps period boundaries to pixels,
packs the periods into rows and stacks the lane above the previous one,
starting at the axis baseline and growing upwards. Hidden lanes take no
space and are not packed.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from timeline_viewer.config import LayoutSettings
from timeline_viewer.data.models import Lane, TimePeriod
from timeline_viewer.rendering.date_mapper import DateToPixelMapper
from timeline_viewer.rendering.grid_builder import Grid
from timeline_viewer.rendering.row_packer import PackItem, RowPacker
from timeline_viewer.rendering.text_metrics import FixedWidthTextMeasurer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeriodGeometry:
    """
    Where one period is drawn.

    Attributes:
        period: The time period
        index: Position of the period in its lane
        row: Packed row (0 is nearest the lane bottom)
        x: Bar start
        width: Bar width (may be zero for instants)
        y: Top of the bar
        bar_height: Bar height; the label sits directly below the bar
        box_width: Horizontal space reserved for bar and label
    """
    period: TimePeriod
    index: int
    row: int
    x: float
    width: float
    y: float
    bar_height: float
    box_width: float

    def contains(self, px: float, py: float, label_height: float = 0.0) -> bool:
        return (self.x <= px <= self.x + self.box_width
                and self.y <= py <= self.y + self.bar_height + label_height)


@dataclass
class LaneGeometry:
    """
    Vertical extent of one lane and its placed periods.
    """
    lane: Lane
    top_y: float
    bottom_y: float
    row_count: int = 0
    periods: List[PeriodGeometry] = field(default_factory=list)

    @property
    def height(self) -> float:
        return self.bottom_y - self.top_y


class LaneLayoutCoordinator:
    """
    Runs date mapping and row packing for every lane of a timeline.
    """

    def __init__(self, settings: Optional[LayoutSettings] = None,
                 mapper: Optional[DateToPixelMapper] = None,
                 packer: Optional[RowPacker] = None,
                 text_measurer=None):
        """
        Args:
            settings: Lane geometry settings
            mapper: Date mapper (default uses the settings' overflow)
            packer: Row packer
            text_measurer: Object with ``width(text)``; defaults to a fixed-width estimate
        """
        self.settings = settings or LayoutSettings()
        self.mapper = mapper or DateToPixelMapper(self.settings.overflow_px)
        self.packer = packer or RowPacker()
        self.text_measurer = text_measurer or FixedWidthTextMeasurer(
            self.settings.char_width, self.settings.label_padding
        )

    def layout(self, lanes: Sequence[Lane], grid: Grid, baseline_y: float,
               vertical_offset: float = 0.0) -> List[LaneGeometry]:
        """
        Lay out all lanes against the grid.

        Args:
            lanes: Lanes in display order; the first sits on the baseline
            grid: Grid for the current view state
            baseline_y: Pixel y of the bottom of the first lane
            vertical_offset: Vertical scroll added to every lane

        Returns:
            list: One LaneGeometry per lane, hidden lanes with zero height
        """
        settings = self.settings
        bottom = baseline_y + vertical_offset
        geometries = []

        for lane in lanes:
            if lane.hidden:
                lane.row_assignments = []
                lane.height = 0.0
                geometries.append(LaneGeometry(lane, bottom, bottom))
                continue

            items = [self._pack_item(period, grid) for period in lane.periods]
            result = self.packer.pack(items)
            height = self.packer.lane_height(result, settings.min_lane_height, settings.lane_margin)

            lane.row_assignments = list(result.assignments)
            lane.height = height

            geometry = LaneGeometry(lane, bottom - height, bottom, result.row_count)
            for index, (period, item, row) in enumerate(zip(lane.periods, items, result.assignments)):
                y = bottom - settings.lane_margin - (row + 1) * result.row_height
                geometry.periods.append(PeriodGeometry(
                    period=period,
                    index=index,
                    row=row,
                    x=item.start_x,
                    width=max(0.0, item.end_x - item.start_x),
                    y=y,
                    bar_height=settings.bar_height,
                    box_width=item.box_width,
                ))
            geometries.append(geometry)

            bottom = geometry.top_y - settings.lane_spacing

        logger.debug(f"Laid out {len(lanes)} lanes, stack top at y={bottom:.1f}")
        return geometries

    def _pack_item(self, period: TimePeriod, grid: Grid) -> PackItem:
        start_x = self.mapper.to_pixel_x(grid, period.start_date)
        end_x = self.mapper.to_pixel_x(grid, period.end_date)
        return PackItem(
            start_x=start_x,
            end_x=end_x,
            label_width=self.text_measurer.width(period.name),
            height=self.settings.row_height,
        )
