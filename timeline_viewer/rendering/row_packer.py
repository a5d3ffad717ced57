"""
Row Packer - Assigns the time periods of a lane to non-overlapping rows.

Uses a greedy "First Fit" pass over the periods in the order the lane lists
them. Each row only remembers where its last bar (or label, if wider) ends.
A period goes into the first row whose last end is at or before the period's
start, otherwise into a new row.

The result is order dependent and not a minimum colouring: a long label
placed early can push a later period into a new row even when an optimal
assignment would share one. Periods within a row never overlap.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackItem:
    """
    A period's horizontal extent as seen by the packer.

    Attributes:
        start_x: Pixel x of the bar start
        end_x: Pixel x of the bar end
        label_width: Width of the label drawn with the bar
        height: Height of bar plus label
    """
    start_x: float
    end_x: float
    label_width: float = 0.0
    height: float = 0.0

    @property
    def box_width(self) -> float:
        return max(self.end_x - self.start_x, self.label_width)

    @property
    def box_end_x(self) -> float:
        return self.start_x + self.box_width


@dataclass
class PackedRow:
    """Indices of the items placed in one row, in placement order."""
    indices: List[int] = field(default_factory=list)
    end_x: float = float('-inf')


@dataclass
class PackResult:
    """
    Outcome of packing one lane.

    Attributes:
        assignments: Row index for each input item, in input order
        rows: Rows in index order
        row_height: Height of one row (taken from the first item)
    """
    assignments: List[int] = field(default_factory=list)
    rows: List[PackedRow] = field(default_factory=list)
    row_height: float = 0.0

    @property
    def row_count(self) -> int:
        return len(self.rows)


class RowPacker:
    """
    Greedy first-fit packer for one lane's periods.
    """

    def pack(self, items: Sequence[PackItem]) -> PackResult:
        """
        Pack items into rows.

        Args:
            items: Period extents in lane order (not re-sorted)

        Returns:
            PackResult: Row assignment per item
        """
        result = PackResult()
        if not items:
            return result

        # Bars and labels are assumed uniform in height across a lane
        result.row_height = items[0].height

        for index, item in enumerate(items):
            row = 0
            while row < len(result.rows) and item.start_x < result.rows[row].end_x:
                row += 1
            if row == len(result.rows):
                result.rows.append(PackedRow())

            packed = result.rows[row]
            packed.indices.append(index)
            packed.end_x = item.box_end_x
            result.assignments.append(row)

        logger.debug(f"Packed {len(items)} periods into {result.row_count} rows")
        return result

    @staticmethod
    def lane_height(result: PackResult, min_lane_height: float, margin: float) -> float:
        """
        Height of a lane holding the packed rows.

        Args:
            result: Packing result for the lane
            min_lane_height: Smallest height a lane is drawn with
            margin: Space above and below the rows

        Returns:
            float: ``max(min_lane_height, 2 * margin + rows * row_height)``
        """
        return max(min_lane_height, margin * 2 + result.row_count * result.row_height)
