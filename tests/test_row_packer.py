"""
Tests for first-fit row packing.
"""

from hypothesis import given, strategies as st
from hypothesis.strategies import composite

from timeline_viewer.rendering.row_packer import PackItem, PackResult, RowPacker


@composite
def pack_items(draw):
    start = draw(st.floats(min_value=-1000, max_value=2000))
    length = draw(st.floats(min_value=0, max_value=500))
    label = draw(st.floats(min_value=0, max_value=300))
    return PackItem(start, start + length, label, 32)


class TestRowPacker:

    def test_overlapping_period_goes_to_new_row(self):
        result = RowPacker().pack([PackItem(0, 400), PackItem(100, 300)])
        assert result.assignments == [0, 1]
        assert result.row_count == 2

    def test_touching_periods_share_row(self):
        result = RowPacker().pack([PackItem(0, 400), PackItem(100, 300), PackItem(400, 500)])
        assert result.assignments == [0, 1, 0]

    def test_first_fit_prefers_lowest_row(self):
        items = [PackItem(0, 100), PackItem(50, 150), PackItem(120, 200)]
        assert RowPacker().pack(items).assignments == [0, 1, 0]

    def test_label_wider_than_bar_reserves_space(self):
        items = [PackItem(0, 10, label_width=100), PackItem(50, 60)]
        assert RowPacker().pack(items).assignments == [0, 1]

    def test_placement_follows_input_order(self):
        long_first = [PackItem(0, 300), PackItem(0, 100), PackItem(150, 250)]
        short_first = [PackItem(0, 100), PackItem(150, 250), PackItem(0, 300)]
        assert RowPacker().pack(long_first).row_count == 2
        assert RowPacker().pack(short_first).row_count == 2
        assert RowPacker().pack(long_first).assignments == [0, 1, 1]

    def test_empty_lane(self):
        result = RowPacker().pack([])
        assert result.assignments == []
        assert result.row_count == 0
        assert result.row_height == 0

    def test_row_height_from_items(self):
        assert RowPacker().pack([PackItem(0, 10, height=32)]).row_height == 32

    @given(st.lists(pack_items(), max_size=40))
    def test_rows_never_overlap(self, items):
        result = RowPacker().pack(items)
        assert len(result.assignments) == len(items)
        for row in result.rows:
            for previous, current in zip(row.indices, row.indices[1:]):
                assert items[current].start_x >= items[previous].box_end_x

    @given(st.lists(pack_items(), max_size=40))
    def test_rows_opened_in_order(self, items):
        result = RowPacker().pack(items)
        highest = -1
        for row in result.assignments:
            assert row <= highest + 1
            highest = max(highest, row)


class TestLaneHeight:

    def test_minimum_for_empty_lane(self):
        assert RowPacker.lane_height(PackResult(), 40, 8) == 40

    def test_grows_with_rows(self):
        result = RowPacker().pack([PackItem(0, 10, height=32)] * 3)
        assert result.row_count == 3
        assert RowPacker.lane_height(result, 40, 8) == 8 * 2 + 3 * 32
