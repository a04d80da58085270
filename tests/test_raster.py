"""Tests for raster layout and the grid accessor."""

import numpy as np
import pytest

from inkgrid.codec import encode, encoded_length
from inkgrid.colors import BLACK, CYAN, GREEN, ORANGE, VIOLET, WHITE, YELLOW
from inkgrid.raster import (
    OutOfBoundsError,
    RasterGrid,
    alternate,
    capacity,
    fit_dimensions,
    layout,
    split_rows,
)


class RecordingBytes(list):
    """List of ints that records every index/slice read."""

    def __init__(self, values):
        super().__init__(values)
        self.reads = []

    def __getitem__(self, key):
        self.reads.append(key)
        return list.__getitem__(self, key)


class TestAlternate:
    def test_even_is_black(self):
        assert alternate(0) == BLACK
        assert alternate(4) == BLACK

    def test_odd_is_white(self):
        assert alternate(1) == WHITE
        assert alternate(7) == WHITE


class TestSplitRows:
    def test_exact_fit(self):
        assert split_rows([CYAN] * 4, 2, 2) == [[CYAN, CYAN], [CYAN, CYAN]]

    def test_short_row_padded_with_black(self):
        rows = split_rows([CYAN] * 5, 2, 4)
        assert rows == [[CYAN, CYAN], [CYAN, CYAN], [CYAN, BLACK], []]

    def test_rows_after_exhaustion_are_empty(self):
        assert split_rows([CYAN] * 2, 2, 3) == [[CYAN, CYAN], [], []]

    def test_empty_stream(self):
        assert split_rows([], 3, 2) == [[], []]

    def test_excess_left_unconsumed(self):
        stream = iter([CYAN, CYAN, YELLOW])
        assert split_rows(stream, 2, 1) == [[CYAN, CYAN]]
        assert next(stream) == YELLOW

    def test_zero_width(self):
        assert split_rows([CYAN], 0, 2) == [[], []]


class TestLayoutFrame:
    def test_empty_zero_layout_is_2x2_black(self):
        grid = layout([], 0, 0)
        assert (grid.width, grid.height) == (2, 2)
        assert grid.rows() == [[BLACK, BLACK], [BLACK, BLACK]]

    def test_dimensions(self):
        grid = layout([], 5, 3)
        assert grid.width == 7
        assert grid.height == 5

    def test_finder_border(self):
        grid = layout(encode(b"hello world"), 6, 5)
        for c in range(grid.width):
            assert grid.get(0, c) == BLACK
            assert grid.get(grid.height - 1, c) == BLACK
        for r in range(grid.height):
            assert grid.get(r, 0) == BLACK
            assert grid.get(r, grid.width - 1) == BLACK

    def test_timing_pattern_start(self):
        grid = layout(encode(b"foo"), 5, 4)
        assert grid.get(1, 0) == BLACK
        assert grid.get(1, 1) == WHITE

    def test_timing_row_and_column(self):
        grid = layout([], 5, 5)
        assert [grid.get(1, c) for c in range(7)] == [
            BLACK, WHITE, BLACK, WHITE, BLACK, WHITE, BLACK,
        ]  # fmt: skip
        assert [grid.get(r, 1) for r in range(7)] == [
            BLACK, WHITE, BLACK, WHITE, BLACK, WHITE, BLACK,
        ]  # fmt: skip

    def test_width_one_has_no_data_columns(self):
        grid = layout([CYAN, CYAN], 1, 3)
        assert grid.width == 3
        assert CYAN not in [color for row in grid.rows() for color in row]

    def test_negative_dimensions_raise(self):
        with pytest.raises(ValueError, match="non-negative"):
            layout([], -1, 2)
        with pytest.raises(ValueError, match="non-negative"):
            layout([], 2, -1)


class TestLayoutData:
    def test_data_row_major_from_offset_two(self):
        # 10 colors into a 4x3 data block
        grid = layout(encode(b"foo"), 5, 4)
        assert [grid.get(2, c) for c in range(2, 6)] == [ORANGE, YELLOW, CYAN, VIOLET]
        assert [grid.get(3, c) for c in range(2, 6)] == [BLACK, GREEN, GREEN, BLACK]

    def test_partial_row_padded_with_black(self):
        grid = layout(encode(b"foo"), 5, 4)
        # terminator black, white, then padding
        assert [grid.get(4, c) for c in range(2, 6)] == [BLACK, WHITE, BLACK, BLACK]

    def test_rows_after_stream_filled_white(self):
        grid = layout([CYAN, CYAN], 3, 4)
        assert [grid.get(2, c) for c in (2, 3)] == [CYAN, CYAN]
        assert [grid.get(3, c) for c in (2, 3)] == [WHITE, WHITE]
        assert [grid.get(4, c) for c in (2, 3)] == [WHITE, WHITE]
        assert grid.get(3, 4) == BLACK

    def test_excess_colors_dropped(self):
        grid = layout([CYAN] * 100, 3, 3)
        assert (grid.width, grid.height) == (5, 5)
        data = [grid.get(r, c) for r in (2, 3) for c in (2, 3)]
        assert data == [CYAN] * 4

    def test_full_block_leaves_next_group_unread(self):
        # 2x4 data block holds exactly the first group of eight colors
        data = RecordingBytes([0] * 9)
        stream = encode(data)
        layout(stream, 3, 5)
        assert stream.position == 3
        assert len(data.reads) == 1

    def test_consumes_lazy_stream(self):
        stream = encode(bytes(300))
        layout(stream, 4, 4)
        assert not stream.exhausted


class TestRasterGridGet:
    def test_row_equal_to_height_raises(self):
        grid = layout([], 3, 2)
        with pytest.raises(OutOfBoundsError) as exc_info:
            grid.get(grid.height, 0)
        err = exc_info.value
        assert (err.axis, err.index, err.bound) == ("row", 4, 4)
        assert "row index out of bounds" in str(err)
        assert "height is 4" in str(err)

    def test_col_equal_to_width_raises(self):
        grid = layout([], 3, 2)
        with pytest.raises(OutOfBoundsError, match="col index out of bounds.*width is 5"):
            grid.get(0, grid.width)

    def test_negative_indices_raise(self):
        grid = layout([], 0, 0)
        with pytest.raises(OutOfBoundsError, match="non-negative row"):
            grid.get(-1, 0)
        with pytest.raises(OutOfBoundsError, match="non-negative col"):
            grid.get(0, -1)

    def test_is_index_error(self):
        grid = layout([], 0, 0)
        with pytest.raises(IndexError):
            grid.get(2, 2)

    def test_ragged_backing_data_reads_white(self):
        grid = RasterGrid(3, 2, [[BLACK]])
        assert grid.get(0, 0) == BLACK
        assert grid.get(0, 2) == WHITE
        assert grid.get(1, 0) == WHITE

    def test_dimensions_are_read_only(self):
        grid = layout([], 3, 2)
        with pytest.raises(AttributeError):
            grid.width = 10
        with pytest.raises(AttributeError):
            grid.height = 10
        with pytest.raises(OutOfBoundsError):
            grid.get(0, 5)

    def test_grid_is_not_shared_with_input(self):
        pixels = [[BLACK, BLACK]]
        grid = RasterGrid(2, 1, pixels)
        pixels[0][0] = WHITE
        assert grid.get(0, 0) == BLACK


class TestToCodes:
    def test_shape_and_values(self):
        codes = layout([CYAN], 2, 2).to_codes()
        assert codes.shape == (4, 4)
        assert codes.dtype == np.uint8
        assert codes[0, 0] == BLACK.code
        assert codes[1, 1] == WHITE.code
        assert codes[2, 2] == CYAN.code


class TestCapacity:
    def test_values(self):
        assert capacity(0, 0) == 0
        assert capacity(1, 5) == 0
        assert capacity(5, 4) == 12

    def test_fit_dimensions_holds_stream(self):
        for count in [1, 2, 5, 9, 10, 17, 100, 1001]:
            width, height = fit_dimensions(count)
            assert capacity(width, height) >= count
            assert abs(width - height) <= 1

    def test_fit_dimensions_empty(self):
        assert fit_dimensions(0) == (0, 0)

    def test_fitted_layout_holds_full_stream(self):
        data = b"The quick brown fox"
        width, height = fit_dimensions(encoded_length(len(data)))
        grid = layout(encode(data), width, height)
        cells = [grid.get(r, c) for r in range(2, grid.height - 1) for c in range(2, grid.width - 1)]
        assert cells[: encoded_length(len(data))] == list(encode(data))
