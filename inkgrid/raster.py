"""Raster layout for inkgrid color streams.

Wraps a color stream into a rectangular grid framed with finder and
timing patterns:

- The finder pattern is a solid one-module black border around the
  grid, which lets image-recognition software find the boundaries of
  the contents.
- The timing pattern is an alternating strip of black and white modules
  just inside the border along the top and left edges, which lets
  imaging software determine the number and placement of modules. The
  alternation is counted from the far upper left corner, so the first
  module inside the corner is white.

For a requested ``width`` x ``height`` the grid is ``width + 2`` modules
wide and ``height + 2`` tall:

    B B B B B B
    B W B W B B
    B B d d d B
    B W d d d B
    B B B B B B

leaving ``(width - 1) x (height - 1)`` data modules. It is up to the
caller to make sure the stream fits; excess colors are dropped.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sized

import numpy as np
import structlog

from .colors import BLACK, WHITE, Color

logger = structlog.get_logger(__name__)

# Pads a data row that the stream ran out partway through
ROW_PAD_COLOR = BLACK

# Data modules after the stream is exhausted, and reads of missing backing data
FILL_COLOR = WHITE


class OutOfBoundsError(IndexError):
    """Raised when a grid read falls outside the grid.

    Attributes:
        axis: "row" or "col".
        index: The offending index.
        bound: Size of the grid along that axis.
    """

    def __init__(self, axis: str, index: int, bound: int):
        self.axis = axis
        self.index = index
        self.bound = bound
        if index < 0:
            detail = f"need a non-negative {axis} index"
        else:
            size = "height" if axis == "row" else "width"
            detail = f"but {size} is {bound} (valid range 0..{bound - 1})"
        super().__init__(f"{axis} index out of bounds: index is {index}, {detail}")


class RasterGrid:
    """Immutable grid of colors, addressed by zero-based (row, col)."""

    def __init__(self, width: int, height: int, pixels: Iterable[Iterable[Color]]):
        self._width = width
        self._height = height
        self._pixels: tuple[tuple[Color, ...], ...] = tuple(tuple(row) for row in pixels)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def __repr__(self) -> str:
        return f"RasterGrid(width={self.width}, height={self.height})"

    def get(self, row: int, col: int) -> Color:
        """Get the color at a row/column.

        Raises:
            OutOfBoundsError: If either index falls outside the grid.
        """
        if row < 0:
            raise OutOfBoundsError("row", row, self.height)
        if col < 0:
            raise OutOfBoundsError("col", col, self.width)
        if row >= self.height:
            raise OutOfBoundsError("row", row, self.height)
        if col >= self.width:
            raise OutOfBoundsError("col", col, self.width)

        # Backing data may be ragged; missing modules read as blank
        pixels = self._pixels[row] if row < len(self._pixels) else ()
        if col < len(pixels):
            return pixels[col]
        return FILL_COLOR

    def rows(self) -> list[list[Color]]:
        """Full width x height snapshot of the grid."""
        return [[self.get(r, c) for c in range(self.width)] for r in range(self.height)]

    def to_codes(self) -> np.ndarray:
        """Grid as a (height, width) uint8 array of 3-bit color codes."""
        codes = np.zeros((self.height, self.width), dtype=np.uint8)
        for r, row in enumerate(self.rows()):
            codes[r, :] = [color.code for color in row]
        return codes


def alternate(index: int) -> Color:
    """Timing pattern color: black on even indices, white on odd."""
    return BLACK if index % 2 == 0 else WHITE


def capacity(width: int, height: int) -> int:
    """Number of data modules in a width x height layout."""
    return max(width - 1, 0) * max(height - 1, 0)


def fit_dimensions(color_count: int) -> tuple[int, int]:
    """Smallest near-square layout dimensions that hold color_count modules.

    Args:
        color_count: Number of colors to lay out.

    Returns:
        (width, height) to pass to ``layout``.
    """
    if color_count <= 0:
        return (0, 0)
    side = math.isqrt(color_count - 1) + 1  # ceil(sqrt(n))
    data_height = math.ceil(color_count / side)
    return (side + 1, data_height + 1)


def split_rows(colors: Iterable[Color], width: int, rows: int) -> list[list[Color]]:
    """Split a color stream into rows, consuming only what the rows hold.

    A row the stream runs out partway through is padded with black. Rows
    after the stream is exhausted are empty.

    Args:
        colors: Color stream (consumed left to right, top to bottom).
        width: Row length.
        rows: Number of rows.

    Returns:
        List of ``rows`` rows.
    """
    stream = iter(colors)
    result: list[list[Color]] = []
    exhausted = False

    for _ in range(rows):
        row: list[Color] = []
        while not exhausted and len(row) < width:
            color = next(stream, None)
            if color is None:
                exhausted = True
            else:
                row.append(color)
        if row and len(row) < width:
            row.extend([ROW_PAD_COLOR] * (width - len(row)))
        result.append(row)

    return result


def layout(colors: Iterable[Color], width: int, height: int) -> RasterGrid:
    """Lay a color stream out in a grid framed by finder and timing patterns.

    Args:
        colors: Color stream, e.g. from ``codec.encode``.
        width: Layout width; the grid is ``width + 2`` modules wide.
        height: Layout height; the grid is ``height + 2`` modules tall.

    Returns:
        RasterGrid of ``(width + 2) x (height + 2)`` modules.

    Raises:
        ValueError: If width or height is negative.
    """
    if width < 0 or height < 0:
        raise ValueError(f"Layout dimensions must be non-negative, got {width}x{height}")

    # Streams are never read past the data block
    if isinstance(colors, Sized) and len(colors) > capacity(width, height):
        logger.debug("layout_overflow", width=width, height=height, capacity=capacity(width, height))

    data = split_rows(colors, max(width - 1, 0), max(height - 1, 0))

    grid_width = width + 2
    grid_height = height + 2
    last_row = grid_height - 1
    last_col = grid_width - 1

    def module(r: int, c: int) -> Color:
        if r in (0, last_row) or c in (0, last_col):
            return BLACK  # finder
        if r == 1:
            return alternate(c)
        if c == 1:
            return alternate(r)
        row = data[r - 2]
        return row[c - 2] if c - 2 < len(row) else FILL_COLOR

    pixels = [[module(r, c) for c in range(grid_width)] for r in range(grid_height)]

    logger.debug(
        "layout_built",
        width=grid_width,
        height=grid_height,
        data_rows=sum(1 for row in data if row),
    )
    return RasterGrid(grid_width, grid_height, pixels)
