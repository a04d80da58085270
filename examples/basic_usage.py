#!/usr/bin/env python3
"""Basic usage example for inkgrid.

Demonstrates encoding bytes into colors, laying them out in a framed
grid, and rendering the grid.

Usage:
    python examples/basic_usage.py
"""

import os
import sys

# Add parent directory to path for direct script execution
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from inkgrid.codec import encode, encoded_length, padding_from_indicator
from inkgrid.raster import fit_dimensions, layout
from inkgrid.renderer import render_png, render_svg


def example_color_stream():
    """Encode a few bytes and inspect the color stream."""
    print("=" * 60)
    print("Example 1: Bytes to Colors")
    print("=" * 60)

    data = b"foo!"
    colors = list(encode(data))
    print(f"  Input data:  {data!r} ({len(data)} bytes)")
    print(f"  Colors:      {' '.join(c.name for c in colors)}")
    print(f"  Padding:     {padding_from_indicator(colors[-1])} bits")
    print()


def example_grid():
    """Lay a stream out in a fitted grid and print it."""
    print("=" * 60)
    print("Example 2: Framed Grid")
    print("=" * 60)

    data = b"Hello, inkgrid"
    width, height = fit_dimensions(encoded_length(len(data)))
    grid = layout(encode(data), width, height)
    print(f"  Layout:      {width}x{height} -> grid {grid.width}x{grid.height}")

    for row in grid.rows():
        print("  " + " ".join(color.name[0].upper() for color in row))
    print()


def example_render():
    """Render a grid to SVG and PNG files."""
    print("=" * 60)
    print("Example 3: Rendering")
    print("=" * 60)

    data = os.urandom(96)
    width, height = fit_dimensions(encoded_length(len(data)))
    grid = layout(encode(data), width, height)

    svg = render_svg(grid, module_size=8)
    png_bytes = render_png(grid, module_size=8)

    with open("inkgrid_example.svg", "w") as f:
        f.write(svg)
    with open("inkgrid_example.png", "wb") as f:
        f.write(png_bytes)

    print(f"  SVG size:    {len(svg)} chars -> inkgrid_example.svg")
    print(f"  PNG size:    {len(png_bytes)} bytes -> inkgrid_example.png")
    print()


if __name__ == "__main__":
    example_color_stream()
    example_grid()
    example_render()
