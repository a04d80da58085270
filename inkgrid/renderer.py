"""SVG and PNG rendering for inkgrid rasters.

Renders each grid module as a solid square of ``module_size`` pixels.

Color assignment:
- white: no ink (paper)
- black: full ink
- the remaining six colors: the named CMY combination, shown on screen
  as the additive complement of the inks (see ``Color.rgb``)

A ``colors`` mapping of color name -> hex string overrides the fill for
individual palette entries, e.g. to match a particular printer's
rendition of "violet".
"""

from __future__ import annotations

import io

import numpy as np
import structlog
from PIL import Image

from .colors import PALETTE, color_by_name
from .raster import RasterGrid

logger = structlog.get_logger(__name__)

DEFAULT_MODULE_SIZE = 10


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert a hex color string to (r, g, b) tuple."""
    h = hex_color.lstrip("#")
    if len(h) != 6:
        raise ValueError(f"Invalid hex color '{hex_color}', expected #RRGGBB")
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def _resolve_palette(colors: dict[str, str] | None) -> list[str]:
    """Hex fill for each 3-bit code, with overrides applied."""
    fills = [color.hex for color in PALETTE]
    for name, hex_color in (colors or {}).items():
        _hex_to_rgb(hex_color)
        fills[color_by_name(name).code] = hex_color.upper()
    return fills


def _check_module_size(module_size: int) -> None:
    if module_size < 1:
        raise ValueError(f"module_size must be at least 1, got {module_size}")


def render_svg(
    grid: RasterGrid,
    module_size: int = DEFAULT_MODULE_SIZE,
    colors: dict[str, str] | None = None,
) -> str:
    """Render a raster grid as an SVG string.

    Args:
        grid: Laid-out raster grid.
        module_size: Edge length of one module in pixels.
        colors: Optional color name -> hex fill overrides.

    Returns:
        Complete SVG document as a string.

    Raises:
        ValueError: If module_size < 1 or an override is invalid.
    """
    _check_module_size(module_size)
    fills = _resolve_palette(colors)
    width = grid.width * module_size
    height = grid.height * module_size

    svg_parts: list[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'viewBox="0 0 {width} {height}" '
        f'width="{width}" height="{height}" shape-rendering="crispEdges">',
    ]

    # Paper background; white modules are left unpainted
    svg_parts.append(f'  <rect width="{width}" height="{height}" fill="{fills[0]}"/>')

    for r, row in enumerate(grid.rows()):
        for c, color in enumerate(row):
            if color.code == 0:
                continue
            svg_parts.append(
                f'  <rect x="{c * module_size}" y="{r * module_size}" '
                f'width="{module_size}" height="{module_size}" '
                f'fill="{fills[color.code]}"/>'
            )

    svg_parts.append("</svg>")
    svg_content = "\n".join(svg_parts)

    logger.debug(
        "svg_rendered",
        modules=grid.width * grid.height,
        width=width,
        height=height,
    )

    return svg_content


def render_png(
    grid: RasterGrid,
    module_size: int = DEFAULT_MODULE_SIZE,
    colors: dict[str, str] | None = None,
) -> bytes:
    """Render a raster grid as a PNG image.

    Builds an RGB lookup from the palette, indexes it with the grid's
    color codes, and scales each module up to module_size pixels.

    Args:
        grid: Laid-out raster grid.
        module_size: Edge length of one module in pixels.
        colors: Optional color name -> hex fill overrides.

    Returns:
        PNG image bytes.

    Raises:
        ValueError: If module_size < 1 or an override is invalid.
    """
    _check_module_size(module_size)
    lookup = np.array([_hex_to_rgb(fill) for fill in _resolve_palette(colors)], dtype=np.uint8)

    rgb = lookup[grid.to_codes()]
    rgb = np.repeat(np.repeat(rgb, module_size, axis=0), module_size, axis=1)

    buffer = io.BytesIO()
    Image.fromarray(rgb).save(buffer, format="PNG")
    png_bytes = buffer.getvalue()

    logger.debug("png_rendered", width=rgb.shape[1], height=rgb.shape[0], bytes=len(png_bytes))
    return png_bytes
