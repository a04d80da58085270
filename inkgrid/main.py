"""inkgrid microservice -- FastAPI application.

Endpoints:
    POST /encode         -- Encode hex data to PNG image
    POST /encode/svg     -- Encode hex data to SVG string
    POST /encode/colors  -- Encode hex data to a grid of color names
    GET  /health         -- Health check
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

from .bits import hex_to_bytes
from .codec import encode, encoded_length
from .raster import RasterGrid, capacity, fit_dimensions, layout
from .renderer import DEFAULT_MODULE_SIZE, render_png, render_svg

structlog.configure(
    processors=[
        structlog.dev.ConsoleRenderer(),
    ],
)

logger = structlog.get_logger(__name__)

SERVICE_NAME = "inkgrid"
SERVICE_VERSION = "0.1.0"

# Maximum data size in bytes
MAX_DATA_BYTES = 4096

app = FastAPI(
    title=SERVICE_NAME,
    description="Printable eight-color CMY grid encoder",
    version=SERVICE_VERSION,
)


# --------------------------------------------------------------------------
# Request / Response models
# --------------------------------------------------------------------------


class EncodeRequest(BaseModel):
    """Request body for the /encode endpoints."""

    data_hex: str = Field(
        ...,
        description="Hex-encoded data to encode (may be empty)",
        examples=["666f6f"],
    )
    width: int | None = Field(
        default=None,
        ge=0,
        le=1024,
        description="Layout width; the grid is width + 2 modules wide. Fitted if omitted.",
    )
    height: int | None = Field(
        default=None,
        ge=0,
        le=1024,
        description="Layout height; the grid is height + 2 modules tall. Fitted if omitted.",
    )
    module_size: int = Field(
        default=DEFAULT_MODULE_SIZE,
        ge=1,
        le=64,
        description="Module edge length in pixels",
    )
    colors: dict[str, str] | None = Field(
        default=None,
        description="Optional color name -> hex fill overrides, e.g. {'violet': '#5B2C9F'}",
    )


class ColorGridResponse(BaseModel):
    """Response body for /encode/colors."""

    width: int
    height: int
    colors: list[list[str]]


class HealthResponse(BaseModel):
    """Response body for /health."""

    status: str
    service: str
    version: str


def _build_grid(request: EncodeRequest) -> RasterGrid:
    """Encode the request payload and lay it out.

    Raises:
        ValueError: If the payload is invalid or does not fit the layout.
    """
    data = hex_to_bytes(request.data_hex)
    if len(data) > MAX_DATA_BYTES:
        raise ValueError(f"Data too large: {len(data)} bytes (max {MAX_DATA_BYTES})")

    color_count = encoded_length(len(data))
    if request.width is None and request.height is None:
        width, height = fit_dimensions(color_count)
    elif request.width is None or request.height is None:
        raise ValueError("width and height must be given together")
    else:
        width, height = request.width, request.height
        if capacity(width, height) < color_count:
            raise ValueError(
                f"Layout {width}x{height} holds {capacity(width, height)} modules, "
                f"{color_count} needed"
            )

    return layout(encode(data), width, height)


# --------------------------------------------------------------------------
# Endpoints
# --------------------------------------------------------------------------


@app.post(
    "/encode",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "PNG-encoded grid"},
        422: {"description": "Invalid input"},
    },
)
async def encode_png(request: EncodeRequest) -> Response:
    """Encode hex data into an inkgrid PNG image."""
    try:
        grid = _build_grid(request)
        png_bytes = render_png(grid, request.module_size, request.colors)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("encode_png_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Encoding failed")

    return Response(content=png_bytes, media_type="image/png")


@app.post(
    "/encode/svg",
    response_class=Response,
    responses={
        200: {
            "content": {"image/svg+xml": {}},
            "description": "SVG-encoded grid",
        },
        422: {"description": "Invalid input"},
    },
)
async def encode_svg_endpoint(request: EncodeRequest) -> Response:
    """Encode hex data into an inkgrid SVG image."""
    try:
        grid = _build_grid(request)
        svg_content = render_svg(grid, request.module_size, request.colors)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("encode_svg_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Encoding failed")

    return Response(content=svg_content, media_type="image/svg+xml")


@app.post("/encode/colors", response_model=ColorGridResponse)
async def encode_colors(request: EncodeRequest) -> ColorGridResponse:
    """Encode hex data and return the laid-out grid as color names."""
    try:
        grid = _build_grid(request)
        rows = [[color.name for color in row] for row in grid.rows()]
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("encode_colors_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Encoding failed")

    return ColorGridResponse(width=grid.width, height=grid.height, colors=rows)


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for Docker and load balancer probes."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
    )
