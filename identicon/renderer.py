"""Raster compositing and PNG encoding for identicons.

The stencil is first composited into a layer of palette indices:

- 0: background
- 1: primary
- 2: secondary
- 3: transparent (reserved palette slot, never painted)

The canvas is divided into 8 cells per edge; the 5x5 stencil is
centered with ``margin = (size - 5 * scale) // 2``. Secondary cells are
painted first and primary cells on top, so primary wins on overlap.

The index layer is then either expanded into a truecolor RGBA image or
wrapped as an indexed ("P" mode) image carrying the 4-entry palette.
Indexed images encode to much smaller PNGs.
"""

from __future__ import annotations

import io

import numpy as np
import structlog
from PIL import Image

from .bits import SPRITE_SIZE
from .colors import ResolvedColors, select_color_model
from .pattern import Stencil, generate_stencil

logger = structlog.get_logger(__name__)

# Canonical canvas sizes
DISPLAY_SIZE = 256
FACE_SIZE = 48

GRID_CELLS = 8  # canvas edge in stencil cells, including margins
DEFAULT_COMPRESS_LEVEL = 9

BACKGROUND_INDEX = 0
PRIMARY_INDEX = 1
SECONDARY_INDEX = 2


def pixel_geometry(size: int) -> tuple[int, int]:
    """Return (pixel_scale, margin) for a square canvas of ``size`` pixels.

    Raises:
        ValueError: If size is not a positive integer.
    """
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")
    scale = size // GRID_CELLS
    margin = (size - scale * SPRITE_SIZE) // 2
    return scale, margin


def composite(stencil: Stencil, size: int) -> np.ndarray:
    """Composite a stencil into a ``size`` x ``size`` array of palette indices.

    Args:
        stencil: Two-layer pixel pattern.
        size: Canvas edge in pixels.

    Returns:
        uint8 array indexed [y, x] holding BACKGROUND_INDEX,
        PRIMARY_INDEX or SECONDARY_INDEX.
    """
    scale, margin = pixel_geometry(size)
    layer = np.full((size, size), BACKGROUND_INDEX, dtype=np.uint8)

    for index, grid in ((SECONDARY_INDEX, stencil.secondary), (PRIMARY_INDEX, stencil.primary)):
        for row in range(SPRITE_SIZE):
            for col in range(SPRITE_SIZE):
                if grid[row][col]:
                    y = row * scale + margin
                    x = col * scale + margin
                    layer[y : y + scale, x : x + scale] = index

    return layer


def compose(
    stencil: Stencil,
    colors: ResolvedColors,
    size: int,
    transparent: bool = False,
    indexed: bool = False,
) -> Image.Image:
    """Paint a stencil with resolved colors.

    Args:
        stencil: Two-layer pixel pattern.
        colors: Resolved colors.
        size: Canvas edge in pixels.
        transparent: Put the transparent entry in the background slot.
        indexed: Return a "P" mode image instead of "RGBA".

    Returns:
        PIL image of ``size`` x ``size`` pixels.
    """
    layer = composite(stencil, size)
    palette = colors.palette(transparent=transparent)

    if indexed:
        image = Image.frombytes("P", (size, size), layer.tobytes())
        image.putpalette(bytes(channel for color in palette for channel in color[:3]))
        image.info["transparency"] = bytes(color[3] for color in palette)
        return image

    lookup = np.array(palette, dtype=np.uint8)
    return Image.fromarray(lookup[layer])


def render_image(
    digest: bytes,
    size: int = DISPLAY_SIZE,
    model: str = "classic",
    dark: bool = False,
    transparent: bool = False,
    indexed: bool = False,
) -> Image.Image:
    """Render the identicon for a digest.

    Args:
        digest: Input digest (canonically 32 bytes).
        size: Canvas edge in pixels.
        model: Color model name ("classic" or "palette").
        dark: Use the dark background table.
        transparent: Transparent background.
        indexed: Produce a 4-color indexed image.

    Returns:
        PIL image.

    Raises:
        ValueError: If size is not positive or model is unknown.
    """
    color_model = select_color_model(model)
    stencil = generate_stencil(digest)
    colors = color_model.resolve(digest, dark=dark)
    image = compose(stencil, colors, size, transparent=transparent, indexed=indexed)

    logger.debug(
        "identicon_rendered",
        size=size,
        model=model,
        dark=dark,
        transparent=transparent,
        indexed=indexed,
    )
    return image


def encode_png(image: Image.Image, compress_level: int = DEFAULT_COMPRESS_LEVEL) -> bytes:
    """Encode a PIL image as PNG bytes."""
    buf = io.BytesIO()
    image.save(buf, format="PNG", compress_level=compress_level)
    return buf.getvalue()


def render_png(
    digest: bytes,
    size: int = DISPLAY_SIZE,
    model: str = "classic",
    dark: bool = False,
    transparent: bool = False,
    indexed: bool = False,
    compress_level: int = DEFAULT_COMPRESS_LEVEL,
) -> bytes:
    """Render the identicon for a digest as PNG bytes.

    Takes the same options as render_image(). Indexed images are written
    with a 4-entry PLTE chunk and a tRNS chunk carrying palette alpha.
    """
    image = render_image(
        digest,
        size=size,
        model=model,
        dark=dark,
        transparent=transparent,
        indexed=indexed,
    )
    png_bytes = encode_png(image, compress_level=compress_level)

    logger.debug("png_rendered", size=size, indexed=indexed, bytes=len(png_bytes))
    return png_bytes
