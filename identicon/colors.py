"""Color resolution for identicons.

Colors are selected from the last four bytes of the digest:

- bits 248-251: primary color index (16-entry vivid palette)
- bits 244-247: secondary color index (16-entry intense palette)
- bits 252-253: background variant, reduced mod 3
- bit 255: palette flag

Two color models share this layout and differ only in the primary color:

- ``classic``: palette flag set -> vivid palette; unset -> a procedural
  soft color built from a hue/saturation/lightness triple read from
  bytes 28-31 (saturation clamped to 45-65%, lightness to 55-75%).
- ``palette``: always the vivid palette.

The secondary color is always a palette lookup. Digests shorter than
32 bytes use fixed defaults (primary 0, secondary 1, background 0,
palette flag set) so both models agree on them.
"""

from __future__ import annotations

import colorsys
from abc import ABC, abstractmethod
from dataclasses import dataclass

import structlog

from .bits import (
    BACKGROUND_BITS,
    DIGEST_BYTES,
    HUE_HIGH_BYTE,
    HUE_LOW_BYTE,
    LIGHTNESS_BYTE,
    PALETTE_FLAG_BIT,
    PRIMARY_INDEX_BITS,
    SATURATION_BYTE,
    SECONDARY_INDEX_BITS,
    get_bit,
    get_byte,
    read_bits,
)
from .palettes import INTENSE, RGBA, TRANSPARENT, VIVID, background_table

logger = structlog.get_logger(__name__)

BACKGROUND_VARIANTS = 3

# Procedural color bands
HUE_FIELD_MAX = 0xFFF
SATURATION_MAX = 65
LIGHTNESS_MAX = 75
HSL_BAND = 20


@dataclass(frozen=True)
class ColorSelection:
    """Raw color selectors read from a digest.

    Attributes:
        primary_index: Index into the vivid palette (0-15).
        secondary_index: Index into the intense palette (0-15).
        background_index: Background variant (0-2).
        palette_flag: True if the classic model uses the vivid palette
            for the primary color instead of the procedural color.
    """

    primary_index: int
    secondary_index: int
    background_index: int
    palette_flag: bool


DEFAULT_SELECTION = ColorSelection(
    primary_index=0,
    secondary_index=1,
    background_index=0,
    palette_flag=True,
)


@dataclass(frozen=True)
class ResolvedColors:
    """Final colors for one identicon.

    Attributes:
        primary: Primary layer color.
        secondary: Secondary layer color.
        background: Theme background color.
        background_index: Background variant the color was taken from.
    """

    primary: RGBA
    secondary: RGBA
    background: RGBA
    background_index: int

    def palette(self, transparent: bool = False) -> list[RGBA]:
        """Return the 4-entry indexed palette.

        Order is background, primary, secondary, transparent. With
        ``transparent`` the background slot holds the transparent entry.
        """
        background = TRANSPARENT if transparent else self.background
        return [background, self.primary, self.secondary, TRANSPARENT]


def select_colors(digest: bytes) -> ColorSelection:
    """Read the color selectors from a digest.

    Args:
        digest: Input digest.

    Returns:
        ColorSelection, or DEFAULT_SELECTION for digests shorter than
        32 bytes.
    """
    if len(digest) < DIGEST_BYTES:
        return DEFAULT_SELECTION

    return ColorSelection(
        primary_index=read_bits(digest, *PRIMARY_INDEX_BITS) % len(VIVID),
        secondary_index=read_bits(digest, *SECONDARY_INDEX_BITS) % len(INTENSE),
        background_index=read_bits(digest, *BACKGROUND_BITS) % BACKGROUND_VARIANTS,
        palette_flag=get_bit(digest, PALETTE_FLAG_BIT),
    )


def map_range(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Linearly remap ``value`` from [in_min, in_max] to [out_min, out_max]."""
    return out_min + (value - in_min) * (out_max - out_min) / (in_max - in_min)


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> tuple[int, int, int]:
    """Convert HSL to an 8-bit RGB triplet.

    Args:
        hue: Hue in degrees [0, 360).
        saturation: Saturation in percent [0, 100].
        lightness: Lightness in percent [0, 100].

    Returns:
        (r, g, b) with each channel rounded to 0-255.
    """
    r, g, b = colorsys.hls_to_rgb(hue / 360, lightness / 100, saturation / 100)
    return (round(r * 255), round(g * 255), round(b * 255))


def procedural_hsl(digest: bytes) -> tuple[float, float, float]:
    """Read the (hue, saturation, lightness) triple from bytes 28-31."""
    hue_field = ((get_byte(digest, HUE_HIGH_BYTE) & 0x0F) << 8) | get_byte(digest, HUE_LOW_BYTE)
    hue = map_range(hue_field, 0, HUE_FIELD_MAX, 0, 360)
    saturation = SATURATION_MAX - map_range(get_byte(digest, SATURATION_BYTE), 0, 255, 0, HSL_BAND)
    lightness = LIGHTNESS_MAX - map_range(get_byte(digest, LIGHTNESS_BYTE), 0, 255, 0, HSL_BAND)
    return hue, saturation, lightness


def procedural_color(digest: bytes) -> RGBA:
    """Soft primary color derived from the digest's HSL fields."""
    r, g, b = hsl_to_rgb(*procedural_hsl(digest))
    return (r, g, b, 255)


class ColorModel(ABC):
    """Strategy for turning a digest into resolved colors.

    Subclasses choose the primary color; the secondary and background
    colors are shared by every model.
    """

    name = ""

    @abstractmethod
    def primary(self, digest: bytes, selection: ColorSelection) -> RGBA:
        """Return the primary layer color for a digest."""

    def resolve(self, digest: bytes, dark: bool = False) -> ResolvedColors:
        """Resolve the colors for ``digest``.

        Args:
            digest: Input digest.
            dark: Use the dark background table instead of the light one.

        Returns:
            ResolvedColors for the digest and theme.
        """
        selection = select_colors(digest)
        colors = ResolvedColors(
            primary=self.primary(digest, selection),
            secondary=INTENSE[selection.secondary_index],
            background=background_table(dark)[selection.background_index],
            background_index=selection.background_index,
        )
        logger.debug(
            "colors_resolved",
            model=self.name,
            primary_index=selection.primary_index,
            secondary_index=selection.secondary_index,
            background_index=selection.background_index,
            palette_flag=selection.palette_flag,
            dark=dark,
        )
        return colors


class ClassicColorModel(ColorModel):
    """Full-color model: procedural or vivid primary, chosen by bit 255."""

    name = "classic"

    def primary(self, digest: bytes, selection: ColorSelection) -> RGBA:
        if selection.palette_flag:
            return VIVID[selection.primary_index]
        return procedural_color(digest)


class PaletteColorModel(ColorModel):
    """Reduced model: primary always from the vivid palette."""

    name = "palette"

    def primary(self, digest: bytes, selection: ColorSelection) -> RGBA:
        return VIVID[selection.primary_index]


COLOR_MODELS: dict[str, ColorModel] = {
    model.name: model for model in (ClassicColorModel(), PaletteColorModel())
}


def select_color_model(name: str) -> ColorModel:
    """Look up a color model by name.

    Raises:
        ValueError: If ``name`` is not a known model.
    """
    if name not in COLOR_MODELS:
        valid = ", ".join(COLOR_MODELS.keys())
        raise ValueError(f"Unknown color model '{name}'. Valid models: {valid}")
    return COLOR_MODELS[name]
