"""Symmetric 5x5 stencil generation.

An identicon is drawn from two boolean layers. Each layer is read from
15 consecutive digest bits covering the left half of the grid (columns
0-2, row-major); columns 3 and 4 mirror columns 1 and 0, so every
stencil is horizontally symmetric by construction.
"""

from __future__ import annotations

from dataclasses import dataclass

from .bits import HALF_COLUMNS, PRIMARY_PATTERN_BIT, SECONDARY_PATTERN_BIT, SPRITE_SIZE, get_bit

Grid = tuple[tuple[bool, ...], ...]


@dataclass(frozen=True)
class Stencil:
    """Two-layer pixel pattern before color is applied.

    Attributes:
        primary: 5x5 grid, drawn on top.
        secondary: 5x5 grid, drawn beneath the primary layer.
    """

    primary: Grid
    secondary: Grid

    @property
    def is_symmetric(self) -> bool:
        """True if both layers mirror around the center column."""
        return all(
            row[col] == row[SPRITE_SIZE - 1 - col]
            for layer in (self.primary, self.secondary)
            for row in layer
            for col in range(SPRITE_SIZE)
        )


def _read_layer(digest: bytes, first_bit: int) -> Grid:
    rows = []
    bit_index = first_bit
    for _row in range(SPRITE_SIZE):
        cells = [False] * SPRITE_SIZE
        for col in range(HALF_COLUMNS):
            paint = get_bit(digest, bit_index)
            bit_index += 1
            cells[col] = paint
            cells[SPRITE_SIZE - 1 - col] = paint
        rows.append(tuple(cells))
    return tuple(rows)


def generate_stencil(digest: bytes) -> Stencil:
    """Derive the primary and secondary layers from digest bits 0-29.

    Args:
        digest: Input digest. Missing bits read as unset.

    Returns:
        Stencil with mirror-symmetric layers.
    """
    return Stencil(
        primary=_read_layer(digest, PRIMARY_PATTERN_BIT),
        secondary=_read_layer(digest, SECONDARY_PATTERN_BIT),
    )
