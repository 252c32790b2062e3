"""Fixed color tables for identicons.

These values are part of the output format: changing any entry changes
the image produced for every digest that selects it.
"""

from __future__ import annotations

RGBA = tuple[int, int, int, int]


def hex_to_rgba(hex_color: str) -> RGBA:
    """Convert a hex color string ("#rrggbb" or "rrggbb") to an opaque RGBA tuple."""
    h = hex_color.lstrip("#")
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16), 255)


def rgba_to_hex(color: RGBA) -> str:
    """Convert an RGBA tuple to "#rrggbb", dropping alpha."""
    r, g, b = color[:3]
    return f"#{r:02x}{g:02x}{b:02x}"


# Primary colors (vivid)
VIVID = [
    hex_to_rgba(c)
    for c in (
        "00bf93",  # turquoise
        "2dcc70",  # mint
        "42e453",  # green
        "f1c40f",  # yellow-orange
        "e67f22",  # brown
        "ff944e",  # orange
        "e84c3d",  # red
        "3598db",  # blue
        "9a59b5",  # purple
        "ef3e96",  # magenta
        "df21b9",  # violet
        "7dc2d2",  # light blue
        "16a086",  # turquoise, intense
        "27ae61",  # mint, intense
        "24c333",  # green, intense
        "1cabbb",  # light blue, intense
    )
]

# Secondary colors (intense / neutral)
INTENSE = [
    hex_to_rgba(c)
    for c in (
        "34495e",  # dark blue
        "95a5a5",  # grey
        "d25400",  # brown
        "c1392b",  # red
        "297fb8",  # blue
        "8d44ad",  # purple
        "be127e",  # violet
        "e52383",  # magenta
        "27ae61",  # mint
        "24c333",  # green
        "d9d921",  # yellow
        "f39c11",  # yellow-orange
        "ff5500",  # orange
        "1cabbb",  # light blue
        "232323",  # near black
        "7e8c8d",  # grey
    )
]

LIGHT_BACKGROUNDS = [hex_to_rgba(c) for c in ("ffffff", "f3f5f7", "ecf0f1")]
DARK_BACKGROUNDS = [hex_to_rgba(c) for c in ("1e1e1e", "2d3e50", "393939")]

TRANSPARENT: RGBA = (0, 0, 0, 0)


def background_table(dark: bool) -> list[RGBA]:
    """Return the 3-entry background table for the given theme."""
    return DARK_BACKGROUNDS if dark else LIGHT_BACKGROUNDS
