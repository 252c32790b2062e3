#!/usr/bin/env python3
"""Basic usage example for identicon.

Renders the identicon for a password hash, shows how the two color
models differ, and produces a Face header.

Usage:
    python examples/basic_usage.py
"""

import hashlib
import os
import sys

# Add parent directory to path for direct script execution
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from identicon.colors import select_color_model, select_colors
from identicon.face import decode_face_header, render_face
from identicon.palettes import rgba_to_hex
from identicon.pattern import generate_stencil
from identicon.renderer import render_png


def example_stencil():
    """Print the 5x5 stencil for a digest."""
    print("=" * 60)
    print("Example 1: Stencil")
    print("=" * 60)

    digest = hashlib.sha256(b"mySecret123").digest()
    stencil = generate_stencil(digest)
    for primary_row, secondary_row in zip(stencil.primary, stencil.secondary):
        cells = []
        for p, s in zip(primary_row, secondary_row):
            cells.append("#" if p else ("+" if s else "."))
        print("  " + " ".join(cells))
    print()


def example_color_models():
    """Compare the classic and palette color models."""
    print("=" * 60)
    print("Example 2: Color Models")
    print("=" * 60)

    digest = hashlib.sha256(b"mySecret123").digest()
    selection = select_colors(digest)
    print(f"  Selection:   {selection}")

    for name in ("classic", "palette"):
        colors = select_color_model(name).resolve(digest)
        print(
            f"  {name:8s}  primary={rgba_to_hex(colors.primary)} "
            f"secondary={rgba_to_hex(colors.secondary)} "
            f"background={rgba_to_hex(colors.background)}"
        )

    truecolor = render_png(digest)
    indexed = render_png(digest, indexed=True)
    print(f"  RGBA PNG:    {len(truecolor)} bytes")
    print(f"  Indexed PNG: {len(indexed)} bytes")
    print()


def example_face_header():
    """Produce a Face header and decode it back."""
    print("=" * 60)
    print("Example 3: Face Header")
    print("=" * 60)

    digest = hashlib.sha256(b"mySecret123").digest()
    header = render_face(digest)
    print(header, end="")
    print(f"  Header chars: {len(header)}")
    print(f"  PNG bytes:    {len(decode_face_header(header))}")
    print()


if __name__ == "__main__":
    example_stencil()
    example_color_models()
    example_face_header()
