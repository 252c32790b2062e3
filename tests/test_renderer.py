"""Tests for identicon compositing and PNG rendering."""

import hashlib
import io

import numpy as np
import pytest
from PIL import Image

from identicon.colors import ClassicColorModel
from identicon.pattern import generate_stencil
from identicon.renderer import (
    BACKGROUND_INDEX,
    PRIMARY_INDEX,
    SECONDARY_INDEX,
    composite,
    compose,
    pixel_geometry,
    render_image,
    render_png,
)

DIGEST = hashlib.sha256(b"mySecret123").digest()

PROCEDURAL = (221, 213, 145, 255)
SECONDARY = (0x24, 0xC3, 0x33, 255)
BACKGROUND = (0xEC, 0xF0, 0xF1, 255)


def _cell_center(row, col, size=256):
    scale, margin = pixel_geometry(size)
    return (margin + col * scale + scale // 2, margin + row * scale + scale // 2)


class TestGeometry:
    def test_display_size(self):
        assert pixel_geometry(256) == (32, 48)

    def test_face_size(self):
        assert pixel_geometry(48) == (6, 9)

    def test_non_positive_size_raises(self):
        with pytest.raises(ValueError, match="size must be positive"):
            pixel_geometry(0)


class TestComposite:
    def test_layer_values(self):
        layer = composite(generate_stencil(DIGEST), 256)
        assert layer.shape == (256, 256)
        assert layer.dtype == np.uint8
        assert set(np.unique(layer)) == {BACKGROUND_INDEX, PRIMARY_INDEX, SECONDARY_INDEX}

    def test_primary_overwrites_secondary(self):
        layer = composite(generate_stencil(DIGEST), 256)
        # cell (4, 0) is set in both layers
        x, y = _cell_center(4, 0)
        assert layer[y, x] == PRIMARY_INDEX

    def test_margin_is_background(self):
        layer = composite(generate_stencil(b"\xff" * 32), 256)
        assert (layer[:48, :] == BACKGROUND_INDEX).all()
        assert (layer[48 + 160 :, :] == BACKGROUND_INDEX).all()
        assert (layer[48:208, 48:208] == PRIMARY_INDEX).all()

    def test_tiny_canvas_is_background_only(self):
        layer = composite(generate_stencil(b"\xff" * 32), 4)
        assert (layer == BACKGROUND_INDEX).all()


class TestRenderImage:
    def test_default_is_rgba_256(self):
        image = render_image(DIGEST)
        assert image.mode == "RGBA"
        assert image.size == (256, 256)

    def test_known_digest_pixels(self):
        image = render_image(DIGEST)
        assert image.getpixel((0, 0)) == BACKGROUND
        assert image.getpixel(_cell_center(0, 1)) == PROCEDURAL
        assert image.getpixel(_cell_center(0, 2)) == SECONDARY
        assert image.getpixel(_cell_center(1, 0)) == SECONDARY
        assert image.getpixel(_cell_center(2, 2)) == BACKGROUND
        assert image.getpixel(_cell_center(4, 0)) == PROCEDURAL

    def test_palette_model_pixels(self):
        image = render_image(DIGEST, model="palette")
        assert image.getpixel(_cell_center(0, 1)) == (0xEF, 0x3E, 0x96, 255)

    def test_dark_theme(self):
        image = render_image(DIGEST, dark=True)
        assert image.getpixel((0, 0)) == (0x39, 0x39, 0x39, 255)

    def test_transparent_background(self):
        image = render_image(DIGEST, transparent=True)
        assert image.getpixel((0, 0))[3] == 0
        assert image.getpixel(_cell_center(0, 1)) == PROCEDURAL

    def test_deterministic(self):
        assert render_image(DIGEST).tobytes() == render_image(DIGEST).tobytes()

    def test_mirror_symmetric_pixels(self):
        pixels = np.asarray(render_image(DIGEST))
        assert (pixels == pixels[:, ::-1]).all()

    def test_empty_digest_renders(self):
        image = render_image(b"")
        assert image.getcolors() == [(256 * 256, (255, 255, 255, 255))]

    def test_unknown_model_raises(self):
        with pytest.raises(ValueError):
            render_image(DIGEST, model="sepia")


class TestIndexed:
    def test_indexed_mode_and_palette(self):
        image = render_image(DIGEST, indexed=True)
        assert image.mode == "P"
        assert image.getpalette()[:12] == [
            0xEC, 0xF0, 0xF1,
            221, 213, 145,
            0x24, 0xC3, 0x33,
            0, 0, 0,
        ]
        assert image.info["transparency"] == bytes([255, 255, 255, 0])

    def test_transparent_background_slot(self):
        image = render_image(DIGEST, size=48, model="palette", transparent=True, indexed=True)
        assert image.info["transparency"][0] == 0
        assert image.getpixel((0, 0)) == BACKGROUND_INDEX

    @pytest.mark.parametrize("transparent", [False, True])
    def test_matches_truecolor(self, transparent):
        truecolor = render_image(DIGEST, transparent=transparent)
        indexed = render_image(DIGEST, transparent=transparent, indexed=True)
        assert indexed.convert("RGBA").tobytes() == truecolor.tobytes()

    def test_compose_uses_given_colors(self):
        stencil = generate_stencil(DIGEST)
        colors = ClassicColorModel().resolve(DIGEST, dark=True)
        image = compose(stencil, colors, 48, indexed=True)
        assert image.size == (48, 48)
        assert image.getpalette()[:3] == [0x39, 0x39, 0x39]


class TestRenderPNG:
    def test_png_signature(self):
        assert render_png(DIGEST)[:8] == b"\x89PNG\r\n\x1a\n"

    def test_png_decodes_to_same_pixels(self):
        decoded = Image.open(io.BytesIO(render_png(DIGEST)))
        assert decoded.size == (256, 256)
        assert decoded.convert("RGBA").tobytes() == render_image(DIGEST).tobytes()

    def test_indexed_png_keeps_transparency(self):
        png_bytes = render_png(DIGEST, size=48, model="palette", transparent=True, indexed=True)
        decoded = Image.open(io.BytesIO(png_bytes))
        assert decoded.mode == "P"
        assert decoded.size == (48, 48)
        assert decoded.convert("RGBA").getpixel((0, 0))[3] == 0

    def test_indexed_png_is_smaller(self):
        truecolor = render_png(DIGEST)
        indexed = render_png(DIGEST, indexed=True)
        assert len(indexed) < len(truecolor)

    def test_deterministic(self):
        assert render_png(DIGEST, indexed=True) == render_png(DIGEST, indexed=True)
