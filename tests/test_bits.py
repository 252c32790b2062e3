"""Tests for digest bit access."""

import hashlib

from identicon.bits import (
    BACKGROUND_BITS,
    PALETTE_FLAG_BIT,
    PATTERN_BITS,
    PRIMARY_INDEX_BITS,
    SECONDARY_INDEX_BITS,
    get_bit,
    get_byte,
    read_bits,
)

DIGEST = hashlib.sha256(b"mySecret123").digest()


class TestGetBit:
    def test_lsb_first(self):
        assert get_bit(b"\x01", 0) is True
        assert get_bit(b"\x01", 1) is False
        assert get_bit(b"\x80", 7) is True

    def test_second_byte(self):
        assert get_bit(b"\x00\x02", 9) is True
        assert get_bit(b"\x00\x02", 8) is False

    def test_empty_digest(self):
        assert get_bit(b"", 0) is False

    def test_negative_index(self):
        assert get_bit(b"\xff", -1) is False

    def test_beyond_end(self):
        assert get_bit(b"\xff", 8) is False
        assert get_bit(b"\xff" * 16, 255) is False

    def test_canonical_digest_covers_all_positions(self):
        full = b"\xff" * 32
        assert all(get_bit(full, n) for n in range(256))
        assert get_bit(full, 256) is False


class TestGetByte:
    def test_in_range(self):
        assert get_byte(b"\x01\x02\x03", 1) == 2

    def test_wraps_around(self):
        assert get_byte(b"\x01\x02\x03", 4) == 2
        assert get_byte(b"\x01\x02\x03", 3) == 1

    def test_empty_digest(self):
        assert get_byte(b"", 5) == 0


class TestReadBits:
    def test_little_bit_first(self):
        # 0x29 = 0b00101001 -> low nibble 9
        assert read_bits(b"\x29", 0, 4) == 9
        assert read_bits(b"\x29", 4, 4) == 2

    def test_out_of_range_reads_zero(self):
        assert read_bits(b"", 0, 8) == 0
        assert read_bits(b"\xff", 4, 8) == 0x0F

    def test_known_digest_selectors(self):
        assert read_bits(DIGEST, *PRIMARY_INDEX_BITS) == 9
        assert read_bits(DIGEST, *SECONDARY_INDEX_BITS) == 9
        assert read_bits(DIGEST, *BACKGROUND_BITS) == 2
        assert get_bit(DIGEST, PALETTE_FLAG_BIT) is False


class TestLayout:
    def test_pattern_and_selector_bits_do_not_overlap(self):
        selector_bits = set()
        for start, width in (SECONDARY_INDEX_BITS, PRIMARY_INDEX_BITS, BACKGROUND_BITS):
            selector_bits.update(range(start, start + width))
        selector_bits.add(PALETTE_FLAG_BIT)
        assert selector_bits.isdisjoint(range(PATTERN_BITS))

    def test_selectors_fit_canonical_digest(self):
        assert PALETTE_FLAG_BIT < 32 * 8
