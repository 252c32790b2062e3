"""Bit access and bit-layout constants for identicon digests.

Bits are addressed LSB first within each byte: bit ``n`` of a digest is
``(digest[n // 8] >> (n % 8)) & 1``. Accessors never raise on short or
empty input; they degrade to zero so every digest stays renderable.

Bit layout of a canonical 32-byte digest:

- bits 0-14: primary pattern layer (5 rows x 3 columns, row-major)
- bits 15-29: secondary pattern layer (same scan order)
- bits 244-247: secondary color index
- bits 248-251: primary color index
- bits 252-253: background variant (reduced mod 3)
- bit 255: palette flag (classic model only)
- bytes 28-31: procedural HSL fields (classic model only)
"""

from __future__ import annotations

# Canonical digest length (SHA-256)
DIGEST_BYTES = 32

# Stencil geometry
SPRITE_SIZE = 5
HALF_COLUMNS = 3  # columns 0-2 are read, 3-4 mirror them

# Pattern bit ranges
PRIMARY_PATTERN_BIT = 0
SECONDARY_PATTERN_BIT = SPRITE_SIZE * HALF_COLUMNS  # 15
PATTERN_BITS = 2 * SPRITE_SIZE * HALF_COLUMNS  # 30

# Selector bit positions (start, width)
SECONDARY_INDEX_BITS = (244, 4)
PRIMARY_INDEX_BITS = (248, 4)
BACKGROUND_BITS = (252, 2)
PALETTE_FLAG_BIT = 255

# Procedural HSL source bytes
HUE_HIGH_BYTE = 28  # low nibble only
HUE_LOW_BYTE = 29
SATURATION_BYTE = 30
LIGHTNESS_BYTE = 31


def get_bit(digest: bytes, n: int) -> bool:
    """Return bit ``n`` of the digest.

    Args:
        digest: Input digest bytes.
        n: Bit index, LSB first within each byte.

    Returns:
        The bit value, or False when the digest is empty, ``n`` is
        negative or ``n`` lies beyond the end of the digest.
    """
    if not digest or n < 0:
        return False
    byte_index, bit_index = divmod(n, 8)
    if byte_index >= len(digest):
        return False
    return (digest[byte_index] >> bit_index) & 1 == 1


def get_byte(digest: bytes, n: int) -> int:
    """Return byte ``n`` of the digest, wrapping around its length.

    Returns 0 for an empty digest.
    """
    if not digest:
        return 0
    return digest[n % len(digest)]


def read_bits(digest: bytes, start: int, width: int) -> int:
    """Accumulate ``width`` bits starting at ``start`` into an integer.

    The first bit read is the least significant bit of the result.
    Out-of-range bits read as zero.
    """
    value = 0
    for i in range(width):
        if get_bit(digest, start + i):
            value |= 1 << i
    return value
