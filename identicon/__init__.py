"""Identicon -- deterministic visual fingerprints for binary digests.

Converts a digest (canonically a 32-byte SHA-256 hash) into a
horizontally symmetric 5x5 two-layer pixel pattern with colors chosen
from fixed palettes, so that two inputs can be compared by eye.

The bit layout, palette tables and Face header format are fixed: the
same digest always yields the same pixels, allowing images produced
here to be cross-checked against other implementations.
"""
