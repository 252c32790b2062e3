"""Face header codec.

Wraps a PNG as base64 text suitable for a mail-style header::

    Face: iVBORw0KGgoAAAANSUhEUgAAADAAAAAwAgMAAAAqbBEUAAAADFBMVEX...
     ...continuation lines of up to 75 characters...

The first line carries the prefix, one space and the first 70 base64
characters. Each following line starts with a single space and holds up
to 75 more. A stream of 72 characters or fewer stays on the first line.
The document always ends with a newline.
"""

from __future__ import annotations

import base64
import binascii

import structlog

from .renderer import FACE_SIZE, encode_png, render_image

logger = structlog.get_logger(__name__)

FACE_PREFIX = "Face:"
FIRST_LINE_WIDTH = 70
CONTINUATION_WIDTH = 75
SINGLE_LINE_MAX = 72


def encode_face_header(data: bytes, prefix: str = FACE_PREFIX) -> str:
    """Base64-encode ``data`` and wrap it in the Face header format.

    Args:
        data: Raw bytes, normally a PNG stream.
        prefix: Header tag written before the first space.

    Returns:
        Header text including the trailing newline.
    """
    b64 = base64.b64encode(data).decode("ascii")

    if len(b64) <= SINGLE_LINE_MAX:
        return f"{prefix} {b64}\n"

    lines = [f"{prefix} {b64[:FIRST_LINE_WIDTH]}"]
    for pos in range(FIRST_LINE_WIDTH, len(b64), CONTINUATION_WIDTH):
        lines.append(" " + b64[pos : pos + CONTINUATION_WIDTH])
    return "\n".join(lines) + "\n"


def decode_face_header(text: str, prefix: str = FACE_PREFIX) -> bytes:
    """Recover the bytes wrapped by encode_face_header().

    Args:
        text: Header document.
        prefix: Expected header tag.

    Returns:
        Decoded bytes.

    Raises:
        ValueError: If the prefix is missing or the body is not valid base64.
    """
    if not text.startswith(prefix):
        raise ValueError(f"Header does not start with '{prefix}'")

    body = "".join(line.strip() for line in text[len(prefix) :].splitlines())
    try:
        return base64.b64decode(body, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 in header: {e}") from e


def render_face(
    digest: bytes,
    transparent: bool = True,
    model: str = "palette",
    size: int = FACE_SIZE,
) -> str:
    """Render the compact indexed identicon and wrap it as a Face header.

    Uses the light background table.

    Args:
        digest: Input digest.
        transparent: Transparent background.
        model: Color model name.
        size: Canvas edge in pixels.

    Returns:
        Header text.
    """
    image = render_image(digest, size=size, model=model, transparent=transparent, indexed=True)
    header = encode_face_header(encode_png(image))

    logger.debug("face_rendered", size=size, transparent=transparent, chars=len(header))
    return header
