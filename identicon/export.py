"""Write identicon exports to disk.

Output is written to a temporary file in the target directory and moved
into place only after encoding and writing succeed, so a failed export
never leaves a truncated file at the target path.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import structlog

from .face import render_face
from .renderer import DEFAULT_COMPRESS_LEVEL, DISPLAY_SIZE, render_png

logger = structlog.get_logger(__name__)


class ExportError(Exception):
    """Encoding or writing an identicon export failed.

    The underlying exception is available as ``__cause__``.
    """

    def __init__(self, path: str | os.PathLike, message: str):
        super().__init__(f"{path}: {message}")
        self.path = Path(path)


def _atomic_write(path: Path, data: bytes) -> None:
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_png(
    path: str | os.PathLike,
    digest: bytes,
    size: int = DISPLAY_SIZE,
    model: str = "palette",
    transparent: bool = False,
    indexed: bool = True,
    compress_level: int = DEFAULT_COMPRESS_LEVEL,
) -> Path:
    """Render a digest and save it as a PNG file.

    Exports use the light background table.

    Args:
        path: Target file path.
        digest: Input digest.
        size: Canvas edge in pixels.
        model: Color model name.
        transparent: Transparent background.
        indexed: Write a 4-color indexed PNG.
        compress_level: zlib compression level (0-9).

    Returns:
        The path written.

    Raises:
        ValueError: If size or model is invalid.
        ExportError: If encoding or writing fails.
    """
    target = Path(path)
    try:
        png_bytes = render_png(
            digest,
            size=size,
            model=model,
            transparent=transparent,
            indexed=indexed,
            compress_level=compress_level,
        )
    except ValueError:
        raise
    except Exception as e:
        logger.error("png_encode_failed", path=str(target), error=str(e))
        raise ExportError(target, "PNG encoding failed") from e

    try:
        _atomic_write(target, png_bytes)
    except OSError as e:
        logger.error("png_write_failed", path=str(target), error=str(e))
        raise ExportError(target, "write failed") from e

    logger.info("png_exported", path=str(target), bytes=len(png_bytes), transparent=transparent)
    return target


def write_face(
    path: str | os.PathLike,
    digest: bytes,
    transparent: bool = True,
    model: str = "palette",
) -> Path:
    """Render a digest as a 48x48 Face header and save it as a text file.

    Raises:
        ValueError: If model is invalid.
        ExportError: If encoding or writing fails.
    """
    target = Path(path)
    try:
        header = render_face(digest, transparent=transparent, model=model)
    except ValueError:
        raise
    except Exception as e:
        logger.error("face_encode_failed", path=str(target), error=str(e))
        raise ExportError(target, "Face encoding failed") from e

    try:
        _atomic_write(target, header.encode("ascii"))
    except OSError as e:
        logger.error("face_write_failed", path=str(target), error=str(e))
        raise ExportError(target, "write failed") from e

    logger.info("face_exported", path=str(target), chars=len(header), transparent=transparent)
    return target
