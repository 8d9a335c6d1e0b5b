"""Pixel buffer adapter around the Pillow image codec.

Decoded images are held as read-only RGBA ``uint8`` arrays so that every
engine operation has to produce a new buffer rather than editing one in
place.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

from .error_handling import (
    BoundsMismatchError,
    CodecError,
    FileSystemError,
    error_context,
    handle_error,
)

logger = logging.getLogger(__name__)

CHANNELS = 4
DEFAULT_FORMAT = "PNG"


@dataclass(frozen=True)
class Bounds:
    """Origin and size of a pixel buffer."""

    min_x: int
    min_y: int
    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(eq=False)
class PixelBuffer:
    """Decoded RGBA raster with explicit origin.

    ``pixels`` has shape ``(height, width, 4)`` and dtype ``uint8``. The array
    is flagged read-only on construction.
    """

    pixels: np.ndarray
    min_x: int = 0
    min_y: int = 0

    def __post_init__(self) -> None:
        if self.pixels.ndim != 3 or self.pixels.shape[2] != CHANNELS:
            raise ValueError(
                f"pixels must have shape (height, width, {CHANNELS}), got {self.pixels.shape}"
            )
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"pixels must be uint8, got {self.pixels.dtype}")
        self.pixels.setflags(write=False)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def rgb(self) -> np.ndarray:
        """Read-only view of the colour channels."""
        return self.pixels[..., :3]

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        """Build a buffer from a Pillow image, converting to RGBA."""
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        return cls(np.array(rgba, dtype=np.uint8))

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels.copy())


def bounds(buffer: PixelBuffer) -> Bounds:
    """Return the bounds of ``buffer``."""
    return Bounds(buffer.min_x, buffer.min_y, buffer.width, buffer.height)


def check_bounds(
    buffers: Sequence[PixelBuffer], labels: Sequence[str] | None = None
) -> Bounds:
    """Verify that all buffers share identical bounds.

    Args:
        buffers: Buffers taking part in one run (at least one)
        labels: Optional names (usually source paths) used in the error message

    Returns:
        The shared bounds

    Raises:
        BoundsMismatchError: On the first buffer whose bounds differ from the first
    """
    if not buffers:
        raise ValueError("check_bounds requires at least one buffer")

    if labels is None:
        labels = [f"image {i}" for i in range(len(buffers))]

    first = bounds(buffers[0])
    for i in range(1, len(buffers)):
        other = bounds(buffers[i])
        if other != first:
            raise BoundsMismatchError(
                f"Image bounds differ: {labels[0]} is {first}, {labels[i]} is {other}",
                first=first,
                second=other,
            )
    return first


def decode(path: Path | str) -> PixelBuffer:
    """Decode the image at ``path`` into an RGBA pixel buffer.

    Raises:
        CodecError: If the file is missing, unreadable or not a supported image
    """
    path = Path(path)
    with error_context("decode image", CodecError, context={"path": str(path)}, logger=logger):
        with Image.open(path) as img:
            img.load()
            buffer = PixelBuffer.from_image(img)

    logger.debug(f"Decoded {path} ({buffer.width}x{buffer.height})")
    return buffer


def _format_for(path: Path) -> str:
    """Pick the Pillow format name for ``path`` from its suffix."""
    return Image.registered_extensions().get(path.suffix.lower(), DEFAULT_FORMAT)


def encode(buffer: PixelBuffer, path: Path | str) -> None:
    """Create or truncate ``path`` and write ``buffer`` to it.

    Raises:
        FileSystemError: If the file cannot be created
        CodecError: If encoding fails
    """
    path = Path(path)
    try:
        handle = open(path, "wb")
    except OSError as e:
        raise handle_error(
            e,
            "create output file",
            FileSystemError,
            context={"path": str(path)},
            logger=logger,
            reraise=False,
        ) from e

    with handle:
        with error_context("encode image", CodecError, context={"path": str(path)}, logger=logger):
            buffer.to_image().save(handle, format=_format_for(path))

    logger.debug(f"Encoded {path}")
