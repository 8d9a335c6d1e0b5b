"""Per-pixel colour difference engine.

A ColorDelta holds signed, unclamped real-valued R/G/B offsets for every
pixel of a buffer. Deltas are computed between two buffers, scaled into
per-step increments, combined with each other and finally applied back onto
a buffer. Converting real values back into 8-bit channels always goes through
``reconstruct``, which rounds half up and then either wraps modulo 256 or
clamps to [0, 255].

Scaling modes:
- independent: every channel is divided by the divisor on its own
- legacy: reproduces an old defect where green and blue were derived from
  the already-scaled red channel, i.e. ``g = b = (r / d) / d``
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from .codec import Bounds, PixelBuffer
from .error_handling import BoundsMismatchError

OPAQUE = 255


class ReconstructionPolicy(Enum):
    """How rounded channel values outside [0, 255] are brought back to 8 bits."""

    WRAP = "wrap"
    CLAMP = "clamp"


class ScalingMode(Enum):
    """How a delta is divided into per-step increments."""

    INDEPENDENT = "independent"
    LEGACY = "legacy"


@dataclass(eq=False)
class ColorDelta:
    """Real-valued RGB offsets with shape ``(height, width, 3)``."""

    values: np.ndarray

    def __post_init__(self) -> None:
        if self.values.ndim != 3 or self.values.shape[2] != 3:
            raise ValueError(
                f"values must have shape (height, width, 3), got {self.values.shape}"
            )
        self.values = self.values.astype(np.float64, copy=False)

    @property
    def width(self) -> int:
        return int(self.values.shape[1])

    @property
    def height(self) -> int:
        return int(self.values.shape[0])

    @property
    def grid(self) -> tuple[int, int]:
        return self.width, self.height


def round_half_up(values: np.ndarray) -> np.ndarray:
    """Round to the nearest integer, sending exact halves toward +infinity."""
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def wrap_channels(values: np.ndarray) -> np.ndarray:
    """Round half up, then wrap into [0, 255] modulo 256."""
    return np.mod(round_half_up(values), 256).astype(np.uint8)


def clamp_channels(values: np.ndarray) -> np.ndarray:
    """Round half up, then clamp into [0, 255]."""
    return np.clip(round_half_up(values), 0, 255).astype(np.uint8)


_RECONSTRUCTORS = {
    ReconstructionPolicy.WRAP: wrap_channels,
    ReconstructionPolicy.CLAMP: clamp_channels,
}


def reconstruct(
    values: np.ndarray, policy: ReconstructionPolicy | str = ReconstructionPolicy.WRAP
) -> np.ndarray:
    """Convert real channel values to ``uint8`` using ``policy``."""
    return _RECONSTRUCTORS[ReconstructionPolicy(policy)](values)


def _require_same_grid(first: tuple[int, int], second: tuple[int, int]) -> None:
    if first != second:
        first_bounds, second_bounds = Bounds(0, 0, *first), Bounds(0, 0, *second)
        raise BoundsMismatchError(
            f"Grid sizes differ: {first_bounds} vs {second_bounds}",
            first=first_bounds,
            second=second_bounds,
        )


def _rgba(rgb: np.ndarray) -> np.ndarray:
    """Stack ``uint8`` RGB channels with a fully opaque alpha channel."""
    height, width = rgb.shape[:2]
    out = np.empty((height, width, 4), dtype=np.uint8)
    out[..., :3] = rgb
    out[..., 3] = OPAQUE
    return out


def diff(a: PixelBuffer, b: PixelBuffer) -> ColorDelta:
    """Return the per-pixel RGB difference ``b - a``; alpha is ignored.

    Raises:
        BoundsMismatchError: If the buffers are not the same size
    """
    _require_same_grid((a.width, a.height), (b.width, b.height))
    return ColorDelta(b.rgb.astype(np.float64) - a.rgb.astype(np.float64))


def scale(
    delta: ColorDelta,
    divisor: float,
    mode: ScalingMode | str = ScalingMode.INDEPENDENT,
) -> ColorDelta:
    """Divide every channel of ``delta`` by ``divisor``.

    Args:
        delta: Delta to scale
        divisor: Positive real divisor, usually the frame count
        mode: Independent per-channel scaling, or the legacy red-derived variant

    Raises:
        ValueError: If divisor is not positive
    """
    if not divisor > 0:
        raise ValueError(f"divisor must be positive, got {divisor}")

    if ScalingMode(mode) is ScalingMode.LEGACY:
        red = delta.values[..., 0] / divisor
        derived = red / divisor
        return ColorDelta(np.stack([red, derived, derived], axis=-1))

    return ColorDelta(delta.values / divisor)


def accumulate(first: ColorDelta, second: ColorDelta, sign: int = 1) -> ColorDelta:
    """Add (``sign=1``) or subtract (``sign=-1``) ``second`` from ``first``."""
    if sign not in (1, -1):
        raise ValueError(f"sign must be 1 or -1, got {sign}")
    _require_same_grid(first.grid, second.grid)
    return ColorDelta(first.values + sign * second.values)


def apply(
    buffer: PixelBuffer,
    delta: ColorDelta,
    sign: int = 1,
    policy: ReconstructionPolicy | str = ReconstructionPolicy.WRAP,
) -> PixelBuffer:
    """Return a new buffer with ``sign * delta`` added to every colour channel.

    Channels are reconstructed with ``policy``; alpha is forced to opaque.
    """
    if sign not in (1, -1):
        raise ValueError(f"sign must be 1 or -1, got {sign}")
    _require_same_grid((buffer.width, buffer.height), delta.grid)

    summed = buffer.rgb.astype(np.float64) + sign * delta.values
    return PixelBuffer(
        _rgba(reconstruct(summed, policy)), min_x=buffer.min_x, min_y=buffer.min_y
    )


def as_delta(buffer: PixelBuffer) -> ColorDelta:
    """Express a buffer's colour channels as a delta from black."""
    return ColorDelta(buffer.rgb.astype(np.float64))


def to_buffer(
    delta: ColorDelta,
    policy: ReconstructionPolicy | str = ReconstructionPolicy.WRAP,
    min_x: int = 0,
    min_y: int = 0,
) -> PixelBuffer:
    """Materialize a delta as an opaque buffer."""
    return PixelBuffer(_rgba(reconstruct(delta.values, policy)), min_x=min_x, min_y=min_y)
