"""Build the frame sequence between two images.

The sequence always starts with the first source buffer and ends with the
second, both passed through untouched. Interior frames are produced by one of
two accumulation strategies:

- rebase: regenerate every frame from the start image plus its share of the
  whole delta, so rounding never compounds
- chain: apply the per-step delta to the previous (already rounded) frame,
  letting rounding error drift from frame to frame
"""

import logging
from enum import Enum

from .codec import PixelBuffer
from .config import DEFAULT_INTERPOLATION_CONFIG
from .difference import (
    ColorDelta,
    ReconstructionPolicy,
    ScalingMode,
    accumulate,
    apply,
    as_delta,
    diff,
    scale,
    to_buffer,
)
from .error_handling import ArgumentError

logger = logging.getLogger(__name__)

FrameSequence = list[PixelBuffer]


class AccumulationStrategy(Enum):
    """How interior frames are derived from the per-step delta."""

    REBASE = "rebase"
    CHAIN = "chain"


def interpolate(
    buf_a: PixelBuffer,
    buf_b: PixelBuffer,
    frames: int,
    strategy: AccumulationStrategy | str | None = None,
    policy: ReconstructionPolicy | str | None = None,
    scaling: ScalingMode | str | None = None,
) -> FrameSequence:
    """Interpolate from ``buf_a`` to ``buf_b`` over ``frames`` transition steps.

    Args:
        buf_a: Start image; returned as the first element
        buf_b: End image; returned as the last element
        frames: Number of transition steps; the sequence holds ``frames + 1``
            buffers, or exactly ``[buf_a, buf_b]`` when ``frames`` is 0
        strategy: Accumulation strategy (defaults to configuration)
        policy: 8-bit reconstruction policy (defaults to configuration)
        scaling: Delta scaling mode (defaults to configuration)

    Returns:
        Ordered list of buffers

    Raises:
        ArgumentError: If frames is negative
        BoundsMismatchError: If the buffers are not the same size
    """
    if frames < 0:
        raise ArgumentError(f"frames must be non-negative, got {frames}")

    config = DEFAULT_INTERPOLATION_CONFIG
    strategy = AccumulationStrategy(strategy or config.STRATEGY)
    policy = ReconstructionPolicy(policy or config.RECONSTRUCTION)
    scaling = ScalingMode(scaling or config.SCALING)

    if frames == 0:
        return [buf_a, buf_b]

    delta = diff(buf_a, buf_b)

    sequence: FrameSequence = [buf_a]
    if strategy is AccumulationStrategy.REBASE:
        base = as_delta(buf_a)
        for i in range(1, frames):
            # i * delta / frames keeps exact halves exact
            offset = scale(ColorDelta(delta.values * i), frames, scaling)
            sequence.append(
                to_buffer(
                    accumulate(base, offset), policy, min_x=buf_a.min_x, min_y=buf_a.min_y
                )
            )
    else:
        step = scale(delta, frames, scaling)
        for _ in range(1, frames):
            sequence.append(apply(sequence[-1], step, 1, policy))
    sequence.append(buf_b)

    logger.debug(
        f"Interpolated {len(sequence)} frames "
        f"(strategy={strategy.value}, policy={policy.value}, scaling={scaling.value})"
    )
    return sequence
