"""Run orchestration: load, validate, interpolate and save.

This module contains the InterpolationRunner class, which wires the codec,
difference engine and parallel I/O together for a single invocation.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from ..codec import Bounds, bounds
from ..config import InterpolationConfig, OutputConfig
from ..error_handling import ArgumentError, log_info_with_context
from ..interpolation import interpolate
from ..parallel_io import load_pair, save_all


@dataclass(frozen=True)
class RunParameters:
    """Input for one interpolation run."""

    path_a: Path
    path_b: Path
    frames: int = InterpolationConfig.FRAMES
    output_dir: Path | None = None

    def __post_init__(self) -> None:
        # Path("") collapses to "." so an empty path shows up as either form
        if any(str(path) in ("", ".") for path in (self.path_a, self.path_b)):
            raise ArgumentError("Missing input path: two image paths are required")
        if self.frames < 0:
            raise ArgumentError(f"frames must be non-negative, got {self.frames}")

        object.__setattr__(self, "path_a", Path(self.path_a))
        object.__setattr__(self, "path_b", Path(self.path_b))
        if self.output_dir is not None:
            object.__setattr__(self, "output_dir", Path(self.output_dir))


@dataclass
class RunResult:
    """Outcome of a completed run."""

    frame_paths: list[Path] = field(default_factory=list)
    bounds: Bounds | None = None
    frames: int = 0
    elapsed_seconds: float = 0.0


class InterpolationRunner:
    """Produce and save the frame sequence between two images."""

    def __init__(
        self,
        interpolation_config: InterpolationConfig | None = None,
        output_config: OutputConfig | None = None,
    ):
        self.interpolation_config = interpolation_config or InterpolationConfig()
        self.output_config = output_config or OutputConfig()
        self.logger = logging.getLogger(__name__)

    def run(self, params: RunParameters) -> RunResult:
        """Execute one run; any stage failure propagates unchanged.

        Files written before a failing save are left in place.
        """
        start_time = time.perf_counter()
        config = self.interpolation_config

        log_info_with_context(
            f"🎞️ Interpolating {params.path_a} -> {params.path_b}",
            context={
                "frames": params.frames,
                "strategy": config.STRATEGY,
                "reconstruction": config.RECONSTRUCTION,
                "scaling": config.SCALING,
            },
            logger=self.logger,
        )

        buf_a, buf_b = load_pair(params.path_a, params.path_b)

        sequence = interpolate(
            buf_a,
            buf_b,
            params.frames,
            strategy=config.STRATEGY,
            policy=config.RECONSTRUCTION,
            scaling=config.SCALING,
        )

        output_dir = params.output_dir or self.output_config.OUTPUT_DIR
        frame_paths = save_all(sequence, output_dir, self.output_config)

        elapsed = time.perf_counter() - start_time
        self.logger.info(
            f"✅ Wrote {len(frame_paths)} frames to {output_dir} in {elapsed:.2f}s"
        )

        return RunResult(
            frame_paths=frame_paths,
            bounds=bounds(buf_a),
            frames=params.frames,
            elapsed_seconds=elapsed,
        )


def run_interpolation(
    params: RunParameters,
    interpolation_config: InterpolationConfig | None = None,
    output_config: OutputConfig | None = None,
) -> RunResult:
    """Convenience wrapper around InterpolationRunner.run."""
    return InterpolationRunner(interpolation_config, output_config).run(params)
