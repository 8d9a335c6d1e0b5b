"""Configuration settings for TweenLab."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class InterpolationConfig:
    """Configuration for frame interpolation between two images."""

    # Number of transition steps between the two source images
    FRAMES: int = 8

    # Interior frame construction: "rebase" (regenerate from the start image)
    # or "chain" (apply the step to the previous frame)
    STRATEGY: str = "rebase"

    # 8-bit channel reconstruction after rounding: "wrap" (modulo 256) or "clamp"
    RECONSTRUCTION: str = "wrap"

    # Delta scaling: "independent" per channel, or "legacy" red-derived green/blue
    SCALING: str = "independent"

    def __post_init__(self) -> None:
        if self.FRAMES < 0:
            raise ValueError(f"FRAMES must be non-negative, got {self.FRAMES}")

        valid_strategies = {"rebase", "chain"}
        if self.STRATEGY not in valid_strategies:
            raise ValueError(f"Invalid interpolation strategy: {self.STRATEGY}")

        valid_reconstructions = {"wrap", "clamp"}
        if self.RECONSTRUCTION not in valid_reconstructions:
            raise ValueError(f"Invalid reconstruction policy: {self.RECONSTRUCTION}")

        valid_scalings = {"independent", "legacy"}
        if self.SCALING not in valid_scalings:
            raise ValueError(f"Invalid scaling mode: {self.SCALING}")


@dataclass
class OutputConfig:
    """Configuration for writing frame sequences, with environment variable overrides."""

    # Directory receiving the frame files.
    # Override with: TWEENLAB_OUTPUT_DIR
    OUTPUT_DIR: Path = Path(".")

    # Frame files are named <prefix><zero-padded index>.<extension>
    FILENAME_PREFIX: str = "frame_"
    FILENAME_EXTENSION: str = "png"

    # Minimum digits in the frame index; wider sequences pad further
    MIN_PAD_WIDTH: int = 1

    # Maximum number of frames being encoded at the same time.
    # Override with: TWEENLAB_SAVE_CONCURRENCY
    SAVE_CONCURRENCY: int = 10

    def __post_init__(self) -> None:
        """Apply environment variable overrides, then validate."""
        env_output_dir = os.getenv("TWEENLAB_OUTPUT_DIR")
        if env_output_dir:
            self.OUTPUT_DIR = Path(env_output_dir)

        env_concurrency = os.getenv("TWEENLAB_SAVE_CONCURRENCY")
        if env_concurrency:
            try:
                self.SAVE_CONCURRENCY = int(env_concurrency)
            except ValueError:
                logger.warning(
                    f"Invalid TWEENLAB_SAVE_CONCURRENCY: {env_concurrency}"
                )

        self.OUTPUT_DIR = Path(self.OUTPUT_DIR)

        if self.SAVE_CONCURRENCY < 1:
            raise ValueError(
                f"SAVE_CONCURRENCY must be at least 1, got {self.SAVE_CONCURRENCY}"
            )

        if self.MIN_PAD_WIDTH < 1:
            raise ValueError(
                f"MIN_PAD_WIDTH must be at least 1, got {self.MIN_PAD_WIDTH}"
            )

        self.FILENAME_EXTENSION = self.FILENAME_EXTENSION.lstrip(".")
        if not self.FILENAME_EXTENSION:
            raise ValueError("FILENAME_EXTENSION must not be empty")


DEFAULT_INTERPOLATION_CONFIG = InterpolationConfig()
