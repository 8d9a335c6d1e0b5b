"""TweenLab - naive linear frame interpolation between two images."""

__version__: str = "0.1.0"
__author__: str = "TweenLab Team"
__email__: str = "team@tweenlab.example"

# Public re-exports for convenience ---------------------------------------------------

from .codec import Bounds, PixelBuffer, bounds, check_bounds, decode, encode
from .core import InterpolationRunner, RunParameters, RunResult, run_interpolation
from .difference import (
    ColorDelta,
    ReconstructionPolicy,
    ScalingMode,
    accumulate,
    apply,
    diff,
    round_half_up,
    scale,
)
from .error_handling import (
    ArgumentError,
    BoundsMismatchError,
    CodecError,
    FileSystemError,
    TweenLabError,
)
from .interpolation import AccumulationStrategy, FrameSequence, interpolate
from .parallel_io import frame_filename, load_pair, save_all
