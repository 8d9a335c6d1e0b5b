"""Core run orchestration.

- InterpolationRunner: wires load, interpolate and save for one run
- RunParameters: validated input for a run
- RunResult: what a completed run produced
"""

from .runner import InterpolationRunner, RunParameters, RunResult, run_interpolation

__all__ = [
    "InterpolationRunner",
    "RunParameters",
    "RunResult",
    "run_interpolation",
]
