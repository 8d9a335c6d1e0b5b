"""CLI module for TweenLab commands."""

import click

from .. import __version__
from .interpolate_cmd import interpolate


@click.group()
@click.version_option(version=__version__, prog_name="tweenlab")
def main() -> None:
    """🎞️ TweenLab — frame interpolation between two images."""
    pass


main.add_command(interpolate)

__all__ = [
    "interpolate",
    "main",
]
