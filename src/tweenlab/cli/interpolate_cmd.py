"""Interpolate a frame sequence between two images."""

from pathlib import Path

import click

from ..config import InterpolationConfig, OutputConfig
from ..io import setup_logging
from .utils import (
    display_common_header,
    display_path_info,
    handle_generic_error,
    handle_keyboard_interrupt,
)


@click.command()
@click.argument("image_a", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("image_b", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--frames",
    "-n",
    type=click.IntRange(min=0),
    default=InterpolationConfig.FRAMES,
    show_default=True,
    help="Number of transition steps between IMAGE_A and IMAGE_B",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the frame files (default: current directory)",
)
@click.option(
    "--workers",
    "-j",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of frames saved at the same time (default: 10)",
)
@click.option(
    "--strategy",
    type=click.Choice(["rebase", "chain"]),
    default="rebase",
    show_default=True,
    help="rebase regenerates each frame from IMAGE_A; chain steps from the previous frame",
)
@click.option(
    "--rounding",
    type=click.Choice(["wrap", "clamp"]),
    default="wrap",
    show_default=True,
    help="How out-of-range channel values are brought back to 8 bits",
)
@click.option(
    "--legacy-scaling",
    is_flag=True,
    help="Derive green and blue steps from the red channel (historical behaviour)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Also write a timestamped log file into this directory",
)
def interpolate(
    image_a: Path,
    image_b: Path,
    frames: int,
    output_dir: Path | None,
    workers: int | None,
    strategy: str,
    rounding: str,
    legacy_scaling: bool,
    log_level: str,
    log_dir: Path | None,
) -> None:
    """Generate the frames that fade IMAGE_A into IMAGE_B.

    Both images must have the same dimensions. FRAMES + 1 numbered PNG files
    are written, the first being IMAGE_A and the last IMAGE_B.
    """
    setup_logging(log_dir, log_level)

    try:
        from ..core import InterpolationRunner, RunParameters

        interpolation_config = InterpolationConfig(
            FRAMES=frames,
            STRATEGY=strategy,
            RECONSTRUCTION=rounding,
            SCALING="legacy" if legacy_scaling else "independent",
        )
        output_config = OutputConfig()
        if workers is not None:
            output_config.SAVE_CONCURRENCY = workers

        params = RunParameters(image_a, image_b, frames, output_dir)

        display_common_header("TweenLab frame interpolation")
        display_path_info("Image A", image_a, "🖼️")
        display_path_info("Image B", image_b, "🖼️")
        click.echo(f"🔢 Frames: {frames} ({strategy}, {rounding})")

        result = InterpolationRunner(interpolation_config, output_config).run(params)

        click.echo(f"\n✅ Wrote {len(result.frame_paths)} frames ({result.bounds})")
        if result.frame_paths:
            display_path_info("Output", result.frame_paths[0].parent)

    except KeyboardInterrupt:
        handle_keyboard_interrupt("Interpolation")
    except Exception as e:
        handle_generic_error("Interpolation", e)
