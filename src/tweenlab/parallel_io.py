"""Parallel loading and saving of frame images.

Both fan-out points run blocking codec calls on a thread pool and join them
with ``as_completed``. Every submitted task runs to completion; the first
failure observed is raised once all of them have finished, and any further
failures are logged.
"""

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from .codec import PixelBuffer, check_bounds, decode, encode
from .config import OutputConfig
from .error_handling import FileSystemError, handle_error

logger = logging.getLogger(__name__)

LOAD_WORKERS = 2


def _run_all(
    tasks: Sequence[Callable[[], Any]], max_workers: int, label: str
) -> list[Any]:
    """Run ``tasks`` on at most ``max_workers`` threads and join them all.

    Args:
        tasks: Zero-argument callables
        max_workers: Size of the worker pool
        label: Task description used in log messages

    Returns:
        Task results in submission order

    Raises:
        Exception: The first failure observed, after every task has finished
    """
    if not tasks:
        return []

    results: list[Any] = [None] * len(tasks)
    first_error: BaseException | None = None

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(tasks)))) as executor:
        futures = {executor.submit(task): i for i, task in enumerate(tasks)}

        for future in as_completed(futures):
            index = futures[future]
            try:
                results[index] = future.result()
            except Exception as e:
                if first_error is None:
                    first_error = e
                else:
                    logger.warning(f"Additional {label} failure for task {index}: {e}")

    if first_error is not None:
        raise first_error
    return results


def load_pair(path_a: Path | str, path_b: Path | str) -> tuple[PixelBuffer, PixelBuffer]:
    """Decode two images in parallel and verify that their bounds match.

    Raises:
        CodecError: If either image cannot be decoded
        BoundsMismatchError: If the images have different dimensions
    """
    path_a, path_b = Path(path_a), Path(path_b)
    start_time = time.perf_counter()

    buf_a, buf_b = _run_all(
        [lambda: decode(path_a), lambda: decode(path_b)], LOAD_WORKERS, "load"
    )
    shared = check_bounds([buf_a, buf_b], labels=[str(path_a), str(path_b)])

    elapsed = time.perf_counter() - start_time
    logger.info(f"Loaded {path_a} and {path_b} ({shared}) in {elapsed:.3f}s")
    return buf_a, buf_b


def frame_filename(
    index: int,
    total: int,
    prefix: str = "frame_",
    extension: str = "png",
    min_width: int = 1,
) -> str:
    """Name frame ``index`` of ``total`` so that sorting by name keeps frame order.

    The index is zero-padded to the number of digits in ``total - 1``.
    """
    if not 0 <= index < total:
        raise ValueError(f"index must be between 0 and {total - 1}, got {index}")
    width = max(min_width, len(str(total - 1)))
    return f"{prefix}{index:0{width}d}.{extension.lstrip('.')}"


def save_all(
    frames: Sequence[PixelBuffer],
    output_dir: Path | str | None = None,
    config: OutputConfig | None = None,
) -> list[Path]:
    """Encode every frame into ``output_dir`` with bounded parallelism.

    Args:
        frames: Frame sequence, written in index order
        output_dir: Target directory (defaults to ``config.OUTPUT_DIR``)
        config: Output configuration (defaults to a fresh OutputConfig)

    Returns:
        Written paths in frame order

    Raises:
        FileSystemError: If the output directory cannot be created
        CodecError: The first save failure, after all saves have finished
    """
    config = config or OutputConfig()
    output_dir = Path(output_dir) if output_dir is not None else config.OUTPUT_DIR

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise handle_error(
            e,
            "create output directory",
            FileSystemError,
            context={"path": str(output_dir)},
            logger=logger,
            reraise=False,
        ) from e

    total = len(frames)
    paths = [
        output_dir
        / frame_filename(
            i,
            total,
            prefix=config.FILENAME_PREFIX,
            extension=config.FILENAME_EXTENSION,
            min_width=config.MIN_PAD_WIDTH,
        )
        for i in range(total)
    ]

    start_time = time.perf_counter()
    _run_all(
        [
            (lambda frame=frame, path=path: encode(frame, path))
            for frame, path in zip(frames, paths)
        ],
        config.SAVE_CONCURRENCY,
        "save",
    )

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Saved {total} frames to {output_dir} in {elapsed:.3f}s "
        f"({config.SAVE_CONCURRENCY} max in flight)"
    )
    return paths
