"""I/O utilities for logging setup."""

import logging
from datetime import datetime
from pathlib import Path


def setup_logging(log_dir: Path | None = None, log_level: str = "INFO") -> logging.Logger:
    """Set up logging configuration for TweenLab.

    Args:
        log_dir: Directory to store log files; console only when None
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured logger instance
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)

        # Create timestamped log file
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"tweenlab_{timestamp}.log"
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )

    return logging.getLogger("tweenlab")

