"""Standardized Error Handling Utilities

Provides the TweenLab exception hierarchy and consistent patterns for
turning codec and filesystem failures into tagged, logged errors.
"""

from __future__ import annotations

import logging
import traceback
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Any


class ErrorLevel(Enum):
    """Error severity levels for consistent logging."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class TweenLabError(Exception):
    """Base exception class for all TweenLab errors."""

    def __init__(
        self, message: str, cause: Exception | None = None, context: dict | None = None
    ):
        super().__init__(message)
        self.cause = cause
        self.context = context or {}

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.cause:
            return f"{base_msg} (caused by: {self.cause})"
        return base_msg


class ArgumentError(TweenLabError):
    """Raised when run input (paths, frame count) is missing or invalid."""

    pass


class CodecError(TweenLabError):
    """Raised when an image cannot be decoded or encoded.

    The offending path is available as ``path``, taken either from the
    explicit argument or from a ``"path"`` entry in ``context``.
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        context: dict | None = None,
        path: Path | str | None = None,
    ):
        super().__init__(message, cause=cause, context=context)
        if path is None:
            path = self.context.get("path")
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            self.context.setdefault("path", str(self.path))


class FileSystemError(CodecError):
    """Raised when an output path cannot be created or written."""

    pass


class BoundsMismatchError(TweenLabError):
    """Raised when buffers taking part in one run have different bounds."""

    def __init__(self, message: str, first: Any = None, second: Any = None):
        super().__init__(message, context={"first": first, "second": second})
        self.first = first
        self.second = second


def handle_error(
    error: Exception,
    operation: str,
    error_type: type[TweenLabError] = CodecError,
    level: ErrorLevel = ErrorLevel.ERROR,
    context: dict | None = None,
    logger: logging.Logger | None = None,
    reraise: bool = True,
) -> TweenLabError | None:
    """Standardized error handling with consistent logging and error transformation.

    Args:
        error: Original exception that occurred
        operation: Description of operation that failed
        error_type: Type of TweenLabError to raise
        level: Logging level for the error
        context: Additional context information
        logger: Logger to use (defaults to module logger)
        reraise: Whether to reraise the transformed exception

    Returns:
        The transformed error if reraise=False, otherwise None

    Raises:
        TweenLabError: Transformed error if reraise=True
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    message = f"Failed to {operation}: {error}"

    error_context = dict(context or {})
    error_context.update(
        {
            "operation": operation,
            "original_error_type": type(error).__name__,
        }
    )

    transformed_error = error_type(message, cause=error, context=error_context)

    log_message = f"🚨 {operation.capitalize()} failed: {error}"
    context_str = ", ".join(f"{k}={v}" for k, v in error_context.items())
    if context_str:
        log_message += f" (context: {context_str})"

    log_func = getattr(logger, level.value)
    log_func(log_message)

    if level in [ErrorLevel.ERROR, ErrorLevel.CRITICAL]:
        logger.debug(f"Traceback for {operation}: {traceback.format_exc()}")

    if reraise:
        raise transformed_error from error
    return transformed_error


@contextmanager
def error_context(
    operation: str,
    error_type: type[TweenLabError] = CodecError,
    level: ErrorLevel = ErrorLevel.ERROR,
    context: dict | None = None,
    logger: logging.Logger | None = None,
) -> Any:
    """Context manager for standardized error handling.

    Usage:
        with error_context("decode image", CodecError, context={"path": "a.png"}):
            risky_operation()

    Args:
        operation: Description of operation being performed
        error_type: Type of TweenLabError to raise on failure
        level: Logging level for errors
        context: Additional context information
        logger: Logger to use
    """
    try:
        yield
    except TweenLabError:
        raise
    except Exception as e:
        handle_error(e, operation, error_type, level, context, logger, reraise=True)


def log_info_with_context(
    message: str, context: dict | None = None, logger: logging.Logger | None = None
) -> None:
    """Log an info message with standardized context formatting."""
    if logger is None:
        logger = logging.getLogger(__name__)

    info_msg = f"ℹ️  {message}"
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        info_msg += f" (context: {context_str})"

    logger.info(info_msg)
