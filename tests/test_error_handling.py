"""Tests for tweenlab.error_handling module."""

import logging
from pathlib import Path

import pytest

from tweenlab.error_handling import (
    ArgumentError,
    BoundsMismatchError,
    CodecError,
    ErrorLevel,
    FileSystemError,
    TweenLabError,
    error_context,
    handle_error,
)


class TestErrorTypes:
    """Tests for the exception hierarchy."""

    def test_str_includes_cause(self):
        """Test the cause is appended to the message."""
        error = TweenLabError("Failed to load", cause=OSError("gone"))
        assert str(error) == "Failed to load (caused by: gone)"

    def test_str_without_cause(self):
        """Test plain messages are unchanged."""
        assert str(ArgumentError("Missing input path")) == "Missing input path"

    def test_codec_error_path_from_context(self):
        """Test CodecError picks up the path from its context."""
        error = CodecError("bad", context={"path": "a.png"})
        assert error.path == Path("a.png")

    def test_codec_error_explicit_path(self):
        """Test an explicit path is recorded in the context."""
        error = CodecError("bad", path=Path("b.png"))
        assert error.path == Path("b.png")
        assert error.context["path"] == "b.png"

    def test_filesystem_error_is_codec_error(self):
        """Test FileSystemError can be caught as CodecError."""
        assert issubclass(FileSystemError, CodecError)
        assert issubclass(CodecError, TweenLabError)

    def test_bounds_mismatch_carries_bounds(self):
        """Test both sides of a mismatch are kept."""
        error = BoundsMismatchError("differ", first=(2, 2), second=(3, 3))
        assert (error.first, error.second) == ((2, 2), (3, 3))


class TestHandleError:
    """Tests for handle_error."""

    def test_reraise_transforms_and_chains(self):
        """Test the original exception is wrapped and chained."""
        original = ValueError("broken header")

        with pytest.raises(CodecError) as exc_info:
            handle_error(original, "decode image", CodecError, context={"path": "x.png"})

        assert exc_info.value.__cause__ is original
        assert exc_info.value.cause is original
        assert exc_info.value.path == Path("x.png")
        assert "Failed to decode image: broken header" in str(exc_info.value)

    def test_returns_without_reraise(self):
        """Test reraise=False hands back the transformed error."""
        error = handle_error(
            OSError("denied"), "create output file", FileSystemError, reraise=False
        )
        assert isinstance(error, FileSystemError)
        assert error.context["original_error_type"] == "OSError"

    def test_logs_at_requested_level(self, caplog):
        """Test the failure is logged with its context."""
        logger = logging.getLogger("tweenlab.test")

        with caplog.at_level(logging.WARNING, logger="tweenlab.test"):
            handle_error(
                OSError("denied"),
                "create output file",
                FileSystemError,
                level=ErrorLevel.WARNING,
                context={"path": "out.png"},
                logger=logger,
                reraise=False,
            )

        assert "Create output file failed: denied" in caplog.text
        assert "path=out.png" in caplog.text

    def test_caller_context_not_mutated(self):
        """Test the caller's context dict is left untouched."""
        context = {"path": "a.png"}
        handle_error(OSError("x"), "decode image", context=context, reraise=False)
        assert context == {"path": "a.png"}


class TestErrorContext:
    """Tests for error_context."""

    def test_transforms_foreign_exceptions(self):
        """Test non-TweenLab exceptions become the requested type."""
        with pytest.raises(CodecError) as exc_info:
            with error_context("decode image", CodecError, context={"path": "a.png"}):
                raise KeyError("palette")

        assert exc_info.value.path == Path("a.png")

    def test_passes_tweenlab_errors_through(self):
        """Test TweenLab errors are re-raised unchanged."""
        original = ArgumentError("bad frames")

        with pytest.raises(ArgumentError) as exc_info:
            with error_context("decode image", CodecError):
                raise original

        assert exc_info.value is original

    def test_no_error(self):
        """Test the block runs normally when nothing fails."""
        with error_context("decode image"):
            value = 42
        assert value == 42
