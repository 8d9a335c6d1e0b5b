from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from tweenlab.codec import PixelBuffer


def _solid_pixels(color, size=(2, 2)) -> np.ndarray:
    """Build a (height, width, 4) uint8 array filled with *color*.

    *color* may be RGB (alpha defaults to opaque) or RGBA.
    """
    width, height = size
    rgba = tuple(color) + (255,) * (4 - len(color))
    return np.tile(np.array(rgba, dtype=np.uint8), (height, width, 1))


@pytest.fixture
def solid_buffer():
    """Factory for solid-colour pixel buffers."""

    def _make(color, size=(2, 2)) -> PixelBuffer:
        return PixelBuffer(_solid_pixels(color, size))

    return _make


@pytest.fixture
def make_image(tmp_path):
    """Factory writing a small solid-colour image under tmp_path."""

    def _make(name: str, color, size=(2, 2)) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        mode = "RGBA" if len(color) == 4 else "RGB"
        Image.new(mode, size, tuple(color)).save(path)
        return path

    return _make


@pytest.fixture(autouse=True)
def _isolate_output_env(monkeypatch):
    """Keep developer environment overrides out of the test suite."""
    monkeypatch.delenv("TWEENLAB_OUTPUT_DIR", raising=False)
    monkeypatch.delenv("TWEENLAB_SAVE_CONCURRENCY", raising=False)
