"""End-to-end runs from image files on disk to frame files on disk."""

import numpy as np
import pytest
from PIL import Image

from tweenlab.config import InterpolationConfig, OutputConfig
from tweenlab.core import InterpolationRunner, RunParameters

pytestmark = pytest.mark.integration


def _read_rgba(path):
    with Image.open(path) as img:
        return np.array(img.convert("RGBA"))


class TestEndToEnd:
    """Full load, interpolate and save runs."""

    def test_black_to_color_ramp(self, make_image, tmp_path):
        """Test the documented four-step ramp survives the round trip through PNG."""
        a = make_image("a.png", (0, 0, 0))
        b = make_image("b.png", (100, 50, 25))
        out = tmp_path / "frames"

        result = InterpolationRunner().run(RunParameters(a, b, 4, out))

        colors = [tuple(_read_rgba(p)[0, 0, :3]) for p in sorted(out.iterdir())]
        assert colors == [
            (0, 0, 0),
            (25, 13, 6),
            (50, 25, 13),
            (75, 38, 19),
            (100, 50, 25),
        ]
        assert sorted(out.iterdir()) == result.frame_paths

    def test_endpoints_written_verbatim(self, make_image, tmp_path):
        """Test endpoint frames keep source alpha while interior frames are opaque."""
        a = make_image("a.png", (10, 20, 30, 64), size=(3, 2))
        b = make_image("b.png", (40, 50, 60, 200), size=(3, 2))
        out = tmp_path / "frames"

        InterpolationRunner().run(RunParameters(a, b, 3, out))

        assert np.all(_read_rgba(out / "frame_0.png") == [10, 20, 30, 64])
        assert np.all(_read_rgba(out / "frame_3.png") == [40, 50, 60, 200])
        for name in ("frame_1.png", "frame_2.png"):
            assert np.all(_read_rgba(out / name)[..., 3] == 255)

    def test_many_frames_above_save_bound(self, make_image, tmp_path):
        """Test a sequence wider than the save pool is written completely and in order."""
        a = make_image("a.png", (0, 0, 0), size=(4, 4))
        b = make_image("b.png", (240, 120, 60), size=(4, 4))
        out = tmp_path / "frames"

        InterpolationRunner(output_config=OutputConfig(SAVE_CONCURRENCY=4)).run(
            RunParameters(a, b, 24, out)
        )

        paths = sorted(out.iterdir())
        assert [p.name for p in paths] == [f"frame_{i:02d}.png" for i in range(25)]
        reds = [int(_read_rgba(p)[0, 0, 0]) for p in paths]
        assert reds == [10 * i for i in range(25)]

    def test_chain_strategy_on_disk(self, make_image, tmp_path):
        """Test the chain strategy's drift is what gets written."""
        a = make_image("a.png", (0, 0, 0))
        b = make_image("b.png", (100, 50, 25))
        out = tmp_path / "frames"

        InterpolationRunner(InterpolationConfig(STRATEGY="chain")).run(
            RunParameters(a, b, 4, out)
        )

        assert tuple(_read_rgba(out / "frame_3.png")[0, 0, :3]) == (75, 39, 18)

    def test_zero_frames_writes_endpoints(self, make_image, tmp_path):
        """Test frames=0 writes only the two source images."""
        a = make_image("a.png", (1, 2, 3))
        b = make_image("b.png", (4, 5, 6))
        out = tmp_path / "frames"

        result = InterpolationRunner().run(RunParameters(a, b, 0, out))

        assert [p.name for p in result.frame_paths] == ["frame_0.png", "frame_1.png"]
        assert tuple(_read_rgba(out / "frame_1.png")[0, 0, :3]) == (4, 5, 6)
