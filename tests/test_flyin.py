"""Tests for fly-in orchestration (geocoder, renderer and encoder are patched out)."""

from pathlib import Path

import pytest

import flyin
from flyin import FlyInOptions, generate_fly_in, plan_fly_in


@pytest.fixture
def options(tmp_path):
    return FlyInOptions(city="Chicago", output_dir=tmp_path / "frames", cesium_token="token", fps=10, duration_sec=3)


@pytest.fixture
def fake_render(monkeypatch):
    captured = {}

    def _render(frames, frame_dir, render_options):
        captured["frames"] = frames
        captured["frame_dir"] = frame_dir
        captured["options"] = render_options
        return len(frames)

    monkeypatch.setattr(flyin, "render_frames", _render)
    return captured


class TestPlanFlyIn:

    def test_frame_count_from_fps_and_duration(self, options):
        frames = plan_fly_in(options, 41.8781, -87.6298)
        assert len(frames) == 30
        assert frames[0].latitude == 41.8781
        assert frames[0].longitude == -87.6298

    def test_invalid_options_raise(self, options):
        options.easing = "bounce"
        with pytest.raises(ValueError):
            plan_fly_in(options, 0.0, 0.0)

    def test_single_frame_is_rejected(self, options):
        options.fps = 1
        options.duration_sec = 1
        with pytest.raises(ValueError, match="at least 2"):
            plan_fly_in(options, 0.0, 0.0)


class TestGenerateFlyIn:

    def test_frames_are_computed_before_render(self, options, fake_render):
        result = generate_fly_in(options)

        assert result.success
        assert result.city == "Chicago"
        assert result.frame_count == 30
        assert result.resolution == "1920x1080"
        assert result.video_path is None
        assert "ffmpeg -framerate 10" in result.message
        assert len(fake_render["frames"]) == 30
        assert fake_render["frame_dir"] == Path(options.output_dir)
        assert fake_render["options"].cesium_token == "token"

    def test_uses_geocoder_result(self, options, fake_render, monkeypatch):
        monkeypatch.setattr(flyin, "geocode", lambda city: (10.0, 20.0, "Testville"))
        options.city = "somewhere"
        result = generate_fly_in(options)
        assert result.city == "Testville"
        assert fake_render["frames"][0].latitude == 10.0
        assert fake_render["frames"][0].longitude == 20.0

    def test_encodes_video_when_requested(self, options, fake_render, monkeypatch):
        encoded = {}

        def _encode(frame_dir, output_file, *, fps):
            encoded["args"] = (frame_dir, output_file, fps)

        monkeypatch.setattr(flyin, "encode_frames_to_mp4", _encode)
        options.encode_video = True
        result = generate_fly_in(options)

        frame_dir, output_file, fps = encoded["args"]
        assert frame_dir == Path(options.output_dir)
        assert output_file.name == "flyin.mp4"
        assert fps == 10
        assert result.video_path == str(output_file)

    def test_result_to_dict(self, options, fake_render):
        data = generate_fly_in(options).to_dict()
        assert set(data) == {
            "success", "city", "frame_count", "output_dir", "resolution", "message", "video_path",
        }
