"""Tests for the command-line entry point (dry runs only)."""

import json
import xml.etree.ElementTree as ET

import pytest

import cli
from kml_exporter import GX


class TestParseArgs:

    def test_preset_fills_target_and_camera(self):
        args = cli.parse_args(["--preset", "tokyo"])
        assert (args.lat, args.lng) == (35.6762, 139.6503)
        assert args.tilt == 50
        assert args.end_altitude == 2_500
        assert args.display_name == "Tokyo"

    def test_explicit_values_override_preset(self):
        args = cli.parse_args(["--preset", "tokyo", "--tilt", "30", "--end-altitude", "900"])
        assert args.tilt == 30
        assert args.end_altitude == 900

    def test_defaults_with_coordinates(self):
        args = cli.parse_args(["--lat", "1.5", "--lng", "2.5"])
        assert args.tilt == 45.0
        assert args.end_altitude == 2_000.0
        assert args.easing == "cinematic"

    def test_place_uses_geocoder(self, monkeypatch):
        import geocoder
        monkeypatch.setattr(geocoder, "geocode", lambda q: (1.0, 2.0, "Somewhere"))
        args = cli.parse_args(["--place", "somewhere"])
        assert (args.lat, args.lng, args.display_name) == (1.0, 2.0, "Somewhere")

    def test_target_required(self):
        with pytest.raises(SystemExit):
            cli.parse_args([])

    def test_unknown_preset(self):
        with pytest.raises(SystemExit):
            cli.parse_args(["--preset", "atlantis"])

    def test_unknown_easing(self):
        with pytest.raises(SystemExit):
            cli.parse_args(["--lat", "0", "--lng", "0", "--easing", "bounce"])


class TestMain:

    def test_list_presets(self, capsys):
        assert cli.main(["--list-presets"]) is None
        out = capsys.readouterr().out
        assert "Chicago" in out
        assert "Sydney" in out

    def test_dry_run_writes_frames_and_kml(self, tmp_path, capsys):
        run_dir = cli.main([
            "--preset", "chicago",
            "--fps", "10",
            "--duration-sec", "2",
            "--output-dir", str(tmp_path),
            "--dry-run",
        ])

        payload = json.loads((run_dir / "frames.json").read_text(encoding="utf-8"))
        assert payload["target"]["name"] == "Chicago"
        assert len(payload["frames"]) == 20
        assert payload["frames"][0]["pitch"] == -90
        assert payload["frames"][-1]["pitch"] == pytest.approx(-50)

        root = ET.parse(run_dir / "flyin.kml").getroot()
        assert len(root.findall(f".//{{{GX}}}FlyTo")) == 20

        out = capsys.readouterr().out
        assert "dry-run" in out
        assert "[DONE]" in out

    @pytest.mark.parametrize("extra,message", [
        (["--fps", "1", "--duration-sec", "1"], "at least 2"),
        (["--tilt", "120"], "tilt_angle"),
        (["--end-altitude", "0"], "positive"),
        (["--start-altitude", "nan"], "positive"),
        (["--heading", "inf"], "heading"),
    ])
    def test_invalid_parameters_exit_with_usage_error(self, tmp_path, capsys, extra, message):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--lat", "0", "--lng", "0", "--output-dir", str(tmp_path), "--dry-run", *extra])
        assert excinfo.value.code == 2
        assert message in capsys.readouterr().err
        assert not any(tmp_path.iterdir())
