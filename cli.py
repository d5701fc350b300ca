from __future__ import annotations

import argparse
import json
import os
from datetime import datetime
from pathlib import Path

from easing import Easing
from encoder import encode_frames_to_mp4
from flyin import FlyInOptions, plan_fly_in
from kml_exporter import export_kml
from models import AnimationParams
from presets import PRESETS, find_preset


RESOLUTION_PRESETS = {
    "270p": (480, 270),
    "480p": (854, 480),
    "720p": (1280, 720),
    "1080p": (1920, 1080),
    "4k": (3840, 2160),
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate a cinematic fly-in over a place and capture it as PNG frames."
    )
    parser.add_argument("--lat", type=float, default=None, help="Target latitude")
    parser.add_argument("--lng", type=float, default=None, help="Target longitude")
    parser.add_argument("--place", type=str, default=None, help="Place name (e.g., 'Chicago')")
    parser.add_argument("--preset", type=str, default=None, help="City preset (see --list-presets)")
    parser.add_argument("--list-presets", action="store_true", help="Print city presets and exit")
    parser.add_argument("--fps", type=int, default=30, help="Frame rate")
    parser.add_argument("--duration-sec", type=int, default=6, help="Animation duration (seconds)")
    parser.add_argument("--start-altitude", type=float, default=800_000.0, help="Start altitude (m)")
    parser.add_argument("--end-altitude", type=float, default=None, help="End altitude (m), default 2000")
    parser.add_argument("--tilt", type=float, default=None, help="Final tilt from vertical (deg), default 45")
    parser.add_argument("--heading", type=float, default=0.0, help="Camera heading (deg, 0 = north)")
    parser.add_argument(
        "--easing",
        choices=[e.value for e in Easing],
        default=Easing.CINEMATIC.value,
        help="Easing profile",
    )
    parser.add_argument(
        "--resolution",
        choices=list(RESOLUTION_PRESETS),
        default="1080p",
        help="Render resolution",
    )
    parser.add_argument(
        "--cesium-token",
        default=os.getenv("CESIUMION", ""),
        help="Cesium ion access token (uses CESIUMION env var if not provided)",
    )
    parser.add_argument("--output-dir", default="output", help="Output root directory")
    parser.add_argument("--dry-run", action="store_true", help="Write frames.json + KML only, skip rendering")
    parser.add_argument("--encode", action="store_true", help="Encode captured frames to MP4")

    ns = parser.parse_args(argv)
    if ns.list_presets:
        return ns

    ns.display_name = None
    if ns.preset:
        try:
            preset = find_preset(ns.preset)
        except ValueError as exc:
            parser.error(str(exc))
        ns.lat, ns.lng, ns.display_name = preset.latitude, preset.longitude, preset.city
        if ns.tilt is None:
            ns.tilt = preset.tilt_angle
        if ns.end_altitude is None:
            ns.end_altitude = preset.end_altitude
    elif ns.place:
        from geocoder import geocode
        lat, lng, display_name = geocode(ns.place)
        ns.lat, ns.lng, ns.display_name = lat, lng, display_name
        print(f"[INFO] Place lookup: '{ns.place}' → {display_name}")
        print(f"[INFO] Coordinates: {lat}, {lng}")

    if ns.lat is None or ns.lng is None:
        parser.error("One of --lat/--lng, --place, or --preset is required.")

    if ns.tilt is None:
        ns.tilt = 45.0
    if ns.end_altitude is None:
        ns.end_altitude = 2_000.0
    if ns.display_name is None:
        ns.display_name = f"{ns.lat}, {ns.lng}"

    try:
        AnimationParams(
            longitude=ns.lng,
            latitude=ns.lat,
            start_altitude=ns.start_altitude,
            end_altitude=ns.end_altitude,
            tilt_angle=ns.tilt,
            heading=ns.heading,
            total_frames=ns.fps * ns.duration_sec,
            easing=ns.easing,
        )
    except ValueError as exc:
        parser.error(str(exc))
    return ns


def _safe_write_json(path: Path, payload) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def _print_presets() -> None:
    for p in PRESETS:
        print(f"{p.city:<14} lat={p.latitude:<9} lng={p.longitude:<10} "
              f"tilt={p.tilt_angle:<3} end_alt={p.end_altitude:<5} {p.description}")


def main(argv: list[str] | None = None) -> Path | None:
    args = parse_args(argv)
    if args.list_presets:
        _print_presets()
        return None

    width, height = RESOLUTION_PRESETS[args.resolution]
    run_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = Path(args.output_dir) / f"run_{run_id}"
    frames_dir = run_dir / "frames"
    run_dir.mkdir(parents=True, exist_ok=True)

    options = FlyInOptions(
        city=args.display_name,
        output_dir=frames_dir,
        cesium_token=args.cesium_token,
        width=width,
        height=height,
        fps=args.fps,
        duration_sec=args.duration_sec,
        start_altitude=args.start_altitude,
        end_altitude=args.end_altitude,
        tilt_angle=args.tilt,
        heading=args.heading,
        easing=args.easing,
    )
    frames = plan_fly_in(options, args.lat, args.lng)

    print(f"[INFO] run_dir: {run_dir}")
    print(f"[INFO] target: {args.display_name} / frames: {len(frames)} / easing: {args.easing} "
          f"/ resolution: {args.resolution}")

    _safe_write_json(run_dir / "frames.json", {
        "target": {"name": args.display_name, "lat": args.lat, "lng": args.lng},
        "fps": args.fps,
        "duration_sec": args.duration_sec,
        "easing": args.easing,
        "frames": [f.to_dict() for f in frames],
    })
    kml_path = run_dir / "flyin.kml"
    export_kml(frames, kml_path, fps=args.fps, title=f"Fly-in: {args.display_name}")
    print(f"  - frames: {run_dir / 'frames.json'}")
    print(f"  - KML: {kml_path}")

    if args.dry_run:
        print("  - dry-run: skipping render")
    else:
        from renderer import RenderOptions, render_frames

        print("  - Starting frame capture...")
        captured = render_frames(
            frames,
            frames_dir,
            RenderOptions(width=width, height=height, cesium_token=args.cesium_token),
        )
        print(f"  - Captured {captured} frames: {frames_dir}")
        if args.encode:
            video_path = run_dir / "flyin.mp4"
            print("  - Starting encoding...")
            encode_frames_to_mp4(frames_dir, video_path, fps=args.fps)
            print(f"  - Done: {video_path}")

    print("[DONE] Generation complete")
    return run_dir


if __name__ == "__main__":
    main()
