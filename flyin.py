from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path

from camera_path import compute_camera_frames
from encoder import encode_frames_to_mp4
from geocoder import geocode
from models import AnimationParams, CameraFrame
from renderer import RenderOptions, render_frames


@dataclass
class FlyInOptions:
    city: str
    output_dir: Path
    cesium_token: str
    width: int = 1920
    height: int = 1080
    fps: int = 30
    duration_sec: int = 6
    start_altitude: float = 800_000.0
    end_altitude: float = 2_000.0
    tilt_angle: float = 45.0
    heading: float = 0.0
    easing: str = "cinematic"
    encode_video: bool = False
    headless: bool = True


@dataclass
class FlyInResult:
    success: bool
    city: str
    frame_count: int
    output_dir: str
    resolution: str
    message: str
    video_path: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


def build_params(options: FlyInOptions, lat: float, lon: float) -> AnimationParams:
    return AnimationParams(
        longitude=lon,
        latitude=lat,
        start_altitude=options.start_altitude,
        end_altitude=options.end_altitude,
        tilt_angle=options.tilt_angle,
        heading=options.heading,
        total_frames=options.fps * options.duration_sec,
        easing=options.easing,
    )


def plan_fly_in(options: FlyInOptions, lat: float, lon: float) -> list[CameraFrame]:
    return compute_camera_frames(build_params(options, lat, lon))


def generate_fly_in(options: FlyInOptions) -> FlyInResult:
    """Geocode, plan and capture a fly-in as numbered PNG frames.

    The whole camera path is computed before the browser starts, so every
    frame's pose is known up front.
    """
    lat, lon, name = geocode(options.city)
    frames = plan_fly_in(options, lat, lon)

    output_dir = Path(options.output_dir)
    frame_count = render_frames(
        frames,
        output_dir,
        RenderOptions(
            width=options.width,
            height=options.height,
            cesium_token=options.cesium_token,
            headless=options.headless,
        ),
    )

    video_path = None
    if options.encode_video:
        video = output_dir / "flyin.mp4"
        encode_frames_to_mp4(output_dir, video, fps=options.fps)
        video_path = str(video)

    return FlyInResult(
        success=True,
        city=name,
        frame_count=frame_count,
        output_dir=str(output_dir),
        resolution=f"{options.width}x{options.height}",
        message=(
            f"Generated {frame_count} frames for fly-in to {name}. "
            f"To render as video: ffmpeg -framerate {options.fps} -i {output_dir}/frame_%04d.png "
            "-c:v libx264 -pix_fmt yuv420p output.mp4"
        ),
        video_path=video_path,
    )
