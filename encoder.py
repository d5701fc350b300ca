from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

_CODECS = {"h264": "libx264", "h265": "libx265"}


def find_ffmpeg() -> str:
    """System ffmpeg first, then the binary bundled with imageio-ffmpeg."""
    path = shutil.which("ffmpeg")
    if path:
        return path

    try:
        import imageio_ffmpeg
        return imageio_ffmpeg.get_ffmpeg_exe()
    except ImportError:
        pass

    raise RuntimeError(
        "ffmpeg not found. Install it via:\n"
        "  pip install imageio-ffmpeg\n"
        "or install FFmpeg on your system."
    )


def encode_frames_to_mp4(
    frame_dir: Path,
    output_file: Path,
    *,
    fps: int,
    codec: str = "h264",
) -> None:
    if codec not in _CODECS:
        raise ValueError(f"Unsupported codec '{codec}'. Use h264 or h265.")
    ffmpeg = find_ffmpeg()

    output_file.parent.mkdir(parents=True, exist_ok=True)

    command = [
        ffmpeg,
        "-y",
        "-framerate",
        str(fps),
        "-start_number",
        "1",
        "-i",
        str(frame_dir / "frame_%04d.png"),
        "-c:v",
        _CODECS[codec],
        "-pix_fmt",
        "yuv420p",
        "-crf",
        "20",
        "-preset",
        "medium",
        str(output_file),
    ]

    result = subprocess.run(command, capture_output=True, text=True)
    if result.returncode != 0:
        raise RuntimeError(
            "ffmpeg encoding failed.\n"
            f"command: {' '.join(command)}\n"
            f"stderr:\n{result.stderr}"
        )
