from __future__ import annotations

import math

from easing import lerp, resolve_easing
from models import AnimationParams, CameraFrame

_NADIR_PITCH_DEG = -90.0
_SETTLE_START = 0.5


def pitch_for(eased_t: float, tilt_angle: float) -> float:
    """Camera pitch for a point of eased progress.

    Held at nadir until eased progress reaches the settle phase, then
    smoothstepped toward ``-(90 - tilt_angle)``.
    """
    if eased_t < _SETTLE_START:
        return _NADIR_PITCH_DEG
    pitch_t = (eased_t - _SETTLE_START) / (1.0 - _SETTLE_START)
    pitch_t = max(0.0, min(1.0, pitch_t))
    smooth = pitch_t * pitch_t * (3 - 2 * pitch_t)
    return lerp(_NADIR_PITCH_DEG, -(90.0 - tilt_angle), smooth)


def compute_camera_frames(params: AnimationParams) -> list[CameraFrame]:
    """Pre-compute every camera pose of a fly-in.

    Altitude is interpolated in log space so that each halving of altitude
    takes the same share of eased progress.
    """
    ease = resolve_easing(params.easing)
    log_start = math.log(params.start_altitude)
    log_end = math.log(params.end_altitude)
    last = params.total_frames - 1

    frames: list[CameraFrame] = []
    for i in range(params.total_frames):
        raw_t = i / last
        eased_t = ease(raw_t)
        altitude = math.exp(lerp(log_start, log_end, eased_t))

        frames.append(
            CameraFrame(
                longitude=params.longitude,
                latitude=params.latitude,
                altitude=altitude,
                heading=params.heading,
                pitch=pitch_for(eased_t, params.tilt_angle),
                roll=0.0,
            )
        )
    return frames
