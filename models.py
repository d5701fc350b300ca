from __future__ import annotations

import math
from dataclasses import asdict, dataclass

from easing import Easing, parse_easing


@dataclass(frozen=True)
class CameraFrame:
    longitude: float
    latitude: float
    altitude: float
    heading: float
    pitch: float
    roll: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AnimationParams:
    longitude: float
    latitude: float
    start_altitude: float
    end_altitude: float
    tilt_angle: float
    heading: float
    total_frames: int
    easing: Easing = Easing.CINEMATIC

    def __post_init__(self) -> None:
        for name in ("longitude", "latitude", "heading"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be a finite number, got {getattr(self, name)}.")
        if not all(math.isfinite(a) and a > 0 for a in (self.start_altitude, self.end_altitude)):
            raise ValueError(
                f"Altitudes must be positive and finite (start={self.start_altitude}, end={self.end_altitude})."
            )
        if not 0.0 <= self.tilt_angle <= 90.0:
            raise ValueError(f"tilt_angle must be within 0-90 degrees, got {self.tilt_angle}.")
        if isinstance(self.total_frames, bool) or not isinstance(self.total_frames, int):
            raise ValueError(f"total_frames must be an integer, got {self.total_frames!r}.")
        if self.total_frames < 2:
            raise ValueError(f"total_frames must be at least 2, got {self.total_frames}.")
        object.__setattr__(self, "easing", parse_easing(self.easing))

    def to_dict(self) -> dict:
        data = asdict(self)
        data["easing"] = self.easing.value
        return data
