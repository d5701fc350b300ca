from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class CityPreset:
    city: str
    latitude: float
    longitude: float
    tilt_angle: float
    end_altitude: float
    description: str

    def to_dict(self) -> dict:
        return asdict(self)


PRESETS: list[CityPreset] = [
    CityPreset(
        city="New York",
        latitude=40.7128,
        longitude=-74.006,
        tilt_angle=45,
        end_altitude=2_000,
        description="Manhattan skyline with a 45-degree tilt for dramatic skyscraper views",
    ),
    CityPreset(
        city="Chicago",
        latitude=41.8781,
        longitude=-87.6298,
        tilt_angle=40,
        end_altitude=2_000,
        description="Lake Michigan waterfront and downtown loop from a moderate angle",
    ),
    CityPreset(
        city="London",
        latitude=51.5074,
        longitude=-0.1278,
        tilt_angle=35,
        end_altitude=1_500,
        description="Thames river corridor with gentle tilt showcasing historic landmarks",
    ),
    CityPreset(
        city="Tokyo",
        latitude=35.6762,
        longitude=139.6503,
        tilt_angle=50,
        end_altitude=2_500,
        description="Dense urban sprawl with steep tilt for depth perception",
    ),
    CityPreset(
        city="Dubai",
        latitude=25.2048,
        longitude=55.2708,
        tilt_angle=45,
        end_altitude=3_000,
        description="Burj Khalifa and Palm Jumeirah from an elevated perspective",
    ),
    CityPreset(
        city="San Francisco",
        latitude=37.7749,
        longitude=-122.4194,
        tilt_angle=40,
        end_altitude=1_800,
        description="Bay Area with Golden Gate Bridge at a cinematic angle",
    ),
    CityPreset(
        city="Paris",
        latitude=48.8566,
        longitude=2.3522,
        tilt_angle=35,
        end_altitude=1_500,
        description="City of Light from a gentle angle highlighting the Seine",
    ),
    CityPreset(
        city="Sydney",
        latitude=-33.8688,
        longitude=151.2093,
        tilt_angle=45,
        end_altitude=2_000,
        description="Opera House and Harbour Bridge from a dramatic harbor approach",
    ),
]


def find_preset(name: str) -> CityPreset:
    key = name.strip().lower()
    for preset in PRESETS:
        if preset.city.lower() == key:
            return preset
    available = ", ".join(p.city for p in PRESETS)
    raise ValueError(f"Unknown preset: '{name}'. Available: {available}")
