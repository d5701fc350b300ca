from __future__ import annotations

import json
import os
import urllib.parse
import urllib.request


NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
USER_AGENT = "cesium-flyin/1.0"

CITY_LOOKUP: dict[str, tuple[float, float, str]] = {
    "new york": (40.7128, -74.006, "New York"),
    "los angeles": (34.0522, -118.2437, "Los Angeles"),
    "chicago": (41.8781, -87.6298, "Chicago"),
    "london": (51.5074, -0.1278, "London"),
    "paris": (48.8566, 2.3522, "Paris"),
    "tokyo": (35.6762, 139.6503, "Tokyo"),
    "sydney": (-33.8688, 151.2093, "Sydney"),
    "dubai": (25.2048, 55.2708, "Dubai"),
    "rome": (41.9028, 12.4964, "Rome"),
    "berlin": (52.52, 13.405, "Berlin"),
    "moscow": (55.7558, 37.6173, "Moscow"),
    "beijing": (39.9042, 116.4074, "Beijing"),
    "mumbai": (19.076, 72.8777, "Mumbai"),
    "san francisco": (37.7749, -122.4194, "San Francisco"),
    "seattle": (47.6062, -122.3321, "Seattle"),
    "toronto": (43.6532, -79.3832, "Toronto"),
    "rio de janeiro": (-22.9068, -43.1729, "Rio de Janeiro"),
    "singapore": (1.3521, 103.8198, "Singapore"),
    "cairo": (30.0444, 31.2357, "Cairo"),
    "istanbul": (41.0082, 28.9784, "Istanbul"),
}

_cache: dict[str, tuple[float, float, str]] = {}


def clear_cache() -> None:
    _cache.clear()


def _fetch_json(req: urllib.request.Request | str):
    try:
        with urllib.request.urlopen(req, timeout=10) as resp:
            return json.loads(resp.read().decode("utf-8"))
    except (OSError, ValueError):
        return None


def _nominatim(query: str) -> tuple[float, float, str] | None:
    params = urllib.parse.urlencode({
        "q": query,
        "format": "json",
        "limit": "1",
    })
    req = urllib.request.Request(f"{NOMINATIM_URL}?{params}", headers={"User-Agent": USER_AGENT})
    data = _fetch_json(req)
    if not data:
        return None

    r = data[0]
    name = r.get("display_name", query).split(",")[0].strip()
    return float(r["lat"]), float(r["lon"]), name


def _google_geocode(query: str, api_key: str) -> tuple[float, float, str] | None:
    params = urllib.parse.urlencode({
        "address": query,
        "key": api_key,
    })
    data = _fetch_json(f"{GOOGLE_GEOCODE_URL}?{params}")
    if not data:
        return None

    results = data.get("results", [])
    if not results:
        return None

    loc = results[0]["geometry"]["location"]
    name = results[0].get("formatted_address", query)
    return float(loc["lat"]), float(loc["lng"]), name


def geocode(query: str, google_api_key: str | None = None) -> tuple[float, float, str]:
    """Resolve a place name to (lat, lon, display_name).

    Well-known cities resolve from a local table. Anything else goes to
    Nominatim, then to the Google Geocoding API when a key is available.
    Network results are cached for the life of the process.
    """
    key = query.strip().lower()
    if not key:
        raise ValueError("Place name is empty.")

    if key in CITY_LOOKUP:
        return CITY_LOOKUP[key]
    if key in _cache:
        return _cache[key]

    result = _nominatim(query.strip())
    if not result:
        api_key = google_api_key or os.getenv("GOOGLE_MAPS_API_KEY", "")
        if api_key:
            result = _google_geocode(query.strip(), api_key)

    if not result:
        raise ValueError(
            f"Place not found: '{query}'\n"
            "Tip: Try a more common name or address "
            "(e.g., 'Chicago', 'Times Square New York')."
        )

    _cache[key] = result
    return result
