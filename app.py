from __future__ import annotations

import os
import threading
import uuid
from datetime import datetime
from pathlib import Path

import requests
from flask import Flask, jsonify, request, send_from_directory

from camera_path import compute_camera_frames
from easing import Easing
from flyin import FlyInOptions, build_params, generate_fly_in
from geocoder import geocode
from models import AnimationParams
from presets import PRESETS

app = Flask(__name__)
app.config["OUTPUT_DIR"] = Path("output")
app.config["CESIUM_TOKEN"] = os.getenv("CESIUMION", "")

CESIUM_ION_CHECK_URL = "https://api.cesium.com/v1/assets/1/endpoint"

RESOLUTION_PRESETS = {
    "270p": (480, 270),
    "480p": (854, 480),
    "720p": (1280, 720),
    "1080p": (1920, 1080),
}

tasks: dict[str, dict] = {}


@app.route("/output/<path:filepath>")
def serve_output(filepath):
    return send_from_directory(Path(app.config["OUTPUT_DIR"]).resolve(), filepath)


# ─── API: Presets / token ───────────────────────────────────────────────

@app.route("/api/presets", methods=["GET"])
def list_presets():
    return jsonify({"ok": True, "presets": [p.to_dict() for p in PRESETS]})


@app.route("/api/validate-token", methods=["POST"])
def validate_token():
    data = request.get_json(force=True)
    token = data.get("token", "").strip()
    if not token:
        return jsonify({"ok": False, "error": "Please enter a Cesium ion token."})

    try:
        resp = requests.get(CESIUM_ION_CHECK_URL, params={"access_token": token}, timeout=10)
    except requests.RequestException as exc:
        return jsonify({"ok": False, "error": f"Network error: {exc}"})

    if resp.status_code == 200:
        app.config["CESIUM_TOKEN"] = token
        return jsonify({"ok": True, "message": "Cesium ion token is valid."})
    if resp.status_code in (401, 403):
        return jsonify({"ok": False, "error": "Cesium ion rejected the token."})
    return jsonify({"ok": False, "error": f"Cesium ion error ({resp.status_code}): {resp.text[:200]}"})


# ─── API: Geocode ────────────────────────────────────────────────────────

@app.route("/api/geocode", methods=["POST"])
def geocode_place():
    data = request.get_json(force=True)
    query = data.get("query", "").strip()
    if not query:
        return jsonify({"ok": False, "error": "Please enter a place name or coordinates."})

    parts = [s.strip() for s in query.split(",")]
    if len(parts) == 2:
        try:
            lat, lng = float(parts[0]), float(parts[1])
            return jsonify({"ok": True, "lat": lat, "lng": lng, "display": f"{lat}, {lng}"})
        except ValueError:
            pass

    try:
        lat, lng, display = geocode(query)
    except ValueError as exc:
        return jsonify({"ok": False, "error": str(exc)})
    return jsonify({"ok": True, "lat": lat, "lng": lng, "display": display})


# ─── API: Camera frames ──────────────────────────────────────────────────

def _as_int(value, name: str) -> int:
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"{name} must be a whole number, got {value!r}.")
    return int(number)


def _params_from_json(data: dict) -> AnimationParams:
    try:
        return AnimationParams(
            longitude=float(data["longitude"]),
            latitude=float(data["latitude"]),
            start_altitude=float(data.get("startAltitude", 800_000)),
            end_altitude=float(data.get("endAltitude", 2_000)),
            tilt_angle=float(data.get("tiltAngle", 45)),
            heading=float(data.get("heading", 0)),
            total_frames=_as_int(data.get("totalFrames", 180), "totalFrames"),
            easing=data.get("easing", Easing.CINEMATIC.value),
        )
    except KeyError as exc:
        raise ValueError(f"Missing field: {exc.args[0]}") from None
    except TypeError as exc:
        raise ValueError(f"Invalid field value: {exc}") from None


@app.route("/api/frames", methods=["POST"])
def camera_frames():
    data = request.get_json(force=True)
    try:
        params = _params_from_json(data)
    except ValueError as exc:
        return jsonify({"ok": False, "error": str(exc)}), 400

    frames = compute_camera_frames(params)
    return jsonify({
        "ok": True,
        "params": params.to_dict(),
        "frames": [f.to_dict() for f in frames],
    })


# ─── API: Generate fly-in ────────────────────────────────────────────────

def _run_fly_in(task_id: str, options: FlyInOptions) -> None:
    task = tasks[task_id]
    try:
        result = generate_fly_in(options)
        task["result"] = result.to_dict()
        task["status"] = "done"
    except Exception as exc:
        task["status"] = "error"
        task["error"] = str(exc)


@app.route("/api/generate", methods=["POST"])
def start_generate():
    token = app.config.get("CESIUM_TOKEN", "")
    if not token:
        return jsonify({"ok": False, "error": "Cesium ion token is not set."})

    data = request.get_json(force=True)
    city = data.get("city", "").strip()
    if not city:
        return jsonify({"ok": False, "error": "City is required."})

    easing = data.get("easing", Easing.CINEMATIC.value)
    if easing not in {e.value for e in Easing}:
        return jsonify({"ok": False, "error": f"Unknown easing '{easing}'."}), 400

    width, height = RESOLUTION_PRESETS.get(data.get("resolution", "1080p"), (1920, 1080))
    run_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    task_id = str(uuid.uuid4())[:8]
    output_dir = Path(app.config["OUTPUT_DIR"]) / f"run_{run_id}_{task_id}"

    try:
        options = FlyInOptions(
            city=city,
            output_dir=output_dir,
            cesium_token=token,
            width=width,
            height=height,
            fps=min(max(_as_int(data.get("fps", 30), "fps"), 1), 60),
            duration_sec=min(max(_as_int(data.get("durationSeconds", 6), "durationSeconds"), 1), 60),
            start_altitude=float(data.get("startAltitude", 800_000)),
            end_altitude=float(data.get("endAltitude", 2_000)),
            tilt_angle=float(data.get("tiltAngle", 45)),
            heading=float(data.get("heading", 0)),
            easing=easing,
            encode_video=bool(data.get("encodeVideo", False)),
        )
        build_params(options, 0.0, 0.0)
    except (ValueError, TypeError) as exc:
        return jsonify({"ok": False, "error": str(exc)}), 400

    tasks[task_id] = {
        "status": "running",
        "city": city,
        "output_dir": str(output_dir),
        "result": None,
        "error": None,
    }
    threading.Thread(target=_run_fly_in, args=(task_id, options), daemon=True).start()

    return jsonify({"ok": True, "taskId": task_id})


@app.route("/api/tasks/<task_id>", methods=["GET"])
def get_task_status(task_id):
    task = tasks.get(task_id)
    if task is None:
        return jsonify({"ok": False, "error": "Task not found."}), 404
    return jsonify({"ok": True, **task})


if __name__ == "__main__":
    app.config["OUTPUT_DIR"].mkdir(exist_ok=True)
    app.run(host="127.0.0.1", port=5100, debug=False)
