from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from pathlib import Path

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from models import CameraFrame

_BROWSER_ARGS = [
    "--use-gl=angle",
    "--enable-webgl",
    "--ignore-gpu-blocklist",
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
]

# Relative altitude / absolute pitch change that counts as camera movement.
_ALT_CHANGE_RATIO = 0.005
_PITCH_CHANGE_DEG = 0.1
_TILE_POLL_SEC = 0.2

_INIT_SETTLE_MS = 2_000
_PAGE_LOAD_TIMEOUT_MS = 30_000


@dataclass
class RenderOptions:
    width: int
    height: int
    cesium_token: str
    headless: bool = True
    warmup_timeout_ms: int = 20_000
    moving_timeout_ms: int = 1_500
    settle_timeout_ms: int = 3_000


def default_viewer_path() -> Path:
    return Path(__file__).resolve().parent / "web" / "viewer.html"


def frame_filename(index: int) -> str:
    return f"frame_{index + 1:04d}.png"


def camera_changed(prev: CameraFrame | None, frame: CameraFrame) -> bool:
    if prev is None:
        return True
    alt_delta = abs(frame.altitude - prev.altitude) / max(frame.altitude, 1.0)
    pitch_delta = abs(frame.pitch - prev.pitch)
    return alt_delta > _ALT_CHANGE_RATIO or pitch_delta > _PITCH_CHANGE_DEG


def _pose_args(frame: CameraFrame) -> list[float]:
    return [frame.longitude, frame.latitude, frame.altitude, frame.heading, frame.pitch, frame.roll]


async def _set_camera(page, frame: CameraFrame) -> None:
    await page.evaluate(
        "([lon, lat, alt, h, p, r]) => window.setCameraPosition(lon, lat, alt, h, p, r)",
        _pose_args(frame),
    )


async def _wait_for_tiles(page, timeout_ms: int) -> bool:
    deadline = time.monotonic() + timeout_ms / 1000.0
    while time.monotonic() < deadline:
        if await page.evaluate("() => window.areTilesLoaded()"):
            return True
        await asyncio.sleep(_TILE_POLL_SEC)
    return False


async def _wait_for_render(page) -> None:
    await page.evaluate(
        "() => new Promise((resolve) => requestAnimationFrame(() => requestAnimationFrame(resolve)))"
    )


async def _render_async(
    frames: list[CameraFrame],
    frame_dir: Path,
    options: RenderOptions,
    viewer_html_path: Path,
) -> int:
    frame_dir.mkdir(parents=True, exist_ok=True)
    for p in frame_dir.glob("frame_*.png"):
        p.unlink()

    async with async_playwright() as playwright:
        browser = None
        console_messages: list[str] = []

        def _on_console(msg) -> None:
            if msg.type in ("error", "warning"):
                console_messages.append(f"[{msg.type}] {msg.text.strip()}")

        def _on_page_error(err) -> None:
            console_messages.append(f"[pageerror] {err}")

        try:
            browser = await playwright.chromium.launch(
                headless=options.headless,
                args=_BROWSER_ARGS + [f"--window-size={options.width},{options.height}"],
            )
            page = await browser.new_page(viewport={"width": options.width, "height": options.height})
            page.on("console", _on_console)
            page.on("pageerror", _on_page_error)
            await page.goto(
                viewer_html_path.as_uri(), wait_until="networkidle", timeout=_PAGE_LOAD_TIMEOUT_MS,
            )

            init = await page.evaluate(
                """async (token) => {
                    try {
                        await window.initViewer(token);
                        return { ok: true };
                    } catch (e) {
                        return { ok: false, error: (e && e.message) || String(e) };
                    }
                }""",
                options.cesium_token,
            )
            if not init["ok"]:
                raise RuntimeError(f"CesiumJS init failed: {init['error']}")

            await page.wait_for_timeout(_INIT_SETTLE_MS)

            await _set_camera(page, frames[0])
            await _wait_for_tiles(page, options.warmup_timeout_ms)
            await _wait_for_render(page)

            prev: CameraFrame | None = None
            tiles_settled = False
            for i, frame in enumerate(frames):
                moved = camera_changed(prev, frame)
                await _set_camera(page, frame)

                if moved:
                    tiles_settled = False
                    await _wait_for_tiles(page, options.moving_timeout_ms)
                elif not tiles_settled:
                    tiles_settled = await _wait_for_tiles(page, options.settle_timeout_ms)

                await _wait_for_render(page)
                await page.screenshot(path=str(frame_dir / frame_filename(i)), type="png")
                prev = frame
        except (PlaywrightError, RuntimeError, OSError) as exc:
            console_tail = "\n".join(console_messages[-8:])
            extra = f"\nBrowser console:\n{console_tail}" if console_tail else ""
            raise RuntimeError(
                "Fly-in capture failed. Check the Cesium ion token and network access.\n"
                f"Original error: {exc}{extra}"
            ) from exc
        finally:
            if browser is not None:
                await browser.close()

    return len(frames)


def render_frames(
    frames: list[CameraFrame],
    frame_dir: Path,
    options: RenderOptions,
    viewer_html_path: Path | None = None,
) -> int:
    """Capture one PNG per camera frame into ``frame_dir``. Returns the frame count."""
    if not options.cesium_token:
        raise ValueError("Cesium ion token is required. Set --cesium-token or CESIUMION.")
    if not frames:
        raise ValueError("No camera frames to render.")

    if viewer_html_path is None:
        viewer_html_path = default_viewer_path()

    if not viewer_html_path.exists():
        raise FileNotFoundError(f"Viewer HTML file not found: {viewer_html_path}")

    return asyncio.run(_render_async(frames, frame_dir, options, viewer_html_path))
