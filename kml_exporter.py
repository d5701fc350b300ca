from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from xml.dom import minidom

from models import CameraFrame

GX = "http://www.google.com/kml/ext/2.2"
KML_NS = "http://www.opengis.net/kml/2.2"


def kml_tilt(pitch: float) -> float:
    """Cesium pitch (-90 = straight down) to KML tilt (0 = straight down)."""
    return 90.0 + pitch


def export_kml(
    frames: list[CameraFrame],
    output_path: Path,
    *,
    fps: int,
    title: str = "Fly-in",
) -> None:
    """Write the frame sequence as a KML tour playable in Google Earth."""
    if not frames:
        raise ValueError("No camera frames to export.")

    ET.register_namespace("", KML_NS)
    ET.register_namespace("gx", GX)

    kml = ET.Element(f"{{{KML_NS}}}kml")
    doc = ET.SubElement(kml, "Document")
    ET.SubElement(doc, "name").text = title

    target = frames[-1]
    pm = ET.SubElement(doc, "Placemark")
    ET.SubElement(pm, "name").text = "Target"
    point = ET.SubElement(pm, "Point")
    ET.SubElement(point, "coordinates").text = f"{target.longitude},{target.latitude},0"

    tour = ET.SubElement(doc, f"{{{GX}}}Tour")
    ET.SubElement(tour, "name").text = title
    playlist = ET.SubElement(tour, f"{{{GX}}}Playlist")

    interval = 1.0 / max(fps, 1)
    for i, frame in enumerate(frames):
        fly_to = ET.SubElement(playlist, f"{{{GX}}}FlyTo")
        duration = 0.0 if i == 0 else interval
        ET.SubElement(fly_to, f"{{{GX}}}duration").text = f"{duration:.4f}"
        ET.SubElement(fly_to, f"{{{GX}}}flyToMode").text = "smooth"

        camera = ET.SubElement(fly_to, "Camera")
        ET.SubElement(camera, "longitude").text = f"{frame.longitude:.10f}"
        ET.SubElement(camera, "latitude").text = f"{frame.latitude:.10f}"
        ET.SubElement(camera, "altitude").text = f"{frame.altitude:.2f}"
        ET.SubElement(camera, "heading").text = f"{frame.heading:.4f}"
        ET.SubElement(camera, "tilt").text = f"{kml_tilt(frame.pitch):.4f}"
        ET.SubElement(camera, "roll").text = f"{frame.roll:.4f}"
        ET.SubElement(camera, "altitudeMode").text = "absolute"

    raw_xml = ET.tostring(kml, encoding="unicode", xml_declaration=False)
    pretty = minidom.parseString(raw_xml).toprettyxml(indent="  ", encoding="utf-8")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(pretty)
