"""Drawing instructions for the guidance overlay and their OpenCV renderer.

``build_overlay`` is pure and decides *what* goes on screen; ``render`` is
the only place that touches pixels.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Union

import cv2
import numpy as np

from .guidance import Guidance
from .nav_types import Detection

Color = tuple[int, int, int]  # BGR


@dataclass
class OverlayStyle:
    ok_color: Color = (0, 255, 0)
    alert_color: Color = (0, 0, 255)
    frame_center_color: Color = (255, 255, 0)
    marker_center_color: Color = (0, 0, 255)
    line_color: Color = (0, 255, 255)
    outline_color: Color = (0, 255, 0)
    point_radius: int = 8
    frame_center_thickness: int = 8
    marker_center_thickness: int = 4
    line_thickness: int = 4
    text_origin: tuple[int, int] = (10, 50)
    font: int = cv2.FONT_HERSHEY_PLAIN
    font_scale: float = 3.0
    text_thickness: int = 5


@dataclass
class CircleOp:
    center: tuple[int, int]
    radius: int
    color: Color
    thickness: int


@dataclass
class LineOp:
    start: tuple[int, int]
    end: tuple[int, int]
    color: Color
    thickness: int


@dataclass
class MarkersOp:
    corners: list = field(default_factory=list)
    ids: list[int] = field(default_factory=list)
    color: Color = (0, 255, 0)


@dataclass
class TextOp:
    text: str
    origin: tuple[int, int]
    color: Color
    font: int
    scale: float
    thickness: int


DrawOp = Union[CircleOp, LineOp, MarkersOp, TextOp]


def build_overlay(
    guidance: Guidance,
    detections: Sequence[Detection],
    style: OverlayStyle | None = None,
) -> list[DrawOp]:
    style = style or OverlayStyle()
    ops: list[DrawOp] = []

    if guidance.marker_center is not None:
        frame_pt = guidance.frame_center.as_int()
        marker_pt = guidance.marker_center.as_int()
        ops.append(CircleOp(frame_pt, style.point_radius, style.frame_center_color,
                            style.frame_center_thickness))
        ops.append(CircleOp(marker_pt, style.point_radius, style.marker_center_color,
                            style.marker_center_thickness))
        ops.append(LineOp(frame_pt, marker_pt, style.line_color, style.line_thickness))
        ops.append(MarkersOp(
            [d.corners for d in detections],
            [d.marker_id for d in detections],
            style.outline_color,
        ))

    color = style.alert_color if guidance.is_alert else style.ok_color
    ops.append(TextOp(guidance.text, style.text_origin, color, style.font,
                      style.font_scale, style.text_thickness))
    return ops


def render(image, ops: Sequence[DrawOp]):
    """Draw ``ops`` onto ``image`` in place and return it."""
    for op in ops:
        if isinstance(op, CircleOp):
            cv2.circle(image, op.center, op.radius, op.color, op.thickness)
        elif isinstance(op, LineOp):
            cv2.line(image, op.start, op.end, op.color, op.thickness)
        elif isinstance(op, MarkersOp):
            if not op.ids:
                continue
            corners = [np.asarray(c, dtype=np.float32).reshape(1, 4, 2) for c in op.corners]
            ids = np.array(op.ids, dtype=np.int32).reshape(-1, 1)
            cv2.aruco.drawDetectedMarkers(image, corners, ids, op.color)
        elif isinstance(op, TextOp):
            cv2.putText(image, op.text, op.origin, op.font, op.scale, op.color, op.thickness)
        else:
            raise TypeError(f"unsupported draw op: {type(op).__name__}")
    return image
