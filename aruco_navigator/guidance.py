"""Turn one frame's detection result into camera-move guidance.

Every function here is pure: the result depends only on the current frame's
dimensions and the first detected marker. Nothing is carried between frames.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .nav_types import Detection, Direction, DirectionSet, Point2D

DEFAULT_THRESHOLD_PX = 10.0

NO_MARKERS_TEXT = "No markers detected"


@dataclass(frozen=True)
class Guidance:
    marker_id: Optional[int]
    frame_center: Point2D
    marker_center: Optional[Point2D]
    directions: DirectionSet
    text: str
    is_alert: bool

    @property
    def offset(self) -> Optional[Point2D]:
        if self.marker_center is None:
            return None
        return Point2D(
            self.marker_center.x - self.frame_center.x,
            self.marker_center.y - self.frame_center.y,
        )

    @property
    def centered(self) -> bool:
        return self.marker_id is not None and not self.directions


def compute_marker_centroid(corners) -> Point2D:
    """Mean of the four corner points, x and y independently."""
    pts = np.asarray(corners, dtype=np.float64)
    if pts.size != 8:
        raise ValueError(f"expected 4 corner points, got array of shape {pts.shape}")
    pts = pts.reshape(4, 2)
    cx, cy = pts.mean(axis=0)
    return Point2D(float(cx), float(cy))


def compute_frame_center(width: int, height: int) -> Point2D:
    return Point2D(width / 2, height / 2)


def compute_directions(
    marker_center: Point2D,
    frame_center: Point2D,
    threshold: float = DEFAULT_THRESHOLD_PX,
) -> DirectionSet:
    """Directions the *camera* must move to bring the marker to the center.

    A marker left of center (negative dx) asks for ``right``, a marker above
    center (negative dy) asks for ``down``. Offsets within +/- threshold
    (inclusive) produce no direction on that axis.
    """
    dx = marker_center.x - frame_center.x
    dy = marker_center.y - frame_center.y

    directions: list[Direction] = []
    if dx < -threshold:
        directions.append(Direction.RIGHT)
    elif dx > threshold:
        directions.append(Direction.LEFT)

    if dy < -threshold:
        directions.append(Direction.DOWN)
    elif dy > threshold:
        directions.append(Direction.UP)

    return tuple(directions)


def describe_state(marker_id: Optional[int], directions: Sequence[Direction]) -> tuple[str, bool]:
    """Status line and alert flag for the overlay."""
    if marker_id is None:
        return NO_MARKERS_TEXT, True
    if not directions:
        return f"Centered. Marker ID: {marker_id}", False
    joined = " + ".join(Direction(d).value for d in directions)
    return f"Marker ID: {marker_id}. Move camera: {joined}", True


def evaluate(
    width: int,
    height: int,
    detections: Sequence[Detection],
    threshold: float = DEFAULT_THRESHOLD_PX,
) -> Guidance:
    """Guidance for a single frame. Only the first detection is considered."""
    frame_center = compute_frame_center(width, height)

    if not detections:
        text, alert = describe_state(None, ())
        return Guidance(None, frame_center, None, (), text, alert)

    first = detections[0]
    marker_center = compute_marker_centroid(first.corners)
    directions = compute_directions(marker_center, frame_center, threshold)
    text, alert = describe_state(first.marker_id, directions)
    return Guidance(first.marker_id, frame_center, marker_center, directions, text, alert)
