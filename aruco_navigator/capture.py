"""Frame sources: a real camera, or a synthetic scene with a moving marker."""

import math
import time
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

import cv2
import numpy as np

from .make_marker import create_marker
from .nav_types import Frame


class BaseCapture(ABC):
    @abstractmethod
    def start(self) -> None:
        """Acquire the source. Raises RuntimeError when it cannot be opened."""

    @abstractmethod
    def next_frame(self) -> Frame | None:
        """Next frame, or None for a missed read the caller should skip."""

    @abstractmethod
    def stop(self) -> None: ...


class OpenCVCapture(BaseCapture):
    """Webcam (or video path) read through cv2.VideoCapture."""

    def __init__(self, device: int | str, width: int, height: int, brightness: float | None = None):
        self.device = device
        self.width = width
        self.height = height
        self.brightness = brightness
        self.cap: Any = None
        self.idx = 0

    def start(self) -> None:
        self.cap = cv2.VideoCapture(self.device)
        if not self.cap.isOpened():
            self.cap.release()
            self.cap = None
            raise RuntimeError(f"Failed to open camera: {self.device}")

        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        if self.brightness is not None:
            self.cap.set(cv2.CAP_PROP_BRIGHTNESS, self.brightness)

    def next_frame(self) -> Frame | None:
        ok, img = self.cap.read()
        if not ok or img is None or img.size == 0:
            return None
        self.idx += 1
        ts = time.strftime("%Y-%m-%dT%H:%M:%S")
        return Frame(self.idx, ts, img)

    def stop(self) -> None:
        if self.cap is not None:
            self.cap.release()
            self.cap = None


def orbit_path(radius: float, steps: int = 24) -> list[tuple[float, float]]:
    """Offsets from the frame center: the center itself, then one lap of a circle."""
    path = [(0.0, 0.0)]
    for k in range(steps):
        angle = 2 * math.pi * k / steps
        path.append((radius * math.cos(angle), radius * math.sin(angle)))
    return path


class SyntheticCapture(BaseCapture):
    """
    White frames with one generated marker placed at ``path[i]`` pixels from
    the frame center (cycling), so dry runs go through detection and guidance
    without a camera. The marker is clamped inside the frame with a quiet zone.
    """

    def __init__(
        self,
        fps: int,
        width: int,
        height: int,
        marker_id: int = 0,
        dict_name: str = "4x4_1000",
        marker_size: Optional[int] = None,
        path: Optional[Sequence[tuple[float, float]]] = None,
    ):
        self.fps = fps
        self.width = width
        self.height = height
        self.marker_id = marker_id
        self.dict_name = dict_name
        self.marker_size = marker_size or min(width, height) // 4
        self.quiet_px = max(1, self.marker_size // 6)
        if self.marker_size + 2 * self.quiet_px > min(width, height):
            raise ValueError(
                f"marker of {self.marker_size}px does not fit a {width}x{height} frame"
            )
        self.path = list(path) if path is not None else orbit_path(min(width, height) / 4)
        if not self.path:
            raise ValueError("synthetic marker path is empty")
        self.idx = 0
        self._marker: Any = None
        self._next_due = 0.0

    def start(self) -> None:
        gray = create_marker(self.marker_id, self.dict_name, self.marker_size)
        self._marker = cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)
        self._next_due = time.monotonic()

    def marker_origin(self, idx: int) -> tuple[int, int]:
        """Top-left pixel of the marker in frame ``idx`` (1-based)."""
        dx, dy = self.path[(idx - 1) % len(self.path)]
        size, quiet = self.marker_size, self.quiet_px
        x0 = int(round(self.width / 2 + dx - size / 2))
        y0 = int(round(self.height / 2 + dy - size / 2))
        x0 = min(max(x0, quiet), self.width - size - quiet)
        y0 = min(max(y0, quiet), self.height - size - quiet)
        return x0, y0

    def next_frame(self) -> Frame | None:
        if self.fps > 0:
            delay = self._next_due - time.monotonic()
            if delay > 0:
                time.sleep(delay)
            self._next_due = max(self._next_due, time.monotonic()) + 1.0 / self.fps

        self.idx += 1
        img = np.full((self.height, self.width, 3), 255, dtype=np.uint8)
        x0, y0 = self.marker_origin(self.idx)
        size = self.marker_size
        img[y0:y0 + size, x0:x0 + size] = self._marker
        return Frame(self.idx, time.strftime("%Y-%m-%dT%H:%M:%S"), img)

    def stop(self) -> None:
        self._marker = None
