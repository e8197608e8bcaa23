import numpy as np
import pytest

from aruco_navigator.nav_types import Detection, Frame


def square_corners(cx: float, cy: float, half: float = 10.0) -> np.ndarray:
    """Axis-aligned marker quad centered on (cx, cy), clockwise from top-left."""
    return np.array(
        [
            [cx - half, cy - half],
            [cx + half, cy - half],
            [cx + half, cy + half],
            [cx - half, cy + half],
        ],
        dtype=np.float32,
    )


@pytest.fixture
def make_detection():
    def _make(marker_id: int, cx: float, cy: float, half: float = 10.0) -> Detection:
        return Detection(marker_id, square_corners(cx, cy, half))

    return _make


@pytest.fixture
def make_frame():
    def _make(idx: int = 1, width: int = 1280, height: int = 720) -> Frame:
        return Frame(idx, "ts", np.zeros((height, width, 3), dtype=np.uint8))

    return _make
