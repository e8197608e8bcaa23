from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass
class Frame:
    idx: int
    ts_iso: str
    image: Any  # numpy array (H, W[, C])

    @property
    def height(self) -> int:
        return int(self.image.shape[0])

    @property
    def width(self) -> int:
        return int(self.image.shape[1])


@dataclass
class Detection:
    marker_id: int
    corners: Any  # (4,2) ndarray


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float

    def as_int(self) -> tuple[int, int]:
        """Pixel coordinates for drawing calls (truncated, not rounded)."""
        return int(self.x), int(self.y)


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


# At most one horizontal and one vertical direction, horizontal first.
DirectionSet = tuple[Direction, ...]
