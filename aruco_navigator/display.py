"""Operator window, plus a headless stand-in."""

from abc import ABC, abstractmethod

import cv2


class BaseDisplay(ABC):
    @abstractmethod
    def open(self) -> None: ...

    @abstractmethod
    def show(self, image) -> bool:
        """Show a frame. Returns True when the operator asked to quit."""

    @abstractmethod
    def close(self) -> None: ...


class OpenCVDisplay(BaseDisplay):
    def __init__(self, window_name: str = "ArUco Navigator", wait_ms: int = 1):
        self.window_name = window_name
        self.wait_ms = wait_ms
        self._opened = False

    def open(self) -> None:
        cv2.namedWindow(self.window_name, cv2.WINDOW_AUTOSIZE)
        self._opened = True

    def show(self, image) -> bool:
        cv2.imshow(self.window_name, image)
        # any key quits; waitKey returns -1 when nothing was pressed
        return cv2.waitKey(self.wait_ms) >= 0

    def close(self) -> None:
        if self._opened:
            cv2.destroyWindow(self.window_name)
            self._opened = False


class NullDisplay(BaseDisplay):
    def open(self) -> None:
        return None

    def show(self, image) -> bool:
        return False

    def close(self) -> None:
        return None
