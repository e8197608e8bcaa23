"""Per-frame loop tying capture, detection, guidance, overlay and display together."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .capture import BaseCapture, OpenCVCapture, SyntheticCapture
from .config import NavigatorConfig
from .detect import ArucoDetect
from .display import BaseDisplay, NullDisplay, OpenCVDisplay
from .guidance import Guidance, evaluate
from .logging_utils import setup_logger
from .nav_types import Frame
from .overlay import OverlayStyle, build_overlay, render


@dataclass
class SessionSummary:
    frames_processed: int
    frames_with_marker: int
    frames_centered: int
    errors: int
    avg_fps: float


class Navigator:
    """Capture -> detect -> guide -> draw -> show, one frame at a time."""

    def __init__(
        self,
        config: NavigatorConfig,
        logger=None,
        capture: Optional[BaseCapture] = None,
        detector=None,
        display: Optional[BaseDisplay] = None,
        style: Optional[OverlayStyle] = None,
        on_guidance: Optional[Callable[[Frame, Guidance], None]] = None,
    ):
        self.config = config
        self.logger = logger or setup_logger(str(config.device), config.log_level)
        self.capture = capture
        self.detector = detector
        self.display = display
        self.style = style or OverlayStyle()
        self.on_guidance = on_guidance
        self._stop_event = threading.Event()

    def stop(self) -> None:
        self._stop_event.set()

    def _build_capture(self) -> BaseCapture:
        if self.capture is not None:
            return self.capture
        if self.config.dry_run:
            return SyntheticCapture(
                self.config.fps,
                self.config.width,
                self.config.height,
                dict_name=self.config.aruco_dict,
            )
        return OpenCVCapture(
            self.config.device,
            self.config.width,
            self.config.height,
            self.config.brightness,
        )

    def _build_detector(self):
        if self.detector is not None:
            return self.detector
        return ArucoDetect(
            self.config.aruco_dict,
            self.config.min_marker_perimeter_rate,
            self.config.max_marker_perimeter_rate,
        )

    def _build_display(self) -> BaseDisplay:
        if self.display is not None:
            return self.display
        if self.config.headless:
            return NullDisplay()
        return OpenCVDisplay(self.config.window_name)

    def run(self) -> SessionSummary:
        self.logger.info("config: %s", self.config.as_dict())

        self.logger.info("init aruco detector (%s)", self.config.aruco_dict)
        det = self._build_detector()

        cap = self._build_capture()
        disp = self._build_display()

        self.logger.info("init camera %s", self.config.device)
        cap.start()
        frames = 0
        with_marker = 0
        centered = 0
        errors = 0
        t0 = time.time()

        try:
            disp.open()
            self.logger.info("start cycle")
            while not self._stop_event.is_set():
                if self.config.max_frames and frames >= self.config.max_frames:
                    break

                f = cap.next_frame()
                if f is None:
                    errors += 1
                    self.logger.debug("empty frame skipped (errors=%d)", errors)
                    continue

                dets = det.detect(f)
                self.logger.debug("frame=%d detected markers: %d", f.idx, len(dets))

                guidance = evaluate(f.width, f.height, dets, self.config.threshold_px)
                if self.on_guidance is not None:
                    self.on_guidance(f, guidance)
                if guidance.marker_id is not None:
                    with_marker += 1
                    if guidance.centered:
                        centered += 1

                render(f.image, build_overlay(guidance, dets, self.style))
                frames += 1

                if disp.show(f.image):
                    self.logger.info("key pressed, stopping")
                    break
        finally:
            try:
                cap.stop()
            finally:
                disp.close()

        avg = frames / max(1e-6, (time.time() - t0))
        self.logger.info(
            "summary frames=%d with_marker=%d centered=%d avg_fps=%.2f errors=%d",
            frames, with_marker, centered, avg, errors,
        )
        return SessionSummary(frames, with_marker, centered, errors, avg)
