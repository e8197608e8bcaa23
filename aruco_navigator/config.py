from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Optional

import yaml

from .logging_utils import resolve_level


@dataclass
class NavigatorConfig:
    window_name: str = "ArUco Navigator"
    device: int | str = 0
    width: int = 1280
    height: int = 720
    brightness: float = 0.6
    fps: int = 30  # synthetic source only; real cameras run at their own rate
    aruco_dict: str = "4x4_1000"
    min_marker_perimeter_rate: float = 0.03
    max_marker_perimeter_rate: float = 1.0
    threshold_px: float = 10.0
    max_frames: Optional[int] = None
    dry_run: bool = False
    headless: bool = False
    log_level: str = "INFO"

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)

    def apply_overrides(self, **kwargs: Any) -> "NavigatorConfig":
        for key, value in kwargs.items():
            if value is not None and hasattr(self, key):
                setattr(self, key, value)
        return self

    def validate(self) -> "NavigatorConfig":
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"frame size must be positive, got {self.width}x{self.height}")
        if self.threshold_px <= 0:
            raise ValueError(f"threshold_px must be positive, got {self.threshold_px}")
        if not 0 < self.min_marker_perimeter_rate <= self.max_marker_perimeter_rate:
            raise ValueError(
                "marker perimeter rates must satisfy 0 < min <= max, got "
                f"min={self.min_marker_perimeter_rate} max={self.max_marker_perimeter_rate}"
            )
        if self.max_frames is not None and self.max_frames < 0:
            raise ValueError(f"max_frames must be >= 0, got {self.max_frames}")
        resolve_level(self.log_level)
        return self


def _normalize_device(value: Any, default: int | str) -> int | str:
    if value is None:
        return default
    if isinstance(value, str) and value.isdigit():
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    return str(value)


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, dict):
        raise ValueError("YAML config root must be a mapping")
    return data


def load_config(path: str | Path) -> NavigatorConfig:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")

    if p.suffix.lower() in {".yaml", ".yml"}:
        raw = _load_yaml(p)
    else:
        with p.open("r", encoding="utf-8") as fp:
            raw = json.load(fp)

    if not isinstance(raw, dict):
        raise ValueError("Config root must be a JSON/YAML object")

    cfg = NavigatorConfig()
    cfg.window_name = str(raw.get("window_name", cfg.window_name))
    cfg.device = _normalize_device(raw.get("device"), cfg.device)
    cfg.width = int(raw.get("width", cfg.width))
    cfg.height = int(raw.get("height", cfg.height))
    cfg.brightness = float(raw.get("brightness", cfg.brightness))
    cfg.fps = int(raw.get("fps", cfg.fps))
    cfg.aruco_dict = str(raw.get("aruco_dict", cfg.aruco_dict))
    cfg.min_marker_perimeter_rate = float(
        raw.get("min_marker_perimeter_rate", cfg.min_marker_perimeter_rate)
    )
    cfg.max_marker_perimeter_rate = float(
        raw.get("max_marker_perimeter_rate", cfg.max_marker_perimeter_rate)
    )
    cfg.threshold_px = float(raw.get("threshold_px", cfg.threshold_px))
    cfg.max_frames = raw.get("max_frames", cfg.max_frames)
    if cfg.max_frames is not None:
        cfg.max_frames = int(cfg.max_frames)
    cfg.dry_run = bool(raw.get("dry_run", cfg.dry_run))
    cfg.headless = bool(raw.get("headless", cfg.headless))
    cfg.log_level = str(raw.get("log_level", cfg.log_level)).upper()

    return cfg.validate()
