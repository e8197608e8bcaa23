"""Command-line entry point: ``python -m aruco_navigator.run``."""

import argparse
import signal
import sys

from .config import NavigatorConfig, load_config
from .logging_utils import setup_logger
from .navigator import Navigator


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Show which way to move the camera to center an ArUco marker"
    )
    ap.add_argument("--config", help="Path to JSON/YAML config")

    ap.add_argument("--device", help="Camera index or video path")
    ap.add_argument("--width", type=int)
    ap.add_argument("--height", type=int)
    ap.add_argument("--brightness", type=float)
    ap.add_argument("--dict")
    ap.add_argument("--threshold", type=float, help="Dead zone around the center, in pixels")
    ap.add_argument("--max-frames", type=int)
    ap.add_argument("--window-name")
    ap.add_argument("--dry-run", action="store_true", help="Use blank synthetic frames")
    ap.add_argument("--headless", action="store_true", help="Do not open a window")
    ap.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    return ap


def _apply_args(cfg: NavigatorConfig, args: argparse.Namespace) -> NavigatorConfig:
    device = args.device
    if isinstance(device, str) and device.isdigit():
        device = int(device)

    cfg.apply_overrides(
        device=device,
        width=args.width,
        height=args.height,
        brightness=args.brightness,
        aruco_dict=args.dict,
        threshold_px=args.threshold,
        max_frames=args.max_frames,
        window_name=args.window_name,
        dry_run=args.dry_run if args.dry_run else None,
        headless=args.headless if args.headless else None,
        log_level=args.log_level,
    )
    return cfg


def main(argv=None) -> int:
    ap = _build_parser()
    args = ap.parse_args(argv)

    logger = setup_logger("startup", args.log_level or "INFO")
    try:
        cfg = load_config(args.config) if args.config else NavigatorConfig()
        cfg = _apply_args(cfg, args).validate()
    except (FileNotFoundError, ValueError) as exc:
        logger.error("invalid configuration: %s", exc)
        return 1

    logger = setup_logger(str(cfg.device), cfg.log_level)
    navigator = Navigator(cfg, logger=logger)

    def _handle_signal(_sig, _frame):
        navigator.stop()

    signal.signal(signal.SIGINT, _handle_signal)
    if hasattr(signal, "SIGTERM"):
        signal.signal(signal.SIGTERM, _handle_signal)

    try:
        summary = navigator.run()
    except (FileNotFoundError, RuntimeError, ValueError) as exc:
        logger.error("startup failed: %s", exc)
        return 1

    print(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
