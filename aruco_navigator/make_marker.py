#!/usr/bin/env python3
"""Generate printable ArUco markers to point the navigator at."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import cv2
import numpy as np

from .detect import get_dict


def create_marker(
    marker_id: int,
    dict_name: str = "4x4_1000",
    size_px: int = 400,
    border_bits: int = 1,
    margin_px: int = 0,
) -> np.ndarray:
    """Marker image (grayscale), optionally padded with a white quiet zone.

    Detection needs some white around the black border, so printing with
    ``margin_px`` > 0 is recommended.
    """
    dictionary = get_dict(dict_name)
    img = cv2.aruco.generateImageMarker(dictionary, marker_id, size_px, borderBits=border_bits)
    if margin_px > 0:
        img = cv2.copyMakeBorder(
            img, margin_px, margin_px, margin_px, margin_px,
            cv2.BORDER_CONSTANT, value=255,
        )
    return img


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate ArUco marker images")
    parser.add_argument("--output-dir", default="markers", help="Output directory (default: markers)")
    parser.add_argument("--marker-ids", type=int, nargs="+", required=True,
                        help="Marker IDs to generate (e.g., 0 1 2 3)")
    parser.add_argument("--dict", default="4x4_1000", help="ArUco dictionary (default: 4x4_1000)")
    parser.add_argument("--size", type=int, default=400, help="Marker size in pixels (default: 400)")
    parser.add_argument("--border-bits", type=int, default=1)
    parser.add_argument("--margin", type=int, default=40, help="White margin in pixels (default: 40)")

    args = parser.parse_args(argv)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    for marker_id in args.marker_ids:
        try:
            img = create_marker(marker_id, args.dict, args.size, args.border_bits, args.margin)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        output_path = output_dir / f"id_{marker_id}.png"
        cv2.imwrite(str(output_path), img)
        print(f"Created marker: {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
