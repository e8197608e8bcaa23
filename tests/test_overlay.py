from unittest.mock import patch

import numpy as np
import pytest

from aruco_navigator.guidance import evaluate
from aruco_navigator.overlay import (
    CircleOp,
    LineOp,
    MarkersOp,
    OverlayStyle,
    TextOp,
    build_overlay,
    render,
)


def test_overlay_without_marker_is_alert_text_only():
    style = OverlayStyle()
    ops = build_overlay(evaluate(1280, 720, []), [], style)

    assert len(ops) == 1
    text = ops[0]
    assert isinstance(text, TextOp)
    assert text.text == "No markers detected"
    assert text.color == style.alert_color
    assert text.origin == (10, 50)


def test_overlay_with_marker_draws_centers_line_and_outline(make_detection):
    style = OverlayStyle()
    dets = [make_detection(4, 600.7, 360.2)]
    ops = build_overlay(evaluate(1280, 720, dets), dets, style)

    assert [type(op) for op in ops] == [CircleOp, CircleOp, LineOp, MarkersOp, TextOp]
    frame_dot, marker_dot, line, outline, text = ops
    assert frame_dot.center == (640, 360)
    assert frame_dot.color == style.frame_center_color
    assert frame_dot.thickness == style.frame_center_thickness
    assert marker_dot.center == (600, 360)
    assert marker_dot.thickness == style.marker_center_thickness
    assert (line.start, line.end) == ((640, 360), (600, 360))
    assert outline.ids == [4]
    assert text.text == "Marker ID: 4. Move camera: right"
    assert text.color == style.alert_color


def test_overlay_centered_uses_ok_color(make_detection):
    style = OverlayStyle()
    dets = [make_detection(4, 640, 360)]
    text = build_overlay(evaluate(1280, 720, dets), dets, style)[-1]
    assert text.text == "Centered. Marker ID: 4"
    assert text.color == style.ok_color


def test_render_dispatches_to_cv2(make_detection):
    dets = [make_detection(4, 100, 100)]
    ops = build_overlay(evaluate(640, 480, dets), dets)
    image = np.zeros((480, 640, 3), dtype=np.uint8)

    with patch("aruco_navigator.overlay.cv2.circle") as mock_circle, patch(
        "aruco_navigator.overlay.cv2.line"
    ) as mock_line, patch(
        "aruco_navigator.overlay.cv2.aruco.drawDetectedMarkers"
    ) as mock_markers, patch(
        "aruco_navigator.overlay.cv2.putText"
    ) as mock_text:
        assert render(image, ops) is image

    assert mock_circle.call_count == 2
    mock_line.assert_called_once()
    corners, ids = mock_markers.call_args.args[1:3]
    assert corners[0].shape == (1, 4, 2)
    assert ids.tolist() == [[4]]
    mock_text.assert_called_once()


def test_render_draws_pixels(make_detection):
    dets = [make_detection(2, 200, 150, half=30)]
    image = np.zeros((480, 640, 3), dtype=np.uint8)
    render(image, build_overlay(evaluate(640, 480, dets), dets))
    assert image.any()
    # frame-center dot is cyan in BGR
    assert image[240, 320 - 8].tolist() == [255, 255, 0]


def test_render_rejects_unknown_op():
    with pytest.raises(TypeError):
        render(np.zeros((2, 2, 3), dtype=np.uint8), ["circle"])
