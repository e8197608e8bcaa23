import itertools

import numpy as np
import pytest

from aruco_navigator.guidance import (
    compute_directions,
    compute_frame_center,
    compute_marker_centroid,
    describe_state,
    evaluate,
)
from aruco_navigator.nav_types import Detection, Direction, Point2D


def test_centroid_is_mean_of_corners():
    corners = [(0, 0), (10, 0), (10, 10), (0, 10)]
    assert compute_marker_centroid(corners) == Point2D(5.0, 5.0)


def test_centroid_of_skewed_quad_uses_all_four_points():
    corners = np.array([[[1.0, 2.0], [9.0, 3.0], [12.0, 11.0], [2.0, 8.0]]], dtype=np.float32)
    c = compute_marker_centroid(corners)
    assert c.x == pytest.approx(6.0)
    assert c.y == pytest.approx(6.0)


def test_centroid_rejects_wrong_point_count():
    with pytest.raises(ValueError):
        compute_marker_centroid([(0, 0), (1, 1), (2, 2)])


def test_frame_center_uses_float_division():
    assert compute_frame_center(1280, 720) == Point2D(640.0, 360.0)
    assert compute_frame_center(641, 481) == Point2D(320.5, 240.5)


def test_point_as_int_truncates():
    assert Point2D(5.9, 2.2).as_int() == (5, 2)


@pytest.mark.parametrize(
    "marker, expected",
    [
        ((650, 360), ()),
        ((630, 350), ()),
        ((651, 360), (Direction.LEFT,)),
        ((629, 360), (Direction.RIGHT,)),
        ((640, 371), (Direction.UP,)),
        ((640, 349), (Direction.DOWN,)),
        ((600, 300), (Direction.RIGHT, Direction.DOWN)),
        ((700, 400), (Direction.LEFT, Direction.UP)),
    ],
)
def test_directions_follow_camera_move_convention(marker, expected):
    frame_center = Point2D(640, 360)
    assert compute_directions(Point2D(*marker), frame_center, 10) == expected


def test_threshold_is_configurable():
    frame_center = Point2D(640, 360)
    marker = Point2D(670, 360)
    assert compute_directions(marker, frame_center, 10) == (Direction.LEFT,)
    assert compute_directions(marker, frame_center, 30) == ()


def test_directions_are_deterministic():
    args = (Point2D(600.5, 377.25), Point2D(640, 360), 10)
    assert compute_directions(*args) == compute_directions(*args)


def test_directions_never_contradict():
    frame_center = Point2D(0, 0)
    offsets = [-50, -11, -10, -3, 0, 3, 10, 11, 50]
    for dx, dy in itertools.product(offsets, offsets):
        dirs = set(compute_directions(Point2D(dx, dy), frame_center, 10))
        assert not {Direction.LEFT, Direction.RIGHT} <= dirs
        assert not {Direction.UP, Direction.DOWN} <= dirs
        assert len(dirs) <= 2


def test_describe_no_marker():
    assert describe_state(None, ()) == ("No markers detected", True)
    assert describe_state(None, (Direction.LEFT,)) == ("No markers detected", True)


def test_describe_centered():
    assert describe_state(7, ()) == ("Centered. Marker ID: 7", False)


def test_describe_move_single_direction():
    assert describe_state(7, (Direction.RIGHT,)) == ("Marker ID: 7. Move camera: right", True)


def test_describe_move_two_directions():
    text, alert = describe_state(3, (Direction.RIGHT, Direction.DOWN))
    assert alert is True
    prefix = "Marker ID: 3. Move camera: "
    assert text.startswith(prefix)
    assert set(text[len(prefix):].split(" + ")) == {"right", "down"}


def test_evaluate_without_detections():
    g = evaluate(1280, 720, [])
    assert g.marker_id is None
    assert g.marker_center is None
    assert g.offset is None
    assert g.directions == ()
    assert (g.text, g.is_alert) == ("No markers detected", True)
    assert not g.centered


def test_evaluate_centered_scenario(make_detection):
    g = evaluate(1280, 720, [make_detection(5, 650, 360)], threshold=10)
    assert g.frame_center == Point2D(640, 360)
    assert g.marker_center == Point2D(650, 360)
    assert g.offset == Point2D(10, 0)
    assert g.directions == ()
    assert g.text == "Centered. Marker ID: 5"
    assert g.is_alert is False
    assert g.centered


def test_evaluate_off_center_scenario(make_detection):
    g = evaluate(1280, 720, [make_detection(5, 600, 360)], threshold=10)
    assert g.directions == (Direction.RIGHT,)
    assert g.text == "Marker ID: 5. Move camera: right"
    assert g.is_alert is True


def test_evaluate_uses_first_detection_only(make_detection):
    dets = [make_detection(1, 640, 360), make_detection(2, 10, 10)]
    g = evaluate(1280, 720, dets)
    assert g.marker_id == 1
    assert g.centered


def test_evaluate_accepts_detector_shaped_corners():
    corners = np.array([[[630, 350], [650, 350], [650, 370], [630, 370]]], dtype=np.float32)
    g = evaluate(1280, 720, [Detection(9, corners)])
    assert g.marker_center == Point2D(640, 360)
