import cv2
import numpy as np

from .nav_types import Frame, Detection

_DICT_NAMES = (
    "4x4_50", "4x4_100", "4x4_250", "4x4_1000",
    "5x5_50", "5x5_100", "5x5_250", "5x5_1000",
    "6x6_50", "6x6_100", "6x6_250", "6x6_1000",
    "7x7_50", "7x7_100", "7x7_250", "7x7_1000",
)


def _normalize_dict_name(name: str) -> str:
    key = (name or "").strip()
    if key.upper().startswith("DICT_"):
        key = key[5:]
    return key.lower()


def get_dict(name: str):
    """
    ArUco dictionary resolver. Accepts "4x4_1000" or "DICT_4X4_1000".
    Works on OpenCV >= 4.7 (getPredefinedDictionary) and older (Dictionary_get).
    """
    key = _normalize_dict_name(name)
    if key not in _DICT_NAMES:
        raise ValueError(f"Unknown ArUco dictionary: {name}")
    code = getattr(cv2.aruco, f"DICT_{key.upper()}")

    if hasattr(cv2.aruco, "getPredefinedDictionary"):           # OpenCV >= 4.7
        return cv2.aruco.getPredefinedDictionary(code)
    return cv2.aruco.Dictionary_get(code)                        # Older OpenCV


def make_params(min_perimeter_rate: float = 0.03, max_perimeter_rate: float = 1.0):
    """Create detector parameters across OpenCV versions."""
    if hasattr(cv2.aruco, "DetectorParameters_create"):
        params = cv2.aruco.DetectorParameters_create()
    else:
        params = cv2.aruco.DetectorParameters()
    # perimeter limits are relative to the larger image side
    params.minMarkerPerimeterRate = min_perimeter_rate
    params.maxMarkerPerimeterRate = max_perimeter_rate
    return params


class ArucoDetect:
    """
    Detect ArUco markers in a frame.
    Returns a list[Detection] in the detector's own order; corners are (4,2) float32.
    """
    def __init__(
        self,
        dict_name: str = "4x4_1000",
        min_perimeter_rate: float = 0.03,
        max_perimeter_rate: float = 1.0,
    ):
        self.dictionary = get_dict(dict_name)
        self.params = make_params(min_perimeter_rate, max_perimeter_rate)
        self._detector = None
        # Prefer the newer ArucoDetector API if present
        if hasattr(cv2.aruco, "ArucoDetector"):
            self._detector = cv2.aruco.ArucoDetector(self.dictionary, self.params)

    def detect(self, f: Frame) -> list[Detection]:
        if self._detector is not None:
            corners, ids, _rej = self._detector.detectMarkers(f.image)
        else:
            corners, ids, _rej = cv2.aruco.detectMarkers(
                f.image, self.dictionary, parameters=self.params
            )

        dets: list[Detection] = []
        if ids is not None and len(ids) > 0:
            for i, mid in enumerate(np.asarray(ids).flatten()):
                pts = np.asarray(corners[i], dtype=np.float32).reshape(4, 2)
                dets.append(Detection(int(mid), pts))
        return dets
