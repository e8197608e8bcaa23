"""Webcam guidance for centering an ArUco marker in the frame."""

from .config import NavigatorConfig
from .guidance import Guidance, evaluate
from .navigator import Navigator, SessionSummary

__all__ = ["Guidance", "Navigator", "NavigatorConfig", "SessionSummary", "evaluate"]
