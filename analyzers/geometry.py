"""
Geometry module.
Scalar signals derived from facial landmark point groups.

Every function has a fallback for missing or degenerate geometry, so a frame
with incomplete landmarks never aborts processing.
"""

from typing import Optional
import numpy as np
import config


def _distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points."""
    return float(np.linalg.norm(a - b))


def eye_aspect_ratio(eye: Optional[np.ndarray]) -> float:
    """
    Calculate the Eye Aspect Ratio (EAR).

    EAR = (|p2-p6| + |p3-p5|) / (2 * |p1-p4|)

    Args:
        eye: Ordered eye outline, at least 6 points.

    Returns:
        EAR value, or 1.0 (fully open) for missing or degenerate geometry.
    """
    if eye is None or len(eye) < 6:
        return 1.0

    p1, p2, p3, p4, p5, p6 = eye[:6]

    horizontal = _distance(p1, p4)
    if horizontal == 0:
        return 1.0

    return (_distance(p2, p6) + _distance(p3, p5)) / (2 * horizontal)


def mouth_aspect_ratio(mouth: Optional[np.ndarray]) -> float:
    """
    Calculate the Mouth Aspect Ratio (MAR) from the outer mouth outline.

    Uses point 3 (top), 9 (bottom), 0 (left corner) and 6 (right corner).

    Returns:
        MAR value, or 0.0 for missing or degenerate geometry.
    """
    if mouth is None or len(mouth) < 12:
        return 0.0

    horizontal = _distance(mouth[0], mouth[6])
    if horizontal == 0:
        return 0.0

    return _distance(mouth[3], mouth[9]) / horizontal


def gaze_deviation(
    left_eye: Optional[np.ndarray],
    right_eye: Optional[np.ndarray],
    nose: Optional[np.ndarray]
) -> Optional[float]:
    """
    Calculate horizontal nose offset from the midpoint between the eyes,
    normalised by the horizontal inter-eye distance.

    Args:
        left_eye: Left eye outline.
        right_eye: Right eye outline.
        nose: Nose points; the tip is at config.NOSE_TIP_INDEX.

    Returns:
        Deviation (0 = nose centred), or None if it cannot be computed.
    """
    if left_eye is None or right_eye is None or nose is None:
        return None
    if len(left_eye) == 0 or len(right_eye) == 0 or len(nose) <= config.NOSE_TIP_INDEX:
        return None

    left_center = np.mean(left_eye, axis=0)
    right_center = np.mean(right_eye, axis=0)
    face_center = (left_center + right_center) / 2

    eye_distance = abs(right_center[0] - left_center[0])
    if eye_distance == 0:
        return None

    nose_tip = nose[config.NOSE_TIP_INDEX]
    deviation = float(abs(nose_tip[0] - face_center[0]) / eye_distance)
    if not np.isfinite(deviation):
        return None
    return deviation
