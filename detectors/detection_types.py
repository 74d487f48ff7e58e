"""
Detection Types module.
Fixed-shape view of the external face/landmark/expression detector output.

The detector yields loosely shaped objects per frame. Everything is validated
and normalised here once, so analyzers can rely on a closed channel set and
numpy point groups without re-checking.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Sequence, Mapping
import numpy as np
import config


# Landmark groups read by the analyzers; the rest are carried along untouched.
LANDMARK_GROUPS = ("left_eye", "right_eye", "mouth", "nose", "jaw",
                   "left_eyebrow", "right_eyebrow")

_GROUP_ALIASES = {
    "leftEye": "left_eye",
    "rightEye": "right_eye",
    "leftEyeBrow": "left_eyebrow",
    "rightEyeBrow": "right_eyebrow",
    "jawOutline": "jaw",
}


@dataclass(frozen=True)
class BoundingBox:
    """Face bounding box in pixel space."""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def _empty_group() -> np.ndarray:
    group = np.zeros((0, 2), dtype=float)
    group.setflags(write=False)
    return group


@dataclass(frozen=True)
class FaceLandmarks:
    """Named landmark point groups, each an (N, 2) read-only array."""
    left_eye: np.ndarray = field(default_factory=_empty_group)
    right_eye: np.ndarray = field(default_factory=_empty_group)
    mouth: np.ndarray = field(default_factory=_empty_group)
    nose: np.ndarray = field(default_factory=_empty_group)
    jaw: np.ndarray = field(default_factory=_empty_group)
    left_eyebrow: np.ndarray = field(default_factory=_empty_group)
    right_eyebrow: np.ndarray = field(default_factory=_empty_group)


@dataclass(frozen=True)
class DetectedFace:
    """One detected face: box, expression vector and optional landmarks."""
    box: BoundingBox
    expressions: Dict[str, float]
    landmarks: Optional[FaceLandmarks] = None


def parse_expressions(
    raw: Optional[Mapping[str, Any]],
    channels: Sequence[str] = config.EMOTION_CHANNELS
) -> Dict[str, float]:
    """
    Normalise a raw expression mapping onto the closed channel set.

    Args:
        raw: Mapping of channel name to probability.
        channels: Ordered channel set.

    Returns:
        Dictionary with every channel present, in channel order.

    Raises:
        ValueError: On unknown channels or non-finite values.
    """
    raw = raw or {}
    unknown = [name for name in raw if name not in channels]
    if unknown:
        raise ValueError(f"Unknown expression channels: {', '.join(sorted(unknown))}")

    expressions = {}
    for channel in channels:
        value = raw.get(channel, 0.0)
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Expression '{channel}' is not a number: {value!r}")
        if not math.isfinite(value):
            raise ValueError(f"Expression '{channel}' is not finite: {value!r}")
        expressions[channel] = value

    return expressions


def parse_point_group(points: Optional[Sequence[Any]]) -> np.ndarray:
    """
    Convert a sequence of {"x", "y"} mappings or (x, y) pairs to an (N, 2) array.

    Raises:
        ValueError: If a point is malformed.
    """
    if points is None or len(points) == 0:
        return _empty_group()

    coords = []
    for point in points:
        if isinstance(point, Mapping):
            if "x" not in point or "y" not in point:
                raise ValueError(f"Landmark point missing coordinates: {point!r}")
            coords.append((point["x"], point["y"]))
        elif hasattr(point, "x") and hasattr(point, "y"):
            coords.append((point.x, point.y))
        else:
            try:
                x, y = point
            except (TypeError, ValueError):
                raise ValueError(f"Landmark point must have 2 coordinates: {point!r}")
            coords.append((x, y))

    try:
        group = np.asarray(coords, dtype=float)
    except (TypeError, ValueError):
        raise ValueError("Landmark coordinates must be numeric")

    if not np.isfinite(group).all():
        raise ValueError("Landmark coordinates must be finite")

    group.setflags(write=False)
    return group


def parse_landmarks(raw: Optional[Any]) -> Optional[FaceLandmarks]:
    """Build FaceLandmarks from a mapping of group name to points."""
    if raw is None:
        return None
    if isinstance(raw, FaceLandmarks):
        return raw
    if not isinstance(raw, Mapping):
        raise ValueError(f"Landmarks must be a mapping of groups, got {type(raw).__name__}")

    groups = {}
    for name, points in raw.items():
        key = _GROUP_ALIASES.get(name, name)
        if key in LANDMARK_GROUPS:
            groups[key] = parse_point_group(points)

    return FaceLandmarks(**groups)


def parse_box(raw: Optional[Any]) -> BoundingBox:
    """
    Build a BoundingBox from a mapping or an object with x, y, width, height.

    Raises:
        ValueError: If the box is malformed or not finite.
    """
    if raw is None:
        return BoundingBox()
    if isinstance(raw, BoundingBox):
        return raw

    if isinstance(raw, Mapping):
        values = [raw.get(name, 0.0) for name in ("x", "y", "width", "height")]
    elif all(hasattr(raw, name) for name in ("x", "y", "width", "height")):
        values = [raw.x, raw.y, raw.width, raw.height]
    else:
        raise ValueError(f"Malformed bounding box: {raw!r}")

    try:
        x, y, width, height = (float(value) for value in values)
    except (TypeError, ValueError):
        raise ValueError(f"Malformed bounding box: {raw!r}")
    if not all(math.isfinite(value) for value in (x, y, width, height)):
        raise ValueError(f"Bounding box is not finite: {raw!r}")

    return BoundingBox(x=x, y=y, width=width, height=height)


def parse_detection(
    raw: Any,
    channels: Sequence[str] = config.EMOTION_CHANNELS
) -> DetectedFace:
    """
    Parse a single raw detection.

    Accepts either a DetectedFace or a mapping with "expressions",
    "landmarks" and a "box" (or nested {"detection": {"box": ...}}).
    """
    if isinstance(raw, DetectedFace):
        return raw
    if not isinstance(raw, Mapping):
        raise ValueError(f"Detection must be a mapping, got {type(raw).__name__}")

    box = raw.get("box")
    if box is None and isinstance(raw.get("detection"), Mapping):
        box = raw["detection"].get("box")

    return DetectedFace(
        box=parse_box(box),
        expressions=parse_expressions(raw.get("expressions"), channels),
        landmarks=parse_landmarks(raw.get("landmarks"))
    )


def parse_detections(
    raw: Optional[Sequence[Any]],
    channels: Sequence[str] = config.EMOTION_CHANNELS
) -> List[DetectedFace]:
    """
    Parse one frame of detector output.

    Args:
        raw: Sequence (possibly empty or None) of raw detections.
        channels: Ordered channel set.

    Returns:
        List of DetectedFace in detector order.
    """
    if not raw:
        return []
    return [parse_detection(item, channels) for item in raw]
