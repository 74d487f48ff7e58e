"""
Fatigue Analyzer module.
Counts blinks and yawns from eye and mouth aspect ratios.
"""

from typing import Dict, Any
from enum import Enum
import config


class EyeState(Enum):
    """Binary eye state."""
    OPEN = "open"
    CLOSED = "closed"


class MouthState(Enum):
    """Binary mouth state."""
    OPEN = "open"
    CLOSED = "closed"


class FatigueAnalyzer:
    """
    Two-state blink and yawn detectors.

    A blink is counted when the eye reopens (closed -> open), a yawn when the
    mouth closes again (open -> closed). There is a single threshold and no
    hysteresis band, so input oscillating around a threshold counts one event
    per crossing pair.
    """

    def __init__(
        self,
        ear_threshold: float = config.EAR_THRESHOLD,
        mar_threshold: float = config.MAR_THRESHOLD
    ):
        """
        Initialize the fatigue analyzer.

        Args:
            ear_threshold: Eye aspect ratio below which the eye is closed.
            mar_threshold: Mouth aspect ratio above which the mouth is open.
        """
        self.ear_threshold = ear_threshold
        self.mar_threshold = mar_threshold

        self.last_eye_state = EyeState.OPEN
        self.last_mouth_state = MouthState.CLOSED
        self.blink_count = 0
        self.yawn_count = 0

    def detect_blink(self, ear: float) -> bool:
        """
        Update eye state from an EAR sample.

        Returns:
            True while the eye is closed.
        """
        current_state = EyeState.CLOSED if ear < self.ear_threshold else EyeState.OPEN

        if self.last_eye_state == EyeState.CLOSED and current_state == EyeState.OPEN:
            self.blink_count += 1

        self.last_eye_state = current_state
        return current_state == EyeState.CLOSED

    def detect_yawn(self, mar: float) -> bool:
        """
        Update mouth state from a MAR sample.

        Returns:
            True while the mouth is wide open.
        """
        current_state = MouthState.OPEN if mar > self.mar_threshold else MouthState.CLOSED

        if self.last_mouth_state == MouthState.OPEN and current_state == MouthState.CLOSED:
            self.yawn_count += 1

        self.last_mouth_state = current_state
        return current_state == MouthState.OPEN

    def get_state(self) -> Dict[str, Any]:
        return {
            "blink_count": self.blink_count,
            "yawn_count": self.yawn_count,
            "eye_state": self.last_eye_state.value,
            "mouth_state": self.last_mouth_state.value
        }

    def reset(self):
        """Reset states and counters."""
        self.last_eye_state = EyeState.OPEN
        self.last_mouth_state = MouthState.CLOSED
        self.blink_count = 0
        self.yawn_count = 0
