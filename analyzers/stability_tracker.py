"""
Stability Tracker module.
Debounces the dominant emotion by counting consecutive identical frames.
"""

from typing import Optional
import config


class StabilityTracker:
    """
    Run-length counter over the dominant emotion.
    None (no dominant emotion) is tracked like any other value.
    """

    def __init__(self, threshold: int = config.STABILITY_FRAMES):
        """
        Args:
            threshold: Consecutive frames needed to call an emotion stable.
        """
        self.threshold = threshold
        self.current_emotion: Optional[str] = None
        self.consecutive_count = 0

    def update(self, emotion: Optional[str]) -> bool:
        """
        Register the dominant emotion of a frame.

        Returns:
            True once the current run reaches the threshold.
        """
        if emotion == self.current_emotion:
            self.consecutive_count += 1
        else:
            self.current_emotion = emotion
            self.consecutive_count = 1

        return self.is_stable

    @property
    def is_stable(self) -> bool:
        return self.consecutive_count >= self.threshold

    def reset(self):
        self.current_emotion = None
        self.consecutive_count = 0
