"""
Attention Analyzer module.
Tracks whether the user looks at the camera and for how long.
"""

from typing import Optional, Dict, Any
import config


class AttentionAnalyzer:
    """
    Looking / looking-away detector with attention time accrual.
    """

    def __init__(self, deviation_threshold: float = config.GAZE_DEVIATION_THRESHOLD):
        """
        Initialize the attention analyzer.

        Args:
            deviation_threshold: Gaze deviation at or above which the user
                is considered to be looking away.
        """
        self.deviation_threshold = deviation_threshold

        # State tracking
        self.is_looking_at_camera = False
        self.last_check_time: Optional[float] = None

        # Metrics
        self.look_away_count = 0
        self.total_attention_time = 0.0  # ms

    def update(self, deviation: float, timestamp: float) -> bool:
        """
        Register one gaze sample.

        Time between this sample and the previous one is credited as
        attention if the previous sample was looking.

        Args:
            deviation: Output of geometry.gaze_deviation().
            timestamp: Sample time in milliseconds.

        Returns:
            True if the user is looking at the camera.
        """
        is_looking = deviation < self.deviation_threshold

        if self.last_check_time is not None and self.is_looking_at_camera:
            self.total_attention_time += max(0.0, timestamp - self.last_check_time)
        self.last_check_time = timestamp

        if self.is_looking_at_camera and not is_looking:
            self.look_away_count += 1

        self.is_looking_at_camera = is_looking
        return is_looking

    def get_attention_percentage(self, session_duration: float) -> float:
        """
        Percentage of the session spent looking at the camera.

        Args:
            session_duration: Session length in seconds.

        Returns:
            Attention percentage (0-100), 0 for an empty session.
        """
        if session_duration <= 0:
            return 0.0
        return (self.total_attention_time / (session_duration * 1000)) * 100

    def get_state(self) -> Dict[str, Any]:
        return {
            "is_looking_at_camera": self.is_looking_at_camera,
            "look_away_count": self.look_away_count,
            "total_attention_time": self.total_attention_time
        }

    def reset(self):
        """Reset all metrics."""
        self.is_looking_at_camera = False
        self.last_check_time = None
        self.look_away_count = 0
        self.total_attention_time = 0.0
