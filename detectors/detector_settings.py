"""
Detector Settings module.
Holds options forwarded to the external detector and measures its frame rate.
"""

import time
from collections import deque
from typing import Dict, Any, Optional, Callable, Tuple
import config


class DetectorSettings:
    """
    Options for the external face detector.
    The analytics core never consumes these; they are exposed for the
    detector driver to read before each detection call.
    """

    def __init__(
        self,
        min_confidence: float = config.DETECTOR_MIN_CONFIDENCE,
        input_size: int = config.DETECTOR_INPUT_SIZE
    ):
        self.min_confidence, self.input_size = self.validate(min_confidence, input_size)

    def update(self, min_confidence: Optional[float] = None, input_size: Optional[int] = None):
        """Update options; None leaves a value unchanged. Nothing changes if validation fails."""
        self.min_confidence, self.input_size = self.validate(min_confidence, input_size)

    def validate(
        self,
        min_confidence: Optional[float] = None,
        input_size: Optional[int] = None
    ) -> Tuple[float, int]:
        """
        Check candidate options against the current ones without applying them.

        Returns:
            The (min_confidence, input_size) pair that update() would store.

        Raises:
            ValueError: If either value is out of range.
        """
        if min_confidence is None:
            min_confidence = self.min_confidence
        if input_size is None:
            input_size = self.input_size

        if not 0.0 <= min_confidence <= 1.0:
            raise ValueError(f"min_confidence must be within [0, 1], got {min_confidence}")
        if input_size not in config.DETECTOR_INPUT_SIZES:
            raise ValueError(
                f"input_size must be one of {config.DETECTOR_INPUT_SIZES}, got {input_size}"
            )
        return min_confidence, input_size

    def to_dict(self) -> Dict[str, Any]:
        return {
            "min_confidence": self.min_confidence,
            "input_size": self.input_size
        }


class FrameRateMeter:
    """
    Rolling average of detection frames per second.
    """

    def __init__(
        self,
        window_size: int = config.FPS_WINDOW_SIZE,
        clock: Callable[[], float] = time.perf_counter
    ):
        """
        Initialize the frame rate meter.

        Args:
            window_size: Number of recent frames in the average.
            clock: Monotonic clock returning seconds.
        """
        self.clock = clock
        self.fps_history: deque = deque(maxlen=window_size)
        self.last_tick_time = clock()

    def tick(self) -> float:
        """
        Register a processed frame.

        Returns:
            Average FPS over the window, 0 if no interval could be measured.
        """
        now = self.clock()
        elapsed = now - self.last_tick_time
        self.last_tick_time = now

        if elapsed > 0:
            self.fps_history.append(1.0 / elapsed)
            return self.average_fps

        return 0.0

    @property
    def average_fps(self) -> float:
        if not self.fps_history:
            return 0.0
        return sum(self.fps_history) / len(self.fps_history)

    def reset(self):
        """Reset measurements."""
        self.fps_history.clear()
        self.last_tick_time = self.clock()
