"""
Expression Analyzer module.
Temporal smoothing of expression vectors and dominant emotion selection.
"""

from typing import Dict, Optional, Sequence, Tuple
import config


def dominant_emotion(
    expressions: Dict[str, float],
    channels: Sequence[str] = config.EMOTION_CHANNELS
) -> Tuple[Optional[str], float]:
    """
    Find the channel with the highest probability.

    Ties go to the channel that comes first in channel order. Values at or
    below zero never win, so an all-zero vector has no dominant emotion.

    Returns:
        Tuple of (emotion or None, confidence).
    """
    max_emotion = None
    max_value = 0.0

    for channel in channels:
        value = expressions.get(channel, 0.0)
        if value > max_value:
            max_value = value
            max_emotion = channel

    return max_emotion, max_value


class ExpressionSmoother:
    """
    Exponential moving average over the emotion channels.

    Call smooth() exactly once per frame, for the primary face only;
    each call advances the filter.
    """

    def __init__(
        self,
        smoothing_factor: float = config.SMOOTHING_FACTOR,
        channels: Sequence[str] = config.EMOTION_CHANNELS
    ):
        """
        Initialize the smoother.

        Args:
            smoothing_factor: EMA alpha in (0, 1]; 1 disables smoothing.
            channels: Channels whose state starts at zero.
        """
        self.channels = tuple(channels)
        self.smoothing_factor = smoothing_factor
        self._state: Dict[str, float] = {channel: 0.0 for channel in self.channels}

    @property
    def smoothing_factor(self) -> float:
        return self._alpha

    @smoothing_factor.setter
    def smoothing_factor(self, value: float):
        if not 0.0 < value <= 1.0:
            raise ValueError(f"smoothing_factor must be within (0, 1], got {value}")
        self._alpha = value

    def smooth(self, expressions: Dict[str, float]) -> Dict[str, float]:
        """
        Blend a raw vector into the running average.

        Args:
            expressions: Raw expression vector.

        Returns:
            New smoothed vector for the channels present in the input.
        """
        alpha = self._alpha
        smoothed = {}

        for emotion, value in expressions.items():
            prev = self._state.get(emotion, 0.0)
            smoothed[emotion] = alpha * value + (1 - alpha) * prev
            self._state[emotion] = smoothed[emotion]

        return smoothed

    @property
    def smoothed(self) -> Dict[str, float]:
        """Copy of the current smoothed values."""
        return dict(self._state)

    def reset(self):
        """Reset all channels to zero."""
        self._state = {channel: 0.0 for channel in self.channels}
