"""
Calibration module.
Captures a baseline expression vector and reports deviation from it.
"""

import logging
from typing import Dict, Optional, Any
import config

logger = logging.getLogger(__name__)


class ExpressionCalibration:
    """
    Baseline store for the user's resting expression.

    Callers must only calibrate with a real face vector; no validation is
    done here.
    """

    def __init__(self, deviation_threshold: float = config.CALIBRATION_DEVIATION_THRESHOLD):
        self.deviation_threshold = deviation_threshold
        self.baseline: Optional[Dict[str, float]] = None
        self.is_calibrated = False

    def calibrate(self, expressions: Dict[str, float]) -> bool:
        """
        Store a copy of the vector as the baseline.

        Returns:
            Always True.
        """
        self.baseline = dict(expressions)
        self.is_calibrated = True
        logger.info("Calibration complete: %s", self.baseline)
        return True

    def deviation(self, expressions: Dict[str, float]) -> Dict[str, float]:
        """
        Per-channel excess over the baseline, clamped at zero.

        Returns the input unchanged when not calibrated.
        """
        if not self.is_calibrated or self.baseline is None:
            return expressions

        return {
            emotion: max(0.0, value - self.baseline.get(emotion, 0.0))
            for emotion, value in expressions.items()
        }

    def get_state(self) -> Dict[str, Any]:
        return {
            "is_calibrated": self.is_calibrated,
            "baseline": dict(self.baseline) if self.baseline is not None else None,
            "deviation_threshold": self.deviation_threshold
        }

    def reset(self):
        """Clear the baseline."""
        self.baseline = None
        self.is_calibrated = False
