"""
Emotion Analysis Engine - Main Orchestrator.
Combines all components into a unified interface for emotion session analysis.
"""

import logging
import time
from typing import Dict, Any, Optional, Sequence, Callable, List

# Import detector boundary
from detectors.detection_types import parse_detections
from detectors.detector_settings import DetectorSettings, FrameRateMeter

# Import analytics
from analytics.session_analytics import SessionAnalytics
from analytics.report_generator import ReportGenerator

# Import feedback
from feedback.theme_selector import ThemeSelector

import config

logger = logging.getLogger(__name__)


class EmotionAnalysisEngine:
    """
    Main orchestrator for emotion session analysis.

    Feed it one frame of detector output at a time with analyze_detections();
    everything downstream of the detector is handled here.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        frame_clock: Callable[[], float] = time.perf_counter,
        **analytics_settings
    ):
        """
        Initialize the emotion analysis engine.

        Args:
            clock: Wall clock in seconds used for session timing.
            frame_clock: Monotonic clock in seconds used for FPS.
            **analytics_settings: Overrides passed to SessionAnalytics.
        """
        self.detector_settings = DetectorSettings()
        self.frame_rate = FrameRateMeter(clock=frame_clock)
        self.session_analytics = SessionAnalytics(clock=clock, **analytics_settings)
        self.report_generator = ReportGenerator()
        self.theme_selector = ThemeSelector()

        # State
        self.last_primary_expressions: Optional[Dict[str, float]] = None
        self.last_result: Optional[Dict[str, Any]] = None
        self.current_fps = 0.0

        # Callbacks
        self._on_frame_callback: Optional[Callable] = None
        self._on_theme_callback: Optional[Callable] = None

    def analyze_detections(self, detections: Optional[Sequence[Any]]) -> Optional[Dict[str, Any]]:
        """
        Analyze one frame of detector output.

        This is the main entry point for external integration.

        Args:
            detections: Raw detections (mappings) or DetectedFace objects.

        Returns:
            Frame result from SessionAnalytics, or None when no session is active.

        Raises:
            ValueError: If the detector output is malformed.
        """
        faces = parse_detections(detections, self.session_analytics.channels)
        self.current_fps = self.frame_rate.tick()

        result = self.session_analytics.process_frame(faces)
        if result is None:
            return None

        self.last_primary_expressions = dict(faces[0].expressions) if faces else None
        self.last_result = result

        theme_update = self.theme_selector.update_for_emotion(
            result["dominant_emotion"], result["confidence"]
        )

        if self._on_frame_callback:
            self._on_frame_callback(result)
        if theme_update is not None and self._on_theme_callback:
            self._on_theme_callback(theme_update)

        return result

    def calibrate_now(self) -> bool:
        """
        Use the latest primary face as the neutral baseline.

        Returns:
            False if the last frame had no face, True otherwise.
        """
        if self.last_primary_expressions is None:
            logger.warning("Calibration skipped: no face in the last frame")
            return False
        return self.session_analytics.calibrate(self.last_primary_expressions)

    def get_current_state(self) -> Dict[str, Any]:
        """
        Get a simplified view of the current state.
        Useful for UI updates and quick status checks.
        """
        result = self.last_result or {}
        analytics = self.session_analytics

        return {
            "is_active": analytics.is_active,
            "dominant_emotion": result.get("dominant_emotion"),
            "confidence": result.get("confidence", 0.0),
            "is_stable": result.get("is_stable", False),
            "is_calibrated": analytics.calibration.is_calibrated,
            "attention": result.get("attention", False),
            "fatigue": analytics.fatigue.get_state(),
            "gaze": analytics.attention.get_state(),
            "theme": self.theme_selector.get_current_theme(),
            "fps": round(self.current_fps, 1),
            "session_duration": analytics.get_session_duration(),
            "frames_processed": analytics.total_frames
        }

    def get_timeline(self, duration_seconds: float = config.TIMELINE_WINDOW) -> List[Dict[str, Any]]:
        return self.session_analytics.get_timeline_data(duration_seconds)

    def update_config(self, **options):
        """
        Update analytics and detector settings.

        Accepts SessionAnalytics keys plus min_confidence and input_size.
        Everything is validated before anything is applied.
        """
        detector_options = {
            key: options.pop(key) for key in ("min_confidence", "input_size") if key in options
        }
        if detector_options:
            self.detector_settings.validate(**detector_options)
        if options:
            self.session_analytics.update_config(**options)
        if detector_options:
            self.detector_settings.update(**detector_options)

    def start_session(self):
        """Start a new analysis session."""
        self.last_primary_expressions = None
        self.last_result = None
        self.frame_rate.reset()
        self.theme_selector.reset()
        self.session_analytics.start_session()

    def end_session(self) -> Dict[str, Any]:
        """
        End the current session and generate report.

        Returns:
            Final session report.
        """
        self.session_analytics.end_session()

        return self.report_generator.generate_report(
            self.session_analytics.get_summary(),
            self.session_analytics.get_timeline_data(self.session_analytics.history.duration),
            include_timeline=True
        )

    def get_json_report(self, include_timeline: bool = False) -> str:
        """
        Get JSON-formatted session report.

        Args:
            include_timeline: Whether to include the retained history.

        Returns:
            JSON string.
        """
        summary = self.session_analytics.get_summary()
        timeline = None
        if include_timeline:
            timeline = self.session_analytics.get_timeline_data(self.session_analytics.history.duration)

        return self.report_generator.generate_json_report(summary, timeline, include_timeline)

    def reset(self):
        """Reset all components."""
        self.session_analytics.reset()
        self.frame_rate.reset()
        self.theme_selector.reset()
        self.last_primary_expressions = None
        self.last_result = None
        self.current_fps = 0.0

    def set_on_frame_callback(self, callback: Callable):
        """
        Set callback to be called after each frame is analyzed.

        Args:
            callback: Function that receives the frame result.
        """
        self._on_frame_callback = callback

    def set_on_theme_callback(self, callback: Callable):
        """
        Set callback to be called when the emotion theme changes.

        Args:
            callback: Function that receives the theme update dictionary.
        """
        self._on_theme_callback = callback


# Convenience function for quick integration
def create_engine(**analytics_settings) -> EmotionAnalysisEngine:
    """
    Factory function to create an EmotionAnalysisEngine.

    Returns:
        Configured EmotionAnalysisEngine instance.
    """
    return EmotionAnalysisEngine(**analytics_settings)
