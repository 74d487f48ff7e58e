"""
Session Analytics module.
Runs the per-frame pipeline and aggregates emotion, attention and fatigue
metrics over a session.
"""

import logging
import time
from typing import Dict, Any, List, Optional, Sequence, Callable

from analyzers.geometry import eye_aspect_ratio, mouth_aspect_ratio, gaze_deviation
from analyzers.expression_analyzer import ExpressionSmoother, dominant_emotion
from analyzers.fatigue_analyzer import FatigueAnalyzer
from analyzers.attention_analyzer import AttentionAnalyzer
from analyzers.calibration import ExpressionCalibration
from analyzers.stability_tracker import StabilityTracker
from analytics.emotion_history import EmotionHistory, HistoryEntry
from detectors.detection_types import DetectedFace, FaceLandmarks
import config

logger = logging.getLogger(__name__)


class SessionAnalytics:
    """
    Owns all per-session state and turns detector output into frame results
    and session summaries.

    One instance per session owner; start_session() resets everything,
    end_session() freezes the state so summaries stay readable until the
    next start.
    """

    CONFIG_KEYS = ("history_duration", "timeline_resolution", "smoothing_factor", "stability_frames")

    def __init__(
        self,
        history_duration: float = config.HISTORY_DURATION,
        timeline_resolution: float = config.TIMELINE_RESOLUTION,
        smoothing_factor: float = config.SMOOTHING_FACTOR,
        stability_frames: int = config.STABILITY_FRAMES,
        channels: Sequence[str] = config.EMOTION_CHANNELS,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize session analytics.

        Args:
            history_duration: Seconds of history retained.
            timeline_resolution: Minimum ms between history entries.
            smoothing_factor: EMA alpha for the primary face.
            stability_frames: Frames needed for a stable emotion.
            channels: Ordered emotion channel set.
            clock: Wall clock returning seconds.
        """
        self.channels = tuple(channels)
        self.clock = clock

        self.smoother = ExpressionSmoother(smoothing_factor, self.channels)
        self.stability = StabilityTracker(stability_frames)
        self.calibration = ExpressionCalibration()
        self.fatigue = FatigueAnalyzer()
        self.attention = AttentionAnalyzer()
        self.history = EmotionHistory(history_duration, timeline_resolution)

        self._validate_config(self.get_config())

        # Session state
        self.start_time: Optional[float] = None
        self.first_detection_time: Optional[float] = None
        self.is_active = False
        self.total_frames = 0
        self.frames_with_face = 0

        # Frequency tables
        self.frequency_count: Dict[str, int] = {}
        self.confidence_sum: Dict[str, float] = {}
        self._reset_tables()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def get_config(self) -> Dict[str, Any]:
        """Current analytics settings."""
        return {
            "history_duration": self.history.duration,
            "timeline_resolution": self.history.resolution,
            "smoothing_factor": self.smoother.smoothing_factor,
            "stability_frames": self.stability.threshold
        }

    def update_config(self, **options):
        """
        Change settings; takes effect from the next processed frame.

        Raises:
            ValueError: On unknown keys or out-of-range values.
        """
        unknown = set(options) - set(self.CONFIG_KEYS)
        if unknown:
            raise ValueError(f"Unknown analytics settings: {', '.join(sorted(unknown))}")

        merged = self.get_config()
        merged.update(options)
        self._validate_config(merged)

        self.history.duration = merged["history_duration"]
        self.history.resolution = merged["timeline_resolution"]
        self.smoother.smoothing_factor = merged["smoothing_factor"]
        self.stability.threshold = merged["stability_frames"]
        logger.debug("Analytics config updated: %s", options)

    @staticmethod
    def _validate_config(settings: Dict[str, Any]):
        if settings["history_duration"] <= 0:
            raise ValueError(f"history_duration must be positive, got {settings['history_duration']}")
        if settings["timeline_resolution"] < 0:
            raise ValueError(f"timeline_resolution must not be negative, got {settings['timeline_resolution']}")
        if not 0.0 < settings["smoothing_factor"] <= 1.0:
            raise ValueError(f"smoothing_factor must be within (0, 1], got {settings['smoothing_factor']}")
        if int(settings["stability_frames"]) != settings["stability_frames"] or settings["stability_frames"] < 1:
            raise ValueError(f"stability_frames must be a positive integer, got {settings['stability_frames']}")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_session(self):
        """Start a fresh session, discarding everything from the previous one."""
        self.reset()
        self.start_time = self._now()
        self.is_active = True
        logger.info("Analytics session started")

    def end_session(self):
        """Stop processing frames; collected data stays queryable."""
        self.is_active = False
        logger.info("Analytics session ended after %d frames", self.total_frames)

    def reset(self):
        """Reset all analytics data."""
        self.start_time = None
        self.first_detection_time = None
        self.is_active = False
        self.total_frames = 0
        self.frames_with_face = 0

        self.smoother.reset()
        self.stability.reset()
        self.calibration.reset()
        self.fatigue.reset()
        self.attention.reset()
        self.history.clear()
        self._reset_tables()

    def _reset_tables(self):
        self.frequency_count = {channel: 0 for channel in self.channels}
        self.confidence_sum = {channel: 0.0 for channel in self.channels}

    def _now(self) -> float:
        """Current time in milliseconds."""
        return self.clock() * 1000

    # ------------------------------------------------------------------
    # Frame pipeline
    # ------------------------------------------------------------------

    def process_frame(self, detections: Sequence[DetectedFace]) -> Optional[Dict[str, Any]]:
        """
        Process one frame of parsed detector output.

        Args:
            detections: Faces in detector order; index 0 is the primary face.

        Returns:
            Frame result dictionary, or None if no session is active.
        """
        if not self.is_active:
            return None

        self.total_frames += 1
        timestamp = self._now()

        result = {
            "timestamp": timestamp,
            "face_count": len(detections),
            "faces": [],
            "is_stable": False,
            "dominant_emotion": None,
            "confidence": 0.0,
            "attention": False,
            "is_blinking": False,
            "is_yawning": False
        }

        if not detections:
            return result

        if self.first_detection_time is None:
            self.first_detection_time = timestamp

        self.frames_with_face += 1

        for index, detection in enumerate(detections):
            expressions = detection.expressions

            # Smoothing only for the primary face, once per frame
            smoothed = self.smoother.smooth(expressions) if index == 0 else dict(expressions)
            adjusted = self.calibration.deviation(smoothed)

            emotion, confidence = dominant_emotion(adjusted, self.channels)

            if index == 0:
                self._update_primary(result, emotion, confidence, detection.landmarks, timestamp)

            result["faces"].append({
                "id": index,
                "emotion": emotion,
                "confidence": confidence,
                "expressions": dict(adjusted),
                "box": detection.box.to_dict()
            })

        self.history.append(HistoryEntry(
            timestamp=timestamp,
            emotion=result["dominant_emotion"],
            confidence=result["confidence"],
            face_count=result["face_count"]
        ))

        return result

    def _update_primary(
        self,
        result: Dict[str, Any],
        emotion: Optional[str],
        confidence: float,
        landmarks: Optional[FaceLandmarks],
        timestamp: float
    ):
        """Stability, frequency and event updates for the primary face."""
        result["is_stable"] = self.stability.update(emotion)
        result["dominant_emotion"] = emotion
        result["confidence"] = confidence

        if emotion is not None:
            self.frequency_count[emotion] += 1
            self.confidence_sum[emotion] += confidence

        if landmarks is None:
            return

        deviation = gaze_deviation(landmarks.left_eye, landmarks.right_eye, landmarks.nose)
        if deviation is not None:
            result["attention"] = self.attention.update(deviation, timestamp)

        ear = (eye_aspect_ratio(landmarks.left_eye) + eye_aspect_ratio(landmarks.right_eye)) / 2
        result["is_blinking"] = self.fatigue.detect_blink(ear)
        result["is_yawning"] = self.fatigue.detect_yawn(mouth_aspect_ratio(landmarks.mouth))

    def calibrate(self, expressions: Dict[str, float]) -> bool:
        """Capture a baseline from a primary-face expression vector."""
        return self.calibration.calibrate(expressions)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_session_duration(self) -> float:
        """Session duration in seconds, 0 if no session was started."""
        if self.start_time is None:
            return 0.0
        return (self._now() - self.start_time) / 1000

    def get_time_to_first_detection(self) -> Optional[float]:
        """Seconds from session start to the first face, None if none yet."""
        if self.start_time is None or self.first_detection_time is None:
            return None
        return (self.first_detection_time - self.start_time) / 1000

    def get_most_frequent_emotion(self) -> Optional[str]:
        """Most frequent primary emotion; ties go to channel order."""
        max_emotion = None
        max_count = 0

        for emotion in self.channels:
            count = self.frequency_count[emotion]
            if count > max_count:
                max_count = count
                max_emotion = emotion

        return max_emotion

    def get_average_confidence(self, emotion: Optional[str] = None) -> float:
        """
        Average confidence for one emotion, or over all emotions.

        Returns:
            Average in [0, 1]; 0 when there are no samples.
        """
        if emotion is not None:
            count = self.frequency_count.get(emotion, 0)
            return self.confidence_sum.get(emotion, 0.0) / count if count > 0 else 0.0

        total_count = sum(self.frequency_count.values())
        total_sum = sum(self.confidence_sum.values())
        return total_sum / total_count if total_count > 0 else 0.0

    def get_timeline_data(self, duration_seconds: float = config.TIMELINE_WINDOW) -> List[Dict[str, Any]]:
        """
        History from the last `duration_seconds`, with times in seconds
        since session start.
        """
        if self.start_time is None:
            return []

        cutoff = self._now() - duration_seconds * 1000
        return [
            {
                "time": (entry.timestamp - self.start_time) / 1000,
                "emotion": entry.emotion,
                "confidence": entry.confidence,
                "face_count": entry.face_count
            }
            for entry in self.history.window(cutoff)
        ]

    def get_summary(self) -> Dict[str, Any]:
        """
        Aggregate summary of the session.

        Returns:
            Dictionary containing session summary metrics.
        """
        duration = self.get_session_duration()
        ttfd = self.get_time_to_first_detection()

        face_detection_rate = 0
        if self.total_frames > 0:
            face_detection_rate = round(self.frames_with_face / self.total_frames * 100)

        return {
            "duration": round(duration),
            "time_to_first_detection": round(ttfd, 1) if ttfd is not None else None,
            "most_frequent_emotion": self.get_most_frequent_emotion(),
            "average_confidence": round(self.get_average_confidence() * 100),
            "frames_analyzed": self.total_frames,
            "frames_with_face": self.frames_with_face,
            "face_detection_rate": face_detection_rate,
            "blink_count": self.fatigue.blink_count,
            "yawn_count": self.fatigue.yawn_count,
            "look_away_count": self.attention.look_away_count,
            "attention_percent": round(self.attention.get_attention_percentage(duration)),
            "emotion_breakdown": dict(self.frequency_count),
            "is_calibrated": self.calibration.is_calibrated
        }
