"""
Report Generator module.
Formats session summaries for sharing and exports them as JSON.
"""

import json
import time
from typing import Dict, Any, List, Optional
from datetime import datetime


class ReportGenerator:
    """
    Generates structured session reports from SessionAnalytics output.
    """

    def __init__(self):
        """Initialize report generator."""
        self.session_id: Optional[str] = None

    def generate_report(
        self,
        summary: Dict[str, Any],
        timeline: Optional[List[Dict[str, Any]]] = None,
        include_timeline: bool = False
    ) -> Dict[str, Any]:
        """
        Generate a session report.

        Args:
            summary: Output of SessionAnalytics.get_summary()
            timeline: Optional output of SessionAnalytics.get_timeline_data()
            include_timeline: Whether to include the timeline

        Returns:
            Structured report dictionary.
        """
        report = {
            "report_metadata": {
                "generated_at": datetime.now().isoformat(),
                "report_version": "1.0",
                "session_id": self.session_id or self._generate_session_id()
            },
            "share_card": self.format_share_card(summary),
            "emotions": {
                "most_frequent": summary.get("most_frequent_emotion"),
                "average_confidence": summary.get("average_confidence", 0),
                "breakdown": self._get_breakdown_percentages(
                    summary.get("emotion_breakdown", {})
                ),
                "calibrated": summary.get("is_calibrated", False)
            },
            "attention": {
                "percentage": summary.get("attention_percent", 0),
                "rating": self._get_rating(summary.get("attention_percent", 0)),
                "look_away_count": summary.get("look_away_count", 0)
            },
            "fatigue": {
                "blink_count": summary.get("blink_count", 0),
                "yawn_count": summary.get("yawn_count", 0),
                "blinks_per_minute": self._per_minute(
                    summary.get("blink_count", 0), summary.get("duration", 0)
                )
            },
            "detection": {
                "frames_analyzed": summary.get("frames_analyzed", 0),
                "frames_with_face": summary.get("frames_with_face", 0),
                "face_detection_rate": summary.get("face_detection_rate", 0)
            }
        }

        if include_timeline and timeline:
            report["timeline"] = timeline

        return report

    def generate_json_report(
        self,
        summary: Dict[str, Any],
        timeline: Optional[List[Dict[str, Any]]] = None,
        include_timeline: bool = False,
        pretty: bool = True
    ) -> str:
        """
        Generate JSON-formatted report string.

        Returns:
            JSON string.
        """
        report = self.generate_report(summary, timeline, include_timeline)

        if pretty:
            return json.dumps(report, indent=2, default=str)
        return json.dumps(report, default=str)

    def format_share_card(self, summary: Dict[str, Any]) -> Dict[str, str]:
        """Human-readable values for the session share card."""
        ttfd = summary.get("time_to_first_detection")

        return {
            "duration": self.format_duration(summary.get("duration", 0)),
            "time_to_first_detection": f"{ttfd:.1f}s" if ttfd is not None else "N/A",
            "most_frequent_emotion": (summary.get("most_frequent_emotion") or "None").capitalize(),
            "average_confidence": f"{summary.get('average_confidence', 0)}%",
            "face_detection_rate": f"{summary.get('face_detection_rate', 0)}%",
            "attention": f"{summary.get('attention_percent', 0)}%",
            "blinks": str(summary.get("blink_count", 0)),
            "yawns": str(summary.get("yawn_count", 0))
        }

    @staticmethod
    def format_duration(seconds: float) -> str:
        """Format seconds as '45s' or '2m 05s'."""
        seconds = int(seconds)
        if seconds < 60:
            return f"{seconds}s"
        minutes, seconds = divmod(seconds, 60)
        return f"{minutes}m {seconds:02d}s"

    def _get_breakdown_percentages(self, breakdown: Dict[str, int]) -> Dict[str, float]:
        total = sum(breakdown.values())
        if total == 0:
            return {emotion: 0.0 for emotion in breakdown}
        return {emotion: round(count / total * 100, 1) for emotion, count in breakdown.items()}

    def _per_minute(self, count: int, duration: float) -> float:
        if duration <= 0:
            return 0.0
        return round(count / (duration / 60), 1)

    def _generate_session_id(self) -> str:
        """Generate a unique session ID."""
        timestamp = int(time.time() * 1000)
        return f"session_{timestamp}"

    def _get_rating(self, score: float) -> str:
        """Get rating label for percentage scores."""
        if score >= 80:
            return "Excellent"
        elif score >= 60:
            return "Good"
        elif score >= 40:
            return "Fair"
        else:
            return "Needs Improvement"

    def set_session_id(self, session_id: str):
        """Set a custom session ID."""
        self.session_id = session_id
