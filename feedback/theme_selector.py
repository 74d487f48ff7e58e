"""
Theme Selector module.
Picks a color theme from the dominant emotion.
"""

import logging
from typing import Dict, Any, Optional
import config

logger = logging.getLogger(__name__)


class ThemeSelector:
    """
    Tracks the emotion-driven theme for the UI.
    Only changes theme when a new, non-empty emotion arrives.
    """

    def __init__(
        self,
        enabled: bool = config.THEME_ENABLED,
        intensity: float = config.THEME_INTENSITY,
        transition_duration: int = config.THEME_TRANSITION_DURATION,
        themes: Optional[Dict[str, Dict[str, str]]] = None
    ):
        self.enabled = enabled
        self.intensity = intensity
        self.transition_duration = transition_duration
        self.themes = themes if themes is not None else config.EMOTION_THEMES
        self.default_theme = config.DEFAULT_THEME

        self.current_emotion: Optional[str] = None
        self.current_intensity = 0.0

    def update_for_emotion(self, emotion: Optional[str], confidence: float = 1.0) -> Optional[Dict[str, Any]]:
        """
        Switch theme for a new dominant emotion.

        Returns:
            Theme update to apply, or None if nothing changes.
        """
        if not self.enabled:
            return None
        if not emotion or emotion == self.current_emotion:
            return None

        self.current_emotion = emotion
        return self._build_update(self.themes.get(emotion, self.default_theme), confidence)

    def set_enabled(self, enabled: bool) -> Optional[Dict[str, Any]]:
        """
        Enable or disable emotion themes.

        Returns:
            Default theme update when disabling, otherwise None.
        """
        self.enabled = enabled
        logger.debug("Emotion themes %s", "enabled" if enabled else "disabled")

        if not enabled:
            self.current_emotion = None
            return self._build_update(self.default_theme, 1.0)
        return None

    def toggle(self) -> bool:
        self.set_enabled(not self.enabled)
        return self.enabled

    def get_current_theme(self) -> Dict[str, str]:
        if self.current_emotion and self.current_emotion in self.themes:
            return dict(self.themes[self.current_emotion])
        return dict(self.default_theme)

    def _build_update(self, theme: Dict[str, str], confidence: float) -> Dict[str, Any]:
        self.current_intensity = self.intensity * confidence
        return {
            "emotion": self.current_emotion,
            "colors": dict(theme),
            "intensity": self.current_intensity,
            "transition_ms": self.transition_duration
        }

    def reset(self) -> Dict[str, Any]:
        """Return to the default theme."""
        self.current_emotion = None
        return self._build_update(self.default_theme, 1.0)
