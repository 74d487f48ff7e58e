"""
Configuration module for the Emotion Session Analytics core.
Contains all thresholds, parameters, and settings.
"""

# ============================================================================
# EMOTION CHANNELS
# ============================================================================
# Fixed, ordered channel set reported by the expression classifier.
# Iteration order is the tie-break order for dominant/most-frequent emotion.
EMOTION_CHANNELS = (
    "neutral",
    "happy",
    "sad",
    "angry",
    "fearful",
    "disgusted",
    "surprised",
)

# ============================================================================
# DETECTOR SETTINGS (passed through to the external detector)
# ============================================================================
DETECTOR_MIN_CONFIDENCE = 0.5
DETECTOR_INPUT_SIZE = 320
DETECTOR_INPUT_SIZES = (128, 160, 224, 320, 416, 512, 608)
FPS_WINDOW_SIZE = 10                # Frames kept for the rolling FPS average

# ============================================================================
# SMOOTHING & STABILITY SETTINGS
# ============================================================================
SMOOTHING_FACTOR = 0.3              # EMA alpha (0-1, lower = more smoothing)
STABILITY_FRAMES = 5                # Frames needed for a "stable" emotion

# ============================================================================
# CALIBRATION SETTINGS
# ============================================================================
CALIBRATION_DEVIATION_THRESHOLD = 0.15

# ============================================================================
# FATIGUE SETTINGS
# ============================================================================
EAR_THRESHOLD = 0.2                 # Eye aspect ratio below this = closed
MAR_THRESHOLD = 0.6                 # Mouth aspect ratio above this = open

# ============================================================================
# ATTENTION SETTINGS
# ============================================================================
GAZE_DEVIATION_THRESHOLD = 0.3      # Nose offset / eye distance at or above = away
NOSE_TIP_INDEX = 3

# ============================================================================
# HISTORY SETTINGS
# ============================================================================
HISTORY_DURATION = 300              # seconds of history retained (5 minutes)
TIMELINE_RESOLUTION = 1000          # ms between retained history entries
TIMELINE_WINDOW = 60                # default seconds returned for charting

# ============================================================================
# THEME SETTINGS
# ============================================================================
THEME_ENABLED = True
THEME_TRANSITION_DURATION = 500     # ms
THEME_INTENSITY = 0.5               # 0-1, how much emotion affects colors

DEFAULT_THEME = {
    "accent": "#6c5ce7",
    "accent_secondary": "#a29bfe",
    "background": "rgba(108, 92, 231, 0.1)",
    "glow": "rgba(108, 92, 231, 0.3)"
}

EMOTION_THEMES = {
    "neutral": DEFAULT_THEME,
    "happy": {
        "accent": "#00cec9",
        "accent_secondary": "#81ecec",
        "background": "rgba(0, 206, 201, 0.1)",
        "glow": "rgba(0, 206, 201, 0.3)"
    },
    "sad": {
        "accent": "#74b9ff",
        "accent_secondary": "#a9d4ff",
        "background": "rgba(116, 185, 255, 0.1)",
        "glow": "rgba(116, 185, 255, 0.3)"
    },
    "angry": {
        "accent": "#ff7675",
        "accent_secondary": "#ffb8b8",
        "background": "rgba(255, 118, 117, 0.1)",
        "glow": "rgba(255, 118, 117, 0.3)"
    },
    "fearful": {
        "accent": "#fdcb6e",
        "accent_secondary": "#ffeaa7",
        "background": "rgba(253, 203, 110, 0.1)",
        "glow": "rgba(253, 203, 110, 0.3)"
    },
    "disgusted": {
        "accent": "#55efc4",
        "accent_secondary": "#a8f0dc",
        "background": "rgba(85, 239, 196, 0.1)",
        "glow": "rgba(85, 239, 196, 0.3)"
    },
    "surprised": {
        "accent": "#e17055",
        "accent_secondary": "#f0a694",
        "background": "rgba(225, 112, 85, 0.1)",
        "glow": "rgba(225, 112, 85, 0.3)"
    }
}
