"""
Product configuration: centralized magic numbers, limits, toggles, and timings.

- Hard limits are NOT configurable (animation geometry, data file names).
- Timings and data location CAN be overridden via env vars for labs/testing.
- Defaults match the published site.

Environment vars (optional overrides):
  PORTFOLIO_DATA_BASE=<path or http(s) URL>
  PORTFOLIO_FETCH_TIMEOUT_SEC=<float>
  PORTFOLIO_FETCH_WORKERS=<int>
  PORTFOLIO_LANG_SWITCH_FADE_MS=<int>
  PORTFOLIO_TYPING_SPEED_MS=<int>
  PORTFOLIO_TYPING_PAUSE_MS=<int>
  PORTFOLIO_FRAME_INTERVAL_MS=<int>
  PORTFOLIO_ENABLE_BACKGROUND=0/1
  PORTFOLIO_CANVAS_WIDTH=<int>
  PORTFOLIO_CANVAS_HEIGHT=<int>
  PORTFOLIO_ANIMATION_SEED=<str>
"""

import os


# ============================================================================
# HARD LIMITS (non-configurable)
# ============================================================================

# Data documents, relative to the data base.
PROFILE_FILE: str = "profile.json"
PROJECTS_FILE: str = "projects.json"
SOCIALS_FILE: str = "socials.json"
LANG_EN_FILE: str = "lang-en.json"
LANG_FA_FILE: str = "lang-fa.json"

# Language the base (unsuffixed) content fields are written in.
CONTENT_BASE_LANGUAGE: str = "en"

# Page assets referenced by rendered markup.
PROJECT_PLACEHOLDER_IMAGE: str = "assets/images/project-placeholder.svg"
RESUME_PHOTO: str = "assets/images/resume-img.jpeg"

# Background animation geometry.
WAVE_AMPLITUDE: float = 10.0
WAVE_SPEED: float = 0.025
WAVE_FREQ: float = 0.012
WAVE_FREQ_Y: float = 0.008
WAVE_AMPLITUDE_Y: float = 5.0
WAVE_TIME_FACTOR_Y: float = 0.6
MOUSE_RADIUS: float = 200.0
MOUSE_STRENGTH: float = 14.0
MOUSE_SENTINEL: float = -1e5
LINE_OPACITY: float = 0.08
LINE_RGB: tuple = (45, 212, 191)
LINE_WIDTH: int = 1
NUM_LINES: int = 120
MIN_LENGTH: float = 80.0
MAX_LENGTH: float = 280.0
SEGMENTS_PER_LINE: int = 24
SPAWN_MARGIN: float = 50.0

# Typing effect gap between deleting a phrase and typing the next one.
TYPING_NEXT_PHRASE_MS: int = 400


# ============================================================================
# TOGGLES (configurable via env vars, but with sensible defaults)
# ============================================================================

def _get_bool_config(env_key: str, default: bool) -> bool:
    """Fetch a boolean config from env var; default if not set or empty."""
    val = str(os.environ.get(env_key) or "").strip()
    if not val:
        return default
    return val == "1"


def _get_int_config(env_key: str, default: int, min_val: int = None) -> int:
    """Fetch an int config from env var; enforce minimum if set."""
    val = str(os.environ.get(env_key) or "").strip()
    if not val:
        return default
    try:
        result = int(val)
        if min_val is not None:
            result = max(result, min_val)
        return result
    except ValueError:
        return default


def _get_float_config(env_key: str, default: float, min_val: float = None) -> float:
    val = str(os.environ.get(env_key) or "").strip()
    if not val:
        return default
    try:
        result = float(val)
        if min_val is not None:
            result = max(result, min_val)
        return result
    except ValueError:
        return default


def _get_str_config(env_key: str, default: str) -> str:
    """Fetch a string config from env var."""
    val = str(os.environ.get(env_key) or "").strip()
    return val if val else default


# Data location
PORTFOLIO_DATA_BASE: str = _get_str_config("PORTFOLIO_DATA_BASE", "data")

# Fetching
PORTFOLIO_FETCH_TIMEOUT_SEC: float = _get_float_config("PORTFOLIO_FETCH_TIMEOUT_SEC", 8.0, min_val=0.5)
PORTFOLIO_FETCH_WORKERS: int = _get_int_config("PORTFOLIO_FETCH_WORKERS", 5, min_val=1)

# Timings (milliseconds)
PORTFOLIO_LANG_SWITCH_FADE_MS: int = _get_int_config("PORTFOLIO_LANG_SWITCH_FADE_MS", 280, min_val=0)
PORTFOLIO_TYPING_SPEED_MS: int = _get_int_config("PORTFOLIO_TYPING_SPEED_MS", 80, min_val=2)
PORTFOLIO_TYPING_PAUSE_MS: int = _get_int_config("PORTFOLIO_TYPING_PAUSE_MS", 2000, min_val=0)
PORTFOLIO_FRAME_INTERVAL_MS: int = _get_int_config("PORTFOLIO_FRAME_INTERVAL_MS", 16, min_val=1)

# Background animation
PORTFOLIO_ENABLE_BACKGROUND: bool = _get_bool_config("PORTFOLIO_ENABLE_BACKGROUND", True)
PORTFOLIO_CANVAS_WIDTH: int = _get_int_config("PORTFOLIO_CANVAS_WIDTH", 1280, min_val=1)
PORTFOLIO_CANVAS_HEIGHT: int = _get_int_config("PORTFOLIO_CANVAS_HEIGHT", 720, min_val=1)

# Reproducible background line sets (unset = random each run)
PORTFOLIO_ANIMATION_SEED: str = _get_str_config("PORTFOLIO_ANIMATION_SEED", "")
