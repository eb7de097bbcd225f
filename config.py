"""
config.py -- Runtime settings for Manatee Treasure Hunt.

Every value here can be overridden with an environment variable, so the
same build can run offline (no backend) or against a session-tracking
server without touching code. Gameplay tuning lives in utils/constants.py;
this module only holds what differs between installations.
"""

import os


def _env(name, default, cast=str):
    """
    Read an environment variable and cast it to the right type.
    If the var is missing, empty or malformed, return *default*.
    """
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        if cast is bool:
            return raw.strip().lower() in ("true", "1", "yes")
        return cast(raw)
    except (ValueError, TypeError):
        return default


# ---------------------------------------------------------------------------
# Window
# ---------------------------------------------------------------------------

GAME_TITLE: str = _env("GAME_TITLE", "Manatee Treasure Hunt")
GAME_VERSION: str = "1.0.0"

WINDOW_WIDTH: int = _env("WINDOW_WIDTH", 1280, int)
WINDOW_HEIGHT: int = _env("WINDOW_HEIGHT", 800, int)

# One of "easy", "normal", "hard".
DEFAULT_DIFFICULTY: str = _env("DEFAULT_DIFFICULTY", "normal")

# ---------------------------------------------------------------------------
# Session-tracking backend
# ---------------------------------------------------------------------------

# Base URL of the backend API (e.g. http://localhost:3000/api). Empty = offline,
# events are only mirrored into the local ledger.
BACKEND_URL: str = _env("BACKEND_URL", "")

# Ask the backend for per-difficulty configs before each session.
FETCH_REMOTE_CONFIG: bool = _env("FETCH_REMOTE_CONFIG", False, bool)

# Per-request timeouts in seconds; /api/start has its own.
REPORT_TIMEOUT_S: float = _env("REPORT_TIMEOUT_S", 7.0, float)
START_TIMEOUT_S: float = _env("START_TIMEOUT_S", 5.0, float)

# Failed events are re-queued this many times before being dropped.
REPORT_MAX_ATTEMPTS: int = _env("REPORT_MAX_ATTEMPTS", 3, int)

# Oldest queued events are dropped past this size.
REPORT_QUEUE_SIZE: int = _env("REPORT_QUEUE_SIZE", 200, int)

# Sessions quit within this many seconds are refunded by the backend.
# Mirrored locally only for the ledger's grace check.
GRACE_SECONDS: float = _env("GRACE_SECONDS", 5.0, float)

# Send X-Dry-Run on /api/start so the backend does not charge credits.
DRY_RUN: bool = _env("DRY_RUN", False, bool)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL: str = _env("LOG_LEVEL", "INFO").upper()
