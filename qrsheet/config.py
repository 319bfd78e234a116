# qrsheet/config.py

from __future__ import annotations

import os


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}.")


# ---------------------------------------------------------
# LIMITS (owned by the caller, not the core)
# ---------------------------------------------------------
MAX_ITEMS = _int_env("QRSHEET_MAX_ITEMS", 500)
MAX_FILE_BYTES = _int_env("QRSHEET_MAX_FILE_BYTES", 1024 * 1024)

# ---------------------------------------------------------
# PRINT GRID
# ---------------------------------------------------------
GRID_ROWS = _int_env("QRSHEET_GRID_ROWS", 3)
GRID_COLS = _int_env("QRSHEET_GRID_COLS", 3)

if GRID_ROWS < 1 or GRID_COLS < 1:
    raise RuntimeError("QRSHEET_GRID_ROWS and QRSHEET_GRID_COLS must be at least 1.")

# ---------------------------------------------------------
# URLS
# ---------------------------------------------------------
ALLOWED_SCHEMES = ("http", "https")
REFERRAL_BASE_URL = os.getenv("QRSHEET_REFERRAL_BASE_URL", "https://cursor.com/")
MAX_DISPLAY_LENGTH = 200
LONG_URL_THRESHOLD = 200

# ---------------------------------------------------------
# UPLOADS
# ---------------------------------------------------------
CSV_EXTENSIONS = (".csv",)
CSV_MIME_TYPES = {"text/csv", "application/csv", "application/vnd.ms-excel"}

# ---------------------------------------------------------
# OBSERVABILITY
# ---------------------------------------------------------
LOG_LEVEL = os.getenv("QRSHEET_LOG_LEVEL", "INFO").upper()
SENTRY_DSN = os.getenv("SENTRY_DSN", "")
