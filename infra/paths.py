"""Filesystem locations used by the duel runtime."""

from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Logs and other runtime output; KOTW_STORAGE_DIR relocates them (e.g. inside a container).
STORAGE_DIR = Path(os.environ.get("KOTW_STORAGE_DIR") or PROJECT_ROOT / "storage")
LOG_DIR = STORAGE_DIR / "logs"
ENV_FILE = PROJECT_ROOT / ".env"
