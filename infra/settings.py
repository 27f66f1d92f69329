"""
Runtime configuration loaded from the environment (and an optional .env file).

Variables:
    KOTW_LOG_LEVEL            logging level name (INFO)
    KOTW_LOG_JSON             emit JSON log lines (false)
    KOTW_LOG_FILE             log file path; empty disables file output
    KOTW_AI_DIFFICULTY        default AI difficulty for player 2 (easy)
    KOTW_MCTS_ITERATIONS      MCTS rounds per decision (160)
    KOTW_MCTS_EXPLORATION     UCT exploration constant (1.4)
    KOTW_MCTS_ROLLOUT_DEPTH   random playout ply cap (40)
    KOTW_MAX_TURNS            turn cap for AI-vs-AI episodes (500)
    KOTW_STORAGE_DIR          root for log files (read by infra.paths at import)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .paths import ENV_FILE, LOG_DIR

_TRUE = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Optional[Path] = LOG_DIR / "kotw.log"
    ai_difficulty: str = "easy"
    mcts_iterations: int = 160
    mcts_exploration: float = 1.4
    mcts_rollout_depth: int = 40
    max_turns: int = 500

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from os.environ, falling back to the defaults above."""
        log_file_raw = os.environ.get("KOTW_LOG_FILE")
        if log_file_raw is None:
            log_file = cls.log_file
        else:
            log_file = Path(log_file_raw) if log_file_raw.strip() else None

        return cls(
            log_level=os.environ.get("KOTW_LOG_LEVEL", cls.log_level).upper(),
            log_json=_env_bool("KOTW_LOG_JSON", cls.log_json),
            log_file=log_file,
            ai_difficulty=os.environ.get("KOTW_AI_DIFFICULTY", cls.ai_difficulty),
            mcts_iterations=_env_int("KOTW_MCTS_ITERATIONS", cls.mcts_iterations),
            mcts_exploration=_env_float("KOTW_MCTS_EXPLORATION", cls.mcts_exploration),
            mcts_rollout_depth=_env_int("KOTW_MCTS_ROLLOUT_DEPTH", cls.mcts_rollout_depth),
            max_turns=_env_int("KOTW_MAX_TURNS", cls.max_turns),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load .env once and return the process-wide settings."""
    load_dotenv(ENV_FILE)
    return Settings.from_env()
