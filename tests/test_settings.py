from pathlib import Path

import pytest

from infra.logger import configure_logging, get_logger
from infra.settings import Settings


def test_defaults(monkeypatch):
    for name in ("KOTW_LOG_LEVEL", "KOTW_LOG_JSON", "KOTW_LOG_FILE", "KOTW_AI_DIFFICULTY",
                 "KOTW_MCTS_ITERATIONS", "KOTW_MCTS_EXPLORATION", "KOTW_MCTS_ROLLOUT_DEPTH", "KOTW_MAX_TURNS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.log_level == "INFO"
    assert settings.log_json is False
    assert settings.log_file.name == "kotw.log"
    assert settings.ai_difficulty == "easy"
    assert settings.mcts_iterations == 160
    assert settings.mcts_exploration == 1.4
    assert settings.mcts_rollout_depth == 40
    assert settings.max_turns == 500


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("KOTW_LOG_LEVEL", "debug")
    monkeypatch.setenv("KOTW_LOG_JSON", "true")
    monkeypatch.setenv("KOTW_LOG_FILE", "")
    monkeypatch.setenv("KOTW_MCTS_ITERATIONS", "25")
    monkeypatch.setenv("KOTW_MCTS_EXPLORATION", "0.7")

    settings = Settings.from_env()

    assert settings.log_level == "DEBUG"
    assert settings.log_json is True
    assert settings.log_file is None
    assert settings.mcts_iterations == 25
    assert settings.mcts_exploration == 0.7


def test_bad_integer_is_reported(monkeypatch):
    monkeypatch.setenv("KOTW_MAX_TURNS", "lots")
    with pytest.raises(ValueError, match="KOTW_MAX_TURNS"):
        Settings.from_env()


def test_configure_logging_writes_to_file(tmp_path: Path):
    logfile = tmp_path / "logs" / "test.log"
    configure_logging("INFO", logfile=logfile)
    get_logger("kotw.test").info("hello duel")
    for handler in get_logger("").handlers:
        handler.flush()
    assert "hello duel" in logfile.read_text(encoding="utf-8")
