from __future__ import annotations

import json as jsonlib
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Union

from infra.paths import LOG_DIR

if TYPE_CHECKING:
    from infra.settings import Settings

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(lineno)d] %(message)s"
DEFAULT_LOGFILE = LOG_DIR / "kotw.log"

# Third-party loggers that are chatty at INFO.
NOISY_LOGGERS = ("httpx", "urllib3", "uvicorn.access")


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, line, msg (+ exc)."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "line": record.lineno,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return jsonlib.dumps(payload, ensure_ascii=False)


def _build_handlers(formatter: logging.Formatter, logfile: str | Path | None) -> List[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    handlers: List[logging.Handler] = [console]

    if logfile is not None:
        log_path = Path(logfile)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure_logging(
    level: Union[str, int] = "INFO",
    *,
    json: bool = False,
    logfile: str | Path | None = DEFAULT_LOGFILE,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """
    Install stdout (and optionally file) handlers on the root logger.

    Calling it again replaces the previous handlers, so the CLI and the HTTP
    app can each configure logging on startup.

    Args:
        level: Logging level name or int (e.g., "DEBUG", logging.INFO).
        json: Emit JSON lines when True; otherwise a human-friendly format.
        logfile: File path to append logs; set to None to disable file output.
        quiet: Logger names pinned to WARNING.
    """
    formatter = JsonLineFormatter() if json else logging.Formatter(TEXT_FORMAT)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    for handler in _build_handlers(formatter, logfile):
        root.addHandler(handler)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.captureWarnings(True)


def configure_from_settings(settings: Settings) -> None:
    configure_logging(settings.log_level, json=settings.log_json, logfile=settings.log_file)


def get_logger(name: str) -> logging.Logger:
    """Namespaced logger; configure_logging() is expected to run once on startup."""
    return logging.getLogger(name)
