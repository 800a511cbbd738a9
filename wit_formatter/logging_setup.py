"""Logging for the formatting service and the `wit-fmt` command line.

The service keeps a rotating log of its own `wit_formatter.*` records; the
command line only logs to stderr. Both take their level from
WIT_FORMATTER_LOG_LEVEL unless told otherwise.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from wit_formatter.env import env_int, env_str, env_truthy

LOG_FILENAME = "wit-formatter.log"

package_logger = logging.getLogger("wit_formatter")


def log_level(default: str = "INFO") -> str:
    lvl = env_str("WIT_FORMATTER_LOG_LEVEL", default).upper()
    return lvl if lvl in logging.getLevelNamesMapping() else default


def _installed_handler(path: Path) -> RotatingFileHandler | None:
    for h in package_logger.handlers:
        if isinstance(h, RotatingFileHandler) and Path(h.baseFilename).resolve() == path:
            return h
    return None


def ensure_file_logging(*, log_dir: Path, filename: str = LOG_FILENAME) -> Path | None:
    """Write `wit_formatter.*` records to `log_dir/filename` and return that path.

    Returns None when WIT_FORMATTER_DISABLE_FILE_LOG is set. A second call for
    the same file reuses the handler already installed.
    """

    if env_truthy("WIT_FORMATTER_DISABLE_FILE_LOG"):
        return None

    path = (log_dir / filename).resolve()
    if _installed_handler(path) is None:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path,
            maxBytes=env_int("WIT_FORMATTER_LOG_MAX_BYTES", 1024 * 1024),
            backupCount=env_int("WIT_FORMATTER_LOG_BACKUPS", 2),
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        package_logger.addHandler(handler)

    package_logger.setLevel(log_level())
    return path


def configure_console_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or log_level(), format="%(levelname)s %(message)s")
