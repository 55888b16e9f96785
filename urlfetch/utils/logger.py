"""
Logging setup for the URL fetcher.

``get_logger`` attaches handlers once per logger name:
- stderr at WARNING (stdout carries the MCP stdio protocol)
- {home}/logs/ rotating files, one per entry in LOG_FILES

Fetch context passed with ``extra=`` (url, method, status_code, ...) is
copied into the structured JSON log so requests can be filtered later.
"""

import json
import logging
import sys
import time
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, NamedTuple, Optional

from urlfetch.config import get_home

MB = 1024 * 1024

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Record attributes copied into JSON output when set via extra=
CONTEXT_FIELDS = (
    "url",
    "method",
    "status_code",
    "bytes",
    "duration_ms",
    "source_format",
    "target_format",
)


class LogFile(NamedTuple):
    filename: str
    max_bytes: int
    backups: int
    level: int
    structured: bool = False


LOG_FILES = (
    LogFile("urlfetch.log", 5 * MB, 3, logging.DEBUG),
    LogFile("urlfetch.errors.log", 2 * MB, 2, logging.ERROR),
    LogFile("urlfetch.json", 5 * MB, 2, logging.INFO, structured=True),
)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with fetch context when present."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                data[name] = value

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        return json.dumps(data, ensure_ascii=False, default=str)


def get_log_dir() -> Path:
    return get_home() / "logs"


def _file_handlers(text_formatter: logging.Formatter) -> List[logging.Handler]:
    log_dir = get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    handlers: List[logging.Handler] = []
    for log_file in LOG_FILES:
        handler = RotatingFileHandler(
            log_dir / log_file.filename,
            maxBytes=log_file.max_bytes,
            backupCount=log_file.backups,
            encoding="utf-8",
        )
        handler.setLevel(log_file.level)
        handler.setFormatter(JsonFormatter() if log_file.structured else text_formatter)
        handlers.append(handler)
    return handlers


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get or create a logger with stderr and rotating file handlers.

    File handlers are left out when the log directory cannot be created;
    the logger then writes to stderr only.

    Args:
        name: Logger name, usually the package root "urlfetch"
        level: Optional logging level (defaults to DEBUG)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        text_formatter = logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(text_formatter)
        logger.addHandler(console_handler)

        try:
            handlers = _file_handlers(text_formatter)
        except OSError as e:
            logger.warning(f"File logging disabled: {e}")
        else:
            for handler in handlers:
                logger.addHandler(handler)

    if level is not None:
        logger.setLevel(level)
    elif not logger.level:
        logger.setLevel(logging.DEBUG)

    return logger


def _is_rotated(path: Path) -> bool:
    # RotatingFileHandler backups end in .1, .2, ...
    return path.suffix[1:].isdigit()


def cleanup_old_logs(days: int = 30) -> int:
    """
    Delete rotated backups older than ``days``. Live log files are kept.

    Returns:
        Number of files removed
    """
    log_dir = get_log_dir()
    if not log_dir.is_dir():
        return 0

    cutoff = time.time() - days * 24 * 60 * 60
    removed = 0
    for path in sorted(log_dir.glob("urlfetch*")):
        if not _is_rotated(path):
            continue
        try:
            if path.stat().st_mtime < cutoff:
                path.unlink()
                removed += 1
        except OSError as e:
            logging.getLogger(__name__).warning(f"Could not remove {path}: {e}")

    return removed
