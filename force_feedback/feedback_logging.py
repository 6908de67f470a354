"""Logging for force-feedback.

All package loggers hang off the ``force_feedback`` logger. Components log
through a category logger (``force_feedback.friction``,
``force_feedback.analysis`` ...) and attach structured context such as the
snapshot version or the insertion position via ``extra``. The console shows
warnings by default; a rotating log file, in text or JSON lines, receives
everything down to debug.
"""

import json
import logging
import logging.config
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

ROOT_LOGGER_NAME = "force_feedback"

CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
LOG_FORMATS = ("text", "json")


class LogCategory(Enum):
    """Log categories, one per component family."""

    ANALYSIS = "analysis"
    FRICTION = "friction"
    ANNOTATION = "annotation"
    CONFIG = "config"
    HOST = "host"


class JSONFormatter(logging.Formatter):
    """Renders each record as one JSON line.

    Structured ``extra`` values the package attaches are grouped under
    ``context``; records without any carry an empty object.
    """

    CONTEXT_FIELDS = (
        "snapshot_version",
        "position",
        "line_threshold",
        "occurrence_count",
        "duration_ms",
    )

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "category": _category_of(record.name),
            "message": record.getMessage(),
            "source": f"{record.module}:{record.lineno}",
            "context": {
                name: getattr(record, name)
                for name in self.CONTEXT_FIELDS
                if hasattr(record, name)
            },
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _category_of(logger_name: str) -> str:
    prefix = f"{ROOT_LOGGER_NAME}."
    if logger_name.startswith(prefix):
        return logger_name[len(prefix) :]
    return logger_name


def _file_handler(
    log_file: Path, log_format: str, rotation_count: int, max_bytes: int
) -> dict:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json" if log_format == "json" else "file",
        "level": "DEBUG",
        "filename": str(log_file),
        "maxBytes": max_bytes,
        "backupCount": rotation_count,
        "encoding": "utf-8",
    }


def setup_logging(
    quiet: bool = False,
    verbose: bool = False,
    log_file: Path | None = None,
    log_format: str = "text",
    rotation_count: int = 3,
    max_bytes: int = 5 * 1024 * 1024,
) -> logging.Logger:
    """Configure the force_feedback logger tree.

    Args:
        quiet: Errors only on the console.
        verbose: Debug output on the console.
        log_file: Also write every record to this rotating file.
        log_format: "text" or "json" for the log file.
        rotation_count: Rotated files to keep.
        max_bytes: Size at which the file rotates.

    Returns:
        The package root logger.
    """
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Unknown log format {log_format!r}")

    console_level = "ERROR" if quiet else "DEBUG" if verbose else "WARNING"
    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "console",
            "level": console_level,
            "stream": "ext://sys.stderr",
        }
    }
    if log_file is not None:
        handlers["file"] = _file_handler(
            log_file, log_format, rotation_count, max_bytes
        )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {"format": CONSOLE_FORMAT},
                "file": {"format": FILE_FORMAT},
                "json": {"()": JSONFormatter},
            },
            "handlers": handlers,
            "loggers": {
                ROOT_LOGGER_NAME: {
                    "handlers": list(handlers),
                    "level": "DEBUG",
                    "propagate": False,
                }
            },
        }
    )
    return logging.getLogger(ROOT_LOGGER_NAME)


def get_category_logger(category: LogCategory) -> logging.Logger:
    """Logger for one component family, e.g. ``force_feedback.friction``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{category.value}")
