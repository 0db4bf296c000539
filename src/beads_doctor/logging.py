"""Structured JSON logging for beads-doctor runs.

Each line of <log_dir>/doctor.log is one event of a diagnostic pass. Check
events carry a nested ``check`` object (name, status, duration) and failures
an ``error`` object built from the exception. Rotation keeps 3 backups of 5MB.

Never enabled implicitly: the doctor must not write into the workspace it
inspects unless asked to.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

LOG_FILENAME = "doctor.log"
_setup_lock = threading.Lock()
_MAX_BYTES = 5 * 1024 * 1024  # 5MB
_BACKUP_COUNT = 3


class CheckEventFormatter(logging.Formatter):
    """Render doctor log records as single-line JSON events.

    Recognized ``extra`` keys: ``check``, ``status``, ``duration_ms`` and
    ``path`` (emitted as ``workspace``).
    """

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "event": record.getMessage(),
            "logger": record.name,
        }
        check_name = getattr(record, "check", None)
        if check_name is not None:
            check: dict[str, Any] = {"name": check_name}
            for key in ("status", "duration_ms"):
                if hasattr(record, key):
                    check[key] = getattr(record, key)
            event["check"] = check
        elif hasattr(record, "status"):
            event["status"] = record.status
        if hasattr(record, "path"):
            event["workspace"] = record.path
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            event["error"] = {"type": type(exc).__name__, "message": str(exc)}
        return json.dumps(event, default=str)


def _file_handler_for(logger: logging.Logger, filename: str) -> RotatingFileHandler | None:
    """Return the handler already writing *filename*, dropping any other file handlers."""
    found: RotatingFileHandler | None = None
    for h in logger.handlers[:]:
        if not isinstance(h, RotatingFileHandler):
            continue
        if h.baseFilename == filename:
            found = h
            continue
        logger.removeHandler(h)
        h.close()
    return found


def setup_logging(log_dir: Path, level: int = logging.INFO) -> logging.Logger:
    """Send the package's log events to <log_dir>/doctor.log.

    Calling again with the same directory is a no-op; a different directory
    replaces the previous file handler. The directory is created if needed.
    """
    logger = logging.getLogger("beads_doctor")
    log_dir.mkdir(parents=True, exist_ok=True)
    target = os.path.abspath(str(log_dir / LOG_FILENAME))

    with _setup_lock:
        if _file_handler_for(logger, target) is None:
            handler = RotatingFileHandler(target, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT)
            handler.setFormatter(CheckEventFormatter())
            logger.addHandler(handler)
        logger.setLevel(level)
    return logger
