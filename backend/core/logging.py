"""core/logging.py — JSON logging for the University Sports API.

configure_logging() runs once from the lifespan hook in api/main.py; modules
then log through logging.getLogger(__name__) with structured `extra=` fields.

Every record is written as one JSON object to stdout and to logs/app.log
(rotated at 10 MB, 5 files kept) and carries:
  - service     static "unisport-api"
  - request_id  id of the HTTP request being served, or null outside one
                (set by core.middleware.RequestIDMiddleware)
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter

_DEFAULT_LOG_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "logs")
_LOG_FILENAME = "app.log"
_ROTATE_AT_BYTES = 10 * 1024 * 1024
_ROTATED_FILES_KEPT = 5

SERVICE_NAME = "unisport-api"

# Raised to WARNING whatever the app level is
_CHATTY_LOGGERS = ("sqlalchemy.engine", "multipart", "python_multipart", "websockets", "urllib3")

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    """Copy the current request id onto each record unless the caller set one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_ctx.get()
        return True


def _json_formatter() -> JsonFormatter:
    return JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s",
        rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
        static_fields={"service": SERVICE_NAME},
    )


def configure_logging(log_level: str = "DEBUG", log_dir: str | None = None) -> None:
    """Send JSON records to stdout and a rotating file at `log_level`.

    Args:
        log_level: Level name from settings.log_level; unknown names mean DEBUG.
        log_dir:   Where app.log goes; <project root>/logs when omitted.
    """
    log_dir = log_dir or _DEFAULT_LOG_DIR
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, _LOG_FILENAME)

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.DEBUG

    formatter = _json_formatter()
    request_ids = RequestIdFilter()

    stdout = logging.StreamHandler(sys.stdout)
    rotating = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=_ROTATE_AT_BYTES,
        backupCount=_ROTATED_FILES_KEPT,
        encoding="utf-8",
    )
    for handler in (stdout, rotating):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(request_ids)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(stdout)
    root.addHandler(rotating)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).debug(
        "logging ready",
        extra={"log_level": logging.getLevelName(level), "log_file": os.path.abspath(log_path)},
    )
