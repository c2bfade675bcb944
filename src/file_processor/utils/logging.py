"""
Logging for the File Processor service.

Records carry their context in ``extra_fields``: the request id set by the
HTTP middleware, and the file id and chunk index bound by the pipeline.
Production writes one JSON object per line; other environments write a
readable line with the context appended as ``key=value`` pairs.
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any, Dict, MutableMapping, Optional, Tuple

from file_processor.config import Settings, get_settings

ROOT_LOGGER_NAME = "file_processor"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

_THIRD_PARTY_LEVELS = {
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "PyPDF2": logging.ERROR,
}


def _context_fields(record: logging.LogRecord) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    request_id = request_id_var.get()
    if request_id:
        fields["request_id"] = request_id
    fields.update(getattr(record, "extra_fields", None) or {})
    return fields


class JSONFormatter(logging.Formatter):
    """JSON formatter for production: context fields sit beside the message."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context_fields(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class StandardFormatter(logging.Formatter):
    """Human-readable formatter for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        fields = _context_fields(record)
        if fields:
            line += " | " + " ".join(f"{key}={value}" for key, value in fields.items())
        return line


class FileLogger(logging.LoggerAdapter):
    """Adapter that tags every record with the file being processed."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["extra_fields"] = {**self.extra, **extra.get("extra_fields", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def file_logger(logger: logging.Logger, file_id: str) -> FileLogger:
    """Bind ``file_id`` to every record written through ``logger``."""
    return FileLogger(logger, {"file_id": file_id})


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Install the stdout handler on the service logger, replacing any previous one."""
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if settings.is_production else StandardFormatter())

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False

    for name, third_party_level in _THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(third_party_level)
    logging.getLogger("openai").setLevel(logging.INFO if settings.debug else logging.WARNING)

    logger.debug(
        f"Logging configured: level={settings.log_level}, "
        f"format={'JSON' if settings.is_production else 'Standard'}"
    )
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the service namespace."""
    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)


def log_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """Write the access log line for one HTTP request."""
    get_logger("http").info(
        f"{method} {path} - {status_code} - {duration_ms:.2f}ms",
        extra={
            "extra_fields": {
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round(duration_ms, 2),
            }
        },
    )


def log_error(error: Exception, **context: Any) -> None:
    """Log an unhandled error with its traceback and request context."""
    get_logger("error").error(
        f"{type(error).__name__}: {error}",
        exc_info=error,
        extra={"extra_fields": {"error_type": type(error).__name__, **context}},
    )
