"""
Structured JSON logging configuration.
Every line is one JSON object carrying the request id when there is one.
"""
import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from instructor_reviews.core.config import settings

LOGGER_NAME = "instructor_reviews"

# Attributes every LogRecord has; anything else came in through extra={}
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "request_id"}


class JSONFormatter(logging.Formatter):
    """Formats records as JSON with the standard fields plus any extras."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = getattr(record, "request_id", None)
        if request_id:
            log_data["request_id"] = request_id

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, default=str)


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure and return the application logger.
    Safe to call more than once; handlers are replaced, not stacked.
    """
    level_value = getattr(logging, (level or settings.LOG_LEVEL).upper())

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_value)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level_value)
    console_handler.setFormatter(JSONFormatter())
    logger.addHandler(console_handler)

    logger.propagate = False

    return logger


# Global logger instance
logger = setup_logging()


def log_error(message: str, error: Exception = None, **kwargs):
    """Log an error with optional exception details."""
    extra = kwargs.copy()
    if error:
        extra["error_type"] = type(error).__name__
        extra["error_message"] = str(error)

    logger.error(message, extra=extra, exc_info=error is not None)


def log_warning(message: str, **kwargs):
    logger.warning(message, extra=kwargs)
