"""Logging configuration for the application.

Services pass record context through ``extra=`` (model, id, course_id,
error, ...). In production those fields are rendered after the message as
key="value" pairs; in development a short human-readable line is used.
"""

import logging
import sys
import uuid
from datetime import datetime
from typing import Any, Dict

from app.config import get_settings

# Attributes every LogRecord carries; anything else came in through extra=
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

_QUIET_LOGGERS = {
    "uvicorn": logging.WARNING,
    "uvicorn.access": logging.WARNING,
    "uvicorn.error": logging.INFO,
    "alembic": logging.INFO,
}


def _render(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    return str(value).replace('"', "'")


class StructuredFormatter(logging.Formatter):
    """Formatter rendering each record as space-separated key="value" pairs.

    Fields passed through ``extra=`` are appended after the timestamp,
    level, logger and message fields. Extras whose value is None are
    skipped, so ``id=None`` on a create does not show up.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith("_") or value is None:
                continue
            log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return " ".join(f'{key}="{_render(value)}"' for key, value in log_data.items())


def setup_logging() -> None:
    """Setup application logging configuration.

    Replaces any handlers on the root logger with a single stdout handler,
    so calling it twice (app factory plus uvicorn reload) is harmless.
    ``LOG_SQL`` raises SQLAlchemy's engine logger to INFO to echo statements.
    """
    settings = get_settings()

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.LOG_LEVEL)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(settings.LOG_LEVEL)
    if settings.is_production:
        console_handler.setFormatter(StructuredFormatter(datefmt="%Y-%m-%dT%H:%M:%S"))
    else:
        console_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    root_logger.addHandler(console_handler)

    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.LOG_SQL else logging.WARNING
    )

    root_logger.info(
        "Logging configured",
        extra={
            "log_level": settings.LOG_LEVEL,
            "environment": settings.ENVIRONMENT,
            "log_sql": settings.LOG_SQL,
        },
    )
