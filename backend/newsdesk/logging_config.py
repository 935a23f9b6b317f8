"""Structured logging configuration using structlog.

Every log line, whether emitted through structlog or plain ``logging``, goes
through the same processor chain. Subscriber addresses never reach the
output: fields named in ``EMAIL_FIELDS`` are masked before rendering.
"""

import logging
import sys

import structlog

from newsdesk.config import get_settings
from newsdesk.utils.redaction import redact_email

EMAIL_FIELDS = frozenset({"email", "to", "recipient"})

# Driver loggers that echo every statement at INFO
NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg")


def mask_email_fields(logger, method_name: str, event_dict: dict) -> dict:
    """structlog processor: mask address-bearing keys in the event dict."""
    for key in EMAIL_FIELDS.intersection(event_dict):
        value = event_dict[key]
        if isinstance(value, str):
            event_dict[key] = redact_email(value)
    return event_dict


class SuppressHealthFilter(logging.Filter):
    """Drop uvicorn access entries for the /health probe."""

    def filter(self, record: logging.LogRecord) -> bool:
        args = record.args
        if isinstance(args, tuple) and len(args) >= 3 and args[2] == "/health":
            return False
        return True


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        mask_email_fields,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _renderer(app_env: str):
    if app_env == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging() -> None:
    """JSON lines in production, coloured console output elsewhere."""
    settings = get_settings()
    level = logging.DEBUG if settings.app_debug else logging.INFO
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(settings.app_env),
            ],
            foreign_pre_chain=shared,
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if settings.app_debug else logging.WARNING)

    logging.getLogger("uvicorn.access").addFilter(SuppressHealthFilter())
