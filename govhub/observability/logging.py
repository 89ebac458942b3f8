"""
structlog configuration for the feedback service.

Production emits one JSON object per line; other environments get the
coloured console renderer. Standard-library loggers (asyncpg, uvicorn,
httpx) are routed to the same stdout stream. Context bound with
bind_context() (request id, project id) is merged into every event.

Citizen comments can be long and personal, so any ``comment`` or
``text`` field on an event is shortened before rendering.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from govhub.config.settings import get_settings

MAX_LOGGED_TEXT = 80
_TEXT_FIELDS = ("comment", "text")

_QUIET_LOGGERS = ("httpx", "httpcore", "asyncio", "uvicorn.access")


def shorten_text_fields(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Truncate free-text fields to MAX_LOGGED_TEXT characters."""
    for key in _TEXT_FIELDS:
        value = event_dict.get(key)
        if isinstance(value, str) and len(value) > MAX_LOGGED_TEXT:
            event_dict[key] = value[:MAX_LOGGED_TEXT] + "..."
    return event_dict


def setup_logging(level: str | None = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Log level name; defaults to settings.log_level

    Usage:
        setup_logging()
        logger = get_logger(__name__)
        logger.info("Feedback submitted", project_id="p1", feedback_id="p1-fb-3")
    """
    settings = get_settings()
    level = level or settings.log_level

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        shorten_text_fields,
    ]
    if settings.is_production:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_context(**kwargs) -> None:
    """Attach fields to every event logged from the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
