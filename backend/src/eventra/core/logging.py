"""structlog setup.

Events are snake_case names with keyword context, e.g.
``logger.info("backfill_completed", entity_id=..., statuses=...)``.
Local runs get colored console output; other environments emit one JSON
object per line, with Arabic and Kurdish text left unescaped.
"""

import logging
import sys
from typing import Any

import structlog

from eventra.core.config import settings

# httpx logs request URLs at INFO and Google Translate URLs carry the API key
QUIET_LOGGERS = ("httpx", "httpcore")


def _add_environment(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    event_dict.setdefault("environment", settings.ENVIRONMENT)
    return event_dict


def _renderer() -> list[Any]:
    if settings.ENVIRONMENT == "local":
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [
        _add_environment,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(ensure_ascii=False),
    ]


def setup_logging() -> None:
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            *_renderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
