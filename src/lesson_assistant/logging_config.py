"""Structured logging configuration using structlog.

Request URLs carry the Gemini API key as a ``key`` query parameter, and
httpx/redis log through the stdlib, so both structlog events and foreign
stdlib records go through the same processor chain, scrubber included.
Production renders JSON lines; development renders coloured console output.
"""

import logging
import re
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

DEFAULT_APP_NAME = "Lesson Assistant"

_API_KEY_PATTERN = re.compile(r"([?&]key=)[^&\s'\"]+")

# Loggers that echo full request URLs or chatter at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


def app_context(app_name: str) -> Processor:
    """Processor tagging every event with ``app=app_name``."""

    def add_app_context(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict["app"] = app_name
        return event_dict

    return add_app_context


def scrub_api_key(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask ``key=...`` query parameters in any string field."""
    for field, value in event_dict.items():
        if isinstance(value, str) and "key=" in value:
            event_dict[field] = _API_KEY_PATTERN.sub(r"\1***", value)
    return event_dict


def _processor_chain(production: bool, app_name: str) -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        app_context(app_name),
        scrub_api_key,
    ]
    # ConsoleRenderer formats exc_info on its own
    if production:
        chain.append(structlog.processors.format_exc_info)
    return chain


def _stdout_handler(chain: list[Processor], production: bool, level: int) -> logging.Handler:
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if production
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=chain)
    )
    handler.setLevel(level)
    return handler


def configure_logging(
    log_level: str = "INFO",
    environment: str = "development",
    app_name: str = DEFAULT_APP_NAME,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL; unknown names fall back to INFO
        environment: "production" selects the JSON renderer, anything else the console one
        app_name: Value of the ``app`` field on every event
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    production = environment.lower() == "production"
    chain = _processor_chain(production, app_name)

    structlog.configure(
        processors=[*chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_stdout_handler(chain, production, level))
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        renderer="json" if production else "console",
    )
