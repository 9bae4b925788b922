"""
Structured logging configuration using structlog.

JSON logs in production, pretty console logs in development. Logs go to
stderr so stdout stays free for command output such as `main.py --json`.
Request-scoped fields (request_id, identity) can be bound once and
appear on every subsequent log line for that request.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import Processor

from idea_oracle.config import LOG_LEVEL, is_production


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure structured logging for the application.

    Usage:
        setup_logging()
        logger = get_logger(__name__)
        logger.info("Idea scored", composite_score=81, founder_rank="Beta")

    Args:
        level: Override for LOG_LEVEL (e.g. "DEBUG").
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if is_production():
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
    )

    # Quiet the HTTP client libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger (defaults to the root logger name)."""
    return structlog.get_logger(name)


def bind_context(**kwargs) -> None:
    """Bind context variables to all subsequent log messages."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
