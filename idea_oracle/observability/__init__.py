"""
Observability module.

Structured logging setup shared by the engine, web app, and CLI.
"""

from idea_oracle.observability.logging import (
    setup_logging,
    get_logger,
    bind_context,
    clear_context,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
