"""Logging helpers for tracer components: stdlib ``logging`` plus session fields."""

from .config import configure_logging, get_logger
from .context import (
    bind_context,
    clear_context,
    get_context,
    log_context,
    session_context,
)

__all__ = [
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_context",
    "get_logger",
    "log_context",
    "session_context",
]
