from __future__ import annotations

from .config import LoggingConfig
from .context import snippet_context
from .core import configure_logging, get_logger

__all__ = [
    "LoggingConfig",
    "configure_logging",
    "get_logger",
    "snippet_context",
]
