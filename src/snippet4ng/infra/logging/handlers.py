from __future__ import annotations

"""
Handler Factories.

Every handler built here is tagged so that reconfiguration only replaces
snippet4ng's own handlers, never those installed by pytest or a host program.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from snippet4ng.infra.logging.config import LoggingConfig
from snippet4ng.infra.logging.context import SnippetContextFilter

HANDLER_TAG = "_snippet4ng_handler"

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(snippet)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def is_managed(handler: logging.Handler) -> bool:
    return bool(getattr(handler, HANDLER_TAG, False))


def build_console_handler(cfg: LoggingConfig) -> logging.Handler:
    """stderr handler. stdout is reserved for the run summary and JSON."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(cfg.level_no)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    setattr(handler, HANDLER_TAG, True)
    return handler


def build_file_handler(cfg: LoggingConfig) -> Optional[logging.Handler]:
    """
    Rotating UTF-8 file handler stamping each line with the current snippet.

    Returns:
        Optional[logging.Handler]: None if the file cannot be opened; the run
        then continues with console logging only.
    """
    if not cfg.log_file:
        return None

    try:
        os.makedirs(os.path.dirname(os.path.abspath(cfg.log_file)), exist_ok=True)
        handler = RotatingFileHandler(
            cfg.log_file,
            maxBytes=cfg.max_bytes,
            backupCount=cfg.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{cfg.log_file}': {e}\n")
        return None

    handler.setLevel(cfg.level_no)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(SnippetContextFilter())
    setattr(handler, HANDLER_TAG, True)
    return handler
