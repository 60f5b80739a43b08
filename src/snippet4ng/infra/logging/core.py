from __future__ import annotations

"""
Logging Setup.

The CLI runs single-threaded and blocks on each 'ng generate' call, so
handlers write synchronously. Configuring again replaces the handlers of the
previous call, which keeps repeated 'main()' calls (tests, embedding) from
duplicating output.
"""

import logging
from typing import List

from snippet4ng.infra.logging.config import LoggingConfig
from snippet4ng.infra.logging.handlers import (
    build_console_handler,
    build_file_handler,
    is_managed,
)


def configure_logging(cfg: LoggingConfig) -> logging.Logger:
    """
    Install console and file handlers on the root logger.

    Args:
        cfg: Requested verbosity and sinks.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    root.setLevel(cfg.level_no)

    for handler in [h for h in root.handlers if is_managed(h)]:
        root.removeHandler(handler)
        handler.close()

    handlers: List[logging.Handler] = []
    if cfg.console:
        handlers.append(build_console_handler(cfg))
    file_handler = build_file_handler(cfg)
    if file_handler is not None:
        handlers.append(file_handler)

    for handler in handlers:
        root.addHandler(handler)

    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
