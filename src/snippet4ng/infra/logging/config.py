from __future__ import annotations

"""
Logging Settings.

What the CLI may ask of the logging subsystem: a verbosity, terminal output
and an optional rotating log file whose lines carry the snippet being
processed.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Attributes:
        level: Verbosity name, one of LEVELS. Unknown names mean INFO.
        console: Echo records to stderr, keeping stdout for results.
        log_file: Optional path of a persistent log.
        max_bytes: Log file size that triggers rotation.
        backup_count: Rotated log files kept.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 512 * 1024
    backup_count: int = 2

    @property
    def level_no(self) -> int:
        return LEVELS.get(str(self.level).strip().upper(), logging.INFO)
