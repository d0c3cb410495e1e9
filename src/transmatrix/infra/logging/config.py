from __future__ import annotations

"""
Logging Settings.

'LoggingConfig' is derived from the application configuration: the
'log_level' and 'log_file' keys select the severity and the optional
rotating file, while the console stream is always kept so a failing
export or import is visible even without a log file.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Batch exports log one line per group; keep a few runs per segment
LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUPS = 3


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable logging settings for one CLI run.

    Attributes:
        level: Minimum severity to emit.
        console: Write records to stderr.
        log_file: Optional rotating log file.
        max_bytes: Segment size before rotation.
        backup_count: Rotated segments kept on disk.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = LOG_FILE_MAX_BYTES
    backup_count: int = LOG_FILE_BACKUPS

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_settings(cls, conf: Dict[str, Any], debug: bool = False) -> "LoggingConfig":
        """
        Build the settings from a validated application configuration.

        An empty 'log_file' disables file output; 'debug' wins over the
        configured level.
        """
        level = "DEBUG" if debug else str(conf.get("log_level") or "INFO")
        return cls(level=level, console=True, log_file=conf.get("log_file") or None)
