from __future__ import annotations

"""
Logging Settings.

Console diagnostics use the conventional 'dirtree: LEVEL: message' shape so
they read like any other command line tool on stderr. The optional log file
adds timestamps and logger names, and rotates by size.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

CONSOLE_FORMAT = "dirtree: %(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

DEFAULT_LOG_MAX_BYTES = 512 * 1024
DEFAULT_LOG_BACKUP_COUNT = 2

_LEVEL_MAP: Dict[str, int] = {
    name: logging.getLevelName(name)
    for name in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
}
_LEVEL_MAP["WARN"] = logging.WARNING


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for one logging session.

    Attributes:
        level: Minimum severity name.
        console: Emit diagnostics on stderr.
        log_file: Rotating log file path, or None to disable it.
        max_bytes: Size that triggers a rollover of the log file.
        backup_count: Rolled-over log files kept next to the active one.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None
    max_bytes: int = DEFAULT_LOG_MAX_BYTES
    backup_count: int = DEFAULT_LOG_BACKUP_COUNT

    @classmethod
    def from_app_config(cls, conf: Mapping[str, Any]) -> "LoggingConfig":
        """Build settings from a validated application config dictionary."""
        return cls(
            level=conf.get("log_level", "INFO"),
            console=True,
            log_file=conf.get("log_file") or None,
            max_bytes=conf.get("log_max_bytes", DEFAULT_LOG_MAX_BYTES),
            backup_count=conf.get("log_backup_count", DEFAULT_LOG_BACKUP_COUNT),
        )

    def console_formatter(self) -> logging.Formatter:
        return logging.Formatter(CONSOLE_FORMAT)

    def file_formatter(self) -> logging.Formatter:
        return logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT)
