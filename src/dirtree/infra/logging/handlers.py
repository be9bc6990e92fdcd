from __future__ import annotations

"""
Handler factories for the logging subsystem.

Every handler created here is tagged so that reconfiguration and shutdown
only ever touch handlers dirtree installed itself.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from dirtree.infra.fs import safe_mkdir
from dirtree.infra.logging.config import LoggingConfig

_HANDLER_TAG_ATTR: str = "_dirtree_handler"


def _tag_handler(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_console_handler(cfg: LoggingConfig, level_int: int) -> logging.StreamHandler:
    """Diagnostics handler bound to stderr; stdout carries the listing."""
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(cfg.console_formatter())
    _tag_handler(sh)
    return sh


def _create_file_handler(cfg: LoggingConfig, level_int: int) -> Optional[RotatingFileHandler]:
    """
    Open the rotating log file named by 'cfg.log_file'.

    A log file that cannot be opened is reported once on stderr and skipped;
    the listing itself does not depend on it.
    """
    if not cfg.log_file:
        return None

    parent = os.path.dirname(os.path.abspath(cfg.log_file))
    created, err = safe_mkdir(parent)
    if not created:
        sys.stderr.write(f"dirtree: WARNING: cannot create log directory '{parent}': {err}\n")
        return None

    try:
        fh = RotatingFileHandler(
            cfg.log_file,
            maxBytes=cfg.max_bytes,
            backupCount=cfg.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"dirtree: WARNING: cannot open log file '{cfg.log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(cfg.file_formatter())
    _tag_handler(fh)
    return fh
