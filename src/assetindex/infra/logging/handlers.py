from __future__ import annotations

"""
Output handlers for the logging setup.

Every handler created here carries a marker attribute so that a later
reconfiguration removes exactly these and leaves handlers installed by
pytest or third-party code alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List

from assetindex.infra.logging.config import LoggingConfig

_HANDLER_TAG_ATTR: str = "_assetindex_handler"


def tag(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def is_tagged(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def build_output_handlers(cfg: LoggingConfig) -> List[logging.Handler]:
    """
    Create the stderr and log-file handlers requested by `cfg`.

    A log file that cannot be opened is reported on stderr and skipped, so an
    indexing run never fails because of its diagnostics.

    Args:
        cfg: Logging settings.

    Returns:
        List[logging.Handler]: Tagged handlers, possibly empty.
    """
    level = cfg.level_number()
    out: List[logging.Handler] = []

    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(cfg.console_fmt))
        out.append(console)

    if cfg.log_file:
        try:
            os.makedirs(os.path.dirname(os.path.abspath(cfg.log_file)), exist_ok=True)
            rotating = RotatingFileHandler(
                cfg.log_file,
                maxBytes=cfg.max_bytes,
                backupCount=cfg.backup_count,
                encoding="utf-8",
            )
        except OSError as e:
            sys.stderr.write(f"WARNING: Cannot open log file '{cfg.log_file}': {e}\n")
        else:
            rotating.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
            out.append(rotating)

    for handler in out:
        handler.setLevel(level)
        tag(handler)
    return out
