from __future__ import annotations

"""
Logging Configuration Model.

Settings consumed by `configure_logging`. The CLI fills `level` from
`--debug` and `log_file` from `--log-file`; the rest keeps its defaults.
"""

import logging
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable settings for one logging setup.

    Attributes:
        level: Level name ("DEBUG", "INFO", ...). Unknown names mean INFO.
        console: Emit records on stderr.
        log_file: Optional path of a size-rotated log file.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files kept next to the active one.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 2 * 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    def level_number(self) -> int:
        """Numeric logging level for `level`, INFO when it is not recognised."""
        value = logging.getLevelName((self.level or "").strip().upper())
        return value if isinstance(value, int) else logging.INFO
