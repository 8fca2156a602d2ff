from __future__ import annotations

"""
Domain Constants.

Centralized application-wide constants: configuration schema version,
manifest defaults and supported output formats.
"""

from typing import List

CURRENT_CONFIG_VERSION = "1.0.0"

DEFAULT_OUTPUT_FORMAT = "plain"
DEFAULT_OUTPUT_FILE = "-"

OUTPUT_FORMATS: List[str] = ["plain", "json", "csv"]
