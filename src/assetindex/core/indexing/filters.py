from __future__ import annotations

"""
Name Filtering for Directory Scans.

Provides the default exclusion rules and the regex helpers used to prune
entries while a directory is being indexed.
"""

import re
from typing import List

# -----------------------------------------------------------------------------
# DEFAULT RULES
# -----------------------------------------------------------------------------

def default_exclude_patterns() -> List[str]:
    """
    Get the system-level exclusion patterns.

    Skips version control metadata and editor/OS droppings that never
    belong in an asset index.

    Returns:
        List[str]: List of regex patterns for common exclusions.
    """
    return [
        r"^(\.git|\.svn|\.hg|__pycache__)$",
        r"^(\.DS_Store|Thumbs\.db|desktop\.ini)$",
    ]

# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_patterns(patterns: List[str]) -> List[re.Pattern]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Malformed expressions are discarded so a bad rule cannot abort a scan.

    Args:
        patterns: List of raw regex strings.

    Returns:
        List[re.Pattern]: Compiled regex objects.
    """
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(p))
        except re.error:
            continue
    return compiled


def matches_any(name: str, compiled_patterns: List[re.Pattern]) -> bool:
    """Return True if the name matches at least one compiled pattern."""
    return any(rx.search(name) for rx in compiled_patterns)
