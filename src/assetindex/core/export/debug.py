from __future__ import annotations

"""
Process-wide diagnostic verbosity switch for the export stage.

Writers may flip the flag from any thread. Readers see the change on their
next check but no ordering relative to other memory operations is implied;
the flag only gates optional diagnostic output.
"""

import threading

_DEBUG_OUTPUT = threading.Event()


def set_debug(enabled: bool) -> None:
    """Enable or disable verbose diagnostic output for export operations."""
    if enabled:
        _DEBUG_OUTPUT.set()
    else:
        _DEBUG_OUTPUT.clear()


def debug_enabled() -> bool:
    return _DEBUG_OUTPUT.is_set()
