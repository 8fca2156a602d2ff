from __future__ import annotations

"""
Logging setup for the assetindex process.

The root logger gets a single QueueHandler; a background QueueListener
feeds the real outputs so a slow log file never stalls an indexing run.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from assetindex.infra.logging.config import LoggingConfig
from assetindex.infra.logging.handlers import build_output_handlers, is_tagged, tag

_CONFIGURED_FLAG_ATTR: str = "_assetindex_configured"
_QUEUE_LISTENER_ATTR: str = "_assetindex_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Install the queue-backed handlers on the root logger.

    Only the first call takes effect unless `force` is set, in which case the
    previous listener is stopped and its handlers are replaced.

    Args:
        cfg: Logging settings.
        force: Reconfigure even if logging is already set up.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    _teardown(root)
    root.setLevel(cfg.level_number())

    outputs = build_output_handlers(cfg)
    if not outputs:
        return root

    records: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    listener = QueueListener(records, *outputs, respect_handler_level=True)
    try:
        listener.start()
    except RuntimeError:
        # Thread could not start: log synchronously on stderr instead
        fallback = logging.StreamHandler(sys.stderr)
        fallback.setFormatter(logging.Formatter("CRITICAL FALLBACK | %(levelname)s | %(message)s"))
        root.addHandler(tag(fallback))
        root.warning("Logging queue unavailable. Switched to direct console output.")
        return root

    root.addHandler(tag(QueueHandler(records)))
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    atexit.register(_stop_listener, listener)
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _teardown(root: logging.Logger) -> None:
    """Stop the running listener and detach every tagged handler."""
    _stop_listener(getattr(root, _QUEUE_LISTENER_ATTR, None))
    setattr(root, _QUEUE_LISTENER_ATTR, None)

    for handler in list(root.handlers):
        if is_tagged(handler):
            root.removeHandler(handler)
            handler.close()


def _stop_listener(listener: Optional[QueueListener]) -> None:
    # stop() raises once the thread handle is cleared; atexit may call it again
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
