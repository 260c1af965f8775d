from __future__ import annotations

"""
Logging Lifecycle.

Records emitted anywhere in treedigest land in an in-memory queue; a single
listener thread drains it into the real sinks (stderr, optional rotating
file). Traversal threads therefore never block on log I/O.

Lifecycle:
1. ``configure_logging`` builds the sinks and starts the listener (once).
2. Library modules only call ``get_logger``.
3. ``shutdown_logging`` drains the queue and detaches everything we own.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from treedigest.infra.logging.config import _LEVEL_MAP, LoggingConfig
from treedigest.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_treedigest_configured"
_QUEUE_LISTENER_ATTR: str = "_treedigest_queue_listener"

_EMERGENCY_FMT = "CRITICAL FALLBACK | %(levelname)s | %(message)s"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach the queue-backed treedigest handlers to the root logger.

    Calling it again is a no-op unless ``force`` is set. Handlers owned by
    a host application or by pytest stay in place. When the sinks cannot be
    built, a plain stderr handler is installed so diagnostics still reach
    the user.

    Args:
        cfg: Levels, sinks and formats to use.
        force: Tear down and rebuild an existing setup.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if _is_configured(root) and not force:
        return root

    _detach(root)
    try:
        threshold = _parse_level(cfg.level)
        sinks = _build_sinks(cfg, threshold)
        if sinks:
            root.setLevel(threshold)
            _start_listener(root, sinks)
    except (OSError, ValueError, RuntimeError) as e:
        _detach(root)
        _install_emergency_console(root)
        root.warning(f"Logging setup failed ({e}). Switched to emergency console.")

    return root


def shutdown_logging() -> None:
    """Drain pending records and remove every handler treedigest installed."""
    root = logging.getLogger()
    _detach(root)
    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass ``__name__``)."""
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _is_configured(root: logging.Logger) -> bool:
    return bool(getattr(root, _CONFIGURED_FLAG_ATTR, False))


def _parse_level(level: str) -> int:
    """Map a level name to its numeric value; unknown names mean WARNING."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _build_sinks(cfg: LoggingConfig, threshold: int) -> List[logging.Handler]:
    """Create the handlers the listener thread writes to."""
    sinks: List[logging.Handler] = []

    if cfg.console:
        sinks.append(_create_console_handler(threshold, logging.Formatter(cfg.console_fmt)))

    if cfg.log_file:
        file_sink = _create_rotating_file_handler(
            cfg.log_file,
            threshold,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if file_sink is not None:
            sinks.append(file_sink)

    return sinks


def _start_listener(root: logging.Logger, sinks: List[logging.Handler]) -> None:
    records: queue.Queue[logging.LogRecord] = queue.Queue(-1)

    producer = QueueHandler(records)
    _tag_handler(producer)

    listener = QueueListener(records, *sinks, respect_handler_level=True)
    listener.start()
    atexit.register(_safe_stop_listener, listener)

    root.addHandler(producer)
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)


def _install_emergency_console(root: logging.Logger) -> None:
    root.setLevel(logging.INFO)
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(_EMERGENCY_FMT))
    _tag_handler(console)
    root.addHandler(console)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)


def _detach(root: logging.Logger) -> None:
    """Stop our listener first so queued records reach the sinks, then unhook."""
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener is not None:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)

    for handler in [h for h in root.handlers if _is_our_handler(h)]:
        root.removeHandler(handler)
        handler.close()


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Stop a QueueListener that may already have been stopped.

    Both ``shutdown_logging`` and the atexit hook end up here; the second
    call must be a no-op.
    """
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
