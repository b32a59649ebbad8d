"""Audit logging for guest commands.

Commands that must leave a trace for the host operator (ping, privacy
reset) write through ``slog``, which lands on the ``guestagent.syslog``
logger at INFO. Everything else uses ordinary module loggers.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

AUDIT_LOGGER = "guestagent.syslog"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

_audit = logging.getLogger(AUDIT_LOGGER)
_handler: Optional[logging.Handler] = None


def slog(message: str) -> None:
    """Write one audit entry. Fire and forget."""
    _audit.info(message)


def setup_logging(log_file: Optional[Path] = None, verbose: bool = False) -> logging.Handler:
    """Configure file or console logging on the root logger.

    Calling it again replaces the handler from the previous call.

    Args:
        log_file: Write here when given, otherwise to stderr.
        verbose: Lower the root level to DEBUG.

    Returns:
        The handler that was installed.
    """
    global _handler
    if log_file is not None:
        log_file = Path(log_file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
        _handler.close()
    root.addHandler(handler)
    _handler = handler
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler
