"""Logging setup.

Modules log through ``logging.getLogger(__name__)``; this only wires the
root handler once at application start.
"""

import logging

from printanything.config import get_log_level

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger with a single stream handler."""
    root = logging.getLogger()
    root.setLevel(level or get_log_level())

    if any(getattr(h, "_printanything", False) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    handler._printanything = True  # type: ignore[attr-defined]
    root.addHandler(handler)
