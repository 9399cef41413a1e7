"""Logging setup shared by the app factory and scripts."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stdout handler to the ``statform`` logger.

    Calling this more than once only updates the level.
    """
    package_logger = logging.getLogger("statform")
    package_logger.setLevel(level.upper())
    if any(getattr(h, "_statform", False) for h in package_logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._statform = True  # type: ignore[attr-defined]
    package_logger.addHandler(handler)
