"""Logging configuration for engine, CLI and server output."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Per-request access lines drown out turn logs unless debugging
_NOISY_LOGGERS = ("uvicorn.access", "httpx")


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Install one handler on the root logger at *level*.

    Unknown level names fall back to INFO. Calling again replaces the
    previous handler rather than stacking a second one.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(name)-28s | %(message)s",
        datefmt="%H:%M:%S",
    ))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    quiet_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
