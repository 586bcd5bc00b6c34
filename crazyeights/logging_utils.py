"""Logging setup shared by the engine and the CLI entry-points."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

# CRAZYEIGHTS_LOG_LEVEL=DEBUG / INFO / WARNING / ERROR
LOG_LEVEL = os.getenv("CRAZYEIGHTS_LOG_LEVEL", "WARNING").upper()


def setup_logging(level: str | None = None, *, console: Console | None = None) -> None:
    """Call once at program start."""

    name = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format="%(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(console=console or Console(stderr=True), show_path=False)],
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
