"""
Logging setup for the fluentium logger tree.

Modules log through `logging.getLogger(__name__)`; applications (or the CLI)
call `configure_logging()` once to get rich-formatted output.
"""
# @file purpose: Configure rich logging for the fluentium package.

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from .settings import settings

ROOT_LOGGER = "fluentium"


def configure_logging(level: str | int | None = None, *, console: Console | None = None) -> logging.Logger:
    """Attach a RichHandler to the `fluentium` logger (idempotent) and set its level."""
    logger = logging.getLogger(ROOT_LOGGER)
    resolved = level if level is not None else settings.log_level
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
    logger.setLevel(resolved)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    return logger
