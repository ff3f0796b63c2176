"""Terminal output helpers: a shared rich console and logging setup."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()

_HANDLER_NAME = "tracktoy-rich"


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Route ``tracktoy`` log records through a :class:`RichHandler`.

    Safe to call repeatedly; the handler is installed once and only the level
    is updated afterwards.
    """

    logger = logging.getLogger("tracktoy")
    logger.setLevel(level)
    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.propagate = False
    return logger
