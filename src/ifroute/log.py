"""Logging setup for ifroute.

Modules log through ``logging.getLogger(__name__)``; this module only
attaches a Rich handler to the package logger for console use.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "ifroute"


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Attach a single RichHandler (stderr) to the ``ifroute`` logger.

    Safe to call more than once: previous handlers are replaced.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
