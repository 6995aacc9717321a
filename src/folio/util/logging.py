"""Centralized logging configuration using rich"""

import logging

from rich.console import Console
from rich.logging import RichHandler


console = Console(stderr=True)

LOG_LEVEL = logging.WARNING


def setup_logging(level: int | str = LOG_LEVEL) -> logging.Logger:
    """Configure the root logger with a rich handler and return the package logger.

    Library modules only create loggers; call this once from an entrypoint.
    """
    handler = RichHandler(
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True,
    )
    return logging.getLogger("folio")
