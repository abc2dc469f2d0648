"""Logging setup rendered through rich."""

import logging

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_LEVEL = "WARNING"


def setup_logging(level: str = DEFAULT_LEVEL, console: Console | None = None) -> None:
    """Route the root logger through a single RichHandler.

    An unrecognised level name falls back to WARNING and logs a warning.
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    name = str(level).upper()
    known = isinstance(logging.getLevelName(name), int)
    logging.basicConfig(
        level=name if known else DEFAULT_LEVEL,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    if not known:
        logging.getLogger(__name__).warning(
            "Unknown log level %r, using %s", level, DEFAULT_LEVEL
        )
