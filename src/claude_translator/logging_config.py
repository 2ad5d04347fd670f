from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


LOG_FORMAT = "%(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(verbose: bool = False, logger_name: Optional[str] = None) -> logging.Logger:
    """
    Configure process-wide logging and return a scoped logger.

    Log records go to stderr through Rich so they stay apart from the translations
    printed on stdout.
    """
    level = logging.DEBUG if verbose else logging.INFO
    handler = RichHandler(console=Console(stderr=True), show_time=True, show_path=False)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[handler],
        force=True,
    )
    logger = logging.getLogger(logger_name or "claude_translator")
    logger.debug("Logging configured with level %s", logging.getLevelName(level))
    return logger
