"""Logging setup: a rich console handler on the postkit logger."""

from __future__ import annotations

import logging

from rich.logging import RichHandler


def setup_logging(verbose: bool = False) -> logging.Logger:
    level = logging.DEBUG if verbose else logging.WARNING

    logger = logging.getLogger("postkit")
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    console_handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    return logger
