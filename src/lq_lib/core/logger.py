# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from .config import CFG


def get_logger(name: str, show_time: bool = False) -> logging.Logger:
    """
    Return a logger writing colored records to stderr through rich.

    Debug records are emitted only if the `LQ_DEBUG` environment variable is set.
    """
    logger = logging.getLogger(name)

    debug_mode = os.environ.get(CFG.env_vars.debug_mode) is not None
    level = logging.DEBUG if debug_mode else logging.INFO
    logger.setLevel(level)

    # the same module may ask for its logger more than once
    if not logger.handlers:
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
            show_level=True,
            show_time=show_time or debug_mode,
            log_time_format="%Y-%m-%d %H:%M:%S",
            tracebacks_width=None,
            tracebacks_code_width=None,
        )
        handler.setLevel(level)
        logger.addHandler(handler)

    logger.propagate = False

    return logger
