"""Logging setup for polymetrics.

Records go to stderr through a rich handler, so reports written to stdout
(text, JSON or EDN) stay clean. Library modules only log through
``get_logger(__name__)``; the CLI is what installs handlers.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "polymetrics"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def level_for(verbosity: str) -> int:
    """Logging level of a configured verbosity, WARNING if unknown."""
    return LEVELS.get(verbosity, logging.WARNING)


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[str] = None,
    verbosity: Optional[str] = None,
) -> logging.Logger:
    """
    Install the stderr rich handler and an optional file handler.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to append logs to
        verbosity: "quiet", "normal" or "verbose"; wins over the flags

    Returns:
        The ``polymetrics`` logger

    Calling it again replaces the previously installed handlers.
    """
    if verbosity is None:
        verbosity = "quiet" if quiet else "verbose" if verbose else "normal"
    level = level_for(verbosity)
    debug = level == logging.DEBUG

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=debug,
            markup=False,
            show_time=debug,
            show_path=debug,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``polymetrics`` namespace.

    >>> get_logger("graph.builder").name
    'polymetrics.graph.builder'
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
