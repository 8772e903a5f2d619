"""
Logging for Coupling Insight.

All package loggers hang off ``coupling_insight``. ``setup_logging`` gives
that logger a rich handler on stderr (plus an optional plain log file) and
stops propagation, so reports written to stdout stay machine-readable and
the host application's root logger is left alone.

Levels:
    quiet    ERROR and above
    normal   WARNING and above
    verbose  DEBUG: every merge, cut decision and repair step
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "coupling_insight"

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _level_for(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    return logging.DEBUG if verbose else logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Attach rich console logging (and optionally a log file) to the package logger.

    Calling it again replaces the handlers installed by the previous call,
    so CLI commands can reconfigure per invocation.

    Args:
        verbose: Log at DEBUG level
        quiet: Log errors only; wins over ``verbose``
        log_file: Optional path that receives the same records as plain text

    Returns:
        The ``coupling_insight`` logger
    """
    level = _level_for(verbose, quiet)
    logger = logging.getLogger(ROOT_LOGGER)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Unit names such as "<external>" must not be read as rich markup.
    logger.addHandler(
        RichHandler(
            console=Console(stderr=True),
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            show_path=verbose,
            log_time_format="[%X]",
        )
    )

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger under the ``coupling_insight`` namespace.

    ``get_logger(__name__)`` inside the package returns the module logger
    unchanged; any other name is nested below ``coupling_insight``.
    """
    if name is None or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
