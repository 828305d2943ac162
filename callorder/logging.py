"""Package logging for callorder.

Every module logs through a child of the ``callorder`` logger, which owns the
only handler. Reports and JSON go to stdout, so the handler writes to stderr.
Per-scenario lines are emitted at DEBUG; ``callorder --verbose`` shows them.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "callorder"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach the single stderr handler to the ``callorder`` logger.

    Repeated calls are no-ops until `reset_logging` runs.

    Args:
        level: Initial level for the package logger.
        format_string: Record format; defaults to `DEFAULT_FORMAT`.
        handler: Replacement handler, mainly for tests.
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # pytest's caplog hooks the root logger
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``callorder`` hierarchy.

    Args:
        name: Logger name, normally the calling module's ``__name__``.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the package logger and its handlers."""
    setup_root_logger()

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def level_for_verbosity(verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI's ``--verbose`` and ``--quiet`` flags to a log level.

    ``--verbose`` wins when both are given, so scenario lines are never hidden
    by accident.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_verbosity(verbose: bool = False, quiet: bool = False) -> int:
    """Apply `level_for_verbosity` to the package logger and return the level."""
    level = level_for_verbosity(verbose, quiet)
    set_global_log_level(level)
    if level == logging.DEBUG:
        get_logger(__name__).debug("Debug logging enabled; scenarios are logged")
    return level


def reset_logging() -> None:
    """Drop the package handler so the next call reconfigures it."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
