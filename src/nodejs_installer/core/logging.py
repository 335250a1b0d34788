"""Logging setup for nodejs-installer.

All modules obtain their logger through :func:`get_logger` so that a single
call to :func:`configure_logging` from the CLI controls verbosity.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER_NAME = "nodejs_installer"
LOG_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the nodejs_installer root logger."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> None:
    """Configure the root nodejs_installer logger.

    Precedence: debug > verbose > quiet > default (warning).

    Args:
        debug: Emit debug messages, including logger names.
        verbose: Emit info-level progress messages.
        quiet: Only emit errors.
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Replace handlers so repeated CLI invocations (tests) don't duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(DEBUG_LOG_FORMAT if debug else LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
