"""Logging setup for the spiclient command-line tool."""

from __future__ import annotations

import logging
import sys

from spiclient.config.settings import LoggingConfig

_HANDLER_TAG = "_spiclient_handler"


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the ``spiclient`` logger.

    Calling it again replaces the handlers installed by a previous call, so
    the CLI can be invoked repeatedly in one process without duplicating
    every line.

    Args:
        config: Logging configuration. If None, uses defaults
                (INFO level, stderr output).

    Returns:
        The configured package logger.
    """
    if config is None:
        config = LoggingConfig()

    pkg_logger = logging.getLogger("spiclient")
    pkg_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    for handler in list(pkg_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            pkg_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(config.format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        handlers.append(logging.FileHandler(config.file))

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_TAG, True)
        pkg_logger.addHandler(handler)

    pkg_logger.debug("Logging initialized at %s level", config.level)
    return pkg_logger
