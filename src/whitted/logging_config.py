"""Logging configuration for the whitted ray tracer.

Library modules only create module-level loggers under the ``whitted``
namespace. Applications opt in to console output with ``setup_logging``.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", name: str = "whitted") -> logging.Logger:
    """Set up console logging for the package.

    Calling this more than once reconfigures the level and formatter of the
    existing console handler instead of adding another one.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        name: Logger name.

    Returns:
        Configured logger instance.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    formatter = logging.Formatter(LOG_FORMAT)

    # Console handler
    console_handler = next(
        (
            handler
            for handler in logger.handlers
            if getattr(handler, "_whitted_console", False)
        ),
        None,
    )
    if console_handler is None:
        console_handler = logging.StreamHandler()
        console_handler._whitted_console = True  # type: ignore[attr-defined]
        logger.addHandler(console_handler)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    return logger
