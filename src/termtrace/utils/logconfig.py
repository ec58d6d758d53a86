from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    name: str,
    level: int = logging.WARNING,
    log_format: str = DEFAULT_FORMAT,
    log_file: str | None = None,
) -> logging.Logger:
    """Configure a named logger with a stderr handler and an optional file.

    Terminal animations own stdout, so log records always go to stderr.
    Calling this again replaces the handlers instead of stacking them.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.hasHandlers():
        logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False

    return logger
