"""Logging setup for the hostwatch process."""

import logging

from rich.logging import RichHandler

from hostwatch.ui import console

LOGGER_NAME = "hostwatch"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single RichHandler to the package logger.

    Safe to call more than once; the handler is only added the first time.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console.rich,
            show_path=verbose,
            log_time_format=DATE_FORMAT,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    for handler in logger.handlers:
        handler.setLevel(level)

    # Suppress noisy log messages in normal operation
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    return logger
