"""Logging setup for the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "trint_batch"

# Noisy third-party loggers that flood DEBUG output with connection details
_QUIET_LOGGERS = ["urllib3", "urllib3.connectionpool", "urllib3.connection"]


def setup_logging(debug: bool = False, console: Console | None = None) -> logging.Logger:
    """
    Configure the package logger.

    Diagnostics go through a RichHandler so they interleave cleanly with the
    console output of the upload run.

    Args:
        debug: Log at DEBUG level when True, WARNING otherwise
        console: Console the handler writes to (defaults to stderr)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logging.DEBUG if debug else logging.WARNING

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
    logger.propagate = False

    if debug:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return logger
