"""
Logger setup for the deskdraft command line.

Parse problems travel in ParseResult.errors; the log only carries per-line
DEBUG traces and from/to width warnings, so it goes to stderr and never
mixes with JSON printed on stdout.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "deskdraft"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _with_format(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    return handler


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach stderr (and optionally `log_file`) handlers to the 'deskdraft' logger.

    Calling it again replaces the handlers of the previous call.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    logger.addHandler(_with_format(logging.StreamHandler(sys.stderr), level))
    if log_file:
        logger.addHandler(_with_format(logging.FileHandler(log_file, mode="w", encoding="utf-8"), level))

    logger.debug("level %s, log file %s", logging.getLevelName(level), log_file or "-")
    return logger
