"""
Logging configuration

Two streams: informational messages on stdout, errors on stderr with the
source location of the call.
"""

import logging
import sys

INFO_LOGGER = "mysql_check.info"
ERROR_LOGGER = "mysql_check.error"

DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
INFO_FORMAT = "INFO\t%(asctime)s %(message)s"
ERROR_FORMAT = "ERROR\t%(asctime)s %(filename)s:%(lineno)d: %(message)s"


def _configure(name: str, stream, fmt: str) -> logging.Logger:
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def setup_logging() -> None:
    """Attach the stdout/stderr handlers. Safe to call more than once."""
    _configure(INFO_LOGGER, sys.stdout, INFO_FORMAT)
    _configure(ERROR_LOGGER, sys.stderr, ERROR_FORMAT)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def get_info_logger() -> logging.Logger:
    return get_logger(INFO_LOGGER)


def get_error_logger() -> logging.Logger:
    return get_logger(ERROR_LOGGER)
