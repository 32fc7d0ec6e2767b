"""
Package logger for product search.

Everything logs under the ``product_search`` namespace to stdout, at the
level given by LOG_LEVEL.
"""
import logging
import sys

from product_search.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("product_search")


def configure_logging(level: str = settings.log_level) -> logging.Logger:
    """
    Set the package log level and attach the stdout handler once.

    Safe to call again (e.g. from a script) to change the level.
    """
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    return logger


configure_logging()


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get the package logger, or a child of it.

    Args:
        name: Optional suffix, e.g. "search" gives "product_search.search"
    """
    if name:
        return logger.getChild(name)
    return logger
