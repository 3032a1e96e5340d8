import logging
import os
import sys
from typing import Optional

PACKAGE_LOGGER = "stock_forecast"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level(level: str) -> int:
    return getattr(logging, str(level).upper(), logging.INFO)


def _file_handler(log_file: str, formatter: logging.Formatter) -> logging.FileHandler:
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    handler = logging.FileHandler(log_file)
    handler.setFormatter(formatter)
    return handler


def get_logger(name: str, level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Create or retrieve a logger that writes to stdout and, optionally, a file.

    Handlers are attached only the first time a name is seen; later calls
    return the same logger untouched.

    Args:
        name (str): Name of the logger.
        level (str, optional): Level name; unknown names fall back to INFO.
        log_file (str, optional): Extra file destination.

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(_level(level))
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        logger.addHandler(_file_handler(log_file, formatter))

    return logger


def configure_package_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Point every ``stock_forecast.*`` module logger at the CLI's destinations.

    Library modules log through ``logging.getLogger(__name__)`` without
    handlers of their own, so configuring the package logger is enough.
    Calling this again replaces the previous handlers instead of stacking them.

    Args:
        level (str): Level name from the ``logging`` config section.
        log_file (str, optional): File from the ``logging`` config section.

    Returns:
        logging.Logger: The package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger = get_logger(PACKAGE_LOGGER, level=level, log_file=log_file)
    logger.setLevel(_level(level))
    return logger
