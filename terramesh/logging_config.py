"""
Logging Configuration
Attaches handlers to the 'terramesh' logger for scripts and demos.

Library modules never configure logging themselves; they only call
``logging.getLogger(__name__)``.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "terramesh"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route terramesh log records to stdout and, optionally, a file.

    Calling it again replaces (and closes) the handlers added previously,
    so a demo can be re-run in the same interpreter without duplicate lines.

    Args:
        level: Logging level applied to the logger and every handler.
        log_file: Optional path; the file is truncated on each call.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging to {len(handlers)} handler(s) at level {logging.getLevelName(level)}")
    return logger
