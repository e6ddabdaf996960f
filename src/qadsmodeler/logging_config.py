"""
Logging Configuration
=====================
Sets up the 'qadsmodeler' logger for the command line and the Qt front end.

Log records go to stderr so that command output on stdout (collision
reports) stays machine readable. An optional log file receives the same
records with timestamps.
"""
import logging
import sys
from typing import Optional, TextIO

CONSOLE_FORMAT = '%(levelname)s %(name)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configures the package logger. Safe to call repeatedly; earlier handlers
    are closed and replaced.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to also write the log to.
        stream: Console stream, stderr by default.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("qadsmodeler")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%H:%M:%S'))
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
