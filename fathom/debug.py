"""
Debug log setup.

Stdout carries the drone commands, so every diagnostic goes through the
'fathom' logger to stderr or to a file.
"""

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = 'fathom'


def configure_debug_log(level: int = logging.DEBUG,
                        log_file: Optional[str] = None,
                        stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Install a single handler on the package logger.

    Args:
        level: Logging level for the package logger
        log_file: Write to this file (truncated) instead of a stream
        stream: Stream to write to when no file is given (default stderr)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        handler = logging.FileHandler(log_file, mode='w')
    else:
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
