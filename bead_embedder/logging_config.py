"""
Logger setup for embedding runs

Messages are filtered by a verbosity number rather than a logging level:

  0   errors only
  1-2 warnings (e.g. dropped self contacts)
  3   progress of the layout loop
  4+  per-step details
"""

import logging
import sys

from .config import DEFAULT_VERBOSITY, LOG_FORMAT


def verbosity_to_level(verbosity):
    """Map a verbosity number to a logging level"""
    if verbosity <= 0:
        return logging.ERROR
    if verbosity < 3:
        return logging.WARNING
    if verbosity == 3:
        return logging.INFO
    return logging.DEBUG


def setup_logging(verbosity=DEFAULT_VERBOSITY, log_file=None):
    """
    Attach handlers to the bead_embedder logger

    Calling this again replaces the handlers from the previous call

    Args:
        verbosity: Verbosity number, see module docstring
        log_file: Optional path; messages are also written there

    Returns:
        The bead_embedder logger
    """
    level = verbosity_to_level(verbosity)
    logger = logging.getLogger('bead_embedder')
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging at verbosity %d", verbosity)
    return logger
