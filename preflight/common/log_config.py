"""
Logging Configuration

Sets up the ``preflight`` logger. Validation findings travel in the report,
not the log; the log carries pipeline progress such as profile loading,
header collisions and applied fixes. Output goes to stderr so stdout stays
free for reports and CSV output.
"""

import logging
import sys

LOGGER_NAME = "preflight"

LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
# Verbose runs add timestamps and line numbers
DEBUG_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d: %(message)s"

VERBOSITY_LEVELS = {
    "quiet": logging.WARNING,
    "normal": logging.INFO,
    "verbose": logging.DEBUG,
}


def setup_logging(verbose: bool = False, quiet: bool = False, verbosity: str = "normal") -> None:
    """
    Configure logging for the preflight package.

    Command-line flags win over the configured verbosity.

    Args:
        verbose: If True, set level to DEBUG (``--verbose``)
        quiet: If True, set level to WARNING (``--quiet``)
        verbosity: Configured default from ``PREFLIGHT_LOG_VERBOSITY``
            (quiet, normal or verbose)
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = VERBOSITY_LEVELS.get(verbosity, logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(DEBUG_LOG_FORMAT if level == logging.DEBUG else LOG_FORMAT))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Avoid duplicate handlers if called multiple times
    logger.handlers.clear()
    logger.addHandler(handler)
