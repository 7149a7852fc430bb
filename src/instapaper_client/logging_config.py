"""Configure logging for the command-line tool.

Records from the ``instapaper_client`` package go to stderr through a single
named handler. Calling :func:`setup_logging` again swaps that handler for a
fresh one bound to the current ``sys.stderr`` instead of stacking a second
one, so a process that runs the CLI several times logs each record once.
"""

import logging
import sys

PACKAGE_LOGGER = "instapaper_client"
HANDLER_NAME = "instapaper-cli"

CONSOLE_FORMAT = "%(levelname)-7s %(name)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-7s %(name)s: %(message)s"

QUIET_LOGGERS = ("httpx", "httpcore")


def _console_handler(debug: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    if debug:
        handler.setFormatter(logging.Formatter(DEBUG_FORMAT, datefmt="%H:%M:%S"))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def setup_logging(debug: bool = False) -> logging.Logger:
    """Attach the stderr handler to the package logger and return the logger."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            logger.removeHandler(handler)
            handler.close()

    logger.addHandler(_console_handler(debug))
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # httpx logs every request line at INFO
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)
    return logger
