"""Colored console logging for riboreader and its command line tools."""

from __future__ import annotations

import logging

import colorlog

DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR

DEFAULT_FORMAT = "%(log_color)s%(name)s [%(levelname)s] %(message)s"


def setup(
    level: int = logging.INFO,
    logger: logging.Logger | None = None,
    fmt: str = DEFAULT_FORMAT,
) -> None:
    """Attach a colored stream handler to a logger.

    Calling this function again on the same logger replaces the handler
    installed by the previous call instead of adding a second one.

    Parameters
    ----------
    level
        logging level (see :mod:`logging` module).
    logger
        logger to configure. Defaults to the ``riboreader`` package logger.
    fmt
        :class:`colorlog.ColoredFormatter` format string.

    Examples
    --------
    >>> from riboreader import logging
    >>> logging.setup(level=logging.DEBUG)
    """
    if logger is None:
        logger = colorlog.getLogger("riboreader")

    for handler in list(logger.handlers):
        if getattr(handler, "_riboreader", False):
            logger.removeHandler(handler)

    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(fmt))
    handler._riboreader = True

    logger.setLevel(level)
    logger.addHandler(handler)
