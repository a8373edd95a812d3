"""Logging configuration for the tro command line.

Modules log through ``logging.getLogger(__name__)``; only the CLI entry
point calls :func:`configure_logging`.  Output goes to stderr through
Rich's :class:`~rich.logging.RichHandler` when Rich is installed, and a
plain :class:`logging.StreamHandler` otherwise, so ``--help`` and
``doctor`` keep working without the optional UI packages.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER: str = "tro"

_LEVELS: tuple[int, ...] = (logging.WARNING, logging.INFO, logging.DEBUG)


def level_for_verbosity(verbosity: int) -> int:
    """Map ``-v`` count to a logging level (0 → WARNING, 1 → INFO, 2+ → DEBUG)."""
    return _LEVELS[max(0, min(verbosity, len(_LEVELS) - 1))]


def _build_handler() -> logging.Handler:
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(levelname)s %(name)s: %(message)s"),
        )
        return handler
    return RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )


def configure_logging(verbosity: int = 0) -> logging.Logger:
    """Attach a single stderr handler to the ``tro`` logger.

    Calling this again replaces the previous handler rather than
    stacking a second one.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(_build_handler())
    logger.setLevel(level_for_verbosity(verbosity))
    return logger
