"""Logging setup for the gnudate command line."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Route library logs to stderr; debug records only when ``verbose``."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )
