"""Logging configuration helpers for the decision maker."""

from __future__ import annotations

import logging
from logging import Logger


def configure_logging(level: int = logging.WARNING) -> Logger:
    """Configure basic logging on stderr and return the package logger.

    The default level keeps per-frame DEBUG chatter off the alternate screen.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    return logging.getLogger("decision_maker")
