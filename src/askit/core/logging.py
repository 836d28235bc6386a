"""Logging setup for the AskIt service."""

from __future__ import annotations

import logging

from askit.core.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a single stream handler on the ``askit`` logger.

    Calling this more than once replaces the handler instead of stacking them.
    """
    logger = logging.getLogger("askit")
    logger.setLevel((level or settings.log_level).upper())

    for handler in list(logger.handlers):
        if getattr(handler, "_askit_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._askit_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
