"""Shared exception policy helpers for tolerated third-party failures."""

from __future__ import annotations

import logging


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *args: object,
    level: int = logging.DEBUG,
) -> None:
    """Emit structured observability for a tolerated exception."""
    logger.log(level, message, *args, exc_info=True)


__all__ = ["log_recoverable"]
