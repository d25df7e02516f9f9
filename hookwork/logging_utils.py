"""Logging configuration helpers."""

from __future__ import annotations

import logging

from hookwork.config import LoggingConfig


def configure_logging(config: LoggingConfig | None = None, level: str | None = None) -> None:
    config = config or LoggingConfig()
    normalized = (level or config.level).upper()
    logging.basicConfig(
        level=getattr(logging, normalized, logging.INFO),
        format=config.format,
    )
