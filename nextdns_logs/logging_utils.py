from __future__ import annotations

import json
import logging
from typing import Any

ROOT_LOGGER = "nextdns_logs"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format="%(message)s")


def get_logger(mode: str | None = None) -> logging.Logger:
    """Logger for ``download`` or ``stream`` mode, or the package logger."""
    return logging.getLogger(f"{ROOT_LOGGER}.{mode}" if mode else ROOT_LOGGER)


def log_json(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """One JSON object per line; ``mode`` is taken from the logger name."""
    mode = logger.name[len(ROOT_LOGGER) + 1:] if logger.name.startswith(ROOT_LOGGER + ".") else None
    payload = {"event": event, **({"mode": mode} if mode else {}), **fields}
    logger.log(level, json.dumps(payload, default=str, ensure_ascii=False))
