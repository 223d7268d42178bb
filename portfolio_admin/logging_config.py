from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = os.getenv("PORTFOLIO_ADMIN_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
        level: Optional[Union[int, str]] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Configure the root logger for the admin app

    Formats:
    - "json" (default): one JSON object per line, 'extra={...}' fields become keys
    - "plain": human-readable lines for local development

    The format comes from 'force_format', then PORTFOLIO_ADMIN_LOG_FORMAT.
    The level comes from 'level', then PORTFOLIO_ADMIN_LOG_LEVEL (default INFO).
    Per-request lines from the dev server are kept at WARNING unless DEBUG is requested.
    """
    format_mode = (force_format or os.getenv("PORTFOLIO_ADMIN_LOG_FORMAT", "json")).lower()
    root_level = _resolve_level(level)

    if format_mode == "plain":
        formatter: logging.Formatter = logging.Formatter(PLAIN_FORMAT)
    else:
        formatter = jsonlogger.JsonFormatter(JSON_FORMAT)

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(root_level)
    # Exactly one handler on the root logger
    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger("werkzeug").setLevel(
        logging.DEBUG if root_level <= logging.DEBUG else logging.WARNING
    )
