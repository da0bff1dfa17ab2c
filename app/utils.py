# -*- coding: utf-8 -*-
# Time       : 2025/8/20 21:07
# Author     : QIN2DIM
# GitHub     : https://github.com/QIN2DIM
# Description: logging setup and small parsing helpers
from __future__ import annotations

import os
import sys
from datetime import UTC
from typing import Any, List, Sequence

from loguru import logger

_TRUTHY = {"true", "1", "yes", "on"}
_FALSY = {"false", "0", "no", "off"}


def utc_filter(record):
    """Render log timestamps in UTC so hosted logs line up across regions"""
    record["time"] = record["time"].astimezone(UTC)
    return record


def init_log(*, debug: bool = False, **sink_channel):
    # DEBUG forces the most verbose stdout level, otherwise LOG_LEVEL decides
    log_level = "DEBUG" if debug else os.getenv("LOG_LEVEL", "INFO").upper()

    persistent_format = (
        "<g>{time:YYYY-MM-DD HH:mm:ss}</g> | "
        "<lvl>{level}</lvl>    | "
        "<c><u>{name}</u></c>:{function}:{line} | "
        "{message} - "
        "{extra}"
    )
    stdout_format = (
        "<g>{time:YYYY-MM-DD HH:mm:ss}</g> | "
        "<lvl>{level:<8}</lvl>    | "
        "<c>{name}</c>:<c>{function}</c>:<c>{line}</c> | "
        "<n>{message}</n>"
    )

    logger.remove()
    logger.add(
        sink=sys.stdout,
        colorize=True,
        level=log_level,
        format=stdout_format,
        diagnose=False,
        filter=utc_filter,
    )
    if sink_channel.get("error"):
        logger.add(
            sink=sink_channel.get("error"),
            level="ERROR",
            rotation="5 MB",
            retention="7 days",
            encoding="utf8",
            diagnose=False,
            filter=utc_filter,
        )
    if sink_channel.get("runtime"):
        logger.add(
            sink=sink_channel.get("runtime"),
            level="TRACE",
            rotation="5 MB",
            retention="7 days",
            encoding="utf8",
            diagnose=False,
            filter=utc_filter,
        )
    if sink_channel.get("serialize"):
        logger.add(
            sink=sink_channel.get("serialize"),
            level="DEBUG",
            format=persistent_format,
            encoding="utf8",
            diagnose=False,
            serialize=True,
            filter=utc_filter,
        )
    return logger


def parse_boolean(value: Any, default: bool = False) -> bool:
    """Lenient boolean parsing for environment values

    Unrecognised strings fall back to ``default`` instead of raising.
    """
    if value is None:
        return default

    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False

    return default


def parse_comma_separated_list(
    value: str | None, default: Sequence[str] | None = None
) -> List[str]:
    """Split ``"es, fr,,de"`` into ``["es", "fr", "de"]``

    Blank or non-string input returns a copy of ``default``.
    """
    if not value or not isinstance(value, str):
        return list(default or [])

    return [item.strip() for item in value.split(",") if item.strip()]


def log_error(context: str, error: BaseException) -> None:
    """Log an error tersely, with the full traceback only in debug mode"""
    from settings import settings

    if settings.DEBUG:
        logger.opt(exception=error).error(f"{context}: {error}")
    else:
        logger.error(f"{context}: {error}")
