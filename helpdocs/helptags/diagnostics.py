"""Notification sink and the conventional helptags messages."""
from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger("helpdocs.helptags")

Notifier = Callable[[str, int], None]


def log_notify(message: str, level: int = logging.INFO) -> None:
    logger.log(level, message)


def unreadable_file(path: object) -> str:
    return f"E153: Unable to open {path} for reading"


def duplicate_tag(name: str, filename: str, previous_filename: str) -> str:
    files = filename if filename == previous_filename else f"{filename} and {previous_filename}"
    return f'E154: Duplicate tag "{name}" in {files}'


def unwritable_target(path: object) -> str:
    return f"E152: Cannot open {path} for writing"


def written(path: object, seconds: float) -> str:
    return f"Helptags written to {path} in {seconds:f} seconds"
