"""Serialising a tag index to a ``tags`` file."""
from __future__ import annotations

import logging
import time
from pathlib import Path

from .diagnostics import Notifier, log_notify, unwritable_target, written
from .index import TagIndex
from .parser import ENCODING, ENCODING_ERRORS

logger = logging.getLogger(__name__)


class TagsWriteError(RuntimeError):
    """Raised when a tags file cannot be written."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


def render_index(index: TagIndex) -> str:
    return "".join(f"{tag.to_line()}\n" for tag in index.tags)


def write_index(
    index: TagIndex,
    out_path: Path,
    *,
    notify: Notifier = log_notify,
    started: float | None = None,
) -> bool:
    """Write ``index`` to ``out_path``.

    Returns False without touching the file system when the index is empty
    or contains duplicate tags. ``started`` is a ``time.perf_counter()``
    value used for the completion message.
    """
    if not index.tags:
        logger.debug("No tags for %s, skipping", out_path)
        return False
    if index.has_duplicates:
        logger.debug("Duplicate tags for %s, skipping", out_path)
        return False
    start = time.perf_counter() if started is None else started
    content = render_index(index)
    try:
        with out_path.open("w", encoding=ENCODING, errors=ENCODING_ERRORS, newline="\n") as fh:
            fh.write(content)
    except OSError as exc:
        message = unwritable_target(out_path)
        notify(message, logging.ERROR)
        raise TagsWriteError(out_path, message) from exc
    notify(written(out_path, time.perf_counter() - start), logging.INFO)
    return True
