"""Locating help files below a documentation root."""
from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from .config import HelptagsConfig, normalize_path
from .diagnostics import Notifier, log_notify

logger = logging.getLogger(__name__)

ALL_ROOTS = "ALL"
PRIMARY_SUFFIX = ".txt"
# "help.nlx" -> "nl"
TRANSLATED_RE = re.compile(r"\.([a-z]{2}).$")


@dataclass
class DocumentSet:
    root: Path
    primary: list[Path] = field(default_factory=list)
    translated: dict[str, list[Path]] = field(default_factory=dict)

    @property
    def file_count(self) -> int:
        return len(self.primary) + sum(len(files) for files in self.translated.values())


def iter_files(root: Path) -> Iterator[Path]:
    for path in sorted(root.rglob("*")):
        if path.is_file():
            yield path


def translation_language(name: str) -> str | None:
    if name.endswith(PRIMARY_SUFFIX):
        return None
    match = TRANSLATED_RE.search(name)
    return match.group(1) if match else None


def discover(root: Path, notify: Notifier = log_notify) -> DocumentSet:
    documents = DocumentSet(root=root)
    if not root.is_dir():
        notify(f"Documentation directory not found: {root}", logging.WARNING)
        return documents
    for path in iter_files(root):
        if path.name.endswith(PRIMARY_SUFFIX):
            documents.primary.append(path)
            continue
        language = translation_language(path.name)
        if language:
            documents.translated.setdefault(language, []).append(path)
    logger.debug(
        "Discovered %d help files and %d translations in %s",
        len(documents.primary),
        documents.file_count - len(documents.primary),
        root,
    )
    return documents


def resolve_roots(root: str | Path, config: HelptagsConfig) -> list[Path]:
    """Expand ``ALL`` to every configured documentation root."""
    if str(root) == ALL_ROOTS:
        return list(config.doc_roots)
    return [normalize_path(root)]
