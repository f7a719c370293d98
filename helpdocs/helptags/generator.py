"""Generating ``tags`` files for one or more documentation roots."""
from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from .config import HelptagsConfig, load_config
from .diagnostics import Notifier, log_notify
from .discovery import discover, resolve_roots
from .index import TagIndex, build_index
from .parser import FileScanResult, FileTags, read_file_tags
from .writer import TagsWriteError, write_index

logger = logging.getLogger(__name__)

TAGS_FILENAME = "tags"


@dataclass
class TagGroup:
    """Files that are indexed together into one tags file."""

    root: Path
    language: str | None
    files: list[Path]
    out_path: Path
    include_index_tag: bool


@dataclass
class TargetResult:
    path: Path
    language: str | None
    status: str
    tag_count: int = 0
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "path": str(self.path),
            "language": self.language,
            "status": self.status,
            "tag_count": self.tag_count,
            "error": self.error,
        }


@dataclass
class TargetScan:
    path: Path
    language: str | None
    index: TagIndex
    files: list[FileScanResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "path": str(self.path),
            "language": self.language,
            "tag_count": len(self.index),
            "duplicates": [
                {"tag": current.name, "files": [previous.source_file, current.source_file]}
                for previous, current in self.index.duplicates
            ],
        }


@dataclass
class ScanReport:
    roots: list[Path]
    targets: list[TargetScan] = field(default_factory=list)

    @property
    def files(self) -> dict[str, FileScanResult]:
        return {result.file: result for target in self.targets for result in target.files}

    @property
    def duplicate_count(self) -> int:
        return sum(len(target.index.duplicates) for target in self.targets)


def tags_path(root: Path, language: str | None = None) -> Path:
    if language:
        return root / f"{TAGS_FILENAME}-{language}"
    return root / TAGS_FILENAME


def plan_groups(
    roots: Iterable[Path],
    include_index_tag: bool,
    config: HelptagsConfig,
    notify: Notifier = log_notify,
) -> list[TagGroup]:
    groups: list[TagGroup] = []
    for root in roots:
        documents = discover(root, notify)
        # the runtime documentation always lists its own tags file
        include = include_index_tag or root == config.runtime_doc_root
        groups.append(TagGroup(root, None, documents.primary, tags_path(root), include))
        for language in sorted(documents.translated):
            groups.append(
                TagGroup(
                    root,
                    language,
                    documents.translated[language],
                    tags_path(root, language),
                    include,
                )
            )
    return groups


def extract_groups(
    groups: list[TagGroup],
    max_workers: int,
    notify: Notifier = log_notify,
) -> Iterator[tuple[TagGroup, list[FileTags]]]:
    """Read every file of every group on a thread pool.

    Yields each group once all of its files have been read.
    """
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="helptags") as executor:
        pending = []
        for group in groups:
            futures = [executor.submit(read_file_tags, path, notify) for path in group.files]
            pending.append((group, futures))
        for group, futures in pending:
            yield group, [future.result() for future in futures]


def write_group(
    group: TagGroup,
    index: TagIndex,
    notify: Notifier = log_notify,
    started: float | None = None,
) -> TargetResult:
    try:
        wrote = write_index(index, group.out_path, notify=notify, started=started)
    except TagsWriteError as exc:
        cause = exc.__cause__ or exc
        logger.debug("Write failed for %s: %s", group.out_path, cause)
        return TargetResult(group.out_path, group.language, "error", len(index), str(cause))
    if wrote:
        status = "written"
    elif index.has_duplicates:
        status = "duplicates"
    else:
        status = "empty"
    return TargetResult(group.out_path, group.language, status, len(index))


def generate(
    root: str | Path,
    include_index_tag: bool = False,
    *,
    config: HelptagsConfig | None = None,
    notify: Notifier = log_notify,
) -> list[TargetResult]:
    """Create a tags file for every help file directory below ``root``.

    ``root`` is a documentation directory or ``"ALL"`` for every root in
    ``config.doc_roots``. Translated help files get one ``tags-<lang>`` file
    per language. A target that fails to write is reported in its
    TargetResult and does not stop the others.
    """
    config = config or load_config()
    roots = resolve_roots(root, config)
    groups = plan_groups(roots, include_index_tag, config, notify)
    results: list[TargetResult] = []
    for group, file_tags in extract_groups(groups, config.max_workers, notify):
        # timed from this group's join
        started = time.perf_counter()
        index = build_index(
            (entry.tags for entry in file_tags), group.include_index_tag, notify
        )
        results.append(write_group(group, index, notify, started))
    logger.debug("Processed %d targets in %d roots", len(results), len(roots))
    return results


def scan(
    root: str | Path,
    include_index_tag: bool = False,
    *,
    config: HelptagsConfig | None = None,
    notify: Notifier = log_notify,
) -> ScanReport:
    """Extract and merge like :func:`generate` without writing anything."""
    config = config or load_config()
    roots = resolve_roots(root, config)
    groups = plan_groups(roots, include_index_tag, config, notify)
    report = ScanReport(roots=roots)
    for group, file_tags in extract_groups(groups, config.max_workers, notify):
        index = build_index(
            (entry.tags for entry in file_tags), group.include_index_tag, notify
        )
        report.targets.append(
            TargetScan(
                group.out_path,
                group.language,
                index,
                [entry.result for entry in file_tags],
            )
        )
    return report
