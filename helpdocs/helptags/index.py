"""Merging, sorting and duplicate detection for tag lists."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .diagnostics import Notifier, duplicate_tag, log_notify
from .parser import ENCODING, ENCODING_ERRORS, Tag

logger = logging.getLogger(__name__)

INDEX_TAG = Tag("help-tags", "tags", "1")


@dataclass
class TagIndex:
    tags: list[Tag] = field(default_factory=list)
    duplicates: list[tuple[Tag, Tag]] = field(default_factory=list)

    @property
    def has_duplicates(self) -> bool:
        return bool(self.duplicates)

    def __len__(self) -> int:
        return len(self.tags)


def sort_key(tag: Tag) -> bytes:
    return tag.name.encode(ENCODING, ENCODING_ERRORS)


def find_duplicates(tags: list[Tag]) -> list[tuple[Tag, Tag]]:
    """Pair every tag with its predecessor when both share a name.

    ``tags`` must already be sorted.
    """
    pairs: list[tuple[Tag, Tag]] = []
    for previous, current in zip(tags, tags[1:]):
        if current.name == previous.name:
            pairs.append((previous, current))
    return pairs


def build_index(
    file_tag_lists: Iterable[Iterable[Tag]],
    include_index_tag: bool = False,
    notify: Notifier = log_notify,
) -> TagIndex:
    tags: list[Tag] = []
    for file_tags in file_tag_lists:
        tags.extend(file_tags)
    if include_index_tag:
        tags.append(INDEX_TAG)
    tags.sort(key=sort_key)
    duplicates = find_duplicates(tags)
    for previous, current in duplicates:
        notify(
            duplicate_tag(current.name, current.source_file, previous.source_file),
            logging.WARNING,
        )
    if duplicates:
        logger.debug("%d duplicate tag pairs among %d tags", len(duplicates), len(tags))
    return TagIndex(tags, duplicates)
