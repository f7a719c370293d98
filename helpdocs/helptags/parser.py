"""Tag extraction for help files.

A help file marks a tag definition with stars: ``*tag-name*``. The opening
star sits at the start of a line or after a space or tab, the closing star
is followed by a space, a tab or the end of the line, and the name itself is
a run of characters other than a star, a space or a tab. Lines break only at
newlines. Code example blocks (introduced by a line ending in ``>`` and
closed by a line starting with ``<`` or any text in the first column) never
define tags.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from .diagnostics import Notifier, log_notify, unreadable_file

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"

BLANKS = " \t"
TAG_RE = re.compile(r"(?:(?<=[ \t])|^)\*([^* \t]+)\*(?=[ \t]|$)")
CODEBLOCK_START_RE = re.compile(r"(?:^|[ \t])>[a-z0-9]*$")
ESCAPE_RE = re.compile(r"[\\/]")


@dataclass(frozen=True)
class Tag:
    """One entry of a tags file."""

    name: str
    source_file: str
    locator: str

    def to_line(self) -> str:
        return f"{self.name}\t{self.source_file}\t{self.locator}"


@dataclass
class FileScanResult:
    """Metadata captured while reading a single help file."""

    file: str
    tag_count: int
    status: str = "ok"
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "file": self.file,
            "tag_count": self.tag_count,
            "status": self.status,
            "error": self.error,
        }


@dataclass
class FileTags:
    """Tags of one file together with its scan metadata."""

    result: FileScanResult
    tags: list[Tag] = field(default_factory=list)


def decode(contents: bytes | str) -> str:
    if isinstance(contents, bytes):
        return contents.decode(ENCODING, ENCODING_ERRORS)
    return contents


def iter_tag_spans(text: str) -> Iterator[str]:
    """Yield the name of every tag definition in ``text``, in document order."""
    in_codeblock = False
    for line in text.split("\n"):
        line = line.removesuffix("\r")
        if in_codeblock:
            if not line.strip(BLANKS):
                continue
            if line.startswith("<") or line[0] not in BLANKS:
                in_codeblock = False
            else:
                continue
        for match in TAG_RE.finditer(line):
            yield match.group(1)
        if CODEBLOCK_START_RE.search(line):
            in_codeblock = True


def escape_tag(name: str) -> str:
    return ESCAPE_RE.sub(lambda match: "\\" + match.group(0), name)


def build_locator(name: str) -> str:
    return f"/*{escape_tag(name)}*"


def extract_tags(contents: bytes | str, filename: str) -> list[Tag]:
    """Return the tags defined in one help file.

    ``filename`` is recorded as given; callers pass the basename.
    """
    text = decode(contents)
    return [Tag(name, filename, build_locator(name)) for name in iter_tag_spans(text)]


def read_file_tags(path: Path, notify: Notifier = log_notify) -> FileTags:
    """Read ``path`` and extract its tags.

    A file that cannot be read is reported and contributes no tags.
    """
    try:
        raw_bytes = path.read_bytes()
    except OSError as exc:
        notify(unreadable_file(path), logging.ERROR)
        logger.debug("Read failure for %s: %s", path, exc)
        return FileTags(
            FileScanResult(
                file=str(path),
                tag_count=0,
                status="error",
                error=str(exc),
            )
        )
    tags = extract_tags(raw_bytes, path.name)
    logger.debug("Extracted %d tags from %s", len(tags), path)
    return FileTags(
        FileScanResult(
            file=str(path),
            tag_count=len(tags),
        ),
        tags,
    )
