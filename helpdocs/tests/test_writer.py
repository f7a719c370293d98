from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from helpdocs.helptags import index, writer
from helpdocs.helptags.parser import extract_tags


def test_write_index_outputs_tab_separated_lines(
    tmp_path: Path,
    notify: Callable[[str, int], None],
    notifications: list[tuple[str, int]],
) -> None:
    tags = extract_tags("*bar* *apple*\n", "fruit.txt")
    tag_index = index.build_index([tags], include_index_tag=True)
    out_path = tmp_path / "tags"
    assert writer.write_index(tag_index, out_path, notify=notify)
    assert out_path.read_bytes() == (
        b"apple\tfruit.txt\t/*apple*\n"
        b"bar\tfruit.txt\t/*bar*\n"
        b"help-tags\ttags\t1\n"
    )
    assert len(notifications) == 1
    message, level = notifications[0]
    assert level == logging.INFO
    assert message.startswith(f"Helptags written to {out_path} in ")
    assert message.endswith(" seconds")


def test_empty_index_is_not_written(tmp_path: Path) -> None:
    out_path = tmp_path / "tags"
    assert not writer.write_index(index.TagIndex(), out_path)
    assert not out_path.exists()


def test_index_with_duplicates_leaves_existing_file_alone(tmp_path: Path) -> None:
    out_path = tmp_path / "tags"
    out_path.write_text("old\told.txt\t/*old*\n", encoding="utf-8")
    tag_index = index.build_index(
        [extract_tags("*foo*\n", "a.txt"), extract_tags("*foo*\n", "b.txt")]
    )
    assert not writer.write_index(tag_index, out_path)
    assert out_path.read_text(encoding="utf-8") == "old\told.txt\t/*old*\n"


def test_unwritable_target_raises(
    tmp_path: Path,
    notify: Callable[[str, int], None],
    notifications: list[tuple[str, int]],
) -> None:
    out_path = tmp_path / "missing-dir" / "tags"
    tag_index = index.build_index([extract_tags("*foo*\n", "a.txt")])
    with pytest.raises(writer.TagsWriteError) as excinfo:
        writer.write_index(tag_index, out_path, notify=notify)
    assert excinfo.value.path == out_path
    assert isinstance(excinfo.value.__cause__, OSError)
    assert notifications == [(f"E152: Cannot open {out_path} for writing", logging.ERROR)]


def test_non_utf8_tag_bytes_are_written_back(tmp_path: Path) -> None:
    tag_index = index.build_index([extract_tags(b"*caf\xe9*\n", "latin.txt")])
    out_path = tmp_path / "tags"
    writer.write_index(tag_index, out_path)
    assert out_path.read_bytes() == b"caf\xe9\tlatin.txt\t/*caf\xe9*\n"
