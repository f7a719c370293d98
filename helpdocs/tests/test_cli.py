from __future__ import annotations

import json
from pathlib import Path

import pytest

from helpdocs.scripts import gen_helptags


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("HELPTAGS_DOC_ROOTS", "HELPTAGS_MAX_WORKERS", "VIMRUNTIME"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def docs(tmp_path: Path) -> Path:
    root = tmp_path / "doc"
    root.mkdir()
    (root / "cli.txt").write_text("*cli.txt*\tCommand line\n\n*cli-usage*\n", encoding="utf-8")
    (root / "cli.nlx").write_text("*cli-gebruik*\n", encoding="utf-8")
    return root.resolve()


def test_generate_command_writes_tags(docs: Path) -> None:
    assert gen_helptags.main(["--workers", "2", "generate", str(docs)]) == 0
    assert (docs / "tags").read_text(encoding="utf-8") == (
        "cli-usage\tcli.txt\t/*cli-usage*\ncli.txt\tcli.txt\t/*cli.txt*\n"
    )
    assert (docs / "tags-nl").exists()


def test_generate_all_uses_doc_roots(docs: Path) -> None:
    exit_code = gen_helptags.main(
        ["--doc-root", str(docs), "generate", "ALL", "--include-help-tags"]
    )
    assert exit_code == 0
    assert "help-tags\ttags\t1\n" in (docs / "tags").read_text(encoding="utf-8")


def test_generate_reports_failed_target(docs: Path) -> None:
    (docs / "tags").mkdir()
    assert gen_helptags.main(["generate", str(docs)]) == 1
    assert (docs / "tags-nl").exists()


def test_check_writes_report_and_flags_duplicates(
    docs: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (docs / "copy.txt").write_text("*cli-usage*\n", encoding="utf-8")
    report_path = tmp_path / "out" / "scan_report.json"
    exit_code = gen_helptags.main(["check", str(docs), "--report", str(report_path)])
    assert exit_code == 1
    assert not (docs / "tags").exists()
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["counts"] == {"files": 3, "tags": 4, "errors": 0, "duplicates": 1}
    assert report["targets"][0]["duplicates"] == [
        {"tag": "cli-usage", "files": ["cli.txt", "copy.txt"]}
    ]
    output = capsys.readouterr().out
    assert "1 duplicates" in output


def test_missing_directory_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Directory not found"):
        gen_helptags.main(["generate", str(tmp_path / "missing")])


def test_all_without_roots_exits() -> None:
    with pytest.raises(SystemExit, match="No documentation roots configured"):
        gen_helptags.main(["check", "ALL"])


def test_check_without_duplicates_exits_zero(docs: Path) -> None:
    assert gen_helptags.main(["check", str(docs)]) == 0
    assert not (docs / "tags").exists()
