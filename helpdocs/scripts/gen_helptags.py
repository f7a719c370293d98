#!/usr/bin/env python3
"""CLI entrypoint for the helptags generator."""
from __future__ import annotations

import argparse
import json
import logging
from collections import Counter
from pathlib import Path
from typing import Any

from helpdocs.helptags import config as helptags_config
from helpdocs.helptags import generator
from helpdocs.helptags.discovery import ALL_ROOTS
from helpdocs.helptags.generator import ScanReport, TargetResult

logger = logging.getLogger("helpdocs.helptags.cli")


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def resolve_directory(directory: str) -> str | Path:
    if directory == ALL_ROOTS:
        return directory
    resolved = Path(directory).expanduser().resolve()
    if not resolved.is_dir():
        raise SystemExit(f"Directory not found: {resolved}")
    return resolved


def load_config(args: argparse.Namespace) -> helptags_config.HelptagsConfig:
    config = helptags_config.load_config(
        doc_roots=args.doc_root,
        runtime=args.runtime,
        max_workers=args.workers,
    )
    if args.directory == ALL_ROOTS and not config.doc_roots:
        raise SystemExit("No documentation roots configured. Use --doc-root or HELPTAGS_DOC_ROOTS.")
    return config


def command_generate(args: argparse.Namespace) -> int:
    directory = resolve_directory(args.directory)
    config = load_config(args)
    logger.info("Generating help tags for %s", directory)
    results = generator.generate(
        directory, args.include_help_tags, config=config
    )
    counts = summarize_results(results)
    logger.info(
        "Help tags done. Written: %d, Skipped: %d, Failed: %d",
        counts["written"],
        counts["empty"] + counts["duplicates"],
        counts["error"],
    )
    return 1 if counts["error"] else 0


def command_check(args: argparse.Namespace) -> int:
    directory = resolve_directory(args.directory)
    config = load_config(args)
    report = generator.scan(directory, args.include_help_tags, config=config)
    print_status_table(report)
    if args.report:
        write_scan_report(Path(args.report), report)
        logger.info("Scan report written to %s", args.report)
    return 1 if report.duplicate_count else 0


def summarize_results(results: list[TargetResult]) -> Counter[str]:
    counts: Counter[str] = Counter({"written": 0, "empty": 0, "duplicates": 0, "error": 0})
    for result in results:
        counts[result.status] += 1
    return counts


def build_scan_report(report: ScanReport) -> dict[str, Any]:
    files = report.files
    return {
        "roots": [str(root) for root in report.roots],
        "files": {file: result.to_dict() for file, result in files.items()},
        "targets": [target.to_dict() for target in report.targets],
        "counts": {
            "files": len(files),
            "tags": sum(result.tag_count for result in files.values()),
            "errors": sum(1 for result in files.values() if result.status == "error"),
            "duplicates": report.duplicate_count,
        },
    }


def write_scan_report(path: Path, report: ScanReport) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(build_scan_report(report), fh, indent=2)


def print_status_table(report: ScanReport) -> None:
    print("File".ljust(70), "Status".ljust(8), "Tags")
    print("-" * 85)
    for file_path, result in sorted(report.files.items()):
        print(file_path.ljust(70), result.status.ljust(8), str(result.tag_count))
    print()
    for target in report.targets:
        print(
            str(target.path).ljust(70),
            f"{len(target.index)} tags, {len(target.index.duplicates)} duplicates",
        )


def add_directory_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument("directory", help=f"Help file directory, or {ALL_ROOTS}")
    subparser.add_argument(
        "--include-help-tags",
        action="store_true",
        help='Always add the "help-tags" tag',
    )


def build_parser() -> argparse.ArgumentParser:
    parser_obj = argparse.ArgumentParser(description="Generate help tags files")
    parser_obj.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser_obj.add_argument(
        "--doc-root",
        action="append",
        help=f"Documentation root used for {ALL_ROOTS} (overrides HELPTAGS_DOC_ROOTS)",
    )
    parser_obj.add_argument("--runtime", help="Runtime directory (overrides VIMRUNTIME)")
    parser_obj.add_argument(
        "--workers",
        type=int,
        help="Number of reader threads (overrides HELPTAGS_MAX_WORKERS)",
    )
    subparsers = parser_obj.add_subparsers(dest="command")

    generate_parser = subparsers.add_parser("generate", help="Write tags files")
    add_directory_arguments(generate_parser)
    generate_parser.set_defaults(func=command_generate)

    check_parser = subparsers.add_parser("check", help="Dry-run: report tags and duplicates")
    add_directory_arguments(check_parser)
    check_parser.add_argument("--report", help="Write a JSON scan report to this path")
    check_parser.set_defaults(func=command_check)

    return parser_obj


def main(argv: list[str] | None = None) -> int:
    parser_obj = build_parser()
    args = parser_obj.parse_args(argv)
    if not getattr(args, "command", None):
        parser_obj.print_help()
        return 0
    configure_logging(args.verbose)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
