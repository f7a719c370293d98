"""Runtime configuration for the helptags generator."""
from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


@dataclass
class HelptagsConfig:
    """Documentation roots known to the host plus pool sizing."""

    doc_roots: list[Path] = field(default_factory=list)
    runtime_doc_root: Path | None = None
    max_workers: int = DEFAULT_MAX_WORKERS


def normalize_path(value: str | Path) -> Path:
    return Path(value).expanduser().resolve()


def resolve_max_workers(value: int | None) -> int:
    if value is not None and value > 0:
        return value
    env_value = os.environ.get("HELPTAGS_MAX_WORKERS")
    if env_value:
        try:
            parsed = int(env_value)
        except ValueError:
            logger.debug("Invalid HELPTAGS_MAX_WORKERS value: %s", env_value)
        else:
            if parsed > 0:
                return parsed
            logger.debug("Ignoring non-positive HELPTAGS_MAX_WORKERS: %s", env_value)
    return DEFAULT_MAX_WORKERS


def resolve_doc_roots(values: Iterable[str | Path] | None) -> list[Path]:
    if values:
        entries = [str(value) for value in values]
    else:
        env_value = os.environ.get("HELPTAGS_DOC_ROOTS", "")
        entries = env_value.split(os.pathsep)
    roots: list[Path] = []
    for entry in entries:
        if not entry.strip():
            continue
        path = normalize_path(entry.strip())
        if path not in roots:
            roots.append(path)
    return roots


def resolve_runtime_doc_root(runtime: str | Path | None) -> Path | None:
    """Return ``<runtime>/doc``, falling back to ``$VIMRUNTIME``."""
    value = runtime or os.environ.get("VIMRUNTIME")
    if not value:
        return None
    return normalize_path(value) / "doc"


def load_config(
    doc_roots: Iterable[str | Path] | None = None,
    runtime: str | Path | None = None,
    max_workers: int | None = None,
) -> HelptagsConfig:
    return HelptagsConfig(
        doc_roots=resolve_doc_roots(doc_roots),
        runtime_doc_root=resolve_runtime_doc_root(runtime),
        max_workers=resolve_max_workers(max_workers),
    )
