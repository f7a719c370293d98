"""Help-tag index generator package."""
from __future__ import annotations

from . import config, diagnostics, discovery, generator, index, parser, writer
from .discovery import ALL_ROOTS
from .generator import generate, scan

__all__ = [
    "config",
    "diagnostics",
    "discovery",
    "generator",
    "index",
    "parser",
    "writer",
    "ALL_ROOTS",
    "generate",
    "scan",
]
