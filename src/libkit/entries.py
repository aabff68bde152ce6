"""Discover the public entry points of a library from ``@module`` tags."""

from __future__ import annotations

import re
from pathlib import Path

from .errors import EntryPointError

__all__ = ["ENTRY_SUFFIXES", "discover_entries", "export_key"]


ENTRY_SUFFIXES = (".ts", ".vue")

_MODULE_TAG = re.compile(r"@module\s+(@?[\w/.-]+)", re.MULTILINE)


def export_key(specifier: str, library_name: str) -> str:
    """Return the export key for ``specifier`` relative to ``library_name``.

    ``@scope/lib`` becomes ``index`` and ``@scope/lib/forms/input`` becomes
    ``forms/input``.
    """

    remainder = specifier.replace(library_name, "", 1) if library_name else specifier
    key = remainder.lstrip("/")
    return key or "index"


def discover_entries(src_dir: str | Path, library_name: str) -> dict[str, Path]:
    """Map export keys to the source files declaring them."""

    src_dir = Path(src_dir)
    if not src_dir.is_dir():
        raise FileNotFoundError(src_dir)

    entries: dict[str, Path] = {}
    for path in sorted(src_dir.rglob("*")):
        if not path.is_file() or path.suffix not in ENTRY_SUFFIXES:
            continue
        content = path.read_text(encoding="utf-8")
        for match in _MODULE_TAG.finditer(content):
            key = export_key(match.group(1), library_name)
            if key in entries:
                raise EntryPointError(f"Duplicate entry: {key}")
            entries[key] = path
    return entries
