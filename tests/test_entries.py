from __future__ import annotations

from pathlib import Path

import pytest

from libkit.entries import discover_entries, export_key
from libkit.errors import EntryPointError


@pytest.mark.parametrize(
    "specifier, expected",
    [
        ("@example/vue-lib", "index"),
        ("@example/vue-lib/forms/input", "forms/input"),
        ("@example/vue-lib//nested", "nested"),
        ("other/module", "other/module"),
    ],
)
def test_export_key(specifier, expected):
    assert export_key(specifier, "@example/vue-lib") == expected


def test_discover_entries(project: Path):
    entries = discover_entries(project / "src", "@example/vue-lib")

    assert entries == {
        "index": project / "src" / "index.ts",
        "forms/input": project / "src" / "forms" / "input.vue",
    }


def test_discover_entries_ignores_other_extensions(project: Path):
    (project / "src" / "legacy.js").write_text("/** @module @example/vue-lib/legacy */\n", encoding="utf-8")
    assert "legacy" not in discover_entries(project / "src", "@example/vue-lib")


def test_discover_entries_rejects_duplicates(project: Path):
    (project / "src" / "again.ts").write_text("/** @module @example/vue-lib */\n", encoding="utf-8")
    with pytest.raises(EntryPointError, match="Duplicate entry: index"):
        discover_entries(project / "src", "@example/vue-lib")


def test_discover_entries_requires_directory(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        discover_entries(tmp_path / "missing", "lib")
