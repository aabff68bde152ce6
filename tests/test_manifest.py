from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from libkit.errors import ManifestError
from libkit.manifest import AttributeSet, PackageManifest


def _attributes(**overrides: str) -> AttributeSet:
    values = {
        "name": "@example/vue-lib",
        "description": "A starter kit for Vue component libraries",
        "author": "Example Author",
        "copyright": "(c) Example Corp",
    }
    values.update(overrides)
    return AttributeSet(**values)


def test_load_reads_attributes(project: Path):
    manifest = PackageManifest.load(project / "package.json")
    assert manifest.name == "@example/vue-lib"
    assert manifest.attributes() == _attributes()


def test_load_missing_file(tmp_path: Path):
    with pytest.raises(ManifestError):
        PackageManifest.load(tmp_path / "package.json")


def test_load_invalid_json(tmp_path: Path):
    path = tmp_path / "package.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ManifestError, match="Unable to parse"):
        PackageManifest.load(path)


def test_attributes_requires_every_field():
    manifest = PackageManifest({"name": "lib", "description": "d", "author": "a"})
    with pytest.raises(ManifestError, match="copyright"):
        manifest.attributes()


def test_with_attributes_preserves_other_keys(project: Path, tmp_path: Path):
    manifest = PackageManifest.load(project / "package.json")
    updated = manifest.with_attributes(_attributes(name="@acme/widgets", author="Acme"))
    destination = updated.save(tmp_path / "out.json")

    raw = destination.read_text(encoding="utf-8")
    data = json.loads(raw)
    assert data["name"] == "@acme/widgets"
    assert data["author"] == "Acme"
    assert data["version"] == "0.0.1"
    assert list(data)[:3] == ["name", "version", "description"]
    assert raw.startswith('{\n  "name"')
    # The original manifest is left untouched.
    assert manifest.name == "@example/vue-lib"


def test_attribute_set_is_frozen_and_strict():
    attributes = _attributes()
    with pytest.raises(ValidationError):
        attributes.name = "other"  # type: ignore[misc]
    with pytest.raises(ValidationError):
        AttributeSet(name="a", description="b", author="c", copyright="d", license="MIT")


def test_changes_pairs_old_and_new_values():
    changes = list(_attributes().changes(_attributes(author="Acme")))
    assert [field for field, _, _ in changes] == ["name", "description", "author", "copyright"]
    assert changes[2] == ("author", "Example Author", "Acme")
