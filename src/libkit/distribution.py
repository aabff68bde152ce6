"""Produce the ``package.json`` published alongside the built bundles."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .config import ToolkitConfig
from .entries import discover_entries
from .errors import EntryPointError
from .manifest import PackageManifest

__all__ = [
    "COPIED_DOCUMENTS",
    "ExportTarget",
    "build_distribution_manifest",
    "build_exports",
    "write_distribution",
]


LOGGER = logging.getLogger(__name__)

COPIED_DOCUMENTS = ("README.md", "LICENSE.md")
_STRIPPED_KEYS = ("devDependencies", "scripts", "files", "resolutions", "nonExternal")


class ExportTarget(BaseModel):
    """Conditional export of a single entry point."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    import_: str = Field(..., alias="import", description="ES module bundle.")
    types: str = Field(..., description="Type declaration file.")

    @classmethod
    def for_key(cls, key: str) -> "ExportTarget":
        return cls(**{"import": f"./{key}.mjs", "types": f"./{key}.d.ts"})


def build_exports(keys: Mapping[str, Any]) -> dict[str, dict[str, str]]:
    """Return the ``exports`` map for the given entry keys."""

    if "index" not in keys:
        raise EntryPointError("You cannot package a library without an index entry")

    exports = {".": ExportTarget.for_key("index")}
    for key in keys:
        if key == "index":
            continue
        exports[f"./{key}"] = ExportTarget.for_key(key)
    return {path: target.model_dump(by_alias=True) for path, target in exports.items()}


def build_distribution_manifest(manifest: PackageManifest, entries: Mapping[str, Any]) -> dict[str, Any]:
    data = manifest.data
    data["type"] = "module"
    dependencies = dict(data.get("dependencies") or {})
    for module in data.get("nonExternal") or []:
        dependencies.pop(module, None)
    data["dependencies"] = dependencies
    data["module"] = "./index.mjs"
    data["main"] = "./index.cjs"
    data["exports"] = build_exports(entries)
    for key in _STRIPPED_KEYS:
        data.pop(key, None)
    return data


def write_distribution(config: ToolkitConfig) -> Path:
    """Write ``dist/package.json`` and copy the README and licence next to it."""

    manifest = PackageManifest.load(config.manifest_path)
    entries = discover_entries(config.src_dir, manifest.name)
    data = build_distribution_manifest(manifest, entries)

    config.dist_dir.mkdir(parents=True, exist_ok=True)
    destination = config.dist_dir / "package.json"
    destination.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    LOGGER.info("wrote %s with %s entries", destination, len(entries))

    for document in COPIED_DOCUMENTS:
        source = config.root / document
        if source.is_file():
            shutil.copyfile(source, config.dist_dir / document)
            LOGGER.debug("copied %s", document)
    return destination
