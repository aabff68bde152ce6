"""Read and write the project metadata stored in ``package.json``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .errors import ManifestError

__all__ = ["ATTRIBUTE_FIELDS", "AttributeSet", "PackageManifest"]


ATTRIBUTE_FIELDS = ("name", "description", "author", "copyright")


class AttributeSet(BaseModel):
    """The customizable identity of a library."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Package name, optionally scoped (``@scope/name``).")
    description: str = Field(..., description="Short description of the library.")
    author: str = Field(..., description="Author of the library.")
    copyright: str = Field(..., description="Copyright line of the library.")

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield ``(field, value)`` pairs in customization order."""

        for key in ATTRIBUTE_FIELDS:
            yield key, getattr(self, key)

    def changes(self, other: "AttributeSet") -> Iterator[tuple[str, str, str]]:
        """Yield ``(field, old, new)`` for every field, changed or not."""

        for key, value in self.items():
            yield key, value, getattr(other, key)


class PackageManifest:
    """In-memory copy of a ``package.json`` record.

    The record is always read and written whole; keys the toolkit does not
    know about are preserved in their original order.
    """

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = dict(data)

    @classmethod
    def load(cls, path: str | Path) -> "PackageManifest":
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ManifestError(f"{path} does not exist") from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ManifestError(f"Unable to parse {path.name}: {exc}") from exc
        if not isinstance(data, dict):
            raise ManifestError(f"{path.name} must contain a JSON object")
        return cls(data)

    @property
    def data(self) -> dict[str, Any]:
        """Return a shallow copy of the underlying record."""

        return dict(self._data)

    @property
    def name(self) -> str:
        value = self._data.get("name")
        if not isinstance(value, str) or not value:
            raise ManifestError("package.json has no name")
        return value

    def attributes(self) -> AttributeSet:
        values: dict[str, str] = {}
        for key in ATTRIBUTE_FIELDS:
            value = self._data.get(key)
            if not isinstance(value, str):
                raise ManifestError(f"package.json field '{key}' must be a string")
            values[key] = value
        return AttributeSet(**values)

    def with_attributes(self, attributes: AttributeSet) -> "PackageManifest":
        data = dict(self._data)
        data.update(dict(attributes.items()))
        return PackageManifest(data)

    def dumps(self) -> str:
        return json.dumps(self._data, indent=2, ensure_ascii=False)

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.write_text(self.dumps(), encoding="utf-8")
        return path
