"""Rename a library: rewrite its metadata and every file mentioning it."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .config import ToolkitConfig
from .errors import LibkitError
from .indexer import FileIndex, build_index
from .manifest import AttributeSet, PackageManifest
from .substitution import substitute

__all__ = ["CustomizationReport", "CustomizationSession", "rewrite_text"]


LOGGER = logging.getLogger(__name__)


def rewrite_text(source: str, original: AttributeSet, updated: AttributeSet) -> str:
    """Swap each original attribute value in ``source`` for its new value.

    Fields are processed in the order name, description, author, copyright.
    A value that is a substring of a later field's original value can
    therefore alter that later match.
    """

    text = source
    for _, old, new in original.changes(updated):
        if not old or old == new:
            continue
        text = substitute(text, old, new)
    return text


@dataclass(slots=True)
class CustomizationReport:
    """Outcome of :meth:`CustomizationSession.apply`."""

    manifest_path: Path
    updated: list[Path] = field(default_factory=list)
    unchanged: list[Path] = field(default_factory=list)


@dataclass(slots=True)
class CustomizationSession:
    """State carried through a single customization run."""

    config: ToolkitConfig
    manifest: PackageManifest
    original: AttributeSet
    index: FileIndex
    approved: AttributeSet | None = None

    @classmethod
    async def start(cls, config: ToolkitConfig) -> "CustomizationSession":
        """Load the manifest and index the files that mention the library."""

        manifest = PackageManifest.load(config.manifest_path)
        original = manifest.attributes()
        index = await build_index(config, (original.name, original.description))
        return cls(config=config, manifest=manifest, original=original, index=index)

    @classmethod
    def start_sync(cls, config: ToolkitConfig) -> "CustomizationSession":
        return asyncio.run(cls.start(config))

    @property
    def targets(self) -> FileIndex:
        """Indexed files rewritten by :meth:`apply`; the manifest is saved separately."""

        return self.index.without(self.config.manifest_path.name)

    def approve(self, attributes: AttributeSet) -> None:
        self.approved = attributes

    async def apply(self) -> CustomizationReport:
        if self.approved is None:
            raise LibkitError("customization has not been approved")
        approved = self.approved

        manifest_path = self.manifest.with_attributes(approved).save(self.config.manifest_path)
        LOGGER.info("updated %s", manifest_path)

        targets = list(self.targets)
        changed = await asyncio.gather(
            *(asyncio.to_thread(self._rewrite_file, path, approved) for path in targets)
        )

        report = CustomizationReport(manifest_path=manifest_path)
        for path, was_changed in zip(targets, changed):
            (report.updated if was_changed else report.unchanged).append(path)
        return report

    def apply_sync(self) -> CustomizationReport:
        return asyncio.run(self.apply())

    def _rewrite_file(self, path: Path, approved: AttributeSet) -> bool:
        original = path.read_text(encoding="utf-8")
        updated = rewrite_text(original, self.original, approved)
        if updated == original:
            LOGGER.debug("no changes for %s", path)
            return False
        path.write_text(updated, encoding="utf-8")
        LOGGER.info("updated %s", path)
        return True
