"""Locate the files that carry a project's customizable attributes."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from .config import ToolkitConfig

__all__ = ["FileIndex", "build_index", "build_index_sync", "iter_candidate_files"]


LOGGER = logging.getLogger(__name__)


class FileIndex:
    """Sorted, immutable set of absolute file paths."""

    def __init__(self, paths: Iterable[Path] = ()) -> None:
        self._paths = tuple(sorted(set(paths)))

    def __iter__(self) -> Iterator[Path]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, item: object) -> bool:
        return item in self._paths

    def __repr__(self) -> str:
        return f"FileIndex({len(self._paths)} files)"

    @property
    def paths(self) -> tuple[Path, ...]:
        return self._paths

    def without(self, *names: str) -> "FileIndex":
        """Return a copy excluding files whose basename is in ``names``."""

        return FileIndex(path for path in self._paths if path.name not in names)


def _is_ignored(relative: str, ignored_paths: Sequence[str]) -> bool:
    return any(relative == prefix or relative.startswith(prefix + "/") for prefix in ignored_paths)


def iter_candidate_files(config: ToolkitConfig) -> Iterator[Path]:
    """Yield every file under the project root that is eligible for indexing."""

    root = config.root
    ignored = ["/" + path.strip("/") for path in config.ignored_paths]
    for entry in sorted(root.iterdir()):
        if entry.name in config.ignored_roots:
            continue
        if entry.is_file():
            yield entry
            continue
        if not entry.is_dir():
            continue
        for candidate in sorted(entry.rglob("*")):
            if not candidate.is_file():
                continue
            relative = "/" + candidate.relative_to(root).as_posix()
            if _is_ignored(relative, ignored):
                continue
            yield candidate


def _contains_any(path: Path, needles: Sequence[str]) -> bool:
    try:
        contents = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        LOGGER.debug("skipping non UTF-8 file %s", path)
        return False
    return any(needle in contents for needle in needles)


async def build_index(config: ToolkitConfig, needles: Iterable[str]) -> FileIndex:
    """Return every eligible file containing at least one of ``needles``.

    Files are read concurrently; empty needles are ignored so that a blank
    attribute does not pull the whole tree into the index.
    """

    targets = [needle for needle in needles if needle]
    if not targets:
        return FileIndex()

    candidates = list(iter_candidate_files(config))
    LOGGER.debug("scanning %s files under %s", len(candidates), config.root)
    matches = await asyncio.gather(
        *(asyncio.to_thread(_contains_any, path, targets) for path in candidates)
    )
    index = FileIndex(path for path, matched in zip(candidates, matches) if matched)
    LOGGER.info("indexed %s files containing customizable content", len(index))
    return index


def build_index_sync(config: ToolkitConfig, needles: Iterable[str]) -> FileIndex:
    return asyncio.run(build_index(config, needles))
