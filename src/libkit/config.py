"""Configuration shared by the customization workflow, packaging and the CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping

__all__ = ["ToolkitConfig"]


DEFAULT_IGNORED_ROOTS = (".git", "dist", "node_modules", "bin", "types-temp")
DEFAULT_IGNORED_PATHS = ("docs/.vitepress/dist", "docs/.vitepress/cache", "docs/api")
DEFAULT_WATCH_TARGETS = ("src", "package.json", "vite.config.mts", "tsconfig.json")


def _float_override(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number of seconds, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{key} must not be negative")
    return value


@dataclass(slots=True, frozen=True)
class ToolkitConfig:
    """Paths and tunables describing a library project.

    Attributes
    ----------
    root:
        Absolute path of the project, the directory holding ``package.json``.
    ignored_roots:
        Top-level directory names never scanned for customizable content.
    ignored_paths:
        Root-relative POSIX path fragments excluded from the file index, used
        for generated documentation nested inside otherwise scanned folders.
    package_manager:
        Executable used to run the project's scripts.
    debounce:
        Seconds of quiet required after a change before a rebuild starts.
    poll_interval:
        Seconds between two filesystem snapshots while watching.
    watch_targets:
        Root-relative files and directories observed by the dev loop.
    """

    root: Path
    ignored_roots: tuple[str, ...] = DEFAULT_IGNORED_ROOTS
    ignored_paths: tuple[str, ...] = DEFAULT_IGNORED_PATHS
    package_manager: str = "npm"
    debounce: float = 1.0
    poll_interval: float = 0.5
    watch_targets: tuple[str, ...] = field(default=DEFAULT_WATCH_TARGETS)

    @classmethod
    def from_root(
        cls,
        root: str | Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> "ToolkitConfig":
        """Build a configuration for ``root`` honouring ``LIBKIT_*`` overrides.

        Parameters
        ----------
        root:
            Project directory. Defaults to the current working directory.
        env:
            Environment used for overrides, ``os.environ`` when omitted. The
            recognised keys are ``LIBKIT_PACKAGE_MANAGER``, ``LIBKIT_DEBOUNCE``
            and ``LIBKIT_POLL_INTERVAL``.
        """

        environment: Mapping[str, str] = os.environ if env is None else env
        base = Path(root) if root is not None else Path.cwd()
        config = cls(root=base.expanduser().resolve())

        package_manager = environment.get("LIBKIT_PACKAGE_MANAGER", "").strip()
        return replace(
            config,
            package_manager=package_manager or config.package_manager,
            debounce=_float_override(environment, "LIBKIT_DEBOUNCE", config.debounce),
            poll_interval=_float_override(environment, "LIBKIT_POLL_INTERVAL", config.poll_interval),
        )

    @property
    def manifest_path(self) -> Path:
        return self.root / "package.json"

    @property
    def src_dir(self) -> Path:
        return self.root / "src"

    @property
    def dist_dir(self) -> Path:
        return self.root / "dist"

    @property
    def docs_dir(self) -> Path:
        return self.root / "docs"

    def watch_paths(self) -> list[Path]:
        """Return the absolute paths observed by the dev loop."""

        return [self.root / target for target in self.watch_targets]
