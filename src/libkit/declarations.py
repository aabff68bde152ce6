"""Generate TypeScript declaration files and move them into the build output."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .config import ToolkitConfig
from .errors import ToolError
from .runner import ToolRunner

__all__ = ["TYPES_TEMP_DIR", "build_types", "declaration_destination"]


LOGGER = logging.getLogger(__name__)

TYPES_TEMP_DIR = "types-temp"
TYPES_COMMAND = ("npx", "vue-tsc", "--project", "tsconfig.build.json")


def declaration_destination(relative: Path, dist_dir: Path) -> Path:
    """Map a generated file to ``dist``, dropping the ``.vue`` in ``.vue.d.ts``."""

    destination = dist_dir / relative
    if destination.name.endswith(".vue.d.ts"):
        destination = destination.with_name(destination.name[: -len(".vue.d.ts")] + ".d.ts")
    return destination


def build_types(config: ToolkitConfig, runner: ToolRunner | None = None) -> list[Path]:
    """Run ``vue-tsc`` into ``types-temp`` and copy its output into ``dist``.

    ``tsconfig.build.json`` is expected to emit into ``types-temp``. The
    temporary directory is removed whether or not generation succeeds.
    """

    runner = runner or ToolRunner(config)
    types_dir = config.root / TYPES_TEMP_DIR
    types_dir.mkdir(parents=True, exist_ok=True)
    try:
        LOGGER.info("generating TypeScript type definition files")
        exit_code = runner.run(*TYPES_COMMAND)
        if exit_code != 0:
            raise ToolError(f"vue-tsc exited with code {exit_code}")

        copied: list[Path] = []
        for source in sorted(types_dir.rglob("*")):
            if not source.is_file():
                continue
            destination = declaration_destination(source.relative_to(types_dir), config.dist_dir)
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, destination)
            copied.append(destination)
        LOGGER.info("copied %s type definition files", len(copied))
        return copied
    finally:
        LOGGER.debug("removing %s", types_dir)
        shutil.rmtree(types_dir)
