"""Copy ``.stub`` templates shipped with the library into the build output."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .config import ToolkitConfig

__all__ = ["copy_stubs"]


LOGGER = logging.getLogger(__name__)


def copy_stubs(config: ToolkitConfig) -> list[Path]:
    """Mirror every ``*.stub`` file from ``src`` into ``dist``."""

    stubs = sorted(path for path in config.src_dir.rglob("*.stub") if path.is_file())
    directories = {path.parent for path in stubs}
    LOGGER.info("found %s .stub files in %s directories", len(stubs), len(directories))

    copied: list[Path] = []
    for stub in stubs:
        destination = config.dist_dir / stub.relative_to(config.src_dir)
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(stub, destination)
        copied.append(destination)
    return copied
