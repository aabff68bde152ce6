"""Run the project's external tooling as opaque subprocesses."""

from __future__ import annotations

import asyncio
import logging
import subprocess
from asyncio import CancelledError

from .config import ToolkitConfig
from .errors import ToolError

__all__ = ["ToolRunner"]


LOGGER = logging.getLogger(__name__)


class ToolRunner:
    """Invoke commands inside the project root with inherited standard streams."""

    def __init__(self, config: ToolkitConfig, *, terminate_timeout: float = 5.0) -> None:
        self.config = config
        self.terminate_timeout = terminate_timeout

    def script(self, name: str, *extra: str) -> list[str]:
        """Return the command running the package script ``name``."""

        command = [self.config.package_manager, "run", name]
        if extra:
            command.append("--")
            command.extend(extra)
        return command

    def run(self, *command: str) -> int:
        LOGGER.debug("running %s", " ".join(command))
        try:
            completed = subprocess.run(list(command), cwd=str(self.config.root), check=False)
        except FileNotFoundError as exc:
            raise ToolError(f"Command not found: {command[0]}") from exc
        LOGGER.debug("%s exited with %s", command[0], completed.returncode)
        return completed.returncode

    async def run_async(self, *command: str) -> int:
        """Run ``command`` and wait for it; cancelling the caller stops the child."""

        LOGGER.debug("starting %s", " ".join(command))
        try:
            process = await asyncio.create_subprocess_exec(*command, cwd=str(self.config.root))
        except FileNotFoundError as exc:
            raise ToolError(f"Command not found: {command[0]}") from exc

        try:
            return await process.wait()
        except CancelledError:
            await self._stop(process)
            raise

    async def _stop(self, process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        LOGGER.debug("terminating pid %s", process.pid)
        process.terminate()
        try:
            await asyncio.wait_for(process.wait(), timeout=self.terminate_timeout)
        except asyncio.TimeoutError:
            LOGGER.warning("pid %s did not exit, killing it", process.pid)
            process.kill()
            await process.wait()
