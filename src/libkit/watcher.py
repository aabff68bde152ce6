"""File watching and debounced rebuilds for the development loop."""

from __future__ import annotations

import asyncio
import logging
import re
from asyncio import CancelledError
from enum import Enum
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Sequence

from .config import ToolkitConfig

__all__ = [
    "DebounceState",
    "Debouncer",
    "PollingWatcher",
    "default_matcher",
    "watch",
]


LOGGER = logging.getLogger(__name__)

BuildAction = Callable[[list[Path]], Awaitable[Any]]
Matcher = Callable[[str], bool]

_ROOT_FILES = frozenset({"vite.config.mts", "tsconfig.json", "package.json"})
_WATCHED_SUFFIX = re.compile(r"\.(ts|json|scss|vue|md|yml|stub)$")


def default_matcher(relative: str) -> bool:
    """Return True for root-relative paths that should trigger a rebuild."""

    return relative in _ROOT_FILES or bool(_WATCHED_SUFFIX.search(relative))


class PollingWatcher:
    """Detect changed files by comparing modification-time snapshots."""

    def __init__(
        self,
        paths: Sequence[Path],
        *,
        root: Path,
        matcher: Matcher = default_matcher,
    ) -> None:
        self._paths = [Path(path) for path in paths]
        self._root = Path(root)
        self._matcher = matcher
        self._snapshot = self._take_snapshot()

    def _iter_files(self) -> Iterable[Path]:
        for path in self._paths:
            if path.is_dir():
                yield from (child for child in path.rglob("*") if child.is_file())
            elif path.is_file():
                yield path

    def _take_snapshot(self) -> dict[Path, int]:
        snapshot: dict[Path, int] = {}
        for path in self._iter_files():
            try:
                relative = path.relative_to(self._root).as_posix()
            except ValueError:
                relative = path.name
            if not self._matcher(relative):
                continue
            try:
                snapshot[path] = path.stat().st_mtime_ns
            except FileNotFoundError:
                continue
        return snapshot

    def poll(self) -> list[Path]:
        """Return files added, modified or removed since the previous poll."""

        current = self._take_snapshot()
        previous = self._snapshot
        self._snapshot = current
        changed = {path for path, mtime in current.items() if previous.get(path) != mtime}
        changed.update(path for path in previous if path not in current)
        return sorted(changed)


class DebounceState(str, Enum):
    """Lifecycle of a :class:`Debouncer`."""

    IDLE = "idle"
    PENDING = "pending"
    BUILDING = "building"


class Debouncer:
    """Coalesce bursts of change notifications into single rebuilds.

    ``IDLE -> PENDING`` when a change arrives and a timer is armed; further
    changes re-arm the timer. ``PENDING -> BUILDING`` when the timer fires and
    ``action`` starts with the accumulated paths. ``BUILDING -> IDLE`` once it
    finishes. A change arriving while ``BUILDING`` cancels the running build
    and returns to ``PENDING`` with the cancelled build's paths carried over.
    """

    def __init__(self, action: BuildAction, delay: float) -> None:
        self._action = action
        self._delay = delay
        self._state = DebounceState.IDLE
        self._pending: dict[Path, None] = {}
        self._running: list[Path] = []
        self._timer: asyncio.TimerHandle | None = None
        self._build: asyncio.Task[None] | None = None
        self._idle = asyncio.Event()
        self._idle.set()
        self.completed = 0

    @property
    def state(self) -> DebounceState:
        return self._state

    @property
    def pending(self) -> list[Path]:
        return list(self._pending)

    def notify(self, paths: Iterable[Path]) -> None:
        """Record changed ``paths`` and (re)arm the timer."""

        loop = asyncio.get_running_loop()
        for path in paths:
            self._pending[path] = None

        if self._timer is not None:
            self._timer.cancel()
        if self._state is DebounceState.BUILDING and self._build is not None:
            LOGGER.debug("new changes detected, stopping current update")
            self._build.cancel()
            self._build = None
            for path in self._running:
                self._pending.setdefault(path, None)
            self._running = []

        self._state = DebounceState.PENDING
        self._idle.clear()
        self._timer = loop.call_later(self._delay, self._fire)

    def _fire(self) -> None:
        self._timer = None
        paths = list(self._pending)
        self._pending.clear()
        self._running = paths
        self._state = DebounceState.BUILDING
        self._build = asyncio.ensure_future(self._run(paths))

    async def _run(self, paths: list[Path]) -> None:
        try:
            LOGGER.debug("compiling update for %s changed files", len(paths))
            await self._action(paths)
            self.completed += 1
            LOGGER.debug("update compiled")
        except CancelledError:
            LOGGER.debug("update cancelled")
            raise
        except Exception:
            LOGGER.exception("rebuild failed")
        finally:
            if self._build is asyncio.current_task():
                self._build = None
                self._running = []
                self._state = DebounceState.IDLE
                self._idle.set()

    async def wait_idle(self) -> None:
        """Block until no rebuild is pending or running."""

        await self._idle.wait()

    async def aclose(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        build = self._build
        self._build = None
        if build is not None:
            build.cancel()
            try:
                await build
            except CancelledError:
                pass
        self._pending.clear()
        self._running = []
        self._state = DebounceState.IDLE
        self._idle.set()


async def watch(
    config: ToolkitConfig,
    action: BuildAction,
    *,
    matcher: Matcher = default_matcher,
    stop: asyncio.Event | None = None,
) -> None:
    """Poll the project and rebuild with ``action`` until cancelled or ``stop`` is set."""

    watcher = PollingWatcher(config.watch_paths(), root=config.root, matcher=matcher)
    debouncer = Debouncer(action, config.debounce)
    LOGGER.info("watching %s for changes", ", ".join(config.watch_targets))
    try:
        while stop is None or not stop.is_set():
            changed = await asyncio.to_thread(watcher.poll)
            if changed:
                LOGGER.debug("changes detected: %s", ", ".join(str(path) for path in changed))
                debouncer.notify(changed)
            await asyncio.sleep(config.poll_interval)
    finally:
        await debouncer.aclose()
