"""Polling watcher that regenerates commands when instructions change."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

Snapshot = dict[Path, float]


class InstructionWatcher:
    """Poll an instruction tree and trigger full regeneration on change.

    Bursts of edits are coalesced: after the first detected change the
    watcher waits ``debounce`` seconds, absorbs anything else that changed
    meanwhile, and then calls ``on_change`` once.
    """

    def __init__(
        self,
        directory: Path,
        on_change: Callable[[list[Path]], None],
        *,
        interval: float = 0.5,
        debounce: float = 0.1,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.directory = directory
        self.on_change = on_change
        self.interval = interval
        self.debounce = debounce
        self._sleep = sleep
        self._snapshot: Snapshot = self.snapshot()

    def snapshot(self) -> Snapshot:
        if not self.directory.is_dir():
            return {}
        state: Snapshot = {}
        for path in self.directory.rglob("*.md"):
            try:
                state[path] = path.stat().st_mtime
            except OSError:
                continue
        return state

    def poll(self) -> list[Path]:
        """Return paths added, removed, or modified since the last poll."""
        current = self.snapshot()
        previous = self._snapshot
        changed = [p for p, mtime in current.items() if previous.get(p) != mtime]
        changed.extend(p for p in previous if p not in current)
        self._snapshot = current
        return sorted(changed)

    def check_once(self) -> bool:
        """Run a single poll/debounce cycle. Returns True if ``on_change`` fired."""
        changed = self.poll()
        if not changed:
            return False
        for path in changed:
            logger.info("Detected change in: %s", path.name)
        self._sleep(self.debounce)
        for path in self.poll():
            if path not in changed:
                changed.append(path)
        self.on_change(changed)
        return True

    def run(self, max_cycles: int | None = None) -> None:
        """Poll until interrupted (or for ``max_cycles`` iterations)."""
        logger.info("Watching for changes in: %s", self.directory)
        cycles = 0
        try:
            while max_cycles is None or cycles < max_cycles:
                self.check_once()
                cycles += 1
                self._sleep(self.interval)
        except KeyboardInterrupt:
            logger.info("Stopped watching %s", self.directory)


__all__ = ["InstructionWatcher"]
