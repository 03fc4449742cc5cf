"""Single-flight guard for export runs."""

from __future__ import annotations

import threading
from enum import Enum


class RunState(str, Enum):
    """State of the export pipeline."""

    IDLE = "idle"
    RUNNING = "running"


class RunGuard:
    """Mutex-protected flag allowing at most one export run at a time.

    A run that cannot acquire the guard is skipped, not queued.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._running = False

    @property
    def state(self) -> RunState:
        with self._lock:
            return RunState.RUNNING if self._running else RunState.IDLE

    @property
    def is_running(self) -> bool:
        return self.state is RunState.RUNNING

    def try_acquire(self) -> bool:
        """Switch from idle to running.

        Returns:
            True if the caller now owns the run, False if one is already active.
        """
        with self._lock:
            if self._running:
                return False
            self._running = True
            return True

    def release(self) -> None:
        """Switch back to idle."""
        with self._lock:
            self._running = False
