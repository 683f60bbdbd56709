"""Aggregate the progress of running tasks into a single taskbar indicator."""

from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from typing import Callable, Protocol

__all__ = ["ProgressState", "TaskProgressManager"]

logger = logging.getLogger(__name__)

_STALE_SECONDS = 15


class ProgressState(Enum):
    """State of the progress indicator."""

    NO_PROGRESS = 0
    NORMAL = 2


class Taskbar(Protocol):
    def set_progress_state(self, state: ProgressState) -> None: ...

    def set_progress_value(self, completed: int, total: int) -> None: ...


class TaskProgressManager:
    """Tracks per-task percentages and reports their sum to a taskbar.

    Tasks that report nothing for 15 seconds are dropped. Without a taskbar
    progress updates are ignored.
    """

    def __init__(
        self,
        taskbar: Taskbar | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.taskbar = taskbar
        self._clock = clock
        self._percentages: dict[int, tuple[float, int]] = {}
        self._lock = threading.Lock()
        self._next_id = 1

    def get_id(self) -> int:
        """A new task identifier, starting at 1."""
        with self._lock:
            task_id = self._next_id
            self._next_id += 1
            return task_id

    def update_progress(self, task_id: int, value: int, maximum: int) -> None:
        """Record that ``task_id`` reached ``value`` of ``maximum``."""
        with self._lock:
            if self.taskbar is None:
                return
            if value == maximum:
                self._percentages.pop(task_id, None)
            else:
                if maximum == 0:
                    raise ValueError("maximum must not be zero")
                percent = int(value * 100 / maximum)
                self._percentages[task_id] = (self._clock(), percent)
            self._show_progress()

    def forget_me(self, task_id: int) -> None:
        """Stop tracking ``task_id``."""
        with self._lock:
            if self.taskbar is None:
                return
            self._percentages.pop(task_id, None)
            self._show_progress()

    def _show_progress(self) -> None:
        taskbar = self.taskbar
        if not self._percentages:
            taskbar.set_progress_state(ProgressState.NO_PROGRESS)
            return

        taskbar.set_progress_state(ProgressState.NORMAL)
        now = self._clock()
        total = 0
        count = 0
        for task_id, (stamp, percent) in list(self._percentages.items()):
            elapsed = int(now - stamp)
            if elapsed < _STALE_SECONDS:
                total += percent
                count += 1
            else:
                logger.debug("no progress in 15 seconds (%d)", elapsed)
                del self._percentages[task_id]
        taskbar.set_progress_value(total, count * 100)