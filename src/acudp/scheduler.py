"""Run actions at a wall-clock time, checked at a fixed resolution."""

from __future__ import annotations

import math
import threading
import time
from datetime import datetime
from typing import Callable

from acudp._logging import get_logger
from acudp.config import DEFAULT_SCHEDULER_RESOLUTION
from acudp.exceptions import TimeInPastError


class Timer:
    """A pending action. Stopping it after its tick has fired has no effect."""

    def __init__(self, scheduler: Scheduler, target: float, action: Callable[[], object]) -> None:
        self._scheduler = scheduler
        self.target = target
        self.action = action

    @property
    def fires_at(self) -> datetime:
        return datetime.fromtimestamp(self.target).astimezone()

    def stop(self) -> None:
        self._scheduler._remove(self)


class Scheduler:
    """Fires registered actions on a background thread.

    The thread starts with the first registration and wakes every
    ``resolution`` seconds. A timer fires on the first tick whose time, rounded
    to the resolution, is at or after its own rounded target. Each action runs
    on a new daemon thread that is never joined, so actions have no ordering
    relative to one another and must do their own locking.

    Usage:
        with Scheduler() as scheduler:
            timer = scheduler.when(start_time, start_race)
            ...
            timer.stop()
    """

    def __init__(
        self,
        resolution: float = DEFAULT_SCHEDULER_RESOLUTION,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if resolution <= 0:
            raise ValueError(f"resolution must be positive, got {resolution}")

        self.resolution = resolution
        self._clock = clock
        self._timers: set[Timer] = set()
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    def __enter__(self) -> Scheduler:
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._timers)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def when(self, at: datetime, action: Callable[[], object]) -> Timer:
        """Run ``action`` at ``at``. Naive datetimes are local time.

        Raises:
            TimeInPastError: If ``at`` has already passed. Nothing is registered.
            RuntimeError: If the scheduler has been stopped.
        """
        target = at.timestamp()
        if target < self._clock():
            raise TimeInPastError(f"time specified is in the past: {at.isoformat()}")

        timer = Timer(self, target, action)

        with self._lock:
            if self._stopped.is_set():
                raise RuntimeError("scheduler is stopped")
            self._timers.add(timer)
            if self._thread is None:
                self._thread = threading.Thread(target=self._run, name="acudp-scheduler", daemon=True)
                self._thread.start()

        return timer

    def stop(self) -> None:
        """Stop the background thread. Pending timers never fire."""
        self._stopped.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.resolution * 2 + 1)

        with self._lock:
            self._timers.clear()

    def _remove(self, timer: Timer) -> None:
        with self._lock:
            self._timers.discard(timer)

    def _round(self, t: float) -> float:
        return math.floor(t / self.resolution + 0.5) * self.resolution

    def _run(self) -> None:
        while not self._stopped.wait(self.resolution):
            self._tick(self._clock())

    def _tick(self, now: float) -> None:
        tick = self._round(now)

        with self._lock:
            due = [t for t in self._timers if self._round(t.target) <= tick]
            for timer in due:
                self._timers.discard(timer)

        for timer in due:
            get_logger().debug("Starting scheduled event (is now %s)", timer.fires_at)
            threading.Thread(target=timer.action, name="acudp-timer", daemon=True).start()
