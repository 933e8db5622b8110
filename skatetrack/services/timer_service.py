"""Repeating timers for the SkateTrack dashboard."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

from ..utils import now_dt

logger = logging.getLogger(__name__)


@dataclass
class RepeatingTask:
    """A callback that should run once every ``interval_seconds``."""

    name: str
    interval_seconds: float
    callback: Callable[[datetime], object]
    last_run: datetime

    def is_due(self, now: datetime) -> bool:
        return (now - self.last_run).total_seconds() >= self.interval_seconds


class TimerService:
    """
    Service for the dashboard's repeating timers.

    Timers do not run on their own thread: the page calls :meth:`tick` and
    every task whose interval has passed runs once, in registration order.
    Tearing down a view cancels its timers.
    """

    def __init__(self):
        self._tasks: Dict[str, RepeatingTask] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register(
        self,
        name: str,
        interval_seconds: float,
        callback: Callable[[datetime], object],
        now: Optional[datetime] = None,
    ) -> None:
        """Register (or replace) a timer; its first run is one interval from ``now``."""
        if interval_seconds <= 0:
            raise ValueError("Timer interval must be positive")
        self._tasks[name] = RepeatingTask(
            name=name,
            interval_seconds=interval_seconds,
            callback=callback,
            last_run=now or now_dt(),
        )

    def cancel(self, name: str) -> bool:
        return self._tasks.pop(name, None) is not None

    def clear(self) -> None:
        self._tasks.clear()

    def task_names(self) -> List[str]:
        return list(self._tasks)

    # ------------------------------------------------------------------
    # Ticking
    # ------------------------------------------------------------------
    def tick(self, now: Optional[datetime] = None) -> List[str]:
        """
        Run every due timer.

        A timer that is several intervals late still runs only once.

        Returns:
            Names of the timers that ran
        """
        now = now or now_dt()
        ran: List[str] = []
        for task in list(self._tasks.values()):
            if not task.is_due(now):
                continue
            task.last_run = now
            task.callback(now)
            ran.append(task.name)

        if ran:
            logger.debug("Timers ran at %s: %s", now.isoformat(timespec="seconds"), ", ".join(ran))
        return ran
