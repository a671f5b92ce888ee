# pixelpet/services/clock.py
"""
Timed callback scheduling.

The engine only talks to the small Ticker interface below. The running app
plugs in KivyTicker (services/kivy_ticker.py), backed by kivy.clock.Clock;
tests and headless tools use ManualTicker, which advances only when told to.

Callbacks follow the Kivy convention and receive the elapsed time in seconds.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

TimerCallback = Callable[[float], None]


class TimerHandle(ABC):
    """A scheduled callback that can be cancelled exactly once (later calls are no-ops)."""

    @abstractmethod
    def cancel(self) -> None: ...

    @property
    @abstractmethod
    def active(self) -> bool: ...


class Ticker(ABC):
    @abstractmethod
    def schedule_interval(self, callback: TimerCallback, interval_s: float) -> TimerHandle:
        """Call callback every interval_s seconds until cancelled."""

    @abstractmethod
    def schedule_once(self, callback: TimerCallback, delay_s: float) -> TimerHandle:
        """Call callback once after delay_s seconds unless cancelled."""


class _ManualTimer(TimerHandle):
    def __init__(self, callback: TimerCallback, due: float, interval: Optional[float], seq: int,
                 scheduled_at: float) -> None:
        self.callback = callback
        self.due = due
        self.interval = interval
        self.seq = seq
        self.last_fired = scheduled_at
        self._active = True

    def cancel(self) -> None:
        self._active = False

    @property
    def active(self) -> bool:
        return self._active


class ManualTicker(Ticker):
    """
    Deterministic scheduler driven by advance().

    Timers due at the same instant fire in the order they were scheduled.
    A timer scheduled or cancelled from inside a callback takes effect
    immediately, so a cancelled session timer never fires again.
    """

    def __init__(self, start: float = 0.0) -> None:
        self.now = float(start)
        self._timers: List[_ManualTimer] = []
        self._seq = 0

    def _add(self, callback: TimerCallback, delay: float, interval: Optional[float]) -> _ManualTimer:
        if delay < 0:
            raise ValueError("delay must be >= 0.")
        if interval is not None and interval <= 0:
            raise ValueError("interval must be > 0.")
        self._seq += 1
        timer = _ManualTimer(callback, self.now + delay, interval, self._seq, self.now)
        self._timers.append(timer)
        return timer

    def schedule_interval(self, callback: TimerCallback, interval_s: float) -> TimerHandle:
        return self._add(callback, interval_s, interval_s)

    def schedule_once(self, callback: TimerCallback, delay_s: float) -> TimerHandle:
        return self._add(callback, delay_s, None)

    @property
    def pending(self) -> int:
        """Number of timers that are still scheduled."""
        return sum(1 for t in self._timers if t.active)

    def advance(self, seconds: float) -> None:
        """Move time forward, firing every timer that falls due on the way."""
        if seconds < 0:
            raise ValueError("seconds must be >= 0.")
        target = self.now + seconds
        # Tolerance keeps float drift from skipping a tick that lands on target.
        eps = 1e-9
        while True:
            self._timers = [t for t in self._timers if t.active]
            due = [t for t in self._timers if t.due <= target + eps]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due, t.seq))
            self.now = max(self.now, timer.due)
            dt = timer.due - timer.last_fired
            if timer.interval is None:
                timer.cancel()
            else:
                timer.last_fired = timer.due
                timer.due += timer.interval
            timer.callback(dt)
        self.now = target
