# pixelpet/services/kivy_ticker.py
from __future__ import annotations

from kivy.clock import Clock  # Kivy scheduling lives here only

from pixelpet.services.clock import Ticker, TimerCallback, TimerHandle


class _KivyHandle(TimerHandle):
    def __init__(self, event) -> None:
        self._event = event
        self._cancelled = False

    def cancel(self) -> None:
        if not self._cancelled:
            self._cancelled = True
            self._event.cancel()

    @property
    def active(self) -> bool:
        return not self._cancelled and bool(self._event.is_triggered)


class KivyTicker(Ticker):
    """Ticker backed by the Kivy main-loop clock (wall-clock, best effort)."""

    def __init__(self, clock=None) -> None:
        self._clock = clock or Clock

    def schedule_interval(self, callback: TimerCallback, interval_s: float) -> TimerHandle:
        return _KivyHandle(self._clock.schedule_interval(callback, interval_s))

    def schedule_once(self, callback: TimerCallback, delay_s: float) -> TimerHandle:
        return _KivyHandle(self._clock.schedule_once(callback, delay_s))
