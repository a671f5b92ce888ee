# pixelpet/ui/effects.py
"""Short-lived cosmetic feedback: toasts and timed highlight flags."""

from __future__ import annotations

from typing import Callable, Optional

from pixelpet.services.clock import Ticker, TimerHandle

TOAST_S = 2.5


def show_toast(message: str, duration: float = TOAST_S, toaster: Optional[Callable] = None) -> None:
    """Safe toast helper; the Android toast takes no duration argument."""
    if toaster is None:
        from kivymd.toast import toast as toaster
    try:
        toaster(message, duration=duration)
    except TypeError:
        toaster(message)


class Pulse:
    """A flag that switches itself off duration seconds after the last trigger."""

    def __init__(self, ticker: Ticker, duration: float,
                 on_change: Optional[Callable[[], None]] = None) -> None:
        self._ticker = ticker
        self._duration = duration
        self._on_change = on_change
        self._timer: Optional[TimerHandle] = None
        self.on = False

    def trigger(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self.on = True
        self._timer = self._ticker.schedule_once(self._expire, self._duration)
        self._changed()

    def _expire(self, _dt: float) -> None:
        self._timer = None
        self.on = False
        self._changed()

    def _changed(self) -> None:
        if self._on_change:
            self._on_change()
