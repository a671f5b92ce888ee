# pixelpet/services/expedition.py
from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional

from pixelpet.config import ENGINE, EngineConfig
from pixelpet.services.clock import Ticker, TimerHandle
from pixelpet.services.economy import Biome

logger = logging.getLogger(__name__)


def roll_expedition(biome: Biome, rng: random.Random) -> bool:
    """One Bernoulli draw with the biome's success rate."""
    return rng.random() < biome.success_rate


class ExpeditionSession:
    """
    A single timed trip to one biome, resolved by one draw when the
    countdown reaches zero. Flavor lines at the configured marks are cosmetic.
    """

    def __init__(
        self,
        biome: Biome,
        ticker: Ticker,
        rng: random.Random,
        config: EngineConfig = ENGINE,
        *,
        on_flavor: Optional[Callable[[str], None]] = None,
        on_tick: Optional[Callable[[int], None]] = None,
        on_resolve: Optional[Callable[[bool], None]] = None,
    ) -> None:
        self.biome = biome
        self._ticker = ticker
        self._rng = rng
        self._config = config
        self._on_flavor = on_flavor
        self._on_tick = on_tick
        self._on_resolve = on_resolve
        self._timers: List[TimerHandle] = []
        self._flavor_index = 0
        self.active = False
        self.seconds_remaining = 0

    def begin(self) -> None:
        if self.active:
            return
        self.active = True
        self.seconds_remaining = self._config.expedition_duration_s
        self._flavor_index = 0
        self._timers = [
            self._ticker.schedule_interval(self._countdown, self._config.expedition_countdown_s),
        ]
        logger.debug("Expedition to %s started (%ss)", self.biome.id, self.seconds_remaining)

    def stop(self) -> None:
        for timer in self._timers:
            timer.cancel()
        self._timers = []
        self.active = False

    def _next_flavor(self) -> str:
        lines = self.biome.flavor or (f"Exploring {self.biome.label}...",)
        line = lines[self._flavor_index % len(lines)]
        self._flavor_index += 1
        return line

    def _countdown(self, _dt: float) -> None:
        if not self.active:
            return
        self.seconds_remaining = max(0, self.seconds_remaining - 1)
        if self.seconds_remaining > 0:
            if self.seconds_remaining in self._config.expedition_flavor_marks and self._on_flavor:
                self._on_flavor(self._next_flavor())
            if self._on_tick:
                self._on_tick(self.seconds_remaining)
            return
        self.stop()
        success = roll_expedition(self.biome, self._rng)
        logger.debug("Expedition to %s resolved: %s", self.biome.id, "success" if success else "failure")
        if self._on_resolve:
            self._on_resolve(success)
