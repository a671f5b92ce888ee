# pixelpet/services/minigame.py
"""
Catch-the-pet reflex round.

A round lasts a fixed number of seconds. A target hops to a random spot on a
fixed interval and every catch is worth a fixed reward; catches are unlimited
while time remains. When the countdown reaches zero the round stops its own
timers and hands the total to on_finish; crediting coins is the engine's job.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional

from pixelpet.config import ENGINE, EngineConfig
from pixelpet.services.clock import Ticker, TimerHandle
from pixelpet.services.economy import Economy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Target:
    """Target position as percentages of the play area."""
    x: float
    y: float


def random_target(rng: random.Random, config: EngineConfig = ENGINE) -> Target:
    return Target(
        x=rng.uniform(*config.target_x_range),
        y=rng.uniform(*config.target_y_range),
    )


class MiniGameSession:
    def __init__(
        self,
        ticker: Ticker,
        rng: random.Random,
        config: EngineConfig = ENGINE,
        *,
        on_move: Optional[Callable[[Target], None]] = None,
        on_tick: Optional[Callable[[int], None]] = None,
        on_finish: Optional[Callable[[int], None]] = None,
    ) -> None:
        self._ticker = ticker
        self._rng = rng
        self._config = config
        self._on_move = on_move
        self._on_tick = on_tick
        self._on_finish = on_finish
        self._timers: List[TimerHandle] = []
        self.active = False
        self.time_left = 0
        self.earned = 0
        self.catches = 0
        self.target: Optional[Target] = None

    def begin(self) -> None:
        """Reset the round and start its countdown and target timers."""
        if self.active:
            return
        self.active = True
        self.time_left = self._config.minigame_duration_s
        self.earned = 0
        self.catches = 0
        self.target = random_target(self._rng, self._config)
        self._timers = [
            self._ticker.schedule_interval(self._countdown, self._config.minigame_countdown_s),
            self._ticker.schedule_interval(self._move, self._config.target_move_interval_s),
        ]
        logger.debug("Mini-game round started (%ss)", self.time_left)

    def catch(self) -> bool:
        """Register one catch; refused once the round is over."""
        if not self.active or self.time_left <= 0:
            return False
        self.catches += 1
        self.earned += Economy.REWARD_CATCH
        return True

    def stop(self) -> None:
        """Cancel every timer owned by this round."""
        for timer in self._timers:
            timer.cancel()
        self._timers = []
        self.active = False

    def _move(self, _dt: float) -> None:
        if not self.active:
            return
        self.target = random_target(self._rng, self._config)
        if self._on_move:
            self._on_move(self.target)

    def _countdown(self, _dt: float) -> None:
        if not self.active:
            return
        self.time_left = max(0, self.time_left - 1)
        if self.time_left > 0:
            if self._on_tick:
                self._on_tick(self.time_left)
            return
        earned = self.earned
        self.stop()
        logger.debug("Mini-game round over: %d catches, %d coins", self.catches, earned)
        if self._on_finish:
            self._on_finish(earned)
