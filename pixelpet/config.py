# pixelpet/config.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class EngineConfig:
    """Timing configuration for the simulation engine.

    All durations are in seconds. Cosmetic durations (pulses, toasts) are not
    engine concerns and live with the UI.
    """

    # Vitals decay
    decay_interval_s: float = 3.0

    # Mini-game
    minigame_duration_s: int = 10
    minigame_countdown_s: float = 1.0
    target_move_interval_s: float = 1.4
    target_x_range: Tuple[float, float] = (8.0, 73.0)   # percent of play area
    target_y_range: Tuple[float, float] = (12.0, 67.0)

    # Expedition
    expedition_duration_s: int = 10
    expedition_countdown_s: float = 1.0
    expedition_flavor_marks: Tuple[int, ...] = (9, 7, 5, 3, 1)

    # Mission log
    mission_log_cap: int = 50


ENGINE = EngineConfig()
