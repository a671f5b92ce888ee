# pixelpet/services/economy.py
"""
Economy configuration constants and catalogues for Pixel Pet.

Provides the fixed amounts, costs and rewards that define the game's balance,
plus the closed catalogues of purchasable accessories and expedition biomes.
This module is pure Python and dependency-free, intended to be imported
wherever economic values are needed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Final, Iterable, Optional


class Economy:
    """Namespace container for game economy constants. Not meant to be instantiated."""

    # Vitals
    STAT_MIN: Final[int] = 0
    STAT_MAX: Final[int] = 100
    DECAY_AMOUNT: Final[int] = 2             # Lost by hunger and morale per decay tick
    FEED_AMOUNT: Final[int] = 15             # Hunger restored by one feed
    PLAY_AMOUNT: Final[int] = 15             # Morale restored by one play

    # Mood thresholds on the hunger/morale average
    MOOD_HAPPY_AT: Final[float] = 60.0
    MOOD_SAD_BELOW: Final[float] = 30.0

    # Rewards (in coins)
    REWARD_CATCH: Final[int] = 5             # Per target caught in the mini-game

    # Costs
    EXPEDITION_MORALE_COST: Final[int] = 20  # Morale spent to launch an expedition

    def __new__(cls, *args, **kwargs):
        raise TypeError(f"{cls.__name__} is not instantiable")


@dataclass(frozen=True)
class Accessory:
    """A one-time purchasable cosmetic upgrade; higher tier wins on display."""
    id: str
    label: str
    cost: int
    tier: int


@dataclass(frozen=True)
class Biome:
    """An expedition destination with a fixed success chance and reward."""
    id: str
    label: str
    success_rate: float
    reward: str
    flavor: tuple = ()


ACCESSORIES: Dict[str, Accessory] = {
    a.id: a
    for a in (
        Accessory("partyHat", "Party Hat", 50, 1),
        Accessory("coolShades", "Cool Shades", 120, 2),
        Accessory("royalCrown", "Royal Crown", 250, 3),
    )
}

BIOMES: Dict[str, Biome] = {
    b.id: b
    for b in (
        Biome(
            "crystalCaves", "Crystal Caves", 0.80, "Glimmer Shard",
            flavor=(
                "The walls hum with a soft blue light.",
                "Something glitters deeper in the tunnel.",
                "Footsteps echo off the crystal spires.",
            ),
        ),
        Biome(
            "sunkenRuins", "Sunken Ruins", 0.50, "Tidebound Relic",
            flavor=(
                "Bubbles rise from a collapsed archway.",
                "A school of fish darts past the columns.",
                "The current tugs toward a hidden chamber.",
            ),
        ),
        Biome(
            "emberPeaks", "Ember Peaks", 0.20, "Phoenix Feather",
            flavor=(
                "Heat shimmers over the cracked rocks.",
                "A plume of ash drifts across the ridge.",
                "Something bright circles the summit.",
            ),
        ),
    )
}


def clamp(n: int, lo: int, hi: int) -> int:
    """
    Clamp an integer value between inclusive lower and upper bounds.

    Examples:
        >>> clamp(120, 0, 100)
        100
        >>> clamp(-5, 0, 100)
        0
    """
    return max(lo, min(n, hi))


def display_accessory(owned: Iterable[str]) -> Optional[Accessory]:
    """Return the highest-tier owned accessory, or None if nothing known is owned."""
    best: Optional[Accessory] = None
    for item_id in owned:
        acc = ACCESSORIES.get(item_id)
        if acc is not None and (best is None or acc.tier > best.tier):
            best = acc
    return best
