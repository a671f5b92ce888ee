# pixelpet/models/vitals.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pixelpet.services.economy import Economy, clamp


class Mood(Enum):
    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"


def mood_for(hunger: int, morale: int) -> Mood:
    """Classify the average of hunger and morale into a Mood."""
    avg = (hunger + morale) / 2
    if avg >= Economy.MOOD_HAPPY_AT:
        return Mood.HAPPY
    if avg < Economy.MOOD_SAD_BELOW:
        return Mood.SAD
    return Mood.NEUTRAL


@dataclass
class Vitals:
    """
    The pet's two decaying needs.

    Fields:
        hunger: Fullness meter, 0-100 (higher = fuller).
        morale: Cheerfulness meter, 0-100.
    """
    hunger: int = Economy.STAT_MAX
    morale: int = Economy.STAT_MAX

    def __post_init__(self) -> None:
        if not isinstance(self.hunger, int) or not isinstance(self.morale, int):
            raise ValueError("hunger and morale must be integers.")
        self.hunger = self._clamp(self.hunger)
        self.morale = self._clamp(self.morale)

    @staticmethod
    def _clamp(value: int) -> int:
        return clamp(value, Economy.STAT_MIN, Economy.STAT_MAX)

    @property
    def mood(self) -> Mood:
        return mood_for(self.hunger, self.morale)

    def decay(self, amount: int = Economy.DECAY_AMOUNT) -> None:
        """Reduce both needs by amount; never below zero."""
        self.hunger = self._clamp(self.hunger - amount)
        self.morale = self._clamp(self.morale - amount)

    def feed(self, amount: int = Economy.FEED_AMOUNT) -> None:
        """
        Increase hunger (fullness) by amount; clamp to [0, 100].

        Args:
            amount: Non-negative integer to add.
        """
        if not isinstance(amount, int) or amount < 0:
            raise ValueError("amount must be a non-negative integer.")
        self.hunger = self._clamp(self.hunger + amount)

    def cheer(self, amount: int = Economy.PLAY_AMOUNT) -> None:
        """Increase morale by amount; clamp to [0, 100]."""
        if not isinstance(amount, int) or amount < 0:
            raise ValueError("amount must be a non-negative integer.")
        self.morale = self._clamp(self.morale + amount)

    def spend_morale(self, amount: int) -> None:
        """Deduct morale for an activity; callers check affordability first."""
        if not isinstance(amount, int) or amount < 0:
            raise ValueError("amount must be a non-negative integer.")
        self.morale = self._clamp(self.morale - amount)

    def reset(self) -> None:
        self.hunger = Economy.STAT_MAX
        self.morale = Economy.STAT_MAX
