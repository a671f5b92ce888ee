# pixelpet/services/events.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict


class EventKind(Enum):
    """Events emitted by PetEngine for audio cues and cosmetic animation."""

    ADOPTED = auto()
    FED = auto()
    PLAYED = auto()
    SLEEP_STARTED = auto()
    WOKE = auto()
    MINIGAME_STARTED = auto()
    TARGET_MOVED = auto()
    CAUGHT = auto()
    MINIGAME_FINISHED = auto()
    EXPEDITION_LAUNCHED = auto()
    EXPEDITION_SUCCEEDED = auto()
    EXPEDITION_FAILED = auto()
    PURCHASED = auto()
    RESET = auto()


@dataclass(frozen=True)
class EngineEvent:
    """
    A timestamped notification. Renderers decay transient effects themselves
    (e.g. a "fed" pulse) starting from timestamp.
    """

    kind: EventKind
    timestamp: float
    payload: Dict[str, Any] = field(default_factory=dict)
