# pixelpet/models/session.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class SessionKind(Enum):
    """Mutually exclusive activity the pet is engaged in."""
    IDLE = auto()
    SLEEPING = auto()
    MINIGAME = auto()
    EXPEDITION = auto()


@dataclass(frozen=True)
class SessionStatus:
    """Read-only view of the current activity and its countdown, if any."""
    kind: SessionKind = SessionKind.IDLE
    biome_id: Optional[str] = None
    seconds_remaining: Optional[int] = None

    @property
    def is_idle(self) -> bool:
        return self.kind is SessionKind.IDLE


IDLE = SessionStatus()
SLEEPING = SessionStatus(SessionKind.SLEEPING)
