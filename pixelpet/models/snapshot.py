# pixelpet/models/snapshot.py
"""
Persisted subset of the game: pet identity plus economy.

Vitals and session status are not stored; a reloaded pet always
wakes at full stats and idle. Decoding is forgiving: every field falls back to
its default on its own, and only a missing or unusable name means there is no
pet to restore.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pixelpet.models.inventory import Artifact, EconomyState
from pixelpet.models.profile import PetProfile, Species, Theme
from pixelpet.services.economy import ACCESSORIES

logger = logging.getLogger(__name__)

SAVE_KEY = "pixel-pet-v2"


@dataclass
class Snapshot:
    profile: PetProfile
    economy: EconomyState = field(default_factory=EconomyState)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the flat JSON-friendly save shape."""
        data: Dict[str, Any] = self.profile.to_dict()
        data.update(self.economy.to_dict())
        return data

    @staticmethod
    def from_dict(d: Any) -> Optional["Snapshot"]:
        """
        Load a snapshot produced by to_dict(), or by an older save.

        Returns None when d cannot describe a pet at all.
        """
        if not isinstance(d, dict):
            logger.warning("Snapshot is not an object (%s); ignoring", type(d).__name__)
            return None
        try:
            profile = PetProfile(
                name=d.get("name"),  # type: ignore[arg-type]
                species=_species(d),
                theme=_theme(d.get("theme")),
            )
        except ValueError as exc:
            logger.warning("Snapshot has no usable pet name: %s", exc)
            return None
        economy = EconomyState(
            coins=_coins(d.get("coins")),
            accessories=_accessories(d.get("accessories")),
            artifacts=_artifacts(d.get("artifacts")),
        )
        return Snapshot(profile=profile, economy=economy)


def _species(d: Dict[str, Any]) -> Species:
    # Older saves used "type" (v1) or "animal" (adoption form payload).
    raw = d.get("species", d.get("type", d.get("animal")))
    try:
        return Species(raw)
    except ValueError:
        logger.info("Unknown species %r in snapshot; defaulting to cat", raw)
        return Species.CAT


def _theme(raw: Any) -> Theme:
    if isinstance(raw, dict):
        raw = raw.get("id")
    try:
        return Theme(raw)
    except ValueError:
        logger.info("Unknown theme %r in snapshot; defaulting to pink", raw)
        return Theme.PINK


def _coins(raw: Any) -> int:
    if isinstance(raw, float) and math.isfinite(raw) and raw.is_integer():
        raw = int(raw)
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        if raw is not None:
            logger.info("Invalid coin balance %r in snapshot; defaulting to 0", raw)
        return 0
    return raw


def _accessories(raw: Any) -> List[str]:
    if not isinstance(raw, list):
        return []
    owned: List[str] = []
    for item_id in raw:
        if isinstance(item_id, str) and item_id in ACCESSORIES and item_id not in owned:
            owned.append(item_id)
    return owned


def _artifacts(raw: Any) -> List[Artifact]:
    if not isinstance(raw, list):
        return []
    found = [Artifact.from_dict(x) for x in raw]
    return [a for a in found if a is not None]
