# pixelpet/models/inventory.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Artifact:
    """A collectible brought back from a successful expedition."""
    biome: str
    name: str
    timestamp: int  # milliseconds since the Unix epoch

    def to_dict(self) -> Dict[str, object]:
        return {"biome": self.biome, "name": self.name, "timestamp": self.timestamp}

    @staticmethod
    def from_dict(d: Dict[str, object]) -> Optional["Artifact"]:
        """Deserialize one record; returns None when the record is malformed."""
        if not isinstance(d, dict):
            return None
        biome, name, ts = d.get("biome"), d.get("name"), d.get("timestamp")
        if not isinstance(biome, str) or not isinstance(name, str):
            return None
        if isinstance(ts, bool) or not isinstance(ts, (int, float)):
            return None
        if isinstance(ts, float) and not math.isfinite(ts):
            return None
        return Artifact(biome=biome, name=name, timestamp=int(ts))


@dataclass
class EconomyState:
    """
    Persisted currency and collections.

    Fields:
        coins: Non-negative coin balance.
        accessories: Owned accessory ids, in purchase order, no duplicates.
        artifacts: Append-only expedition finds.
    """
    coins: int = 0
    accessories: List[str] = field(default_factory=list)
    artifacts: List[Artifact] = field(default_factory=list)

    def owns(self, item_id: str) -> bool:
        return item_id in self.accessories

    def can_afford(self, cost: int) -> bool:
        if cost < 0:
            return False
        return self.coins >= cost

    def credit(self, amount: int) -> None:
        if not isinstance(amount, int) or amount < 0:
            raise ValueError("amount must be a non-negative integer.")
        self.coins += amount

    def buy(self, item_id: str, cost: int) -> bool:
        """Spend cost on item_id if affordable and not already owned."""
        if self.owns(item_id) or not self.can_afford(cost):
            return False
        self.coins -= cost
        self.accessories.append(item_id)
        return True

    def add_artifact(self, artifact: Artifact) -> None:
        self.artifacts.append(artifact)

    def to_dict(self) -> Dict[str, object]:
        return {
            "coins": self.coins,
            "accessories": list(self.accessories),
            "artifacts": [a.to_dict() for a in self.artifacts],
        }
