# pixelpet/models/profile.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union

RGBA = Tuple[float, float, float, float]

NAME_MAX_LEN = 16


class Species(Enum):
    """Closed set of adoptable species; each maps to one rendering strategy."""
    CAT = "cat"
    DINO = "dino"
    SLIME = "slime"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def hex_color(code: str, alpha: float = 1.0) -> RGBA:
    code = code.lstrip("#")
    r, g, b = (int(code[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
    return (r, g, b, alpha)


@dataclass(frozen=True)
class Palette:
    """Visual theme record: background gradient stops, accent and border colors."""
    label: str
    background: Tuple[RGBA, RGBA, RGBA]
    accent: RGBA
    border: RGBA


_PALETTES: Dict[str, Palette] = {
    "pink": Palette(
        "Sakura Pink",
        (hex_color("#fce7f3"), hex_color("#fae8ff"), hex_color("#ede9fe")),
        hex_color("#f472b6"),
        hex_color("#f9a8d4"),
    ),
    "blue": Palette(
        "Sky Blue",
        (hex_color("#e0f2fe"), hex_color("#cffafe"), hex_color("#dbeafe")),
        hex_color("#38bdf8"),
        hex_color("#7dd3fc"),
    ),
    "green": Palette(
        "Slime Green",
        (hex_color("#dcfce7"), hex_color("#d1fae5"), hex_color("#ccfbf1")),
        hex_color("#4ade80"),
        hex_color("#86efac"),
    ),
}


class Theme(Enum):
    PINK = "pink"
    BLUE = "blue"
    GREEN = "green"

    @property
    def palette(self) -> Palette:
        return _PALETTES[self.value]


@dataclass(frozen=True)
class PetProfile:
    """
    Identity chosen at adoption; never mutated afterwards.

    Fields:
        name: Display name, 1-16 characters after trimming.
        species: One of Species.
        theme: One of Theme.
    """
    name: str
    species: Species = Species.CAT
    theme: Theme = Theme.PINK

    def __post_init__(self) -> None:
        """Validate and normalize fields."""
        if not isinstance(self.name, str):
            raise ValueError("name must be a string.")
        name = self.name.strip()
        if not name:
            raise ValueError("name must not be empty.")
        if len(name) > NAME_MAX_LEN:
            raise ValueError(f"name must be at most {NAME_MAX_LEN} characters.")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "species", Species(self.species))
        object.__setattr__(self, "theme", Theme(self.theme))

    @staticmethod
    def create(name: str, species: Union[Species, str], theme: Union[Theme, str]) -> "PetProfile":
        """Build a profile from form values; raises ValueError on bad input."""
        return PetProfile(name=name, species=Species(species), theme=Theme(theme))

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "species": self.species.value, "theme": self.theme.value}
