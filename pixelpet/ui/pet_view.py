# pixelpet/ui/pet_view.py
"""
Pet rendering.

Each species has its own drawing strategy, picked once from the adopted
profile. Drawings are laid out on a 200x200 design grid (origin bottom-left,
Kivy style) and scaled to the widget.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from kivy.graphics import Color, Ellipse, Line, Rectangle, Triangle
from kivy.uix.widget import Widget

from pixelpet.models.profile import RGBA, PetProfile, Species, hex_color
from pixelpet.models.vitals import Mood
from pixelpet.services.clock import Ticker
from pixelpet.services.economy import Accessory
from pixelpet.services.kivy_ticker import KivyTicker
from pixelpet.ui.effects import Pulse

FED_PULSE_S = 1.2
EYE = hex_color("#4c1d95")
SHINE = (1, 1, 1, 0.8)

# (body, trim) per mood
_SPECIES_COLORS: Dict[Species, Dict[Mood, Tuple[RGBA, RGBA]]] = {
    Species.CAT: {
        Mood.HAPPY: (hex_color("#f472b6"), hex_color("#c084fc")),
        Mood.NEUTRAL: (hex_color("#e879f9"), hex_color("#c084fc")),
        Mood.SAD: (hex_color("#a78bfa"), hex_color("#818cf8")),
    },
    Species.DINO: {
        Mood.HAPPY: (hex_color("#4ade80"), hex_color("#f472b6")),
        Mood.NEUTRAL: (hex_color("#34d399"), hex_color("#fb923c")),
        Mood.SAD: (hex_color("#6ee7b7"), hex_color("#a78bfa")),
    },
    Species.SLIME: {
        Mood.HAPPY: (hex_color("#86efac"), hex_color("#4ade80")),
        Mood.NEUTRAL: (hex_color("#6ee7b7"), hex_color("#34d399")),
        Mood.SAD: (hex_color("#93c5fd"), hex_color("#60a5fa")),
    },
}


class PetView(Widget):
    """Draws the adopted pet for the current mood, sleep state and accessory."""

    def __init__(self, ticker: Optional[Ticker] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.profile: Optional[PetProfile] = None
        self.mood = Mood.HAPPY
        self.sleeping = False
        self.accessory: Optional[Accessory] = None
        self._pulse = Pulse(ticker or KivyTicker(), FED_PULSE_S, self.redraw)
        self.bind(pos=self.redraw, size=self.redraw)

    def show(self, profile: Optional[PetProfile], mood: Mood, sleeping: bool,
             accessory: Optional[Accessory]) -> None:
        self.profile, self.mood, self.sleeping, self.accessory = profile, mood, sleeping, accessory
        self.redraw()

    def pulse(self) -> None:
        """Briefly enlarge the pet (fed/played feedback)."""
        self._pulse.trigger()

    # --- drawing helpers (design-grid coordinates) ---
    def _grid(self) -> Tuple[float, float, float]:
        side = min(self.width, self.height) * (1.08 if self._pulse.on else 1.0)
        ox = self.x + (self.width - side) / 2
        oy = self.y + (self.height - side) / 2
        return ox, oy, side / 200.0

    def _ellipse(self, cx: float, cy: float, rx: float, ry: float) -> None:
        ox, oy, k = self._grid()
        Ellipse(pos=(ox + (cx - rx) * k, oy + (cy - ry) * k), size=(2 * rx * k, 2 * ry * k))

    def _arc(self, cx: float, cy: float, r: float, start: float, end: float, width: float = 2.0) -> None:
        ox, oy, k = self._grid()
        Line(circle=(ox + cx * k, oy + cy * k, r * k, start, end), width=width * k)

    def _triangle(self, *pts: float) -> None:
        ox, oy, k = self._grid()
        Triangle(points=[(ox + p * k) if i % 2 == 0 else (oy + p * k) for i, p in enumerate(pts)])

    def _face(self, cx: float, eye_dx: float, eye_y: float, mouth_y: float) -> None:
        Color(*EYE)
        if self.sleeping:
            for ex in (cx - eye_dx, cx + eye_dx):
                self._arc(ex, eye_y + 4, 8, 120, 240)
        elif self.mood is Mood.HAPPY:
            for ex in (cx - eye_dx, cx + eye_dx):
                self._arc(ex, eye_y - 4, 10, -60, 60)
        elif self.mood is Mood.SAD:
            for ex in (cx - eye_dx, cx + eye_dx):
                self._arc(ex, eye_y + 8, 10, 120, 240)
        else:
            for ex in (cx - eye_dx, cx + eye_dx):
                self._ellipse(ex, eye_y, 8, 9)
            Color(*SHINE)
            for ex in (cx - eye_dx, cx + eye_dx):
                self._ellipse(ex + 4, eye_y + 4, 2.5, 2.5)
        Color(*EYE)
        if self.mood is Mood.HAPPY:
            self._arc(cx, mouth_y + 12, 16, 140, 220)
        elif self.mood is Mood.SAD:
            self._arc(cx, mouth_y - 12, 14, -40, 40)
        else:
            self._arc(cx, mouth_y + 20, 20, 165, 195)

    # --- species strategies ---
    def _draw_cat(self, body: RGBA, trim: RGBA) -> None:
        Color(*trim)
        self._triangle(45, 120, 75, 185, 95, 140)
        self._triangle(155, 120, 125, 185, 105, 140)
        Color(*body)
        self._ellipse(100, 90, 72, 70)
        self._ellipse(50, 30, 20, 13)
        self._ellipse(150, 30, 20, 13)
        Color(1, 1, 1, 0.25)
        self._ellipse(100, 70, 36, 28)
        self._face(100, 20, 95, 65)

    def _draw_dino(self, body: RGBA, trim: RGBA) -> None:
        Color(*trim)
        for x in (70, 95, 120):
            self._triangle(x - 10, 150, x, 178, x + 10, 150)
        Color(*body)
        self._ellipse(100, 90, 70, 66)
        self._ellipse(170, 55, 28, 12)
        self._ellipse(65, 28, 18, 12)
        self._ellipse(135, 28, 18, 12)
        self._face(95, 22, 100, 68)

    def _draw_slime(self, body: RGBA, trim: RGBA) -> None:
        Color(*trim)
        self._ellipse(100, 45, 82, 30)
        Color(*body)
        self._ellipse(100, 80, 76, 62)
        Color(1, 1, 1, 0.35)
        self._ellipse(72, 112, 14, 9)
        self._face(100, 15, 92, 62)

    def _draw_accessory(self) -> None:
        acc = self.accessory
        if acc is None:
            return
        if acc.id == "partyHat":
            Color(*hex_color("#f472b6"))
            self._triangle(80, 158, 100, 200, 120, 158)
            Color(*hex_color("#fde047"))
            self._ellipse(100, 198, 5, 5)
        elif acc.id == "coolShades":
            Color(0.1, 0.1, 0.15, 0.95)
            self._ellipse(78, 97, 17, 11)
            self._ellipse(122, 97, 17, 11)
            ox, oy, k = self._grid()
            Rectangle(pos=(ox + 92 * k, oy + 98 * k), size=(16 * k, 3 * k))
        elif acc.id == "royalCrown":
            Color(*hex_color("#fbbf24"))
            ox, oy, k = self._grid()
            Rectangle(pos=(ox + 72 * k, oy + 158 * k), size=(56 * k, 14 * k))
            for x in (72, 92, 112):
                self._triangle(x, 172, x + 8, 194, x + 16, 172)

    def redraw(self, *_args) -> None:
        self.canvas.clear()
        if self.profile is None:
            return
        draw: Callable[[RGBA, RGBA], None] = {
            Species.CAT: self._draw_cat,
            Species.DINO: self._draw_dino,
            Species.SLIME: self._draw_slime,
        }[self.profile.species]
        body, trim = _SPECIES_COLORS[self.profile.species][self.mood]
        if self.mood is Mood.NEUTRAL and self.profile.species is Species.CAT:
            body = self.profile.theme.palette.accent
        with self.canvas:
            draw(body, trim)
            self._draw_accessory()
