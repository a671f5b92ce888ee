# pixelpet/app.py
from __future__ import annotations

import logging

from kivy.core.window import Window
from kivy.utils import platform
from kivymd.app import MDApp
from kivymd.uix.screenmanager import MDScreenManager

from pixelpet import __version__
from pixelpet.services.events import EngineEvent, EventKind
from pixelpet.services.kivy_ticker import KivyTicker
from pixelpet.services.persistence import Persistence
from pixelpet.services.state import PetEngine
from pixelpet.ui.components import (
    AdoptionScreen,
    ExpeditionScreen,
    HomeScreen,
    ShopScreen,
)
from pixelpet.ui.effects import show_toast
from pixelpet.ui.sound import SoundBoard

logger = logging.getLogger(__name__)

SCREENS = ("adopt", "home", "expedition", "shop")


class PixelPetApp(MDApp):
    title = f"Pixel Pet {__version__}"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.ticker = KivyTicker()
        self.engine: PetEngine | None = None
        self.sounds = SoundBoard()
        self.sm: MDScreenManager | None = None

    # ---------- App lifecycle ----------
    def build(self):
        self.theme_cls.theme_style = "Light"
        self.theme_cls.primary_palette = "Pink"
        if platform not in ("android", "ios"):
            Window.size = (420, 780)

        # Persistence resolves user_data_dir now that the app is running.
        self.engine = PetEngine(self.ticker, persistence=Persistence())
        self.sm = MDScreenManager()
        self._add_screens(self.sm)
        self._wire_engine()

        self.sm.current = "home" if self.engine.boot() else "adopt"
        self._refresh_all()
        return self.sm

    def on_stop(self):
        if self.engine:
            self.engine.shutdown()

    # ---------- Build helpers ----------
    def _add_screens(self, sm: MDScreenManager) -> None:
        sm.add_widget(AdoptionScreen(name="adopt"))
        sm.add_widget(HomeScreen(name="home", ticker=self.ticker))
        sm.add_widget(ExpeditionScreen(name="expedition"))
        sm.add_widget(ShopScreen(name="shop"))
        sm.bind(current=lambda *_: self._refresh_current())

    # ---------- Observer / events ----------
    def _wire_engine(self) -> None:
        self.engine.add_observer(self._refresh_current)
        self.engine.add_listener(self.sounds.on_event)
        self.engine.add_listener(self._on_event)

    def _on_event(self, event: EngineEvent) -> None:
        home = self.sm.get_screen("home") if self.sm else None
        if event.kind in (EventKind.FED, EventKind.PLAYED) and home is not None:
            home.pet_view.pulse()
        elif event.kind is EventKind.MINIGAME_FINISHED:
            show_toast(f"+{event.payload.get('earned', 0)} coins!")
        elif event.kind is EventKind.EXPEDITION_SUCCEEDED:
            show_toast(f"Found a {event.payload.get('reward')}!")
        elif event.kind is EventKind.EXPEDITION_FAILED:
            show_toast("Came back empty-handed.")

    def reset_all_data(self) -> None:
        if self.engine:
            self.engine.reset_all_data()
        if self.sm:
            self.sm.current = "adopt"

    # ---------- UI updates ----------
    def _refresh_current(self) -> None:
        if not self.sm:
            return
        screen = self.sm.get_screen(self.sm.current)
        if hasattr(screen, "refresh"):
            screen.refresh()

    def _refresh_all(self) -> None:
        if not self.sm:
            return
        for name in SCREENS:
            scr = self.sm.get_screen(name)
            if hasattr(scr, "refresh"):
                scr.refresh()


def main() -> None:
    PixelPetApp().run()
