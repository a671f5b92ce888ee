# pixelpet/ui/components.py
from __future__ import annotations

from typing import Dict, List, Optional

from kivy.app import App
from kivy.metrics import dp
from kivymd.uix.boxlayout import MDBoxLayout
from kivymd.uix.button import MDFlatButton, MDRaisedButton
from kivymd.uix.floatlayout import MDFloatLayout
from kivymd.uix.label import MDLabel
from kivymd.uix.progressbar import MDProgressBar
from kivymd.uix.screen import MDScreen
from kivymd.uix.textfield import MDTextField

from pixelpet.models.profile import NAME_MAX_LEN, Species, Theme
from pixelpet.models.session import SessionKind
from pixelpet.services.clock import Ticker
from pixelpet.services.economy import ACCESSORIES, BIOMES, Economy
from pixelpet.ui.effects import TOAST_S, show_toast
from pixelpet.ui.pet_view import PetView

TARGET_SIZE = (0.18, 0.14)  # fraction of the play area


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------
def _engine():
    """Return the PetEngine stored on the running App (if present)."""
    return getattr(App.get_running_app(), "engine", None)


def _toast(msg: str, duration: float = TOAST_S) -> None:
    show_toast(msg, duration)


def _label(text: str = "", **kwargs) -> MDLabel:
    kwargs.setdefault("adaptive_height", True)
    return MDLabel(text=text, **kwargs)


def _row(*widgets, spacing: float = 8) -> MDBoxLayout:
    row = MDBoxLayout(orientation="horizontal", spacing=dp(spacing), adaptive_height=True)
    for w in widgets:
        row.add_widget(w)
    return row


def _column() -> MDBoxLayout:
    return MDBoxLayout(orientation="vertical", padding=dp(16), spacing=dp(10))


class StatBar(MDBoxLayout):
    """Label plus percentage plus bar for one need."""

    def __init__(self, title: str, **kwargs) -> None:
        super().__init__(orientation="vertical", adaptive_height=True, spacing=dp(2), **kwargs)
        self.title = title
        self._label = _label(f"{title} 100%", font_style="Caption")
        self._bar = MDProgressBar(value=100, max=100, size_hint_y=None, height=dp(6))
        self.add_widget(self._label)
        self.add_widget(self._bar)

    def set_value(self, value: int) -> None:
        self._label.text = f"{self.title} {value}%"
        self._bar.value = value


# ---------------------------------------------------------------------------
# Screens
# ---------------------------------------------------------------------------
class BaseScreen(MDScreen):
    def refresh(self) -> None:  # overridden by children
        pass

    def go(self, name: str) -> None:
        if self.manager:
            self.manager.current = name


class AdoptionScreen(BaseScreen):
    """Name, species and theme form; adopts once and moves on to the pet."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.species = Species.CAT
        self.theme = Theme.PINK

        col = _column()
        col.add_widget(_label("Adoption Center", font_style="H5", halign="center"))
        col.add_widget(_label("Find your perfect pixel pal!", halign="center", font_style="Caption"))
        self.name_field = MDTextField(hint_text="What is your pet's name?", max_text_length=NAME_MAX_LEN)
        col.add_widget(self.name_field)

        col.add_widget(_label("Which friend would you like to adopt?"))
        col.add_widget(_row(*[
            MDRaisedButton(text=s.label, on_release=lambda _b, s=s: self.pick_species(s))
            for s in Species
        ]))
        col.add_widget(_label("Pick a theme color"))
        col.add_widget(_row(*[
            MDRaisedButton(text=t.palette.label, md_bg_color=t.palette.accent,
                           on_release=lambda _b, t=t: self.pick_theme(t))
            for t in Theme
        ]))
        self.choice_label = _label(halign="center")
        col.add_widget(self.choice_label)
        col.add_widget(MDRaisedButton(text="Let's Go!", pos_hint={"center_x": 0.5}, on_release=self.on_adopt))
        self.add_widget(col)
        self.refresh()

    def pick_species(self, species: Species) -> None:
        self.species = species
        self.refresh()

    def pick_theme(self, theme: Theme) -> None:
        self.theme = theme
        self.refresh()

    def refresh(self) -> None:
        self.choice_label.text = f"{self.species.label} • {self.theme.palette.label}"

    def on_adopt(self, *_args) -> None:
        st = _engine()
        if not st:
            return
        try:
            st.adopt(self.name_field.text, self.species, self.theme)
        except ValueError as exc:
            _toast(str(exc))
            return
        self.name_field.text = ""
        self.go("home")


class HomeScreen(BaseScreen):
    """The pet, its needs, and the care/activity buttons."""

    def __init__(self, ticker: Optional[Ticker] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        col = _column()
        self.name_label = _label(font_style="H6")
        self.coin_label = _label(halign="right")
        col.add_widget(_row(self.name_label, self.coin_label))

        self.play_area = MDFloatLayout()
        self.pet_view = PetView(ticker=ticker, size_hint=(1, 1), pos_hint={"x": 0, "y": 0})
        self.target_btn = MDRaisedButton(text="Catch!", size_hint=TARGET_SIZE, opacity=0,
                                         disabled=True, on_release=self.on_catch)
        self.play_area.add_widget(self.pet_view)
        self.play_area.add_widget(self.target_btn)
        col.add_widget(self.play_area)

        self.status_label = _label(halign="center")
        col.add_widget(self.status_label)
        self.hunger_bar = StatBar("Hunger")
        self.morale_bar = StatBar("Morale")
        col.add_widget(self.hunger_bar)
        col.add_widget(self.morale_bar)

        self.feed_btn = MDRaisedButton(text="Feed", on_release=lambda *_: self._run("feed"))
        self.play_btn = MDRaisedButton(text="Play", on_release=lambda *_: self._run("play"))
        self.sleep_btn = MDRaisedButton(text="Sleep", on_release=lambda *_: self._run("toggle_sleep"))
        self.game_btn = MDRaisedButton(text="Catch the Pet!", on_release=lambda *_: self._run("start_minigame"))
        col.add_widget(_row(self.feed_btn, self.play_btn, self.sleep_btn))
        col.add_widget(_row(
            self.game_btn,
            MDRaisedButton(text="Expeditions", on_release=lambda *_: self.go("expedition")),
            MDRaisedButton(text="Shop", on_release=lambda *_: self.go("shop")),
        ))
        col.add_widget(MDFlatButton(text="Reset All Data", pos_hint={"center_x": 0.5}, on_release=self.on_reset))
        self.add_widget(col)

    def _run(self, command: str) -> None:
        st = _engine()
        if st:
            getattr(st, command)()

    def on_catch(self, *_args) -> None:
        st = _engine()
        if st:
            st.catch_target()

    def on_reset(self, *_args) -> None:
        app = App.get_running_app()
        if hasattr(app, "reset_all_data"):
            app.reset_all_data()

    def refresh(self) -> None:
        st = _engine()
        if not st or not st.has_pet:
            return
        status = st.status
        self.name_label.text = st.profile.name
        self.coin_label.text = f"Coins: {st.coins}"
        self.pet_view.show(st.profile, st.mood, status.kind is SessionKind.SLEEPING, st.display_accessory)
        self.hunger_bar.set_value(st.hunger)
        self.morale_bar.set_value(st.morale)

        if status.kind is SessionKind.MINIGAME:
            game = st.minigame
            self.status_label.text = f"Catch it! {game.time_left}s • +{game.earned} coins"
        elif status.kind is SessionKind.EXPEDITION:
            biome = BIOMES[status.biome_id]
            self.status_label.text = f"Exploring {biome.label}... {status.seconds_remaining}s"
        elif status.kind is SessionKind.SLEEPING:
            self.status_label.text = "Zzz..."
        else:
            self.status_label.text = f"Feeling {st.mood.value}"
        self._place_target(st)

        self.feed_btn.disabled = not st.can_feed
        self.play_btn.disabled = not st.can_play
        self.sleep_btn.disabled = not st.can_toggle_sleep
        self.sleep_btn.text = "Wake Up" if status.kind is SessionKind.SLEEPING else "Sleep"
        self.game_btn.disabled = not st.can_start_minigame

    def _place_target(self, st) -> None:
        game = st.minigame
        if game is None or game.target is None:
            self.target_btn.opacity = 0
            self.target_btn.disabled = True
            return
        # Engine positions are percentages from the top-left corner.
        self.target_btn.pos_hint = {
            "x": game.target.x / 100.0,
            "top": 1.0 - game.target.y / 100.0,
        }
        self.target_btn.opacity = 1
        self.target_btn.disabled = False


class ExpeditionScreen(BaseScreen):
    """Biome picker, countdown, mission log and artifact collection."""

    LOG_LINES = 8

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        col = _column()
        col.add_widget(_label("Expeditions", font_style="H5"))
        col.add_widget(_label(f"Each trip costs {Economy.EXPEDITION_MORALE_COST} morale.", font_style="Caption"))
        self.biome_btns: Dict[str, MDRaisedButton] = {}
        for biome in BIOMES.values():
            btn = MDRaisedButton(
                text=f"{biome.label} ({int(biome.success_rate * 100)}%)",
                on_release=lambda _b, bid=biome.id: self.on_launch(bid),
            )
            self.biome_btns[biome.id] = btn
            col.add_widget(btn)
        self.status_label = _label()
        self.log_label = _label(font_style="Caption")
        self.artifact_label = _label(font_style="Caption")
        col.add_widget(self.status_label)
        col.add_widget(self.log_label)
        col.add_widget(self.artifact_label)
        col.add_widget(MDFlatButton(text="Back", on_release=lambda *_: self.go("home")))
        self.add_widget(col)

    def on_launch(self, biome_id: str) -> None:
        st = _engine()
        if st:
            st.launch_expedition(biome_id)

    def refresh(self) -> None:
        st = _engine()
        if not st or not st.has_pet:
            return
        status = st.status
        for bid, btn in self.biome_btns.items():
            btn.disabled = not st.can_launch(bid)
        if status.kind is SessionKind.EXPEDITION:
            self.status_label.text = f"{BIOMES[status.biome_id].label}: {status.seconds_remaining}s left"
        else:
            self.status_label.text = f"Morale {st.morale}%"
        self.log_label.text = "\n".join(st.mission_log(self.LOG_LINES)) or "No missions yet."
        found: List[str] = [a.name for a in st.artifacts]
        self.artifact_label.text = "Artifacts: " + (", ".join(found) if found else "none")


class ShopScreen(BaseScreen):
    """One-time accessories; the highest tier owned is what the pet wears."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        col = _column()
        col.add_widget(_label("Shop", font_style="H5"))
        self.coin_label = _label()
        col.add_widget(self.coin_label)
        self.item_btns: Dict[str, MDRaisedButton] = {}
        for acc in ACCESSORIES.values():
            btn = MDRaisedButton(on_release=lambda _b, aid=acc.id: self.on_buy(aid))
            self.item_btns[acc.id] = btn
            col.add_widget(btn)
        self.wearing_label = _label(font_style="Caption")
        col.add_widget(self.wearing_label)
        col.add_widget(MDFlatButton(text="Back", on_release=lambda *_: self.go("home")))
        self.add_widget(col)

    def on_buy(self, item_id: str) -> None:
        st = _engine()
        if not st:
            return
        if st.purchase(item_id):
            _toast(f"Bought {ACCESSORIES[item_id].label}!")

    def refresh(self) -> None:
        st = _engine()
        if not st or not st.has_pet:
            return
        self.coin_label.text = f"Coins: {st.coins}"
        owned = set(st.accessories)
        for aid, btn in self.item_btns.items():
            acc = ACCESSORIES[aid]
            btn.text = f"{acc.label} • owned" if aid in owned else f"{acc.label} • {acc.cost} coins"
            btn.disabled = not st.can_purchase(aid)
        wearing = st.display_accessory
        self.wearing_label.text = f"Wearing: {wearing.label}" if wearing else "Wearing: nothing yet"
