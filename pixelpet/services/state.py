# pixelpet/services/state.py
from __future__ import annotations

import logging
import random
import time
from typing import Any, Callable, List, Optional, Union

from pixelpet.config import ENGINE, EngineConfig
from pixelpet.models.inventory import Artifact, EconomyState
from pixelpet.models.mission_log import MissionLog
from pixelpet.models.profile import PetProfile, Species, Theme
from pixelpet.models.session import IDLE, SLEEPING, SessionKind, SessionStatus
from pixelpet.models.snapshot import Snapshot
from pixelpet.models.vitals import Mood, Vitals
from pixelpet.services.clock import Ticker, TimerHandle
from pixelpet.services.economy import (
    ACCESSORIES,
    BIOMES,
    Accessory,
    Economy,
    display_accessory,
)
from pixelpet.services.events import EngineEvent, EventKind
from pixelpet.services.expedition import ExpeditionSession
from pixelpet.services.minigame import MiniGameSession, Target

logger = logging.getLogger(__name__)

Listener = Callable[[EngineEvent], None]


class PetEngine:
    """
    Owns all mutable pet data and the rules that change it.

    Commands return True when applied and False for a refused no-op; a refused
    command changes nothing and emits nothing. Observers (no-arg callbacks)
    run after every state change; listeners receive EngineEvent values for
    sound and cosmetic effects. The snapshot is saved after every change to
    coins, accessories or artifacts.
    """

    def __init__(
        self,
        ticker: Ticker,
        persistence: Any = None,
        rng: Optional[random.Random] = None,
        config: EngineConfig = ENGINE,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ticker = ticker
        self._persistence = persistence
        self._rng = rng or random.Random()
        self._config = config
        self._clock = clock

        self.profile: Optional[PetProfile] = None
        self.vitals = Vitals()
        self.economy = EconomyState()
        self.log = MissionLog(config.mission_log_cap)

        self._kind = SessionKind.IDLE
        self._minigame: Optional[MiniGameSession] = None
        self._expedition: Optional[ExpeditionSession] = None
        self._decay_timer: Optional[TimerHandle] = None
        self._observers: List[Callable[[], None]] = []
        self._listeners: List[Listener] = []

    # --- Observers / events ---
    def add_observer(self, cb: Callable[[], None]) -> None:
        """Register a no-arg callback invoked after successful mutations."""
        if cb not in self._observers:
            self._observers.append(cb)

    def add_listener(self, cb: Listener) -> None:
        """Register a callback receiving every EngineEvent."""
        if cb not in self._listeners:
            self._listeners.append(cb)

    def _notify(self) -> None:
        """Invoke all registered observers (exceptions are logged, never raised)."""
        for cb in list(self._observers):
            try:
                cb()
            except Exception:
                logger.warning("Observer %r failed", cb, exc_info=True)

    def _emit(self, kind: EventKind, **payload: Any) -> None:
        event = EngineEvent(kind=kind, timestamp=self._clock(), payload=payload)
        for cb in list(self._listeners):
            try:
                cb(event)
            except Exception:
                logger.warning("Listener %r failed on %s", cb, kind.name, exc_info=True)

    # --- Queries ---
    @property
    def has_pet(self) -> bool:
        return self.profile is not None

    @property
    def hunger(self) -> int:
        return self.vitals.hunger

    @property
    def morale(self) -> int:
        return self.vitals.morale

    @property
    def mood(self) -> Mood:
        return self.vitals.mood

    @property
    def status(self) -> SessionStatus:
        if self._kind is SessionKind.EXPEDITION and self._expedition is not None:
            return SessionStatus(
                SessionKind.EXPEDITION,
                biome_id=self._expedition.biome.id,
                seconds_remaining=self._expedition.seconds_remaining,
            )
        if self._kind is SessionKind.MINIGAME and self._minigame is not None:
            return SessionStatus(SessionKind.MINIGAME, seconds_remaining=self._minigame.time_left)
        if self._kind is SessionKind.SLEEPING:
            return SLEEPING
        return IDLE

    @property
    def minigame(self) -> Optional[MiniGameSession]:
        """The running round, or None outside a mini-game."""
        return self._minigame if self._kind is SessionKind.MINIGAME else None

    @property
    def coins(self) -> int:
        return self.economy.coins

    @property
    def accessories(self) -> List[str]:
        return list(self.economy.accessories)

    @property
    def artifacts(self) -> List[Artifact]:
        return list(self.economy.artifacts)

    @property
    def display_accessory(self) -> Optional[Accessory]:
        return display_accessory(self.economy.accessories)

    def mission_log(self, n: Optional[int] = None) -> List[str]:
        return self.log.tail(n)

    @property
    def can_feed(self) -> bool:
        return self._idle_with_pet() and self.vitals.hunger < Economy.STAT_MAX

    @property
    def can_play(self) -> bool:
        return self._idle_with_pet() and self.vitals.morale < Economy.STAT_MAX

    @property
    def can_toggle_sleep(self) -> bool:
        return self.has_pet and self._kind in (SessionKind.IDLE, SessionKind.SLEEPING)

    @property
    def can_start_minigame(self) -> bool:
        return self._idle_with_pet()

    def can_launch(self, biome_id: str) -> bool:
        return (
            self._idle_with_pet()
            and biome_id in BIOMES
            and self.vitals.morale >= Economy.EXPEDITION_MORALE_COST
        )

    def can_purchase(self, item_id: str) -> bool:
        acc = ACCESSORIES.get(item_id)
        return (
            self.has_pet
            and acc is not None
            and not self.economy.owns(item_id)
            and self.economy.can_afford(acc.cost)
        )

    def snapshot(self) -> Optional[Snapshot]:
        if self.profile is None:
            return None
        return Snapshot(profile=self.profile, economy=self.economy)

    def _idle_with_pet(self) -> bool:
        return self.has_pet and self._kind is SessionKind.IDLE

    # --- Lifecycle ---
    def boot(self) -> bool:
        """
        Seed identity and economy from the saved snapshot, if one exists.

        Returns True when a pet was restored; False means the adoption flow
        should run.
        """
        snap = None
        if self._persistence is not None:
            try:
                snap = self._persistence.load()
            except Exception:
                logger.warning("Snapshot load failed; starting at adoption", exc_info=True)
                snap = None
        if snap is None:
            logger.info("No existing pet")
            return False
        self._begin_life(snap.profile, snap.economy)
        logger.info("Restored %s the %s (%d coins)", snap.profile.name, snap.profile.species.value, snap.economy.coins)
        self.log.append(f"Welcome back, {snap.profile.name}!")
        self._notify()
        return True

    def adopt(self, name: str, species: Union[Species, str], theme: Union[Theme, str]) -> PetProfile:
        """
        Create the pet from adoption form values and persist it.

        Raises ValueError for an invalid name, species or theme, or when a pet
        already exists.
        """
        if self.has_pet:
            raise ValueError("A pet has already been adopted; reset first.")
        profile = PetProfile.create(name, species, theme)
        self._begin_life(profile, EconomyState())
        logger.info("Adopted %s the %s", profile.name, profile.species.value)
        self.log.append(f"{profile.name} joined the family!")
        self._save()
        self._emit(EventKind.ADOPTED, name=profile.name, species=profile.species.value)
        self._notify()
        return profile

    def _begin_life(self, profile: PetProfile, economy: EconomyState) -> None:
        self._stop_sessions()
        self.profile = profile
        self.economy = economy
        self.vitals.reset()
        self._kind = SessionKind.IDLE
        self._start_decay()

    def reset_all_data(self) -> bool:
        """Forget the pet entirely: stop timers, delete the save, return to adoption."""
        self.shutdown()
        if self._persistence is not None:
            try:
                self._persistence.clear()
            except Exception:
                logger.warning("Could not clear save", exc_info=True)
        self.profile = None
        self.economy = EconomyState()
        self.vitals.reset()
        self.log.clear()
        logger.info("All data reset")
        self._emit(EventKind.RESET)
        self._notify()
        return True

    def shutdown(self) -> None:
        """Cancel every outstanding timer. Safe to call more than once."""
        self._stop_decay()
        self._stop_sessions()
        self._kind = SessionKind.IDLE

    def _stop_sessions(self) -> None:
        if self._minigame is not None:
            self._minigame.stop()
            self._minigame = None
        if self._expedition is not None:
            self._expedition.stop()
            self._expedition = None

    # --- Decay ---
    def _start_decay(self) -> None:
        self._stop_decay()
        self._decay_timer = self._ticker.schedule_interval(self._on_decay, self._config.decay_interval_s)

    def _stop_decay(self) -> None:
        if self._decay_timer is not None:
            self._decay_timer.cancel()
            self._decay_timer = None

    def _on_decay(self, _dt: float) -> None:
        if not self.has_pet or self._kind is SessionKind.SLEEPING:
            return
        self.vitals.decay(Economy.DECAY_AMOUNT)
        logger.debug("Decay: hunger=%d morale=%d", self.vitals.hunger, self.vitals.morale)
        self._notify()

    # --- Care actions ---
    def feed(self) -> bool:
        """Restore hunger; refused while busy, asleep, or already full."""
        if not self.can_feed:
            logger.debug("feed refused (status=%s, hunger=%d)", self._kind.name, self.vitals.hunger)
            return False
        self.vitals.feed(Economy.FEED_AMOUNT)
        self._emit(EventKind.FED, hunger=self.vitals.hunger)
        self._notify()
        return True

    def play(self) -> bool:
        """Restore morale; refused while busy, asleep, or already cheerful."""
        if not self.can_play:
            logger.debug("play refused (status=%s, morale=%d)", self._kind.name, self.vitals.morale)
            return False
        self.vitals.cheer(Economy.PLAY_AMOUNT)
        self._emit(EventKind.PLAYED, morale=self.vitals.morale)
        self._notify()
        return True

    def toggle_sleep(self) -> bool:
        """Put the pet to bed (pausing decay) or wake it (resuming decay)."""
        if not self.can_toggle_sleep:
            logger.debug("toggle_sleep refused (status=%s)", self._kind.name)
            return False
        if self._kind is SessionKind.SLEEPING:
            self._kind = SessionKind.IDLE
            self._start_decay()
            logger.info("%s woke up", self.profile.name)
            self._emit(EventKind.WOKE)
        else:
            self._stop_decay()
            self._kind = SessionKind.SLEEPING
            logger.info("%s fell asleep", self.profile.name)
            self._emit(EventKind.SLEEP_STARTED)
        self._notify()
        return True

    # --- Mini-game ---
    def start_minigame(self) -> bool:
        if not self.can_start_minigame:
            logger.debug("start_minigame refused (status=%s)", self._kind.name)
            return False
        session = MiniGameSession(
            self._ticker,
            self._rng,
            self._config,
            on_move=self._minigame_moved,
            on_tick=lambda _left: self._notify(),
            on_finish=lambda earned: self._minigame_finished(session, earned),
        )
        self._minigame = session
        self._kind = SessionKind.MINIGAME
        session.begin()
        logger.info("Mini-game started")
        target = session.target
        self._emit(EventKind.MINIGAME_STARTED, x=target.x, y=target.y)
        self._notify()
        return True

    def catch_target(self) -> bool:
        session = self.minigame
        if session is None or not session.catch():
            return False
        self._emit(EventKind.CAUGHT, earned=session.earned)
        self._notify()
        return True

    def _minigame_moved(self, target: Target) -> None:
        self._emit(EventKind.TARGET_MOVED, x=target.x, y=target.y)
        self._notify()

    def _minigame_finished(self, session: MiniGameSession, earned: int) -> None:
        if session is not self._minigame:
            logger.debug("Ignoring result from a stale mini-game round")
            return
        self._minigame = None
        self._kind = SessionKind.IDLE
        if earned > 0:
            self.economy.credit(earned)
            self._save()
        logger.info("Mini-game over: +%d coins (balance %d)", earned, self.economy.coins)
        self.log.append(f"Mini-game over: {session.catches} catches, +{earned} coins.")
        self._emit(EventKind.MINIGAME_FINISHED, earned=earned, catches=session.catches)
        self._notify()

    # --- Expedition ---
    def launch_expedition(self, biome_id: str) -> bool:
        """Spend morale to send the pet to a biome for one timed draw."""
        if not self.can_launch(biome_id):
            logger.debug("launch_expedition(%r) refused (status=%s, morale=%d)",
                         biome_id, self._kind.name, self.vitals.morale)
            return False
        biome = BIOMES[biome_id]
        self.vitals.spend_morale(Economy.EXPEDITION_MORALE_COST)
        session = ExpeditionSession(
            biome,
            self._ticker,
            self._rng,
            self._config,
            on_flavor=self._expedition_flavor,
            on_tick=lambda _left: self._notify(),
            on_resolve=lambda success: self._expedition_resolved(session, success),
        )
        self._expedition = session
        self._kind = SessionKind.EXPEDITION
        session.begin()
        logger.info("Expedition to %s launched", biome.id)
        self.log.append(f"{self.profile.name} set off for {biome.label}.")
        self._emit(EventKind.EXPEDITION_LAUNCHED, biome=biome.id)
        self._notify()
        return True

    def _expedition_flavor(self, line: str) -> None:
        self.log.append(line)
        self._notify()

    def _expedition_resolved(self, session: ExpeditionSession, success: bool) -> None:
        if session is not self._expedition:
            logger.debug("Ignoring result from a stale expedition")
            return
        biome = session.biome
        self._expedition = None
        self._kind = SessionKind.IDLE
        name = self.profile.name if self.profile else "Your pet"
        if success:
            artifact = Artifact(biome=biome.id, name=biome.reward, timestamp=int(self._clock() * 1000))
            self.economy.add_artifact(artifact)
            self._save()
            logger.info("Expedition to %s found %s", biome.id, biome.reward)
            self.log.append(f"{name} returned from {biome.label} with a {biome.reward}!")
            self._emit(EventKind.EXPEDITION_SUCCEEDED, biome=biome.id, reward=biome.reward)
        else:
            logger.info("Expedition to %s came back empty-handed", biome.id)
            self.log.append(f"{name} came back from {biome.label} empty-handed.")
            self._emit(EventKind.EXPEDITION_FAILED, biome=biome.id)
        self._notify()

    # --- Shop ---
    def purchase(self, item_id: str) -> bool:
        """Buy an accessory once, if affordable."""
        if not self.can_purchase(item_id):
            logger.debug("purchase(%r) refused (coins=%d)", item_id, self.economy.coins)
            return False
        acc = ACCESSORIES[item_id]
        if not self.economy.buy(item_id, acc.cost):
            return False
        self._save()
        logger.info("Bought %s for %d coins (balance %d)", acc.id, acc.cost, self.economy.coins)
        self.log.append(f"Bought a {acc.label} for {acc.cost} coins.")
        self._emit(EventKind.PURCHASED, item=acc.id, cost=acc.cost)
        self._notify()
        return True

    # --- Persistence bridge ---
    def _save(self) -> None:
        """Fire-and-forget snapshot write; never raises into the command."""
        snap = self.snapshot()
        if self._persistence is None or snap is None:
            return
        try:
            ok = self._persistence.save(snap)
        except Exception:
            logger.warning("Snapshot save raised; state kept in memory only", exc_info=True)
            return
        if ok is False:
            logger.warning("Snapshot save failed; state kept in memory only")
