# pixelpet/ui/sound.py
from __future__ import annotations

import logging
import os
from typing import Dict, Optional

from kivy.core.audio import SoundLoader

from pixelpet.services.events import EngineEvent, EventKind

logger = logging.getLogger(__name__)

# Short cue per event; a missing file simply means silence.
CUES: Dict[EventKind, str] = {
    EventKind.ADOPTED: "adopt.wav",
    EventKind.FED: "feed.wav",
    EventKind.PLAYED: "play.wav",
    EventKind.CAUGHT: "catch.wav",
    EventKind.MINIGAME_FINISHED: "coins.wav",
    EventKind.EXPEDITION_SUCCEEDED: "reward.wav",
}


class SoundBoard:
    """Fire-and-forget audio for engine events."""

    def __init__(self, sound_dir: str = os.path.join("assets", "sounds")) -> None:
        self.sound_dir = sound_dir
        self._cache: Dict[str, Optional[object]] = {}
        self.last_played: Optional[str] = None

    def _load(self, filename: str):
        if filename not in self._cache:
            path = os.path.join(self.sound_dir, filename)
            self._cache[filename] = SoundLoader.load(path) if os.path.exists(path) else None
        return self._cache[filename]

    def on_event(self, event: EngineEvent) -> None:
        filename = CUES.get(event.kind)
        if filename is None:
            return
        sound = self._load(filename)
        self.last_played = filename
        if sound is None:
            return
        try:
            sound.stop()
            sound.play()
        except Exception:
            logger.debug("Could not play %s", filename, exc_info=True)
