import time

from pixelpet.services.events import EngineEvent, EventKind
from pixelpet.ui.sound import CUES, SoundBoard


def _event(kind):
    return EngineEvent(kind=kind, timestamp=time.time())


def test_sound_board_records_last_cue_without_files(tmp_path):
    board = SoundBoard(sound_dir=str(tmp_path))
    board.on_event(_event(EventKind.FED))
    assert board.last_played == CUES[EventKind.FED]


def test_events_without_a_cue_are_ignored(tmp_path):
    board = SoundBoard(sound_dir=str(tmp_path))
    board.on_event(_event(EventKind.TARGET_MOVED))
    assert board.last_played is None


def test_sound_board_as_engine_listener(engine, tmp_path):
    board = SoundBoard(sound_dir=str(tmp_path))
    engine.add_listener(board.on_event)
    engine.vitals.morale = 40
    engine.play()
    assert board.last_played == "play.wav"
