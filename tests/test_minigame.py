import random

import pytest

from pixelpet.config import ENGINE
from pixelpet.models.session import SessionKind
from pixelpet.services.events import EventKind
from pixelpet.services.minigame import MiniGameSession, random_target


@pytest.mark.parametrize("catches", [0, 1, 7, 30])
def test_catches_credit_five_coins_each(engine, ticker, catches):
    assert engine.start_minigame() is True
    assert engine.status.kind is SessionKind.MINIGAME
    for _ in range(catches):
        assert engine.catch_target() is True
    ticker.advance(10)
    assert engine.coins == 5 * catches
    assert engine.status.kind is SessionKind.IDLE
    assert engine.minigame is None


def test_countdown_and_catches_across_ticks(engine, ticker):
    engine.start_minigame()
    assert engine.status.seconds_remaining == 10
    engine.catch_target()
    ticker.advance(4)
    assert engine.minigame.time_left == 6
    engine.catch_target()
    engine.catch_target()
    ticker.advance(5.5)
    assert engine.minigame.time_left == 1
    engine.catch_target()
    assert engine.minigame.earned == 20
    ticker.advance(0.5)
    assert engine.coins == 20


def test_finish_event_carries_result_and_timers_are_released(engine, ticker, events, store):
    engine.start_minigame()
    for _ in range(3):
        engine.catch_target()
    ticker.advance(10)

    finished = [e for e in events if e.kind is EventKind.MINIGAME_FINISHED]
    assert len(finished) == 1
    assert finished[0].payload == {"earned": 15, "catches": 3}
    assert store.saves[-1]["coins"] == 15
    # Only the decay timer survives the round.
    assert ticker.pending == 1
    assert "Mini-game over" in engine.mission_log()[-1]


def test_catch_outside_a_round_is_refused(engine, ticker):
    assert engine.catch_target() is False
    engine.start_minigame()
    ticker.advance(10)
    assert engine.catch_target() is False
    assert engine.coins == 0


def test_target_moves_on_its_own_interval_within_bounds(engine, ticker, events):
    engine.start_minigame()
    ticker.advance(10)
    moves = [e for e in events if e.kind is EventKind.TARGET_MOVED]
    assert len(moves) == 7
    for e in [events[0]] + moves:
        assert 8 <= e.payload["x"] <= 73
        assert 12 <= e.payload["y"] <= 67


def test_random_target_respects_configured_ranges():
    rng = random.Random(7)
    for _ in range(500):
        t = random_target(rng, ENGINE)
        assert ENGINE.target_x_range[0] <= t.x <= ENGINE.target_x_range[1]
        assert ENGINE.target_y_range[0] <= t.y <= ENGINE.target_y_range[1]


def test_second_start_is_refused_while_running(engine):
    assert engine.start_minigame() is True
    assert engine.start_minigame() is False


def test_minigame_refused_during_expedition(engine):
    assert engine.launch_expedition("crystalCaves") is True
    before = engine.status
    assert engine.start_minigame() is False
    assert engine.status == before
    assert engine.minigame is None


def test_stopped_session_ignores_its_leftover_callbacks(ticker):
    finished = []
    session = MiniGameSession(ticker, random.Random(1), on_finish=finished.append)
    session.begin()
    session.catch()
    session.stop()
    session._countdown(1.0)
    ticker.advance(20)
    assert finished == []
    assert session.catch() is False
