import random

import pytest

from pixelpet.models.session import SessionKind
from pixelpet.services.economy import BIOMES
from pixelpet.services.events import EventKind
from pixelpet.services.expedition import roll_expedition


class _FixedRng(random.Random):
    """Always draws the same value."""

    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def test_launch_spends_morale_and_starts_countdown(engine, events):
    assert engine.launch_expedition("sunkenRuins") is True
    assert engine.morale == 80
    status = engine.status
    assert status.kind is SessionKind.EXPEDITION
    assert status.biome_id == "sunkenRuins"
    assert status.seconds_remaining == 10
    assert events[-1].kind is EventKind.EXPEDITION_LAUNCHED
    assert "Sunken Ruins" in engine.mission_log()[-1]


def test_launch_refused_when_morale_too_low(engine, events):
    engine.vitals.morale = 15
    assert engine.launch_expedition("crystalCaves") is False
    assert engine.morale == 15
    assert engine.status.kind is SessionKind.IDLE
    assert events == []


def test_launch_allowed_at_exact_cost(engine):
    engine.vitals.morale = 20
    assert engine.launch_expedition("emberPeaks") is True
    assert engine.morale == 0


def test_unknown_biome_is_refused(engine):
    assert engine.launch_expedition("moonBase") is False
    assert engine.morale == 100


@pytest.mark.parametrize("command", ["feed", "play", "toggle_sleep", "start_minigame"])
def test_actions_refused_while_exploring(engine, command):
    engine.vitals.hunger = 50
    engine.launch_expedition("crystalCaves")
    assert getattr(engine, command)() is False
    assert engine.status.kind is SessionKind.EXPEDITION
    assert engine.hunger == 50


def test_second_launch_is_refused(engine):
    engine.launch_expedition("crystalCaves")
    assert engine.launch_expedition("sunkenRuins") is False
    assert engine.morale == 80


def test_flavor_lines_then_resolution(engine, ticker):
    engine.launch_expedition("crystalCaves")
    ticker.advance(9)
    assert engine.status.seconds_remaining == 1
    # launch line + flavor at 9, 7, 5, 3, 1
    assert len(engine.mission_log()) == 1 + 1 + 5
    ticker.advance(1)
    assert engine.status.kind is SessionKind.IDLE
    assert engine.status.biome_id is None


def test_success_appends_artifact_and_saves(engine, ticker, events, store):
    engine._rng = _FixedRng(0.0)
    engine.launch_expedition("emberPeaks")
    ticker.advance(10)

    assert len(engine.artifacts) == 1
    found = engine.artifacts[0]
    assert (found.biome, found.name, found.timestamp) == ("emberPeaks", "Phoenix Feather", 1_700_000_000_000)
    assert events[-1].kind is EventKind.EXPEDITION_SUCCEEDED
    assert store.saves[-1]["artifacts"] == [
        {"biome": "emberPeaks", "name": "Phoenix Feather", "timestamp": 1_700_000_000_000}
    ]
    assert "Phoenix Feather" in engine.mission_log()[-1]


def test_failure_only_logs(engine, ticker, events, store):
    engine._rng = _FixedRng(0.99)
    saves_before = len(store.saves)
    engine.launch_expedition("crystalCaves")
    ticker.advance(10)

    assert engine.artifacts == []
    assert engine.coins == 0
    assert events[-1].kind is EventKind.EXPEDITION_FAILED
    assert len(store.saves) == saves_before
    assert "empty-handed" in engine.mission_log()[-1]
    assert ticker.pending == 1


def test_crystal_caves_success_rate_matches_over_many_draws():
    rng = random.Random(20240601)
    biome = BIOMES["crystalCaves"]
    n = 10_000
    wins = sum(roll_expedition(biome, rng) for _ in range(n))
    # ~5 standard deviations of a binomial(10000, 0.8)
    assert abs(wins / n - 0.80) < 0.02


def test_each_biome_has_distinct_odds_and_rewards():
    rates = {b.success_rate for b in BIOMES.values()}
    rewards = {b.reward for b in BIOMES.values()}
    assert rates == {0.80, 0.50, 0.20}
    assert len(rewards) == 3


def test_repeated_expeditions_through_the_engine(engine, ticker):
    for _ in range(20):
        engine.vitals.morale = 100
        assert engine.launch_expedition("crystalCaves") is True
        ticker.advance(10)
        assert engine.status.kind is SessionKind.IDLE
    assert 8 <= len(engine.artifacts) <= 20
