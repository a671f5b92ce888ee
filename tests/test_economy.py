import pytest

from pixelpet.models.inventory import Artifact, EconomyState
from pixelpet.services.economy import ACCESSORIES, Economy, clamp, display_accessory
from pixelpet.services.events import EventKind


def test_economy_is_not_instantiable():
    with pytest.raises(TypeError):
        Economy()


def test_clamp():
    assert clamp(120, 0, 100) == 100
    assert clamp(-5, 0, 100) == 0
    assert clamp(42, 0, 100) == 42


def test_catalogue_prices_and_tiers():
    assert [(a.id, a.cost, a.tier) for a in ACCESSORIES.values()] == [
        ("partyHat", 50, 1),
        ("coolShades", 120, 2),
        ("royalCrown", 250, 3),
    ]


@pytest.mark.parametrize(
    "owned, expected",
    [
        ([], None),
        (["partyHat"], "partyHat"),
        (["coolShades", "partyHat"], "coolShades"),
        (["partyHat", "royalCrown", "coolShades"], "royalCrown"),
        (["bogus"], None),
    ],
)
def test_highest_tier_is_displayed(owned, expected):
    acc = display_accessory(owned)
    assert (acc.id if acc else None) == expected


def test_economy_state_buy_once():
    state = EconomyState(coins=100)
    assert state.buy("partyHat", 50) is True
    assert state.buy("partyHat", 50) is False
    assert state.coins == 50
    assert state.accessories == ["partyHat"]


def test_economy_state_rejects_negative_credit():
    with pytest.raises(ValueError):
        EconomyState().credit(-1)


def test_artifact_from_malformed_record_is_none():
    assert Artifact.from_dict({"biome": "emberPeaks", "name": "Phoenix Feather"}) is None
    assert Artifact.from_dict({"biome": "x", "name": "y", "timestamp": True}) is None
    assert Artifact.from_dict("nope") is None
    for bad in (float("nan"), float("inf"), "123"):
        assert Artifact.from_dict({"biome": "x", "name": "y", "timestamp": bad}) is None
    ok = Artifact.from_dict({"biome": "x", "name": "y", "timestamp": 12.0})
    assert ok == Artifact("x", "y", 12)


def test_purchase_deducts_once(engine, events, store):
    engine.economy.credit(200)
    assert engine.purchase("coolShades") is True
    assert engine.purchase("coolShades") is False
    assert engine.coins == 80
    assert engine.accessories == ["coolShades"]
    assert [e.kind for e in events] == [EventKind.PURCHASED]
    assert store.saves[-1]["accessories"] == ["coolShades"]
    assert "Cool Shades" in engine.mission_log()[-1]


def test_purchase_refused_without_funds(engine, events):
    engine.economy.credit(49)
    assert engine.can_purchase("partyHat") is False
    assert engine.purchase("partyHat") is False
    assert engine.coins == 49
    assert engine.accessories == []
    assert events == []


def test_purchase_with_exact_funds(engine):
    engine.economy.credit(50)
    assert engine.purchase("partyHat") is True
    assert engine.coins == 0


def test_unknown_item_is_refused(engine):
    engine.economy.credit(1000)
    assert engine.purchase("jetpack") is False
    assert engine.coins == 1000


def test_purchase_allowed_during_sessions(engine):
    engine.economy.credit(50)
    engine.start_minigame()
    assert engine.purchase("partyHat") is True


def test_display_accessory_follows_purchases(engine):
    engine.economy.credit(400)
    assert engine.display_accessory is None
    engine.purchase("royalCrown")
    engine.purchase("partyHat")
    assert engine.display_accessory.id == "royalCrown"


def test_accessories_query_is_a_copy(engine):
    engine.accessories.append("royalCrown")
    assert engine.accessories == []
