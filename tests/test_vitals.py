import pytest

from pixelpet.models.vitals import Mood, Vitals, mood_for


def test_vitals_start_full_and_happy():
    v = Vitals()
    assert (v.hunger, v.morale) == (100, 100)
    assert v.mood is Mood.HAPPY


def test_decay_never_leaves_range():
    v = Vitals(hunger=5, morale=3)
    for _ in range(10):
        v.decay()
        assert 0 <= v.hunger <= 100
        assert 0 <= v.morale <= 100
    assert (v.hunger, v.morale) == (0, 0)


def test_feed_and_cheer_clamp_at_max():
    v = Vitals(hunger=95, morale=90)
    v.feed()
    v.cheer()
    assert (v.hunger, v.morale) == (100, 100)


def test_constructor_clamps_out_of_range_values():
    v = Vitals(hunger=150, morale=-20)
    assert (v.hunger, v.morale) == (100, 0)


@pytest.mark.parametrize(
    "hunger, morale, expected",
    [
        (60, 60, Mood.HAPPY),
        (100, 20, Mood.HAPPY),     # avg 60
        (59, 59, Mood.NEUTRAL),
        (60, 59, Mood.NEUTRAL),    # avg 59.5
        (30, 30, Mood.NEUTRAL),
        (29, 31, Mood.NEUTRAL),    # avg 30
        (29, 29, Mood.SAD),
        (30, 29, Mood.SAD),        # avg 29.5
        (0, 0, Mood.SAD),
    ],
)
def test_mood_thresholds(hunger, morale, expected):
    assert mood_for(hunger, morale) is expected
    assert Vitals(hunger=hunger, morale=morale).mood is expected


def test_negative_amounts_rejected():
    v = Vitals()
    with pytest.raises(ValueError):
        v.feed(-1)
    with pytest.raises(ValueError):
        v.spend_morale(-5)
