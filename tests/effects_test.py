from dataclasses import fields

import pytest

from poker_survivor.cards import Card, Suit
from poker_survivor.effects import (
    EffectState,
    describe_effects,
    resolve,
    tally_suits,
)

NOW = 1_000.0


def test_tally_covers_every_suit():
    counts = tally_suits([Card(Suit.SPADE, 1), Card(Suit.SPADE, 9), Card(Suit.CLUB, 4)])
    assert counts == {Suit.SPADE: 2, Suit.HEART: 0, Suit.DIAMOND: 0, Suit.CLUB: 1}
    assert sum(tally_suits([]).values()) == 0


@pytest.mark.parametrize("suit", list(Suit))
def test_tiers_are_cumulative(suit):
    # every attribute is non-decreasing as the suit count grows
    previous = resolve({suit: 0}, NOW)[suit]
    for count in range(1, 6):
        current = resolve({suit: count}, NOW)[suit]
        for f in fields(current):
            assert getattr(current, f.name) >= getattr(previous, f.name), (suit, count, f.name)
        previous = current


def test_spade_tiers():
    spade = resolve({Suit.SPADE: 3}, NOW).spade
    assert spade.penetration_damage == 1
    assert spade.damage_increase == 0.5
    assert spade.critical_chance == 0.3
    assert not spade.aoe_enabled
    assert spade.ultimate_end_time == 0
    assert resolve({Suit.SPADE: 4}, NOW).spade.aoe_enabled


def test_heart_multiplier_override():
    four = resolve({Suit.HEART: 4}, NOW).heart
    assert four.chip_drop_multiplier == 2
    assert four.guaranteed_drop_chance == 0
    assert four.bag_size_increase == 0.2
    assert four.ally_conversion_enabled

    five = resolve({Suit.HEART: 5}, NOW).heart
    assert five.chip_drop_multiplier == 5
    assert five.guaranteed_drop_chance == 0.5
    assert five.ultimate_end_time == 0


def test_diamond_and_club_tiers():
    state = resolve({Suit.DIAMOND: 4, Suit.CLUB: 4}, NOW)
    assert state.diamond.slow_amount == 0.3
    assert state.diamond.stun_duration_ms == 1000
    assert state.diamond.aoe_slow_enabled
    assert state.diamond.damage_amplify == 0.3
    assert state.club.ricochet_chance == 0.3
    assert state.club.explosion_enabled
    assert state.club.bounce_count == 5
    assert state.club.explosion_size == 2


def test_ultimate_windows():
    state = resolve({Suit.SPADE: 5, Suit.DIAMOND: 5, Suit.CLUB: 5}, NOW)
    assert state.spade.ultimate_end_time == NOW + 10
    assert state.diamond.ultimate_end_time == NOW + 5
    assert state.club.ultimate_end_time == NOW + 15

    assert state.ultimate_active(Suit.SPADE, NOW + 9.5)
    assert not state.ultimate_active(Suit.SPADE, NOW + 10)
    assert state.ultimate_remaining(Suit.CLUB, NOW + 5) == pytest.approx(10)
    assert not state.ultimate_active(Suit.HEART, NOW)


def test_missing_suits_resolve_to_defaults():
    assert resolve({}, NOW) == EffectState()
    assert EffectState().counts == {suit: 0 for suit in Suit}


def test_describe_effects():
    assert describe_effects(EffectState(), NOW) == []

    lines = describe_effects(resolve({Suit.SPADE: 5}, NOW), NOW)
    assert lines[0].startswith("♠ x5")
    assert "crit 30%" in lines[0]
    assert lines[-1] == "♠ ultimate: 10.0s left"


def test_to_dict():
    data = resolve({Suit.CLUB: 2}, NOW).to_dict()
    assert data["club"]["explosion_enabled"] is True
    assert set(data) == {"spade", "heart", "diamond", "club"}
