import dataclasses

import pytest

from poker_survivor.cards import Card, Suit
from poker_survivor.effects import EffectState
from poker_survivor.engine import EffectsEngine
from poker_survivor.hands import PokerHand
from poker_survivor.weapons import BASE_WEAPON, WEAPONS, WeaponSystem

S, H, D, C = Suit.SPADE, Suit.HEART, Suit.DIAMOND, Suit.CLUB


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def engine():
    return EffectsEngine(clock=FakeClock())


# ---------------------------------------------------------------------------
# Weapons
# ---------------------------------------------------------------------------
def test_catalog_covers_every_hand():
    assert set(WEAPONS) == set(PokerHand)
    assert len({w.name for w in WEAPONS.values()}) == len(WEAPONS)
    assert BASE_WEAPON.name == "Revolver"
    assert WEAPONS[PokerHand.FLUSH].damage == 70
    assert WEAPONS[PokerHand.FULL_HOUSE].damage == 60


def test_update_weapon_reports_change_once():
    weapons = WeaponSystem()
    assert weapons.update_weapon(PokerHand.STRAIGHT)
    assert not weapons.update_weapon(PokerHand.STRAIGHT)
    assert weapons.get_current_weapon().name == "Laser Railgun"
    weapons.reset()
    assert weapons.current_weapon is BASE_WEAPON


def test_spade_damage_multipliers():
    weapons = WeaponSystem()
    assert weapons.calculate_damage(EffectState()) == 10
    one = dataclasses.replace(EffectState().spade, count=1)
    two = dataclasses.replace(EffectState().spade, count=2)
    assert weapons.calculate_damage(EffectState(spade=one)) == pytest.approx(12.5)
    assert weapons.calculate_damage(EffectState(spade=two)) == pytest.approx(14.375)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def test_empty_apply_gives_base_weapon(engine):
    result = engine.apply_card_effects([])
    assert result.hand is PokerHand.HIGH_CARD
    assert result.current_weapon.name == "Revolver"
    assert not result.weapon_changed
    assert result.effects == EffectState()


def test_pair_swaps_weapon(engine):
    result = engine.apply_card_effects([Card(S, 9), Card(H, 9)])
    assert result.weapon_changed
    assert result.current_weapon.name == "Dual Revolver"
    assert result.effects.spade.count == 1
    assert result.effects.heart.chip_drop_multiplier == 2


def test_apply_is_idempotent(engine):
    hand = [Card(S, 10), Card(S, 11), Card(S, 12), Card(S, 13), Card(S, 1)]
    first = engine.apply_card_effects(hand)
    second = engine.apply_card_effects(hand)
    assert first.current_weapon.name == "Orbital Laser Strike"
    assert first.weapon_changed
    assert not second.weapon_changed
    assert second.effects == first.effects
    assert second.effects.spade.ultimate_end_time == 110.0


def test_no_leak_between_recomputations(engine):
    engine.apply_card_effects([Card(C, r) for r in (2, 4, 6, 8, 10)])
    assert engine.effects.club.explosion_size == 2

    result = engine.apply_card_effects([Card(D, 3)])
    assert result.effects.club == EffectState().club
    assert result.effects.diamond.slow_amount == 0.3
    assert result.current_weapon.name == "Revolver"


def test_collect_card_applies_fifo(engine):
    for rank in (2, 3, 4, 5, 9):
        engine.collect_card(Card(H, rank))
    assert engine.current_weapon.name == "Plasma Cannon"

    result = engine.collect_card(Card(S, 6))
    assert [str(c) for c in engine.ledger] == ["3♥", "4♥", "5♥", "9♥", "6♠"]
    assert result.effects.heart.count == 4
    assert result.effects.spade.count == 1
    assert result.hand is PokerHand.HIGH_CARD


def test_clear_cards_returns_to_revolver(engine):
    engine.collect_card(Card(S, 4))
    engine.collect_card(Card(D, 4))
    assert engine.current_weapon.name == "Dual Revolver"

    result = engine.clear_cards()
    assert result.weapon_changed
    assert result.current_weapon.name == "Revolver"
    assert len(engine.ledger) == 0


def test_reset_effects_keeps_weapon(engine):
    engine.apply_card_effects([Card(S, 4), Card(D, 4)])
    engine.reset_effects()
    assert engine.hand is PokerHand.HIGH_CARD
    assert engine.effects == EffectState()
    assert engine.current_weapon.name == "Dual Revolver"


def test_snapshot_is_frozen(engine):
    engine.apply_card_effects([Card(S, 2), Card(S, 3)])
    snapshot = engine.get_effects()
    assert snapshot.current_weapon is engine.current_weapon
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.current_weapon = BASE_WEAPON
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.effects.spade.count = 0


def test_engine_damage_uses_current_effects(engine):
    engine.apply_card_effects([Card(S, 2), Card(S, 2)])
    assert engine.calculate_damage() == pytest.approx(20 * 1.25 * 1.15)


def test_ultimate_expires_with_clock():
    clock = FakeClock(50.0)
    engine = EffectsEngine(clock=clock)
    engine.apply_card_effects([Card(D, r) for r in (2, 5, 7, 9, 12)])
    effects = engine.get_effects().effects
    assert effects.ultimate_active(D, clock())
    clock.now = 55.0
    assert not effects.ultimate_active(D, clock())


def test_straight_flush_equips_gatling(engine):
    result = engine.apply_card_effects([Card(S, r) for r in (9, 10, 11, 12, 13)])
    assert result.hand is PokerHand.STRAIGHT_FLUSH
    assert result.weapon_changed
    assert result.current_weapon.name == "Laser Gatling Gun"
    assert result.current_weapon.damage == 90
