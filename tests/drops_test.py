import numpy as np
import pytest

from poker_survivor.cards import Suit
from poker_survivor.config import GameConfig
from poker_survivor.drops import ChipBag, DropTable, DroppedCard
from poker_survivor.effects import EffectState, resolve


def hearts(count):
    return resolve({Suit.HEART: count}, 0.0)


def test_card_drop_chance_from_config():
    rng = np.random.default_rng(3)
    always = DropTable(GameConfig(card_drop_chance=1.0), rng)
    never = DropTable(GameConfig(card_drop_chance=0.0), rng)
    drop = always.roll_card(12.0, 34.0, now=5.0)
    assert isinstance(drop, DroppedCard)
    assert (drop.x, drop.y, drop.created_at) == (12.0, 34.0, 5.0)
    assert never.roll_card(0, 0, now=5.0) is None


def test_dropped_card_expires():
    drop = DropTable(GameConfig(card_drop_chance=1.0), np.random.default_rng(0)).roll_card(0, 0, now=1.0)
    assert not drop.expired(8.0, lifetime=7.0)
    assert drop.expired(8.5, lifetime=7.0)


@pytest.mark.parametrize(
    "count,expected",
    [(0, 0.1), (1, 0.2), (4, 0.2), (5, 0.5)],
)
def test_chip_drop_chance(count, expected):
    table = DropTable(rng=np.random.default_rng(0))
    assert table.chip_drop_chance(hearts(count)) == pytest.approx(expected)


def test_roll_chips_guaranteed():
    table = DropTable(GameConfig(base_chip_drop_chance=1.0), np.random.default_rng(0))
    assert table.roll_chips(EffectState()) == 10


def test_chip_bag_capacity_and_heal():
    bag = ChipBag()
    assert bag.chips == 100
    assert bag.capacity(hearts(2)) == pytest.approx(120)

    bag.take_damage(30)
    bag.heal(20, EffectState())
    assert bag.chips == 90
    assert bag.surplus == 0

    bag.heal(30, EffectState())
    assert bag.chips == 100
    assert bag.surplus == pytest.approx(10)


def test_chip_bag_empties():
    bag = ChipBag()
    bag.take_damage(150)
    assert bag.chips == 0
    assert bag.is_empty
