import numpy as np
import pytest

from poker_survivor.cards import Card, Suit
from poker_survivor.hands import PokerHand
from poker_survivor.showdown import BossShowdown, Side

S, H, D, C = Suit.SPADE, Suit.HEART, Suit.DIAMOND, Suit.CLUB


@pytest.fixture
def showdown():
    return BossShowdown(rng=np.random.default_rng(11))


def test_deal_pads_player_cards(showdown):
    showdown.deal([Card(S, 1)])
    assert showdown.player_cards[0] == Card(S, 1)
    assert len(showdown.player_cards) == 2
    assert len(showdown.boss_cards) == 2
    assert len(showdown.community_cards) == 3


def test_deal_uses_first_available_cards(showdown):
    held = [Card(H, 2), Card(H, 3), Card(H, 4)]
    showdown.deal(held)
    assert showdown.player_cards == held[:2]


def test_higher_hand_wins(showdown):
    showdown.community_cards = [Card(S, 2), Card(H, 7), Card(D, 11)]
    showdown.player_cards = [Card(C, 7), Card(S, 7)]
    showdown.boss_cards = [Card(C, 11), Card(S, 3)]
    assert showdown.player_hand().hand is PokerHand.THREE_KIND
    assert showdown.boss_hand().hand is PokerHand.ONE_PAIR
    assert showdown.determine_winner() is Side.PLAYER

    showdown.boss_cards = [Card(C, 11), Card(H, 11)]
    assert showdown.determine_winner() is Side.BOSS


def test_tie_goes_to_player(showdown):
    showdown.community_cards = [Card(S, 9), Card(H, 9), Card(D, 4)]
    showdown.player_cards = [Card(C, 2), Card(S, 3)]
    showdown.boss_cards = [Card(C, 3), Card(H, 2)]
    assert showdown.player_hand().key() == showdown.boss_hand().key()
    assert showdown.determine_winner() is Side.PLAYER


def test_fold_penalties(showdown):
    assert showdown.fold(Side.PLAYER, 100, 200) == pytest.approx({"player_damage": 30.0, "boss_damage": 0.0})
    assert showdown.fold("boss", 100, 200) == pytest.approx({"player_damage": 0.0, "boss_damage": 40.0})


def test_raise_bet(showdown):
    bets = showdown.raise_bet(30, player_hp=100, boss_hp=300)
    assert bets["player_bet"] == pytest.approx(30)
    assert bets["boss_bet"] == pytest.approx(60)


def test_place_bet(showdown):
    showdown.place_bet(Side.PLAYER, 10)
    assert showdown.place_bet("player", 5) == 15
    with pytest.raises(ValueError):
        showdown.place_bet("dealer", 5)


def test_save_result(showdown):
    showdown.deal()
    showdown.place_bet(Side.BOSS, 20)
    result = showdown.save_result()
    assert result.winner is showdown.determine_winner()
    assert result.pot[Side.BOSS] == 20
    assert result.player_cards == showdown.player_cards
    showdown.reset()
    assert showdown.player_cards == []
    assert showdown.result is None
