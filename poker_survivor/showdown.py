"""Boss poker showdown.

Between waves the boss challenges the player to a single hand: two hole cards
each plus three shared community cards, compared with `hands.evaluate()`.
Folding or raising is paid in health (chips) rather than money.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

import numpy as np

from .cards import Card, random_card
from .config import DEFAULT_CONFIG, GameConfig
from .hands import HandRank, compare_hands, evaluate

logger = logging.getLogger(__name__)


class Side(str, Enum):
    PLAYER = "player"
    BOSS = "boss"


@dataclass(frozen=True)
class ShowdownResult:
    community_cards: List[Card]
    player_cards: List[Card]
    boss_cards: List[Card]
    player_hand: HandRank
    boss_hand: HandRank
    winner: Side
    pot: Dict[Side, float] = field(default_factory=dict)


class BossShowdown:
    def __init__(self, config: GameConfig = DEFAULT_CONFIG, rng: Optional[np.random.Generator] = None):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng()
        self.reset()

    def reset(self) -> None:
        self.community_cards: List[Card] = []
        self.player_cards: List[Card] = []
        self.boss_cards: List[Card] = []
        self.pot: Dict[Side, float] = {Side.PLAYER: 0.0, Side.BOSS: 0.0}
        self.result: Optional[ShowdownResult] = None

    # ---------------- dealing ----------------
    def random_cards(self, count: int) -> List[Card]:
        return [random_card(self.rng) for _ in range(count)]

    def select_player_cards(self, available: Sequence[Card]) -> List[Card]:
        """First hole cards from ``available``, padded with random cards."""
        count = self.config.hole_card_count
        chosen = list(available[:count])
        return chosen + self.random_cards(count - len(chosen))

    def deal(self, available: Sequence[Card] = ()) -> None:
        self.player_cards = self.select_player_cards(available)
        self.community_cards = self.random_cards(self.config.community_card_count)
        self.boss_cards = self.random_cards(self.config.hole_card_count)
        logger.debug(
            "Showdown dealt: player=%s boss=%s community=%s",
            " ".join(map(str, self.player_cards)),
            " ".join(map(str, self.boss_cards)),
            " ".join(map(str, self.community_cards)),
        )

    # ---------------- betting ----------------
    def place_bet(self, side, amount: float) -> float:
        side = Side(side)
        self.pot[side] += amount
        return self.pot[side]

    def fold(self, side, player_hp: float, boss_hp: float) -> Dict[str, float]:
        """Health lost by each side when ``side`` folds."""
        if Side(side) is Side.PLAYER:
            return {"player_damage": player_hp * self.config.player_fold_penalty, "boss_damage": 0.0}
        return {"player_damage": 0.0, "boss_damage": boss_hp * self.config.boss_fold_penalty}

    def raise_bet(self, amount: float, player_hp: float, boss_hp: float) -> Dict[str, float]:
        """Raise of ``amount`` percent; the boss matches at a fixed ratio."""
        boss_raise = amount * self.config.boss_raise_ratio
        return {
            "player_bet": player_hp * (amount / 100),
            "boss_bet": boss_hp * (boss_raise / 100),
        }

    # ---------------- resolution ----------------
    def player_hand(self) -> HandRank:
        return evaluate(self.player_cards + self.community_cards)

    def boss_hand(self) -> HandRank:
        return evaluate(self.boss_cards + self.community_cards)

    def determine_winner(self) -> Side:
        """Higher rank wins, then higher value; an exact tie goes to the player."""
        if compare_hands(self.player_hand(), self.boss_hand()) >= 0:
            return Side.PLAYER
        return Side.BOSS

    def save_result(self) -> ShowdownResult:
        self.result = ShowdownResult(
            community_cards=list(self.community_cards),
            player_cards=list(self.player_cards),
            boss_cards=list(self.boss_cards),
            player_hand=self.player_hand(),
            boss_hand=self.boss_hand(),
            winner=self.determine_winner(),
            pot=dict(self.pot),
        )
        logger.info(
            "Showdown won by %s (%s vs %s)",
            self.result.winner.value,
            self.result.player_hand.label,
            self.result.boss_hand.label,
        )
        return self.result
