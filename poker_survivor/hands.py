"""poker_survivor/hands.py

Poker hand classification over the collected cards.

The evaluator looks at *all* supplied cards at once (the ledger holds at most
five), there is no best-five-of-N search. Hands are decided by independent
predicates checked in priority order, royal straight flush first:

    royal → straight flush → four of a kind → full house → flush → straight
          → three of a kind → two pair → one pair → high card

`best_hand()` returns the `PokerHand` used for weapon selection. `evaluate()`
reports the standard 0–8 rank plus a tiebreak value and is built on top of
`best_hand()`, so both views always agree. The royal tier folds into rank 8
there; it only exists separately because the weapon catalog has its own entry
for it.

PokerHand indices must match the weapon catalog keys.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional, Sequence

from .cards import Card

ACE_HIGH = 14
WHEEL_VALUES = frozenset((ACE_HIGH, 2, 3, 4, 5))
WHEEL_HIGH = 5
ROYAL_VALUES = frozenset(range(10, ACE_HIGH + 1))

# ---------------------------------------------------------------------------
# PokerHand enumeration (keep in sync with weapons.WEAPONS)
# ---------------------------------------------------------------------------
class PokerHand(IntEnum):
    HIGH_CARD            = 0
    ONE_PAIR             = 1
    TWO_PAIR             = 2
    THREE_KIND           = 3
    STRAIGHT             = 4
    FLUSH                = 5
    FULL_HOUSE           = 6
    FOUR_KIND            = 7
    STRAIGHT_FLUSH       = 8
    ROYAL_STRAIGHT_FLUSH = 9

    @property
    def label(self) -> str:
        return HAND_LABELS[self]

    @property
    def rank(self) -> int:
        """Standard 0–8 poker rank; royal shares the straight-flush rank."""
        return min(int(self), int(PokerHand.STRAIGHT_FLUSH))


NUM_HANDS: int = len(PokerHand)

HAND_LABELS: Dict[PokerHand, str] = {
    PokerHand.HIGH_CARD: "High Card",
    PokerHand.ONE_PAIR: "One Pair",
    PokerHand.TWO_PAIR: "Two Pair",
    PokerHand.THREE_KIND: "Three of a Kind",
    PokerHand.STRAIGHT: "Straight",
    PokerHand.FLUSH: "Flush",
    PokerHand.FULL_HOUSE: "Full House",
    PokerHand.FOUR_KIND: "Four of a Kind",
    PokerHand.STRAIGHT_FLUSH: "Straight Flush",
    PokerHand.ROYAL_STRAIGHT_FLUSH: "Royal Straight Flush",
}


@dataclass(frozen=True)
class HandRank:
    """Result of `evaluate()`: rank 0–8, label and tiebreak value."""

    rank: int
    label: str
    value: int
    hand: PokerHand

    def key(self) -> tuple:
        return (self.rank, self.value)


# ---------------------------------------------------------------------------
# Counting helpers
# ---------------------------------------------------------------------------
def _value_counts(cards: Sequence[Card]) -> Counter:
    return Counter(c.value for c in cards)


def _suit_counts(cards: Sequence[Card]) -> Counter:
    return Counter(c.suit for c in cards)


def _straight_high(cards: Sequence[Card]) -> Optional[int]:
    """Top value of the highest five-card run, 5 for the wheel, else None."""
    values = sorted({c.value for c in cards}, reverse=True)
    for i in range(len(values) - 4):
        if values[i] - values[i + 4] == 4:
            return values[i]
    if WHEEL_VALUES.issubset(values):
        return WHEEL_HIGH
    return None


def _values_with_count(cards: Sequence[Card], count: int) -> list:
    return sorted((v for v, n in _value_counts(cards).items() if n == count), reverse=True)


# ---------------------------------------------------------------------------
# Predicates (each independent, no priority assumptions)
# ---------------------------------------------------------------------------
def is_flush(cards: Sequence[Card]) -> bool:
    return any(n >= 5 for n in _suit_counts(cards).values())


def is_straight(cards: Sequence[Card]) -> bool:
    return _straight_high(cards) is not None


def is_royal_straight_flush(cards: Sequence[Card]) -> bool:
    """Some suit holds every value from Ten through Ace."""
    by_suit: Dict[int, set] = {}
    for c in cards:
        by_suit.setdefault(c.suit, set()).add(c.value)
    return any(ROYAL_VALUES.issubset(values) for values in by_suit.values())


def is_straight_flush(cards: Sequence[Card]) -> bool:
    return is_straight(cards) and is_flush(cards)


def is_four_of_a_kind(cards: Sequence[Card]) -> bool:
    return any(n >= 4 for n in _value_counts(cards).values())


def is_full_house(cards: Sequence[Card]) -> bool:
    counts = set(_value_counts(cards).values())
    return 3 in counts and 2 in counts


def is_three_of_a_kind(cards: Sequence[Card]) -> bool:
    return 3 in _value_counts(cards).values()


def is_two_pair(cards: Sequence[Card]) -> bool:
    # Exact count == 2 so the triple of a full house never reads as a pair.
    return len(_values_with_count(cards, 2)) >= 2


def is_one_pair(cards: Sequence[Card]) -> bool:
    return len(_values_with_count(cards, 2)) >= 1


_PRIORITY = (
    (PokerHand.ROYAL_STRAIGHT_FLUSH, is_royal_straight_flush),
    (PokerHand.STRAIGHT_FLUSH, is_straight_flush),
    (PokerHand.FOUR_KIND, is_four_of_a_kind),
    (PokerHand.FULL_HOUSE, is_full_house),
    (PokerHand.FLUSH, is_flush),
    (PokerHand.STRAIGHT, is_straight),
    (PokerHand.THREE_KIND, is_three_of_a_kind),
    (PokerHand.TWO_PAIR, is_two_pair),
    (PokerHand.ONE_PAIR, is_one_pair),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def best_hand(cards: Sequence[Card]) -> PokerHand:
    """Highest hand whose predicate holds; drives weapon selection."""
    cards = list(cards)
    for hand, predicate in _PRIORITY:
        if predicate(cards):
            return hand
    return PokerHand.HIGH_CARD


def evaluate(cards: Sequence[Card]) -> HandRank:
    """Classify ``cards`` and compute the tiebreak value.

    Tiebreaks: the top of the run for straights (5 for the wheel), the grouped
    value for quads/trips/full house, the higher pair for two pair, the
    highest card for flush and high card, 0 for an empty sequence.
    """
    cards = list(cards)
    hand = best_hand(cards)
    high = max((c.value for c in cards), default=0)

    if hand is PokerHand.ROYAL_STRAIGHT_FLUSH:
        value = ACE_HIGH
    elif hand in (PokerHand.STRAIGHT_FLUSH, PokerHand.STRAIGHT):
        value = _straight_high(cards)
    elif hand is PokerHand.FOUR_KIND:
        value = max(v for v, n in _value_counts(cards).items() if n >= 4)
    elif hand in (PokerHand.FULL_HOUSE, PokerHand.THREE_KIND):
        value = _values_with_count(cards, 3)[0]
    elif hand in (PokerHand.TWO_PAIR, PokerHand.ONE_PAIR):
        value = _values_with_count(cards, 2)[0]
    else:
        value = high

    return HandRank(rank=hand.rank, label=hand.label, value=value, hand=hand)


def compare_hands(a: HandRank, b: HandRank) -> int:
    """-1, 0 or 1 comparing rank first, then tiebreak value."""
    if a.key() == b.key():
        return 0
    return 1 if a.key() > b.key() else -1


__all__ = [
    "PokerHand",
    "NUM_HANDS",
    "HAND_LABELS",
    "HandRank",
    "is_royal_straight_flush",
    "is_straight_flush",
    "is_four_of_a_kind",
    "is_full_house",
    "is_flush",
    "is_straight",
    "is_three_of_a_kind",
    "is_two_pair",
    "is_one_pair",
    "best_hand",
    "evaluate",
    "compare_hands",
]
