"""Card-level primitives shared across the game core.

Goals
-----
* **Single source of truth** – every subsystem (ledger, evaluator, effects, drops) uses this `Card`.
* **Low memory footprint** – `@dataclass(slots=True, frozen=True)` avoids per‑instance `__dict__`.
* **Interoperable with NumPy** – `IntEnum` values are integers so cards one-hot encode without casting.

Ranks keep the in-game numbering (Ace = 1 … King = 13). Use `Card.value` when
comparing ranks: it lifts the Ace to 14.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, unique
from typing import Any, Dict, Final

import numpy as np


@unique
class Suit(IntEnum):
    """Card suit (♠ ♥ ♦ ♣); each suit also names a passive-effect channel."""

    SPADE: int = 0
    HEART: int = 1
    DIAMOND: int = 2
    CLUB: int = 3

    def symbol(self) -> str:  # → "♠" / "♥" / "♦" / "♣"
        return "♠♥♦♣"[self]


@unique
class Rank(IntEnum):
    """Card rank in game numbering: ACE is 1, KING is 13."""

    ACE: int = 1
    TWO: int = 2
    THREE: int = 3
    FOUR: int = 4
    FIVE: int = 5
    SIX: int = 6
    SEVEN: int = 7
    EIGHT: int = 8
    NINE: int = 9
    TEN: int = 10
    JACK: int = 11
    QUEEN: int = 12
    KING: int = 13

    @property
    def short(self) -> str:  # → "A" … "K"
        lookup: Final = {
            Rank.ACE: "A",
            Rank.TEN: "T",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }
        return lookup.get(self, str(self.value))

    @property
    def high_value(self) -> int:
        """Ordering value with the Ace played high (14)."""
        return 14 if self is Rank.ACE else int(self)


NUM_SUITS: Final = len(Suit)
NUM_RANKS: Final = len(Rank)
DECK_SIZE: Final = NUM_SUITS * NUM_RANKS


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card picked up from a defeated enemy."""

    suit: Suit
    rank: int

    @property
    def value(self) -> int:
        """Rank value used for hand ordering (Ace high = 14)."""
        return 14 if self.rank == 1 else int(self.rank)

    def __str__(self) -> str:
        try:
            label = Rank(self.rank).short
        except ValueError:
            label = str(self.rank)
        return f"{label}{Suit(self.suit).symbol()}"

    def __int__(self) -> int:  # unique 0–51 mapping → suit * 13 + (rank‑1)
        return int(self.suit) * NUM_RANKS + (int(self.rank) - 1)


def card_from_index(index: int) -> Card:
    """Inverse of ``int(card)``."""
    suit, rank_offset = divmod(int(index), NUM_RANKS)
    return Card(Suit(suit), rank_offset + 1)


def card_to_dict(card: Card) -> Dict[str, Any]:
    """Convert a Card to a JSON-serializable dict."""
    return {"suit": Suit(card.suit).name.lower(), "rank": int(card.rank)}


def card_from_dict(data: Dict[str, Any]) -> Card:
    """Convert a dict back into a Card.

    This is the boundary where outside data (saves, replays) enters the game,
    so it validates: unknown suits and ranks outside 1–13 raise ``ValueError``.
    """
    try:
        suit = Suit[str(data["suit"]).upper()]
    except KeyError:
        raise ValueError(f"Unknown suit: {data.get('suit')!r}") from None
    rank = int(data["rank"])
    if not 1 <= rank <= NUM_RANKS:
        raise ValueError(f"Card rank must be between 1 and 13, got {rank}")
    return Card(suit, rank)


def random_card(rng: np.random.Generator) -> Card:
    """Uniformly random suit and rank, drawn with replacement."""
    suit = Suit(int(rng.integers(NUM_SUITS)))
    rank = int(rng.integers(1, NUM_RANKS + 1))
    return Card(suit, rank)


__all__ = [
    "Suit",
    "Rank",
    "Card",
    "NUM_SUITS",
    "NUM_RANKS",
    "DECK_SIZE",
    "card_from_index",
    "card_to_dict",
    "card_from_dict",
    "random_card",
]
