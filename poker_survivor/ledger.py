"""Collected-card ledger: the player's last five cards, oldest first."""

from __future__ import annotations

import logging
from typing import Iterator, List

from .cards import Card

logger = logging.getLogger(__name__)

LEDGER_CAPACITY = 5


class CardLedger:
    """Bounded FIFO of collected cards.

    Appending past capacity evicts index 0 (the oldest card). The ledger does
    not validate cards; callers hand it whatever was picked up.
    """

    def __init__(self, capacity: int = LEDGER_CAPACITY):
        self.capacity = capacity
        self._cards: List[Card] = []

    def append(self, card: Card) -> bool:
        """Add ``card``; returns True when the oldest card was evicted."""
        self._cards.append(card)
        if len(self._cards) > self.capacity:
            evicted = self._cards.pop(0)
            logger.debug("Ledger full, evicted %s for %s", evicted, card)
            return True
        return False

    def get_all(self) -> List[Card]:
        """Copy of the held cards in insertion order."""
        return list(self._cards)

    def clear(self) -> None:
        self._cards.clear()

    @property
    def is_full(self) -> bool:
        return len(self._cards) >= self.capacity

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards))

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self._cards)
