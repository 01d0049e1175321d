"""Card and chip drops, and the chip bag that doubles as player health."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .cards import Card, random_card
from .config import DEFAULT_CONFIG, GameConfig
from .effects import EffectState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DroppedCard:
    """A card lying on the ground where an enemy died."""

    card: Card
    x: float
    y: float
    created_at: float

    def expired(self, now: float, lifetime: float) -> bool:
        return now - self.created_at > lifetime


class DropTable:
    def __init__(self, config: GameConfig = DEFAULT_CONFIG, rng: Optional[np.random.Generator] = None):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng()

    def roll_card(self, x: float, y: float, now: float) -> Optional[DroppedCard]:
        """Enemy death roll: a random card with ``card_drop_chance``."""
        if self.rng.random() >= self.config.card_drop_chance:
            return None
        drop = DroppedCard(random_card(self.rng), x, y, now)
        logger.debug("Card dropped: %s at (%.0f, %.0f)", drop.card, x, y)
        return drop

    def chip_drop_chance(self, effects: EffectState) -> float:
        heart = effects.heart
        boosted = min(self.config.base_chip_drop_chance * heart.chip_drop_multiplier, 1.0)
        return max(boosted, heart.guaranteed_drop_chance)

    def roll_chips(self, effects: EffectState) -> int:
        """Chips dropped by one kill (0 when the roll fails)."""
        if self.rng.random() < self.chip_drop_chance(effects):
            return self.config.chips_per_drop
        return 0


class ChipBag:
    """Chips are health: damage drains them, pickups refill up to capacity.

    Overflow beyond capacity is not lost entirely; ``surplus_ratio`` of it is
    banked as surplus chips.
    """

    def __init__(self, config: GameConfig = DEFAULT_CONFIG):
        self.config = config
        self.base_size = config.chip_bag_size
        self.chips: float = float(config.chip_bag_size)
        self.surplus: float = 0.0

    def capacity(self, effects: EffectState) -> float:
        return self.base_size * (1 + effects.heart.bag_size_increase)

    def heal(self, amount: float, effects: EffectState) -> None:
        cap = self.capacity(effects)
        missing = max(cap - self.chips, 0.0)
        if amount <= missing:
            self.chips += amount
            return
        self.chips = max(self.chips, cap)
        self.surplus += (amount - missing) * self.config.surplus_ratio

    def take_damage(self, amount: float) -> None:
        self.chips = max(0.0, self.chips - amount)

    @property
    def is_empty(self) -> bool:
        return self.chips <= 0
