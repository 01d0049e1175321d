"""poker_survivor/engine.py – card effects → weapon resolution.

`EffectsEngine` is the one object the rest of the game talks to:

* every change to the collected cards goes through `apply_card_effects()`
  (or the `collect_card()` / `clear_cards()` helpers that own the ledger);
* combat, drops and the HUD read `get_effects()`, an immutable snapshot that
  can be passed around (or to another thread) freely.

Pipeline per recomputation
--------------------------
1. tally suits
2. resolve the tier effects from zero
3. classify the best hand with the prioritized predicates
4. look the weapon up in the catalog, swap it only if the name differs

The engine holds no locks and expects a single owner to serialize calls.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .cards import Card
from .effects import EffectState, resolve, tally_suits
from .hands import PokerHand, best_hand
from .ledger import CardLedger
from .weapons import Weapon, WeaponSystem

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class EffectsResult:
    """Outcome of one recomputation."""

    effects: EffectState
    weapon_changed: bool
    current_weapon: Weapon
    hand: PokerHand


@dataclass(frozen=True)
class EffectsSnapshot:
    """Read-only view handed to combat / drops / UI."""

    effects: EffectState
    current_weapon: Weapon


class EffectsEngine:
    """Owns the effect state, the equipped weapon and (optionally) the ledger."""

    def __init__(
        self,
        clock: Clock = time.time,
        weapon_system: Optional[WeaponSystem] = None,
        ledger: Optional[CardLedger] = None,
    ):
        self.clock = clock
        self.weapon_system = weapon_system or WeaponSystem()
        self.ledger = ledger or CardLedger()
        self.effects = EffectState()
        self.hand = PokerHand.HIGH_CARD

    # ---------------- recomputation ----------------
    def apply_card_effects(self, cards: Sequence[Card]) -> EffectsResult:
        """Recompute effects and weapon for ``cards``; total over any input."""
        cards = list(cards)
        counts = tally_suits(cards)
        self.effects = resolve(counts, self.clock())
        self.hand = best_hand(cards)
        weapon_changed = self.weapon_system.update_weapon(self.hand)

        logger.debug(
            "Applied %d cards: counts=%s hand=%s",
            len(cards),
            {s.name.lower(): n for s, n in counts.items()},
            self.hand.label,
        )
        if weapon_changed:
            logger.info(
                "Weapon changed to %s (%s)",
                self.weapon_system.current_weapon.name,
                self.hand.label,
            )

        return EffectsResult(
            effects=self.effects,
            weapon_changed=weapon_changed,
            current_weapon=self.weapon_system.current_weapon,
            hand=self.hand,
        )

    # ---------------- ledger helpers ----------------
    def collect_card(self, card: Card) -> EffectsResult:
        """Append to the ledger (FIFO beyond five) and recompute."""
        self.ledger.append(card)
        return self.apply_card_effects(self.ledger.get_all())

    def clear_cards(self) -> EffectsResult:
        """Round transition: drop every card, back to the base weapon."""
        self.ledger.clear()
        return self.apply_card_effects([])

    def reset_effects(self) -> None:
        """Zero the effect state and hand; the equipped weapon is left alone."""
        self.effects = EffectState()
        self.hand = PokerHand.HIGH_CARD

    # ---------------- queries ----------------
    def get_effects(self) -> EffectsSnapshot:
        return EffectsSnapshot(
            effects=self.effects,
            current_weapon=self.weapon_system.current_weapon,
        )

    @property
    def current_weapon(self) -> Weapon:
        return self.weapon_system.current_weapon

    def calculate_damage(self) -> float:
        return self.weapon_system.calculate_damage(self.effects)
