"""Weapon catalog keyed by poker hand, plus the equipped-weapon holder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .effects import EffectState
from .hands import PokerHand

# Damage multipliers from held spades, compounding
SPADE_DAMAGE_TIERS = ((1, 1.25), (2, 1.15))


@dataclass(frozen=True)
class Weapon:
    name: str
    damage: int
    description: str


WEAPONS: Dict[PokerHand, Weapon] = {
    PokerHand.HIGH_CARD: Weapon("Revolver", 10, "Basic single shot"),
    PokerHand.ONE_PAIR: Weapon("Dual Revolver", 20, "Two pistols, two shots"),
    PokerHand.TWO_PAIR: Weapon("Double Dual Revolver", 30, "Two pistols, four shots"),
    PokerHand.THREE_KIND: Weapon("Triple Shotgun", 40, "Three-way spread"),
    PokerHand.STRAIGHT: Weapon("Laser Railgun", 50, "Piercing laser"),
    PokerHand.FLUSH: Weapon("Plasma Cannon", 70, "Heavy plasma orb"),
    PokerHand.FULL_HOUSE: Weapon("Shotgun+Pistol Combo", 60, "Spread plus an aimed shot"),
    PokerHand.FOUR_KIND: Weapon("Quad Rocket Launcher", 80, "Four rockets in a row"),
    PokerHand.STRAIGHT_FLUSH: Weapon("Laser Gatling Gun", 90, "Rapid laser fire"),
    PokerHand.ROYAL_STRAIGHT_FLUSH: Weapon("Orbital Laser Strike", 100, "Lasers in every direction"),
}

BASE_WEAPON: Weapon = WEAPONS[PokerHand.HIGH_CARD]


class WeaponSystem:
    """Holds the equipped weapon; swaps only when the resolved weapon differs."""

    def __init__(self, weapon: Optional[Weapon] = None):
        self.current_weapon: Weapon = weapon or BASE_WEAPON

    def update_weapon(self, hand: PokerHand) -> bool:
        """Equip the catalog weapon for ``hand``; True if it changed."""
        new_weapon = WEAPONS.get(hand)
        if new_weapon is not None and new_weapon.name != self.current_weapon.name:
            self.current_weapon = new_weapon
            return True
        return False

    def get_current_weapon(self) -> Weapon:
        return self.current_weapon

    def calculate_damage(self, effects: EffectState) -> float:
        """Base damage of the equipped weapon with spade multipliers applied."""
        damage = float(self.current_weapon.damage)
        for threshold, factor in SPADE_DAMAGE_TIERS:
            if effects.spade.count >= threshold:
                damage *= factor
        return damage

    def reset(self) -> None:
        self.current_weapon = BASE_WEAPON
