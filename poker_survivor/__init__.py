from gymnasium.envs.registration import register

from .cards import Card, Rank, Suit
from .engine import EffectsEngine, EffectsResult, EffectsSnapshot
from .hands import PokerHand, best_hand, evaluate
from .ledger import CardLedger
from .weapons import WEAPONS, Weapon, WeaponSystem

register(
    id="PokerSurvivor/CardPickup-v0",
    entry_point="poker_survivor.env:CardPickupEnv",
)

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "CardLedger",
    "PokerHand",
    "best_hand",
    "evaluate",
    "Weapon",
    "WEAPONS",
    "WeaponSystem",
    "EffectsEngine",
    "EffectsResult",
    "EffectsSnapshot",
]
