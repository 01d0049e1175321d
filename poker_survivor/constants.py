"""Centralised enumerations for the pickup environment
===================================================

Import these instead of raw integers:

```python
from poker_survivor.constants import Action

if Action(action) is Action.COLLECT:
    engine.collect_card(offer)
```
"""

from __future__ import annotations

from enum import IntEnum, unique

from .hands import PokerHand


@unique
class Action(IntEnum):
    """Flat action space: what to do with the card on offer."""
    SKIP: int = 0
    COLLECT: int = 1


NUM_ACTIONS: int = len(Action)

# Weapons whose shots pierce (laser family)
PIERCING_HANDS = frozenset(
    {PokerHand.STRAIGHT, PokerHand.STRAIGHT_FLUSH, PokerHand.ROYAL_STRAIGHT_FLUSH}
)
