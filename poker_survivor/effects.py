"""poker_survivor/effects.py - Suit tally and passive effect tiers

Each suit is a passive-effect channel. The number of cards of that suit in the
ledger unlocks cumulative tiers: at count 3 the count-1, count-2 and count-3
bonuses are all active. The fifth card of a suit opens a time-boxed
"ultimate" window, stored as an absolute deadline.

`resolve()` always rebuilds the state from zero. Tiers are not monotone in
aggregate (heart's fifth card overrides the first card's drop multiplier), so
the state is never patched in place.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Dict, List, Mapping, Sequence, Union

from .cards import Card, Suit

# ---------------------------------------------------------------------------
# Tier values
# ---------------------------------------------------------------------------
SPADE_PENETRATION_DAMAGE = 1        # ≥1
SPADE_DAMAGE_INCREASE = 0.5         # ≥2
SPADE_CRITICAL_CHANCE = 0.3         # ≥3
SPADE_ULTIMATE_SECONDS = 10.0       # ≥5

HEART_CHIP_DROP_MULTIPLIER = 2      # ≥1
HEART_BAG_SIZE_INCREASE = 0.2       # ≥2
HEART_ALLY_CONVERSION_CHANCE = 0.05 # ≥3
HEART_MAX_CHIP_DROP_MULTIPLIER = 5  # ≥5, replaces the ≥1 value
HEART_GUARANTEED_DROP_CHANCE = 0.5  # ≥5

DIAMOND_SLOW_AMOUNT = 0.3           # ≥1
DIAMOND_STUN_DURATION_MS = 1000     # ≥2
DIAMOND_DAMAGE_AMPLIFY = 0.3        # ≥4
DIAMOND_ULTIMATE_SECONDS = 5.0      # ≥5

CLUB_RICOCHET_CHANCE = 0.3          # ≥1
CLUB_BOUNCE_COUNT = 5               # ≥3
CLUB_EXPLOSION_SIZE = 2             # ≥4
CLUB_ULTIMATE_SECONDS = 15.0        # ≥5

ULTIMATE_THRESHOLD = 5


# ---------------------------------------------------------------------------
# Per-suit records
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SpadeEffect:
    count: int = 0
    penetration_damage: int = 0     # flat bonus for piercing shots
    damage_increase: float = 0.0
    critical_chance: float = 0.0
    aoe_enabled: bool = False
    ultimate_end_time: float = 0.0


@dataclass(frozen=True)
class HeartEffect:
    count: int = 0
    chip_drop_multiplier: int = 1
    bag_size_increase: float = 0.0
    ally_conversion_enabled: bool = False
    ally_conversion_chance: float = 0.0
    guaranteed_drop_chance: float = 0.0
    ultimate_end_time: float = 0.0  # hearts have no ultimate; always 0


@dataclass(frozen=True)
class DiamondEffect:
    count: int = 0
    slow_amount: float = 0.0
    stun_duration_ms: int = 0
    aoe_slow_enabled: bool = False
    damage_amplify: float = 0.0
    ultimate_end_time: float = 0.0


@dataclass(frozen=True)
class ClubEffect:
    count: int = 0
    ricochet_chance: float = 0.0
    explosion_enabled: bool = False
    bounce_count: int = 0
    explosion_size: int = 1
    ultimate_end_time: float = 0.0


SuitEffect = Union[SpadeEffect, HeartEffect, DiamondEffect, ClubEffect]


@dataclass(frozen=True)
class EffectState:
    """Immutable snapshot of every suit's active effects."""

    spade: SpadeEffect = field(default_factory=SpadeEffect)
    heart: HeartEffect = field(default_factory=HeartEffect)
    diamond: DiamondEffect = field(default_factory=DiamondEffect)
    club: ClubEffect = field(default_factory=ClubEffect)

    def __getitem__(self, suit: Suit) -> SuitEffect:
        return getattr(self, Suit(suit).name.lower())

    @property
    def counts(self) -> Dict[Suit, int]:
        return {suit: self[suit].count for suit in Suit}

    def ultimate_active(self, suit: Suit, now: float) -> bool:
        """A nonzero deadline in the future means the ultimate is running."""
        end = self[suit].ultimate_end_time
        return end > 0 and now < end

    def ultimate_remaining(self, suit: Suit, now: float) -> float:
        if not self.ultimate_active(suit, now):
            return 0.0
        return self[suit].ultimate_end_time - now

    def to_dict(self) -> Dict[str, Dict]:
        return {suit.name.lower(): asdict(self[suit]) for suit in Suit}


# ---------------------------------------------------------------------------
# Tally + resolver
# ---------------------------------------------------------------------------
def tally_suits(cards: Sequence[Card]) -> Dict[Suit, int]:
    """Per-suit counts; every suit is present and counts sum to len(cards)."""
    counts = {suit: 0 for suit in Suit}
    for card in cards:
        counts[Suit(card.suit)] += 1
    return counts


def _spade(count: int, now: float) -> SpadeEffect:
    effect = SpadeEffect(count=count)
    if count >= 1:
        effect = replace(effect, penetration_damage=SPADE_PENETRATION_DAMAGE)
    if count >= 2:
        effect = replace(effect, damage_increase=SPADE_DAMAGE_INCREASE)
    if count >= 3:
        effect = replace(effect, critical_chance=SPADE_CRITICAL_CHANCE)
    if count >= 4:
        effect = replace(effect, aoe_enabled=True)
    if count >= ULTIMATE_THRESHOLD:
        effect = replace(effect, ultimate_end_time=now + SPADE_ULTIMATE_SECONDS)
    return effect


def _heart(count: int, now: float) -> HeartEffect:
    effect = HeartEffect(count=count)
    if count >= 1:
        effect = replace(effect, chip_drop_multiplier=HEART_CHIP_DROP_MULTIPLIER)
    if count >= 2:
        effect = replace(effect, bag_size_increase=HEART_BAG_SIZE_INCREASE)
    if count >= 3:
        effect = replace(
            effect,
            ally_conversion_enabled=True,
            ally_conversion_chance=HEART_ALLY_CONVERSION_CHANCE,
        )
    if count >= ULTIMATE_THRESHOLD:
        effect = replace(
            effect,
            chip_drop_multiplier=HEART_MAX_CHIP_DROP_MULTIPLIER,
            guaranteed_drop_chance=HEART_GUARANTEED_DROP_CHANCE,
        )
    return effect


def _diamond(count: int, now: float) -> DiamondEffect:
    effect = DiamondEffect(count=count)
    if count >= 1:
        effect = replace(effect, slow_amount=DIAMOND_SLOW_AMOUNT)
    if count >= 2:
        effect = replace(effect, stun_duration_ms=DIAMOND_STUN_DURATION_MS)
    if count >= 3:
        effect = replace(effect, aoe_slow_enabled=True)
    if count >= 4:
        effect = replace(effect, damage_amplify=DIAMOND_DAMAGE_AMPLIFY)
    if count >= ULTIMATE_THRESHOLD:
        effect = replace(effect, ultimate_end_time=now + DIAMOND_ULTIMATE_SECONDS)
    return effect


def _club(count: int, now: float) -> ClubEffect:
    effect = ClubEffect(count=count)
    if count >= 1:
        effect = replace(effect, ricochet_chance=CLUB_RICOCHET_CHANCE)
    if count >= 2:
        effect = replace(effect, explosion_enabled=True)
    if count >= 3:
        effect = replace(effect, bounce_count=CLUB_BOUNCE_COUNT)
    if count >= 4:
        effect = replace(effect, explosion_size=CLUB_EXPLOSION_SIZE)
    if count >= ULTIMATE_THRESHOLD:
        effect = replace(effect, ultimate_end_time=now + CLUB_ULTIMATE_SECONDS)
    return effect


def resolve(counts: Mapping[Suit, int], now: float) -> EffectState:
    """Build the effect state for ``counts`` from scratch.

    Args:
        counts: suit → number of held cards; missing suits count as 0.
        now:    caller's clock reading (seconds), used for ultimate deadlines.
    """
    return EffectState(
        spade=_spade(counts.get(Suit.SPADE, 0), now),
        heart=_heart(counts.get(Suit.HEART, 0), now),
        diamond=_diamond(counts.get(Suit.DIAMOND, 0), now),
        club=_club(counts.get(Suit.CLUB, 0), now),
    )


# ---------------------------------------------------------------------------
# HUD text
# ---------------------------------------------------------------------------
def describe_effects(state: EffectState, now: float) -> List[str]:
    """One line per suit with cards, listing its active bonuses."""
    lines: List[str] = []

    spade = state.spade
    if spade.count:
        parts = [f"penetration +{spade.penetration_damage}"]
        if spade.damage_increase:
            parts.append(f"damage +{spade.damage_increase:.0%}")
        if spade.critical_chance:
            parts.append(f"crit {spade.critical_chance:.0%}")
        if spade.aoe_enabled:
            parts.append("area damage")
        lines.append(f"{Suit.SPADE.symbol()} x{spade.count}: " + ", ".join(parts))

    heart = state.heart
    if heart.count:
        parts = [f"chip drops x{heart.chip_drop_multiplier}"]
        if heart.bag_size_increase:
            parts.append(f"chip bag +{heart.bag_size_increase:.0%}")
        if heart.ally_conversion_enabled:
            parts.append(f"ally conversion {heart.ally_conversion_chance:.0%}")
        if heart.guaranteed_drop_chance:
            parts.append(f"guaranteed drop {heart.guaranteed_drop_chance:.0%}")
        lines.append(f"{Suit.HEART.symbol()} x{heart.count}: " + ", ".join(parts))

    diamond = state.diamond
    if diamond.count:
        parts = [f"slow {diamond.slow_amount:.0%}"]
        if diamond.stun_duration_ms:
            parts.append(f"stun {diamond.stun_duration_ms / 1000:g}s")
        if diamond.aoe_slow_enabled:
            parts.append("area slow")
        if diamond.damage_amplify:
            parts.append(f"damage amplify +{diamond.damage_amplify:.0%}")
        lines.append(f"{Suit.DIAMOND.symbol()} x{diamond.count}: " + ", ".join(parts))

    club = state.club
    if club.count:
        parts = [f"ricochet {club.ricochet_chance:.0%}"]
        if club.explosion_enabled:
            parts.append("explosion on kill")
        if club.bounce_count:
            parts.append(f"bounces +{club.bounce_count}")
        if club.explosion_size > 1:
            parts.append(f"explosion radius x{club.explosion_size}")
        lines.append(f"{Suit.CLUB.symbol()} x{club.count}: " + ", ".join(parts))

    for suit in Suit:
        remaining = state.ultimate_remaining(suit, now)
        if remaining > 0:
            lines.append(f"{suit.symbol()} ultimate: {remaining:.1f}s left")

    return lines


__all__ = [
    "SpadeEffect",
    "HeartEffect",
    "DiamondEffect",
    "ClubEffect",
    "EffectState",
    "tally_suits",
    "resolve",
    "describe_effects",
]
