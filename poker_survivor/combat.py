"""Headless hit resolution: how bullets consume the effect state.

Collision is circle-vs-circle only. Randomness comes from an injected
`numpy.random.Generator` so runs are reproducible under a seed.
"""

from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

import numpy as np

from .cards import Suit
from .config import DEFAULT_CONFIG, GameConfig
from .effects import EffectState
from .weapons import WeaponSystem

logger = logging.getLogger(__name__)

_enemy_ids = itertools.count(1)


@dataclass
class Enemy:
    x: float
    y: float
    hp: float
    speed: float = 1.0
    size: float = 30.0
    id: int = field(default_factory=lambda: next(_enemy_ids))
    stun_end_time: float = 0.0
    is_dead: bool = False
    is_ally: bool = False

    def is_stunned(self, now: float) -> bool:
        return now < self.stun_end_time

    @property
    def is_target(self) -> bool:
        return not self.is_dead and not self.is_ally


@dataclass
class Bullet:
    x: float
    y: float
    damage: float
    size: float = 10.0
    is_piercing: bool = False
    is_ricochet: bool = False
    bounce_count: int = 0
    target_id: Optional[int] = None     # ricochets are aimed at one enemy
    hit_ids: Set[int] = field(default_factory=set)

    @classmethod
    def from_weapon(
        cls,
        weapon_system: WeaponSystem,
        effects: EffectState,
        x: float,
        y: float,
        *,
        is_piercing: bool = False,
    ) -> "Bullet":
        return cls(x, y, weapon_system.calculate_damage(effects), is_piercing=is_piercing)


@dataclass
class HitResult:
    damage: float = 0.0
    critical: bool = False
    killed: List[Enemy] = field(default_factory=list)
    converted: List[Enemy] = field(default_factory=list)
    ricochets: List[Bullet] = field(default_factory=list)


def distance(a, b) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def circles_overlap(a, b) -> bool:
    return distance(a, b) < (a.size + b.size) / 2


class HitResolver:
    """Applies one bullet hit to one enemy, with every suit effect it triggers."""

    def __init__(self, config: GameConfig = DEFAULT_CONFIG, rng: Optional[np.random.Generator] = None):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng()

    def resolve_hit(
        self,
        bullet: Bullet,
        enemy: Enemy,
        enemies: Sequence[Enemy],
        effects: EffectState,
        now: float,
    ) -> HitResult:
        cfg = self.config
        result = HitResult()

        # 1. damage
        damage = bullet.damage
        if effects.spade.damage_increase:
            damage *= 1 + effects.spade.damage_increase
        crit_chance = effects.spade.critical_chance
        if effects.ultimate_active(Suit.SPADE, now):
            crit_chance = max(crit_chance, cfg.ultimate_crit_chance)
        if crit_chance > 0 and self.rng.random() < crit_chance:
            damage *= cfg.crit_multiplier
            result.critical = True
        if bullet.is_piercing and effects.spade.penetration_damage:
            damage += effects.spade.penetration_damage
        if effects.diamond.damage_amplify:
            damage *= 1 + effects.diamond.damage_amplify

        enemy.hp -= damage
        bullet.hit_ids.add(enemy.id)
        result.damage = damage

        # 2. crowd control
        if effects.diamond.slow_amount:
            enemy.speed *= 1 - effects.diamond.slow_amount
        if effects.diamond.stun_duration_ms:
            enemy.stun_end_time = now + effects.diamond.stun_duration_ms / 1000

        # 3. area damage around the struck enemy
        if effects.spade.aoe_enabled:
            self._splash(enemy, damage * cfg.spade_aoe_damage_scale, enemies, result)

        # 4. ricochet
        chance = effects.club.ricochet_chance
        if chance > 0 and self.rng.random() < chance:
            result.ricochets = self._ricochet(bullet, enemy, enemies, effects)

        # 5. kill
        if enemy.hp <= 0:
            self._on_kill(enemy, bullet.damage, enemies, effects, result)

        return result

    # ---------------- helpers ----------------
    def _ricochet(
        self,
        bullet: Bullet,
        source: Enemy,
        enemies: Sequence[Enemy],
        effects: EffectState,
    ) -> List[Bullet]:
        cfg = self.config
        max_bounces = effects.club.bounce_count + 1
        if bullet.bounce_count >= max_bounces:
            return []

        nearby = [
            e for e in enemies
            if e.is_target
            and e is not source
            and e.id not in bullet.hit_ids
            and distance(source, e) < cfg.ricochet_radius
        ]
        if not nearby:
            return []

        picks = self.rng.permutation(len(nearby))[: cfg.ricochet_max_targets]
        ricochets = []
        for idx in picks:
            target = nearby[int(idx)]
            ricochets.append(
                Bullet(
                    source.x,
                    source.y,
                    bullet.damage * cfg.ricochet_damage_scale,
                    size=bullet.size * 0.7,
                    is_ricochet=True,
                    bounce_count=bullet.bounce_count + 1,
                    target_id=target.id,
                    hit_ids=set(bullet.hit_ids),
                )
            )
        logger.debug("Ricochet from enemy %d to %d targets", source.id, len(ricochets))
        return ricochets

    def _splash(
        self,
        center: Enemy,
        damage: float,
        enemies: Sequence[Enemy],
        result: HitResult,
    ) -> None:
        radius = self.config.spade_aoe_radius
        for other in enemies:
            if other is center or not other.is_target:
                continue
            if distance(center, other) >= radius:
                continue
            other.hp -= damage
            if other.hp <= 0:
                other.is_dead = True
                result.killed.append(other)

    def _on_kill(
        self,
        enemy: Enemy,
        base_damage: float,
        enemies: Sequence[Enemy],
        effects: EffectState,
        result: HitResult,
    ) -> None:
        """Kill or convert ``enemy``; explosions scale off the bullet's base damage."""
        cfg = self.config
        heart = effects.heart
        if heart.ally_conversion_enabled and self.rng.random() < heart.ally_conversion_chance:
            enemy.is_ally = True
            enemy.hp = cfg.ally_hp
            result.converted.append(enemy)
        else:
            enemy.is_dead = True
            result.killed.append(enemy)

        if effects.club.explosion_enabled:
            radius = cfg.explosion_base_radius * effects.club.explosion_size
            self._explode(enemy, radius, base_damage * cfg.explosion_damage_scale, enemies, effects, result)

    def _explode(
        self,
        center: Enemy,
        radius: float,
        damage: float,
        enemies: Sequence[Enemy],
        effects: EffectState,
        result: HitResult,
    ) -> None:
        cfg = self.config
        for other in enemies:
            if other is center or not other.is_target:
                continue
            d = distance(center, other)
            if d >= radius:
                continue
            falloff = max(cfg.explosion_min_falloff, 1 - d / radius)
            other.hp -= damage * falloff
            if effects.diamond.aoe_slow_enabled:
                other.speed *= 1 - effects.diamond.slow_amount
            if other.hp <= 0:
                other.is_dead = True
                result.killed.append(other)
                # larger explosions chain at half radius and damage
                if effects.club.explosion_size > 1:
                    self._explode(other, radius * 0.5, damage * 0.5, enemies, effects, result)
