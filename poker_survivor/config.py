"""Tunable game constants.

The effect tiers and the weapon catalog are game rules and live beside the
code that applies them (`effects.py`, `weapons.py`). Everything here is
tuning: drop rates, radii, scales, wave sizes. Override by building a new
`GameConfig` (or loading one from JSON) and injecting it.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union


@dataclass(frozen=True)
class GameConfig:
    # Card drops
    card_drop_chance: float = 0.2
    card_lifetime: float = 7.0          # seconds before an uncollected card vanishes

    # Chip drops / chip bag (chips double as player health)
    base_chip_drop_chance: float = 0.1
    chips_per_drop: int = 10
    chip_bag_size: int = 100
    surplus_ratio: float = 0.5          # share of overflow kept as surplus chips

    # Hit resolution
    crit_multiplier: float = 2.0
    ultimate_crit_chance: float = 0.5
    spade_aoe_radius: float = 50.0
    spade_aoe_damage_scale: float = 0.3   # share of the hit splashed onto neighbours
    ricochet_radius: float = 150.0
    ricochet_max_targets: int = 3
    ricochet_damage_scale: float = 0.6
    explosion_base_radius: float = 30.0
    explosion_damage_scale: float = 0.5
    explosion_min_falloff: float = 0.5
    ally_hp: float = 5.0

    # Boss showdown
    community_card_count: int = 3
    hole_card_count: int = 2
    player_fold_penalty: float = 0.3
    boss_fold_penalty: float = 0.2
    boss_raise_ratio: float = 2 / 3

    # Pickup environment
    arena_width: float = 800.0
    arena_height: float = 600.0
    wave_size: int = 6
    wave_hp_base: float = 20.0
    wave_hp_growth: float = 5.0
    shots_per_wave: int = 8
    max_waves: int = 50

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "GameConfig":
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = GameConfig()
