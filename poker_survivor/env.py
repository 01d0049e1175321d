"""
poker_survivor/env.py
=====================

A headless Gymnasium environment around the card-effects engine.

Gameplay
--------
Every step an enemy has dropped a card. The agent decides whether to pick it
up (the ledger keeps the last five, oldest evicted first), then a wave of
enemies spawns and the player fires at them with whatever weapon and suit
effects the ledger currently yields.

Action
------
Discrete(2): 0 = skip the offered card, 1 = collect it.

Observation
-----------
Dict(
    ledger      : MultiBinary(5×52)  – one-hot of each held card, oldest first
    offer       : MultiBinary(52)    – one-hot of the card on offer
    suit_counts : Box(0, 5, (4,))    – held cards per suit (♠ ♥ ♦ ♣)
    hand        : Discrete(10)       – current PokerHand
    action_mask : MultiBinary(2)     – both actions are always legal
)

Reward
------
Number of enemies killed in the wave. Episodes truncate after
``config.max_waves`` waves; one wave advances the game clock by one second.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Dict, List, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .cards import DECK_SIZE, NUM_SUITS, Card, random_card
from .combat import Bullet, Enemy, HitResolver
from .config import DEFAULT_CONFIG, GameConfig
from .constants import NUM_ACTIONS, PIERCING_HANDS, Action
from .drops import DropTable
from .effects import describe_effects
from .engine import EffectsEngine
from .hands import NUM_HANDS
from .ledger import LEDGER_CAPACITY

logger = logging.getLogger(__name__)

SECONDS_PER_WAVE = 1.0


class CardPickupEnv(gym.Env):
    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(self, *, render_mode: str | None = None, config: GameConfig = DEFAULT_CONFIG):
        super().__init__()
        self.render_mode = render_mode
        self.config = config

        self.action_space = spaces.Discrete(NUM_ACTIONS)
        self.observation_space = spaces.Dict(
            {
                "ledger": spaces.MultiBinary((LEDGER_CAPACITY, DECK_SIZE)),
                "offer": spaces.MultiBinary(DECK_SIZE),
                "suit_counts": spaces.Box(0, LEDGER_CAPACITY, shape=(NUM_SUITS,), dtype=np.int8),
                "hand": spaces.Discrete(NUM_HANDS),
                "action_mask": spaces.MultiBinary(NUM_ACTIONS),
            }
        )

        # Internal state (built in reset)
        self.engine: Optional[EffectsEngine] = None
        self.resolver: Optional[HitResolver] = None
        self.drops: Optional[DropTable] = None
        self.offer: Optional[Card] = None
        self.wave: int = 0
        self.total_kills: int = 0
        self._time: float = 0.0
        self._terminated: bool = False

    # ------------------------------- Helpers -------------------------------- #

    def _now(self) -> float:
        return self._time

    def _encode_ledger(self) -> np.ndarray:
        one_hot = np.zeros((LEDGER_CAPACITY, DECK_SIZE), dtype=np.int8)
        for slot, card in enumerate(self.engine.ledger.get_all()):
            one_hot[slot, int(card)] = 1
        return one_hot

    def _encode_offer(self) -> np.ndarray:
        one_hot = np.zeros(DECK_SIZE, dtype=np.int8)
        one_hot[int(self.offer)] = 1
        return one_hot

    def _get_observation(self) -> Dict[str, np.ndarray]:
        counts = self.engine.effects.counts
        return {
            "ledger": self._encode_ledger(),
            "offer": self._encode_offer(),
            "suit_counts": np.array([counts[s] for s in sorted(counts)], dtype=np.int8),
            "hand": int(self.engine.hand),
            "action_mask": np.ones(NUM_ACTIONS, dtype=np.int8),
        }

    def _get_info(self) -> Dict:
        return {
            "wave": self.wave,
            "weapon": self.engine.current_weapon.name,
            "hand": self.engine.hand.label,
            "total_kills": self.total_kills,
        }

    def _spawn_wave(self) -> List[Enemy]:
        cfg = self.config
        hp = cfg.wave_hp_base + cfg.wave_hp_growth * self.wave
        xs = self.np_random.uniform(0, cfg.arena_width, cfg.wave_size)
        ys = self.np_random.uniform(0, cfg.arena_height, cfg.wave_size)
        return [Enemy(float(x), float(y), hp) for x, y in zip(xs, ys)]

    def _run_wave(self) -> tuple[int, Optional[Card]]:
        """Fire the wave's shots; returns (kills, first card dropped)."""
        snapshot = self.engine.get_effects()
        effects = snapshot.effects
        now = self._now()
        piercing = self.engine.hand in PIERCING_HANDS

        enemies = self._spawn_wave()
        by_id = {e.id: e for e in enemies}
        killed_ids = set()
        dropped: Optional[Card] = None

        for _ in range(self.config.shots_per_wave):
            targets = [e for e in enemies if e.is_target]
            if not targets:
                break
            target = targets[int(self.np_random.integers(len(targets)))]
            shots = deque([(Bullet.from_weapon(self.engine.weapon_system, effects,
                                               target.x, target.y, is_piercing=piercing), target)])
            while shots:
                bullet, enemy = shots.popleft()
                if not enemy.is_target:
                    continue
                result = self.resolver.resolve_hit(bullet, enemy, enemies, effects, now)
                for dead in result.killed:
                    killed_ids.add(dead.id)
                    if dropped is None:
                        drop = self.drops.roll_card(dead.x, dead.y, now)
                        dropped = drop.card if drop is not None else None
                for ricochet in result.ricochets:
                    shots.append((ricochet, by_id[ricochet.target_id]))

        return len(killed_ids), dropped

    # ---------------------------- Gym interface ----------------------------- #

    def reset(self, *, seed: int | None = None, options=None):
        super().reset(seed=seed)
        self._time = 0.0
        self.engine = EffectsEngine(clock=self._now)
        self.resolver = HitResolver(self.config, self.np_random)
        self.drops = DropTable(self.config, self.np_random)
        self.offer = random_card(self.np_random)
        self.wave = 0
        self.total_kills = 0
        self._terminated = False
        return self._get_observation(), self._get_info()

    def step(self, action: int):
        if self._terminated:
            raise RuntimeError("`step()` called on terminated episode")
        if not self.action_space.contains(int(action)):
            raise ValueError(f"Invalid action: {action}")

        weapon_changed = False
        if Action(int(action)) is Action.COLLECT:
            weapon_changed = self.engine.collect_card(self.offer).weapon_changed

        kills, dropped = self._run_wave()
        self.total_kills += kills
        self.wave += 1
        self._time += SECONDS_PER_WAVE
        self.offer = dropped if dropped is not None else random_card(self.np_random)

        truncated = self.wave >= self.config.max_waves
        self._terminated = truncated

        info = self._get_info()
        info["weapon_changed"] = weapon_changed
        info["kills"] = kills
        return self._get_observation(), float(kills), False, truncated, info

    # ------------------------------- Render -------------------------------- #

    def render(self):
        if self.render_mode != "ansi":
            return
        res = f"Wave: {self.wave}/{self.config.max_waves}  Kills: {self.total_kills}\n"
        res += f"Ledger: {self.engine.ledger or '-'}\n"
        res += f"Hand: {self.engine.hand.label}  Weapon: {self.engine.current_weapon.name}\n"
        for line in describe_effects(self.engine.effects, self._now()):
            res += f"  {line}\n"
        res += f"Offer: {self.offer}\n"
        return res

    def valid_actions(self):
        return [int(a) for a in Action]

    def action_masks(self):
        return [True] * NUM_ACTIONS
