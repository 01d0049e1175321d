#!/usr/bin/env python3
"""Train a PPO agent to decide which dropped cards to collect."""

from pathlib import Path

import numpy as np
import torch
from stable_baselines3 import PPO
from stable_baselines3.common.callbacks import BaseCallback, CheckpointCallback
from stable_baselines3.common.monitor import Monitor
from stable_baselines3.common.vec_env import DummyVecEnv, SubprocVecEnv

from poker_survivor.env import CardPickupEnv


def make_env(seed: int, rank: int):
    def _init():
        env = Monitor(CardPickupEnv())
        env.reset(seed=seed + rank)
        return env
    return _init


class ProgressCallback(BaseCallback):
    def __init__(self, print_freq: int = 10_000):
        super().__init__()
        self.print_freq = print_freq
        self.episode_rewards = []
        self.episode_lengths = []

    def _on_step(self):
        for info in self.locals.get("infos", []):
            if "episode" in info:
                self.episode_rewards.append(info["episode"]["r"])
                self.episode_lengths.append(info["episode"]["l"])

        if self.num_timesteps % self.print_freq == 0:
            if self.episode_rewards:
                recent = self.episode_rewards[-100:]
                print(f"\n[Step {self.num_timesteps:,}]")
                print(f"  Episodes: {len(self.episode_rewards)}")
                print(f"  Mean kills: {np.mean(recent):.2f} ± {np.std(recent):.2f}")
            else:
                print(f"\n[Step {self.num_timesteps:,}] Training...")
        return True


def train(args):
    print("=" * 60)
    print("Card pickup PPO training")
    print(f"  Environments: {args.n_envs}")
    print(f"  Timesteps: {args.timesteps:,}")
    print("=" * 60)

    env_fns = [make_env(args.seed, i) for i in range(args.n_envs)]
    env = SubprocVecEnv(env_fns) if args.n_envs > 1 else DummyVecEnv(env_fns)

    run_dir = Path(f"run_{args.run_name}")
    run_dir.mkdir(exist_ok=True)

    model = PPO(
        "MultiInputPolicy",
        env,
        learning_rate=args.learning_rate,
        n_steps=args.n_steps,
        batch_size=args.batch_size,
        n_epochs=10,
        gamma=0.99,
        gae_lambda=0.95,
        clip_range=0.2,
        ent_coef=0.01,
        verbose=1,
        seed=args.seed,
        device="cuda" if torch.cuda.is_available() else "cpu",
        policy_kwargs={
            "net_arch": dict(pi=[256, 256], vf=[256, 256]),
            "activation_fn": torch.nn.ReLU,
        },
    )

    callbacks = [
        ProgressCallback(),
        CheckpointCallback(
            save_freq=max(100_000 // args.n_envs, 1),
            save_path=str(run_dir / "checkpoints"),
            name_prefix="pickup",
        ),
    ]

    try:
        model.learn(total_timesteps=args.timesteps, callback=callbacks, log_interval=50)
        print("\nTraining completed!")
    except KeyboardInterrupt:
        print("\nTraining interrupted")
    finally:
        model.save(str(run_dir / "final_model"))
        env.close()
        print(f"\nModel saved to {run_dir / 'final_model'}")


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Train a card pickup agent")
    parser.add_argument("--timesteps", type=int, default=1_000_000)
    parser.add_argument("--n-envs", type=int, default=8)
    parser.add_argument("--n-steps", type=int, default=512)
    parser.add_argument("--batch-size", type=int, default=1024)
    parser.add_argument("--learning-rate", type=float, default=3e-4)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--run-name", type=str, default="card_pickup")

    args = parser.parse_args()
    train(args)


if __name__ == "__main__":
    main()
