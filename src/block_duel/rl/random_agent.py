from __future__ import annotations

import argparse

import gymnasium as gym

import block_duel.env  # noqa: F401


def run_random(steps: int = 500, seed: int | None = None, opponent: str = "random") -> float:
    env = gym.make("BlockDuel-v0", opponent=opponent)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} finished episode(s)")
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=500)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--opponent", choices=["random", "idle"], default="random")
    args = p.parse_args()
    run_random(args.steps, args.seed, args.opponent)


if __name__ == "__main__":  # pragma: no cover
    main()
