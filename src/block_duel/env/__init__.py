"""Gymnasium environments for Block Duel."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Agent in seat 0 against a scripted opponent
register(
    id="BlockDuel-v0",
    entry_point="block_duel.env.versus_env:VersusEnv",
)

__all__ = ["BlockDuel-v0"]
