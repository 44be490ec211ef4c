from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional, Sequence, Tuple

import pygame

from block_duel.game import Action, GameConfig, Match
from .renderer import Renderer


# key -> (seat, action)
KEY_BINDINGS: Dict[int, Tuple[int, Action]] = {
    pygame.K_a: (0, Action.LEFT),
    pygame.K_d: (0, Action.RIGHT),
    pygame.K_w: (0, Action.ROTATE),
    pygame.K_s: (0, Action.SOFT_DROP),
    pygame.K_SPACE: (0, Action.HARD_DROP),
    pygame.K_r: (0, Action.RESTART),
    pygame.K_LEFT: (1, Action.LEFT),
    pygame.K_RIGHT: (1, Action.RIGHT),
    pygame.K_UP: (1, Action.ROTATE),
    pygame.K_DOWN: (1, Action.SOFT_DROP),
    pygame.K_RETURN: (1, Action.HARD_DROP),
    pygame.K_BACKSPACE: (1, Action.RESTART),
}


def handle_key(match: Match, key: int) -> None:
    binding = KEY_BINDINGS.get(key)
    if binding is None:
        return
    seat, action = binding
    if action == Action.RESTART:
        match.restart(seat)
    else:
        match.session(seat).step(action)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Two-player Block Duel on one keyboard")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--gravity-ms", type=int, default=1000)
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--verbose", action="store_true")
    return p


def run(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        config = GameConfig(gravity_delay_ms=args.gravity_ms)
        match = Match(config, seed=args.seed, clock=pygame.time.get_ticks)
        renderer = Renderer(cell_size=args.cell_size)

        screen = pygame.display.set_mode(renderer.window_size(config.rows, config.cols))
        pygame.display.set_caption("Block Duel")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        handle_key(match, event.key)

            match.update(pygame.time.get_ticks())

            renderer.draw(screen, match.sessions)
            pygame.display.flip()

            clock.tick(args.fps)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
