from __future__ import annotations

import logging
import random
from functools import partial
from typing import Optional, Tuple

from .core import Clock, GameConfig, Session
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Match:
    """Two sessions wired as opponents.

    Sessions never reference each other directly: each one gets a dispatch
    callable bound to its seat, and the match looks up the opponent when
    garbage is sent.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        seed: Optional[int] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config or GameConfig()
        if seed is None:
            seed = self.config.random_seed
        seeder = random.Random(seed)
        self.sessions: Tuple[Session, Session] = tuple(
            Session(
                self.config,
                rules,
                rng=random.Random(seeder.getrandbits(32)),
                clock=clock,
                name=f"player {index + 1}",
            )
            for index in range(2)
        )
        for index, session in enumerate(self.sessions):
            session.dispatch_garbage = partial(self._send_garbage, index)

    def _check_index(self, index: int) -> int:
        if index not in (0, 1):
            raise IndexError(f"seat index must be 0 or 1, got {index}")
        return index

    def session(self, index: int) -> Session:
        return self.sessions[self._check_index(index)]

    def opponent_of(self, index: int) -> Session:
        return self.sessions[1 - self._check_index(index)]

    def _send_garbage(self, sender: int, count: int) -> bool:
        target = self.opponent_of(sender)
        if target.game_over:
            return False
        logger.debug("routing %d garbage row(s) from %s to %s", count,
                     self.sessions[sender].name, target.name)
        target.receive_garbage(count)
        return True

    def restart(self, index: int) -> None:
        self.session(index).reset()

    def update(self, now_ms: float) -> None:
        for session in self.sessions:
            session.update(now_ms)

    def winner(self) -> Optional[int]:
        """Seat of the only contestant still playing, or None."""
        alive = [i for i, s in enumerate(self.sessions) if not s.game_over]
        if len(alive) == 1:
            return alive[0]
        return None
