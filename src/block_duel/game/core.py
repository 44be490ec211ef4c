from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import ActivePiece, Cell, Shape, TetrominoType, rotate_clockwise
from .rules import ScoringRules


logger = logging.getLogger(__name__)

Clock = Callable[[], float]
GarbageDispatch = Callable[[int], bool]


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5
    RESTART = 6


@dataclass
class GameConfig:
    rows: int = 20
    cols: int = 10
    gravity_delay_ms: int = 1000
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"board dimensions must be positive, got {self.rows}x{self.cols}")
        if self.gravity_delay_ms <= 0:
            raise ValueError(f"gravity_delay_ms must be positive, got {self.gravity_delay_ms}")


@dataclass(frozen=True)
class SessionSnapshot:
    board: Tuple[Tuple[Cell, ...], ...]
    piece_kind: TetrominoType
    piece_shape: Shape
    piece_x: int
    piece_y: int
    score: int
    game_over: bool
    lines_cleared_total: int


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class Session:
    """One contestant: a board, the falling piece, score and gravity clock.

    Collision and top-out are reported through return values and the
    ``game_over`` flag; no operation raises for them. Garbage produced by a
    multi-row clear is handed to ``dispatch_garbage`` when a match has wired
    one in.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
        name: str = "player",
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng or random.Random(self.config.random_seed)
        self.clock = clock or _monotonic_ms
        self.name = name
        self.grid = GameGrid(self.config.rows, self.config.cols)
        self.dispatch_garbage: Optional[GarbageDispatch] = None
        self.piece: ActivePiece = self._random_piece()
        self.score = 0
        self.lines_cleared_total = 0
        self.garbage_sent = 0
        self.garbage_received = 0
        self.game_over = False
        self.last_gravity_ms = self.clock()

    def reset(self) -> None:
        self.grid.reset()
        self.piece = self._random_piece()
        self.score = 0
        self.lines_cleared_total = 0
        self.garbage_sent = 0
        self.garbage_received = 0
        self.game_over = False
        self.last_gravity_ms = self.clock()
        logger.info("%s restarted", self.name)

    restart = reset

    def _random_piece(self) -> ActivePiece:
        kind = self.rng.choice(list(TetrominoType))
        return ActivePiece.spawn(kind, self.grid.cols)

    def collides(self, piece: Optional[ActivePiece] = None) -> bool:
        return self.grid.collides((piece or self.piece).cells())

    def move_left(self) -> None:
        self._shift(-1)

    def move_right(self) -> None:
        self._shift(1)

    def _shift(self, dx: int) -> None:
        if self.game_over:
            return
        self.piece.x += dx
        if self.collides():
            self.piece.x -= dx

    def rotate(self) -> None:
        if self.game_over:
            return
        old_shape = self.piece.shape
        old_x = self.piece.x
        self.piece.shape = rotate_clockwise(old_shape)
        # Simplified kick: same column, one left, one right, else revert.
        for x in (old_x, old_x - 1, old_x + 1):
            self.piece.x = x
            if not self.collides():
                return
        self.piece.x = old_x
        self.piece.shape = old_shape

    def move_down(self) -> bool:
        """Drop the piece one row. Returns False once the piece has locked."""
        if self.game_over:
            return False
        self.piece.y += 1
        if self.collides():
            self.piece.y -= 1
            self._lock_piece()
            return False
        self.last_gravity_ms = self.clock()
        return True

    def hard_drop(self) -> None:
        if self.game_over:
            return
        while self.move_down():
            pass

    def _lock_piece(self) -> None:
        tag = self.piece.cell
        self.grid.lock((row, col, tag) for row, col in self.piece.cells())
        lines = self.grid.clear_full_rows()
        logger.debug("%s locked %s at (%d, %d), %d line(s)", self.name, self.piece.kind.name,
                     self.piece.x, self.piece.y, lines)
        self.lines_cleared_total += lines
        self.score += self.rules.score_for_lines(lines)

        garbage = self.rules.garbage_for_lines(lines)
        if garbage and self.dispatch_garbage is not None and self.dispatch_garbage(garbage):
            self.garbage_sent += garbage

        self.piece = self._random_piece()
        if self.collides():
            self.game_over = True
            logger.info("%s topped out with score %d", self.name, self.score)

    def receive_garbage(self, count: int) -> None:
        if self.game_over:
            return
        self.grid.insert_garbage(count, self.rng)
        self.garbage_received += count
        logger.debug("%s received %d garbage row(s)", self.name, count)
        # Only upward repositioning is attempted.
        while self.collides() and self.piece.y > 0:
            self.piece.y -= 1
        if self.collides():
            self.game_over = True
            logger.info("%s topped out under garbage with score %d", self.name, self.score)

    def update(self, now_ms: float) -> None:
        if self.game_over:
            return
        if now_ms - self.last_gravity_ms > self.config.gravity_delay_ms:
            self.move_down()
            self.last_gravity_ms = now_ms

    def step(self, action: Action) -> None:
        if action == Action.RESTART:
            self.reset()
        elif action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.SOFT_DROP:
            self.move_down()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.NONE:
            pass

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            board=self.grid.rows_snapshot(),
            piece_kind=self.piece.kind,
            piece_shape=self.piece.shape,
            piece_x=self.piece.x,
            piece_y=self.piece.y,
            score=self.score,
            game_over=self.game_over,
            lines_cleared_total=self.lines_cleared_total,
        )

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid; negative marks the falling piece
        state = self.grid.clone_state()
        if not self.game_over:
            for row, col in self.piece.cells():
                if self.grid.is_inside(row, col):
                    state[row, col] = -int(self.piece.kind)
        return state
