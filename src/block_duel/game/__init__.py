"""Game module for Block Duel.

Exports the two-player engine:
- GameGrid: Board cells, collision test, row clearing and garbage rows
- ActivePiece, TetrominoType, Cell: Pieces, shapes and cell tags
- ScoringRules: Line-clear scores and garbage counts
- Session: One contestant's board, piece, score and gravity clock
- Match: Two sessions wired as opponents
"""

from .grid import GameGrid
from .pieces import ActivePiece, Cell, TetrominoType, BASE_SHAPES, rotate_clockwise
from .rules import ScoringRules
from .core import Action, GameConfig, Session, SessionSnapshot
from .match import Match

__all__ = [
    "GameGrid",
    "ActivePiece",
    "Cell",
    "TetrominoType",
    "BASE_SHAPES",
    "rotate_clockwise",
    "ScoringRules",
    "Action",
    "GameConfig",
    "Session",
    "SessionSnapshot",
    "Match",
]
