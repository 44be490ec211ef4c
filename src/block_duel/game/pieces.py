from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple


class TetrominoType(IntEnum):
    O = 1
    I = 2
    S = 3
    Z = 4
    L = 5
    J = 6
    T = 7


class Cell(IntEnum):
    """Board cell contents. Piece tags share their values with TetrominoType."""

    EMPTY = 0
    O = 1
    I = 2
    S = 3
    Z = 4
    L = 5
    J = 6
    T = 7
    GARBAGE = 8


Shape = Tuple[Tuple[bool, ...], ...]


def _shape(*rows: str) -> Shape:
    return tuple(tuple(ch == "1" for ch in row) for row in rows)


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.O: _shape("11", "11"),
    TetrominoType.I: _shape("1111"),
    TetrominoType.S: _shape("011", "110"),
    TetrominoType.Z: _shape("110", "011"),
    TetrominoType.L: _shape("100", "111"),
    TetrominoType.J: _shape("001", "111"),
    TetrominoType.T: _shape("010", "111"),
}

COLORS: Dict[Cell, Tuple[int, int, int]] = {
    Cell.O: (255, 255, 0),
    Cell.I: (0, 255, 255),
    Cell.S: (0, 255, 0),
    Cell.Z: (255, 0, 0),
    Cell.L: (255, 165, 0),
    Cell.J: (0, 0, 255),
    Cell.T: (160, 32, 240),
    Cell.GARBAGE: (100, 100, 100),
}


def rotate_clockwise(shape: Shape) -> Shape:
    """Rotate a shape matrix 90 degrees clockwise (reverse rows, then transpose)."""
    return tuple(zip(*shape[::-1]))


def shape_cells(shape: Shape) -> List[Tuple[int, int]]:
    return [(dy, dx) for dy, row in enumerate(shape) for dx, filled in enumerate(row) if filled]


@dataclass
class ActivePiece:
    kind: TetrominoType
    shape: Shape
    x: int
    y: int

    @classmethod
    def spawn(cls, kind: TetrominoType, cols: int) -> "ActivePiece":
        return cls(kind=kind, shape=BASE_SHAPES[kind], x=cols // 2 - 1, y=0)

    @property
    def cell(self) -> Cell:
        return Cell(int(self.kind))

    def cells(self) -> List[Tuple[int, int]]:
        """Board (row, col) coordinates covered by the piece at its position."""
        return [(self.y + dy, self.x + dx) for dy, dx in shape_cells(self.shape)]
