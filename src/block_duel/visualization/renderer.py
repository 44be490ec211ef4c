from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
import pygame

from block_duel.game import Cell, Session
from block_duel.game.pieces import COLORS


EMPTY_COLOR = (30, 30, 30)
BACKGROUND = (10, 10, 14)
TEXT_COLOR = (235, 235, 235)
GAME_OVER_COLOR = (255, 80, 80)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    # Negative values mark the falling piece in Session.get_state()
    if v == 0:
        return EMPTY_COLOR
    return COLORS.get(Cell(abs(v)), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, footer: int = 60) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.footer = footer
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    def window_size(self, rows: int, cols: int, boards: int = 2) -> Tuple[int, int]:
        width = boards * cols * self.cell_size + (boards + 1) * self.margin
        height = rows * self.cell_size + 2 * self.margin + self.footer
        return width, height

    def grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((0, 0, 0))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(int(state[y, x])), rect)
        return surf

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            self._font = pygame.font.SysFont(None, 28)
            self._big_font = pygame.font.SysFont(None, 44)
        return self._font, self._big_font

    def draw(self, screen: pygame.Surface, sessions: Sequence[Session]) -> None:
        font, big_font = self._fonts()
        screen.fill(BACKGROUND)
        for index, session in enumerate(sessions):
            grid_surf = self.grid_surface(session.get_state())
            left = self.margin + index * (grid_surf.get_width() + self.margin)
            screen.blit(grid_surf, (left, self.margin))

            label = font.render(f"{session.name}: {session.score}", True, TEXT_COLOR)
            screen.blit(label, (left, self.margin * 2 + grid_surf.get_height()))

            if session.game_over:
                banner = big_font.render("GAME OVER", True, GAME_OVER_COLOR)
                rect = banner.get_rect(
                    center=(left + grid_surf.get_width() // 2, self.margin + grid_surf.get_height() // 2)
                )
                screen.blit(banner, rect)
