from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    tetris_garbage: int = 4

    def score_for_lines(self, lines: int) -> int:
        if 1 <= lines <= len(self.line_clear_scores):
            return self.line_clear_scores[lines - 1]
        return 0

    def garbage_for_lines(self, lines: int) -> int:
        """Rows sent to the opponent: none for a single, n - 1 otherwise, 4 for a tetris."""
        if lines < 2:
            return 0
        if lines == 4:
            return self.tetris_garbage
        return lines - 1
