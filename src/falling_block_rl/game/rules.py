

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    hard_drop_per_cell: int = 2
    soft_drop_per_step: int = 1
    lines_per_level: int = 10
    base_fall_delay: float = 1.0
    fall_delay_step: float = 0.05
    min_fall_delay: float = 0.05

    def score_for_lines(self, lines: int, level: int) -> int:
        if not 1 <= lines <= len(self.line_clear_scores):
            return 0
        return self.line_clear_scores[lines - 1] * level

    def level_for_lines(self, total_lines: int) -> int:
        return total_lines // self.lines_per_level + 1

    def fall_delay(self, level: int) -> float:
        """Seconds between gravity steps at `level`."""
        return max(self.min_fall_delay, self.base_fall_delay - (level - 1) * self.fall_delay_step)
