from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class ScoringRules:
    row_points: tuple[int, int, int, int, int] = (0, 40, 100, 300, 1200)
    soft_drop_points: int = 1
    hard_drop_points: int = 2
    lines_per_level: int = 10

    def score_for_rows(self, rows: int, level: float) -> int:
        if rows <= 0:
            return 0
        if rows < len(self.row_points):
            base = self.row_points[rows]
        else:
            # Unreachable with a single 4-tall piece; keep the top bonus
            base = self.row_points[-1]
        return base * (math.floor(level) + 1)

    def fall_interval(self, base_interval: int, level: float) -> int:
        return max(1, base_interval - math.floor(level))
