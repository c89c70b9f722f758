from __future__ import annotations

from dataclasses import dataclass


# Frames between gravity drops per level (NES curve), at 60 frames per second.
FRAMES_PER_DROP: tuple[int, ...] = (
    48, 43, 38, 33, 28, 23, 18, 14, 8, 6,
    5, 5, 5, 4, 4, 4, 3, 3, 3, 2,
    2, 2, 2, 2, 2, 2, 2, 2, 1,
)
TARGET_SECONDS_PER_FRAME = 1.0 / 60.0


def drop_interval(level: int) -> float:
    """Seconds between gravity drops at ``level``."""
    index = min(max(level, 0), len(FRAMES_PER_DROP) - 1)
    return FRAMES_PER_DROP[index] * TARGET_SECONDS_PER_FRAME


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (40, 100, 300, 1200)

    def score(self, level: int, lines: int) -> int:
        if 1 <= lines <= 4:
            return self.line_clear_scores[lines - 1] * (level + 1)
        return 0

    def lines_required(self, start_level: int, level: int) -> int:
        """Cumulative line count needed to leave ``level``."""
        first = min(start_level * 10 + 10, max(100, start_level * 10 - 50))
        if level == start_level:
            return first
        return first + (level - start_level) * 10
