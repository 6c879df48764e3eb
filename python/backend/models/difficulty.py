"""Difficulty presets for the colour-matching game."""

from __future__ import annotations

from enum import StrEnum


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    # -- presets --------------------------------------------------------------

    @property
    def grid_size(self) -> int:
        """Side length of the square grid."""
        return _PRESETS[self][0]

    @property
    def time_limit(self) -> int:
        """Countdown length in seconds."""
        return _PRESETS[self][1]

    @property
    def number_of_pairs(self) -> int:
        return _PRESETS[self][2]

    # -- derived --------------------------------------------------------------

    @property
    def cell_count(self) -> int:
        return self.grid_size * self.grid_size

    @property
    def has_filler(self) -> bool:
        """True when one odd cell is left over after laying out every pair."""
        return self.cell_count - 2 * self.number_of_pairs == 1

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def description(self) -> str:
        """Spoken summary, e.g. ``Easy level. 3 by 3 grid, 4 pairs, 60 seconds``."""
        n = self.grid_size
        return (
            f"{self.display_name} level. {n} by {n} grid, "
            f"{self.number_of_pairs} pairs, {self.time_limit} seconds"
        )

    @property
    def hint(self) -> str:
        article = "an" if self.value[0] in "aeiou" else "a"
        return f"Double tap to start {article} {self.value} game"


# grid_size, time_limit, number_of_pairs
_PRESETS: dict[Difficulty, tuple[int, int, int]] = {
    Difficulty.EASY: (3, 60, 4),
    Difficulty.MEDIUM: (5, 120, 12),
    Difficulty.HARD: (7, 180, 24),
}
