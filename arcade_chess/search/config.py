"""
Difficulty configuration for the game AI.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union


class Difficulty(Enum):
    """Difficulty tier offered to the player."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Union["Difficulty", str]) -> "Difficulty":
        """
        Accept a Difficulty or its name ('easy', 'medium', 'hard').

        Raises:
            ValueError: If the name is unknown
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"difficulty should be 'easy', 'medium' or 'hard', got {value!r}"
            ) from None


@dataclass
class DifficultySettings:
    """Search settings for one difficulty tier."""

    depth: int
    """Search depth in half-moves (plies)"""

    random_factor: float = 0.0
    """Probability of playing a uniformly random legal move instead of searching"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.depth < 1:
            raise ValueError(f"depth must be at least 1, got {self.depth}")

        if not 0.0 <= self.random_factor <= 1.0:
            raise ValueError(f"random_factor must be within [0, 1], got {self.random_factor}")


DIFFICULTY_SETTINGS: Dict[Difficulty, DifficultySettings] = {
    Difficulty.EASY: DifficultySettings(depth=2, random_factor=0.3),
    Difficulty.MEDIUM: DifficultySettings(depth=3),
    Difficulty.HARD: DifficultySettings(depth=4),
}

DEFAULT_DIFFICULTY = Difficulty.MEDIUM
