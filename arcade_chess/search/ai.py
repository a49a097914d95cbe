"""
Game AI

ChessAI picks a move for the side to move at the configured difficulty.
It works on its own copy of the position, so the caller's position (and
the game's authoritative state) is never touched.

The call is synchronous and runs to completion at the configured depth;
a UI that must stay responsive should run it off its main thread and
leave the game untouched until it returns.
"""

import logging
import random
from typing import Dict, Optional, Union

from arcade_chess.board.moves import Move
from arcade_chess.board.pieces import Color
from arcade_chess.board.position import Position
from arcade_chess.evaluation.base import Evaluator
from arcade_chess.evaluation.classical import ClassicalEvaluator
from arcade_chess.search.config import (
    DEFAULT_DIFFICULTY,
    DIFFICULTY_SETTINGS,
    Difficulty,
    DifficultySettings,
)
from arcade_chess.search.minimax import find_best_move

logger = logging.getLogger(__name__)

DifficultyLike = Union[Difficulty, str]


class ChessAI:
    """
    Difficulty-tiered move selector.

    Attributes:
        evaluator: Position evaluator used by the search
        settings: Search settings per difficulty tier
        rng: Random source for the random-move branch (seedable)
    """

    def __init__(
        self,
        difficulty: DifficultyLike = DEFAULT_DIFFICULTY,
        evaluator: Optional[Evaluator] = None,
        seed: Optional[int] = None,
        settings: Optional[Dict[Difficulty, DifficultySettings]] = None,
    ):
        """
        Initialize the AI.

        Args:
            difficulty: Starting tier (Difficulty or 'easy'/'medium'/'hard')
            evaluator: Position evaluator (default: ClassicalEvaluator)
            seed: Seed for the random-move branch, for reproducible games
            settings: Per-tier overrides of DIFFICULTY_SETTINGS
        """
        self._difficulty = Difficulty.parse(difficulty)
        self.evaluator = evaluator if evaluator else ClassicalEvaluator()
        self.settings = dict(DIFFICULTY_SETTINGS)
        if settings:
            self.settings.update(settings)
        self.rng = random.Random(seed)

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @difficulty.setter
    def difficulty(self, value: DifficultyLike) -> None:
        self._difficulty = Difficulty.parse(value)

    def set_difficulty(self, value: DifficultyLike) -> None:
        self.difficulty = value

    def get_difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def search_depth(self) -> int:
        return self.settings[self._difficulty].depth

    def select_move(
        self,
        position: Position,
        side_to_move: Optional[Color] = None,
        difficulty: Optional[DifficultyLike] = None,
    ) -> Optional[Move]:
        """
        Choose a move for side_to_move.

        Args:
            position: Position to move from (not modified)
            side_to_move: Side to choose for (default: position.turn); if it
                differs from position.turn the en passant target is dropped
            difficulty: Tier for this call only (default: the AI's tier)

        Returns:
            The chosen move, or None if the side to move has no legal move
        """
        tier = Difficulty.parse(difficulty) if difficulty is not None else self._difficulty
        settings = self.settings[tier]

        root = position.copy()
        if side_to_move is not None and side_to_move is not root.turn:
            root.turn = side_to_move
            root.en_passant_target = None

        legal_moves = root.all_legal_moves()
        if not legal_moves:
            logger.debug(f"No legal moves for {root.turn.value}")
            return None

        if settings.random_factor > 0 and self.rng.random() < settings.random_factor:
            move = self.rng.choice(legal_moves)
            logger.info(f"{tier.value}: playing random move {move.uci}")
            return move

        best_move, score, nodes = find_best_move(root, settings.depth, self.evaluator)
        logger.debug(
            f"{tier.value}: selected {best_move.uci} (score {score}, "
            f"{nodes} nodes, depth {settings.depth})"
        )
        return best_move


def select_move(
    position: Position,
    side_to_move: Optional[Color] = None,
    difficulty: DifficultyLike = DEFAULT_DIFFICULTY,
    seed: Optional[int] = None,
) -> Optional[Move]:
    """One-shot move selection with a fresh ChessAI."""
    return ChessAI(difficulty, seed=seed).select_move(position, side_to_move)
