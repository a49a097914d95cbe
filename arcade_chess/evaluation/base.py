"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
The search only talks to this interface, so evaluators can be swapped
without touching the search algorithm.

Key Principles:
    1. Evaluators are stateless
    2. evaluate() always returns centipawns from White's perspective
    3. Positive = White advantage, Negative = Black advantage
    4. Positions without legal moves score ±MATE_SCORE (checkmate) or 0 (stalemate)

Convention:
    - Material values in centipawns (pawn = 100, queen = 900)
    - Return 0 for perfectly equal positions
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from arcade_chess.board.moves import Move
from arcade_chess.board.pieces import Color
from arcade_chess.board.position import Position

# Score of a checkmate, from White's perspective
MATE_SCORE = 100000


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    All evaluator implementations must inherit from this class and implement
    the evaluate() method.

    Methods:
        evaluate(position): Static evaluation in centipawns
        evaluate_terminal(position, moves): Mate/stalemate score or None
    """

    @abstractmethod
    def evaluate(self, position: Position) -> int:
        """
        Evaluate a position from White's perspective.

        Args:
            position: Position to evaluate (must not be modified)

        Returns:
            int: Evaluation in centipawns
        """

    def evaluate_terminal(
        self, position: Position, moves: Optional[List[Move]] = None
    ) -> Optional[int]:
        """
        Score positions where the side to move has no legal move.

        Args:
            position: Position to test
            moves: Legal moves of the side to move, if already generated

        Returns:
            -MATE_SCORE if White is mated, MATE_SCORE if Black is mated,
            0 for stalemate, None if the side to move can still move
        """
        has_moves = bool(moves) if moves is not None else position.has_legal_moves()
        if has_moves:
            return None

        if position.is_in_check(position.turn):
            return -MATE_SCORE if position.turn is Color.WHITE else MATE_SCORE
        return 0

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
