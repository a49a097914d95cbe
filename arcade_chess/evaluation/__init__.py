"""
Evaluation Module

This module provides position evaluation functions for the game AI.
Evaluators are SWAPPABLE: the search works with any evaluator that
implements the base interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - ClassicalEvaluator: material + piece-square tables + center control
      + king safety + mobility
    - EvaluationWeights: tunable bonus sizes

Data Flow:
    Position → evaluator.evaluate() → int (centipawns)
                                      Positive = White advantage
                                      Negative = Black advantage
"""

from arcade_chess.evaluation.base import MATE_SCORE, Evaluator
from arcade_chess.evaluation.classical import PIECE_VALUES, ClassicalEvaluator
from arcade_chess.evaluation.config import EvaluationWeights

__all__ = [
    'MATE_SCORE',
    'Evaluator',
    'PIECE_VALUES',
    'ClassicalEvaluator',
    'EvaluationWeights',
]
