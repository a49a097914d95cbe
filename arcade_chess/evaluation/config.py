"""
Evaluation weights for the classical evaluator.
"""

from dataclasses import dataclass


@dataclass
class EvaluationWeights:
    """Bonus sizes (centipawns) for the positional terms of ClassicalEvaluator.

    Material and piece-square values are fixed tables; these are the
    hand-tuned extras layered on top.
    """

    center_bonus: int = 8
    """Per central square (d4, e4, d5, e5) attacked by a side"""

    extended_center_bonus: int = 3
    """Per square of the ring around the center attacked by a side"""

    castled_king_bonus: int = 40
    """King on its castled square (g1/c1, g8/c8)"""

    central_king_penalty: int = 30
    """King still on the d/e file of its back rank"""

    mobility_weight: int = 5
    """Per legal move of difference between White and Black"""

    def __post_init__(self):
        """Validate weights after initialization."""
        for name, value in vars(self).items():
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
