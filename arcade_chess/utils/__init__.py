"""
Utilities Module

This module provides utility functions for verifying and benchmarking the
rules engine and the search.

Key Components:
    - Perft: Move generation verification against published node counts
    - Mate-in-one suite: positions with a single winning move

Success Metrics:
    - Perft: exact match on every reference position
    - Mate-in-one: all positions solved at depth 1
"""

from arcade_chess.utils.testing import (
    MATE_IN_ONE_POSITIONS,
    PERFT_POSITIONS,
    divide,
    evaluate_position,
    perft,
    run_suite,
)

__all__ = [
    'MATE_IN_ONE_POSITIONS',
    'PERFT_POSITIONS',
    'divide',
    'evaluate_position',
    'perft',
    'run_suite',
]
