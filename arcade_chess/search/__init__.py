"""
Search Module

This module implements the game AI: fixed-depth minimax with alpha-beta
pruning over the legal moves supplied by the rules engine.

Key Components:
    - minimax: Core search algorithm with alpha-beta pruning
    - find_best_move: Root-level search function
    - order_moves: Capture-first move ordering
    - ChessAI / select_move: difficulty tiers and the random-move branch
"""

from arcade_chess.search.ai import ChessAI, select_move
from arcade_chess.search.config import DIFFICULTY_SETTINGS, Difficulty, DifficultySettings
from arcade_chess.search.minimax import find_best_move, minimax, order_moves

__all__ = [
    'ChessAI',
    'select_move',
    'Difficulty',
    'DifficultySettings',
    'DIFFICULTY_SETTINGS',
    'find_best_move',
    'minimax',
    'order_moves',
]
