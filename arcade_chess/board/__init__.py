"""
Board and Rules Module

This module owns the chess rules: piece placement, move generation and move
application.

Key Components:
    - Piece / PieceKind / Color / Square: tagged board primitives
    - Move: immutable move value produced by the generator
    - Position: board plus turn, castling, en passant and clocks;
      attack detection, pseudo-legal and legal move generation, play()
    - FEN import/export (FENError on malformed input)
    - python-chess interoperability helpers

Data Flow:
    FEN string → Position.from_fen() → Position
    Position.all_legal_moves() → [Move] → Position.play(move)
"""

from arcade_chess.board.fen import STARTING_FEN, FENError
from arcade_chess.board.moves import CastlingRights, CastlingSide, Move, move_notation
from arcade_chess.board.pieces import Color, Piece, PieceKind, Square
from arcade_chess.board.position import Position

__all__ = [
    'STARTING_FEN',
    'FENError',
    'CastlingRights',
    'CastlingSide',
    'Move',
    'move_notation',
    'Color',
    'Piece',
    'PieceKind',
    'Square',
    'Position',
]
