"""
Classical Piece-Square Table Evaluation

This module implements the static evaluation used by the game AI:
    1. Material counting (piece values)
    2. Piece-Square Tables (positional bonuses/penalties)
    3. Center control (attacked central and extended-central squares)
    4. King safety (castled king bonus, central king penalty)
    5. Mobility (difference in legal move counts)

Evaluation Components:
    - Material: P=100, N=320, B=330, R=500, Q=900, K=20000
    - Position: PST bonuses for each piece type, mirrored for Black

Reference:
    Simplified Evaluation Function
    https://www.chessprogramming.org/Simplified_Evaluation_Function
"""

from typing import Optional

import numpy as np

from arcade_chess.board.pieces import Color, Piece, PieceKind, Square
from arcade_chess.board.position import Position
from arcade_chess.evaluation.base import Evaluator
from arcade_chess.evaluation.config import EvaluationWeights

#fmt: off
# ============================================================================
# Material Values (centipawns)
# ============================================================================
# The king value only matters for move ordering (capturing it never happens
# in legal play); it is counted for both sides so it cancels out.

PIECE_VALUES = {
    PieceKind.PAWN: 100,
    PieceKind.KNIGHT: 320,
    PieceKind.BISHOP: 330,
    PieceKind.ROOK: 500,
    PieceKind.QUEEN: 900,
    PieceKind.KING: 20000,
}


# ============================================================================
# Piece-Square Tables (PSTs)
# ============================================================================
# Values are from White's perspective (row 0 = rank 8, row 7 = rank 1).
# For Black pieces the table is read with the row flipped.
#
# Convention: Higher values = better squares
# Units: Centipawns (added to material value)
#
# ============================================================================

# Pawn PST: strong bonus for the d/e pawns on the 4th and 5th ranks
PAWN_TABLE = np.array([
    [  0,   0,   0,   0,   0,   0,   0,   0],  # Rank 8 (promotion)
    [ 50,  50,  50,  50,  50,  50,  50,  50],  # Rank 7
    [ 10,  10,  20,  30,  30,  20,  10,  10],  # Rank 6
    [  5,   5,  10,  45,  45,  10,   5,   5],  # Rank 5
    [  0,   0,   0,  40,  40,   0,   0,   0],  # Rank 4
    [  5,  -5, -10,   0,   0, -10,  -5,   5],  # Rank 3
    [  5,  10,  10, -25, -25,  10,  10,   5],  # Rank 2
    [  0,   0,   0,   0,   0,   0,   0,   0],  # Rank 1
], dtype=np.int32)

# Knight PST: "Knights on the rim are dim"
KNIGHT_TABLE = np.array([
    [-50, -40, -30, -30, -30, -30, -40, -50],
    [-40, -20,   0,   0,   0,   0, -20, -40],
    [-30,   0,  10,  15,  15,  10,   0, -30],
    [-30,   5,  15,  20,  20,  15,   5, -30],
    [-30,   0,  15,  20,  20,  15,   0, -30],
    [-30,   5,  10,  15,  15,  10,   5, -30],
    [-40, -20,   0,   5,   5,   0, -20, -40],
    [-50, -40, -30, -30, -30, -30, -40, -50],
], dtype=np.int32)

# Bishop PST: prefer the long diagonals and central squares
BISHOP_TABLE = np.array([
    [-20, -10, -10, -10, -10, -10, -10, -20],
    [-10,   0,   0,   0,   0,   0,   0, -10],
    [-10,   0,  10,  10,  10,  10,   0, -10],
    [-10,   5,   5,  10,  10,   5,   5, -10],
    [-10,   0,  10,  10,  10,  10,   0, -10],
    [-10,  10,  10,  10,  10,  10,  10, -10],
    [-10,   5,   0,   0,   0,   0,   5, -10],
    [-20, -10, -10, -10, -10, -10, -10, -20],
], dtype=np.int32)

# Rook PST: prefer the 7th rank and the central files of the back rank
ROOK_TABLE = np.array([
    [  0,   0,   0,   0,   0,   0,   0,   0],
    [  5,  10,  10,  10,  10,  10,  10,   5],
    [ -5,   0,   0,   0,   0,   0,   0,  -5],
    [ -5,   0,   0,   0,   0,   0,   0,  -5],
    [ -5,   0,   0,   0,   0,   0,   0,  -5],
    [ -5,   0,   0,   0,   0,   0,   0,  -5],
    [ -5,   0,   0,   0,   0,   0,   0,  -5],
    [  0,   0,   0,  10,  10,   0,   0,   0],
], dtype=np.int32)

# Queen PST: avoid early development, prefer central control
QUEEN_TABLE = np.array([
    [-20, -10, -10,  -5,  -5, -10, -10, -20],
    [-10,   0,   0,   0,   0,   0,   0, -10],
    [-10,   0,   5,   5,   5,   5,   0, -10],
    [ -5,   0,   5,   5,   5,   5,   0,  -5],
    [  0,   0,   5,   5,   5,   5,   0,  -5],
    [-10,   5,   5,   5,   5,   5,   0, -10],
    [-10,   0,   5,   0,   0,   0,   0, -10],
    [-20, -10, -10,  -5,  -5, -10, -10, -20],
], dtype=np.int32)

# King PST (Middlegame): stay behind the pawns, prefer the castled corner
KING_MIDDLEGAME_TABLE = np.array([
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-20, -30, -30, -40, -40, -30, -30, -20],
    [-10, -20, -20, -20, -20, -20, -20, -10],
    [ 20,  20,   0,   0,   0,   0,  20,  20],
    [ 20,  40,  10,   0,   0,  10,  40,  20],
], dtype=np.int32)

# King PST (Endgame): centralize the king
KING_ENDGAME_TABLE = np.array([
    [-50, -40, -30, -20, -20, -30, -40, -50],
    [-30, -20, -10,   0,   0, -10, -20, -30],
    [-30, -10,  20,  30,  30,  20, -10, -30],
    [-30, -10,  30,  40,  40,  30, -10, -30],
    [-30, -10,  30,  40,  40,  30, -10, -30],
    [-30, -10,  20,  30,  30,  20, -10, -30],
    [-30, -30,   0,   0,   0,   0, -30, -30],
    [-50, -30, -30, -30, -30, -30, -30, -50],
], dtype=np.int32)
#fmt: on

CENTER_SQUARES = [Square(3, 3), Square(3, 4), Square(4, 3), Square(4, 4)]

EXTENDED_CENTER_SQUARES = [
    Square(2, 2), Square(2, 3), Square(2, 4), Square(2, 5),
    Square(3, 2), Square(3, 5),
    Square(4, 2), Square(4, 5),
    Square(5, 2), Square(5, 3), Square(5, 4), Square(5, 5),
]


class ClassicalEvaluator(Evaluator):
    """
    Classical evaluation: material, piece-square tables, center control,
    king safety and mobility.

    Attributes:
        piece_tables: Dictionary mapping piece kinds to PST arrays
        weights: Bonus sizes for the positional terms
        use_endgame_king_table: Switch the king to KING_ENDGAME_TABLE once
            Position.is_endgame() holds (off by default)
    """

    def __init__(
        self,
        weights: Optional[EvaluationWeights] = None,
        use_endgame_king_table: bool = False,
    ):
        """Initialize the classical evaluator with piece-square tables."""
        self.piece_tables = {
            PieceKind.PAWN: PAWN_TABLE,
            PieceKind.KNIGHT: KNIGHT_TABLE,
            PieceKind.BISHOP: BISHOP_TABLE,
            PieceKind.ROOK: ROOK_TABLE,
            PieceKind.QUEEN: QUEEN_TABLE,
            PieceKind.KING: KING_MIDDLEGAME_TABLE,
        }
        self.weights = weights if weights is not None else EvaluationWeights()
        self.use_endgame_king_table = use_endgame_king_table

    def piece_square_value(self, piece: Piece, square: Square, endgame: bool = False) -> int:
        """
        PST bonus of a piece on a square, from the piece owner's perspective.

        Black pieces read the table with the row flipped vertically.
        """
        if piece.kind is PieceKind.KING and endgame:
            table = KING_ENDGAME_TABLE
        else:
            table = self.piece_tables[piece.kind]
        row = square.row if piece.color is Color.WHITE else 7 - square.row
        return int(table[row, square.col])

    def material(self, position: Position) -> int:
        """Material plus PST, White minus Black."""
        endgame = self.use_endgame_king_table and position.is_endgame()
        score = 0
        for square, piece in position.pieces():
            value = PIECE_VALUES[piece.kind] + self.piece_square_value(piece, square, endgame)
            if piece.color is Color.WHITE:
                score += value
            else:
                score -= value
        return score

    def center_control(self, position: Position) -> int:
        score = 0
        for squares, bonus in (
            (CENTER_SQUARES, self.weights.center_bonus),
            (EXTENDED_CENTER_SQUARES, self.weights.extended_center_bonus),
        ):
            for square in squares:
                if position.is_square_attacked(square, Color.WHITE):
                    score += bonus
                if position.is_square_attacked(square, Color.BLACK):
                    score -= bonus
        return score

    def king_safety(self, position: Position) -> int:
        score = 0
        for color, sign in ((Color.WHITE, 1), (Color.BLACK, -1)):
            king = position.find_king(color)
            if king is None:
                continue
            back_rank = 7 if color is Color.WHITE else 0
            if king.row != back_rank:
                continue
            # Castled squares (c/g file) earn a bonus, d/e file a penalty
            if king.col in (2, 6):
                score += sign * self.weights.castled_king_bonus
            elif king.col in (3, 4):
                score -= sign * self.weights.central_king_penalty
        return score

    def mobility(self, position: Position) -> int:
        white_moves = len(position.all_legal_moves(Color.WHITE))
        black_moves = len(position.all_legal_moves(Color.BLACK))
        return (white_moves - black_moves) * self.weights.mobility_weight

    def evaluate(self, position: Position) -> int:
        """
        Evaluate position using material, PST, center control, king safety
        and mobility.

        Args:
            position: Position to evaluate

        Returns:
            int: Evaluation in centipawns (White's perspective)
        """
        return (
            self.material(position)
            + self.center_control(position)
            + self.king_safety(position)
            + self.mobility(position)
        )
