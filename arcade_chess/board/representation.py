"""
python-chess Interoperability

This module converts between arcade_chess positions/moves and python-chess
objects, so positions can be handed to other tooling (GUIs, analysis,
engines) and so move generation can be cross-checked against an
independent implementation.

Coordinate Mapping:
    python-chess squares are 0-63 with 0 = A1 and 63 = H8.
    arcade_chess squares are (row, col) with row 0 = rank 8.

Data Flow:
    Position → to_python_chess() → chess.Board (via FEN)
    chess.Board → from_python_chess() → Position
"""

import chess

from arcade_chess.board.moves import Move
from arcade_chess.board.pieces import Square
from arcade_chess.board.position import Position


def square_to_index(square: Square) -> int:
    """
    Convert (row, col) coordinates to a python-chess square index.

    Args:
        square: Square where row 0 is rank 8 and col 0 is the a-file

    Returns:
        Square index (0-63)
    """
    rank = 7 - square.row
    file = square.col
    return rank * 8 + file


def index_to_square(index: int) -> Square:
    """
    Convert a python-chess square index to (row, col) coordinates.

    Args:
        index: Square index (0-63) where 0=A1, 63=H8

    Returns:
        Square where row 0 = rank 8 (indices 56-63)
    """
    rank = index // 8
    file = index % 8
    return Square(7 - rank, file)


def to_python_chess(position: Position) -> chess.Board:
    """
    Build a python-chess Board for the same position.

    python-chess drops castling rights whose rook or king is not on its home
    square, which matches how this engine generates castling moves.
    """
    return chess.Board(position.fen())


def from_python_chess(board: chess.Board) -> Position:
    """Build a Position from a python-chess Board (move stack is not carried over)."""
    return Position.from_fen(board.fen(en_passant="fen"))


def to_python_chess_move(move: Move) -> chess.Move:
    return chess.Move.from_uci(move.uci)


def from_python_chess_move(position: Position, move: chess.Move) -> Move:
    """
    Find the legal move matching a python-chess move.

    Raises:
        ValueError: If the move is not legal in position
    """
    return position.parse_uci(move.uci())
