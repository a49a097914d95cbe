"""
Position and Move Generation

This module owns the chess rules: the 8x8 board, side to move, castling
rights, en passant target and move clocks, plus move generation and move
application.

Move generation is two-phase:
    1. Pseudo-legal generation per piece (geometry only)
    2. Legal filtering: play the move on the board, test whether the
       mover's king is attacked, then restore the board exactly

Generation order is deterministic: squares are visited row by row
(rank 8 first, a-file first) and each piece tries its directions in the
fixed order of DIRECTIONS. The search relies on this order to break ties.

Reference:
    https://www.chessprogramming.org/Move_Generation
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from arcade_chess.board.fen import STARTING_FEN, FENError, Grid, format_fen, parse_fen
from arcade_chess.board.moves import CastlingRights, CastlingSide, Move
from arcade_chess.board.pieces import (
    PROMOTION_KINDS,
    Color,
    Piece,
    PieceKind,
    Square,
)

logger = logging.getLogger(__name__)

Direction = Tuple[int, int]

ROOK_DIRECTIONS: List[Direction] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
BISHOP_DIRECTIONS: List[Direction] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
QUEEN_DIRECTIONS: List[Direction] = ROOK_DIRECTIONS + BISHOP_DIRECTIONS
KING_OFFSETS: List[Direction] = QUEEN_DIRECTIONS
KNIGHT_OFFSETS: List[Direction] = [
    (2, 1), (2, -1), (-2, 1), (-2, -1), (1, 2), (1, -2), (-1, 2), (-1, -2),
]

SLIDING_DIRECTIONS: Dict[PieceKind, List[Direction]] = {
    PieceKind.BISHOP: BISHOP_DIRECTIONS,
    PieceKind.ROOK: ROOK_DIRECTIONS,
    PieceKind.QUEEN: QUEEN_DIRECTIONS,
}

# Rook home corners and the castling right each one guards
ROOK_CORNERS: Dict[Square, Tuple[Color, CastlingSide]] = {
    Square(7, 0): (Color.WHITE, CastlingSide.QUEENSIDE),
    Square(7, 7): (Color.WHITE, CastlingSide.KINGSIDE),
    Square(0, 0): (Color.BLACK, CastlingSide.QUEENSIDE),
    Square(0, 7): (Color.BLACK, CastlingSide.KINGSIDE),
}


def home_row(color: Color) -> int:
    return 7 if color is Color.WHITE else 0


def pawn_direction(color: Color) -> int:
    """Row delta of a pawn advance (White moves towards row 0)."""
    return -1 if color is Color.WHITE else 1


class Position:
    """
    A chess position: piece placement plus the state needed to generate moves.

    Attributes:
        board: 8x8 grid of Optional[Piece], board[row][col]
        turn: Side to move
        castling: Castling rights
        en_passant_target: Square passed over by the last double pawn push
        half_move_clock: Half-moves since the last pawn move or capture
        full_move_number: Incremented after each Black move
    """

    def __init__(
        self,
        board: Optional[Grid] = None,
        turn: Color = Color.WHITE,
        castling: Optional[CastlingRights] = None,
        en_passant_target: Optional[Square] = None,
        half_move_clock: int = 0,
        full_move_number: int = 1,
    ):
        self.board: Grid = board if board is not None else [[None] * 8 for _ in range(8)]
        self.turn = turn
        self.castling = castling if castling is not None else CastlingRights()
        self.en_passant_target = en_passant_target
        self.half_move_clock = half_move_clock
        self.full_move_number = full_move_number

    # ------------------------------------------------------------------
    # Construction and serialization
    # ------------------------------------------------------------------

    @classmethod
    def initial(cls) -> "Position":
        """Standard starting position."""
        return cls.from_fen(STARTING_FEN)

    @classmethod
    def from_fen(cls, fen: str) -> "Position":
        """
        Build a position from a FEN string.

        Raises:
            FENError: If the string is malformed or the side not to move
                is in check
        """
        fields = parse_fen(fen)
        position = cls(
            board=fields.grid,
            turn=fields.turn,
            castling=fields.castling,
            en_passant_target=fields.en_passant,
            half_move_clock=fields.half_move_clock,
            full_move_number=fields.full_move_number,
        )
        if position.is_in_check(position.turn.opposite):
            logger.debug(f"Rejected FEN {fen!r}: side not to move is in check")
            raise FENError(f"{position.turn.opposite.value} is in check but not to move")
        return position

    def fen(self) -> str:
        return format_fen(
            self.board,
            self.turn,
            self.castling,
            self.en_passant_target,
            self.half_move_clock,
            self.full_move_number,
        )

    def copy(self) -> "Position":
        """Independent copy; pieces are immutable so rows are copied shallowly."""
        return Position(
            board=[row[:] for row in self.board],
            turn=self.turn,
            castling=self.castling.copy(),
            en_passant_target=self.en_passant_target,
            half_move_clock=self.half_move_clock,
            full_move_number=self.full_move_number,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.turn is other.turn
            and self.castling == other.castling
            and self.en_passant_target == other.en_passant_target
            and self.half_move_clock == other.half_move_clock
            and self.full_move_number == other.full_move_number
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Position({self.fen()!r})"

    def __str__(self) -> str:
        lines = []
        for row_index, row in enumerate(self.board):
            cells = [piece.symbol if piece else "." for piece in row]
            lines.append(f"{8 - row_index} " + " ".join(cells))
        lines.append("  a b c d e f g h")
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Board queries
    # ------------------------------------------------------------------

    def piece_at(self, square: Square) -> Optional[Piece]:
        """Piece on a square; None for empty or off-board squares."""
        row, col = square
        if 0 <= row < 8 and 0 <= col < 8:
            return self.board[row][col]
        return None

    def set_piece_at(self, square: Square, piece: Optional[Piece]) -> None:
        self.board[square.row][square.col] = piece

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[Square, Piece]]:
        """Occupied squares in row-major order, optionally for one color."""
        for row in range(8):
            for col in range(8):
                piece = self.board[row][col]
                if piece is not None and (color is None or piece.color is color):
                    yield Square(row, col), piece

    def find_king(self, color: Color) -> Optional[Square]:
        for square, piece in self.pieces(color):
            if piece.kind is PieceKind.KING:
                return square
        return None

    def is_endgame(self) -> bool:
        """Endgame if no queens remain or at most two minor pieces remain."""
        queens = 0
        minors = 0
        for _, piece in self.pieces():
            if piece.kind is PieceKind.QUEEN:
                queens += 1
            elif piece.kind in (PieceKind.KNIGHT, PieceKind.BISHOP):
                minors += 1
        return queens == 0 or minors <= 2

    # ------------------------------------------------------------------
    # Attack detection
    # ------------------------------------------------------------------

    def is_square_attacked(self, square: Square, by_color: Color) -> bool:
        """
        Check whether any piece of by_color attacks a square.

        Off-board squares are never attacked. The check does not care what
        stands on the target square.
        """
        if not square.is_on_board:
            return False
        row, col = square

        # Pawns attack diagonally forward, so look one row behind the target
        pawn_row = row - pawn_direction(by_color)
        for d_col in (-1, 1):
            piece = self.piece_at(Square(pawn_row, col + d_col))
            if piece is not None and piece.color is by_color and piece.kind is PieceKind.PAWN:
                return True

        for d_row, d_col in KNIGHT_OFFSETS:
            piece = self.piece_at(Square(row + d_row, col + d_col))
            if piece is not None and piece.color is by_color and piece.kind is PieceKind.KNIGHT:
                return True

        for d_row, d_col in KING_OFFSETS:
            piece = self.piece_at(Square(row + d_row, col + d_col))
            if piece is not None and piece.color is by_color and piece.kind is PieceKind.KING:
                return True

        straight = (PieceKind.ROOK, PieceKind.QUEEN)
        for d_row, d_col in ROOK_DIRECTIONS:
            piece = self._first_piece_along(square, d_row, d_col)
            if piece is not None and piece.color is by_color and piece.kind in straight:
                return True

        diagonal = (PieceKind.BISHOP, PieceKind.QUEEN)
        for d_row, d_col in BISHOP_DIRECTIONS:
            piece = self._first_piece_along(square, d_row, d_col)
            if piece is not None and piece.color is by_color and piece.kind in diagonal:
                return True

        return False

    def _first_piece_along(self, square: Square, d_row: int, d_col: int) -> Optional[Piece]:
        row, col = square.row + d_row, square.col + d_col
        while 0 <= row < 8 and 0 <= col < 8:
            piece = self.board[row][col]
            if piece is not None:
                return piece
            row += d_row
            col += d_col
        return None

    def is_in_check(self, color: Optional[Color] = None) -> bool:
        """Whether color's king is attacked (False if it has no king)."""
        color = color or self.turn
        king = self.find_king(color)
        if king is None:
            return False
        return self.is_square_attacked(king, color.opposite)

    # ------------------------------------------------------------------
    # Pseudo-legal generation
    # ------------------------------------------------------------------

    def pseudo_legal_moves(self, square: Square) -> List[Move]:
        """Geometrically valid moves of the piece on square, ignoring own-king safety."""
        piece = self.piece_at(square)
        if piece is None:
            return []

        moves: List[Move] = []
        if piece.kind is PieceKind.PAWN:
            self._pawn_moves(square, piece, moves)
        elif piece.kind is PieceKind.KNIGHT:
            self._step_moves(square, piece, KNIGHT_OFFSETS, moves)
        elif piece.kind is PieceKind.KING:
            self._step_moves(square, piece, KING_OFFSETS, moves)
            self._castling_moves(square, piece, moves)
        else:
            self._sliding_moves(square, piece, SLIDING_DIRECTIONS[piece.kind], moves)
        return moves

    def _pawn_moves(self, square: Square, piece: Piece, moves: List[Move]) -> None:
        color = piece.color
        direction = pawn_direction(color)
        start_row = 6 if color is Color.WHITE else 1

        one_forward = square.offset(direction, 0)
        if one_forward.is_on_board and self.piece_at(one_forward) is None:
            self._add_pawn_move(square, one_forward, piece, None, moves)

            if square.row == start_row:
                two_forward = square.offset(2 * direction, 0)
                if self.piece_at(two_forward) is None:
                    moves.append(Move(square, two_forward, piece, is_double_push=True))

        for d_col in (-1, 1):
            target_square = square.offset(direction, d_col)
            if not target_square.is_on_board:
                continue

            target = self.piece_at(target_square)
            if target is not None and target.color is not color:
                self._add_pawn_move(square, target_square, piece, target, moves)

            if self._can_capture_en_passant(square, target_square, piece):
                moves.append(Move(
                    square,
                    target_square,
                    piece,
                    captured=Piece(PieceKind.PAWN, color.opposite),
                    en_passant=True,
                ))

    def _can_capture_en_passant(self, square: Square, target: Square, piece: Piece) -> bool:
        if self.en_passant_target != target or piece.color is not self.turn:
            return False
        if self.piece_at(target) is not None:
            return False
        # The passed pawn sits beside the capturer, on the target's file
        passed = self.piece_at(Square(square.row, target.col))
        return passed == Piece(PieceKind.PAWN, piece.color.opposite)

    @staticmethod
    def _add_pawn_move(
        square: Square,
        target: Square,
        piece: Piece,
        captured: Optional[Piece],
        moves: List[Move],
    ) -> None:
        promotion_row = 0 if piece.color is Color.WHITE else 7
        if target.row == promotion_row:
            for kind in PROMOTION_KINDS:
                moves.append(Move(square, target, piece, captured=captured, promotion=kind))
        else:
            moves.append(Move(square, target, piece, captured=captured))

    def _step_moves(
        self,
        square: Square,
        piece: Piece,
        offsets: List[Direction],
        moves: List[Move],
    ) -> None:
        for d_row, d_col in offsets:
            target_square = square.offset(d_row, d_col)
            if not target_square.is_on_board:
                continue
            target = self.piece_at(target_square)
            if target is None:
                moves.append(Move(square, target_square, piece))
            elif target.color is not piece.color:
                moves.append(Move(square, target_square, piece, captured=target))

    def _sliding_moves(
        self,
        square: Square,
        piece: Piece,
        directions: List[Direction],
        moves: List[Move],
    ) -> None:
        for d_row, d_col in directions:
            target_square = square.offset(d_row, d_col)
            while target_square.is_on_board:
                target = self.piece_at(target_square)
                if target is None:
                    moves.append(Move(square, target_square, piece))
                else:
                    if target.color is not piece.color:
                        moves.append(Move(square, target_square, piece, captured=target))
                    break
                target_square = target_square.offset(d_row, d_col)

    def _castling_moves(self, square: Square, piece: Piece, moves: List[Move]) -> None:
        color = piece.color
        row = home_row(color)
        if square != Square(row, 4):
            return

        opponent = color.opposite
        if self.is_square_attacked(square, opponent):
            return

        rook = Piece(PieceKind.ROOK, color)

        if self.castling.has(color, CastlingSide.KINGSIDE) and self.board[row][7] == rook:
            between = [Square(row, 5), Square(row, 6)]
            if all(self.piece_at(s) is None for s in between) and not any(
                self.is_square_attacked(s, opponent) for s in between
            ):
                moves.append(Move(square, Square(row, 6), piece, castling=CastlingSide.KINGSIDE))

        if self.castling.has(color, CastlingSide.QUEENSIDE) and self.board[row][0] == rook:
            between = [Square(row, 1), Square(row, 2), Square(row, 3)]
            passed = [Square(row, 2), Square(row, 3)]
            if all(self.piece_at(s) is None for s in between) and not any(
                self.is_square_attacked(s, opponent) for s in passed
            ):
                moves.append(Move(square, Square(row, 2), piece, castling=CastlingSide.QUEENSIDE))

    # ------------------------------------------------------------------
    # Legal generation
    # ------------------------------------------------------------------

    def leaves_king_in_check(self, move: Move) -> bool:
        """
        Whether playing move would leave the mover's own king attacked.

        The move is made on this board and then fully reverted, including
        any pawn removed by en passant.
        """
        board = self.board
        from_row, from_col = move.from_square
        to_row, to_col = move.to_square

        moving = board[from_row][from_col]
        displaced = board[to_row][to_col]
        board[to_row][to_col] = moving
        board[from_row][from_col] = None

        passed_pawn = None
        if move.en_passant:
            passed_pawn = board[from_row][to_col]
            board[from_row][to_col] = None

        try:
            return self.is_in_check(move.piece.color)
        finally:
            board[from_row][from_col] = moving
            board[to_row][to_col] = displaced
            if move.en_passant:
                board[from_row][to_col] = passed_pawn

    def legal_moves(self, square: Square) -> List[Move]:
        """
        Legal moves of the piece on square.

        Empty and off-board squares yield an empty list. Pieces of either
        color are accepted; callers restrict to the side to move.
        """
        return [m for m in self.pseudo_legal_moves(square) if not self.leaves_king_in_check(m)]

    def all_legal_moves(self, color: Optional[Color] = None) -> List[Move]:
        """All legal moves for color (default: side to move), in generation order."""
        color = color or self.turn
        moves: List[Move] = []
        for square, _ in self.pieces(color):
            moves.extend(self.legal_moves(square))
        return moves

    def has_legal_moves(self, color: Optional[Color] = None) -> bool:
        color = color or self.turn
        for square, _ in self.pieces(color):
            for move in self.pseudo_legal_moves(square):
                if not self.leaves_king_in_check(move):
                    return True
        return False

    def parse_uci(self, text: str) -> Move:
        """
        Find the legal move of the side to move written in UCI form.

        Raises:
            ValueError: If the text is malformed or names no legal move
        """
        text = text.strip().lower()
        if len(text) not in (4, 5):
            raise ValueError(f"Invalid move format: {text!r}")
        from_square = Square.from_name(text[:2])
        piece = self.piece_at(from_square)
        if piece is None or piece.color is not self.turn:
            raise ValueError(f"Illegal move: {text}")
        for move in self.legal_moves(from_square):
            if move.uci == text:
                return move
        raise ValueError(f"Illegal move: {text}")

    # ------------------------------------------------------------------
    # Move application
    # ------------------------------------------------------------------

    def captured_piece(self, move: Move) -> Optional[Piece]:
        """Piece that playing move would remove from the board."""
        if move.en_passant:
            return self.piece_at(Square(move.from_square.row, move.to_square.col))
        return self.piece_at(move.to_square)

    def play(self, move: Move, promotion: Optional[PieceKind] = None) -> Optional[Piece]:
        """
        Apply a legal move with full rules bookkeeping.

        Relocates the piece (promoting if needed), moves the castling rook or
        removes the en passant victim, updates castling rights, en passant
        target and clocks, and passes the turn.

        Args:
            move: A move produced by the legal move generator
            promotion: Promotion piece; defaults to move.promotion

        Returns:
            The captured piece, if any
        """
        piece = self.piece_at(move.from_square) or move.piece
        color = piece.color

        captured = self.captured_piece(move)
        if move.en_passant:
            self.set_piece_at(Square(move.from_square.row, move.to_square.col), None)

        placed = piece
        if move.promotion is not None:
            placed = Piece(promotion or move.promotion, color)
        self.set_piece_at(move.to_square, placed)
        self.set_piece_at(move.from_square, None)

        if move.castling is not None:
            row = move.from_square.row
            if move.castling is CastlingSide.KINGSIDE:
                rook_from, rook_to = Square(row, 7), Square(row, 5)
            else:
                rook_from, rook_to = Square(row, 0), Square(row, 3)
            self.set_piece_at(rook_to, self.piece_at(rook_from))
            self.set_piece_at(rook_from, None)

        self._update_castling_rights(move, piece, captured)

        if move.is_double_push:
            self.en_passant_target = Square(
                (move.from_square.row + move.to_square.row) // 2, move.from_square.col
            )
        else:
            self.en_passant_target = None

        if piece.kind is PieceKind.PAWN or captured is not None:
            self.half_move_clock = 0
        else:
            self.half_move_clock += 1
        if color is Color.BLACK:
            self.full_move_number += 1

        self.turn = color.opposite
        return captured

    def _update_castling_rights(
        self, move: Move, piece: Piece, captured: Optional[Piece]
    ) -> None:
        if piece.kind is PieceKind.KING:
            self.castling.revoke(piece.color)

        if piece.kind is PieceKind.ROOK and move.from_square in ROOK_CORNERS:
            color, side = ROOK_CORNERS[move.from_square]
            if color is piece.color:
                self.castling.revoke(color, side)

        if captured is not None and captured.kind is PieceKind.ROOK and move.to_square in ROOK_CORNERS:
            color, side = ROOK_CORNERS[move.to_square]
            if color is captured.color:
                self.castling.revoke(color, side)
