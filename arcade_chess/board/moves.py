"""
Move Values and Notation

A Move is an immutable value produced by the move generator. Legality is
decided at generation time; nothing re-validates a move when it is applied.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from arcade_chess.board.pieces import FILES, RANKS, Color, Piece, PieceKind, Square


class CastlingSide(Enum):
    KINGSIDE = "kingside"
    QUEENSIDE = "queenside"


@dataclass
class CastlingRights:
    """
    Castling availability for both sides.

    A right only ever goes from True to False during a game: it is revoked
    when the king moves, when the rook leaves its home corner, or when the
    rook is captured on its home corner.
    """

    white_kingside: bool = True
    white_queenside: bool = True
    black_kingside: bool = True
    black_queenside: bool = True

    def has(self, color: Color, side: CastlingSide) -> bool:
        return getattr(self, self._field(color, side))

    def revoke(self, color: Color, side: Optional[CastlingSide] = None) -> None:
        """Revoke one side, or both sides when side is None."""
        sides = [side] if side is not None else list(CastlingSide)
        for s in sides:
            setattr(self, self._field(color, s), False)

    def copy(self) -> "CastlingRights":
        return CastlingRights(
            self.white_kingside,
            self.white_queenside,
            self.black_kingside,
            self.black_queenside,
        )

    def to_fen(self) -> str:
        field = ""
        if self.white_kingside:
            field += "K"
        if self.white_queenside:
            field += "Q"
        if self.black_kingside:
            field += "k"
        if self.black_queenside:
            field += "q"
        return field or "-"

    @classmethod
    def from_fen(cls, field: str) -> "CastlingRights":
        return cls(
            white_kingside="K" in field,
            white_queenside="Q" in field,
            black_kingside="k" in field,
            black_queenside="q" in field,
        )

    @staticmethod
    def _field(color: Color, side: CastlingSide) -> str:
        return f"{color.value}_{side.value}"


@dataclass(frozen=True)
class Move:
    """
    A single move.

    Attributes:
        from_square: Origin square
        to_square: Destination square
        piece: The moving piece (before promotion)
        captured: Captured piece, if any (the passed pawn for en passant)
        promotion: Promotion target for pawn moves onto the back rank
        is_double_push: Two-square pawn advance (sets the en passant target)
        en_passant: En passant capture
        castling: Castling side, if this is a castling move
    """

    from_square: Square
    to_square: Square
    piece: Piece
    captured: Optional[Piece] = None
    promotion: Optional[PieceKind] = None
    is_double_push: bool = False
    en_passant: bool = False
    castling: Optional[CastlingSide] = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def uci(self) -> str:
        """Long algebraic form, e.g. 'e2e4' or 'e7e8q'."""
        text = self.from_square.name + self.to_square.name
        if self.promotion is not None:
            text += self.promotion.value
        return text

    def __str__(self) -> str:
        return self.uci


def move_notation(move: Move, promotion: Optional[PieceKind] = None) -> str:
    """
    Short algebraic notation for a move.

    Disambiguation between two identical pieces reaching the same square is
    not attempted, and check/mate suffixes are not appended.

    Args:
        move: Move being played
        promotion: Piece actually promoted to (defaults to move.promotion)

    Returns:
        Notation such as 'e4', 'Nf3', 'exd5', 'O-O' or 'e8=Q'
    """
    if move.castling is CastlingSide.KINGSIDE:
        return "O-O"
    if move.castling is CastlingSide.QUEENSIDE:
        return "O-O-O"

    notation = ""
    is_pawn = move.piece.kind is PieceKind.PAWN
    if not is_pawn:
        notation += move.piece.kind.value.upper()

    if move.captured is not None:
        if is_pawn:
            notation += FILES[move.from_square.col]
        notation += "x"

    notation += FILES[move.to_square.col] + RANKS[move.to_square.row]

    promoted = promotion or move.promotion
    if move.promotion is not None and promoted is not None:
        notation += "=" + promoted.value.upper()

    return notation
