"""
Piece, Color and Square Primitives

Pieces are tagged values (kind + color) instead of case-coded characters.
The FEN letter is still available for serialization: upper case for White,
lower case for Black.

Board Orientation:
    - Row 0 = Rank 8 (Black's back rank)
    - Row 7 = Rank 1 (White's back rank)
    - Column 0 = A-file
    - Column 7 = H-file
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

FILES = "abcdefgh"
RANKS = "87654321"  # indexed by row


class Color(Enum):
    """Side of a piece, or side to move."""

    WHITE = "white"
    BLACK = "black"

    @property
    def opposite(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def fen(self) -> str:
        return "w" if self is Color.WHITE else "b"


class PieceKind(Enum):
    """Piece identity, valued by its lower-case FEN letter."""

    PAWN = "p"
    KNIGHT = "n"
    BISHOP = "b"
    ROOK = "r"
    QUEEN = "q"
    KING = "k"


# Pieces a pawn may promote to, in generation order
PROMOTION_KINDS = (PieceKind.QUEEN, PieceKind.ROOK, PieceKind.BISHOP, PieceKind.KNIGHT)

UNICODE_SYMBOLS = {
    "K": "♔", "Q": "♕", "R": "♖", "B": "♗", "N": "♘", "P": "♙",
    "k": "♚", "q": "♛", "r": "♜", "b": "♝", "n": "♞", "p": "♟",
}


@dataclass(frozen=True)
class Piece:
    """
    A piece on the board.

    Attributes:
        kind: Piece identity (pawn, knight, ...)
        color: Owning side
    """

    kind: PieceKind
    color: Color

    @property
    def symbol(self) -> str:
        """FEN letter: upper case for White, lower case for Black."""
        letter = self.kind.value
        return letter.upper() if self.color is Color.WHITE else letter

    @property
    def unicode(self) -> str:
        return UNICODE_SYMBOLS[self.symbol]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Piece":
        """
        Build a piece from its FEN letter.

        Raises:
            ValueError: If the letter is not one of pnbrqk / PNBRQK
        """
        kind = PieceKind(symbol.lower())
        color = Color.WHITE if symbol.isupper() else Color.BLACK
        return cls(kind, color)

    def __str__(self) -> str:
        return self.symbol


class Square(NamedTuple):
    """Board coordinates. Off-board values are allowed and simply never hold a piece."""

    row: int
    col: int

    @property
    def is_on_board(self) -> bool:
        return 0 <= self.row < 8 and 0 <= self.col < 8

    @property
    def name(self) -> str:
        """
        Algebraic name, e.g. 'e4'.

        Raises:
            ValueError: If the square is off the board
        """
        if not self.is_on_board:
            raise ValueError(f"Square ({self.row}, {self.col}) is off the board")
        return FILES[self.col] + RANKS[self.row]

    @classmethod
    def from_name(cls, name: str) -> "Square":
        """
        Parse an algebraic square name.

        Raises:
            ValueError: If the name is not a valid square (a1..h8)
        """
        if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
            raise ValueError(f"Invalid square name: {name!r}")
        return cls(RANKS.index(name[1]), FILES.index(name[0]))

    def offset(self, d_row: int, d_col: int) -> "Square":
        return Square(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        return self.name if self.is_on_board else f"({self.row}, {self.col})"
