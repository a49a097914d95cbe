"""
FEN Import and Export

Forsyth-Edwards Notation is the compact position format used for
interoperability:

    rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1
    |                                            | |    |  | |
    board (rank 8 first)              active color |    |  | full-move number
                                        castling rights |  half-move clock
                                          en passant target

Malformed input raises FENError rather than producing a half-valid position,
since terminal-state detection assumes exactly one king per side.

Reference:
    https://www.chessprogramming.org/Forsyth-Edwards_Notation
"""

import logging
import re
from typing import List, NamedTuple, Optional

from arcade_chess.board.moves import CastlingRights
from arcade_chess.board.pieces import Color, Piece, PieceKind, Square

logger = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

Grid = List[List[Optional[Piece]]]

_CASTLING_RE = re.compile(r"^(-|K?Q?k?q?)$")


class FENError(ValueError):
    """Raised when a FEN string is structurally invalid."""


class FENFields(NamedTuple):
    """Parsed components of a FEN string."""

    grid: Grid
    turn: Color
    castling: CastlingRights
    en_passant: Optional[Square]
    half_move_clock: int
    full_move_number: int


def parse_fen(fen: str) -> FENFields:
    """
    Parse a FEN string into its components.

    The two move counters may be omitted (they default to 0 and 1), which
    accepts the 4-field form some tools emit.

    Args:
        fen: FEN string

    Returns:
        FENFields with a fresh 8x8 grid

    Raises:
        FENError: If any field is malformed
    """
    try:
        return _parse(fen)
    except FENError as e:
        logger.debug(f"Rejected FEN {fen!r}: {e}")
        raise


def _parse(fen: str) -> FENFields:
    parts = fen.split()
    if len(parts) not in (4, 6):
        raise FENError(f"Expected 4 or 6 fields, got {len(parts)}")

    grid = _parse_placement(parts[0])

    if parts[1] not in ("w", "b"):
        raise FENError(f"Invalid active color: {parts[1]!r}")
    turn = Color.WHITE if parts[1] == "w" else Color.BLACK

    if not parts[2] or not _CASTLING_RE.match(parts[2]):
        raise FENError(f"Invalid castling field: {parts[2]!r}")
    castling = CastlingRights.from_fen(parts[2])

    en_passant = None
    if parts[3] != "-":
        try:
            en_passant = Square.from_name(parts[3])
        except ValueError:
            raise FENError(f"Invalid en passant square: {parts[3]!r}") from None
        # The target lies behind a pawn of the side that just moved
        expected_row = 2 if turn is Color.WHITE else 5
        if en_passant.row != expected_row:
            raise FENError(
                f"En passant square {parts[3]!r} does not match {turn.value} to move"
            )

    half_move_clock, full_move_number = 0, 1
    if len(parts) == 6:
        half_move_clock = _parse_counter(parts[4], "half-move clock")
        full_move_number = _parse_counter(parts[5], "full-move number")
        if full_move_number < 1:
            raise FENError(f"Full-move number must be at least 1, got {full_move_number}")

    return FENFields(grid, turn, castling, en_passant, half_move_clock, full_move_number)


def _parse_placement(placement: str) -> Grid:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FENError(f"Expected 8 ranks, got {len(ranks)}")

    grid: Grid = []
    kings = {Color.WHITE: 0, Color.BLACK: 0}
    for row_index, rank in enumerate(ranks):
        row: List[Optional[Piece]] = []
        for char in rank:
            if char.isdigit():
                if char in "09":
                    raise FENError(f"Invalid empty-square count {char!r} in rank {rank!r}")
                row.extend([None] * int(char))
            else:
                try:
                    piece = Piece.from_symbol(char)
                except ValueError:
                    raise FENError(f"Unknown piece letter {char!r}") from None
                if piece.kind is PieceKind.KING:
                    kings[piece.color] += 1
                if piece.kind is PieceKind.PAWN and row_index in (0, 7):
                    raise FENError(f"Pawn on back rank in rank {rank!r}")
                row.append(piece)
        if len(row) != 8:
            raise FENError(f"Rank {rank!r} describes {len(row)} squares, expected 8")
        grid.append(row)

    for color, count in kings.items():
        if count != 1:
            raise FENError(f"Expected exactly one {color.value} king, found {count}")

    return grid


def _parse_counter(text: str, label: str) -> int:
    if not text.isdigit():
        raise FENError(f"Invalid {label}: {text!r}")
    return int(text)


def format_fen(
    grid: Grid,
    turn: Color,
    castling: CastlingRights,
    en_passant: Optional[Square],
    half_move_clock: int,
    full_move_number: int,
) -> str:
    """Serialize position components to a 6-field FEN string."""
    ranks = []
    for row in grid:
        text = ""
        empty = 0
        for piece in row:
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += piece.symbol
        if empty:
            text += str(empty)
        ranks.append(text)

    return " ".join([
        "/".join(ranks),
        turn.fen,
        castling.to_fen(),
        en_passant.name if en_passant is not None else "-",
        str(half_move_clock),
        str(full_move_number),
    ])
