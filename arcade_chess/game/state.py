"""
Game State

GameState is the record the UI reads: the authoritative Position plus
history, captured pieces, selection and the derived terminal flags. The
terminal flags are recomputed by ChessGame after every applied move and are
never set by callers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from arcade_chess.board.moves import CastlingRights, Move
from arcade_chess.board.pieces import Color, Piece, Square
from arcade_chess.board.position import Position


class OpponentKind(Enum):
    AI = "ai"
    HUMAN = "human"


@dataclass(frozen=True)
class HistoryEntry:
    """One played move: notation, mover and endpoints."""

    notation: str
    color: Color
    from_square: Square
    to_square: Square
    move: Move


@dataclass
class GameState:
    """
    State of one game.

    Attributes:
        position: Authoritative position (board, turn, castling, en passant, clocks)
        opponent: Whether Black/White is played by the AI or a second human
        player_color: Color of the local player in AI games
        last_move: Most recently applied move
        move_history: Applied moves, in order
        captured_white: Pieces captured by White, in capture order
        captured_black: Pieces captured by Black, in capture order
        selected_square: Square selected through select_square
        valid_moves: Legal moves of the selected piece
        is_check: Side to move is in check
        is_checkmate: Side to move is checkmated
        is_stalemate: Side to move has no legal move and is not in check
        is_draw: Drawn by the fifty-move rule
        draw_reason: Why the game was drawn
        game_over: Any of checkmate, stalemate or draw
        winner: Winning color after checkmate
    """

    position: Position = field(default_factory=Position.initial)
    opponent: OpponentKind = OpponentKind.AI
    player_color: Color = Color.WHITE

    last_move: Optional[Move] = None
    move_history: List[HistoryEntry] = field(default_factory=list)
    captured_white: List[Piece] = field(default_factory=list)
    captured_black: List[Piece] = field(default_factory=list)

    selected_square: Optional[Square] = None
    valid_moves: List[Move] = field(default_factory=list)

    is_check: bool = False
    is_checkmate: bool = False
    is_stalemate: bool = False
    is_draw: bool = False
    draw_reason: Optional[str] = None
    game_over: bool = False
    winner: Optional[Color] = None

    @property
    def turn(self) -> Color:
        return self.position.turn

    @property
    def castling_rights(self) -> CastlingRights:
        return self.position.castling

    @property
    def en_passant_target(self) -> Optional[Square]:
        return self.position.en_passant_target

    @property
    def half_move_clock(self) -> int:
        return self.position.half_move_clock

    @property
    def full_move_number(self) -> int:
        return self.position.full_move_number

    def clear_selection(self) -> None:
        self.selected_square = None
        self.valid_moves = []
