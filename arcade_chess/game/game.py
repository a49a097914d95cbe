"""
Chess Game

ChessGame is the single writer of a game's authoritative state. It exposes
a read-only query surface for the UI and the AI, and two mutation entry
points: select_square (click-driven selection helper) and apply_move.

apply_move does all of its work synchronously:
    1. Record and announce the capture (before the piece is relocated)
    2. Play the move on the position (castling rook, en passant, rights,
       en passant target, clocks, turn)
    3. Append notation to the history
    4. Recompute check / checkmate / stalemate / fifty-move draw
    5. Announce the terminal events, then MOVE and TURN_CHANGE

Moves must come from the legal move generator; they are not re-validated.

Each ChessGame is independent, so several games can run side by side.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from arcade_chess.board.fen import Grid
from arcade_chess.board.moves import Move, move_notation
from arcade_chess.board.pieces import Color, Piece, PieceKind, Square
from arcade_chess.board.position import Position
from arcade_chess.game.events import EventBus, EventType, GameEvent, Listener
from arcade_chess.game.state import GameState, HistoryEntry, OpponentKind

logger = logging.getLogger(__name__)

FIFTY_MOVE_LIMIT = 100  # half-moves


@dataclass(frozen=True)
class SelectionResult:
    """
    Outcome of select_square.

    Attributes:
        selected: A piece of the side to move is now selected
        moved: The click applied a move
        needs_promotion: The click targets a promotion square; the caller
            must pick a piece and call apply_move(move, choice)
        move: The move applied, or awaiting a promotion choice
        valid_moves: Legal moves of the newly selected piece
        events: Events emitted by the applied move
    """

    selected: bool = False
    moved: bool = False
    needs_promotion: bool = False
    move: Optional[Move] = None
    valid_moves: Tuple[Move, ...] = ()
    events: Tuple[GameEvent, ...] = ()


class ChessGame:
    """
    One game of chess.

    Attributes:
        state: Current GameState (replaced on undo)
        events: Listener registry for game events
        prompt_promotion: If True, select_square stops at promotion moves
            and reports needs_promotion instead of promoting to a queen
    """

    def __init__(
        self,
        position: Optional[Position] = None,
        opponent: OpponentKind = OpponentKind.AI,
        player_color: Color = Color.WHITE,
        prompt_promotion: bool = False,
    ):
        position = position if position is not None else Position.initial()
        self.events = EventBus()
        self.prompt_promotion = prompt_promotion
        self.state = GameState(position=position, opponent=opponent, player_color=player_color)

        self._start_fen = position.fen()
        self._played: List[Tuple[Move, Optional[PieceKind]]] = []
        self._update_terminal_state()

    @classmethod
    def new(
        cls,
        opponent: OpponentKind = OpponentKind.AI,
        player_color: Color = Color.WHITE,
    ) -> "ChessGame":
        """Fresh game from the standard starting position."""
        return cls(Position.initial(), opponent, player_color)

    @classmethod
    def from_fen(
        cls,
        fen: str,
        opponent: OpponentKind = OpponentKind.AI,
        player_color: Color = Color.WHITE,
    ) -> "ChessGame":
        """
        Game starting from a FEN position.

        Terminal flags are computed for the loaded position but no events
        are emitted.

        Raises:
            FENError: If the FEN string is malformed
        """
        return cls(Position.from_fen(fen), opponent, player_color)

    # ------------------------------------------------------------------
    # Query surface
    # ------------------------------------------------------------------

    @property
    def position(self) -> Position:
        return self.state.position

    def get_board(self) -> Grid:
        return self.state.position.board

    def get_state(self) -> GameState:
        return self.state

    def get_legal_moves(self, square: Square) -> List[Move]:
        """Legal moves of the piece on square; empty for empty or opponent squares."""
        piece = self.position.piece_at(square)
        if piece is None or piece.color is not self.position.turn:
            return []
        return self.position.legal_moves(square)

    def get_all_legal_moves(self, color: Optional[Color] = None) -> List[Move]:
        return self.position.all_legal_moves(color or self.position.turn)

    def is_in_check(self, color: Optional[Color] = None) -> bool:
        return self.position.is_in_check(color or self.position.turn)

    def is_square_attacked(self, square: Square, by_color: Color) -> bool:
        return self.position.is_square_attacked(square, by_color)

    def find_king(self, color: Color) -> Optional[Square]:
        return self.position.find_king(color)

    def export_position(self) -> str:
        return self.position.fen()

    def is_endgame(self) -> bool:
        return self.position.is_endgame()

    @property
    def is_ai_turn(self) -> bool:
        """Whether the caller should ask the AI for the next move."""
        state = self.state
        return (
            state.opponent is OpponentKind.AI
            and not state.game_over
            and state.turn is not state.player_color
        )

    def can_undo(self) -> bool:
        return bool(self._played)

    def subscribe(self, event_type: EventType, listener: Listener) -> Listener:
        return self.events.subscribe(event_type, listener)

    # ------------------------------------------------------------------
    # Mutation surface
    # ------------------------------------------------------------------

    def select_square(self, square: Square) -> SelectionResult:
        """
        Click-driven selection.

        Selecting a piece of the side to move reports its legal moves. With a
        piece already selected, selecting one of its destinations applies the
        move (the queen variant for promotions, unless prompt_promotion is
        set). Anything else clears the selection.
        """
        state = self.state
        if state.game_over:
            state.clear_selection()
            return SelectionResult()

        piece = self.position.piece_at(square)
        if piece is not None and piece.color is state.turn:
            state.selected_square = square
            state.valid_moves = self.position.legal_moves(square)
            return SelectionResult(selected=True, valid_moves=tuple(state.valid_moves))

        if state.selected_square is not None:
            move = next((m for m in state.valid_moves if m.to_square == square), None)
            if move is not None:
                if move.promotion is not None and self.prompt_promotion:
                    return SelectionResult(needs_promotion=True, move=move)
                events = self.apply_move(move)
                return SelectionResult(moved=True, move=move, events=tuple(events))

        state.clear_selection()
        return SelectionResult()

    def apply_move(self, move: Move, promotion: Optional[PieceKind] = None) -> List[GameEvent]:
        """
        Apply a legal move and recompute the game state.

        Args:
            move: A move produced by the legal move generator
            promotion: Promotion piece for promoting moves (default: the
                move's own promotion kind)

        Returns:
            Events emitted, in emission order
        """
        return self._apply(move, promotion, notify=True)

    def undo(self) -> bool:
        """
        Take back the last move by replaying the game from its start.

        Listeners are kept but not notified during the replay.

        Returns:
            False if there was nothing to undo
        """
        if not self._played:
            return False

        replay = self._played[:-1]
        old = self.state
        self.state = GameState(
            position=Position.from_fen(self._start_fen),
            opponent=old.opponent,
            player_color=old.player_color,
        )
        self._played = []
        self._update_terminal_state()
        for move, promotion in replay:
            self._apply(move, promotion, notify=False)

        logger.debug(f"Undo: {len(replay)} moves replayed, position {self.position.fen()}")
        return True

    def _apply(
        self, move: Move, promotion: Optional[PieceKind], notify: bool
    ) -> List[GameEvent]:
        state = self.state
        position = state.position
        color = move.piece.color
        emitted: List[GameEvent] = []

        def emit(event: GameEvent) -> None:
            emitted.append(event)
            if notify:
                self.events.emit(event)

        captured = position.captured_piece(move)
        if captured is not None:
            if captured.color is Color.WHITE:
                state.captured_black.append(captured)
            else:
                state.captured_white.append(captured)
            emit(GameEvent(EventType.CAPTURE, move, piece=captured))

        promoted = (promotion or move.promotion) if move.promotion is not None else None
        notation = move_notation(move, promoted)
        position.play(move, promoted)

        if promoted is not None:
            emit(GameEvent(EventType.PROMOTION, move, piece=Piece(promoted, color)))

        state.last_move = move
        state.move_history.append(
            HistoryEntry(notation, color, move.from_square, move.to_square, move)
        )
        self._played.append((move, promotion))

        self._update_terminal_state()

        if state.is_checkmate:
            emit(GameEvent(EventType.CHECKMATE, move, color=state.winner))
        elif state.is_stalemate:
            emit(GameEvent(EventType.STALEMATE, move))
        elif state.is_check:
            emit(GameEvent(EventType.CHECK, move, color=state.turn))

        if state.is_draw:
            emit(GameEvent(EventType.DRAW, move, reason=state.draw_reason))

        state.clear_selection()

        emit(GameEvent(EventType.MOVE, move))
        emit(GameEvent(EventType.TURN_CHANGE, move, color=state.turn))

        if notify:
            logger.debug(f"{color.value} played {notation}: {position.fen()}")
            if state.game_over:
                logger.info(f"Game over: {self._result_text()}")

        return emitted

    def _update_terminal_state(self) -> None:
        state = self.state
        position = state.position
        turn = position.turn

        state.is_check = position.is_in_check(turn)
        has_moves = position.has_legal_moves(turn)

        state.is_checkmate = not has_moves and state.is_check
        state.is_stalemate = not has_moves and not state.is_check
        state.winner = turn.opposite if state.is_checkmate else None

        state.is_draw = position.half_move_clock >= FIFTY_MOVE_LIMIT
        state.draw_reason = "fifty-move" if state.is_draw else None

        state.game_over = state.is_checkmate or state.is_stalemate or state.is_draw

    def _result_text(self) -> str:
        state = self.state
        if state.is_checkmate:
            return f"checkmate, {state.winner.value} wins"
        if state.is_stalemate:
            return "stalemate"
        return f"draw ({state.draw_reason})"
