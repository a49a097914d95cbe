"""
Game Module

This module wraps the rules engine into a playable game: the authoritative
state, move history, terminal detection and events for the UI layer.

Key Components:
    - ChessGame: single writer of a game's state (query + mutation surface)
    - GameState: position, history, captured pieces, terminal flags
    - EventBus / GameEvent / EventType: synchronous observer API

Data Flow:
    UI click → ChessGame.select_square() → ChessGame.apply_move()
             → listeners (capture, promotion, check/mate/stalemate/draw,
               move, turn change)
"""

from typing import Optional

from arcade_chess.board.pieces import Color
from arcade_chess.game.events import EventBus, EventType, GameEvent
from arcade_chess.game.game import ChessGame, SelectionResult
from arcade_chess.game.state import GameState, HistoryEntry, OpponentKind


def new_game(
    opponent: OpponentKind = OpponentKind.AI,
    player_color: Color = Color.WHITE,
) -> ChessGame:
    """Start a game from the standard position."""
    return ChessGame.new(opponent, player_color)


def load_position(
    fen: str,
    opponent: OpponentKind = OpponentKind.AI,
    player_color: Optional[Color] = None,
) -> ChessGame:
    """
    Start a game from a FEN position.

    Raises:
        FENError: If the FEN string is malformed
    """
    return ChessGame.from_fen(fen, opponent, player_color or Color.WHITE)


__all__ = [
    'ChessGame',
    'SelectionResult',
    'GameState',
    'HistoryEntry',
    'OpponentKind',
    'EventBus',
    'EventType',
    'GameEvent',
    'new_game',
    'load_position',
]
