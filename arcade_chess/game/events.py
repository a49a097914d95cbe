"""
Game Events

Surrounding systems (renderer, audio, leaderboard) observe a game through
events instead of callback fields stored on the game state. Listeners are
registered per event type on an EventBus and invoked synchronously, in
emission order, from inside ChessGame.apply_move. The same events are also
returned from apply_move so a caller can drain them instead of subscribing.
"""

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Callable, DefaultDict, List, Optional

from arcade_chess.board.moves import Move
from arcade_chess.board.pieces import Color, Piece, PieceKind


class EventType(Enum):
    CAPTURE = "capture"
    PROMOTION = "promotion"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"
    MOVE = "move"
    TURN_CHANGE = "turn_change"


@dataclass(frozen=True)
class GameEvent:
    """
    Something that happened while a move was applied.

    Attributes:
        type: Event kind
        move: The move being applied
        piece: Captured piece (CAPTURE) or promoted piece (PROMOTION)
        color: Winner (CHECKMATE), side in check (CHECK) or new side to move (TURN_CHANGE)
        reason: Draw reason (DRAW), e.g. 'fifty-move'
    """

    type: EventType
    move: Move
    piece: Optional[Piece] = None
    color: Optional[Color] = None
    reason: Optional[str] = None

    @property
    def promotion(self) -> Optional[PieceKind]:
        return self.piece.kind if self.type is EventType.PROMOTION and self.piece else None


Listener = Callable[[GameEvent], None]


class EventBus:
    """Per-event-type listener registry."""

    def __init__(self):
        self._listeners: DefaultDict[EventType, List[Listener]] = defaultdict(list)

    def subscribe(self, event_type: EventType, listener: Listener) -> Listener:
        """Register a listener; returns it so the call can be used as a decorator."""
        self._listeners[event_type].append(listener)
        return listener

    def unsubscribe(self, event_type: EventType, listener: Listener) -> None:
        """Remove a listener; unknown listeners are ignored."""
        if listener in self._listeners[event_type]:
            self._listeners[event_type].remove(listener)

    def has_listeners(self, event_type: EventType) -> bool:
        return bool(self._listeners[event_type])

    def clear(self) -> None:
        self._listeners.clear()

    def emit(self, event: GameEvent) -> None:
        # Copy so a listener may unsubscribe itself while being notified
        for listener in list(self._listeners[event.type]):
            listener(event)
