"""
arcade_chess

Chess rules engine and adversarial search AI for the browser game
collection's chess game. Rendering, audio and leaderboards live in the
surrounding UI layer; this package only exposes a board/state query
interface, a move-application interface and game events.

## Architecture

The package is organized into several key modules:

1. **board**: Rules engine
   - Tagged pieces, squares and immutable moves
   - Position: attack detection, pseudo-legal and legal move generation,
     castling / en passant / promotion, move application
   - FEN import/export, python-chess interoperability

2. **game**: Authoritative game state
   - ChessGame: query surface, select_square / apply_move, undo
   - Terminal detection (checkmate, stalemate, fifty-move draw)
   - EventBus: synchronous capture/check/mate/move/turn events

3. **evaluation**: Position evaluation functions
   - Abstract Evaluator interface (swappable design)
   - ClassicalEvaluator: material, PSTs, center control, king safety, mobility

4. **search**: Game AI
   - Minimax with alpha-beta pruning, capture-first move ordering
   - ChessAI with easy/medium/hard tiers

5. **utils**: Perft and tactical test suites

## Quick Start

```python
from arcade_chess import ChessAI, Color, new_game

game = new_game(player_color=Color.WHITE)
game.apply_move(game.position.parse_uci("e2e4"))

ai = ChessAI(difficulty="medium")
reply = ai.select_move(game.position)
game.apply_move(reply)
print(game.export_position())
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from arcade_chess.board import Color, FENError, Move, Piece, PieceKind, Position, Square
from arcade_chess.evaluation import ClassicalEvaluator, Evaluator
from arcade_chess.game import ChessGame, EventType, GameEvent, OpponentKind, load_position, new_game
from arcade_chess.search import ChessAI, Difficulty, find_best_move, select_move

__all__ = [
    'Color',
    'FENError',
    'Move',
    'Piece',
    'PieceKind',
    'Position',
    'Square',
    'ClassicalEvaluator',
    'Evaluator',
    'ChessGame',
    'EventType',
    'GameEvent',
    'OpponentKind',
    'load_position',
    'new_game',
    'ChessAI',
    'Difficulty',
    'find_best_move',
    'select_move',
]
