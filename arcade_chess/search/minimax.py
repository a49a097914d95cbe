"""
Minimax Search with Alpha-Beta Pruning

This module implements the fixed-depth search used by the game AI.
Minimax explores the game tree to a fixed number of plies, and alpha-beta
pruning skips branches that cannot change the result.

Key Concepts:
    - Minimax: White maximizes the score, Black minimizes it
    - Alpha-Beta: stop searching a node's children once beta <= alpha
    - Move Ordering: captures first, most valuable victim first
    - Board copies: every child is searched on a fresh Position copy, so
      the position passed in is never modified

Terminal Nodes:
    A node whose side to move has no legal move returns ±MATE_SCORE
    (checkmate) or 0 (stalemate) without descending further, even at
    depth 0.

References:
    - Minimax: https://www.chessprogramming.org/Minimax
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
    - Move Ordering: https://www.chessprogramming.org/Move_Ordering
"""

import logging
from typing import List, Optional, Tuple

from arcade_chess.board.moves import Move
from arcade_chess.board.pieces import Color, PieceKind
from arcade_chess.board.position import Position
from arcade_chess.evaluation.base import Evaluator
from arcade_chess.evaluation.classical import PIECE_VALUES

logger = logging.getLogger(__name__)


def get_piece_value(kind: PieceKind) -> int:
    """
    Get piece value for move ordering.

    Args:
        kind: PieceKind.PAWN, PieceKind.KNIGHT, etc.

    Returns:
        Piece value in centipawns
    """
    return PIECE_VALUES.get(kind, 0)


def order_moves(moves: List[Move]) -> List[Move]:
    """
    Order moves to improve alpha-beta pruning efficiency.

    Captures come first, by the value of the captured piece (descending).
    The sort is stable, so moves of equal value keep generation order;
    this is what makes the choice between equally scored moves
    deterministic.

    Args:
        moves: Legal moves in generation order

    Returns:
        New list, captures first
    """

    def capture_value(move: Move) -> int:
        return get_piece_value(move.captured.kind) if move.captured else 0

    return sorted(moves, key=capture_value, reverse=True)


def _child(position: Position, move: Move) -> Position:
    child = position.copy()
    child.play(move)
    return child


def minimax(
    position: Position,
    depth: int,
    alpha: float,
    beta: float,
    evaluator: Evaluator,
    nodes_searched: Optional[List[int]] = None,
) -> float:
    """
    Minimax search with alpha-beta pruning.

    Args:
        position: Position to search (not modified)
        depth: Remaining search depth (decrements each recursive call)
        alpha: Best score White can already guarantee
        beta: Best score Black can already guarantee
        evaluator: Position evaluation function
        nodes_searched: Optional mutable list [count] to track nodes visited

    Returns:
        Evaluation of the position in centipawns (White's perspective)

    Algorithm:
        1. No legal moves → mate/stalemate score
        2. Depth 0 → static evaluation
        3. For each move (captures first), search a copy at depth - 1,
           update alpha/beta, prune once beta <= alpha
    """
    if nodes_searched is not None:
        nodes_searched[0] += 1

    if depth <= 0:
        terminal_score = evaluator.evaluate_terminal(position)
        if terminal_score is not None:
            return terminal_score
        return evaluator.evaluate(position)

    legal_moves = position.all_legal_moves()
    terminal_score = evaluator.evaluate_terminal(position, legal_moves)
    if terminal_score is not None:
        return terminal_score

    ordered_moves = order_moves(legal_moves)

    if position.turn is Color.WHITE:
        # Maximizing player (wants highest score)
        max_eval = -float("inf")
        for move in ordered_moves:
            eval_score = minimax(
                _child(position, move), depth - 1, alpha, beta, evaluator, nodes_searched
            )
            max_eval = max(max_eval, eval_score)
            alpha = max(alpha, eval_score)

            # Beta cutoff: Minimizing player won't allow this branch
            if beta <= alpha:
                break
        return max_eval

    # Minimizing player (wants lowest score)
    min_eval = float("inf")
    for move in ordered_moves:
        eval_score = minimax(
            _child(position, move), depth - 1, alpha, beta, evaluator, nodes_searched
        )
        min_eval = min(min_eval, eval_score)
        beta = min(beta, eval_score)

        # Alpha cutoff: Maximizing player won't allow this branch
        if beta <= alpha:
            break
    return min_eval


def find_best_move(
    position: Position,
    depth: int,
    evaluator: Evaluator,
) -> Tuple[Optional[Move], float, int]:
    """
    Find the best move for the side to move.

    Every root move is searched with a full window; the first move reaching
    the best score (in capture-first order) is kept.

    Args:
        position: Current position (not modified)
        depth: Search depth in plies, at least 1
        evaluator: Position evaluation function

    Returns:
        Tuple of (best_move, evaluation, nodes)
            - best_move: The best move found, None if there is no legal move
            - evaluation: Score of the best move (terminal score if no move)
            - nodes: Number of positions visited

    Raises:
        ValueError: If depth is less than 1
    """
    if depth < 1:
        raise ValueError(f"depth must be at least 1, got {depth}")

    legal_moves = position.all_legal_moves()
    if not legal_moves:
        terminal_score = evaluator.evaluate_terminal(position, legal_moves)
        logger.debug(f"No legal moves for {position.turn.value}: score {terminal_score}")
        return None, terminal_score, 0

    maximizing = position.turn is Color.WHITE
    ordered_moves = order_moves(legal_moves)

    best_move = ordered_moves[0]
    best_score = -float("inf") if maximizing else float("inf")
    nodes = [0]

    for move in ordered_moves:
        score = minimax(
            _child(position, move),
            depth - 1,
            -float("inf"),
            float("inf"),
            evaluator,
            nodes,
        )
        logger.debug(f"Move: {move.uci}, Score: {score}")

        if maximizing:
            if score > best_score:
                best_score = score
                best_move = move
        else:
            if score < best_score:
                best_score = score
                best_move = move

    logger.debug(
        f"Search complete: best_move={best_move.uci}, score={best_score}, "
        f"nodes={nodes[0]}, depth={depth}"
    )
    return best_move, best_score, nodes[0]
