"""
Move Generation and Search Testing

This module provides verification and benchmarking tools for the rules
engine and the search.

Tools:
    1. Perft: counts leaf nodes of the legal move tree to a fixed depth.
       Comparing against published counts catches move generation bugs
       (castling, en passant, promotion, pins) that play-testing misses.

    2. Tactical suite: positions with a known best move (here: mates in
       one). The engine must find the listed move at the given depth.

Evaluation Metrics:
    - Correct Moves: Number of positions where the engine found a best move
    - Time per Position: Average thinking time
    - Nodes Searched: Total nodes visited

References:
    - Perft: https://www.chessprogramming.org/Perft_Results
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from arcade_chess.board.position import Position
from arcade_chess.evaluation.base import Evaluator
from arcade_chess.evaluation.classical import ClassicalEvaluator
from arcade_chess.search.minimax import find_best_move


@dataclass
class TestPosition:
    """
    A test position with expected best move(s).

    Attributes:
        fen: Board position in FEN notation
        best_moves: List of acceptable best moves (UCI format)
        description: Human-readable description of the position
        id: Position identifier (e.g., "M1.01")
    """

    __test__ = False

    fen: str
    best_moves: List[str]
    description: str = ""
    id: str = ""


@dataclass
class TestResult:
    """
    Result of testing a single position.

    Attributes:
        position: The test position
        found_move: Move the engine found (UCI format)
        score: Evaluation score for the move
        correct: Whether the engine found a best move
        time_taken: Time spent searching (seconds)
        nodes_searched: Number of nodes visited
        depth: Search depth used
    """

    __test__ = False

    position: TestPosition
    found_move: str
    score: float
    correct: bool
    time_taken: float
    nodes_searched: int = 0
    depth: int = 0


@dataclass
class PerftPosition:
    """A position with its published perft node counts, indexed by depth - 1."""

    fen: str
    counts: List[int]
    name: str = ""


# ============================================================================
# Perft Reference Positions
# ============================================================================

PERFT_POSITIONS = [
    PerftPosition(
        name="start",
        fen="rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
        counts=[20, 400, 8902],
    ),
    PerftPosition(
        name="kiwipete",
        fen="r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
        counts=[48, 2039],
    ),
    PerftPosition(
        name="position 3",
        fen="8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
        counts=[14, 191, 2812],
    ),
    PerftPosition(
        name="position 4",
        fen="r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1",
        counts=[6, 264],
    ),
    PerftPosition(
        name="position 5",
        fen="rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8",
        counts=[44, 1486],
    ),
]


# ============================================================================
# Mate-in-One Suite
# ============================================================================

MATE_IN_ONE_POSITIONS = [
    TestPosition(
        id="M1.01",
        fen="6k1/5ppp/8/8/8/8/8/R6K w - - 0 1",
        best_moves=["a1a8"],
        description="White back-rank mate with Ra8#",
    ),
    TestPosition(
        id="M1.02",
        fen="rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq - 0 2",
        best_moves=["d8h4"],
        description="Fool's mate, Qh4#",
    ),
    TestPosition(
        id="M1.03",
        fen="r5k1/8/8/8/8/8/5PPP/6K1 b - - 0 1",
        best_moves=["a8a1"],
        description="Black back-rank mate with Ra1#",
    ),
    TestPosition(
        id="M1.04",
        fen="r1bqkb1r/pppp1ppp/2n2n2/4p2Q/2B1P3/8/PPPP1PPP/RNB1K1NR w KQkq - 4 4",
        best_moves=["h5f7"],
        description="Scholar's mate, Qxf7#",
    ),
]


def perft(position: Position, depth: int) -> int:
    """
    Count the leaf nodes of the legal move tree.

    Args:
        position: Root position (not modified)
        depth: Number of plies

    Returns:
        Number of move sequences of exactly `depth` plies
    """
    if depth == 0:
        return 1

    moves = position.all_legal_moves()
    if depth == 1:
        return len(moves)

    total = 0
    for move in moves:
        child = position.copy()
        child.play(move)
        total += perft(child, depth - 1)
    return total


def divide(position: Position, depth: int) -> Dict[str, int]:
    """
    Perft split by root move, for locating move generation bugs.

    Returns:
        Mapping of UCI root move to its subtree leaf count
    """
    counts = {}
    for move in position.all_legal_moves():
        child = position.copy()
        child.play(move)
        counts[move.uci] = perft(child, depth - 1)
    return counts


def evaluate_position(
    position: TestPosition,
    depth: int,
    evaluator: Evaluator,
    verbose: bool = False,
) -> TestResult:
    """
    Evaluate a single test position.

    Args:
        position: Test position to evaluate
        depth: Search depth
        evaluator: Position evaluator
        verbose: If True, print detailed output

    Returns:
        TestResult with engine's move and whether it was correct
    """
    board = Position.from_fen(position.fen)

    if verbose:
        print(f"\nTesting {position.id}: {position.description}")
        print(f"FEN: {position.fen}")
        print(f"Expected moves: {position.best_moves}")

    start_time = time.time()
    best_move, score, nodes = find_best_move(board, depth, evaluator)
    time_taken = time.time() - start_time

    found_move_uci = best_move.uci if best_move else ""
    correct = found_move_uci in position.best_moves

    if verbose:
        print(f"Engine found: {found_move_uci} (score: {score})")
        print(f"Nodes searched: {nodes:,}")
        print(f"Time: {time_taken:.2f}s")
        print(f"Result: {'✓ CORRECT' if correct else '✗ WRONG'}")

    return TestResult(
        position=position,
        found_move=found_move_uci,
        score=score,
        correct=correct,
        time_taken=time_taken,
        nodes_searched=nodes,
        depth=depth,
    )


def run_suite(
    positions: Optional[List[TestPosition]] = None,
    depth: int = 1,
    evaluator: Optional[Evaluator] = None,
    verbose: bool = False,
) -> Dict[str, Any]:
    """
    Run a tactical test suite.

    Args:
        positions: Positions to test (default: MATE_IN_ONE_POSITIONS)
        depth: Search depth (default: 1)
        evaluator: Position evaluator (default: ClassicalEvaluator)
        verbose: If True, print detailed results

    Returns:
        Dictionary with test results:
            - score: Number of correct positions
            - total: Total number of positions
            - percentage: Success percentage
            - results: List of TestResult objects
            - avg_time: Average time per position
    """
    positions = positions if positions is not None else MATE_IN_ONE_POSITIONS
    evaluator = evaluator if evaluator is not None else ClassicalEvaluator()

    results = [evaluate_position(p, depth, evaluator, verbose=verbose) for p in positions]
    correct_count = sum(1 for r in results if r.correct)
    total_time = sum(r.time_taken for r in results)

    avg_time = total_time / len(positions) if positions else 0
    percentage = (correct_count / len(positions) * 100) if positions else 0

    if verbose:
        print("\n" + "=" * 70)
        print("SUMMARY")
        print("=" * 70)
        print(f"Score: {correct_count}/{len(positions)} ({percentage:.1f}%)")
        print(f"Average time: {avg_time:.2f}s")

    return {
        'score': correct_count,
        'total': len(positions),
        'percentage': percentage,
        'results': results,
        'avg_time': avg_time,
        'total_time': total_time,
    }
