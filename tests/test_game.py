"""
Tests for the game facade.

Covers terminal detection (checkmate, stalemate, fifty-move draw), move
history and captured lists, event emission order, click-driven selection,
promotion choice and undo.
"""

import pytest

from arcade_chess.board import Color, FENError, Piece, PieceKind, Square
from arcade_chess.game import ChessGame, EventType, OpponentKind, load_position, new_game


def sq(name):
    return Square.from_name(name)


def play(game, *ucis):
    """Apply UCI moves in order; returns the events of the last one."""
    events = []
    for uci in ucis:
        events = game.apply_move(game.position.parse_uci(uci))
    return events


def record_all(game):
    """Subscribe to every event type; returns the list events land in."""
    received = []
    for event_type in EventType:
        game.subscribe(event_type, received.append)
    return received


SCHOLARS_MATE = ('e2e4', 'e7e5', 'f1c4', 'b8c6', 'd1h5', 'g8f6', 'h5f7')


class TestNewGame:
    """Test suite for starting games."""

    def test_initial_state(self):
        """Test a fresh game's state."""
        game = new_game()
        state = game.get_state()

        assert state.turn is Color.WHITE
        assert state.castling_rights.to_fen() == 'KQkq'
        assert state.en_passant_target is None
        assert state.half_move_clock == 0
        assert state.full_move_number == 1
        assert state.move_history == []
        assert not state.game_over
        assert game.export_position() == 'rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1'

    def test_get_board(self):
        """Test the board grid is row-major from rank 8."""
        board = new_game().get_board()

        assert board[0][4] == Piece(PieceKind.KING, Color.BLACK)
        assert board[7][3] == Piece(PieceKind.QUEEN, Color.WHITE)
        assert board[4][4] is None

    def test_load_position(self):
        """Test loading a FEN position."""
        game = load_position('4k3/8/8/8/8/8/8/4K2R b K - 5 40', OpponentKind.HUMAN)

        assert game.get_state().turn is Color.BLACK
        assert game.get_state().opponent is OpponentKind.HUMAN
        assert game.export_position() == '4k3/8/8/8/8/8/8/4K2R b K - 5 40'

    def test_load_malformed_position(self):
        """Test malformed FEN strings raise FENError."""
        with pytest.raises(FENError):
            load_position('rnbqkbnr/pppppppp/8/8 w KQkq - 0 1')

    def test_load_position_with_capturable_king(self):
        """Test a position where the side not to move is in check is rejected."""
        with pytest.raises(FENError):
            load_position('4k3/8/8/8/8/8/8/4RK2 w - - 0 1')

    def test_load_terminal_position(self):
        """Test loading a mated position sets the terminal flags without events."""
        game = load_position('rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3')
        state = game.get_state()

        assert state.is_checkmate
        assert state.game_over
        assert state.winner is Color.BLACK

    def test_is_ai_turn(self):
        """Test the AI moves only on the opponent's turn in AI games."""
        game = new_game(OpponentKind.AI, Color.WHITE)
        assert not game.is_ai_turn

        play(game, 'e2e4')
        assert game.is_ai_turn

        human = new_game(OpponentKind.HUMAN)
        play(human, 'e2e4')
        assert not human.is_ai_turn


class TestTerminalStates:
    """Test suite for checkmate, stalemate and draws."""

    def test_scholars_mate(self):
        """Test checkmate detection and winner."""
        game = new_game()
        play(game, *SCHOLARS_MATE)
        state = game.get_state()

        assert state.is_check
        assert state.is_checkmate
        assert not state.is_stalemate
        assert state.game_over
        assert state.winner is Color.WHITE
        assert game.get_all_legal_moves() == []

    def test_stalemate(self):
        """Test a king with no moves and no check is stalemate."""
        game = load_position('k7/8/1K6/8/8/8/2Q5/8 w - - 0 1')
        events = play(game, 'c2c7')
        state = game.get_state()

        assert state.is_stalemate
        assert not state.is_check
        assert not state.is_checkmate
        assert state.game_over
        assert state.winner is None
        assert [e.type for e in events] == [
            EventType.STALEMATE, EventType.MOVE, EventType.TURN_CHANGE,
        ]

    def test_fifty_move_draw(self):
        """Test the half-move clock reaching 100 draws the game."""
        game = load_position('k7/8/8/8/8/8/8/K6R w - - 99 60')
        events = play(game, 'h1h2')
        state = game.get_state()

        assert state.half_move_clock == 100
        assert state.is_draw
        assert state.draw_reason == 'fifty-move'
        assert state.game_over
        draws = [e for e in events if e.type is EventType.DRAW]
        assert len(draws) == 1
        assert draws[0].reason == 'fifty-move'

    def test_capture_avoids_fifty_move_draw(self):
        """Test a capture on the hundredth half-move resets the clock."""
        game = load_position('k7/8/8/8/8/8/7p/K6R w - - 99 60')
        play(game, 'h1h2')
        state = game.get_state()

        assert state.half_move_clock == 0
        assert not state.is_draw
        assert not state.game_over

    def test_check_flag(self):
        """Test check is reported for the side to move."""
        game = load_position('4k3/8/8/8/8/8/8/R3K3 w - - 0 1')
        events = play(game, 'a1a8')

        assert game.get_state().is_check
        assert game.is_in_check(Color.BLACK)
        checks = [e for e in events if e.type is EventType.CHECK]
        assert checks[0].color is Color.BLACK

    def test_no_moves_after_game_over(self):
        """Test selection is refused once the game has ended."""
        game = new_game()
        play(game, *SCHOLARS_MATE)

        result = game.select_square(sq('e8'))

        assert not result.selected
        assert not result.moved


class TestHistoryAndCaptures:
    """Test suite for move history and captured pieces."""

    def test_notation_history(self):
        """Test short algebraic notation is recorded per move."""
        game = new_game()
        play(game, *SCHOLARS_MATE)
        history = game.get_state().move_history

        assert [entry.notation for entry in history] == [
            'e4', 'e5', 'Bc4', 'Nc6', 'Qh5', 'Nf6', 'Qxf7',
        ]
        assert history[0].color is Color.WHITE
        assert history[1].color is Color.BLACK
        assert history[-1].from_square == sq('h5')
        assert history[-1].to_square == sq('f7')

    def test_captured_lists(self):
        """Test captured pieces are filed under the capturing side."""
        game = new_game()
        play(game, 'e2e4', 'd7d5', 'e4d5', 'd8d5')
        state = game.get_state()

        assert state.captured_white == [Piece(PieceKind.PAWN, Color.BLACK)]
        assert state.captured_black == [Piece(PieceKind.PAWN, Color.WHITE)]

    def test_en_passant_capture(self):
        """Test en passant through the game facade."""
        game = new_game()
        play(game, 'e2e4', 'a7a6', 'e4e5', 'd7d5')

        assert game.export_position().split()[3] == 'd6'
        ep = [m for m in game.get_legal_moves(sq('e5')) if m.en_passant]
        assert len(ep) == 1

        game.apply_move(ep[0])
        state = game.get_state()

        assert game.position.piece_at(sq('d5')) is None
        assert state.captured_white == [Piece(PieceKind.PAWN, Color.BLACK)]
        assert state.move_history[-1].notation == 'exd6'

    def test_en_passant_expires(self):
        """Test the en passant right lasts one ply."""
        game = new_game()
        play(game, 'e2e4', 'a7a6', 'e4e5', 'd7d5', 'a2a3', 'a6a5')

        assert not [m for m in game.get_legal_moves(sq('e5')) if m.en_passant]

    def test_castling_notation(self):
        """Test castling is recorded as O-O."""
        game = load_position('r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1')
        play(game, 'e1g1', 'e8c8')

        assert [e.notation for e in game.get_state().move_history] == ['O-O', 'O-O-O']
        assert game.get_state().castling_rights.to_fen() == '-'


class TestEvents:
    """Test suite for event emission."""

    def test_mate_event_order(self):
        """Test capture, checkmate, move and turn change are emitted in order."""
        game = new_game()
        play(game, *SCHOLARS_MATE[:-1])
        received = record_all(game)

        play(game, SCHOLARS_MATE[-1])

        assert [e.type for e in received] == [
            EventType.CAPTURE,
            EventType.CHECKMATE,
            EventType.MOVE,
            EventType.TURN_CHANGE,
        ]
        assert received[0].piece == Piece(PieceKind.PAWN, Color.BLACK)
        assert received[1].color is Color.WHITE
        assert received[3].color is Color.BLACK

    def test_capture_emitted_before_relocation(self):
        """Test capture listeners still see the victim on its square."""
        game = new_game()
        play(game, 'e2e4', 'd7d5')
        seen = []
        game.subscribe(EventType.CAPTURE, lambda e: seen.append(game.position.piece_at(sq('d5'))))

        play(game, 'e4d5')

        assert seen == [Piece(PieceKind.PAWN, Color.BLACK)]

    def test_quiet_move_events(self):
        """Test a quiet move emits only move and turn change."""
        game = new_game()
        received = record_all(game)

        events = play(game, 'g1f3')

        assert [e.type for e in received] == [EventType.MOVE, EventType.TURN_CHANGE]
        assert events == received
        assert received[0].move.uci == 'g1f3'

    def test_unsubscribe(self):
        """Test unsubscribed listeners are not called."""
        game = new_game()
        received = []
        listener = game.subscribe(EventType.MOVE, received.append)
        game.events.unsubscribe(EventType.MOVE, listener)

        play(game, 'e2e4')

        assert received == []

    def test_promotion_event(self):
        """Test promotion emits the piece actually chosen."""
        game = load_position('8/P7/8/8/8/8/8/k6K w - - 0 1')
        queen_move = game.get_legal_moves(sq('a7'))[0]

        events = game.apply_move(queen_move, PieceKind.KNIGHT)
        promotions = [e for e in events if e.type is EventType.PROMOTION]

        assert promotions[0].piece == Piece(PieceKind.KNIGHT, Color.WHITE)
        assert promotions[0].promotion is PieceKind.KNIGHT
        assert game.position.piece_at(sq('a8')) == Piece(PieceKind.KNIGHT, Color.WHITE)
        assert game.get_state().move_history[-1].notation == 'a8=N'


class TestSelection:
    """Test suite for click-driven selection."""

    def test_select_and_move(self):
        """Test selecting a piece and then one of its destinations."""
        game = new_game()

        result = game.select_square(sq('e2'))
        assert result.selected
        assert sorted(m.uci for m in result.valid_moves) == ['e2e3', 'e2e4']
        assert game.get_state().selected_square == sq('e2')

        result = game.select_square(sq('e4'))
        assert result.moved
        assert result.move.uci == 'e2e4'
        assert game.get_state().turn is Color.BLACK
        assert game.get_state().selected_square is None

    def test_select_empty_square(self):
        """Test clicking an empty square selects nothing."""
        game = new_game()
        result = game.select_square(sq('e4'))

        assert not result.selected
        assert not result.moved

    def test_select_opponent_piece(self):
        """Test pieces of the side not to move cannot be selected."""
        game = new_game()
        result = game.select_square(sq('e7'))

        assert not result.selected
        assert game.get_legal_moves(sq('e7')) == []

    def test_invalid_destination_clears_selection(self):
        """Test clicking an unreachable square clears the selection."""
        game = new_game()
        game.select_square(sq('e2'))
        result = game.select_square(sq('e5'))

        assert not result.moved
        assert game.get_state().selected_square is None
        assert game.get_state().turn is Color.WHITE

    def test_reselect_own_piece(self):
        """Test clicking another own piece switches the selection."""
        game = new_game()
        game.select_square(sq('e2'))
        result = game.select_square(sq('g1'))

        assert result.selected
        assert game.get_state().selected_square == sq('g1')

    def test_auto_queen(self):
        """Test promotion by selection defaults to a queen."""
        game = load_position('8/P7/8/8/8/8/8/k6K w - - 0 1')
        game.select_square(sq('a7'))
        result = game.select_square(sq('a8'))

        assert result.moved
        assert game.position.piece_at(sq('a8')) == Piece(PieceKind.QUEEN, Color.WHITE)

    def test_promotion_prompt(self):
        """Test prompt_promotion defers promotion to the caller."""
        game = load_position('8/P7/8/8/8/8/8/k6K w - - 0 1')
        game.prompt_promotion = True
        game.select_square(sq('a7'))
        result = game.select_square(sq('a8'))

        assert result.needs_promotion
        assert not result.moved
        assert game.position.piece_at(sq('a8')) is None

        game.apply_move(result.move, PieceKind.ROOK)
        assert game.position.piece_at(sq('a8')) == Piece(PieceKind.ROOK, Color.WHITE)


class TestUndo:
    """Test suite for undo."""

    def test_undo_restores_position(self):
        """Test undo takes back one move at a time."""
        game = new_game()
        play(game, 'e2e4', 'e7e5')

        assert game.undo()
        assert game.get_state().turn is Color.BLACK
        assert game.position.piece_at(sq('e7')) == Piece(PieceKind.PAWN, Color.BLACK)
        assert len(game.get_state().move_history) == 1

        assert game.undo()
        assert game.export_position() == 'rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1'
        assert not game.can_undo()
        assert not game.undo()

    def test_undo_restores_captures_and_terminal_state(self):
        """Test undoing a mate clears the terminal flags and captured pieces."""
        game = new_game()
        play(game, *SCHOLARS_MATE)

        game.undo()
        state = game.get_state()

        assert not state.game_over
        assert not state.is_checkmate
        assert state.captured_white == []

    def test_undo_is_silent(self):
        """Test listeners are not notified while replaying."""
        game = new_game()
        play(game, 'e2e4', 'e7e5', 'g1f3')
        received = record_all(game)

        game.undo()

        assert received == []

    def test_undo_from_loaded_position(self):
        """Test undo replays from the loaded FEN, not the standard start."""
        fen = 'r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1'
        game = load_position(fen)
        play(game, 'e1g1')

        game.undo()

        assert game.export_position() == fen
