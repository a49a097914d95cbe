"""
Tests for board primitives and FEN import/export.

Covers pieces and squares, castling rights serialization, move notation,
and the FEN parser's acceptance and rejection rules.
"""

import pytest

from arcade_chess.board import (
    STARTING_FEN,
    CastlingRights,
    CastlingSide,
    Color,
    FENError,
    Piece,
    PieceKind,
    Position,
    Square,
    move_notation,
)


class TestPieces:
    """Test suite for pieces and squares."""

    def test_piece_symbols(self):
        """Test FEN letters are upper case for White, lower case for Black."""
        assert Piece(PieceKind.KNIGHT, Color.WHITE).symbol == 'N'
        assert Piece(PieceKind.KNIGHT, Color.BLACK).symbol == 'n'
        assert Piece(PieceKind.KING, Color.WHITE).unicode == '♔'

    def test_piece_from_symbol(self):
        """Test parsing a FEN letter back into a tagged piece."""
        piece = Piece.from_symbol('q')

        assert piece.kind is PieceKind.QUEEN
        assert piece.color is Color.BLACK

    def test_piece_from_invalid_symbol(self):
        """Test unknown letters are rejected."""
        with pytest.raises(ValueError):
            Piece.from_symbol('x')

    def test_opposite_color(self):
        """Test color flipping."""
        assert Color.WHITE.opposite is Color.BLACK
        assert Color.BLACK.opposite is Color.WHITE

    def test_square_names(self):
        """Test row 0 is rank 8 and col 0 is the a-file."""
        assert Square(0, 0).name == 'a8'
        assert Square(7, 7).name == 'h1'
        assert Square.from_name('e4') == Square(4, 4)

    def test_square_from_invalid_name(self):
        """Test malformed square names are rejected."""
        for name in ('i1', 'a9', 'e', 'e44'):
            with pytest.raises(ValueError):
                Square.from_name(name)

    def test_square_on_board(self):
        """Test bounds checking."""
        assert Square(0, 7).is_on_board
        assert not Square(-1, 0).is_on_board
        assert not Square(3, 8).is_on_board

    def test_off_board_square_has_no_name(self):
        """Test off-board squares do not wrap around to a real square name."""
        for square in (Square(-1, 0), Square(0, -1), Square(8, 3)):
            with pytest.raises(ValueError):
                square.name

        assert str(Square(-1, 0)) == '(-1, 0)'


class TestCastlingRights:
    """Test suite for castling rights."""

    def test_fen_round_trip(self):
        """Test castling fields survive parse and format."""
        for field in ('KQkq', 'Kq', 'k', '-'):
            assert CastlingRights.from_fen(field).to_fen() == field

    def test_revoke_one_side(self):
        """Test revoking a single side leaves the others."""
        rights = CastlingRights.from_fen('KQkq')
        rights.revoke(Color.WHITE, CastlingSide.KINGSIDE)

        assert not rights.has(Color.WHITE, CastlingSide.KINGSIDE)
        assert rights.has(Color.WHITE, CastlingSide.QUEENSIDE)
        assert rights.to_fen() == 'Qkq'

    def test_revoke_color(self):
        """Test revoking all rights of one color."""
        rights = CastlingRights.from_fen('KQkq')
        rights.revoke(Color.BLACK)

        assert rights.to_fen() == 'KQ'

    def test_copy_is_independent(self):
        """Test copies do not share state."""
        rights = CastlingRights.from_fen('KQkq')
        copy = rights.copy()
        copy.revoke(Color.WHITE)

        assert rights.to_fen() == 'KQkq'


class TestMoveNotation:
    """Test suite for short algebraic notation."""

    def test_pawn_push(self):
        """Test pawn pushes are just the destination."""
        position = Position.initial()
        assert move_notation(position.parse_uci('e2e4')) == 'e4'

    def test_piece_move(self):
        """Test piece moves carry the piece letter."""
        position = Position.initial()
        assert move_notation(position.parse_uci('g1f3')) == 'Nf3'

    def test_pawn_capture(self):
        """Test pawn captures use the origin file."""
        position = Position.from_fen('4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1')
        assert move_notation(position.parse_uci('e4d5')) == 'exd5'

    def test_piece_capture(self):
        """Test piece captures use 'x'."""
        position = Position.from_fen('4k3/8/8/3p4/8/8/8/3RK3 w - - 0 1')
        assert move_notation(position.parse_uci('d1d5')) == 'Rxd5'

    def test_castling(self):
        """Test castling notation."""
        position = Position.from_fen('r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1')

        assert move_notation(position.parse_uci('e1g1')) == 'O-O'
        assert move_notation(position.parse_uci('e1c1')) == 'O-O-O'

    def test_promotion(self):
        """Test promotion suffix follows the piece actually chosen."""
        position = Position.from_fen('8/P7/8/8/8/8/8/k6K w - - 0 1')
        move = position.parse_uci('a7a8q')

        assert move_notation(move) == 'a8=Q'
        assert move_notation(move, PieceKind.KNIGHT) == 'a8=N'


class TestFEN:
    """Test suite for FEN import and export."""

    @pytest.mark.parametrize('fen', [
        STARTING_FEN,
        'r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1',
        'rnbqkbnr/ppp1pppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 3',
        '8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 b - - 13 42',
    ])
    def test_round_trip(self, fen):
        """Test export(load(fen)) reproduces canonical FEN strings."""
        assert Position.from_fen(fen).fen() == fen

    def test_starting_position(self):
        """Test the starting FEN fields."""
        position = Position.from_fen(STARTING_FEN)

        assert position.turn is Color.WHITE
        assert position.castling.to_fen() == 'KQkq'
        assert position.en_passant_target is None
        assert position.half_move_clock == 0
        assert position.full_move_number == 1
        assert position.piece_at(Square.from_name('e1')) == Piece(PieceKind.KING, Color.WHITE)
        assert position.piece_at(Square.from_name('d8')) == Piece(PieceKind.QUEEN, Color.BLACK)

    def test_four_field_form(self):
        """Test the move counters may be omitted."""
        position = Position.from_fen('rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq -')

        assert position.half_move_clock == 0
        assert position.full_move_number == 1
        assert position == Position.initial()

    def test_en_passant_field(self):
        """Test the en passant target square is parsed."""
        position = Position.from_fen('rnbqkbnr/pppp1ppp/8/8/4pP2/8/PPPPP1PP/RNBQKBNR b KQkq f3 0 3')
        assert position.en_passant_target == Square.from_name('f3')

    @pytest.mark.parametrize('fen', [
        '',
        'rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0',
        'rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1',
        'rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1',
        'rnbqkbnr/pppppppp/7/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1',
        'rnbqkbnx/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1',
        '8/8/8/8/8/8/8/8 w - - 0 1',
        'rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKKNR w KQkq - 0 1',
        'rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1',
        'rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQxq - 0 1',
        'rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w QK - 0 1',
        'rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e4 0 1',
        'rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq z9 0 1',
        'rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - -1 1',
        'rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 0',
        'rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 one',
        'P3k3/8/8/8/8/8/8/4K3 w - - 0 1',
        '4k3/8/8/8/8/8/8/4K2P w - - 0 1',
        '4k2p/8/8/8/8/8/8/4K3 b - - 0 1',
        'rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR w KQkq e3 0 1',
        'rnbqkbnr/ppp1pppp/8/3p4/8/8/PPPPPPPP/RNBQKBNR b KQkq d6 0 2',
        '4k3/8/8/8/8/8/8/4RK2 w - - 0 1',
        '4k3/8/8/8/8/8/8/3qK3 b - - 0 1',
    ])
    def test_malformed_fen(self, fen):
        """Test structurally invalid FEN strings are rejected."""
        with pytest.raises(FENError):
            Position.from_fen(fen)

    def test_fen_error_is_value_error(self):
        """Test callers can catch FENError as ValueError."""
        with pytest.raises(ValueError):
            Position.from_fen('not a fen')
