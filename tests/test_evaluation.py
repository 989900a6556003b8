import pytest

from chessforge.bb_position import BitboardPosition
from chessforge.boards import BoardType, make_board
from chessforge.evaluation import evaluate, evaluate_bitboard
from chessforge.parse import parse_square
from chessforge.position import Position
from chessforge.types import Color, Move, Piece


def sq(name):
    return parse_square(name)


def mv(origin, target):
    return Move(sq(origin), sq(target))


def startpos(board_type=BoardType.ARRAY):
    return Position.startpos(make_board(board_type))


def empty_pos(stm=Color.WHITE):
    pos = Position(make_board(BoardType.ARRAY))
    pos.side_to_move = stm
    return pos


def test_startpos_score_is_zero():
    assert evaluate(startpos()) == 0


def test_extra_pawn_is_positive_for_white():
    pos = empty_pos()
    pos.set(sq("e1"), Piece.WK)
    pos.set(sq("e8"), Piece.BK)
    pos.set(sq("d4"), Piece.WP)
    assert evaluate(pos) > 0


def test_extra_queen_is_negative_for_black():
    pos = empty_pos()
    pos.set(sq("e1"), Piece.WK)
    pos.set(sq("e8"), Piece.BK)
    pos.set(sq("d5"), Piece.BQ)
    assert evaluate(pos) < 0


def test_material_balance_reflects_piece_values():
    pos = empty_pos()
    pos.set(sq("e1"), Piece.WK)
    pos.set(sq("e8"), Piece.BK)
    pos.set(sq("d4"), Piece.WR)
    pos.set(sq("d5"), Piece.BN)
    assert evaluate(pos) == 500 - 320


@pytest.mark.parametrize("board_type", list(BoardType))
def test_every_backend_evaluates_startpos_to_zero(board_type):
    assert evaluate(startpos(board_type)) == 0


def test_bitboard_startpos_score_is_zero():
    assert evaluate_bitboard(BitboardPosition.startpos()) == 0


def test_bitboard_pawn_capture_gains_a_pawn():
    pos = BitboardPosition.startpos()
    for move in (mv("e2", "e4"), mv("d7", "d5"), mv("e4", "d5")):
        pos.do_move(move)
    assert evaluate_bitboard(pos) == 100


def test_bitboard_and_square_evaluations_agree():
    moves = [mv("e2", "e4"), mv("d7", "d5"), mv("e4", "d5"), mv("d8", "d5")]
    bb = BitboardPosition.startpos()
    pos = startpos()
    for move in moves:
        bb.do_move(move)
        pos.make_move(move)
        assert evaluate_bitboard(bb) == evaluate(pos)


def test_bitboard_undo_restores_score():
    pos = BitboardPosition.startpos()
    for move in (mv("e2", "e4"), mv("d7", "d5"), mv("e4", "d5")):
        pos.do_move(move)
    pos.undo_move()
    assert evaluate_bitboard(pos) == 0