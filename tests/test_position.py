import pytest

from chessforge.boards import BoardType, make_board
from chessforge.position import Position
from chessforge.rules import IllegalMoveError, in_check
from chessforge.types import (
    ALL_CASTLING_RIGHTS,
    CastlingRights,
    Color,
    Move,
    Piece,
    Promotion,
    make_sq,
)


def sq(name):
    return make_sq(ord(name[0]) - ord("a"), ord(name[1]) - ord("1"))


def mv(origin, target, promo=Promotion.NONE):
    return Move(sq(origin), sq(target), promo)


def startpos(board_type=BoardType.ARRAY):
    return Position.startpos(make_board(board_type))


def empty_pos(stm=Color.WHITE):
    pos = Position(make_board(BoardType.ARRAY))
    pos.side_to_move = stm
    return pos


def play_moves(pos, moves):
    for move in moves:
        pos.make_move(move)


WHITE_BACK = [Piece.WR, Piece.WN, Piece.WB, Piece.WQ, Piece.WK, Piece.WB, Piece.WN, Piece.WR]
BLACK_BACK = [Piece.BR, Piece.BN, Piece.BB, Piece.BQ, Piece.BK, Piece.BB, Piece.BN, Piece.BR]


@pytest.mark.parametrize("board_type", list(BoardType))
def test_startpos_back_ranks(board_type):
    pos = startpos(board_type)
    assert [pos.at(make_sq(f, 0)) for f in range(8)] == WHITE_BACK
    assert [pos.at(make_sq(f, 7)) for f in range(8)] == BLACK_BACK


@pytest.mark.parametrize("board_type", list(BoardType))
def test_startpos_pawns(board_type):
    pos = startpos(board_type)
    assert all(pos.at(make_sq(f, 1)) == Piece.WP for f in range(8))
    assert all(pos.at(make_sq(f, 6)) == Piece.BP for f in range(8))


def test_startpos_middle_empty():
    pos = startpos()
    assert all(pos.at(make_sq(f, r)) == Piece.EMPTY for r in range(2, 6) for f in range(8))


def test_startpos_state():
    pos = startpos()
    assert pos.side_to_move == Color.WHITE
    assert pos.castling_rights == ALL_CASTLING_RIGHTS
    assert pos.ep_square == -1


@pytest.mark.parametrize("board_type", list(BoardType))
def test_make_move_e2e4(board_type):
    pos = startpos(board_type)
    pos.make_move(mv("e2", "e4"))
    assert pos.at(sq("e4")) == Piece.WP
    assert pos.at(sq("e2")) == Piece.EMPTY


def test_make_move_toggles_side_to_move():
    pos = startpos()
    pos.make_move(mv("e2", "e4"))
    assert pos.side_to_move == Color.BLACK
    pos.make_move(mv("e7", "e5"))
    assert pos.side_to_move == Color.WHITE


def test_double_push_sets_en_passant_square():
    pos = startpos()
    pos.make_move(mv("e2", "e4"))
    assert pos.ep_square == make_sq(4, 2)


def test_single_push_clears_en_passant():
    pos = startpos()
    pos.make_move(mv("e2", "e3"))
    assert pos.ep_square == -1


def test_rejects_opponent_piece():
    pos = startpos()
    with pytest.raises(IllegalMoveError, match="White to move"):
        pos.make_move(mv("e7", "e5"))


def test_rejects_friendly_capture():
    pos = startpos()
    with pytest.raises(IllegalMoveError):
        pos.make_move(mv("a1", "b1"))
    assert pos.at(sq("a1")) == Piece.WR
    assert pos.at(sq("b1")) == Piece.WN


def test_rejects_move_leaving_king_in_check():
    pos = empty_pos()
    pos.set(sq("e1"), Piece.WK)
    pos.set(sq("e2"), Piece.WR)
    pos.set(sq("e8"), Piece.BK)
    pos.set(sq("e7"), Piece.BR)
    with pytest.raises(IllegalMoveError, match="leaves your king in check"):
        pos.make_move(mv("e2", "d2"))
    assert pos.at(sq("e2")) == Piece.WR
    assert pos.at(sq("d2")) == Piece.EMPTY
    assert pos.side_to_move == Color.WHITE


def test_copy_is_independent():
    pos1 = startpos()
    pos2 = pos1.copy()
    pos1.make_move(mv("e2", "e4"))

    assert pos2.at(sq("e2")) == Piece.WP
    assert pos2.at(sq("e4")) == Piece.EMPTY
    assert pos2.side_to_move == Color.WHITE

    assert pos1.at(sq("e4")) == Piece.WP
    assert pos1.at(sq("e2")) == Piece.EMPTY
    assert pos1.side_to_move == Color.BLACK


def test_clear_and_move_piece():
    pos = startpos()
    pos.clear(sq("e2"))
    assert pos.at(sq("e2")) == Piece.EMPTY
    pos.move_piece(sq("g1"), sq("f3"))
    assert pos.at(sq("f3")) == Piece.WN
    assert pos.at(sq("g1")) == Piece.EMPTY


def test_king_move_clears_castling_rights():
    pos = empty_pos()
    pos.set(sq("e1"), Piece.WK)
    pos.set(sq("h1"), Piece.WR)
    pos.set(sq("e8"), Piece.BK)
    pos.castling_rights = CastlingRights.WK | CastlingRights.WQ
    pos.make_move(mv("e1", "f1"))
    assert pos.castling_rights & (CastlingRights.WK | CastlingRights.WQ) == 0


def test_rook_move_clears_its_own_side():
    pos = empty_pos()
    pos.set(sq("e1"), Piece.WK)
    pos.set(sq("a1"), Piece.WR)
    pos.set(sq("h1"), Piece.WR)
    pos.set(sq("e8"), Piece.BK)
    pos.castling_rights = CastlingRights.WK | CastlingRights.WQ
    pos.make_move(mv("a1", "a2"))
    assert pos.castling_rights & CastlingRights.WQ == 0
    assert pos.castling_rights & CastlingRights.WK != 0


def test_capturing_rook_clears_opponent_right():
    pos = empty_pos()
    pos.set(sq("e1"), Piece.WK)
    pos.set(sq("h8"), Piece.BR)
    pos.set(sq("h1"), Piece.WR)
    pos.set(sq("e8"), Piece.BK)
    pos.castling_rights = CastlingRights.BK | CastlingRights.BQ
    pos.set(sq("h2"), Piece.EMPTY)
    pos.make_move(mv("h1", "h8"))
    assert pos.castling_rights == CastlingRights.BQ


def test_italian_game_opening():
    pos = startpos()
    play_moves(pos, [mv("e2", "e4"), mv("e7", "e5"), mv("g1", "f3"), mv("b8", "c6"), mv("f1", "c4")])
    assert pos.at(sq("e4")) == Piece.WP
    assert pos.at(sq("e5")) == Piece.BP
    assert pos.at(sq("f3")) == Piece.WN
    assert pos.at(sq("c6")) == Piece.BN
    assert pos.at(sq("c4")) == Piece.WB
    assert pos.at(sq("e2")) == Piece.EMPTY
    assert pos.at(sq("g1")) == Piece.EMPTY
    assert pos.at(sq("f1")) == Piece.EMPTY
    assert pos.side_to_move == Color.BLACK
    assert not in_check(pos, Color.WHITE)
    assert not in_check(pos, Color.BLACK)


def test_kingside_castling():
    pos = startpos()
    pos.clear(sq("f1"))
    pos.clear(sq("g1"))
    pos.make_move(mv("e1", "g1"))
    assert pos.at(sq("g1")) == Piece.WK
    assert pos.at(sq("f1")) == Piece.WR
    assert pos.at(sq("e1")) == Piece.EMPTY
    assert pos.at(sq("h1")) == Piece.EMPTY
    assert pos.castling_rights & (CastlingRights.WK | CastlingRights.WQ) == 0


def test_queenside_castling():
    pos = startpos()
    pos.clear(sq("b1"))
    pos.clear(sq("c1"))
    pos.clear(sq("d1"))
    pos.make_move(mv("e1", "c1"))
    assert pos.at(sq("c1")) == Piece.WK
    assert pos.at(sq("d1")) == Piece.WR
    assert pos.at(sq("e1")) == Piece.EMPTY
    assert pos.at(sq("a1")) == Piece.EMPTY
    assert pos.castling_rights & (CastlingRights.WK | CastlingRights.WQ) == 0


def test_en_passant_capture():
    pos = startpos()
    play_moves(pos, [mv("e2", "e4"), mv("g8", "f6"), mv("e4", "e5"), mv("d7", "d5")])
    assert pos.ep_square == sq("d6")
    pos.make_move(mv("e5", "d6"))
    assert pos.at(sq("d6")) == Piece.WP
    assert pos.at(sq("d5")) == Piece.EMPTY
    assert pos.at(sq("e5")) == Piece.EMPTY


def test_pawn_promotion_to_queen():
    pos = empty_pos()
    pos.set(sq("e1"), Piece.WK)
    pos.set(sq("a8"), Piece.BK)
    pos.set(sq("e7"), Piece.WP)
    pos.make_move(mv("e7", "e8", Promotion.Q))
    assert pos.at(sq("e8")) == Piece.WQ
    assert pos.at(sq("e7")) == Piece.EMPTY


def test_pawn_promotion_to_knight():
    pos = empty_pos()
    pos.set(sq("e1"), Piece.WK)
    pos.set(sq("a8"), Piece.BK)
    pos.set(sq("e7"), Piece.WP)
    pos.make_move(mv("e7", "e8", Promotion.N))
    assert pos.at(sq("e8")) == Piece.WN