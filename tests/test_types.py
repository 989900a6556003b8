import pytest

from chessforge.types import (
    STARTPOS_PLACEMENTS,
    Color,
    Move,
    Piece,
    Promotion,
    Square,
    file_of,
    is_black,
    is_empty,
    is_white,
    make_sq,
    other,
    rank_of,
    to_square,
)


def test_make_sq_round_trip_all_squares():
    for sq in range(64):
        assert make_sq(file_of(sq), rank_of(sq)) == sq


def test_make_sq_corners():
    assert make_sq(0, 0) == 0
    assert make_sq(7, 7) == 63


@pytest.mark.parametrize("sq", range(64))
def test_to_square_matches_rank_and_file(sq):
    s = to_square(sq)
    assert s == Square(rank_of(sq), file_of(sq))


def test_colour_predicates_partition_pieces():
    for p in Piece:
        flags = [is_empty(p), is_white(p), is_black(p)]
        assert flags.count(True) == 1


def test_white_and_black_counts():
    assert sum(is_white(p) for p in Piece) == 6
    assert sum(is_black(p) for p in Piece) == 6


def test_other_is_involution():
    for c in Color:
        assert other(other(c)) == c
        assert other(c) != c


def test_piece_codes_match_source_values():
    assert [int(p) for p in Piece if is_empty(p)] == [0]
    assert [int(p) for p in Piece if is_white(p)] == [1, 2, 3, 4, 5, 6]
    assert [int(p) for p in Piece if is_black(p)] == [7, 8, 9, 10, 11, 12]


def test_move_defaults_and_equality():
    m = Move()
    assert (m.origin, m.target, m.promo) == (0, 0, Promotion.NONE)
    assert Move(12, 28) == Move(12, 28, Promotion.NONE)


def test_startpos_placements_unique_squares():
    squares = [pp.sq for pp in STARTPOS_PLACEMENTS]
    assert len(squares) == 32
    assert len(set(squares)) == 32
    assert {rank_of(s) for s in squares} == {0, 1, 6, 7}
    assert {file_of(s) for s in squares} == set(range(8))


def test_startpos_placements_balanced():
    whites = [pp for pp in STARTPOS_PLACEMENTS if is_white(pp.pc)]
    blacks = [pp for pp in STARTPOS_PLACEMENTS if is_black(pp.pc)]
    assert len(whites) == len(blacks) == 16
    kings = {pp.sq: pp.pc for pp in STARTPOS_PLACEMENTS if pp.pc in (Piece.WK, Piece.BK)}
    assert kings == {make_sq(4, 0): Piece.WK, make_sq(4, 7): Piece.BK}