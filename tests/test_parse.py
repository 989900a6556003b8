import pytest

from chessforge.parse import parse_square, parse_two_squares
from chessforge.types import file_of, make_sq, rank_of


def test_corner_squares():
    assert parse_square("a1") == 0
    assert parse_square("h8") == 63


def test_e2_matches_make_sq():
    assert parse_square("e2") == make_sq(4, 1)


def test_round_trip_all_squares():
    for index in range(64):
        name = "abcdefgh"[file_of(index)] + "12345678"[rank_of(index)]
        assert parse_square(name) == index


def test_whitespace_and_uppercase_accepted():
    assert parse_square("  E2 ") == parse_square("e2")


@pytest.mark.parametrize("text", ["", "e", "e22", "i1", "a0", "a9", "2e", "  "])
def test_invalid_square(text):
    with pytest.raises(ValueError):
        parse_square(text)


def test_two_squares():
    assert parse_two_squares(" e2   e4 ") == (parse_square("e2"), parse_square("e4"))


@pytest.mark.parametrize("line", ["", "e2", "e2 e4 e5", "e2 z9", "   "])
def test_invalid_two_squares(line):
    with pytest.raises(ValueError):
        parse_two_squares(line)