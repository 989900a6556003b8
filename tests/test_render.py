import pytest

from chessforge.boards import BoardType, make_board
from chessforge.position import Position
from chessforge.render import board_ascii, piece_char
from chessforge.types import Color, Move, Piece, make_sq


@pytest.mark.parametrize(
    "piece, char",
    [
        (Piece.WP, "P"), (Piece.WN, "N"), (Piece.WB, "B"), (Piece.WR, "R"),
        (Piece.WQ, "Q"), (Piece.WK, "K"), (Piece.BP, "p"), (Piece.BN, "n"),
        (Piece.BB, "b"), (Piece.BR, "r"), (Piece.BQ, "q"), (Piece.BK, "k"),
        (Piece.EMPTY, "."),
    ],
)
def test_piece_char(piece, char):
    assert piece_char(piece) == char


def test_board_ascii_startpos_ranks():
    pos = Position.startpos(make_board(BoardType.ARRAY))
    lines = board_ascii(pos).split("\n")
    assert "8 | r n b q k b n r | 8" in lines
    assert "1 | R N B Q K B N R | 1" in lines


def test_board_ascii_layout():
    pos = Position.startpos(make_board(BoardType.ARRAY))
    text = board_ascii(pos)
    assert text.startswith("\n")
    assert text.endswith("Side to move: White\n")
    lines = text.split("\n")
    assert lines.count("    a b c d e f g h") == 2
    rank_lines = [line for line in lines if "|" in line and not line.startswith("  +")]
    assert [line[0] for line in rank_lines] == list("87654321")
    assert all(line.endswith(line[0]) for line in rank_lines)


def test_board_ascii_empty_board_and_black_to_move():
    pos = Position(make_board(BoardType.ARRAY))
    pos.side_to_move = Color.BLACK
    text = board_ascii(pos)
    assert text.endswith("Side to move: Black\n")
    rank_lines = [line for line in text.split("\n") if line[:1].isdigit()]
    assert len(rank_lines) == 8
    assert all(line[4:19] == ". . . . . . . ." for line in rank_lines)


def test_board_ascii_reflects_move():
    pos = Position.startpos(make_board(BoardType.ARRAY))
    pos.make_move(Move(make_sq(4, 1), make_sq(4, 3)))
    text = board_ascii(pos)
    assert "4 | . . . . P . . . | 4" in text
    assert "Side to move: Black" in text