"""Text rendering of a position."""

from __future__ import annotations

from chessforge.position import Position
from chessforge.types import Color, Piece, make_sq

_CHARS = {
    Piece.WP: "P",
    Piece.WN: "N",
    Piece.WB: "B",
    Piece.WR: "R",
    Piece.WQ: "Q",
    Piece.WK: "K",
    Piece.BP: "p",
    Piece.BN: "n",
    Piece.BB: "b",
    Piece.BR: "r",
    Piece.BQ: "q",
    Piece.BK: "k",
}

_FILES = "    a b c d e f g h"
_BORDER = "  +-----------------+"


def piece_char(p: Piece) -> str:
    """Letter for a piece (upper case White, lower case Black); '.' otherwise."""
    return _CHARS.get(p, ".")


def board_ascii(pos: Position) -> str:
    """The board from rank 8 down to rank 1, followed by the side to move."""
    lines = ["", _FILES, _BORDER]
    for r in range(7, -1, -1):
        cells = "".join(piece_char(pos.at(make_sq(f, r))) + " " for f in range(8))
        lines.append(f"{r + 1} | {cells}| {r + 1}")
    lines += [_BORDER, _FILES, ""]
    side = "White" if pos.side_to_move == Color.WHITE else "Black"
    lines.append(f"Side to move: {side}")
    return "\n".join(lines) + "\n"