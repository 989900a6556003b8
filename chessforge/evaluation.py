"""Material evaluation from White's point of view."""

from __future__ import annotations

from chessforge.bb_position import BitboardPosition
from chessforge.position import Position
from chessforge.types import Color, Piece

_VALUES = {
    Piece.WP: 100,
    Piece.WN: 320,
    Piece.WB: 330,
    Piece.WR: 500,
    Piece.WQ: 900,
    Piece.WK: 0,
    Piece.BP: -100,
    Piece.BN: -320,
    Piece.BB: -330,
    Piece.BR: -500,
    Piece.BQ: -900,
    Piece.BK: 0,
}

# Indexed by bitboard piece-type index: 0=K 1=Q 2=N 3=B 4=P 5=R
_BB_VALUES = (0, 900, 320, 330, 100, 500)


def evaluate(pos: Position) -> int:
    """Material balance of a square-indexed position (positive favours White)."""
    return sum(_VALUES.get(pos.at(sq), 0) for sq in range(64))


def evaluate_bitboard(pos: BitboardPosition) -> int:
    """Material balance of a bitboard position, counted from piece bitboards."""
    score = 0
    for index, value in enumerate(_BB_VALUES):
        score += pos.pieces(Color.WHITE, index).bit_count() * value
        score -= pos.pieces(Color.BLACK, index).bit_count() * value
    return score