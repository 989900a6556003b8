"""Core chess value types: pieces, colours, moves and square arithmetic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag

ROWS = 8
COLS = 8


class Piece(IntEnum):
    """A piece code; EMPTY marks a vacant square."""

    EMPTY = 0
    WK = 1
    WQ = 2
    WN = 3
    WB = 4
    WP = 5
    WR = 6
    BK = 7
    BQ = 8
    BN = 9
    BB = 10
    BP = 11
    BR = 12


class Color(IntEnum):
    WHITE = 0
    BLACK = 1


class CastlingRights(IntFlag):
    NONE = 0
    WK = 1 << 0
    WQ = 1 << 1
    BK = 1 << 2
    BQ = 1 << 3


ALL_CASTLING_RIGHTS = (
    CastlingRights.WK | CastlingRights.WQ | CastlingRights.BK | CastlingRights.BQ
)


class Promotion(IntEnum):
    NONE = 0
    Q = 1
    R = 2
    B = 3
    N = 4


@dataclass(frozen=True)
class Move:
    """A move from one square index to another, with an optional promotion."""

    origin: int = 0
    target: int = 0
    promo: Promotion = Promotion.NONE


@dataclass(frozen=True)
class Square:
    row: int
    col: int


@dataclass(frozen=True)
class PiecePlacement:
    sq: int
    pc: Piece


def make_sq(file: int, rank: int) -> int:
    """Square index for a file and rank (a1 = 0, h8 = 63)."""
    return rank * 8 + file


def file_of(sq: int) -> int:
    return sq % 8


def rank_of(sq: int) -> int:
    return sq // 8


def to_square(sq: int) -> Square:
    return Square(rank_of(sq), file_of(sq))


def is_empty(p: Piece) -> bool:
    return p == Piece.EMPTY


def is_white(p: Piece) -> bool:
    return Piece.WK <= p <= Piece.WR


def is_black(p: Piece) -> bool:
    return Piece.BK <= p <= Piece.BR


def other(c: Color) -> Color:
    return Color.BLACK if c == Color.WHITE else Color.WHITE


_WHITE_BACK_RANK = (
    Piece.WR, Piece.WN, Piece.WB, Piece.WQ, Piece.WK, Piece.WB, Piece.WN, Piece.WR,
)
_BLACK_BACK_RANK = (
    Piece.BR, Piece.BN, Piece.BB, Piece.BQ, Piece.BK, Piece.BB, Piece.BN, Piece.BR,
)

STARTPOS_PLACEMENTS: tuple[PiecePlacement, ...] = (
    tuple(PiecePlacement(make_sq(f, 0), pc) for f, pc in enumerate(_WHITE_BACK_RANK))
    + tuple(PiecePlacement(make_sq(f, 1), Piece.WP) for f in range(8))
    + tuple(PiecePlacement(make_sq(f, 6), Piece.BP) for f in range(8))
    + tuple(PiecePlacement(make_sq(f, 7), pc) for f, pc in enumerate(_BLACK_BACK_RANK))
)