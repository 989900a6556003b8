"""Attack masks: precomputed tables for leapers and ray casts for sliders."""

from __future__ import annotations

from chessforge.types import Color

_FULL = 0xFFFFFFFFFFFFFFFF

FILE_A = 0x0101010101010101
FILE_B = 0x0202020202020202
FILE_G = 0x4040404040404040
FILE_H = 0x8080808080808080
RANK_1 = 0x00000000000000FF
RANK_8 = 0xFF00000000000000


def _knight_mask(b: int) -> int:
    k = (
        ((b & ~FILE_H) << 17)
        | ((b & ~FILE_A) << 15)
        | ((b & ~FILE_H) >> 15)
        | ((b & ~FILE_A) >> 17)
        | ((b & ~(FILE_G | FILE_H)) << 10)
        | ((b & ~(FILE_A | FILE_B)) << 6)
        | ((b & ~(FILE_G | FILE_H)) >> 6)
        | ((b & ~(FILE_A | FILE_B)) >> 10)
    )
    return k & _FULL


def _king_mask(b: int) -> int:
    k = (
        (b << 8)
        | (b >> 8)
        | ((b & ~FILE_H) << 1)
        | ((b & ~FILE_A) >> 1)
        | ((b & ~FILE_H) << 9)
        | ((b & ~FILE_A) << 7)
        | ((b & ~FILE_H) >> 7)
        | ((b & ~FILE_A) >> 9)
    )
    return k & _FULL


def _white_pawn_mask(b: int) -> int:
    return (((b & ~FILE_H) << 9) | ((b & ~FILE_A) << 7)) & _FULL


def _black_pawn_mask(b: int) -> int:
    return ((b & ~FILE_H) >> 7) | ((b & ~FILE_A) >> 9)


_KNIGHT = tuple(_knight_mask(1 << s) for s in range(64))
_KING = tuple(_king_mask(1 << s) for s in range(64))
_WPAWN = tuple(_white_pawn_mask(1 << s) for s in range(64))
_BPAWN = tuple(_black_pawn_mask(1 << s) for s in range(64))


def knight(sq: int) -> int:
    """Squares a knight on ``sq`` attacks."""
    return _KNIGHT[sq]


def king(sq: int) -> int:
    """Squares a king on ``sq`` attacks."""
    return _KING[sq]


def pawn(c: Color, sq: int) -> int:
    """Squares a pawn of colour ``c`` on ``sq`` attacks."""
    return _WPAWN[sq] if c == Color.WHITE else _BPAWN[sq]


def _ray(sq: int, occ: int, shift: int, edge: int) -> int:
    """Cast one ray until the board edge or the first blocker (included)."""
    mask = 0
    b = 1 << sq
    while not b & edge:
        b = b << shift if shift > 0 else b >> -shift
        mask |= b
        if b & occ:
            break
    return mask


_DIAGONALS = ((9, FILE_H | RANK_8), (7, FILE_A | RANK_8), (-7, FILE_H | RANK_1), (-9, FILE_A | RANK_1))
_ORTHOGONALS = ((8, RANK_8), (-8, RANK_1), (1, FILE_H), (-1, FILE_A))


def bishop_otf(sq: int, occ: int) -> int:
    """Diagonal attacks from ``sq`` given full occupancy ``occ``."""
    result = 0
    for shift, edge in _DIAGONALS:
        result |= _ray(sq, occ, shift, edge)
    return result


def rook_otf(sq: int, occ: int) -> int:
    """Orthogonal attacks from ``sq`` given full occupancy ``occ``."""
    result = 0
    for shift, edge in _ORTHOGONALS:
        result |= _ray(sq, occ, shift, edge)
    return result