"""Move legality rules: per-piece pseudo-legality, attacks, check and castling.

Functions here accept any position object that provides ``at(sq)`` and the
attributes ``side_to_move``, ``castling_rights`` and ``ep_square`` (-1 when
there is no en-passant target).
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from chessforge import attacks
from chessforge.types import (
    CastlingRights,
    Color,
    Move,
    Piece,
    Promotion,
    file_of,
    is_black,
    is_empty,
    is_white,
    make_sq,
    other,
    rank_of,
)


class IllegalMoveError(ValueError):
    """Raised when a move breaks the rules; the message says which rule."""


def _dr(origin: int, target: int) -> int:
    return rank_of(target) - rank_of(origin)


def _df(origin: int, target: int) -> int:
    return file_of(target) - file_of(origin)


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)


def _bits(b: int) -> Iterator[int]:
    """Indices of the set bits of ``b``, lowest first."""
    while b:
        low = b & -b
        yield low.bit_length() - 1
        b ^= low


def _has_right(pos: Any, flag: CastlingRights) -> bool:
    return bool(int(pos.castling_rights) & flag)


def is_friend(moving: Piece, target: Piece) -> bool:
    """True when ``target`` is a non-empty piece of the same colour as ``moving``."""
    if is_empty(target):
        return False
    return (is_white(moving) and is_white(target)) or (
        is_black(moving) and is_black(target)
    )


def is_opponent(moving: Piece, target: Piece) -> bool:
    """True when ``target`` is a non-empty piece of the other colour."""
    if is_empty(target):
        return False
    return (is_white(moving) and is_black(target)) or (
        is_black(moving) and is_white(target)
    )


def path_clear(pos: Any, origin: int, target: int) -> bool:
    """True when every square strictly between ``origin`` and ``target`` is empty."""
    step_r = _sign(_dr(origin, target))
    step_f = _sign(_df(origin, target))
    r = rank_of(origin) + step_r
    f = file_of(origin) + step_f
    r1, f1 = rank_of(target), file_of(target)
    while r != r1 or f != f1:
        if not is_empty(pos.at(make_sq(f, r))):
            return False
        r += step_r
        f += step_f
    return True


def _no_friendly_capture(pos: Any, p: Piece, target: int) -> None:
    if is_friend(p, pos.at(target)):
        raise IllegalMoveError("Cannot capture your own piece.")


def _pseudo_knight(pos: Any, p: Piece, move: Move) -> None:
    r = abs(_dr(move.origin, move.target))
    f = abs(_df(move.origin, move.target))
    if not ((r == 2 and f == 1) or (r == 1 and f == 2)):
        raise IllegalMoveError("Knight moves in an L.")
    _no_friendly_capture(pos, p, move.target)


def _pseudo_bishop(pos: Any, p: Piece, move: Move) -> None:
    r = abs(_dr(move.origin, move.target))
    f = abs(_df(move.origin, move.target))
    if r == 0 or f == 0 or r != f:
        raise IllegalMoveError("Bishop moves diagonally.")
    if not path_clear(pos, move.origin, move.target):
        raise IllegalMoveError("Bishop path is blocked.")
    _no_friendly_capture(pos, p, move.target)


def _pseudo_rook(pos: Any, p: Piece, move: Move) -> None:
    r = _dr(move.origin, move.target)
    f = _df(move.origin, move.target)
    if not ((r == 0 and f != 0) or (f == 0 and r != 0)):
        raise IllegalMoveError("Rook moves in straight lines.")
    if not path_clear(pos, move.origin, move.target):
        raise IllegalMoveError("Rook path is blocked.")
    _no_friendly_capture(pos, p, move.target)


def _pseudo_queen(pos: Any, p: Piece, move: Move) -> None:
    r = abs(_dr(move.origin, move.target))
    f = abs(_df(move.origin, move.target))
    diagonal = r != 0 and f != 0 and r == f
    straight = (r == 0 and f != 0) or (f == 0 and r != 0)
    if not (diagonal or straight):
        raise IllegalMoveError("Queen moves like rook or bishop.")
    if not path_clear(pos, move.origin, move.target):
        raise IllegalMoveError("Queen path is blocked.")
    _no_friendly_capture(pos, p, move.target)


def _adjacent(a: int, b: int) -> bool:
    rd = abs(rank_of(b) - rank_of(a))
    fd = abs(file_of(b) - file_of(a))
    return rd <= 1 and fd <= 1 and not (rd == 0 and fd == 0)


def _pseudo_king(pos: Any, p: Piece, move: Move) -> None:
    origin, target = move.origin, move.target
    if rank_of(origin) == rank_of(target) and abs(_df(origin, target)) == 2:
        check_castle_path(pos, Move(origin, target, Promotion.NONE))
        return
    if not _adjacent(origin, target):
        raise IllegalMoveError("King moves one square in any direction.")
    _no_friendly_capture(pos, p, target)


_VALID_PROMOTIONS = frozenset(Promotion)


def _pseudo_pawn(pos: Any, p: Piece, move: Move) -> None:
    origin, target = move.origin, move.target
    white = is_white(p)
    direction = 1 if white else -1
    start_rank = 1 if white else 6
    last_rank = 7 if white else 0

    promotes = rank_of(target) == last_rank
    if not promotes and move.promo != Promotion.NONE:
        raise IllegalMoveError("Promotion choice only allowed when reaching last rank.")
    if promotes and move.promo not in _VALID_PROMOTIONS:
        raise IllegalMoveError("Invalid promotion piece.")

    r = _dr(origin, target)
    f = _df(origin, target)
    target_piece = pos.at(target)

    if f == 0:
        if r == direction:
            if not is_empty(target_piece):
                raise IllegalMoveError("Pawn forward move must land on empty.")
            return
        if r == 2 * direction:
            if rank_of(origin) != start_rank:
                raise IllegalMoveError("Pawn double-step only from start rank.")
            if not is_empty(target_piece):
                raise IllegalMoveError("Pawn double-step must land on empty.")
            mid = make_sq(file_of(origin), rank_of(origin) + direction)
            if not is_empty(pos.at(mid)):
                raise IllegalMoveError("Pawn double-step is blocked.")
            return
        raise IllegalMoveError("Invalid pawn forward move distance.")

    if abs(f) == 1 and r == direction:
        if is_opponent(p, target_piece):
            return
        if is_empty(target_piece) and pos.ep_square == target:
            cap_sq = make_sq(file_of(target), rank_of(target) - direction)
            captured = pos.at(cap_sq)
            if (white and captured == Piece.BP) or (not white and captured == Piece.WP):
                return
            raise IllegalMoveError("En passant square set but no capturable pawn found.")
        raise IllegalMoveError("Pawn diagonal must capture (or be en passant).")

    raise IllegalMoveError("Invalid pawn move.")


_PIECE_CHECKS: dict[Piece, Callable[[Any, Piece, Move], None]] = {
    Piece.WP: _pseudo_pawn,
    Piece.BP: _pseudo_pawn,
    Piece.WN: _pseudo_knight,
    Piece.BN: _pseudo_knight,
    Piece.WB: _pseudo_bishop,
    Piece.BB: _pseudo_bishop,
    Piece.WR: _pseudo_rook,
    Piece.BR: _pseudo_rook,
    Piece.WQ: _pseudo_queen,
    Piece.BQ: _pseudo_queen,
    Piece.WK: _pseudo_king,
    Piece.BK: _pseudo_king,
}


def check_pseudo_legal(pos: Any, move: Move) -> None:
    """Raise IllegalMoveError unless ``move`` obeys the movement rules of its piece."""
    if not (0 <= move.origin <= 63 and 0 <= move.target <= 63):
        raise IllegalMoveError("Move squares out of range.")
    if move.origin == move.target:
        raise IllegalMoveError("From and to squares are the same.")

    moving = pos.at(move.origin)
    if is_empty(moving):
        raise IllegalMoveError("No piece on the from-square.")
    if pos.side_to_move == Color.WHITE and not is_white(moving):
        raise IllegalMoveError("It's White to move.")
    if pos.side_to_move == Color.BLACK and not is_black(moving):
        raise IllegalMoveError("It's Black to move.")

    _no_friendly_capture(pos, moving, move.target)

    check = _PIECE_CHECKS.get(moving)
    if check is None:
        raise IllegalMoveError("Unknown piece or not implemented.")
    check(pos, moving, move)


def is_pseudo_legal(pos: Any, move: Move) -> bool:
    """True when ``move`` obeys the movement rules of its piece."""
    try:
        check_pseudo_legal(pos, move)
    except IllegalMoveError:
        return False
    return True


def find_king(pos: Any, who: Color) -> int | None:
    """Square of ``who``'s king, or None when there is none on the board."""
    king = Piece.WK if who == Color.WHITE else Piece.BK
    return next((sq for sq in range(64) if pos.at(sq) == king), None)


_DIAGONAL_STEPS = ((1, 1), (-1, 1), (1, -1), (-1, -1))
_STRAIGHT_STEPS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def _ray_hits(pos: Any, sq: int, df: int, dr: int, attackers: tuple[Piece, Piece]) -> bool:
    f = file_of(sq) + df
    r = rank_of(sq) + dr
    while 0 <= f < 8 and 0 <= r < 8:
        x = pos.at(make_sq(f, r))
        if not is_empty(x):
            return x in attackers
        f += df
        r += dr
    return False


def is_square_attacked(pos: Any, sq: int, by: Color) -> bool:
    """True when any piece of colour ``by`` attacks ``sq``."""
    white = by == Color.WHITE
    pawn_pc = Piece.WP if white else Piece.BP
    if any(pos.at(s) == pawn_pc for s in _bits(attacks.pawn(other(by), sq))):
        return True
    knight_pc = Piece.WN if white else Piece.BN
    if any(pos.at(s) == knight_pc for s in _bits(attacks.knight(sq))):
        return True
    king_pc = Piece.WK if white else Piece.BK
    if any(pos.at(s) == king_pc for s in _bits(attacks.king(sq))):
        return True

    queen = Piece.WQ if white else Piece.BQ
    bishop = Piece.WB if white else Piece.BB
    rook = Piece.WR if white else Piece.BR
    if any(_ray_hits(pos, sq, df, dr, (bishop, queen)) for df, dr in _DIAGONAL_STEPS):
        return True
    return any(_ray_hits(pos, sq, df, dr, (rook, queen)) for df, dr in _STRAIGHT_STEPS)


def in_check(pos: Any, who: Color) -> bool:
    """True when ``who``'s king is attacked; False when that king is absent."""
    ksq = find_king(pos, who)
    if ksq is None:
        return False
    return is_square_attacked(pos, ksq, other(who))


def is_castle_move(pos: Any, move: Move) -> bool:
    """True when ``move`` is a king stepping two files along its rank."""
    moving = pos.at(move.origin)
    if moving not in (Piece.WK, Piece.BK):
        return False
    if rank_of(move.origin) != rank_of(move.target):
        return False
    return abs(file_of(move.target) - file_of(move.origin)) == 2


def check_castle_path(pos: Any, move: Move) -> None:
    """Raise IllegalMoveError unless castling with ``move`` is allowed."""
    k = pos.at(move.origin)
    if k not in (Piece.WK, Piece.BK):
        raise IllegalMoveError("Not a king castling move.")
    side = Color.WHITE if k == Piece.WK else Color.BLACK
    enemy = other(side)

    if in_check(pos, side):
        raise IllegalMoveError("Cannot castle while in check.")

    r = rank_of(move.origin)
    f_from = file_of(move.origin)
    king_side = file_of(move.target) > f_from
    through = make_sq(f_from + (1 if king_side else -1), r)

    if is_square_attacked(pos, through, enemy):
        raise IllegalMoveError("Cannot castle through check.")
    if is_square_attacked(pos, move.target, enemy):
        raise IllegalMoveError("Cannot castle into check.")

    back = 0 if side == Color.WHITE else 7
    rook = Piece.WR if side == Color.WHITE else Piece.BR
    colour_name = "white" if side == Color.WHITE else "black"
    if king_side:
        flag = CastlingRights.WK if side == Color.WHITE else CastlingRights.BK
        between = (5, 6)
        rook_file = 7
        wing = "king-side"
    else:
        flag = CastlingRights.WQ if side == Color.WHITE else CastlingRights.BQ
        between = (3, 2, 1)
        rook_file = 0
        wing = "queen-side"

    if not _has_right(pos, flag):
        raise IllegalMoveError(f"No {colour_name} {wing} rights.")
    if any(pos.at(make_sq(f, back)) != Piece.EMPTY for f in between):
        raise IllegalMoveError("Squares not empty.")
    if pos.at(make_sq(rook_file, back)) != rook:
        rook_square = "abcdefgh"[rook_file] + str(back + 1)
        raise IllegalMoveError(f"Rook missing on {rook_square}.")


def castle_path_safe(pos: Any, move: Move) -> bool:
    """True when castling with ``move`` is allowed."""
    try:
        check_castle_path(pos, move)
    except IllegalMoveError:
        return False
    return True