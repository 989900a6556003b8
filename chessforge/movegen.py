"""Pseudo-legal and legal move generation over a square-indexed position."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from chessforge import rules
from chessforge.position import Position
from chessforge.types import (
    CastlingRights,
    Color,
    Move,
    Piece,
    Promotion,
    file_of,
    is_empty,
    is_white,
    make_sq,
    rank_of,
)

_PROMOTION_ORDER = (Promotion.Q, Promotion.R, Promotion.B, Promotion.N)

_KNIGHT_DELTAS = (
    (1, 2), (2, 1), (2, -1), (1, -2),
    (-1, -2), (-2, -1), (-2, 1), (-1, 2),
)

# (right, files that must be empty, rook file, king destination file)
_CASTLE_LAYOUT = {
    True: (
        (CastlingRights.WK, (5, 6), 7, 6),
        (CastlingRights.WQ, (3, 2, 1), 0, 2),
    ),
    False: (
        (CastlingRights.BK, (5, 6), 7, 6),
        (CastlingRights.BQ, (3, 2, 1), 0, 2),
    ),
}

_PROMOTED = {
    Promotion.Q: (Piece.WQ, Piece.BQ),
    Promotion.R: (Piece.WR, Piece.BR),
    Promotion.B: (Piece.WB, Piece.BB),
    Promotion.N: (Piece.WN, Piece.BN),
}


def is_friend_piece(a: Piece, b: Piece) -> bool:
    """True when ``b`` is a non-empty piece of the same colour as ``a``."""
    return rules.is_friend(a, b)


def is_opponent_piece(a: Piece, b: Piece) -> bool:
    """True when ``b`` is a non-empty piece of the other colour."""
    return rules.is_opponent(a, b)


def gen_pawn(pos: Position, origin: int, piece: Piece) -> list[Move]:
    """Pushes, captures, promotions and en-passant captures for a pawn."""
    white = is_white(piece)
    direction = 1 if white else -1
    start_rank = 1 if white else 6
    last_rank = 7 if white else 0
    f, r = file_of(origin), rank_of(origin)
    moves: list[Move] = []

    def push(target: int) -> None:
        if rank_of(target) == last_rank:
            moves.extend(Move(origin, target, promo) for promo in _PROMOTION_ORDER)
        else:
            moves.append(Move(origin, target))

    r1 = r + direction
    if 0 <= r1 < 8:
        target = make_sq(f, r1)
        if is_empty(pos.at(target)):
            push(target)
            if r == start_rank:
                double = make_sq(f, r + 2 * direction)
                if is_empty(pos.at(double)):
                    moves.append(Move(origin, double))
        for cf in (f - 1, f + 1):
            if 0 <= cf < 8:
                target = make_sq(cf, r1)
                if is_opponent_piece(piece, pos.at(target)):
                    push(target)

    ep = pos.ep_square
    if ep != -1:
        ep_f, ep_r = file_of(ep), rank_of(ep)
        if ep_r == r + direction and abs(ep_f - f) == 1:
            captured = pos.at(make_sq(ep_f, ep_r - direction))
            if captured == (Piece.BP if white else Piece.WP):
                moves.append(Move(origin, ep))
    return moves


def gen_knight(pos: Position, origin: int, piece: Piece) -> list[Move]:
    f0, r0 = file_of(origin), rank_of(origin)
    moves = []
    for df, dr in _KNIGHT_DELTAS:
        f, r = f0 + df, r0 + dr
        if not (0 <= f < 8 and 0 <= r < 8):
            continue
        target = make_sq(f, r)
        if not is_friend_piece(piece, pos.at(target)):
            moves.append(Move(origin, target))
    return moves


def gen_ray(pos: Position, origin: int, piece: Piece, df_step: int, dr_step: int) -> list[Move]:
    """Slide from ``origin`` in one direction up to a blocker, capturing an enemy blocker."""
    moves = []
    f = file_of(origin) + df_step
    r = rank_of(origin) + dr_step
    while 0 <= f < 8 and 0 <= r < 8:
        target = make_sq(f, r)
        occupant = pos.at(target)
        if is_empty(occupant):
            moves.append(Move(origin, target))
        else:
            if is_opponent_piece(piece, occupant):
                moves.append(Move(origin, target))
            break
        f += df_step
        r += dr_step
    return moves


def gen_bishop(pos: Position, origin: int, piece: Piece) -> list[Move]:
    return [
        m
        for df, dr in ((1, 1), (-1, 1), (1, -1), (-1, -1))
        for m in gen_ray(pos, origin, piece, df, dr)
    ]


def gen_rook(pos: Position, origin: int, piece: Piece) -> list[Move]:
    return [
        m
        for df, dr in ((1, 0), (-1, 0), (0, 1), (0, -1))
        for m in gen_ray(pos, origin, piece, df, dr)
    ]


def gen_queen(pos: Position, origin: int, piece: Piece) -> list[Move]:
    return gen_bishop(pos, origin, piece) + gen_rook(pos, origin, piece)


def gen_king(pos: Position, origin: int, piece: Piece) -> list[Move]:
    """One-step king moves plus castling where rights, empty squares and rook allow."""
    f0, r0 = file_of(origin), rank_of(origin)
    moves = []
    for df in (-1, 0, 1):
        for dr in (-1, 0, 1):
            if df == 0 and dr == 0:
                continue
            f, r = f0 + df, r0 + dr
            if not (0 <= f < 8 and 0 <= r < 8):
                continue
            target = make_sq(f, r)
            if not is_friend_piece(piece, pos.at(target)):
                moves.append(Move(origin, target))

    white = is_white(piece)
    back = 0 if white else 7
    if f0 == 4 and r0 == back:
        rook = Piece.WR if white else Piece.BR
        rights = int(pos.castling_rights)
        for flag, between, rook_file, king_file in _CASTLE_LAYOUT[white]:
            if (
                rights & flag
                and all(pos.at(make_sq(f, back)) == Piece.EMPTY for f in between)
                and pos.at(make_sq(rook_file, back)) == rook
            ):
                moves.append(Move(origin, make_sq(king_file, back)))
    return moves


_GENERATORS: dict[Piece, Callable[[Position, int, Piece], list[Move]]] = {
    Piece.WP: gen_pawn,
    Piece.BP: gen_pawn,
    Piece.WN: gen_knight,
    Piece.BN: gen_knight,
    Piece.WB: gen_bishop,
    Piece.BB: gen_bishop,
    Piece.WR: gen_rook,
    Piece.BR: gen_rook,
    Piece.WQ: gen_queen,
    Piece.BQ: gen_queen,
    Piece.WK: gen_king,
    Piece.BK: gen_king,
}


def generate_pseudo_legal(pos: Position) -> list[Move]:
    """Moves of the side to move that obey piece movement, ignoring king safety."""
    white = pos.side_to_move == Color.WHITE
    moves: list[Move] = []
    for origin in range(64):
        p = pos.at(origin)
        if is_empty(p) or is_white(p) != white:
            continue
        moves.extend(_GENERATORS[p](pos, origin, p))
    return moves


def _resulting_position(pos: Position, move: Move) -> Position:
    tmp = pos.copy()
    moving = tmp.at(move.origin)
    tmp.set(move.target, moving)
    tmp.set(move.origin, Piece.EMPTY)

    if rules.is_castle_move(pos, move):
        r = 0 if moving == Piece.WK else 7
        if file_of(move.target) == 6:
            rook_from, rook_to = make_sq(7, r), make_sq(5, r)
        else:
            rook_from, rook_to = make_sq(0, r), make_sq(3, r)
        tmp.set(rook_to, tmp.at(rook_from))
        tmp.set(rook_from, Piece.EMPTY)

    if moving in (Piece.WP, Piece.BP):
        direction = 1 if moving == Piece.WP else -1
        if pos.ep_square == move.target and is_empty(pos.at(move.target)):
            dfv = file_of(move.target) - file_of(move.origin)
            drv = rank_of(move.target) - rank_of(move.origin)
            if abs(dfv) == 1 and drv == direction:
                tmp.set(make_sq(file_of(move.target), rank_of(move.target) - direction), Piece.EMPTY)

        last_rank = 7 if moving == Piece.WP else 0
        if rank_of(move.target) == last_rank:
            white_piece, black_piece = _PROMOTED.get(move.promo, _PROMOTED[Promotion.Q])
            tmp.set(move.target, white_piece if moving == Piece.WP else black_piece)
    return tmp


def _legal_moves(pos: Position) -> Iterator[Move]:
    mover = pos.side_to_move
    for move in generate_pseudo_legal(pos):
        if rules.is_castle_move(pos, move) and not rules.castle_path_safe(pos, move):
            continue
        if rules.in_check(_resulting_position(pos, move), mover):
            continue
        yield move


def generate_legal(pos: Position) -> list[Move]:
    """Pseudo-legal moves that do not leave the mover's king in check."""
    return list(_legal_moves(pos))


def has_any_legal_move(pos: Position) -> bool:
    return next(_legal_moves(pos), None) is not None