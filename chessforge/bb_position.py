"""A bitboard-native position with make/unmake and its own move generation."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from chessforge import attacks
from chessforge.types import (
    STARTPOS_PLACEMENTS,
    ALL_CASTLING_RIGHTS,
    CastlingRights,
    Color,
    Move,
    Piece,
    Promotion,
    file_of,
    is_empty,
    make_sq,
    other,
    rank_of,
)

_FULL = 0xFFFFFFFFFFFFFFFF

FILE_A = 0x0101010101010101
FILE_H = 0x8080808080808080
RANK_1 = 0x00000000000000FF
RANK_3 = 0x0000000000FF0000
RANK_6 = 0x0000FF0000000000
RANK_8 = 0xFF00000000000000

KING, QUEEN, KNIGHT, BISHOP, PAWN, ROOK = range(6)

_PROMOTION_ORDER = (Promotion.Q, Promotion.R, Promotion.B, Promotion.N)

_PROMOTED = {
    Promotion.Q: (Piece.WQ, Piece.BQ),
    Promotion.R: (Piece.WR, Piece.BR),
    Promotion.B: (Piece.WB, Piece.BB),
    Promotion.N: (Piece.WN, Piece.BN),
}

# (right, squares that must be empty, squares that must not be attacked, king origin, king target)
_CASTLES = {
    Color.WHITE: (
        (CastlingRights.WK, (make_sq(5, 0), make_sq(6, 0)),
         (make_sq(4, 0), make_sq(5, 0)), make_sq(4, 0), make_sq(6, 0)),
        (CastlingRights.WQ, (make_sq(3, 0), make_sq(2, 0), make_sq(1, 0)),
         (make_sq(4, 0), make_sq(3, 0)), make_sq(4, 0), make_sq(2, 0)),
    ),
    Color.BLACK: (
        (CastlingRights.BK, (make_sq(5, 7), make_sq(6, 7)),
         (make_sq(4, 7), make_sq(5, 7)), make_sq(4, 7), make_sq(6, 7)),
        (CastlingRights.BQ, (make_sq(3, 7), make_sq(2, 7), make_sq(1, 7)),
         (make_sq(4, 7), make_sq(3, 7)), make_sq(4, 7), make_sq(2, 7)),
    ),
}

# king target -> (rook piece, rook origin, rook target)
_CASTLE_ROOK = {
    make_sq(6, 0): (Piece.WR, make_sq(7, 0), make_sq(5, 0)),
    make_sq(2, 0): (Piece.WR, make_sq(0, 0), make_sq(3, 0)),
    make_sq(6, 7): (Piece.BR, make_sq(7, 7), make_sq(5, 7)),
    make_sq(2, 7): (Piece.BR, make_sq(0, 7), make_sq(3, 7)),
}

_ROOK_CORNER_RIGHTS = {
    (Piece.WR, make_sq(7, 0)): CastlingRights.WK,
    (Piece.WR, make_sq(0, 0)): CastlingRights.WQ,
    (Piece.BR, make_sq(7, 7)): CastlingRights.BK,
    (Piece.BR, make_sq(0, 7)): CastlingRights.BQ,
}


def _squares(b: int) -> Iterator[int]:
    """Indices of the set bits of ``b``, lowest first."""
    while b:
        low = b & -b
        yield low.bit_length() - 1
        b ^= low


def _color_index(p: Piece) -> int:
    return (int(p) - 1) // 6


def _type_index(p: Piece) -> int:
    return (int(p) - 1) % 6


def _promo_piece(color: Color, promo: Promotion) -> Piece:
    white_piece, black_piece = _PROMOTED.get(promo, _PROMOTED[Promotion.Q])
    return white_piece if color == Color.WHITE else black_piece


def _emit_pawn_moves(out: list[Move], targets: int, delta: int, last_rank: int) -> None:
    """Append moves to ``targets`` from ``target - delta``; last-rank arrivals promote."""
    for to in _squares(targets & ~last_rank):
        out.append(Move(to - delta, to))
    for to in _squares(targets & last_rank):
        out.extend(Move(to - delta, to, promo) for promo in _PROMOTION_ORDER)


@dataclass(frozen=True)
class _State:
    castling_rights: CastlingRights
    ep_square: int
    captured: Piece
    moving: Piece
    was_ep: bool
    move: Move


class BitboardPosition:
    """Position stored as piece bitboards with an undo stack for make/unmake.

    Piece-type indices within a colour are 0=K 1=Q 2=N 3=B 4=P 5=R.
    ``ep_square`` is -1 when there is no en-passant target.
    """

    def __init__(self) -> None:
        self._pcs = [[0] * 6 for _ in range(2)]
        self._occ = [0, 0]
        self._occ_all = 0
        self._mailbox = [Piece.EMPTY] * 64
        self.side_to_move = Color.WHITE
        self.castling_rights = CastlingRights.NONE
        self.ep_square = -1
        self._stack: list[_State] = []

    @classmethod
    def startpos(cls) -> BitboardPosition:
        """The standard initial position."""
        pos = cls()
        pos.side_to_move = Color.WHITE
        pos.castling_rights = ALL_CASTLING_RIGHTS
        pos.ep_square = -1
        for placement in STARTPOS_PLACEMENTS:
            pos._put_piece(placement.pc, placement.sq)
        return pos

    # --- accessors -------------------------------------------------------

    def piece_at(self, sq: int) -> Piece:
        return self._mailbox[sq]

    def pieces(self, color: Color, piece_index: int) -> int:
        """Bitboard of ``color``'s pieces of type index ``piece_index``."""
        return self._pcs[color][piece_index]

    @property
    def occ_all(self) -> int:
        return self._occ_all

    def occ(self, color: Color) -> int:
        return self._occ[color]

    # --- primitives ------------------------------------------------------

    def _put_piece(self, p: Piece, sq: int) -> None:
        b = 1 << sq
        ci = _color_index(p)
        self._pcs[ci][_type_index(p)] |= b
        self._occ[ci] |= b
        self._occ_all |= b
        self._mailbox[sq] = Piece(p)

    def _remove_piece(self, p: Piece, sq: int) -> None:
        mask = ~(1 << sq)
        ci = _color_index(p)
        self._pcs[ci][_type_index(p)] &= mask
        self._occ[ci] &= mask
        self._occ_all &= mask
        self._mailbox[sq] = Piece.EMPTY

    def _move_piece(self, p: Piece, origin: int, target: int) -> None:
        toggle = (1 << origin) | (1 << target)
        ci = _color_index(p)
        self._pcs[ci][_type_index(p)] ^= toggle
        self._occ[ci] ^= toggle
        self._occ_all ^= toggle
        self._mailbox[origin] = Piece.EMPTY
        self._mailbox[target] = p

    # --- attacks ---------------------------------------------------------

    def king_square(self, color: Color) -> int:
        kings = self._pcs[color][KING]
        if not kings:
            raise ValueError(f"no {Color(color).name.lower()} king on the board")
        return (kings & -kings).bit_length() - 1

    def square_attacked(self, sq: int, by: Color) -> bool:
        """True when any piece of colour ``by`` attacks ``sq``."""
        pcs = self._pcs[by]
        if attacks.pawn(other(by), sq) & pcs[PAWN]:
            return True
        if attacks.knight(sq) & pcs[KNIGHT]:
            return True
        if attacks.king(sq) & pcs[KING]:
            return True
        if attacks.bishop_otf(sq, self._occ_all) & (pcs[BISHOP] | pcs[QUEEN]):
            return True
        return bool(attacks.rook_otf(sq, self._occ_all) & (pcs[ROOK] | pcs[QUEEN]))

    def in_check(self, who: Color) -> bool:
        return self.square_attacked(self.king_square(who), other(who))

    # --- make / unmake ---------------------------------------------------

    def do_move(self, move: Move) -> None:
        """Play ``move`` without legality checks; undo it with undo_move()."""
        origin, target = move.origin, move.target
        moving = self._mailbox[origin]
        stm = self.side_to_move
        captured = Piece.EMPTY
        was_ep = False

        if (
            moving in (Piece.WP, Piece.BP)
            and self.ep_square >= 0
            and target == self.ep_square
            and is_empty(self._mailbox[target])
        ):
            was_ep = True
            cap_sq = target - 8 if stm == Color.WHITE else target + 8
            captured = self._mailbox[cap_sq]
            self._remove_piece(captured, cap_sq)
            self._move_piece(moving, origin, target)
        else:
            if not is_empty(self._mailbox[target]):
                captured = self._mailbox[target]
                self._remove_piece(captured, target)
            self._move_piece(moving, origin, target)
            if move.promo != Promotion.NONE:
                self._remove_piece(moving, target)
                self._put_piece(_promo_piece(stm, move.promo), target)
            if moving in (Piece.WK, Piece.BK) and abs(file_of(target) - file_of(origin)) == 2:
                rook, rook_from, rook_to = self._castle_rook(stm, target)
                self._move_piece(rook, rook_from, rook_to)

        self._stack.append(
            _State(self.castling_rights, self.ep_square, captured, moving, was_ep, move)
        )

        cr = int(self.castling_rights)
        if moving == Piece.WK:
            cr &= ~int(CastlingRights.WK | CastlingRights.WQ)
        elif moving == Piece.BK:
            cr &= ~int(CastlingRights.BK | CastlingRights.BQ)
        cr &= ~int(_ROOK_CORNER_RIGHTS.get((moving, origin), CastlingRights.NONE))
        cr &= ~int(_ROOK_CORNER_RIGHTS.get((captured, target), CastlingRights.NONE))
        self.castling_rights = CastlingRights(cr)

        self.ep_square = -1
        if moving == Piece.WP and rank_of(target) - rank_of(origin) == 2:
            self.ep_square = make_sq(file_of(origin), rank_of(origin) + 1)
        elif moving == Piece.BP and rank_of(origin) - rank_of(target) == 2:
            self.ep_square = make_sq(file_of(origin), rank_of(origin) - 1)

        self.side_to_move = other(stm)

    @staticmethod
    def _castle_rook(side: Color, king_target: int) -> tuple[Piece, int, int]:
        back = 0 if side == Color.WHITE else 7
        if king_target == make_sq(6, back):
            return _CASTLE_ROOK[make_sq(6, back)]
        return _CASTLE_ROOK[make_sq(2, back)]

    def undo_move(self) -> None:
        """Take back the last move played with do_move()."""
        if not self._stack:
            raise IndexError("no move to undo")
        st = self._stack.pop()

        self.side_to_move = other(self.side_to_move)
        self.castling_rights = st.castling_rights
        self.ep_square = st.ep_square
        stm = self.side_to_move
        origin, target = st.move.origin, st.move.target

        if st.moving in (Piece.WK, Piece.BK) and abs(file_of(target) - file_of(origin)) == 2:
            rook, rook_from, rook_to = self._castle_rook(stm, target)
            self._move_piece(rook, rook_to, rook_from)

        if st.move.promo != Promotion.NONE:
            self._remove_piece(self._mailbox[target], target)
            self._put_piece(st.moving, origin)
        else:
            self._move_piece(st.moving, target, origin)

        if st.captured != Piece.EMPTY:
            if st.was_ep:
                cap_sq = target - 8 if stm == Color.WHITE else target + 8
                self._put_piece(st.captured, cap_sq)
            else:
                self._put_piece(st.captured, target)

    # --- move generation -------------------------------------------------

    def _gen_pawns(self, out: list[Move]) -> None:
        ci = self.side_to_move
        pawns = self._pcs[ci][PAWN]
        them = self._occ[1 - ci]
        empty = ~self._occ_all
        ep = self.ep_square

        if ci == Color.WHITE:
            single = ((pawns << 8) & _FULL) & empty
            double = ((single & RANK_3) << 8) & empty
            _emit_pawn_moves(out, single, 8, RANK_8)
            _emit_pawn_moves(out, double, 16, RANK_8)
            _emit_pawn_moves(out, ((pawns & ~FILE_A) << 7) & them, 7, RANK_8)
            _emit_pawn_moves(out, ((pawns & ~FILE_H) << 9) & them, 9, RANK_8)
            if ep >= 0:
                ep_bb = 1 << ep
                if file_of(ep) > 0 and pawns & (ep_bb >> 9):
                    out.append(Move(ep - 9, ep))
                if file_of(ep) < 7 and pawns & (ep_bb >> 7):
                    out.append(Move(ep - 7, ep))
        else:
            single = (pawns >> 8) & empty
            double = ((single & RANK_6) >> 8) & empty
            _emit_pawn_moves(out, single, -8, RANK_1)
            _emit_pawn_moves(out, double, -16, RANK_1)
            _emit_pawn_moves(out, ((pawns & ~FILE_H) >> 7) & them, -7, RANK_1)
            _emit_pawn_moves(out, ((pawns & ~FILE_A) >> 9) & them, -9, RANK_1)
            if ep >= 0:
                ep_bb = 1 << ep
                if file_of(ep) < 7 and pawns & ((ep_bb << 9) & _FULL):
                    out.append(Move(ep + 9, ep))
                if file_of(ep) > 0 and pawns & ((ep_bb << 7) & _FULL):
                    out.append(Move(ep + 7, ep))

    def _gen_pieces(self, out: list[Move], index: int, reach: Callable[[int], int]) -> None:
        ci = self.side_to_move
        own = self._occ[ci]
        for origin in _squares(self._pcs[ci][index]):
            out.extend(Move(origin, to) for to in _squares(reach(origin) & ~own))

    def _gen_king(self, out: list[Move]) -> None:
        stm = self.side_to_move
        them = other(stm)
        origin = self.king_square(stm)
        own = self._occ[stm]
        out.extend(Move(origin, to) for to in _squares(attacks.king(origin) & ~own))

        rights = int(self.castling_rights)
        for flag, between, safe, king_from, king_to in _CASTLES[stm]:
            if (
                rights & flag
                and not any(self._occ_all & (1 << sq) for sq in between)
                and not any(self.square_attacked(sq, them) for sq in safe)
            ):
                out.append(Move(king_from, king_to))

    def generate_pseudo(self) -> list[Move]:
        """Moves of the side to move, ignoring whether the king is left in check."""
        occ = self._occ_all
        out: list[Move] = []
        self._gen_pawns(out)
        self._gen_pieces(out, KNIGHT, attacks.knight)
        self._gen_pieces(out, BISHOP, lambda sq: attacks.bishop_otf(sq, occ))
        self._gen_pieces(out, ROOK, lambda sq: attacks.rook_otf(sq, occ))
        self._gen_pieces(
            out, QUEEN, lambda sq: attacks.bishop_otf(sq, occ) | attacks.rook_otf(sq, occ)
        )
        self._gen_king(out)
        return out

    def _is_legal(self, move: Move) -> bool:
        self.do_move(move)
        try:
            mover = other(self.side_to_move)
            return not self.square_attacked(self.king_square(mover), self.side_to_move)
        finally:
            self.undo_move()

    def generate_legal(self) -> list[Move]:
        """Pseudo-legal moves that do not leave the mover's king in check."""
        return [m for m in self.generate_pseudo() if self._is_legal(m)]

    def has_any_legal_move(self) -> bool:
        return any(self._is_legal(m) for m in self.generate_pseudo())