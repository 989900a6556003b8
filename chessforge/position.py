"""A mutable chess position backed by any board storage backend."""

from __future__ import annotations

from chessforge import rules
from chessforge.boards import Board
from chessforge.rules import IllegalMoveError
from chessforge.types import (
    ALL_CASTLING_RIGHTS,
    STARTPOS_PLACEMENTS,
    CastlingRights,
    Color,
    Move,
    Piece,
    Promotion,
    file_of,
    make_sq,
    other,
    rank_of,
)

_PROMOTED = {
    Promotion.Q: (Piece.WQ, Piece.BQ),
    Promotion.R: (Piece.WR, Piece.BR),
    Promotion.B: (Piece.WB, Piece.BB),
    Promotion.N: (Piece.WN, Piece.BN),
}

_KING_RIGHTS = {
    Piece.WK: CastlingRights.WK | CastlingRights.WQ,
    Piece.BK: CastlingRights.BK | CastlingRights.BQ,
}

_ROOK_RIGHTS = {
    (Piece.WR, make_sq(0, 0)): CastlingRights.WQ,
    (Piece.WR, make_sq(7, 0)): CastlingRights.WK,
    (Piece.BR, make_sq(0, 7)): CastlingRights.BQ,
    (Piece.BR, make_sq(7, 7)): CastlingRights.BK,
}


def _promoted_piece(pawn: Piece, promo: Promotion) -> Piece:
    white_piece, black_piece = _PROMOTED.get(promo, _PROMOTED[Promotion.Q])
    return white_piece if pawn == Piece.WP else black_piece


class Position:
    """Pieces on a board plus side to move, castling rights and en-passant square.

    ``ep_square`` is -1 when there is no en-passant target.
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self.side_to_move = Color.WHITE
        self.castling_rights = CastlingRights.NONE
        self.ep_square = -1

    @classmethod
    def startpos(cls, board: Board) -> Position:
        """The standard initial position placed on ``board``."""
        pos = cls(board)
        for placement in STARTPOS_PLACEMENTS:
            pos.set(placement.sq, placement.pc)
        pos.side_to_move = Color.WHITE
        pos.ep_square = -1
        pos.castling_rights = ALL_CASTLING_RIGHTS
        return pos

    def at(self, sq: int) -> Piece:
        return self.board.piece_at(sq)

    def set(self, sq: int, p: Piece) -> None:
        self.board.set_piece(sq, p)

    def clear(self, sq: int) -> None:
        self.board.clear_square(sq)

    def move_piece(self, origin: int, target: int) -> None:
        self.board.move_piece(origin, target)

    def copy(self) -> Position:
        """An independent copy with its own board."""
        dup = Position(self.board.clone())
        dup.side_to_move = self.side_to_move
        dup.castling_rights = self.castling_rights
        dup.ep_square = self.ep_square
        return dup

    __copy__ = copy

    def _place(
        self,
        move: Move,
        moving: Piece,
        ep_captured: int | None,
        castle: bool,
        promotion: bool,
    ) -> None:
        self.set(move.target, moving)
        self.set(move.origin, Piece.EMPTY)
        if ep_captured is not None:
            self.set(ep_captured, Piece.EMPTY)
        if castle:
            r = 0 if moving == Piece.WK else 7
            if file_of(move.target) == 6:
                rook_from, rook_to = make_sq(7, r), make_sq(5, r)
            else:
                rook_from, rook_to = make_sq(0, r), make_sq(3, r)
            self.set(rook_to, self.at(rook_from))
            self.set(rook_from, Piece.EMPTY)
        if promotion:
            self.set(move.target, _promoted_piece(moving, move.promo))

    def make_move(self, move: Move) -> None:
        """Play ``move``; raise IllegalMoveError and leave the position as it was if illegal."""
        rules.check_pseudo_legal(self, move)

        moving = self.at(move.origin)
        captured = self.at(move.target)
        castle = rules.is_castle_move(self, move)
        is_pawn = moving in (Piece.WP, Piece.BP)
        direction = 1 if moving == Piece.WP else -1

        promotion = False
        if is_pawn:
            last_rank = 7 if moving == Piece.WP else 0
            promotion = rank_of(move.target) == last_rank

        ep_captured: int | None = None
        if is_pawn and captured == Piece.EMPTY:
            dfv = file_of(move.target) - file_of(move.origin)
            drv = rank_of(move.target) - rank_of(move.origin)
            if abs(dfv) == 1 and drv == direction and self.ep_square == move.target:
                ep_captured = make_sq(file_of(move.target), rank_of(move.target) - direction)

        if castle:
            rules.check_castle_path(self, move)

        trial = self.copy()
        trial._place(move, moving, ep_captured, castle, promotion)
        if rules.in_check(trial, self.side_to_move):
            raise IllegalMoveError("Move is illegal: it leaves your king in check.")

        self._place(move, moving, ep_captured, castle, promotion)

        lost = (
            _KING_RIGHTS.get(moving, CastlingRights.NONE)
            | _ROOK_RIGHTS.get((moving, move.origin), CastlingRights.NONE)
            | _ROOK_RIGHTS.get((captured, move.target), CastlingRights.NONE)
        )
        self.castling_rights = CastlingRights(int(self.castling_rights) & ~int(lost))

        self.ep_square = -1
        if is_pawn and rank_of(move.target) - rank_of(move.origin) == 2 * direction:
            self.ep_square = make_sq(file_of(move.origin), rank_of(move.origin) + direction)

        self.side_to_move = other(self.side_to_move)