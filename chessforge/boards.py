"""Interchangeable board storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from chessforge.pieces import PieceObject, make_piece_object
from chessforge.types import Color, Piece, is_white


class Board(ABC):
    """Storage of the piece on each of the 64 squares."""

    @abstractmethod
    def piece_at(self, sq: int) -> Piece:
        """Piece on ``sq``, or Piece.EMPTY."""

    @abstractmethod
    def set_piece(self, sq: int, p: Piece) -> None:
        """Place ``p`` on ``sq``, replacing whatever was there."""

    @abstractmethod
    def clear_square(self, sq: int) -> None:
        """Make ``sq`` empty."""

    def move_piece(self, origin: int, target: int) -> None:
        p = self.piece_at(origin)
        self.clear_square(origin)
        self.set_piece(target, p)

    @abstractmethod
    def clone(self) -> Board:
        """An independent copy of this board."""


class ArrayBoard(Board):
    """A flat list of piece codes."""

    def __init__(self) -> None:
        self._squares = [Piece.EMPTY] * 64

    def piece_at(self, sq: int) -> Piece:
        return self._squares[sq]

    def set_piece(self, sq: int, p: Piece) -> None:
        self._squares[sq] = Piece(p)

    def clear_square(self, sq: int) -> None:
        self._squares[sq] = Piece.EMPTY

    def clone(self) -> ArrayBoard:
        copy = ArrayBoard()
        copy._squares = list(self._squares)
        return copy


class BitboardBoard(Board):
    """One bitboard per piece kind, with occupancy masks and a mailbox."""

    def __init__(self) -> None:
        self._pieces = [0] * len(Piece)
        self._occ = [0, 0]
        self._occ_all = 0
        self._mailbox = [Piece.EMPTY] * 64

    @property
    def occ_all(self) -> int:
        return self._occ_all

    def occ(self, color: Color) -> int:
        return self._occ[color]

    def _clear(self, sq: int) -> None:
        existing = self._mailbox[sq]
        if existing == Piece.EMPTY:
            return
        mask = ~(1 << sq)
        self._pieces[existing] &= mask
        self._occ[0 if is_white(existing) else 1] &= mask
        self._occ_all &= mask
        self._mailbox[sq] = Piece.EMPTY

    def piece_at(self, sq: int) -> Piece:
        return self._mailbox[sq]

    def set_piece(self, sq: int, p: Piece) -> None:
        self._clear(sq)
        p = Piece(p)
        if p == Piece.EMPTY:
            return
        b = 1 << sq
        self._pieces[p] |= b
        self._occ[0 if is_white(p) else 1] |= b
        self._occ_all |= b
        self._mailbox[sq] = p

    def clear_square(self, sq: int) -> None:
        self._clear(sq)

    def clone(self) -> BitboardBoard:
        copy = BitboardBoard()
        copy._pieces = list(self._pieces)
        copy._occ = list(self._occ)
        copy._occ_all = self._occ_all
        copy._mailbox = list(self._mailbox)
        return copy


class PointerBoard(Board):
    """One piece object, or None, per square."""

    def __init__(self) -> None:
        self._squares: list[PieceObject | None] = [None] * 64

    def piece_at(self, sq: int) -> Piece:
        obj = self._squares[sq]
        return Piece.EMPTY if obj is None else obj.code()

    def set_piece(self, sq: int, p: Piece) -> None:
        self._squares[sq] = make_piece_object(p)

    def clear_square(self, sq: int) -> None:
        self._squares[sq] = None

    def clone(self) -> PointerBoard:
        copy = PointerBoard()
        copy._squares = [
            None if obj is None else make_piece_object(obj.code()) for obj in self._squares
        ]
        return copy


class BoardType(Enum):
    ARRAY = "array"
    POINTER = "pointer"
    BITBOARD = "bitboard"


_FACTORIES = {
    BoardType.ARRAY: ArrayBoard,
    BoardType.POINTER: PointerBoard,
    BoardType.BITBOARD: BitboardBoard,
}


def make_board(board_type: BoardType) -> Board:
    """A new, empty board of the requested backend."""
    try:
        factory = _FACTORIES[board_type]
    except KeyError:
        raise ValueError(f"unknown board type: {board_type!r}") from None
    return factory()