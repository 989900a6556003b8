"""Piece objects used by the object-per-square board."""

from __future__ import annotations

from typing import ClassVar

from chessforge.types import Color, Piece


class PieceObject:
    """A piece of a given colour; subclasses fix the kind."""

    _letter: ClassVar[str]
    _codes: ClassVar[tuple[Piece, Piece]]

    def __init__(self, color: Color) -> None:
        if type(self) is PieceObject:
            raise TypeError("PieceObject is abstract; use a concrete piece class")
        self.color = Color(color)

    def display(self) -> str:
        """Letter for the piece: upper case for White, lower case for Black."""
        return self._letter if self.color == Color.WHITE else self._letter.lower()

    def code(self) -> Piece:
        return self._codes[self.color]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PieceObject):
            return NotImplemented
        return type(self) is type(other) and self.color == other.color

    def __hash__(self) -> int:
        return hash((type(self), self.color))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.color.name})"


class Pawn(PieceObject):
    _letter = "P"
    _codes = (Piece.WP, Piece.BP)


class Knight(PieceObject):
    _letter = "N"
    _codes = (Piece.WN, Piece.BN)


class Bishop(PieceObject):
    _letter = "B"
    _codes = (Piece.WB, Piece.BB)


class Rook(PieceObject):
    _letter = "R"
    _codes = (Piece.WR, Piece.BR)


class Queen(PieceObject):
    _letter = "Q"
    _codes = (Piece.WQ, Piece.BQ)


class King(PieceObject):
    _letter = "K"
    _codes = (Piece.WK, Piece.BK)


_BY_CODE: dict[Piece, tuple[type[PieceObject], Color]] = {
    code: (cls, Color(ci))
    for cls in (Pawn, Knight, Bishop, Rook, Queen, King)
    for ci, code in enumerate(cls._codes)
}


def make_piece_object(p: Piece) -> PieceObject | None:
    """Build the object for piece code ``p``; None for an empty square."""
    entry = _BY_CODE.get(Piece(p))
    if entry is None:
        return None
    cls, color = entry
    return cls(color)