"""Parsing of square names such as ``e2`` and move text such as ``e2 e4``."""

from __future__ import annotations

from chessforge.types import make_sq


def parse_square(text: str) -> int:
    """Square index for a name like ``"e2"`` (a1 = 0 .. h8 = 63).

    Surrounding whitespace is ignored and the file letter may be upper case.
    Raises ValueError for anything else.
    """
    s = text.strip()
    if len(s) != 2:
        raise ValueError(f"invalid square: {text!r}")
    file_char, rank_char = s[0].lower(), s[1]
    if not ("a" <= file_char <= "h") or not ("1" <= rank_char <= "8"):
        raise ValueError(f"invalid square: {text!r}")
    return make_sq(ord(file_char) - ord("a"), ord(rank_char) - ord("1"))


def parse_two_squares(line: str) -> tuple[int, int]:
    """The (origin, target) pair for text like ``"e2 e4"``.

    Exactly two whitespace-separated square names are accepted; raises
    ValueError otherwise.
    """
    tokens = line.split()
    if len(tokens) != 2:
        raise ValueError(f"expected two squares: {line!r}")
    origin, target = tokens
    return parse_square(origin), parse_square(target)