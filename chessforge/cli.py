"""Command-line entry points: a single search and a backend benchmark."""

from __future__ import annotations

import argparse
import time

from chessforge.bb_position import BitboardPosition
from chessforge.boards import BoardType, make_board
from chessforge.position import Position
from chessforge.render import board_ascii
from chessforge.search import SearchResult, minimax, minimax_bitboard
from chessforge.types import Move, Promotion, file_of, rank_of

_PROMO_CHARS = {
    Promotion.Q: "q",
    Promotion.R: "r",
    Promotion.B: "b",
    Promotion.N: "n",
}

_BOARD_NAMES = {
    BoardType.ARRAY: "ArrayBoard",
    BoardType.POINTER: "PointerBoard",
    BoardType.BITBOARD: "Bitboard",
}


def square_to_string(sq: int) -> str:
    """Algebraic name of a square index, e.g. 0 -> ``a1``."""
    return chr(ord("a") + file_of(sq)) + chr(ord("1") + rank_of(sq))


def move_to_string(move: Move) -> str:
    """``"e2 e4"``, with the promotion letter appended when there is one."""
    text = f"{square_to_string(move.origin)} {square_to_string(move.target)}"
    if move.promo != Promotion.NONE:
        text += " " + _PROMO_CHARS.get(move.promo, "?")
    return text


def parse_board_type(text: str) -> BoardType:
    """Board backend named by ``text``; anything unknown means the array board."""
    try:
        return BoardType(text)
    except ValueError:
        return BoardType.ARRAY


def _positive(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return value


def main(argv: list[str] | None = None) -> int:
    """Show the initial position and the best move found by a fixed-depth search."""
    parser = argparse.ArgumentParser(
        prog="chessforge", description="Search the initial chess position."
    )
    parser.add_argument("board", nargs="?", default="array",
                        help="board backend: array, pointer or bitboard")
    parser.add_argument("--depth", type=_positive, default=3, help="search depth in plies")
    args = parser.parse_args(argv)

    board_type = parse_board_type(args.board)
    pos = Position.startpos(make_board(board_type))

    print(f"Board backend: {_BOARD_NAMES[board_type]}")
    print("Initial position:")
    print(board_ascii(pos))

    result = minimax(pos, args.depth)
    print(f"Search depth: {args.depth}")
    print(f"Best move: {move_to_string(result.best)}")
    print(f"Score: {result.score}")
    return 0


def _report(name: str, depth: int, reps: int, result: SearchResult, total_ms: int) -> None:
    avg_ms = total_ms / reps
    print(
        f"{name} | depth={depth} | reps={reps} | best={move_to_string(result.best)}"
        f" | score={result.score} | avg_ms={avg_ms:g}"
    )


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _run_board(board_type: BoardType, depth: int, reps: int) -> None:
    total_ms = 0
    result = SearchResult()
    for _ in range(reps):
        pos = Position.startpos(make_board(board_type))
        start = time.perf_counter()
        result = minimax(pos, depth)
        total_ms += _elapsed_ms(start)
    _report(_BOARD_NAMES[board_type], depth, reps, result, total_ms)


def _run_bitboard_position(depth: int, reps: int) -> None:
    total_ms = 0
    result = SearchResult()
    for _ in range(reps):
        pos = BitboardPosition.startpos()
        start = time.perf_counter()
        result = minimax_bitboard(pos, depth)
        total_ms += _elapsed_ms(start)
    _report("BitboardPosition", depth, reps, result, total_ms)


def benchmark(argv: list[str] | None = None) -> int:
    """Time the same search on every board backend and on the bitboard position."""
    parser = argparse.ArgumentParser(
        prog="chessforge-benchmark", description="Compare search speed of board backends."
    )
    parser.add_argument("--depth", type=_positive, default=5, help="search depth in plies")
    parser.add_argument("--reps", type=_positive, default=3, help="repetitions per backend")
    args = parser.parse_args(argv)

    print(f"Backend comparison benchmark (depth={args.depth})")
    print("-----------------------------------------------")
    for board_type in (BoardType.ARRAY, BoardType.POINTER, BoardType.BITBOARD):
        _run_board(board_type, args.depth, args.reps)
    _run_bitboard_position(args.depth, args.reps)
    return 0