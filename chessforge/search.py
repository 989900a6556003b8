"""Fixed-depth alpha-beta minimax search over both position types."""

from __future__ import annotations

from dataclasses import dataclass

from chessforge import rules
from chessforge.bb_position import BitboardPosition
from chessforge.evaluation import evaluate, evaluate_bitboard
from chessforge.movegen import generate_legal
from chessforge.position import Position
from chessforge.rules import IllegalMoveError
from chessforge.types import Color, Move

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
MATE_SCORE = 100_000


@dataclass
class SearchResult:
    """Best move found and its score from White's point of view."""

    best: Move = Move()
    score: int = 0


def _check_depth(depth: int) -> None:
    if depth < 1:
        raise ValueError(f"search depth must be at least 1, got {depth}")


def _terminal_score(stm: Color, checked: bool) -> int:
    if not checked:
        return 0
    return -MATE_SCORE if stm == Color.WHITE else MATE_SCORE


def _alphabeta(pos: Position, depth: int, alpha: int, beta: int) -> int:
    if depth == 0:
        return evaluate(pos)

    moves = generate_legal(pos)
    stm = pos.side_to_move
    if not moves:
        return _terminal_score(stm, rules.in_check(pos, stm))

    maximizing = stm == Color.WHITE
    best = INT_MIN if maximizing else INT_MAX
    for move in moves:
        child = pos.copy()
        try:
            child.make_move(move)
        except IllegalMoveError:
            continue
        score = _alphabeta(child, depth - 1, alpha, beta)
        if maximizing:
            best = max(best, score)
            alpha = max(alpha, score)
        else:
            best = min(best, score)
            beta = min(beta, score)
        if beta <= alpha:
            break
    return best


def minimax(pos: Position, depth: int) -> SearchResult:
    """Search ``depth`` plies from ``pos`` and return the best move for the side to move."""
    _check_depth(depth)
    white = pos.side_to_move == Color.WHITE
    result = SearchResult(score=INT_MIN if white else INT_MAX)
    for move in generate_legal(pos):
        child = pos.copy()
        try:
            child.make_move(move)
        except IllegalMoveError:
            continue
        score = _alphabeta(child, depth - 1, INT_MIN, INT_MAX)
        if (white and score > result.score) or (not white and score < result.score):
            result = SearchResult(move, score)
    return result


def _alphabeta_bb(pos: BitboardPosition, depth: int, alpha: int, beta: int) -> int:
    if depth == 0:
        return evaluate_bitboard(pos)

    moves = pos.generate_legal()
    stm = pos.side_to_move
    if not moves:
        return _terminal_score(stm, pos.in_check(stm))

    maximizing = stm == Color.WHITE
    best = INT_MIN if maximizing else INT_MAX
    for move in moves:
        pos.do_move(move)
        try:
            score = _alphabeta_bb(pos, depth - 1, alpha, beta)
        finally:
            pos.undo_move()
        if maximizing:
            best = max(best, score)
            alpha = max(alpha, score)
        else:
            best = min(best, score)
            beta = min(beta, score)
        if beta <= alpha:
            break
    return best


def minimax_bitboard(pos: BitboardPosition, depth: int) -> SearchResult:
    """Search a bitboard position in place with make/unmake; ``pos`` is left unchanged."""
    _check_depth(depth)
    white = pos.side_to_move == Color.WHITE
    result = SearchResult(score=INT_MIN if white else INT_MAX)
    for move in pos.generate_legal():
        pos.do_move(move)
        try:
            score = _alphabeta_bb(pos, depth - 1, INT_MIN, INT_MAX)
        finally:
            pos.undo_move()
        if (white and score > result.score) or (not white and score < result.score):
            result = SearchResult(move, score)
    return result