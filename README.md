# chessforge

chessforge is a compact chess engine. It provides:

- three interchangeable board backends (`ArrayBoard`, `PointerBoard` and `BitboardBoard` in `chessforge.boards`). You choose one with `make_board(BoardType.ARRAY)`, `BoardType.POINTER` or `BoardType.BITBOARD`.
- a `Position` (`chessforge.position`) that checks each move against the rules of chess. This covers castling, en passant, promotion, and the rule that a move may not leave your own king in check.
- pseudo-legal and legal move generation (`chessforge.movegen`)
- a material evaluation (`chessforge.evaluation`) and an alpha-beta minimax search (`chessforge.search`)
- a separate `BitboardPosition` (`chessforge.bb_position`). It makes and unmakes moves on a stack instead of copying the position, and it has a matching search.

## Installation

```
pip install .
```

To also install the test dependencies:

```
pip install ".[test]"
```

## Command line

`chessforge` prints the starting position, searches it and prints the best move and its score. You can name a board backend: `array`, `pointer` or `bitboard`. When none is given, or the name is not one of these, the array board is used. `--depth` sets the search depth in plies; the default is 3.

```
chessforge
chessforge bitboard --depth 2
```

`chessforge-benchmark` runs the same search from the starting position on each board backend and on `BitboardPosition`. For each one it reports the best move, the score and the average time in milliseconds. `--depth` defaults to 5 and `--reps` (repetitions per backend) defaults to 3. Because the search runs in pure Python, the default depth can take a long time.

```
chessforge-benchmark --depth 3 --reps 1
```

## Library use

```python
from chessforge.boards import BoardType, make_board
from chessforge.position import Position
from chessforge.types import Move, make_sq
from chessforge.movegen import generate_legal
from chessforge.render import board_ascii
from chessforge.search import minimax

pos = Position.startpos(make_board(BoardType.ARRAY))
pos.make_move(Move(make_sq(4, 1), make_sq(4, 3)))   # e2-e4
print(board_ascii(pos))
print(len(generate_legal(pos)))                      # 20 replies for Black

result = minimax(pos, 3)
print(result.best, result.score)
```

When a move breaks the rules, `Position.make_move` raises `chessforge.rules.IllegalMoveError`, a subclass of `ValueError`. The message says why the move was rejected, and the position is left unchanged. If you only need a yes or no, `chessforge.rules.is_pseudo_legal` and `castle_path_safe` return a boolean. `in_check`, `is_square_attacked` and `find_king` answer questions about a position.

`Position.copy()` returns an independent copy that has its own board.

Text input goes through `chessforge.parse`:

- `parse_square("e2")` returns a square index. Surrounding whitespace is ignored, and the file letter may be upper case.
- `parse_two_squares("e2 e4")` returns an `(origin, target)` pair.
- Both raise `ValueError` on malformed input.

Here is how to use the bitboard position:

```python
from chessforge.bb_position import BitboardPosition
from chessforge.search import minimax_bitboard

pos = BitboardPosition.startpos()
print(minimax_bitboard(pos, 4))      # pos is left as it was
```

`BitboardPosition.do_move` plays a move without any legality check. `undo_move` takes it back, and raises `IndexError` when there is nothing to undo. `generate_legal` and `has_any_legal_move` filter out moves that would leave the mover's king in check.

## Conventions

- **Squares.** Squares are numbered from 0 (a1) to 63 (h8). `make_sq(file, rank)` takes a zero-based file and rank.
- **No en-passant square.** A position with no en-passant target has `ep_square == -1`.
- **Scores.** Scores are always from White's point of view. A positive score favours White. Checkmate is worth ±100000 and stalemate is worth 0.
- **Search depth.** The search depth must be at least 1; a smaller depth raises `ValueError`.

## What it does not do

- It has no interactive play: nothing reads moves from a user or plays a game against one.
- It does not speak an engine protocol such as UCI.
- It does not read or write FEN, PGN or any other game notation beyond the square names handled by `chessforge.parse`.
- It does not track the move clocks, so it does not recognise draws by the fifty-move rule or by repetition.