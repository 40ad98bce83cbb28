# chesscore

Building blocks for a chess engine, written in plain Python with no
third-party dependencies.

- **`chesscore.bitboard`** provides 64-bit bitboards with squares numbered
  0 (a1) to 63 (h8).
  - Square helpers: `square_bb`, `make_square`, `file_of`, `rank_of`.
  - Masks and moves: `file_bb`, `rank_bb`, `shift`, `pawn_attacks_bb`.
  - Attack lookups: `pawn_attacks`, `pseudo_attacks`, and `attacks_bb` for
    knights, bishops, rooks, queens and kings. Sliding attacks go through
    per-square `Magic` entries.
  - Lines and distances: `line_bb`, `between_bb`, `distance`,
    `file_distance`, `rank_distance`, `edge_distance`.
  - Bit scans: `popcount`, `lsb`, `msb`, `least_significant_square_bb`,
    `more_than_one`, `squares`.
  - `pretty` draws a bitboard as ASCII.
  - The enums `Color`, `PieceType` and `Direction`.
- **`chesscore.misc`** collects general helpers.
  - Version strings: `engine_version_info` and `engine_info`.
  - Arithmetic: a xorshift64* generator `PRNG` and `mul_hi64`.
  - String helpers: `split`, `remove_whitespace`, `is_whitespace`,
    `str_to_size_t`.
  - File and path helpers: `read_file_to_string`, `get_binary_directory`,
    `get_working_directory`.
  - Other: `move_to_front` and a monotonic millisecond clock, `now`.
- **`chesscore.debugstats`** provides `DebugStats`, which collects hit rates,
  means, standard deviations, extremes and correlations in 32 numbered slots.
- **`chesscore.benchmark`** provides `setup_bench` and `setup_benchmark`, which
  build lists of UCI command strings for search benchmarks. The positions they
  use are in `chesscore.benchmark_positions` (`DEFAULTS` and
  `BENCHMARK_POSITIONS`).

## Bitboards

`init()` builds the attack, line and between tables once. Any lookup that
needs the tables builds them on first use if `init()` has not been called.

```python
from chesscore import bitboard as bb

bb.init()

rook_on_a1 = 0
blockers = bb.square_bb(16) | bb.square_bb(3)   # a3 and d1
attacks = bb.attacks_bb(bb.PieceType.ROOK, rook_on_a1, blockers)

print(bb.popcount(attacks))
print(bb.pretty(attacks))
print(list(bb.squares(attacks)))
```

Sliding attacks stop at the first occupied square and include it.

`between_bb(s1, s2)` is the half-open segment from `s1` to `s2`. It leaves out
`s1` and includes `s2`. When the two squares do not share a line, it is just
`s2`.

`line_bb(s1, s2)` is the whole edge-to-edge line through both squares. It is
0 when the squares do not share a line.

Squares outside 0..63 raise `ValueError`. So do `lsb`, `msb` and
`least_significant_square_bb` when given an empty bitboard, and `attacks_bb`
and `pseudo_attacks` when given a pawn.

## Random numbers

```python
from chesscore.misc import PRNG

rng = PRNG(1070372)
dense = rng.rand()
sparse = rng.sparse_rand()   # about 1/8 of the bits set, on average
```

A seed of 0 raises `ValueError`.

## Other helpers

- `read_file_to_string(path)` returns the file's bytes, or `None` if the file
  cannot be opened.
- `str_to_size_t(s)` parses a leading unsigned number the way `strtoull` does.
  It raises `ValueError` when `s` holds no digits and `OverflowError` when the
  number is above 2**64 - 1.
- `split(s, delimiter)` returns an empty list for an empty string.

## Debug statistics

```python
from chesscore.debugstats import DebugStats

stats = DebugStats()
for value in (3, 5, 8):
    stats.mean_of(value, 0)
    stats.extremes_of(value, 1)
stats.hit_on(True, 2)
print(stats.report())
stats.clear()
```

- `report()` returns one line per slot that has been used, grouped by kind of
  statistic.
- Every slot argument defaults to 0.
- A slot outside 0..31 raises `IndexError`.

## Benchmark command lists

```python
from chesscore.benchmark import setup_bench, setup_benchmark

commands = setup_bench(
    "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
    ["16", "1", "13", "default", "depth"],
)

setup = setup_benchmark(["4", "512", "60"])
print(setup.threads, setup.tt_size, len(setup.commands))
print(setup.original_invocation, "|", setup.filled_invocation)
```

Arguments may be given as a list of strings or as one space-separated string.

**`setup_bench`** takes, in order: hash size in MB, threads, limit, position
source and limit type.

- Defaults: `16 1 13 default depth`.
- The position source is `default`, `current` (the FEN passed in) or the path
  of a file with one FEN per line.
- The limit type `eval` produces `eval` commands instead of `go` commands.
- A file that cannot be opened raises `OSError`.

**`setup_benchmark`** takes, in order: threads, hash size in MB and total
duration in seconds.

- Defaults: the number of processors, 128 MB of hash per thread, and 150
  seconds.
- Parsing stops at the first argument that is not an integer.

## What this package does not do

The package only builds the commands as strings. It has:

- no board or position type,
- no move generator,
- no evaluation and no search,
- no UCI command loop and no command-line program.

Nothing in the package runs the command lists that the benchmark functions
return.