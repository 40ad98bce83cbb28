"""Command lists for the built-in benchmarks.

:func:`setup_bench` builds the classic fixed-depth (or nodes, movetime,
perft, eval) bench over a set of positions.  :func:`setup_benchmark` builds
the timed benchmark that replays a few real games with a move-time schedule
fitted to long time-control play.
"""

from __future__ import annotations

import os
import struct
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from chesscore.benchmark_positions import BENCHMARK_POSITIONS, DEFAULTS

# Chosen so that roughly half of the hash is used once all positions of the
# sequence have been searched.
TT_SIZE_PER_THREAD = 128
DEFAULT_DURATION_S = 150


@dataclass
class BenchmarkSetup:
    """Settings and commands for one run of the timed benchmark."""

    tt_size: int
    threads: int
    commands: list[str] = field(default_factory=list)
    original_invocation: str = ""
    filled_invocation: str = ""


def _tokens(args: Iterable[str] | str) -> Iterator[str]:
    if isinstance(args, str):
        return iter(args.split())
    return iter(token for arg in args for token in arg.split())


def _read_fens(path: str) -> list[str]:
    try:
        with open(path, encoding="utf-8", newline="") as f:
            content = f.read()
    except OSError as exc:
        raise OSError(f"Unable to open file {path}") from exc
    return [line for line in content.split("\n") if line]


def setup_bench(current_fen: str, args: Iterable[str] | str = ()) -> list[str]:
    """Return the commands run by the classic bench.

    The arguments, all optional and in this order, are the hash size in MB,
    the number of threads, the limit per position, where the positions come
    from (``default``, ``current`` or a file of FENs) and the limit type
    (``depth``, ``perft``, ``nodes``, ``movetime`` or ``eval``).
    """
    tokens = _tokens(args)
    tt_size = next(tokens, "16")
    threads = next(tokens, "1")
    limit = next(tokens, "13")
    fen_file = next(tokens, "default")
    limit_type = next(tokens, "depth")

    go = "eval" if limit_type == "eval" else f"go {limit_type} {limit}"

    if fen_file == "default":
        fens: list[str] = list(DEFAULTS)
    elif fen_file == "current":
        fens = [current_fen]
    else:
        fens = _read_fens(fen_file)

    commands = [
        f"setoption name Threads value {threads}",
        f"setoption name Hash value {tt_size}",
        "ucinewgame",
    ]
    for fen in fens:
        if "setoption" in fen:
            commands.append(fen)
        else:
            commands.append(f"position fen {fen}")
            commands.append(go)
    return commands


def _f32(x: float) -> float:
    """Round a value to single precision."""
    return struct.unpack("f", struct.pack("f", x))[0]


def _hardware_concurrency() -> int:
    return os.cpu_count() or 1


def _corrected_time(ply: int) -> float:
    # Time per move fitted to long time-control games: ms = 50000 / (ply + 15),
    # which gives the 10th move 2000 ms before scaling.
    return 50000.0 / (float(ply) + 15.0)


def _leading_ints(tokens: Iterator[str], count: int) -> list[int]:
    """Parse up to ``count`` integers, stopping at the first failure."""
    values: list[int] = []
    for token in tokens:
        if len(values) == count:
            break
        try:
            values.append(int(token))
        except ValueError:
            break
    return values


def setup_benchmark(args: Iterable[str] | str = ()) -> BenchmarkSetup:
    """Return the settings and commands of the timed benchmark.

    The optional arguments are the number of threads, the hash size in MB and
    the desired total duration in seconds.  Parsing stops at the first
    argument that is not an integer; the rest take their defaults.
    """
    values = _leading_ints(_tokens(args), 3)
    given: list[str] = [str(v) for v in values]

    threads = values[0] if len(values) > 0 else _hardware_concurrency()
    tt_size = values[1] if len(values) > 1 else TT_SIZE_PER_THREAD * threads
    desired_time_s = values[2] if len(values) > 2 else DEFAULT_DURATION_S

    setup = BenchmarkSetup(
        tt_size=tt_size,
        threads=threads,
        original_invocation=" ".join(given),
        filled_invocation=f"{threads} {tt_size} {desired_time_s}",
    )

    total_time = 0.0
    for game in BENCHMARK_POSITIONS:
        setup.commands.append("ucinewgame")
        for ply, _ in enumerate(game, start=1):
            total_time = _f32(total_time + _f32(_corrected_time(ply)))

    time_scale_factor = _f32(_f32(float(desired_time_s * 1000)) / total_time)

    for game in BENCHMARK_POSITIONS:
        setup.commands.append("ucinewgame")
        for ply, fen in enumerate(game, start=1):
            setup.commands.append(f"position fen {fen}")
            move_time = int(_corrected_time(ply) * time_scale_factor)
            setup.commands.append(f"go movetime {move_time}")

    return setup