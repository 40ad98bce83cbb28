import pytest

from chesscore.benchmark import BenchmarkSetup, setup_bench, setup_benchmark
from chesscore.benchmark_positions import BENCHMARK_POSITIONS, DEFAULTS

START = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def _movetimes(setup: BenchmarkSetup) -> list[int]:
    prefix = "go movetime "
    return [int(c[len(prefix):]) for c in setup.commands if c.startswith(prefix)]


def test_setup_bench_defaults_header():
    commands = setup_bench(START, [])
    assert commands[:3] == [
        "setoption name Threads value 1",
        "setoption name Hash value 16",
        "ucinewgame",
    ]
    assert commands[3] == DEFAULTS[0]
    assert commands[4] == "position fen " + DEFAULTS[1]
    assert commands[5] == "go depth 13"


def test_setup_bench_defaults_every_position_followed_by_go():
    commands = setup_bench(START, "")
    body = commands[3:]
    positions = [c for c in body if c.startswith("position fen ")]
    gos = [c for c in body if c == "go depth 13"]
    setoptions = [c for c in body if "setoption" in c]
    assert len(positions) == len(gos)
    assert len(positions) + len(setoptions) == len(DEFAULTS)
    for i, command in enumerate(body):
        if command.startswith("position fen "):
            assert body[i + 1] == "go depth 13"


def test_setup_bench_current_position():
    commands = setup_bench(START, "64 4 5000 current movetime")
    assert commands == [
        "setoption name Threads value 4",
        "setoption name Hash value 64",
        "ucinewgame",
        "position fen " + START,
        "go movetime 5000",
    ]


def test_setup_bench_eval_limit_type():
    commands = setup_bench(START, ["16", "1", "5", "current", "eval"])
    assert commands[-1] == "eval"
    assert commands[-2] == "position fen " + START


def test_setup_bench_reads_file_skipping_blank_lines(tmp_path):
    path = tmp_path / "fens.txt"
    path.write_text(START + "\n\n" + "setoption name UCI_Chess960 value true\n")
    commands = setup_bench(START, f"16 1 5 {path} perft")
    assert commands[3:] == [
        "position fen " + START,
        "go perft 5",
        "setoption name UCI_Chess960 value true",
    ]


def test_setup_bench_missing_file_raises(tmp_path):
    missing = tmp_path / "missing.txt"
    with pytest.raises(OSError):
        setup_bench(START, f"16 1 5 {missing}")


def test_setup_benchmark_explicit_arguments():
    setup = setup_benchmark("4 64 30")
    assert setup.threads == 4
    assert setup.tt_size == 64
    assert setup.original_invocation == "4 64 30"
    assert setup.filled_invocation == "4 64 30"


def test_setup_benchmark_defaults():
    setup = setup_benchmark([])
    assert setup.threads >= 1
    assert setup.tt_size == 128 * setup.threads
    assert setup.original_invocation == ""
    assert setup.filled_invocation == f"{setup.threads} {128 * setup.threads} 150"


def test_setup_benchmark_stops_at_non_integer():
    setup = setup_benchmark("2 abc 10")
    assert setup.threads == 2
    assert setup.tt_size == 256
    assert setup.original_invocation == "2"
    assert setup.filled_invocation == "2 256 150"


def test_setup_benchmark_command_structure():
    setup = setup_benchmark("1 16 150")
    n_games = len(BENCHMARK_POSITIONS)
    n_positions = sum(len(g) for g in BENCHMARK_POSITIONS)
    assert setup.commands[:n_games] == ["ucinewgame"] * n_games
    assert setup.commands.count("ucinewgame") == 2 * n_games
    assert len(setup.commands) == 2 * n_games + 2 * n_positions
    assert setup.commands[n_games] == "ucinewgame"
    assert setup.commands[n_games + 1] == "position fen " + BENCHMARK_POSITIONS[0][0]


def test_setup_benchmark_times_sum_to_desired_duration():
    setup = setup_benchmark("1 16 150")
    times = _movetimes(setup)
    n_positions = sum(len(g) for g in BENCHMARK_POSITIONS)
    assert len(times) == n_positions
    assert all(t > 0 for t in times)
    total = sum(times)
    assert 150_000 - n_positions <= total <= 150_000 + 1


def test_setup_benchmark_times_decrease_within_game():
    setup = setup_benchmark("1 16 60")
    times = _movetimes(setup)
    start = 0
    for game in BENCHMARK_POSITIONS:
        game_times = times[start:start + len(game)]
        assert game_times == sorted(game_times, reverse=True)
        start += len(game)


def test_setup_benchmark_scales_with_duration():
    short_times = _movetimes(setup_benchmark("1 16 10"))
    long_times = _movetimes(setup_benchmark("1 16 100"))
    assert all(s <= t for s, t in zip(short_times, long_times))
    assert sum(long_times) > 9 * sum(short_times)