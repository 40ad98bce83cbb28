"""Chess engine building blocks: bitboards and magic attacks, utilities, debug statistics and benchmark command lists."""

__version__ = "0.1.0"

__all__ = ["benchmark", "benchmark_positions", "bitboard", "debugstats", "misc"]