"""General helpers: version strings, a fast PRNG, string and path utilities."""

from __future__ import annotations

import datetime
import os
import time
from collections.abc import Callable, MutableSequence
from typing import TypeVar

T = TypeVar("T")

ENGINE_NAME = "Chesscore"
VERSION = "dev"

_MASK64 = (1 << 64) - 1
_SIZE_T_MAX = _MASK64
# Characters that the C locale's isspace() accepts.
_WHITESPACE = frozenset(" \t\n\v\f\r")


def engine_version_info() -> str:
    """Return the full engine version name.

    Development builds carry the build date and a source marker:
    ``<name> dev-YYYYMMDD-nogit``; releases only carry the version number.
    """
    info = f"{ENGINE_NAME} {VERSION}"
    if VERSION == "dev":
        info += "-" + datetime.date.today().strftime("%Y%m%d") + "-nogit"
    return info


def engine_info(to_uci: bool = False) -> str:
    """Return the version line followed by the author credit."""
    joiner = "\nid author " if to_uci else " by "
    return f"{engine_version_info()}{joiner}the {ENGINE_NAME} developers"


class PRNG:
    """xorshift64* pseudo-random number generator with 64-bit output."""

    _MULTIPLIER = 2685821657736338717

    def __init__(self, seed: int) -> None:
        seed &= _MASK64
        if not seed:
            raise ValueError("PRNG seed must be non-zero")
        self._state = seed

    def _rand64(self) -> int:
        s = self._state
        s ^= s >> 12
        s ^= (s << 25) & _MASK64
        s ^= s >> 27
        self._state = s
        return (s * self._MULTIPLIER) & _MASK64

    def rand(self) -> int:
        """Return the next 64-bit random number."""
        return self._rand64()

    def sparse_rand(self) -> int:
        """Return a random number with about one bit in eight set."""
        return self._rand64() & self._rand64() & self._rand64()


def mul_hi64(a: int, b: int) -> int:
    """Return the high 64 bits of the 128-bit product of two 64-bit values."""
    return ((a & _MASK64) * (b & _MASK64)) >> 64


def split(s: str, delimiter: str) -> list[str]:
    """Split ``s`` on every occurrence of ``delimiter``.

    An empty string yields an empty list rather than a single empty field.
    """
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    if not s:
        return []
    return s.split(delimiter)


def remove_whitespace(s: str) -> str:
    """Return ``s`` with every whitespace character removed."""
    return "".join(c for c in s if c not in _WHITESPACE)


def is_whitespace(s: str) -> bool:
    """Return True if ``s`` consists only of whitespace (or is empty)."""
    return all(c in _WHITESPACE for c in s)


def str_to_size_t(s: str) -> int:
    """Parse a leading unsigned decimal number the way ``strtoull`` does.

    Leading whitespace and an optional sign are accepted, trailing text is
    ignored, and a negative number wraps around modulo 2**64.
    """
    text = s.lstrip("".join(_WHITESPACE))
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits_end = 0
    while digits_end < len(text) and text[digits_end] in "0123456789":
        digits_end += 1
    if digits_end == 0:
        raise ValueError(f"no number in {s!r}")
    value = int(text[:digits_end])
    if value > _SIZE_T_MAX:
        raise OverflowError(f"number out of range: {s!r}")
    return (sign * value) & _SIZE_T_MAX


def read_file_to_string(path: str | os.PathLike[str]) -> bytes | None:
    """Return the raw contents of a file, or None if it cannot be opened."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError:
        return None


def get_working_directory() -> str:
    """Return the current working directory, or an empty string on failure."""
    try:
        return os.getcwd()
    except OSError:
        return ""


def get_binary_directory(argv0: str) -> str:
    """Return the directory, with a trailing separator, of the program path.

    A path with no directory part resolves to the working directory, and a
    leading ``./`` is replaced by the working directory.
    """
    separator = os.sep
    pos = max(argv0.rfind("\\"), argv0.rfind("/"))
    directory = "." + separator if pos < 0 else argv0[: pos + 1]
    if directory.startswith("." + separator):
        directory = get_working_directory() + directory[1:]
    return directory


def move_to_front(items: MutableSequence[T], pred: Callable[[T], bool]) -> None:
    """Move the first element satisfying ``pred`` to the front, in place."""
    for index, item in enumerate(items):
        if pred(item):
            del items[index]
            items.insert(0, item)
            return


def now() -> int:
    """Return a monotonic timestamp in milliseconds."""
    return time.monotonic_ns() // 1_000_000