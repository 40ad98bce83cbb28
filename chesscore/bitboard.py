"""Bitboard primitives and precomputed attack tables for an 8x8 board.

Squares are integers 0..63 (a1 = 0, h8 = 63) and bitboards are unsigned
64-bit integers in which bit ``s`` stands for square ``s``.  Sliding piece
attacks are looked up through per-square :class:`Magic` entries that map
the relevant occupancy bits to a dense table index.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum

SQUARE_NB = 64
FILE_NB = 8
RANK_NB = 8

_MASK64 = (1 << 64) - 1

FILE_A_BB = 0x0101010101010101
FILE_H_BB = FILE_A_BB << 7
RANK_1_BB = 0xFF
RANK_8_BB = RANK_1_BB << (8 * 7)


class Color(IntEnum):
    WHITE = 0
    BLACK = 1


class PieceType(IntEnum):
    NO_PIECE_TYPE = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class Direction(IntEnum):
    NORTH = 8
    EAST = 1
    SOUTH = -8
    WEST = -1
    NORTH_EAST = 9
    SOUTH_EAST = -7
    SOUTH_WEST = -9
    NORTH_WEST = 7


_ROOK_DIRECTIONS = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)
_BISHOP_DIRECTIONS = (
    Direction.NORTH_EAST,
    Direction.SOUTH_EAST,
    Direction.SOUTH_WEST,
    Direction.NORTH_WEST,
)
_KING_STEPS = (-9, -8, -7, -1, 1, 7, 8, 9)
_KNIGHT_STEPS = (-17, -15, -10, -6, 6, 10, 15, 17)


def _check_square(s: int) -> int:
    if not 0 <= s < SQUARE_NB:
        raise ValueError(f"square out of range: {s}")
    return s


# ---------------------------------------------------------------------------
# Basic square and bitboard helpers


def square_bb(s: int) -> int:
    """Return the bitboard holding only square ``s``."""
    return 1 << _check_square(s)


def make_square(f: int, r: int) -> int:
    """Return the square on file ``f`` and rank ``r`` (both 0..7)."""
    if not (0 <= f < FILE_NB and 0 <= r < RANK_NB):
        raise ValueError(f"file or rank out of range: {f}, {r}")
    return (r << 3) + f


def file_of(s: int) -> int:
    """Return the file (0..7) of a square."""
    return _check_square(s) & 7


def rank_of(s: int) -> int:
    """Return the rank (0..7) of a square."""
    return _check_square(s) >> 3


def more_than_one(b: int) -> bool:
    """Return True if the bitboard has more than one bit set."""
    return bool(b & (b - 1))


def rank_bb(r: int) -> int:
    """Return the bitboard of every square on rank ``r``."""
    return RANK_1_BB << (8 * r)


def file_bb(f: int) -> int:
    """Return the bitboard of every square on file ``f``."""
    return FILE_A_BB << f


def shift(b: int, direction: int) -> int:
    """Move every bit of ``b`` one step (or two pawn pushes) in ``direction``.

    Bits that would wrap around a board edge are dropped.  Unsupported
    directions yield an empty bitboard.
    """
    b &= _MASK64
    d = int(direction)
    if d == Direction.NORTH:
        result = b << 8
    elif d == Direction.SOUTH:
        result = b >> 8
    elif d == 2 * Direction.NORTH:
        result = b << 16
    elif d == 2 * Direction.SOUTH:
        result = b >> 16
    elif d == Direction.EAST:
        result = (b & ~FILE_H_BB) << 1
    elif d == Direction.WEST:
        result = (b & ~FILE_A_BB) >> 1
    elif d == Direction.NORTH_EAST:
        result = (b & ~FILE_H_BB) << 9
    elif d == Direction.NORTH_WEST:
        result = (b & ~FILE_A_BB) << 7
    elif d == Direction.SOUTH_EAST:
        result = (b & ~FILE_H_BB) >> 7
    elif d == Direction.SOUTH_WEST:
        result = (b & ~FILE_A_BB) >> 9
    else:
        result = 0
    return result & _MASK64


def pawn_attacks_bb(color: Color, b: int) -> int:
    """Return the squares attacked by pawns of ``color`` standing on ``b``."""
    if color == Color.WHITE:
        return shift(b, Direction.NORTH_WEST) | shift(b, Direction.NORTH_EAST)
    return shift(b, Direction.SOUTH_WEST) | shift(b, Direction.SOUTH_EAST)


def file_distance(x: int, y: int) -> int:
    """Return the number of files between two squares."""
    return abs(file_of(x) - file_of(y))


def rank_distance(x: int, y: int) -> int:
    """Return the number of ranks between two squares."""
    return abs(rank_of(x) - rank_of(y))


def distance(x: int, y: int) -> int:
    """Return the number of king steps from ``x`` to ``y``."""
    return max(file_distance(x, y), rank_distance(x, y))


def edge_distance(f: int) -> int:
    """Return how far file ``f`` is from the nearest board edge."""
    return min(f, FILE_NB - 1 - f)


def popcount(b: int) -> int:
    """Return the number of set bits in a bitboard."""
    return bin(b & _MASK64).count("1")


def lsb(b: int) -> int:
    """Return the least significant square of a non-empty bitboard."""
    b &= _MASK64
    if not b:
        raise ValueError("lsb of an empty bitboard")
    return (b & -b).bit_length() - 1


def msb(b: int) -> int:
    """Return the most significant square of a non-empty bitboard."""
    b &= _MASK64
    if not b:
        raise ValueError("msb of an empty bitboard")
    return b.bit_length() - 1


def least_significant_square_bb(b: int) -> int:
    """Return the bitboard of the least significant square of ``b``."""
    b &= _MASK64
    if not b:
        raise ValueError("least significant square of an empty bitboard")
    return b & -b


def squares(b: int) -> Iterator[int]:
    """Yield the squares set in ``b`` from least to most significant."""
    b &= _MASK64
    while b:
        low = b & -b
        yield low.bit_length() - 1
        b ^= low


def pretty(b: int) -> str:
    """Return an ASCII drawing of a bitboard, rank 8 at the top."""
    border = "+---+---+---+---+---+---+---+---+\n"
    lines = [border]
    for r in range(RANK_NB - 1, -1, -1):
        for f in range(FILE_NB):
            lines.append("| X " if b & square_bb(make_square(f, r)) else "|   ")
        lines.append(f"| {1 + r}\n{border}")
    lines.append("  a   b   c   d   e   f   g   h\n")
    return "".join(lines)


# ---------------------------------------------------------------------------
# Magic lookup


@dataclass
class Magic:
    """Attack lookup data for one slider on one square.

    The index is formed by gathering the occupancy bits that lie under
    ``mask`` into a dense number, low square first.
    """

    mask: int
    attacks: list[int] = field(default_factory=list)
    _bits: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._bits = tuple(squares(self.mask))

    def index(self, occupied: int) -> int:
        """Return the table index for the given occupancy."""
        idx = 0
        for i, sq in enumerate(self._bits):
            if (occupied >> sq) & 1:
                idx |= 1 << i
        return idx

    def attacks_bb(self, occupied: int) -> int:
        """Return the attacked squares for the given occupancy."""
        return self.attacks[self.index(occupied)]


# ---------------------------------------------------------------------------
# Table construction


def _safe_destination(s: int, step: int) -> int:
    to = s + step
    if 0 <= to < SQUARE_NB and distance(s, to) <= 2:
        return 1 << to
    return 0


def _build_rays() -> dict[int, list[tuple[int, ...]]]:
    rays: dict[int, list[tuple[int, ...]]] = {}
    for d in (*_ROOK_DIRECTIONS, *_BISHOP_DIRECTIONS):
        per_square = []
        for sq in range(SQUARE_NB):
            ray = []
            s = sq
            while _safe_destination(s, d):
                s += d
                ray.append(s)
            per_square.append(tuple(ray))
        rays[d] = per_square
    return rays


def _sliding_attack(
    rays: dict[int, list[tuple[int, ...]]], pt: PieceType, sq: int, occupied: int
) -> int:
    directions = _ROOK_DIRECTIONS if pt == PieceType.ROOK else _BISHOP_DIRECTIONS
    attacks = 0
    for d in directions:
        for s in rays[d][sq]:
            attacks |= 1 << s
            if (occupied >> s) & 1:
                break
    return attacks


def _init_magics(rays: dict[int, list[tuple[int, ...]]], pt: PieceType) -> list[Magic]:
    magics = []
    for s in range(SQUARE_NB):
        # Board edges are not part of the relevant occupancy.
        edges = ((RANK_1_BB | RANK_8_BB) & ~rank_bb(rank_of(s))) | (
            (FILE_A_BB | FILE_H_BB) & ~file_bb(file_of(s))
        )
        mask = _sliding_attack(rays, pt, s, 0) & ~edges & _MASK64
        magic = Magic(mask)
        magic.attacks = [0] * (1 << popcount(mask))
        # Carry-rippler enumeration of every subset of the mask.
        b = 0
        while True:
            magic.attacks[magic.index(b)] = _sliding_attack(rays, pt, s, b)
            b = (b - mask) & mask
            if not b:
                break
        magics.append(magic)
    return magics


@dataclass
class _Tables:
    pseudo: dict[PieceType, list[int]]
    pawn: dict[Color, list[int]]
    magics: dict[PieceType, list[Magic]]
    line: list[list[int]]
    between: list[list[int]]


_tables: _Tables | None = None


def _slider_attacks(tables: _Tables, pt: PieceType, s: int, occupied: int) -> int:
    return tables.magics[pt][s].attacks_bb(occupied)


def _build_tables() -> _Tables:
    rays = _build_rays()
    magics = {
        PieceType.ROOK: _init_magics(rays, PieceType.ROOK),
        PieceType.BISHOP: _init_magics(rays, PieceType.BISHOP),
    }
    pseudo = {pt: [0] * SQUARE_NB for pt in PieceType if pt not in (PieceType.NO_PIECE_TYPE, PieceType.PAWN)}
    pawn = {c: [0] * SQUARE_NB for c in Color}
    line = [[0] * SQUARE_NB for _ in range(SQUARE_NB)]
    between = [[0] * SQUARE_NB for _ in range(SQUARE_NB)]
    tables = _Tables(pseudo, pawn, magics, line, between)

    for s1 in range(SQUARE_NB):
        bb1 = 1 << s1
        pawn[Color.WHITE][s1] = pawn_attacks_bb(Color.WHITE, bb1)
        pawn[Color.BLACK][s1] = pawn_attacks_bb(Color.BLACK, bb1)

        for step in _KING_STEPS:
            pseudo[PieceType.KING][s1] |= _safe_destination(s1, step)
        for step in _KNIGHT_STEPS:
            pseudo[PieceType.KNIGHT][s1] |= _safe_destination(s1, step)

        bishop = _slider_attacks(tables, PieceType.BISHOP, s1, 0)
        rook = _slider_attacks(tables, PieceType.ROOK, s1, 0)
        pseudo[PieceType.BISHOP][s1] = bishop
        pseudo[PieceType.ROOK][s1] = rook
        pseudo[PieceType.QUEEN][s1] = bishop | rook

        for pt in (PieceType.BISHOP, PieceType.ROOK):
            for s2 in range(SQUARE_NB):
                bb2 = 1 << s2
                if pseudo[pt][s1] & bb2:
                    line[s1][s2] = (
                        _slider_attacks(tables, pt, s1, 0) & _slider_attacks(tables, pt, s2, 0)
                    ) | bb1 | bb2
                    between[s1][s2] = _slider_attacks(tables, pt, s1, bb2) & _slider_attacks(
                        tables, pt, s2, bb1
                    )
                between[s1][s2] |= bb2
    return tables


def init() -> None:
    """Build the attack, line and between tables (done once)."""
    global _tables
    if _tables is None:
        _tables = _build_tables()


def _get_tables() -> _Tables:
    if _tables is None:
        init()
    assert _tables is not None
    return _tables


# ---------------------------------------------------------------------------
# Table lookups


def line_bb(s1: int, s2: int) -> int:
    """Return the full edge-to-edge line through two squares, or 0.

    For instance the line through c4 and f7 is the a2-g8 diagonal.
    """
    return _get_tables().line[_check_square(s1)][_check_square(s2)]


def between_bb(s1: int, s2: int) -> int:
    """Return the squares from ``s1`` (exclusive) to ``s2`` (inclusive).

    If the squares share no line, only ``s2`` is returned.
    """
    return _get_tables().between[_check_square(s1)][_check_square(s2)]


def pseudo_attacks(pt: PieceType, s: int) -> int:
    """Return the attacks of a non-pawn piece on an empty board."""
    pt = PieceType(pt)
    if pt in (PieceType.PAWN, PieceType.NO_PIECE_TYPE):
        raise ValueError(f"no pseudo attacks for {pt.name}; use pawn_attacks for pawns")
    return _get_tables().pseudo[pt][_check_square(s)]


def pawn_attacks(color: Color, s: int) -> int:
    """Return the squares a pawn of ``color`` on ``s`` attacks."""
    return _get_tables().pawn[Color(color)][_check_square(s)]


def attacks_bb(pt: PieceType, s: int, occupied: int = 0) -> int:
    """Return the attacks of a non-pawn piece given the board occupancy.

    Sliding attacks stop at, and include, the first occupied square.
    """
    pt = PieceType(pt)
    _check_square(s)
    tables = _get_tables()
    if pt in (PieceType.BISHOP, PieceType.ROOK):
        return _slider_attacks(tables, pt, s, occupied)
    if pt == PieceType.QUEEN:
        return _slider_attacks(tables, PieceType.BISHOP, s, occupied) | _slider_attacks(
            tables, PieceType.ROOK, s, occupied
        )
    if pt in (PieceType.KNIGHT, PieceType.KING):
        return tables.pseudo[pt][s]
    raise ValueError(f"attacks_bb does not handle {pt.name}")