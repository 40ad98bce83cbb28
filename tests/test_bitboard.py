import pytest

from chesscore.bitboard import (
    Color,
    Direction,
    Magic,
    PieceType,
    attacks_bb,
    between_bb,
    distance,
    edge_distance,
    file_bb,
    file_distance,
    file_of,
    init,
    least_significant_square_bb,
    line_bb,
    lsb,
    make_square,
    more_than_one,
    msb,
    pawn_attacks,
    pawn_attacks_bb,
    popcount,
    pretty,
    pseudo_attacks,
    rank_bb,
    rank_distance,
    rank_of,
    shift,
    square_bb,
    squares,
)


def sq(name: str) -> int:
    return make_square(ord(name[0]) - ord("a"), int(name[1]) - 1)


def bb(*names: str) -> int:
    result = 0
    for name in names:
        result |= square_bb(sq(name))
    return result


ALL_SQUARES = range(64)


def test_square_round_trips():
    for s in ALL_SQUARES:
        assert make_square(file_of(s), rank_of(s)) == s
        assert lsb(square_bb(s)) == s
        assert msb(square_bb(s)) == s


def test_invalid_square_raises():
    with pytest.raises(ValueError):
        square_bb(64)
    with pytest.raises(ValueError):
        square_bb(-1)


def test_empty_bitboard_scans_raise():
    with pytest.raises(ValueError):
        lsb(0)
    with pytest.raises(ValueError):
        msb(0)


def test_documented_file_and_rank_constants():
    assert file_bb(0) == 0x0101010101010101
    assert rank_bb(0) == 0xFF
    assert file_bb(7) == 0x0101010101010101 << 7


def test_squares_and_popcount_agree():
    b = bb("a1", "d4", "h8", "c7")
    found = list(squares(b))
    assert found == sorted(found)
    assert len(found) == popcount(b)
    rebuilt = 0
    for s in found:
        rebuilt |= square_bb(s)
    assert rebuilt == b
    assert least_significant_square_bb(b) == square_bb(found[0])


def test_more_than_one():
    assert not more_than_one(0)
    assert not more_than_one(bb("e4"))
    assert more_than_one(bb("e4", "e5"))


def test_shift_drops_edge_bits():
    assert shift(file_bb(7), Direction.EAST) == 0
    assert shift(file_bb(0), Direction.WEST) == 0
    assert shift(file_bb(0), Direction.EAST) == file_bb(1)
    assert shift(rank_bb(0), Direction.NORTH) == rank_bb(1)
    assert shift(rank_bb(7), Direction.NORTH) == 0
    assert shift(rank_bb(1), 2 * Direction.NORTH) == rank_bb(3)


def test_pawn_attacks():
    assert pawn_attacks_bb(Color.WHITE, bb("e4")) == bb("d5", "f5")
    assert pawn_attacks_bb(Color.BLACK, bb("e4")) == bb("d3", "f3")
    for s in ALL_SQUARES:
        for c in Color:
            assert pawn_attacks(c, s) == pawn_attacks_bb(c, square_bb(s))


def test_line_and_between_documented_examples():
    init()
    assert line_bb(sq("c4"), sq("f7")) == bb("a2", "b3", "c4", "d5", "e6", "f7", "g8")
    assert between_bb(sq("c4"), sq("f7")) == bb("d5", "e6", "f7")
    assert between_bb(sq("e6"), sq("f8")) == bb("f8")
    assert line_bb(sq("e6"), sq("f8")) == 0


def test_between_always_contains_target():
    for s1 in ALL_SQUARES:
        for s2 in ALL_SQUARES:
            b = between_bb(s1, s2)
            assert b & square_bb(s2)
            assert not b & square_bb(s1) or s1 == s2
            if line_bb(s1, s2):
                assert b & ~line_bb(s1, s2) == 0


def test_distance_invariants():
    for s1 in ALL_SQUARES:
        for s2 in ALL_SQUARES:
            d = distance(s1, s2)
            assert d == distance(s2, s1)
            assert d == max(file_distance(s1, s2), rank_distance(s1, s2))
    assert distance(sq("a1"), sq("a1")) == 0


def test_edge_distance():
    assert edge_distance(0) == 0
    assert edge_distance(7) == 0
    assert edge_distance(3) == edge_distance(4)


def test_rook_and_queen_on_empty_board():
    for s in ALL_SQUARES:
        rook = attacks_bb(PieceType.ROOK, s)
        assert rook == (rank_bb(rank_of(s)) | file_bb(file_of(s))) ^ square_bb(s)
        bishop = attacks_bb(PieceType.BISHOP, s)
        assert attacks_bb(PieceType.QUEEN, s) == rook | bishop
        assert pseudo_attacks(PieceType.QUEEN, s) == rook | bishop


def test_rook_attacks_stop_at_blocker():
    a1 = sq("a1")
    attacks = attacks_bb(PieceType.ROOK, a1, bb("a3", "c1"))
    assert attacks & file_bb(0) == bb("a2", "a3")
    assert attacks & rank_bb(0) == bb("b1", "c1")


def test_bishop_attacks_ignore_irrelevant_occupancy():
    s = sq("d4")
    assert attacks_bb(PieceType.BISHOP, s, bb("d5", "e4")) == attacks_bb(PieceType.BISHOP, s)


def test_knight_and_king_attacks():
    assert pseudo_attacks(PieceType.KNIGHT, sq("a1")) == bb("b3", "c2")
    e4 = square_bb(sq("e4"))
    king = 0
    for d in Direction:
        king |= shift(e4, d)
    assert pseudo_attacks(PieceType.KING, sq("e4")) == king
    for s1 in ALL_SQUARES:
        for s2 in squares(pseudo_attacks(PieceType.KNIGHT, s1)):
            assert pseudo_attacks(PieceType.KNIGHT, s2) & square_bb(s1)


def test_pawn_not_accepted_by_attacks():
    with pytest.raises(ValueError):
        attacks_bb(PieceType.PAWN, 0, 0)
    with pytest.raises(ValueError):
        pseudo_attacks(PieceType.PAWN, 0)


def test_magic_index_gathers_mask_bits():
    m = Magic(mask=0b1010, attacks=[10, 20, 30, 40])
    assert m.index(0) == 0
    assert m.index(0b0010) == 1
    assert m.index(0b1000) == 2
    assert m.index(0b1111) == 3
    assert m.attacks_bb(0b1010) == 40


def test_pretty_layout():
    text = pretty(bb("a1", "h8"))
    lines = text.splitlines()
    assert lines[0] == "+---+---+---+---+---+---+---+---+"
    assert lines[-1] == "  a   b   c   d   e   f   g   h"
    assert text.count("X") == 2
    assert lines[1].endswith("| X | 8")
    assert lines[15].startswith("| X |")
    assert lines[15].endswith("| 1")