import datetime
import os
import time

import pytest

from chesscore.misc import (
    PRNG,
    engine_info,
    engine_version_info,
    get_binary_directory,
    get_working_directory,
    is_whitespace,
    move_to_front,
    mul_hi64,
    now,
    read_file_to_string,
    remove_whitespace,
    split,
    str_to_size_t,
)


def test_engine_version_info_format():
    name, _, tag = engine_version_info().partition(" ")
    assert name != ""
    assert " " not in name
    parts = tag.split("-")
    assert len(parts) == 3
    assert parts[0] == "dev"
    assert parts[2] == "nogit"
    date = parts[1]
    assert len(date) == 8
    assert date.isdigit()
    parsed = datetime.datetime.strptime(date, "%Y%m%d")
    assert parsed.strftime("%Y%m%d") == date


def test_engine_info_variants():
    version = engine_version_info()
    plain = engine_info()
    uci = engine_info(True)
    assert plain.startswith(version + " by ")
    assert uci.startswith(version + "\nid author ")
    assert plain.split(" by ", 1)[1] == uci.split("\nid author ", 1)[1]


def test_prng_is_deterministic():
    a, b = PRNG(1070372), PRNG(1070372)
    assert [a.rand() for _ in range(20)] == [b.rand() for _ in range(20)]


def test_prng_outputs_are_64_bit_and_vary():
    rng = PRNG(728)
    values = [rng.rand() for _ in range(100)]
    assert all(0 <= v < 2**64 for v in values)
    assert len(set(values)) == 100


def test_prng_different_seeds_differ():
    assert PRNG(8977).rand() != PRNG(44560).rand()


def test_prng_zero_seed_rejected():
    with pytest.raises(ValueError):
        PRNG(0)


def test_sparse_rand_is_and_of_three_draws():
    sparse = PRNG(255)
    plain = PRNG(255)
    for _ in range(10):
        x = sparse.sparse_rand()
        a, b, c = plain.rand(), plain.rand(), plain.rand()
        assert x == a & b & c


def test_sparse_rand_has_few_bits():
    rng = PRNG(54343)
    total = sum(bin(rng.sparse_rand()).count("1") for _ in range(2000))
    dense = PRNG(54343)
    dense_total = sum(bin(dense.rand()).count("1") for _ in range(2000))
    assert total * 3 < dense_total


def test_mul_hi64_values():
    assert mul_hi64(1 << 32, 1 << 32) == 1
    assert mul_hi64(2**64 - 1, 2**64 - 1) == 2**64 - 2
    assert mul_hi64(12345, 67890) == 0


def test_mul_hi64_commutative():
    rng = PRNG(17020)
    for _ in range(50):
        a, b = rng.rand(), rng.rand()
        assert mul_hi64(a, b) == mul_hi64(b, a)
        assert mul_hi64(a, b) < 2**64


def test_split_basic():
    assert split("a,b,,c", ",") == ["a", "b", "", "c"]
    assert split("one::two", "::") == ["one", "two"]
    assert split("nodelim", ",") == ["nodelim"]


def test_split_empty_string():
    assert split("", ",") == []


def test_split_edges_keep_empty_fields():
    assert split(",x,", ",") == ["", "x", ""]


def test_split_empty_delimiter_rejected():
    with pytest.raises(ValueError):
        split("abc", "")


def test_remove_whitespace():
    assert remove_whitespace(" a\tb\nc\r d\v\fe ") == "abcde"
    assert remove_whitespace("") == ""


def test_is_whitespace():
    assert is_whitespace(" \t\n\r\v\f")
    assert is_whitespace("")
    assert not is_whitespace("  x ")


def test_str_to_size_t_parses_leading_number():
    assert str_to_size_t("42") == 42
    assert str_to_size_t("  16") == 16
    assert str_to_size_t("+7") == 7
    assert str_to_size_t("128MB") == 128


def test_str_to_size_t_negative_wraps():
    assert str_to_size_t("-1") == 2**64 - 1


def test_str_to_size_t_errors():
    with pytest.raises(ValueError):
        str_to_size_t("abc")
    with pytest.raises(ValueError):
        str_to_size_t("")
    with pytest.raises(OverflowError):
        str_to_size_t(str(2**64))


def test_read_file_to_string_round_trip(tmp_path):
    data = b"\x00binary\r\ndata\xff"
    path = tmp_path / "blob.bin"
    path.write_bytes(data)
    assert read_file_to_string(str(path)) == data


def test_read_file_to_string_missing(tmp_path):
    assert read_file_to_string(str(tmp_path / "missing.bin")) is None


def test_get_working_directory():
    assert get_working_directory() == os.getcwd()


def test_get_binary_directory_with_path():
    assert get_binary_directory("/usr/local/bin/engine") == "/usr/local/bin/"


def test_get_binary_directory_bare_name():
    assert get_binary_directory("engine") == os.getcwd() + os.sep


def test_get_binary_directory_dot_prefix():
    argv0 = "." + os.sep + "sub" + os.sep + "engine"
    assert get_binary_directory(argv0) == os.getcwd() + os.sep + "sub" + os.sep


def test_move_to_front():
    items = [1, 2, 3, 4, 5]
    move_to_front(items, lambda x: x == 4)
    assert items == [4, 1, 2, 3, 5]


def test_move_to_front_first_match_only():
    items = ["a", "bb", "cc", "d"]
    move_to_front(items, lambda x: len(x) == 2)
    assert items == ["bb", "a", "cc", "d"]


def test_move_to_front_no_match():
    items = [1, 2, 3]
    move_to_front(items, lambda x: x > 10)
    assert items == [1, 2, 3]


def test_now_is_monotonic_milliseconds():
    start = now()
    time.sleep(0.02)
    later = now()
    assert later >= start + 10