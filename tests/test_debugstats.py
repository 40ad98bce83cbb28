import pytest

from chesscore.debugstats import MAX_DEBUG_SLOTS, DebugStats


@pytest.fixture
def stats():
    return DebugStats()


def test_empty_report(stats):
    assert stats.report() == ""


def test_hit_rate_all_hits(stats):
    for _ in range(3):
        stats.hit_on(True, 2)
    assert stats.report() == "Hit #2: Total 3 Hits 3 Hit Rate (%) 100\n"


def test_hit_counts_only_true(stats):
    stats.hit_on(False)
    stats.hit_on(True)
    stats.hit_on(False)
    line = stats.report().strip()
    assert line.startswith("Hit #0: Total 3 Hits 1 ")


def test_mean_of_constant_values(stats):
    for _ in range(3):
        stats.mean_of(5)
    assert stats.report() == "Mean #0: Total 3 Mean 5\n"


def test_stdev_of_constant_values(stats):
    stats.stdev_of(4, 1)
    stats.stdev_of(4, 1)
    assert stats.report() == "Stdev #1: Total 2 Stdev 0\n"


def test_extremes(stats):
    for v in (3, -7, 10):
        stats.extremes_of(v, 5)
    assert stats.report() == "Extremity #5: Total 3 Min -7 Max 10\n"


def test_perfect_correlation(stats):
    for x in (1, 2, 3):
        stats.correl_of(x, 2 * x, 4)
    assert stats.report() == "Correl. #4: Total 3 Coefficient 1\n"


def test_report_groups_in_order(stats):
    stats.correl_of(1, 2)
    stats.extremes_of(1)
    stats.stdev_of(1)
    stats.mean_of(1)
    stats.hit_on(True)
    prefixes = [line.split(" ")[0] for line in stats.report().splitlines()]
    assert prefixes == ["Hit", "Mean", "Stdev", "Extremity", "Correl."]


def test_slots_are_independent(stats):
    stats.mean_of(8, 0)
    stats.mean_of(2, 31)
    lines = stats.report().splitlines()
    assert lines == ["Mean #0: Total 1 Mean 8", "Mean #31: Total 1 Mean 2"]


def test_clear_forgets_everything(stats):
    stats.hit_on(True)
    stats.mean_of(3)
    stats.extremes_of(3)
    stats.clear()
    assert stats.report() == ""


@pytest.mark.parametrize("slot", [MAX_DEBUG_SLOTS, -1])
def test_slot_out_of_range(stats, slot):
    with pytest.raises(IndexError):
        stats.hit_on(True, slot)
    with pytest.raises(IndexError):
        stats.correl_of(1, 2, slot)