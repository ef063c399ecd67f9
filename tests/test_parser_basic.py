import pytest

from almanac.intervals import Interval
from almanac.parser import parse_almanac

TEXT = """seeds: 79 14 55 13

seed-to-soil map:
50 98 2
52 50 48

soil-to-fertilizer map:

fertilizer-to-water map:
49 53 8
"""


def test_parse_seeds_and_stages():
    almanac = parse_almanac(TEXT)
    assert almanac.seeds == (79, 14, 55, 13)
    assert [s.name for s in almanac.stages] == ["seed-to-soil", "soil-to-fertilizer", "fertilizer-to-water"]
    assert [len(s) for s in almanac.stages] == [2, 0, 1]
    first = almanac.stages[0].mappings[0]
    assert first.source == Interval(98, 99)
    assert first.destination == Interval(50, 51)
    assert almanac.total_seed_values() == 27


def test_parse_requires_seed_line():
    with pytest.raises(ValueError):
        parse_almanac("seed-to-soil map:\n50 98 2\n")


def test_odd_seed_count_has_no_intervals():
    almanac = parse_almanac("seeds: 1 2 3\n")
    assert almanac.stages == ()
    with pytest.raises(ValueError):
        almanac.seed_intervals()
