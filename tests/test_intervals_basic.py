import pytest

from almanac.intervals import Interval, Mapping


def test_interval_length_and_contains():
    r = Interval.from_length(79, 14)
    assert r == Interval(79, 92)
    assert len(r) == 14
    assert r.contains(79) and r.contains(92)
    assert not r.contains(93)


def test_interval_rejects_bad_bounds():
    with pytest.raises(ValueError):
        Interval(5, 4)
    with pytest.raises(ValueError):
        Interval(-1, 3)
    with pytest.raises(ValueError):
        Interval.from_length(3, 0)


def test_interval_intersection():
    a = Interval(10, 20)
    assert a.intersection(Interval(15, 30)) == Interval(15, 20)
    assert a.intersection(Interval(21, 30)) is None
    assert a.shift(5) == Interval(15, 25)


def test_mapping_from_triple():
    m = Mapping.from_triple(50, 98, 2)
    assert m.source == Interval(98, 99)
    assert m.destination == Interval(50, 51)
    assert m.delta == -48
    assert m.apply(99) == 51


def test_mapping_length_mismatch():
    with pytest.raises(ValueError):
        Mapping(source=Interval(0, 3), destination=Interval(10, 11))
