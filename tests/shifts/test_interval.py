from __future__ import annotations

import itertools

import pytest

from site_scheduler.core.exceptions import InvalidInterval, ValidationError
from site_scheduler.shifts.interval import TimeInterval, overlaps


@pytest.mark.parametrize("start,end", [(-1, 60), (60, 60), (120, 60), (0, 1441), (1440, 1440)])
def test_rejects_malformed_intervals(start, end):
    with pytest.raises(InvalidInterval):
        TimeInterval(start, end)


def test_accepts_full_day():
    interval = TimeInterval(0, 1440)
    assert interval.duration_minutes == 1440
    assert str(interval) == "00:00-24:00"


def test_rejects_non_integer_minutes():
    with pytest.raises(InvalidInterval):
        TimeInterval("8", 600)


def test_invalid_interval_is_a_validation_error():
    assert issubclass(InvalidInterval, ValidationError)


def test_overlap_is_symmetric():
    samples = [TimeInterval(s, e) for s, e in [(0, 60), (30, 90), (60, 120), (100, 110), (0, 1440), (500, 501)]]
    for a, b in itertools.product(samples, repeat=2):
        assert overlaps(a, b) == overlaps(b, a)


def test_interval_overlaps_itself():
    a = TimeInterval(480, 660)
    assert overlaps(a, a)
    assert a.overlaps(a)


def test_touching_endpoints_do_not_overlap():
    morning = TimeInterval(8 * 60, 11 * 60)
    noon = TimeInterval(11 * 60, 13 * 60)
    assert not overlaps(morning, noon)
    assert not overlaps(noon, morning)


def test_partial_and_nested_overlap():
    outer = TimeInterval(8 * 60, 12 * 60)
    assert overlaps(outer, TimeInterval(10 * 60, 13 * 60))
    assert overlaps(outer, TimeInterval(9 * 60, 10 * 60))
    assert not overlaps(outer, TimeInterval(13 * 60, 14 * 60))
