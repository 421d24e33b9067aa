import dataclasses

import pytest

from cpusched import Process


def test_activity_views():
    p = Process(pid=0, arrival_time=2, activities=[5, 10, 3, 7, 1])
    assert p.activities == (5, 10, 3, 7, 1)
    assert p.cpu_bursts == (5, 3, 1)
    assert p.io_bursts == (10, 7)
    assert p.service_time == 9
    assert p.io_time == 17


@pytest.mark.parametrize(
    "arrival,activities",
    [
        (-1, (5,)),
        (0, ()),
        (0, (5, 10)),
        (0, (5, -1, 3)),
        (0, (1.5,)),
        (0, (2, 1.0, 3)),
        (0.5, (2,)),
        ("0", (2,)),
    ],
)
def test_invalid_process_rejected(arrival, activities):
    with pytest.raises(ValueError):
        Process(pid=0, arrival_time=arrival, activities=activities)


def test_only_stats_are_mutable():
    p = Process(pid=0, arrival_time=0, activities=(4,))
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.arrival_time = 3
    p.stats.mark_ready(0)
    p.stats.mark_dispatched(2)
    assert p.stats.start_time == 2
    assert p.stats.ready_time == 2
    assert p.stats.dispatches == 1


def test_fresh_copy_has_empty_stats_and_compares_equal():
    p = Process(pid=3, arrival_time=1, activities=(2, 1, 2))
    p.stats.finish_time = 10
    copy = p.fresh()
    assert copy == p
    assert copy.stats.finish_time is None
    assert p.stats.finish_time == 10
