import pytest

from cpusched import Event, EventKind, EventQueue, Process


def _proc(pid, arrival=0):
    return Process(pid=pid, arrival_time=arrival, activities=(1, 1, 1))


def test_event_order_is_timestamp_kind_pid():
    p0, p1 = _proc(0), _proc(1)
    events = [
        Event.unblock(p0, 3),
        Event.unblock(p1, 2),
        Event(2, EventKind.ARRIVAL, 1, p1),
        Event(2, EventKind.ARRIVAL, 0, p0),
        Event.unblock(p0, 2),
    ]
    ordered = sorted(events)
    assert [(e.timestamp, e.kind, e.pid) for e in ordered] == [
        (2, EventKind.ARRIVAL, 0),
        (2, EventKind.ARRIVAL, 1),
        (2, EventKind.UNBLOCK, 0),
        (2, EventKind.UNBLOCK, 1),
        (3, EventKind.UNBLOCK, 0),
    ]


def test_arrival_event_uses_process_arrival_time():
    event = Event.arrival(_proc(4, arrival=9))
    assert event.timestamp == 9
    assert event.kind is EventKind.ARRIVAL
    assert event.pid == 4


def test_event_pid_must_match_process():
    with pytest.raises(ValueError):
        Event(2, EventKind.UNBLOCK, 1, _proc(0))


def test_event_is_immutable():
    event = Event.unblock(_proc(0), 1)
    with pytest.raises(AttributeError):
        event.timestamp = 5


def test_queue_extracts_in_event_order_regardless_of_insertion():
    procs = [_proc(pid, arrival=5) for pid in range(4)]
    queue = EventQueue()
    queue.push(Event.unblock(procs[0], 5))
    for p in reversed(procs):
        queue.push(Event.arrival(p))
    queue.push(Event.unblock(procs[1], 4))

    assert len(queue) == 6
    assert queue.peek() == Event.unblock(procs[1], 4)
    popped = [queue.pop() for _ in range(len(queue))]
    assert [(e.timestamp, e.kind.name, e.pid) for e in popped] == [
        (4, "UNBLOCK", 1),
        (5, "ARRIVAL", 0),
        (5, "ARRIVAL", 1),
        (5, "ARRIVAL", 2),
        (5, "ARRIVAL", 3),
        (5, "UNBLOCK", 0),
    ]
    assert not queue
    assert queue.peek() is None


def test_queue_rejects_second_arrival_for_process():
    p0 = _proc(0)
    queue = EventQueue()
    queue.push(Event.arrival(p0))
    queue.pop()
    with pytest.raises(ValueError):
        queue.push(Event.arrival(p0))


def test_queue_accepts_multiple_unblocks_at_same_timestamp():
    queue = EventQueue()
    queue.push(Event.unblock(_proc(0), 3))
    queue.push(Event.unblock(_proc(1), 3))
    assert len(queue) == 2


def test_pop_from_empty_queue_raises():
    with pytest.raises(IndexError):
        EventQueue().pop()
