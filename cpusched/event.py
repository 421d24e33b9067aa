from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from enum import IntEnum

from .process import Process


class EventKind(IntEnum):
    # Value order is the tie-break order at equal timestamps.
    ARRIVAL = 0
    UNBLOCK = 1


@dataclass(frozen=True, order=True, slots=True)
class Event:
    """A future arrival or unblock, ordered by (timestamp, kind, pid)."""

    timestamp: int
    kind: EventKind
    pid: int
    process: Process = field(compare=False)

    def __post_init__(self) -> None:
        if self.pid != self.process.pid:
            msg = f"event pid {self.pid} does not match process pid {self.process.pid}"
            raise ValueError(msg)

    @classmethod
    def arrival(cls, process: Process) -> Event:
        return cls(process.arrival_time, EventKind.ARRIVAL, process.pid, process)

    @classmethod
    def unblock(cls, process: Process, at: int) -> Event:
        return cls(at, EventKind.UNBLOCK, process.pid, process)

    def __repr__(self) -> str:
        return f"Event({self.kind.name}, t={self.timestamp}, pid={self.pid})"


class EventQueue:
    """Heap of pending events; extraction order is the event order only."""

    def __init__(self) -> None:
        self._heap: list[Event] = []
        self._arrived: set[int] = set()

    def push(self, event: Event) -> None:
        if event.kind is EventKind.ARRIVAL:
            if event.pid in self._arrived:
                msg = f"process {event.pid} already has an arrival registered"
                raise ValueError(msg)
            self._arrived.add(event.pid)
        heapq.heappush(self._heap, event)

    def pop(self) -> Event:
        if not self._heap:
            msg = "pop from an empty event queue"
            raise IndexError(msg)
        return heapq.heappop(self._heap)

    def peek(self) -> Event | None:
        return self._heap[0] if self._heap else None

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
