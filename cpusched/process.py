from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional


@dataclass(slots=True)
class ProcessStats:
    """Mutable statistics written by the scheduling policy."""

    start_time: Optional[int] = None
    finish_time: Optional[int] = None
    cpu_time: int = 0
    ready_time: int = 0
    blocked_time: int = 0
    dispatches: int = 0
    preemptions: int = 0
    ready_since: Optional[int] = None

    def mark_ready(self, now: int) -> None:
        self.ready_since = now

    def mark_dispatched(self, now: int) -> None:
        if self.start_time is None:
            self.start_time = now
        if self.ready_since is not None:
            self.ready_time += now - self.ready_since
            self.ready_since = None
        self.dispatches += 1

    def record_run(self, delta: int) -> None:
        self.cpu_time += delta

    @property
    def is_finished(self) -> bool:
        return self.finish_time is not None


@dataclass(frozen=True, slots=True)
class Process:
    """Immutable process description.

    ``activities`` alternates CPU and IO bursts, starting and ending with a
    CPU burst. Only ``stats`` changes while a simulation runs.
    """

    pid: int
    arrival_time: int
    activities: tuple[int, ...]
    stats: ProcessStats = field(default_factory=ProcessStats, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.activities, tuple):
            object.__setattr__(self, "activities", tuple(self.activities))
        if not isinstance(self.arrival_time, int) or not all(isinstance(d, int) for d in self.activities):
            msg = "arrival_time and activity durations must be integers"
            raise ValueError(msg)
        if self.arrival_time < 0:
            msg = "arrival_time cannot be negative"
            raise ValueError(msg)
        if len(self.activities) % 2 != 1:
            msg = "activities must alternate CPU/IO and end with a CPU burst"
            raise ValueError(msg)
        if any(duration < 0 for duration in self.activities):
            msg = "activity durations cannot be negative"
            raise ValueError(msg)

    @property
    def cpu_bursts(self) -> tuple[int, ...]:
        return self.activities[0::2]

    @property
    def io_bursts(self) -> tuple[int, ...]:
        return self.activities[1::2]

    @property
    def service_time(self) -> int:
        return sum(self.cpu_bursts)

    @property
    def io_time(self) -> int:
        return sum(self.io_bursts)

    def fresh(self) -> Process:
        """Copy of this process with empty statistics."""

        return replace(self, stats=ProcessStats())
