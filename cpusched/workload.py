from __future__ import annotations

from collections.abc import Iterable, Sequence
from random import Random

from .process import Process


def from_activity_lists(rows: Iterable[tuple[int, Sequence[int]]]) -> list[Process]:
    """Build processes from ``(arrival, activities)`` pairs, numbering pids in order."""

    return [Process(pid=pid, arrival_time=arrival, activities=tuple(activities)) for pid, (arrival, activities) in enumerate(rows)]


def random_workload(
    count: int,
    *,
    seed: int | None = None,
    arrival_rate: float = 0.1,
    cpu_burst: tuple[int, int] = (1, 20),
    io_burst: tuple[int, int] = (5, 40),
    max_cpu_bursts: int = 4,
) -> list[Process]:
    """Seeded workload with Poisson arrivals and alternating CPU/IO bursts."""

    if count < 0:
        msg = "count cannot be negative"
        raise ValueError(msg)
    if arrival_rate <= 0:
        msg = "arrival_rate must be strictly positive"
        raise ValueError(msg)
    if max_cpu_bursts < 1:
        msg = "max_cpu_bursts must be at least 1"
        raise ValueError(msg)
    _check_range(cpu_burst, "cpu_burst")
    _check_range(io_burst, "io_burst")

    rng = Random(seed)
    processes: list[Process] = []
    current_time = 0.0
    for pid in range(count):
        current_time += rng.expovariate(arrival_rate)
        bursts = rng.randint(1, max_cpu_bursts)
        activities: list[int] = []
        for i in range(bursts):
            if i:
                activities.append(rng.randint(*io_burst))
            activities.append(rng.randint(*cpu_burst))
        processes.append(Process(pid=pid, arrival_time=int(current_time), activities=tuple(activities)))
    return processes


def _check_range(bounds: tuple[int, int], name: str) -> None:
    low, high = bounds
    if low < 0 or high < low:
        msg = f"{name} must satisfy 0 <= min <= max"
        raise ValueError(msg)
