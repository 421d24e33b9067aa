from __future__ import annotations

from collections import deque
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from .process import Process
from .scheduler import Scheduler

if TYPE_CHECKING:
    from .simulator import Simulation


class _Lifecycle:
    """Tracks where each process is in its CPU/IO activity sequence."""

    def __init__(self) -> None:
        self._index: dict[int, int] = {}
        self._remaining: dict[int, int] = {}

    def admit(self, process: Process, now: int) -> None:
        self._index[process.pid] = 0
        self._remaining[process.pid] = process.activities[0]
        process.stats.mark_ready(now)

    def remaining(self, process: Process) -> int:
        return self._remaining[process.pid]

    def start(self, process: Process, sim: Simulation) -> None:
        process.stats.mark_dispatched(sim.clock)
        sim.running_time = self._remaining[process.pid]

    def preempt(self, process: Process, sim: Simulation, left: int) -> None:
        process.stats.record_run(self._remaining[process.pid] - left)
        process.stats.preemptions += 1
        process.stats.mark_ready(sim.clock)
        self._remaining[process.pid] = left

    def complete(self, process: Process, sim: Simulation) -> bool:
        """Finish the current CPU burst; return True when the process is done."""

        process.stats.record_run(self._remaining[process.pid])
        index = self._index[process.pid] + 1
        if index >= len(process.activities):
            process.stats.finish_time = sim.clock
            return True
        io_burst = process.activities[index]
        process.stats.blocked_time += io_burst
        sim.add_unblock(process, io_burst)
        self._index[process.pid] = index + 1
        self._remaining[process.pid] = process.activities[index + 1]
        return False


class FcfsScheduler(Scheduler):
    """Non-preemptive First-Come, First-Served scheduler."""

    def __init__(self) -> None:
        self._lifecycle = _Lifecycle()
        self._queue: deque[Process] = deque()
        self._running: Process | None = None

    def initialize(self, sim: Simulation) -> None:
        self._queue.clear()
        self._running = None

    def timeout(self, sim: Simulation) -> None:
        pass

    def stop_running(self, sim: Simulation) -> None:
        process, self._running = self._running, None
        if process is not None:
            self._lifecycle.complete(process, sim)

    def arrive(self, process: Process, sim: Simulation) -> None:
        self._lifecycle.admit(process, sim.clock)
        self._queue.append(process)

    def unblock(self, process: Process, sim: Simulation) -> None:
        process.stats.mark_ready(sim.clock)
        self._queue.append(process)

    def idle(self, sim: Simulation) -> None:
        if self._running is None and self._queue:
            self._running = self._queue.popleft()
            self._lifecycle.start(self._running, sim)


class RoundRobinScheduler(Scheduler):
    """Preemptive round robin using the engine timer as the time slice."""

    def __init__(self, quantum: int) -> None:
        if quantum <= 0:
            msg = "quantum must be strictly positive"
            raise ValueError(msg)
        self.quantum = quantum
        self._lifecycle = _Lifecycle()
        self._queue: deque[Process] = deque()
        self._running: Process | None = None

    def initialize(self, sim: Simulation) -> None:
        self._queue.clear()
        self._running = None

    def timeout(self, sim: Simulation) -> None:
        process = self._running
        left = sim.running_time
        # A burst ending on the same tick is reported by stop_running next.
        if process is None or left is None or left == 0:
            return
        self._lifecycle.preempt(process, sim, left)
        sim.running_time = None
        self._running = None
        self._queue.append(process)

    def stop_running(self, sim: Simulation) -> None:
        sim.timer = None
        process, self._running = self._running, None
        if process is not None:
            self._lifecycle.complete(process, sim)

    def arrive(self, process: Process, sim: Simulation) -> None:
        self._lifecycle.admit(process, sim.clock)
        self._queue.append(process)

    def unblock(self, process: Process, sim: Simulation) -> None:
        process.stats.mark_ready(sim.clock)
        self._queue.append(process)

    def idle(self, sim: Simulation) -> None:
        if self._running is None and self._queue:
            self._running = self._queue.popleft()
            self._lifecycle.start(self._running, sim)
            sim.timer = self.quantum


class ShortestProcessNextScheduler(Scheduler):
    """Non-preemptive scheduler that runs the shortest next CPU burst first."""

    def __init__(self) -> None:
        self._lifecycle = _Lifecycle()
        self._ready: list[Process] = []
        self._running: Process | None = None

    def initialize(self, sim: Simulation) -> None:
        self._ready.clear()
        self._running = None

    def timeout(self, sim: Simulation) -> None:
        pass

    def stop_running(self, sim: Simulation) -> None:
        process, self._running = self._running, None
        if process is not None:
            self._lifecycle.complete(process, sim)

    def arrive(self, process: Process, sim: Simulation) -> None:
        self._lifecycle.admit(process, sim.clock)
        self._ready.append(process)

    def unblock(self, process: Process, sim: Simulation) -> None:
        process.stats.mark_ready(sim.clock)
        self._ready.append(process)

    def idle(self, sim: Simulation) -> None:
        if self._running is not None or not self._ready:
            return
        best = min(self._ready, key=lambda p: (self._lifecycle.remaining(p), p.pid))
        self._ready.remove(best)
        self._running = best
        self._lifecycle.start(best, sim)


class ShortestRemainingTimeScheduler(Scheduler):
    """Preemptive variant of SPN: a shorter ready burst preempts the running one."""

    def __init__(self) -> None:
        self._lifecycle = _Lifecycle()
        self._ready: list[Process] = []
        self._running: Process | None = None

    def initialize(self, sim: Simulation) -> None:
        self._ready.clear()
        self._running = None

    def timeout(self, sim: Simulation) -> None:
        pass

    def stop_running(self, sim: Simulation) -> None:
        process, self._running = self._running, None
        if process is not None:
            self._lifecycle.complete(process, sim)

    def arrive(self, process: Process, sim: Simulation) -> None:
        self._lifecycle.admit(process, sim.clock)
        self._make_ready(process, sim)

    def unblock(self, process: Process, sim: Simulation) -> None:
        process.stats.mark_ready(sim.clock)
        self._make_ready(process, sim)

    def idle(self, sim: Simulation) -> None:
        if self._running is not None or not self._ready:
            return
        best = min(self._ready, key=lambda p: (self._lifecycle.remaining(p), p.pid))
        self._ready.remove(best)
        self._running = best
        self._lifecycle.start(best, sim)

    def _make_ready(self, process: Process, sim: Simulation) -> None:
        self._ready.append(process)
        current = self._running
        left = sim.running_time
        if current is None or left is None:
            return
        if self._lifecycle.remaining(process) < left:
            self._lifecycle.preempt(current, sim, left)
            sim.running_time = None
            self._running = None
            self._ready.append(current)


SchedulerFactory = Callable[[Mapping[str, str]], Scheduler]


def _positive_int(options: Mapping[str, str], key: str) -> int:
    try:
        raw = options[key]
    except KeyError:
        msg = f"missing required option '{key}'"
        raise ValueError(msg) from None
    try:
        value = int(raw)
    except ValueError:
        msg = f"option '{key}' must be an integer, got {raw!r}"
        raise ValueError(msg) from None
    if value <= 0:
        msg = f"option '{key}' must be strictly positive"
        raise ValueError(msg)
    return value


_REGISTRY: dict[str, tuple[SchedulerFactory, frozenset[str]]] = {
    "fcfs": (lambda options: FcfsScheduler(), frozenset()),
    "rr": (lambda options: RoundRobinScheduler(_positive_int(options, "quantum")), frozenset({"quantum"})),
    "spn": (lambda options: ShortestProcessNextScheduler(), frozenset()),
    "srt": (lambda options: ShortestRemainingTimeScheduler(), frozenset()),
}
_ALIASES = {"roundrobin": "rr", "round_robin": "rr", "sjf": "spn", "srtf": "srt"}


def available_schedulers() -> list[str]:
    return sorted(_REGISTRY)


def build_scheduler(name: str, options: Mapping[str, str] | None = None) -> Scheduler:
    """Instantiate a policy by name from string options."""

    key = name.strip().lower()
    key = _ALIASES.get(key, key)
    if key not in _REGISTRY:
        msg = f"unknown scheduler '{name}' (expected one of: {', '.join(available_schedulers())})"
        raise ValueError(msg)
    factory, accepted = _REGISTRY[key]
    options = dict(options or {})
    unknown = sorted(set(options) - accepted)
    if unknown:
        msg = f"scheduler '{name}' does not accept option(s): {', '.join(unknown)}"
        raise ValueError(msg)
    return factory(options)
