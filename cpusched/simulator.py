from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field

from .event import Event, EventKind, EventQueue
from .process import Process
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SimulationResult:
    total_time: int
    rounds: int
    callbacks: Counter[str] = field(default_factory=Counter)


class Simulation:
    """Discrete-event engine driving a single-CPU scheduling policy.

    The clock advances to the nearest of three instants: the earliest pending
    event, the expiry of the policy's timer, and the end of the running
    process's burst. Both countdowns are relative to the current clock and
    ``None`` when unset.
    """

    def __init__(self, scheduler: Scheduler) -> None:
        self.scheduler = scheduler
        self._events = EventQueue()
        self._clock = 0
        self._timer: int | None = None
        self._running_time: int | None = None
        self._rounds = 0
        self._callbacks: Counter[str] = Counter()
        self._started = False

    # -- policy-facing API --------------------------------------------------

    @property
    def clock(self) -> int:
        return self._clock

    @property
    def timer(self) -> int | None:
        return self._timer

    @timer.setter
    def timer(self, value: int | None) -> None:
        self._timer = _countdown(value, "timer")

    @property
    def running_time(self) -> int | None:
        return self._running_time

    @running_time.setter
    def running_time(self, value: int | None) -> None:
        self._running_time = _countdown(value, "running_time")

    @property
    def pending_events(self) -> int:
        return len(self._events)

    def add_arrival(self, process: Process) -> None:
        if process.arrival_time < self._clock:
            msg = f"process {process.pid} arrives at {process.arrival_time}, before clock {self._clock}"
            raise ValueError(msg)
        self._events.push(Event.arrival(process))

    def add_unblock(self, process: Process, delay: int) -> None:
        if delay < 0:
            msg = "unblock delay cannot be negative"
            raise ValueError(msg)
        self._events.push(Event.unblock(process, self._clock + delay))

    # -- driver-facing API --------------------------------------------------

    def run(self) -> SimulationResult:
        if self._started:
            msg = "a Simulation can only be run once"
            raise RuntimeError(msg)
        self._started = True

        logger.info("simulation started with %s", type(self.scheduler).__name__)
        self._notify("initialize")
        self.scheduler.initialize(self)

        move = self._time_forward()
        while move is not None:
            self._rounds += 1
            if self._expire_countdown(move):
                # Later countdowns wait for the next round so idle sees this instant.
                while self._expire_countdown(0):
                    pass
            else:
                event = self._events.pop()
                self._elapse(event.timestamp - self._clock)
                self._dispatch(event)

            while self._events and self._events.peek().timestamp == self._clock:
                self._dispatch(self._events.pop())

            if self._running_time is None:
                self._notify("idle")
                self.scheduler.idle(self)
            move = self._time_forward()

        logger.info("simulation finished at t=%d after %d rounds", self._clock, self._rounds)
        return SimulationResult(total_time=self._clock, rounds=self._rounds, callbacks=Counter(self._callbacks))

    # -- internals ----------------------------------------------------------

    def _time_forward(self) -> int | None:
        head = self._events.peek()
        if head is not None:
            return head.timestamp - self._clock
        if self._running_time is not None:
            return self._running_time
        return self._timer

    def _expire_countdown(self, move: int) -> bool:
        timer, running = self._timer, self._running_time
        timer_due = timer is not None and timer <= move
        running_due = running is not None and running <= move

        if timer_due and (not running_due or timer <= running):
            self._clock += timer
            if running is not None:
                self._running_time = running - timer
            self._timer = None
            self._notify("timeout")
            self.scheduler.timeout(self)
            return True
        if running_due:
            self._clock += running
            if timer is not None:
                self._timer = timer - running
            self._running_time = None
            self._notify("stop_running")
            self.scheduler.stop_running(self)
            return True
        return False

    def _elapse(self, delta: int) -> None:
        if self._timer is not None:
            self._timer -= delta
        if self._running_time is not None:
            self._running_time -= delta
        self._clock += delta

    def _dispatch(self, event: Event) -> None:
        if event.kind is EventKind.ARRIVAL:
            self._notify("arrive", event.pid)
            self.scheduler.arrive(event.process, self)
        else:
            self._notify("unblock", event.pid)
            self.scheduler.unblock(event.process, self)

    def _notify(self, callback: str, pid: int | None = None) -> None:
        self._callbacks[callback] += 1
        if pid is None:
            logger.debug("t=%d %s timer=%s running=%s", self._clock, callback, self._timer, self._running_time)
        else:
            logger.debug("t=%d %s pid=%d timer=%s running=%s", self._clock, callback, pid, self._timer, self._running_time)


def _countdown(value: int | None, name: str) -> int | None:
    if value is not None and value < 0:
        msg = f"{name} cannot be negative"
        raise ValueError(msg)
    return value
