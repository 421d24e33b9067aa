from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .process import Process

if TYPE_CHECKING:
    from .simulator import Simulation


class Scheduler(ABC):
    """Abstract scheduling policy driven by the simulation engine.

    The engine is the only caller of these hooks. Each hook may register
    events or set and clear the timer and running-time countdowns on ``sim``.
    """

    @abstractmethod
    def initialize(self, sim: Simulation) -> None:
        """Seed the engine with arrivals before the run loop starts."""

    @abstractmethod
    def timeout(self, sim: Simulation) -> None:
        """Hook invoked when the timer expires (the timer is already cleared)."""

    @abstractmethod
    def stop_running(self, sim: Simulation) -> None:
        """Hook invoked when the running process completes its CPU burst."""

    @abstractmethod
    def arrive(self, process: Process, sim: Simulation) -> None:
        """Hook invoked when a process arrives."""

    @abstractmethod
    def unblock(self, process: Process, sim: Simulation) -> None:
        """Hook invoked when a process finishes an IO burst."""

    @abstractmethod
    def idle(self, sim: Simulation) -> None:
        """Hook invoked after a dispatch round that leaves the CPU idle."""
