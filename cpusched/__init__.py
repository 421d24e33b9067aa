"""Discrete-event simulation engine for single-CPU scheduling policies."""

from .process import Process, ProcessStats
from .event import Event, EventKind, EventQueue
from .scheduler import Scheduler
from .simulator import Simulation, SimulationResult
from .loader import InvalidInputError, SchedulerConfig
from . import schedulers
from . import loader
from . import workload
from . import metrics
from . import evaluation

__all__ = [
	"Process",
	"ProcessStats",
	"Event",
	"EventKind",
	"EventQueue",
	"Scheduler",
	"Simulation",
	"SimulationResult",
	"InvalidInputError",
	"SchedulerConfig",
	"schedulers",
	"loader",
	"workload",
	"metrics",
	"evaluation",
]
