from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Sequence

from . import metrics
from .process import Process
from .scheduler import Scheduler
from .simulator import Simulation, SimulationResult


SchedulerFactory = Callable[[], Scheduler]


@dataclass(slots=True)
class EvaluationOutcome:
    name: str
    simulation: SimulationResult
    processes: list[Process]
    per_process: list[metrics.ProcessMetrics]
    aggregate: metrics.AggregateMetrics


def evaluate_scheduler(
    name: str,
    factory: SchedulerFactory,
    processes: Sequence[Process],
) -> EvaluationOutcome:
    workload = [process.fresh() for process in processes]
    simulation = Simulation(scheduler=factory())
    for process in workload:
        simulation.add_arrival(process)
    result = simulation.run()
    per_process = metrics.build_process_metrics(workload)
    aggregate = metrics.summarise(per_process, result.total_time)
    return EvaluationOutcome(
        name=name,
        simulation=result,
        processes=workload,
        per_process=per_process,
        aggregate=aggregate,
    )


def evaluate_suite(
    factories: Sequence[tuple[str, SchedulerFactory]],
    processes: Sequence[Process],
) -> list[EvaluationOutcome]:
    return [evaluate_scheduler(name, factory, processes) for name, factory in factories]
