from __future__ import annotations

from dataclasses import dataclass
from statistics import mean
from typing import Iterable, Sequence

from .process import Process


@dataclass(slots=True)
class ProcessMetrics:
    pid: int
    arrival_time: int
    start_time: int
    finish_time: int
    service_time: int
    io_time: int
    turnaround_time: int
    ready_time: int
    response_time: int
    normalized_turnaround: float
    preemptions: int


@dataclass(slots=True)
class AggregateMetrics:
    count: int
    mean_turnaround: float
    mean_ready_time: float
    mean_response_time: float
    mean_normalized_turnaround: float
    p50_turnaround: float
    p90_turnaround: float
    p99_turnaround: float
    throughput: float
    utilization: float


def build_process_metrics(processes: Iterable[Process]) -> list[ProcessMetrics]:
    metrics: list[ProcessMetrics] = []
    for process in processes:
        stats = process.stats
        if stats.finish_time is None or stats.start_time is None:
            continue
        turnaround = stats.finish_time - process.arrival_time
        service = process.service_time
        metrics.append(
            ProcessMetrics(
                pid=process.pid,
                arrival_time=process.arrival_time,
                start_time=stats.start_time,
                finish_time=stats.finish_time,
                service_time=service,
                io_time=process.io_time,
                turnaround_time=turnaround,
                ready_time=stats.ready_time,
                response_time=stats.start_time - process.arrival_time,
                normalized_turnaround=turnaround / service if service else float("inf"),
                preemptions=stats.preemptions,
            ),
        )
    return metrics


def summarise(metrics: Sequence[ProcessMetrics], total_time: int) -> AggregateMetrics:
    if not metrics:
        return AggregateMetrics(
            count=0,
            mean_turnaround=0.0,
            mean_ready_time=0.0,
            mean_response_time=0.0,
            mean_normalized_turnaround=0.0,
            p50_turnaround=0.0,
            p90_turnaround=0.0,
            p99_turnaround=0.0,
            throughput=0.0,
            utilization=0.0,
        )
    turnarounds = [m.turnaround_time for m in metrics]
    busy_time = sum(m.service_time for m in metrics)
    return AggregateMetrics(
        count=len(metrics),
        mean_turnaround=mean(turnarounds),
        mean_ready_time=mean(m.ready_time for m in metrics),
        mean_response_time=mean(m.response_time for m in metrics),
        mean_normalized_turnaround=mean(m.normalized_turnaround for m in metrics),
        p50_turnaround=_percentile(turnarounds, 50),
        p90_turnaround=_percentile(turnarounds, 90),
        p99_turnaround=_percentile(turnarounds, 99),
        throughput=len(metrics) / total_time if total_time else 0.0,
        utilization=busy_time / total_time if total_time else 0.0,
    )


def _percentile(values: Sequence[float], percentile: float) -> float:
    if not values:
        return 0.0
    sorted_values = sorted(values)
    k = (len(sorted_values) - 1) * percentile / 100
    f = int(k)
    c = min(f + 1, len(sorted_values) - 1)
    if f == c:
        return float(sorted_values[f])
    d0 = sorted_values[f] * (c - k)
    d1 = sorted_values[c] * (k - f)
    return d0 + d1
