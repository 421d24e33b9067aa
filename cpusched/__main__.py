from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from . import evaluation, loader
from .scheduler import Scheduler
from .schedulers import build_scheduler


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="cpusched", description="Run CPU scheduling simulations.")
    parser.add_argument("processes", help="Process file: '<arrival> <cpu> [<io> <cpu> ...]' per line.")
    parser.add_argument(
        "schedulers",
        nargs="+",
        help="Scheduler file(s): policy name on the first line, then 'key = value' options.",
    )
    parser.add_argument("--per-process", action="store_true", help="Also print per-process metrics.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every engine dispatch.")
    return parser.parse_args(argv)


def _prebuilt(scheduler: Scheduler) -> evaluation.SchedulerFactory:
    return lambda: scheduler


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    try:
        processes = loader.load_processes(args.processes)
        configs = [loader.load_scheduler_config(path) for path in args.schedulers]
        factories = [(config.name, _prebuilt(build_scheduler(config.name, config.options))) for config in configs]
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    outcomes = evaluation.evaluate_suite(factories, processes)

    print(f"Simulated {len(processes)} processes\n")
    header_fmt = "{:<10} {:>8} {:>10} {:>9} {:>9} {:>9} {:>10} {:>7}"
    row_fmt = "{:<10} {:>8d} {:>10.3f} {:>9.3f} {:>9.3f} {:>9.3f} {:>10.4f} {:>7.3f}"
    print(header_fmt.format("Scheduler", "Time", "MeanTurn", "MeanWait", "MeanResp", "MeanNorm", "Throughput", "Util"))
    for outcome in outcomes:
        m = outcome.aggregate
        print(
            row_fmt.format(
                outcome.name,
                outcome.simulation.total_time,
                m.mean_turnaround,
                m.mean_ready_time,
                m.mean_response_time,
                m.mean_normalized_turnaround,
                m.throughput,
                m.utilization,
            ),
        )

    if args.per_process:
        for outcome in outcomes:
            print(f"\n{outcome.name}")
            print("{:>5} {:>7} {:>6} {:>7} {:>7} {:>6} {:>6}".format("PID", "Arrive", "Start", "Finish", "Turn", "Wait", "Resp"))
            for pm in outcome.per_process:
                print(
                    f"{pm.pid:>5} {pm.arrival_time:>7} {pm.start_time:>6} {pm.finish_time:>7} "
                    f"{pm.turnaround_time:>7} {pm.ready_time:>6} {pm.response_time:>6}",
                )
    return 0


if __name__ == "__main__":
    sys.exit(main())
