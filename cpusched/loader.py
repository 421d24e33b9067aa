"""Readers for process description and scheduler configuration files.

Process file: one process per line, ``<arrival> <cpu> [<io> <cpu> ...]``.
Pids are assigned in file order starting at 0.

Scheduler file: the policy name on the first line, then ``key = value``
options, one per line.

Blank lines and lines starting with ``#`` are ignored in both formats.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from .process import Process


class InvalidInputError(ValueError):
    """Malformed input file, reported with its location."""

    def __init__(self, cause: str, *, line: int | None = None, source: str | None = None) -> None:
        self.cause = cause
        self.line = line
        self.source = source
        super().__init__(str(self))

    def __str__(self) -> str:
        where = self.source or "<input>"
        if self.line is not None:
            where = f"{where}, line {self.line}"
        return f"{where}: {self.cause}"


@dataclass(slots=True)
class SchedulerConfig:
    name: str
    options: dict[str, str] = field(default_factory=dict)


def _decoded_lines(fh: Iterable[bytes], source: str) -> Iterator[str]:
    for number, raw in enumerate(fh, start=1):
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidInputError(f"invalid UTF-8 ({exc.reason})", line=number, source=source) from exc


def _content_lines(lines: Iterable[str]) -> Iterable[tuple[int, str]]:
    for number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        yield number, line


def parse_processes(lines: Iterable[str], *, source: str | None = None) -> list[Process]:
    processes: list[Process] = []
    for number, line in _content_lines(lines):
        fields = line.split()
        try:
            values = [int(item) for item in fields]
        except ValueError:
            raise InvalidInputError(f"expected integers, got {line!r}", line=number, source=source) from None
        if any(value < 0 for value in values):
            raise InvalidInputError("times must be non-negative", line=number, source=source)
        arrival, activities = values[0], values[1:]
        if not activities:
            raise InvalidInputError("process has no activities", line=number, source=source)
        if len(activities) % 2 != 1:
            raise InvalidInputError("process has no final CPU activity", line=number, source=source)
        processes.append(Process(pid=len(processes), arrival_time=arrival, activities=tuple(activities)))
    return processes


def load_processes(path: str | Path) -> list[Process]:
    path = Path(path)
    try:
        with path.open("rb") as fh:
            return parse_processes(_decoded_lines(fh, str(path)), source=str(path))
    except OSError as exc:
        raise InvalidInputError(exc.strerror or str(exc), source=str(path)) from exc


def parse_scheduler_config(lines: Iterable[str], *, source: str | None = None) -> SchedulerConfig:
    name: str | None = None
    options: dict[str, str] = {}
    for number, line in _content_lines(lines):
        if name is None:
            name = line
            continue
        key, sep, value = line.partition("=")
        key, value = key.strip(), value.strip()
        if not sep or not key or not value or "=" in value:
            raise InvalidInputError(f"invalid scheduler option {line!r}", line=number, source=source)
        if key in options:
            raise InvalidInputError(f"duplicate scheduler option '{key}'", line=number, source=source)
        options[key] = value
    if name is None:
        raise InvalidInputError("missing scheduler name", source=source)
    return SchedulerConfig(name=name, options=options)


def load_scheduler_config(path: str | Path) -> SchedulerConfig:
    path = Path(path)
    try:
        with path.open("rb") as fh:
            return parse_scheduler_config(_decoded_lines(fh, str(path)), source=str(path))
    except OSError as exc:
        raise InvalidInputError(exc.strerror or str(exc), source=str(path)) from exc
