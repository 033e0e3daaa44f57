from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass(frozen=True)
class TimelineSegment:
    """
    One uninterrupted execution interval of a process in the Gantt chart.
    """

    pid: int
    start_time: int
    stop_time: int

    @property
    def duration(self) -> int:
        return self.stop_time - self.start_time


@dataclass(frozen=True)
class ScheduleRow:
    pid: int
    priority: int
    burst_time: int
    arrival_time: int
    waiting_time: int
    turnaround_time: int
    completion_time: int


@dataclass(frozen=True)
class ScheduleResult:
    """
    Fully computed outcome of one scheduling run.

    ``rows`` follow the input order of the process set, whatever order the
    processes completed in. ``timeline`` is ordered by start time.
    """

    algorithm: str
    quantum: Optional[int]
    rows: Tuple[ScheduleRow, ...] = ()
    timeline: Tuple[TimelineSegment, ...] = ()
    average_wait: float = 0.0
    average_turnaround: float = 0.0
    throughput: float = 0.0
    index_by_pid: Mapping[int, int] = field(default_factory=dict, repr=False, compare=False)

    @property
    def makespan(self) -> int:
        return max((r.completion_time for r in self.rows), default=0)

    @property
    def cpu_busy_time(self) -> int:
        return sum(seg.duration for seg in self.timeline)

    @property
    def cpu_utilization(self) -> float:
        makespan = self.makespan
        return self.cpu_busy_time / makespan if makespan > 0 else 0.0

    def row(self, pid: int) -> ScheduleRow:
        """
        Look up the row of a process by its id.
        """
        try:
            return self.rows[self.index_by_pid[pid]]
        except KeyError:
            raise KeyError(f"No process with id {pid} in {self.algorithm} result") from None
