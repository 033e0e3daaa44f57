from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence

from .errors import EmptyProcessSetError
from .models import Process, ScheduleResult, ScheduleRow, TimelineSegment


def make_row(process: Process, completion_time: int) -> ScheduleRow:
    """
    Build the final timing row of a process from its completion time.
    """
    turnaround_time = completion_time - process.arrival_time
    waiting_time = turnaround_time - process.burst_time
    return ScheduleRow(
        pid=process.pid,
        priority=process.priority,
        burst_time=process.burst_time,
        arrival_time=process.arrival_time,
        waiting_time=waiting_time,
        turnaround_time=turnaround_time,
        completion_time=completion_time,
    )


def build_result(
    algorithm: str,
    quantum: Optional[int],
    rows: Sequence[Optional[ScheduleRow]],
    timeline: Sequence[TimelineSegment],
    index_by_pid: Mapping[int, int],
) -> ScheduleResult:
    """
    Compute averages and throughput given the rows (in input order) and the
    timeline of one run.

    ``index_by_pid`` is the map returned by validation; it backs
    ``ScheduleResult.row``. The result holds tuples and a read-only view of
    the map so it cannot be changed after it is returned.
    """
    if not rows:
        raise EmptyProcessSetError("Metrics are undefined for an empty process set")
    missing = [idx for idx, r in enumerate(rows) if r is None]
    if missing:
        raise RuntimeError(f"{algorithm}: processes at positions {missing} never completed")

    n = len(rows)
    last_completion = max(r.completion_time for r in rows)

    return ScheduleResult(
        algorithm=algorithm,
        quantum=quantum,
        rows=tuple(rows),
        timeline=tuple(timeline),
        average_wait=sum(r.waiting_time for r in rows) / n,
        average_turnaround=sum(r.turnaround_time for r in rows) / n,
        throughput=n / last_completion,
        index_by_pid=MappingProxyType(dict(index_by_pid)),
    )


def summarize_results(results: Iterable[ScheduleResult]) -> List[dict]:
    """
    Return the headline numbers of several runs for side-by-side comparison.
    """
    return [
        {
            "algorithm": result.algorithm,
            "quantum": result.quantum,
            "avg_waiting": result.average_wait,
            "avg_turnaround": result.average_turnaround,
            "throughput": result.throughput,
            "cpu_utilization": result.cpu_utilization,
        }
        for result in results
    ]
