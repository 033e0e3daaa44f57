from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from .errors import InvalidInputError
from .metrics import build_result, make_row
from .models import Process, ScheduleResult, ScheduleRow, TimelineSegment
from .validation import validate_processes

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2


def schedule_fcfs(processes: Sequence[Process]) -> ScheduleResult:
    """
    First-Come First-Served (non-preemptive).

    Processes run in the order they are listed, not sorted by arrival. A
    process that has not arrived yet when the CPU frees up leaves an idle gap
    and starts at its own arrival time.
    """
    index_by_pid = validate_processes(processes)

    clock = 0
    timeline: List[TimelineSegment] = []
    rows: List[Optional[ScheduleRow]] = []

    for p in processes:
        waiting_time = max(0, clock - p.arrival_time)
        start_time = p.arrival_time + waiting_time
        completion_time = start_time + p.burst_time

        timeline.append(TimelineSegment(pid=p.pid, start_time=start_time, stop_time=completion_time))
        rows.append(make_row(p, completion_time))

        clock = completion_time

    logger.debug("FCFS finished %d processes at t=%d", len(rows), clock)
    return build_result("First-come, first-serve", None, rows, timeline, index_by_pid)


def _schedule_non_preemptive(
    processes: Sequence[Process],
    algorithm: str,
    key: Callable[[Process], int],
) -> ScheduleResult:
    """
    Run-to-completion scheduling: at each decision point pick, among arrived
    and unfinished processes, the one with the smallest ``key``. Ties go to
    the process listed first.
    """
    index_by_pid = validate_processes(processes)

    time = 0
    timeline: List[TimelineSegment] = []
    rows: List[Optional[ScheduleRow]] = [None] * len(processes)
    pending = list(range(len(processes)))

    while pending:
        ready = [idx for idx in pending if processes[idx].arrival_time <= time]

        if not ready:
            # Nothing has arrived: jump straight to the next arrival.
            next_arrival = min(processes[idx].arrival_time for idx in pending)
            logger.debug("%s: CPU idle from t=%d to t=%d", algorithm, time, next_arrival)
            time = next_arrival
            continue

        chosen = min(ready, key=lambda idx: (key(processes[idx]), idx))
        p = processes[chosen]

        start_time = time
        time = start_time + p.burst_time

        timeline.append(TimelineSegment(pid=p.pid, start_time=start_time, stop_time=time))
        rows[chosen] = make_row(p, time)
        pending.remove(chosen)

    logger.debug("%s finished %d processes at t=%d", algorithm, len(rows), time)
    return build_result(algorithm, None, rows, timeline, index_by_pid)


def schedule_sjf(processes: Sequence[Process]) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive), ties broken by input order.
    """
    return _schedule_non_preemptive(processes, "Shortest-job-first", key=lambda p: p.burst_time)


def schedule_priority(processes: Sequence[Process]) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority; ties broken by input
    order.
    """
    return _schedule_non_preemptive(processes, "Priority", key=lambda p: p.priority)


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = DEFAULT_QUANTUM) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Each round is a full pass over the processes in input order. Every
    process that has arrived and still needs CPU time runs for up to one
    quantum. A round in which nothing could run moves the clock to the next
    arrival.
    """
    if quantum is None:
        quantum = DEFAULT_QUANTUM
    if isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
        raise InvalidInputError(f"Round Robin requires a positive integer quantum, got {quantum!r}")

    index_by_pid = validate_processes(processes)

    remaining = [p.burst_time for p in processes]
    rows: List[Optional[ScheduleRow]] = [None] * len(processes)
    timeline: List[TimelineSegment] = []
    unfinished = len(processes)
    time = 0

    while unfinished:
        ran = False

        for idx, p in enumerate(processes):
            if remaining[idx] == 0 or p.arrival_time > time:
                continue

            run_time = min(quantum, remaining[idx])
            timeline.append(TimelineSegment(pid=p.pid, start_time=time, stop_time=time + run_time))

            time += run_time
            remaining[idx] -= run_time
            ran = True

            if remaining[idx] == 0:
                rows[idx] = make_row(p, time)
                unfinished -= 1

        if not ran:
            next_arrival = min(p.arrival_time for idx, p in enumerate(processes) if remaining[idx] > 0)
            logger.debug("Round Robin: CPU idle from t=%d to t=%d", time, next_arrival)
            time = next_arrival

    logger.debug("Round Robin (q=%d) finished %d processes at t=%d", quantum, len(rows), time)
    return build_result("Round-robin", quantum, rows, timeline, index_by_pid)


ALGORITHMS: Dict[str, Callable[..., ScheduleResult]] = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "priority": schedule_priority,
    "rr": schedule_rr,
}


def run_algorithm(name: str, processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise InvalidInputError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    if name == "rr":
        return func(processes, quantum=quantum)
    return func(processes)


def run_all(processes: Sequence[Process], quantum: int = DEFAULT_QUANTUM) -> List[ScheduleResult]:
    """
    Run every algorithm over the same process set, in the order
    FCFS, SJF, Priority, Round-Robin.
    """
    return [run_algorithm(name, processes, quantum=quantum) for name in ALGORITHMS]
