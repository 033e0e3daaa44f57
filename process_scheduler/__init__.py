"""
Process scheduler package.

Simulates FCFS, SJF, Priority and Round-Robin CPU scheduling over a fixed
process set and reports per-process timings, a Gantt timeline and averages.
"""

from .algorithms import (
    ALGORITHMS,
    DEFAULT_QUANTUM,
    run_algorithm,
    run_all,
    schedule_fcfs,
    schedule_priority,
    schedule_rr,
    schedule_sjf,
)
from .errors import EmptyProcessSetError, InvalidInputError, SchedulerError, WorkloadParseError
from .models import Process, ScheduleResult, ScheduleRow, TimelineSegment

__all__ = [
    "ALGORITHMS",
    "DEFAULT_QUANTUM",
    "EmptyProcessSetError",
    "InvalidInputError",
    "Process",
    "ScheduleResult",
    "ScheduleRow",
    "SchedulerError",
    "TimelineSegment",
    "WorkloadParseError",
    "run_algorithm",
    "run_all",
    "schedule_fcfs",
    "schedule_priority",
    "schedule_rr",
    "schedule_sjf",
]
