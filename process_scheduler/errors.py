from __future__ import annotations


class SchedulerError(ValueError):
    """Base class for every error the scheduler raises on bad input."""


class InvalidInputError(SchedulerError):
    """A process set, quantum or algorithm name that cannot be scheduled."""


class WorkloadParseError(InvalidInputError):
    """A workload source that could not be turned into processes."""


class EmptyProcessSetError(SchedulerError):
    """Scheduling was asked for with no processes; averages are undefined."""
