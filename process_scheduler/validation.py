from __future__ import annotations

from typing import Dict, Sequence

from .errors import EmptyProcessSetError, InvalidInputError
from .models import Process


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_processes(processes: Sequence[Process]) -> Dict[int, int]:
    """
    Check a process set before scheduling and return a ``pid -> input index`` map.

    Nothing is clamped: a negative arrival, a non-positive burst, a
    non-positive or repeated id, or a non-integer field is an error.
    """
    if not processes:
        raise EmptyProcessSetError("Cannot schedule an empty process set")

    index_by_pid: Dict[int, int] = {}
    for idx, p in enumerate(processes):
        for name in ("pid", "arrival_time", "burst_time", "priority"):
            value = getattr(p, name)
            if not _is_int(value):
                raise InvalidInputError(f"Process #{idx + 1}: {name} must be an integer, got {value!r}")

        if p.pid <= 0:
            raise InvalidInputError(f"Process #{idx + 1}: id must be positive, got {p.pid}")
        if p.arrival_time < 0:
            raise InvalidInputError(f"Process {p.pid}: arrival time must be >= 0, got {p.arrival_time}")
        if p.burst_time <= 0:
            raise InvalidInputError(f"Process {p.pid}: burst time must be > 0, got {p.burst_time}")
        if p.pid in index_by_pid:
            raise InvalidInputError(f"Duplicate process id {p.pid}")

        index_by_pid[p.pid] = idx

    return index_by_pid
