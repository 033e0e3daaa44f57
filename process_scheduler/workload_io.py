from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, List

from .errors import WorkloadParseError
from .models import Process

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a CSV or JSON file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in (".csv", ".json"):
        raise WorkloadParseError(f"Unsupported workload format: {suffix or path.name} (use .csv or .json)")

    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            processes = _load_json(f) if suffix == ".json" else load_processes(f)
    except OSError as exc:
        raise WorkloadParseError(f"Cannot read workload file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise WorkloadParseError(f"Invalid workload file {path}: not UTF-8 text ({exc.reason})") from exc

    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def load_processes(lines: Iterable[str]) -> List[Process]:
    """
    Parse CSV records ``id,burst,arrival[,priority]`` into processes.

    Priority defaults to 0 when the fourth field is absent. Blank lines are
    skipped; any other malformed record aborts the whole load.
    """
    processes: List[Process] = []
    reader = csv.reader(lines)
    for record in reader:
        fields = [f.strip() for f in record]
        if not any(fields):
            continue

        if len(fields) not in (3, 4):
            raise WorkloadParseError(
                f"Line {reader.line_num}: expected 3 or 4 fields (id, burst, arrival[, priority]), got {len(fields)}"
            )

        try:
            values = [int(f) for f in fields]
        except ValueError as exc:
            raise WorkloadParseError(f"Line {reader.line_num}: {exc}") from exc

        pid, burst_time, arrival_time = values[:3]
        priority = values[3] if len(values) == 4 else 0
        processes.append(Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority))

    return processes


def _load_json(f) -> List[Process]:
    try:
        raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise WorkloadParseError(f"Invalid JSON workload: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadParseError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _process_from_mapping(mapping) -> Process:
    try:
        pid = _as_int(mapping["id"])
        arrival_time = _as_int(mapping["arrival_time"])
        burst_time = _as_int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = _as_int(priority_val) if priority_val not in (None, "") else 0
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise WorkloadParseError(f"Invalid process entry: {mapping!r}") from exc

    return Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority)


def _as_int(value) -> int:
    # int(2.5) would silently truncate
    if isinstance(value, float) or isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    return int(value)
