from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import TimelineSegment

IDLE_LABEL = "idle"


def _cells(segments: Sequence[TimelineSegment]) -> Tuple[List[Tuple[str, int, int]], int]:
    """
    Split a timeline into ``(label, start, stop)`` cells from t=0, inserting
    idle cells where the CPU had nothing to run.
    """
    cells: List[Tuple[str, int, int]] = []
    last_time = 0
    for seg in sorted(segments, key=lambda s: (s.start_time, s.stop_time)):
        if seg.start_time > last_time:
            cells.append((IDLE_LABEL, last_time, seg.start_time))
        cells.append((str(seg.pid), seg.start_time, seg.stop_time))
        last_time = seg.stop_time
    return cells, last_time


def _place(marks: str, column: int, text: str) -> str:
    if not marks or len(marks) < column:
        return marks.ljust(column) + text
    return marks + " " + text


def render_gantt(timeline: Sequence[TimelineSegment], cell_width: int = 8) -> str:
    """
    Plain-text Gantt chart: one fixed-width labelled block per segment and
    the start time of each block underneath.
    """
    if not timeline:
        return "(no execution)"

    cells, last_time = _cells(timeline)

    bar = "|" + "|".join(label.center(cell_width) for label, _, _ in cells) + "|"
    marks = ""
    for idx, (_, start, _) in enumerate(cells):
        marks = _place(marks, idx * (cell_width + 1), str(start))
    marks = _place(marks, len(cells) * (cell_width + 1), str(last_time))

    return "\n".join(["Gantt schedule", bar, marks])


def build_rich_gantt(timeline: Sequence[TimelineSegment]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart (one column per time
    unit) and a string with time marks aligned under block boundaries.
    """
    if not timeline:
        panel = Panel("No execution", title="Gantt schedule")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    cells, last_time = _cells(timeline)

    bar = Text()
    labels = Text()
    time_marks = ""
    column = 0

    for label, start, stop in cells:
        width = max(1, stop - start)
        time_marks = _place(time_marks, column, str(start))

        if label == IDLE_LABEL:
            bar.append("." * width, style="dim")
            labels.append(" " * width)
        else:
            bar.append(" " * width, style=f"on {pid_color(label)}")
            labels.append(label[:width].ljust(width), style="bold")

        column += width

    time_marks = _place(time_marks, column, str(last_time))

    table = Table.grid(padding=(0, 0))
    table.add_row(bar)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt schedule")
    return panel, time_marks
