from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, DEFAULT_QUANTUM, run_algorithm
from .errors import SchedulerError
from .gantt import build_rich_gantt, render_gantt
from .metrics import summarize_results
from .models import ScheduleResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)

ALGORITHM_CHOICES = list(ALGORITHMS) + ["all"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="process-scheduler",
        description="CPU scheduling simulator (FCFS, SJF, Priority, Round-Robin).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Print the schedule of a workload file.")
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to a CSV (id,burst,arrival[,priority]) or JSON workload file.",
    )
    run_parser.add_argument(
        "--algorithm",
        "-a",
        default="all",
        choices=ALGORITHM_CHOICES,
        help="Algorithm to use (default: all, in the order fcfs sjf priority rr).",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt chart as plain text instead of colored blocks.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to a CSV or JSON workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        choices=list(ALGORITHMS),
        help="Algorithms to compare (default: fcfs sjf priority rr).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for round-robin when included (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def _print_title(console: Console, title: str) -> None:
    rule = "-" * (len(title) * 2)
    console.print(rule, markup=False, highlight=False)
    console.print(" " * (len(title) // 2) + title, style="bold", markup=False, highlight=False)
    console.print(rule, markup=False, highlight=False)


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    title = result.algorithm
    if result.quantum is not None:
        title = f"{title} (quantum {result.quantum})"
    _print_title(console, title)

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks, highlight=False)

    console.print()

    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=True)
    table.add_column("ID", justify="center")
    table.add_column("Priority", justify="right")
    table.add_column("Burst", justify="right")
    table.add_column("Arrival", justify="right")
    table.add_column("Wait", justify="right", footer=f"Average\n{result.average_wait:.2f}")
    table.add_column("Turnaround", justify="right", footer=f"Average\n{result.average_turnaround:.2f}")
    table.add_column("Exit", justify="right", footer=f"Throughput\n{result.throughput:.2f}/t")

    for r in result.rows:
        table.add_row(
            str(r.pid),
            str(r.priority),
            str(r.burst_time),
            str(r.arrival_time),
            str(r.waiting_time),
            str(r.turnaround_time),
            str(r.completion_time),
        )

    console.print(table)
    console.print()


def _print_comparison(results: List[ScheduleResult], workload_path: Path, console: Console) -> None:
    summary_table = Table(title=f"Algorithm comparison: {workload_path}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Throughput", justify="right")
    summary_table.add_column("CPU utilization", justify="right")

    for summary in summarize_results(results):
        summary_table.add_row(
            summary["algorithm"],
            "" if summary["quantum"] is None else str(summary["quantum"]),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['throughput']:.3f}",
            f"{summary['cpu_utilization'] * 100:.1f}%",
        )

    console.print(summary_table)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    console = Console()

    try:
        workload_path = Path(args.workload)
        processes = load_workload(workload_path)

        if args.command == "run":
            names = list(ALGORITHMS) if args.algorithm == "all" else [args.algorithm]
            # Compute every schedule before printing so a failure prints nothing.
            results = [run_algorithm(name, processes, quantum=args.quantum) for name in names]
            for result in results:
                _print_result(result, console, plain=args.plain)
            return 0

        if args.command == "compare":
            results = [run_algorithm(name, processes, quantum=args.quantum) for name in args.algorithms]
            _print_comparison(results, workload_path, console)
            return 0
    except SchedulerError as exc:
        logger.debug("Scheduling aborted", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
