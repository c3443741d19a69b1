from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import config
from .algorithms import ALGORITHMS, run_algorithm
from .compare import compare_all
from .errors import SchedulerError, ValidationError
from .gantt import build_rich_gantt, render_gantt
from .models import ScheduleResult
from .registry import JobRegistry
from .workload_io import load_workload

logger = logging.getLogger(__name__)

MENU_ALGORITHMS = {"2": "fcfs", "3": "sjf", "4": "priority", "5": "rr"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="Uniprocessor CPU scheduling simulator (FCFS, preemptive SJF, preemptive Priority, RR).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: SCHEDSIM_LOG_LEVEL or WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=list(ALGORITHMS),
        help="Algorithm to use (fcfs, sjf, priority, rr).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (default: SCHEDSIM_DEFAULT_QUANTUM).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print a plain-text Gantt chart instead of the colored one.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run all four algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum used for RR (default: SCHEDSIM_DEFAULT_QUANTUM).",
    )

    menu_parser = subparsers.add_parser(
        "menu",
        help="Interactive menu to add jobs and run algorithms.",
    )
    menu_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Optional workload file to preload into the job list.",
    )
    menu_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Default quantum offered for RR (default: SCHEDSIM_DEFAULT_QUANTUM).",
    )
    menu_parser.add_argument(
        "--max-jobs",
        type=int,
        default=None,
        help="Maximum number of jobs that can be added (default: SCHEDSIM_MAX_JOBS).",
    )

    return parser


def configure_logging(level: Optional[str] = None, console: Optional[Console] = None) -> None:
    level = (level or config.settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or Console(stderr=True), show_path=False)],
        force=True,
    )


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    headers = [
        "PID",
        "Arrival",
        "Burst",
        "Priority",
        "Start",
        "Completion",
        "Turnaround",
        "Waiting",
        "Response",
    ]

    job_table = Table(title="Per-job metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        job_table.add_column(h, justify=justify)

    for j in result.jobs:
        job_table.add_row(
            f"P{j.pid}",
            str(j.arrival_time),
            str(j.burst_time),
            str(j.priority),
            str(j.start_time),
            str(j.completion_time),
            str(j.turnaround_time),
            str(j.waiting_time),
            str(j.response_time),
        )

    console.print(job_table)
    console.print()

    summary = result.summary
    sys = result.system
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{summary.avg_waiting:.2f}")
    sys_table.add_row("Avg turnaround", f"{summary.avg_turnaround:.2f}")
    sys_table.add_row("Avg response", f"{summary.avg_response:.2f}")
    sys_table.add_row("Makespan", str(sys.makespan))
    sys_table.add_row("Idle time", str(sys.idle_time))
    sys_table.add_row("Throughput (jobs/time)", f"{sys.throughput:.3f}")
    sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")
    sys_table.add_row("Context switches", str(sys.context_switches))

    console.print(sys_table)


def _print_comparison(results: Dict[str, ScheduleResult], console: Console, title: str) -> None:
    summary_table = Table(title=title, box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")

    for result in results.values():
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{result.summary.avg_waiting:.2f}",
            f"{result.summary.avg_turnaround:.2f}",
            f"{result.summary.avg_response:.2f}",
        )

    console.print(summary_table)
    console.print(
        "[dim]The algorithm with the lowest average waiting time is generally the most "
        "efficient for this workload. SJF tends to suit throughput-oriented systems; "
        "Round Robin gives interactive jobs better response times.[/dim]"
    )


def _ask_int(prompt: str, name: str) -> int:
    raw = input(prompt).strip()
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Invalid {name}: {raw!r} is not an integer") from None


def _ask_quantum(default_quantum: int) -> int:
    raw = input(f"Enter time quantum for Round Robin [{default_quantum}]: ").strip()
    if not raw:
        return default_quantum
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Invalid time quantum: {raw!r} is not an integer") from None


def _menu_add_job(registry: JobRegistry, console: Console) -> None:
    if registry.is_full:
        console.print(f"[red]\\[ERROR] Maximum job limit reached ({registry.capacity}).[/red]")
        return

    console.print(f"\n[bold]--- Add New Job (PID: {len(registry) + 1}) ---[/bold]")
    arrival_time = _ask_int("Enter Arrival Time: ", "arrival time")
    burst_time = _ask_int("Enter Burst Time: ", "burst time")
    priority = _ask_int("Enter Priority (lower number = higher priority): ", "priority")

    job = registry.register(arrival_time, burst_time, priority)
    console.print(f"[green]\\[SUCCESS] Job P{job.pid} added successfully.[/green]")


def _print_menu(console: Console, registry: JobRegistry) -> None:
    console.print("\n[bold cyan]Process Scheduling Simulator[/bold cyan] [dim](q to quit)[/dim]")
    console.print(f"[bold]Jobs registered:[/bold] {len(registry)}/{registry.capacity}")
    console.print("  [yellow]1[/yellow]. Add Job")
    console.print("  [yellow]2[/yellow]. Run First-Come, First-Served (FCFS)")
    console.print("  [yellow]3[/yellow]. Run Shortest Job First (SJF) - Preemptive")
    console.print("  [yellow]4[/yellow]. Run Priority Scheduling - Preemptive")
    console.print("  [yellow]5[/yellow]. Run Round Robin (RR)")
    console.print("  [yellow]6[/yellow]. Compare All Algorithms")
    console.print("  [yellow]7[/yellow]. Exit")


def _interactive_menu(registry: JobRegistry, default_quantum: int, console: Console) -> None:
    while True:
        _print_menu(console, registry)
        try:
            choice = input("Enter your choice: ").strip().lower()
        except EOFError:
            return

        if choice in {"7", "q", "quit", "exit"}:
            console.print("\nExiting simulator. Goodbye!")
            return

        try:
            if choice == "1":
                _menu_add_job(registry, console)
            elif choice in MENU_ALGORITHMS:
                alg = MENU_ALGORITHMS[choice]
                quantum = _ask_quantum(default_quantum) if alg == "rr" else None
                _print_result(run_algorithm(alg, registry, quantum=quantum), console)
            elif choice == "6":
                quantum = _ask_quantum(default_quantum)
                _print_comparison(compare_all(registry, quantum), console, "Algorithm comparison")
            else:
                console.print("[red]\\[ERROR] Invalid choice. Please try again.[/red]")
        except SchedulerError as exc:
            console.print(f"[red]\\[ERROR] {escape(str(exc))}[/red]")
        except EOFError:
            return


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    configure_logging(args.log_level)

    quantum = args.quantum if args.quantum is not None else config.settings.DEFAULT_QUANTUM

    try:
        if args.command == "run":
            registry = load_workload(args.workload)
            result = run_algorithm(args.algorithm, registry, quantum=quantum)
            _print_result(result, console, plain=args.plain)
            return 0

        if args.command == "compare":
            registry = load_workload(args.workload)
            results = compare_all(registry, quantum)
            _print_comparison(results, console, f"Algorithm comparison: {args.workload}")
            return 0

        if args.command == "menu":
            registry = JobRegistry(capacity=args.max_jobs)
            if args.workload:
                load_workload(args.workload, registry)
            _interactive_menu(registry, quantum, console)
            return 0
    except (SchedulerError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
