from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import clamp_quantum, schedule_rr
from .errors import SchedulerError
from .events import DEFAULT_PREVIEW, Playback, build_event_log, describe_slice
from .gantt import build_rich_gantt
from .models import ScheduleResult
from .workload_io import DEFAULT_WORKLOAD, load_workload, normalize_processes

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2
DEFAULT_STEP_DELAY = 0.35
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _add_run_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--quantum",
        "-q",
        type=clamp_quantum,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum; values below 1 are raised to 1 (default: {DEFAULT_QUANTUM}).",
    )
    parser.add_argument(
        "--step",
        action="store_true",
        help="Replay the schedule slice by slice before the summary.",
    )
    parser.add_argument(
        "--step-delay",
        type=float,
        default=DEFAULT_STEP_DELAY,
        help=f"Seconds to wait between slices when --step is used (default: {DEFAULT_STEP_DELAY}).",
    )
    parser.add_argument(
        "--events",
        type=int,
        default=DEFAULT_PREVIEW,
        help=f"Number of slices listed in the event log (default: {DEFAULT_PREVIEW}).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rr-scheduler",
        description="Round Robin CPU scheduling simulator.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging verbosity (default: WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Schedule the processes of a workload file.")
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    _add_run_options(run_parser)

    demo_parser = subparsers.add_parser("demo", help="Schedule the built-in three-process workload.")
    _add_run_options(demo_parser)

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _print_result(result: ScheduleResult, console: Console, events: int = DEFAULT_PREVIEW) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    for line in build_event_log(result.timeline, result.quantum, limit=events):
        console.print(f"[dim]-[/dim] {escape(line)}")

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Start",
        "Complete",
        "Wait",
        "Turnaround",
        "Response",
        "Priority",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            p.pid,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
            "" if p.priority is None else str(p.priority),
        )

    console.print(proc_table)
    console.print()

    summary = result.summary
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{summary.avg_waiting:.2f}")
    sys_table.add_row("Avg turnaround", f"{summary.avg_turnaround:.2f}")
    sys_table.add_row("Avg response", f"{summary.avg_response:.2f}")
    if result.system:
        sys = result.system
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _animate_result(result: ScheduleResult, console: Console, delay: float) -> None:
    """
    Replay the computed schedule one slice at a time.
    """
    playback = Playback(result.timeline)
    if not len(playback):
        console.print("[red]No execution to animate.[/red]")
        return

    console.print(f"[bold]Replaying {result.algorithm}[/bold] ({len(playback)} slices)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    def show(sl) -> None:
        console.print(f"[green]{'█' * max(1, int(round(sl.duration)))}[/green] {describe_slice(sl)}")

    playback.play(show, delay=delay)
    console.print("Playback finished")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    console = Console()

    try:
        if args.command == "run":
            processes = load_workload(Path(args.workload))
        else:
            processes = normalize_processes(DEFAULT_WORKLOAD)

        if not processes:
            console.print("[yellow]Add at least one process with positive burst time.[/yellow]")
            return 0

        result = schedule_rr(processes, quantum=args.quantum)
    except (SchedulerError, OSError) as exc:
        logger.debug("Scheduling failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    if args.step:
        try:
            _animate_result(result, console, delay=args.step_delay)
        except KeyboardInterrupt:
            console.print("[yellow]Animation skipped.[/yellow]")
    _print_result(result, console, events=args.events)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
