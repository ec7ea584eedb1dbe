from __future__ import annotations

from typing import Dict, List, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Number, ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _cells(duration: Number) -> int:
    # One character per time unit; fractional slices still get a cell.
    return max(1, int(round(duration)))


def _mark(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:>3}"


def _ordered(slices: Sequence[ScheduledSlice]) -> List[ScheduledSlice]:
    return sorted(slices, key=lambda s: (s.start_time, s.end_time))


def render_gantt(slices: Sequence[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart, one character per time unit. Idle time is dotted.
    """
    if not slices:
        return "(no execution)"

    slices = _ordered(slices)

    line = "|"
    labels = " "
    last_time = slices[0].start_time
    time_marks = _mark(last_time).lstrip()

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            width = _cells(idle_gap)
            line += "." * width
            labels += " " * width
            last_time = sl.start_time
            time_marks += _mark(last_time)

        width = _cells(sl.duration)
        line += "=" * width
        labels += sl.pid[:width].ljust(width)
        last_time = sl.end_time
        time_marks += _mark(last_time)

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(slices: Sequence[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    slices = _ordered(slices)

    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    last_time = slices[0].start_time
    time_marks = _mark(last_time).lstrip()

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            width = _cells(idle_gap)
            timeline.append(" " * width)
            labels.append(" " * width)
            last_time = sl.start_time
            time_marks += _mark(last_time)

        width = _cells(sl.duration)
        timeline.append(" " * width, style=f"on {pid_color(sl.pid)}")
        labels.append(sl.pid[:width].ljust(width), style="bold")

        last_time = sl.end_time
        time_marks += _mark(last_time)

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
