from __future__ import annotations

from typing import Dict

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .timeline import Timeline


def _label(pid: int, width: int) -> str:
    return f"P{pid}"[:width].ljust(width)


def render_gantt(timeline: Timeline) -> str:
    """
    Plain-text Gantt chart: ``=`` for execution, ``.`` for idle time.
    """
    if not len(timeline):
        return "(no execution)"

    line = "|"
    labels = " "
    time_marks = "0"

    for pid, start, end in timeline.segments():
        width = end - start
        if pid is None:
            line += "." * width
            labels += " " * width
        else:
            line += "=" * width
            labels += _label(pid, width)
        time_marks += f"{end:>3}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(timeline: Timeline) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not len(timeline):
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    bars = Text()
    labels = Text()
    time_marks = "0"

    for pid, start, end in timeline.segments():
        width = end - start
        if pid is None:
            bars.append(" " * width)
            labels.append(" " * width)
        else:
            bars.append(" " * width, style=f"on {pid_color(pid)}")
            labels.append(_label(pid, width), style="bold")
        time_marks += f"{end:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(bars)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
