# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from worklog.color import heatmap_color, task_status_color
from worklog.service.summary import HeatmapDay, KeyMetrics, StatusCount
from worklog.view.view.views.header import header

BAR_WIDTH = 30


def _bar(fraction: float, color: str) -> Text:
    filled = round(fraction * BAR_WIDTH)
    bar = Text()
    bar.append("█" * filled, style=color)
    bar.append("░" * (BAR_WIDTH - filled), style="grey23")
    return bar


def _key_metrics_table(metrics: KeyMetrics) -> Table:
    table = Table(box=box.SIMPLE, show_header=True)
    table.add_column("Total Tasks", justify="center")
    table.add_column("Completed", justify="center")
    table.add_column("Active Blockers", justify="center")
    table.add_column("Avg. Completion", justify="center")

    average = metrics["average_completion_days"]
    table.add_row(
        str(metrics["total_tasks"]),
        str(metrics["completed_count"]),
        str(metrics["active_blockers_count"]),
        f"{average:.1f} days" if average is not None else "N/A",
    )
    return table


def _status_table(distribution: list[StatusCount]) -> Table | Text:
    if len(distribution) == 0:
        return Text("No task data to show distribution.", style="dim")

    table = Table(box=None, show_header=False)
    table.add_column("status")
    table.add_column("count", justify="right")
    table.add_column("bar")
    for item in distribution:
        color = task_status_color(item["status"])
        table.add_row(
            f"[{color}]{item['status']}[/{color}]",
            f"{item['count']} ({item['percentage']:.1f}%)",
            _bar(item["percentage"] / 100, color),
        )
    return table


def _time_ranking_table(ranking: list[tuple[str, float]]) -> Table | Text:
    if len(ranking) == 0:
        return Text("No time tracking data available yet.", style="dim")

    max_time = ranking[0][1]
    table = Table(box=None, show_header=False)
    table.add_column("task")
    table.add_column("hours", justify="right")
    table.add_column("bar")
    for description, hours in ranking:
        table.add_row(
            escape(description), f"{hours:.1f} hrs", _bar(hours / max_time, "blue")
        )
    return table


def _blockers_table(blockers: list[tuple[str, int]]) -> Table | Text:
    if len(blockers) == 0:
        return Text(
            "No recurring blockers found. Great job staying on track!", style="dim"
        )

    table = Table(box=None, show_header=False)
    table.add_column("blocker")
    table.add_column("count", justify="right")
    for description, count in blockers:
        times = "time" if count == 1 else "times"
        table.add_row(escape(description), f"{count} {times}")
    return table


def _heatmap(days: list[HeatmapDay]) -> Text:
    heatmap = Text()
    for index, day in enumerate(days):
        heatmap.append("■ ", style=heatmap_color(day["count"]))
        if index % 7 == 6:
            heatmap.append("\n")
    heatmap.append("\nLess ")
    for count in (0, 1, 3, 5, 6):
        heatmap.append("■ ", style=heatmap_color(count))
    heatmap.append("More", style="")
    return heatmap


def summary_view(
    report_name: str,
    metrics: KeyMetrics,
    distribution: list[StatusCount],
    ranking: list[tuple[str, float]],
    blockers: list[tuple[str, int]],
    heatmap: list[HeatmapDay],
    active_blockers: bool,
) -> None:
    """Display the overall summary of every log."""
    header(report_name, "active blockers" if active_blockers else None)

    console = Console()
    console.print(_key_metrics_table(metrics))
    console.print(
        Panel(_status_table(distribution), title="Task Status", border_style="blue")
    )
    console.print(
        Panel(_time_ranking_table(ranking), title="Time Spent", border_style="blue")
    )
    console.print(
        Panel(_blockers_table(blockers), title="Common Blockers", border_style="blue")
    )
    if len(heatmap) > 0:
        first = heatmap[0]["date"].format("MMM D")
        last = heatmap[-1]["date"].format("MMM D")
        console.print(
            Panel(
                _heatmap(heatmap),
                title=f"Completed Tasks {first} - {last}",
                border_style="blue",
            )
        )
