# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from worklog.model.task_span import TaskSpan
from worklog.time import date_to_display_str
from worklog.view.view.util import colored_status, format_days, short_id
from worklog.view.view.views.header import header


def spans_view(report_name: str, spans: list[TaskSpan]) -> None:
    """Display one row per work item with the span it covers across the logs."""
    header(report_name)

    console = Console()
    if len(spans) == 0:
        console.print("\n[dim]No tasks to display[/dim]\n")
        return

    spans_table = Table(box=box.SIMPLE)
    spans_table.add_column("id")
    spans_table.add_column("description")
    spans_table.add_column("status")
    spans_table.add_column("start")
    spans_table.add_column("end")
    spans_table.add_column("duration", justify="right")

    for span in spans:
        spans_table.add_row(
            short_id(span["persistent_id"]),
            f"[{span['color']}]{escape(span['description'])}[/{span['color']}]",
            colored_status(span["status"]),
            date_to_display_str(span["start_date"]),
            date_to_display_str(span["end_date"]),
            format_days(span["duration_in_days"]),
        )

    console.print(spans_table)
