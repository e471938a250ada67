# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from worklog import configuration
from worklog.repository.configuration import CONFIGURATION_REPO
from worklog.terminal.custom_typer import WorklogTyperGroup

app = typer.Typer(cls=WorklogTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def __configuration_table(title: Optional[str] = None) -> Table:
    config = CONFIGURATION_REPO.get_config()

    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row(
        "data_path",
        (
            escape(config["data_path"])
            if config["data_path"]
            else "None (default location)"
        ),
    )
    table.add_row("log_level", config["log_level"])
    table.add_row("summary_top_n", str(config["summary_top_n"]))
    table.add_row("heatmap_days", str(config["heatmap_days"]))
    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    console = Console()
    console.print(__configuration_table())
    console.print()
    console.print(f"Config file: {configuration.APP_CONFIG_PATH}")
    console.print(f"Daily logs file: {configuration.DATA_DAILY_LOGS_PATH}")


@app.command("set, s")
def set(
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable the report header",
        ),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing the daily logs file",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the default location",
        ),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help=f"One of {', '.join(LOG_LEVELS)}"),
    ] = None,
    summary_top_n: Annotated[
        Optional[int],
        typer.Option(
            "--summary-top-n",
            min=1,
            help="Number of rows in the summary rankings",
        ),
    ] = None,
    heatmap_days: Annotated[
        Optional[int],
        typer.Option(
            "--heatmap-days",
            min=1,
            help="Number of trailing days in the summary heatmap",
        ),
    ] = None,
) -> None:
    """
    Update configuration settings.
    """
    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(
            f"Log level must be one of {', '.join(LOG_LEVELS)}",
            param_hint="--log-level",
        )

    CONFIGURATION_REPO.update_config(
        show_header=show_header,
        data_path=data_path,
        remove_data_path=remove_data_path,
        log_level=log_level,
        summary_top_n=summary_top_n,
        heatmap_days=heatmap_days,
    )
    CONFIGURATION_REPO.flush()
    logging.getLogger(__name__).debug(
        "Wrote configuration to %s", configuration.APP_CONFIG_PATH
    )

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(__configuration_table("Updated Configuration"))
