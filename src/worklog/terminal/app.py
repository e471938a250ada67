# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from worklog.configuration import setup_logging
from worklog.terminal import configuration, log, view
from worklog.terminal.custom_typer import WorklogTyperGroup
from worklog.view import state as view_state

app = typer.Typer(
    cls=WorklogTyperGroup,
    help="Worklog - Daily work logs in the CLI",
    no_args_is_help=True,
)
app.add_typer(log.app, name="log, l", help="Write and browse daily logs")
app.add_typer(view.app, name="view, v", help="Reports across all logs")
app.add_typer(configuration.app, name="config, c", help="Show or change settings")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging on stderr",
        ),
    ] = False,
) -> None:
    """
    Worklog - Daily work logs in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)
    if verbose:
        setup_logging("DEBUG")


def run() -> None:
    app()
