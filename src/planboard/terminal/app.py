# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import pendulum
import typer

from planboard import state as app_state
from planboard.log import configure_logging
from planboard.repository.configuration import CONFIGURATION_REPO
from planboard.terminal import board, category, configuration, task
from planboard.terminal.custom_typer import OrderedAliasedTyperGroup
from planboard.terminal.parse import parse_datetime
from planboard.time import FixedClock

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="planboard - Task planning and Kanban boards in the CLI",
    no_args_is_help=True,
)
app.add_typer(task.app, name="task, t", help="Create, update and list tasks")
app.add_typer(board.app, name="board, b", help="Kanban boards and their metrics")
app.add_typer(category.app, name="category, cat", help="Task categories")
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
    clear_ids: Annotated[
        Optional[bool],
        typer.Option(
            "--clear-ids/--no-clear-ids",
            help="Renumber synthetic ids before showing a list",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug output to stderr"),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on unknown sort keys"),
    ] = False,
    now: Annotated[
        Optional[pendulum.DateTime],
        typer.Option(
            "--now",
            parser=parse_datetime,
            help="Pretend the current time is this instant (YYYY-MM-DD[THH:mm])",
        ),
    ] = None,
) -> None:
    """
    planboard - Task planning and Kanban boards in the CLI

    Global options that apply to all commands.
    """
    config = CONFIGURATION_REPO.get_config()

    configure_logging(logging.DEBUG if verbose else config["log_level"])

    if no_header:
        app_state.set_show_header(False)
    if clear_ids is not None:
        app_state.set_clear_ids(clear_ids)
    if strict:
        app_state.set_strict(True)
    if now is not None:
        app_state.set_clock(FixedClock(now, timezone="local"))


def run() -> None:
    app()
