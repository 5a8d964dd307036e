# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from planboard import configuration
from planboard.model.board import BoardLayout
from planboard.model.preferences import GroupKey, SortKey
from planboard.repository.configuration import CONFIGURATION_REPO
from planboard.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def enabled(value: bool) -> str:
    return "✓ Enabled" if value else "✗ Disabled"


@app.command("show, sh")
def show() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("show_header", enabled(config["show_header"]))
    table.add_row("clear_ids_on_view", enabled(config["clear_ids_on_view"]))
    table.add_row("show_completed", enabled(config["show_completed"]))
    table.add_row("default_sort", config["default_sort"])
    table.add_row("default_group", config["default_group"])
    table.add_row("default_layout", config["default_layout"])
    table.add_row(
        "status_groups_include_cancelled",
        enabled(config["status_groups_include_cancelled"]),
    )
    table.add_row("strict_sort_keys", enabled(config["strict_sort_keys"]))
    table.add_row("log_level", config["log_level"])
    wip_limits = config.get("wip_limits") or {}
    table.add_row(
        "wip_limits",
        ", ".join(f"{column}={limit}" for column, limit in sorted(wip_limits.items()))
        or "defaults",
    )
    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("config_path", str(configuration.APP_CONFIG_PATH))

    console.print(table)


@app.command("set, s")
def set(
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--no-show-header", help="Print the app header"),
    ] = None,
    clear_ids_on_view: Annotated[
        Optional[bool],
        typer.Option(
            "--clear-ids-on-view/--no-clear-ids-on-view",
            help="Renumber synthetic ids each time a list is shown",
        ),
    ] = None,
    show_completed: Annotated[
        Optional[bool],
        typer.Option(
            "--show-completed/--hide-completed",
            help="Include completed and cancelled tasks in lists by default",
        ),
    ] = None,
    default_sort: Annotated[
        Optional[SortKey], typer.Option("--default-sort", case_sensitive=False)
    ] = None,
    default_group: Annotated[
        Optional[GroupKey], typer.Option("--default-group", case_sensitive=False)
    ] = None,
    default_layout: Annotated[
        Optional[BoardLayout], typer.Option("--default-layout", case_sensitive=False)
    ] = None,
    status_groups_include_cancelled: Annotated[
        Optional[bool],
        typer.Option(
            "--status-groups-include-cancelled/--no-status-groups-include-cancelled",
            help="Give cancelled tasks their own group when grouping by status",
        ),
    ] = None,
    strict_sort_keys: Annotated[
        Optional[bool],
        typer.Option(
            "--strict-sort-keys/--no-strict-sort-keys",
            help="Fail on unknown sort keys instead of sorting by creation date",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR"),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory path for storing data files"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path", help="Reset data path to the user data directory"
        ),
    ] = False,
) -> None:
    """Update configuration settings."""
    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(f"log level must be one of {', '.join(LOG_LEVELS)}")

    updates = {
        "show_header": show_header,
        "clear_ids_on_view": clear_ids_on_view,
        "show_completed": show_completed,
        "default_sort": None if default_sort is None else str(default_sort),
        "default_group": None if default_group is None else str(default_group),
        "default_layout": None if default_layout is None else str(default_layout),
        "status_groups_include_cancelled": status_groups_include_cancelled,
        "strict_sort_keys": strict_sort_keys,
        "log_level": None if log_level is None else log_level.upper(),
        "data_path": None if data_path is None else str(Path(data_path).expanduser()),
    }
    for key, value in updates.items():
        if value is not None:
            CONFIGURATION_REPO.update_config(key, value)
    if remove_data_path:
        CONFIGURATION_REPO.update_config("data_path", None)

    show()
