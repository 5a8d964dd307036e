# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import pendulum
import typer

from planboard import state as app_state
from planboard.errors import ColumnError, PlanboardError
from planboard.id_map import clear_id_map_if_required
from planboard.model.board import Board, BoardLayout
from planboard.model.column import COLUMN_TITLES, KanbanColumnType
from planboard.model.preferences import Preferences, TimeFilter
from planboard.model.task import Priority
from planboard.repository.board import BOARD_REPO
from planboard.repository.configuration import CONFIGURATION_REPO
from planboard.repository.task import TASK_REPO
from planboard.service import board as board_service
from planboard.service import metrics as metrics_service
from planboard.template.board import get_board_template
from planboard.template.preferences import get_preferences_template
from planboard.terminal.custom_typer import AliasedTyperGroup
from planboard.terminal.error import report_errors
from planboard.terminal.parse import parse_datetime, parse_tags
from planboard.terminal.task import DATETIME_HELP, resolve_category_id, resolve_task_id
from planboard.terminal.validate import validate_wip_limit
from planboard.view.views import board as board_report
from planboard.view.views import metrics as metrics_report

logger = logging.getLogger(__name__)

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def get_board(name: str) -> Board:
    board = BOARD_REPO.get_board_by_name(name)
    if board is None:
        raise PlanboardError(f"unknown board: {name}")
    return board


def render_board(board: Board, preferences: Optional[Preferences] = None) -> None:
    config = CONFIGURATION_REPO.get_config()
    clock = app_state.get_clock()

    tasks = board_service.board_tasks(board, TASK_REPO.get_all_tasks())
    columns = board_service.build_columns(board, tasks, config.get("wip_limits"))
    if preferences is not None:
        columns = board_service.filter_columns(columns, preferences, clock)

    clear_id_map_if_required()
    board_report.board_view(board, columns, clock)


@app.command("create, cr", no_args_is_help=True)
def create(
    name: str,
    project: Annotated[
        Optional[str],
        typer.Option("--project", "-p", help="only show tasks of this project"),
    ] = None,
    layout: Annotated[
        Optional[BoardLayout], typer.Option("--layout", "-l", case_sensitive=False)
    ] = None,
    start: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--start", "-s", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    target_end: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--target-end", "-te", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
) -> None:
    config = CONFIGURATION_REPO.get_config()

    with report_errors():
        board = get_board_template(app_state.get_clock())
        board["name"] = name
        board["project"] = project
        board["layout"] = layout or BoardLayout(config["default_layout"])
        board["start"] = start
        board["target_end"] = target_end
        BOARD_REPO.save_new_board(board)

    render_board(board)


@app.command("list, ls")
def list_boards() -> None:
    clear_id_map_if_required()
    board_report.boards_view(BOARD_REPO.get_all_boards())


@app.command("show, sh", no_args_is_help=True)
def show(
    name: str,
    search: Annotated[Optional[str], typer.Option("--search", "-q")] = None,
    category: Annotated[Optional[str], typer.Option("--category", "-cat")] = None,
    priority: Annotated[
        Optional[Priority], typer.Option("--priority", "-pr", case_sensitive=False)
    ] = None,
    assignee: Annotated[Optional[str], typer.Option("--assignee", "-as")] = None,
    tags: Annotated[Optional[list[str]], typer.Option("--tag", "-t")] = None,
    time_filter: Annotated[
        TimeFilter, typer.Option("--time", "-tm", case_sensitive=False)
    ] = TimeFilter.ALL,
) -> None:
    """Show a board, optionally narrowing every column with filters."""
    with report_errors():
        board = get_board(name)
        preferences = get_preferences_template()
        preferences["search_text"] = search or ""
        preferences["category_id"] = resolve_category_id(category)
        preferences["priority"] = priority
        preferences["assignee"] = assignee
        preferences["tags"] = parse_tags(tags)
        preferences["time_filter"] = time_filter
        # Done column stays populated on the board
        preferences["show_completed"] = True

    render_board(board, preferences)


@app.command("move, mv", no_args_is_help=True)
def move(name: str, task_id: int, column_type: KanbanColumnType) -> None:
    clock = app_state.get_clock()

    with report_errors():
        board = get_board(name)
        if column_type not in board_service.column_types(board):
            raise ColumnError(f"board {name} has no {column_type} column")
        task = TASK_REPO.get_task(resolve_task_id(task_id))
        if board_service.move_task(task, column_type, clock):
            TASK_REPO.update_task(task)
            logger.info("moved task %s to %s", task["id"], column_type)

    render_board(board)


@app.command("layout, l", no_args_is_help=True)
def layout(name: str, layout: BoardLayout) -> None:
    with report_errors():
        board = get_board(name)
        board_service.set_layout(board, layout, app_state.get_clock())
        BOARD_REPO.update_board(board)

    render_board(board)


@app.command("column-add, ca", no_args_is_help=True)
def column_add(
    name: str,
    column_type: KanbanColumnType,
    title: Annotated[Optional[str], typer.Option("--title", "-ti")] = None,
    wip_limit: Annotated[
        Optional[int],
        typer.Option("--wip-limit", "-w", callback=validate_wip_limit),
    ] = None,
) -> None:
    """Add a column to a custom board, between the todo and done columns."""
    with report_errors():
        board = get_board(name)
        if board["layout"] != BoardLayout.CUSTOM:
            raise ColumnError(f"board {name} does not use the custom layout")
        board_service.add_custom_column(
            board,
            title or COLUMN_TITLES[column_type],
            column_type,
            wip_limit,
            app_state.get_clock(),
        )
        BOARD_REPO.update_board(board)

    render_board(board)


@app.command("column-remove, crm", no_args_is_help=True)
def column_remove(name: str, column_type: KanbanColumnType) -> None:
    """Remove a custom column; its tasks go back to the backlog."""
    with report_errors():
        board = get_board(name)
        custom = [
            custom
            for custom in board["custom_columns"]
            if custom["column_type"] == column_type
        ]
        if not custom:
            raise ColumnError(f"board {name} has no custom {column_type} column")
        migrated = board_service.remove_custom_column(
            board,
            custom[0]["id"],
            board_service.board_tasks(board, TASK_REPO.get_all_tasks()),
            app_state.get_clock(),
        )
        TASK_REPO.update_tasks(migrated)
        BOARD_REPO.update_board(board)

    render_board(board)


@app.command("column-order, co", no_args_is_help=True)
def column_order(name: str, column_types: list[KanbanColumnType]) -> None:
    """Reorder the custom columns by listing their types in the new order."""
    with report_errors():
        board = get_board(name)
        ids_by_type = {
            custom["column_type"]: custom["id"] for custom in board["custom_columns"]
        }
        unknown = [
            column_type for column_type in column_types if column_type not in ids_by_type
        ]
        if unknown:
            raise ColumnError(f"board {name} has no custom {unknown[0]} column")
        board_service.reorder_custom_columns(
            board,
            [ids_by_type[column_type] for column_type in column_types],
            app_state.get_clock(),
        )
        BOARD_REPO.update_board(board)

    render_board(board)


@app.command("wip, w", no_args_is_help=True)
def wip(
    column_type: KanbanColumnType,
    limit: Annotated[Optional[int], typer.Argument(callback=validate_wip_limit)] = None,
) -> None:
    """Override the WIP limit of a built-in column; omit the limit to reset it."""
    CONFIGURATION_REPO.set_wip_limit(str(column_type), limit)


@app.command("metrics, me", no_args_is_help=True)
def metrics(name: str) -> None:
    config = CONFIGURATION_REPO.get_config()
    clock = app_state.get_clock()

    with report_errors():
        board = get_board(name)
        tasks = board_service.board_tasks(board, TASK_REPO.get_all_tasks())
        columns = board_service.build_columns(board, tasks, config.get("wip_limits"))

    metrics_report.metrics_view(
        board["name"],
        metrics_service.board_metrics(tasks, clock),
        [metrics_service.column_metrics(column) for column in columns],
        metrics_service.velocity(tasks, clock),
        metrics_service.burndown(board, tasks, clock),
    )
