# SPDX-License-Identifier: MIT

from typing import cast

from rich import box
from rich.console import Console
from rich.table import Table

from planboard.model.board import Board, KanbanColumn
from planboard.model.task import Task
from planboard.query.filter import is_overdue
from planboard.repository.id_map import ID_MAP_REPO
from planboard.service.board import is_wip_violated
from planboard.time import Clock, datetime_to_display_local_date_str_optional
from planboard.view.util import WIP_VIOLATION_COLOR, colorize, render_priority
from planboard.view.views.header import header


def column_heading(column: KanbanColumn) -> str:
    count = len(column["tasks"])
    if column["wip_limit"] is None:
        heading = f"{column['title']} ({count})"
    else:
        heading = f"{column['title']} ({count}/{column['wip_limit']})"
    if is_wip_violated(column):
        return f"[{WIP_VIOLATION_COLOR}]{heading}[/{WIP_VIOLATION_COLOR}]"
    return heading


def task_card(task: Task, clock: Clock) -> str:
    synthetic_id = ID_MAP_REPO.associate_id("tasks", cast(str, task["id"]))
    return colorize(
        f"{synthetic_id} {task['title']}", task, is_overdue(task, clock)
    ) + f" {render_priority(task)}"


def board_view(board: Board, columns: list[KanbanColumn], clock: Clock) -> None:
    sub_header = board["name"]
    if board["project"] is not None:
        sub_header = f"{sub_header} [{board['project']}]"
    header(sub_header)

    board_table = Table(box=box.SIMPLE, expand=True)
    for column in columns:
        board_table.add_column(column_heading(column), overflow="fold")

    depth = max((len(column["tasks"]) for column in columns), default=0)
    for row_index in range(depth):
        row = []
        for column in columns:
            if column["collapsed"] or row_index >= len(column["tasks"]):
                row.append("")
            else:
                row.append(task_card(column["tasks"][row_index], clock))
        board_table.add_row(*row)

    console = Console()
    console.print(board_table)


def boards_view(boards: list[Board]) -> None:
    header("boards")

    boards_table = Table(box=box.SIMPLE)
    boards_table.add_column("id")
    boards_table.add_column("name")
    boards_table.add_column("project")
    boards_table.add_column("layout")
    boards_table.add_column("start")
    boards_table.add_column("target end")

    for board in boards:
        boards_table.add_row(
            str(ID_MAP_REPO.associate_id("boards", cast(str, board["id"]))),
            board["name"],
            board["project"] or "",
            str(board["layout"]),
            datetime_to_display_local_date_str_optional(board["start"]),
            datetime_to_display_local_date_str_optional(board["target_end"]),
        )

    console = Console()
    console.print(boards_table)
