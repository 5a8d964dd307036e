# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from planboard.errors import ColumnError
from planboard.model.board import (
    COLUMN_STATUS,
    CUSTOM_LAYOUT_HEAD,
    CUSTOM_LAYOUT_TAIL,
    LAYOUT_COLUMNS,
    STATUS_COLUMN,
    Board,
    BoardLayout,
    CustomColumn,
    KanbanColumn,
)
from planboard.model.column import COLUMN_TITLES, DEFAULT_WIP_LIMITS, KanbanColumnType
from planboard.model.entity_id import EntityId, generate_entity_id
from planboard.model.preferences import Preferences
from planboard.model.task import Task, TaskStatus
from planboard.query.filter import generate_filter
from planboard.time import Clock

logger = logging.getLogger(__name__)

IN_PROGRESS_STATUSES = (TaskStatus.IN_PROGRESS, TaskStatus.IN_REVIEW)


def classify(task: Task) -> KanbanColumnType:
    """The column a task belongs to: its explicit column, else one implied by status."""
    if task["column"] is not None:
        return task["column"]
    return STATUS_COLUMN[task["status"]]


def is_wip_violated(column: KanbanColumn) -> bool:
    if column["wip_limit"] is None:
        return False
    return len(column["tasks"]) > column["wip_limit"]


def wip_limit_for(
    column_type: KanbanColumnType, wip_overrides: Optional[dict[str, int]] = None
) -> Optional[int]:
    if wip_overrides and str(column_type) in wip_overrides:
        return wip_overrides[str(column_type)]
    return DEFAULT_WIP_LIMITS[column_type]


def column_types(board: Board) -> list[KanbanColumnType]:
    if board["layout"] != BoardLayout.CUSTOM:
        return list(LAYOUT_COLUMNS[board["layout"]])
    return (
        list(CUSTOM_LAYOUT_HEAD)
        + [custom["column_type"] for custom in sorted_custom_columns(board)]
        + [CUSTOM_LAYOUT_TAIL]
    )


def sorted_custom_columns(board: Board) -> list[CustomColumn]:
    return sorted(board["custom_columns"], key=lambda custom: custom["order"])


def build_columns(
    board: Board,
    tasks: list[Task],
    wip_overrides: Optional[dict[str, int]] = None,
) -> list[KanbanColumn]:
    """Rebuild every column of the board from the full task set.

    Archived tasks are left off the board. Tasks classified into a column the
    layout does not show are not placed anywhere.
    """
    active_tasks = [task for task in tasks if task["archived"] is None]

    def make_column(
        id: EntityId,
        column_type: KanbanColumnType,
        title: str,
        wip_limit: Optional[int],
    ) -> KanbanColumn:
        return {
            "id": id,
            "column_type": column_type,
            "title": title,
            "tasks": [task for task in active_tasks if classify(task) == column_type],
            "wip_limit": wip_limit,
            "collapsed": False,
        }

    if board["layout"] != BoardLayout.CUSTOM:
        return [
            make_column(
                str(column_type),
                column_type,
                COLUMN_TITLES[column_type],
                wip_limit_for(column_type, wip_overrides),
            )
            for column_type in LAYOUT_COLUMNS[board["layout"]]
        ]

    columns = [
        make_column(
            str(column_type),
            column_type,
            COLUMN_TITLES[column_type],
            wip_limit_for(column_type, wip_overrides),
        )
        for column_type in CUSTOM_LAYOUT_HEAD
    ]
    for custom in sorted_custom_columns(board):
        columns.append(
            make_column(
                custom["id"],
                custom["column_type"],
                custom["title"],
                custom["wip_limit"],
            )
        )
    columns.append(
        make_column(
            str(CUSTOM_LAYOUT_TAIL),
            CUSTOM_LAYOUT_TAIL,
            COLUMN_TITLES[CUSTOM_LAYOUT_TAIL],
            None,
        )
    )
    return columns


def filter_columns(
    columns: list[KanbanColumn], preferences: Preferences, clock: Clock
) -> list[KanbanColumn]:
    """Narrow each column's tasks with the board's filter bar."""
    predicate = generate_filter(preferences, clock)
    return [
        {**column, "tasks": predicate.filter(column["tasks"])} for column in columns
    ]


def find_column(
    columns: list[KanbanColumn], column_type: KanbanColumnType
) -> Optional[KanbanColumn]:
    for column in columns:
        if column["column_type"] == column_type:
            return column
    return None


def move_task(task: Task, column_type: KanbanColumnType, clock: Clock) -> bool:
    """Place a task on a column, keeping its status in step.

    Returns False without touching the task when it already sits in that
    column. Column and status are always written together.
    """
    previous_column = classify(task)
    if previous_column == column_type:
        logger.debug("task %s already in %s", task["id"], column_type)
        return False

    now = clock.now()
    status = COLUMN_STATUS[column_type]
    task["column"] = column_type
    task["status"] = status
    task["status_changed"] = now
    task["updated"] = now

    if status in IN_PROGRESS_STATUSES and task["started"] is None:
        task["started"] = now
    if column_type == KanbanColumnType.DONE:
        task["completed"] = now
        if task["started"] is not None:
            task["actual"] = pendulum.duration(
                seconds=(now - task["started"]).total_seconds()
            )
    elif previous_column == KanbanColumnType.DONE:
        task["completed"] = None
    return True


def add_custom_column(
    board: Board,
    title: str,
    column_type: KanbanColumnType,
    wip_limit: Optional[int],
    clock: Clock,
) -> CustomColumn:
    if column_type in CUSTOM_LAYOUT_HEAD or column_type == CUSTOM_LAYOUT_TAIL:
        raise ColumnError(f"{column_type} is always part of a custom board")
    if any(custom["column_type"] == column_type for custom in board["custom_columns"]):
        raise ColumnError(f"board already has a {column_type} column")

    order = max((custom["order"] for custom in board["custom_columns"]), default=-1) + 1
    custom: CustomColumn = {
        "id": generate_entity_id(),
        "title": title,
        "column_type": column_type,
        "wip_limit": wip_limit,
        "order": order,
    }
    board["custom_columns"].append(custom)
    board["updated"] = clock.now()
    return custom


def remove_custom_column(
    board: Board, column_id: EntityId, tasks: list[Task], clock: Clock
) -> list[Task]:
    """Drop a custom column and send its tasks back to the backlog.

    Returns the tasks that were migrated so the caller can persist them.
    """
    removed = [custom for custom in board["custom_columns"] if custom["id"] == column_id]
    if not removed:
        raise ColumnError(f"custom column not found: {column_id}")
    removed_type = removed[0]["column_type"]
    board["custom_columns"] = [
        custom for custom in board["custom_columns"] if custom["id"] != column_id
    ]
    board["updated"] = clock.now()

    migrated: list[Task] = []
    now = clock.now()
    for task in tasks:
        if classify(task) == removed_type:
            task["column"] = KanbanColumnType.BACKLOG
            task["status"] = TaskStatus.PENDING
            task["status_changed"] = now
            task["updated"] = now
            migrated.append(task)
    logger.info(
        "moved %d tasks from removed column %s to backlog", len(migrated), removed_type
    )
    return migrated


def reorder_custom_columns(
    board: Board, column_ids: list[EntityId], clock: Clock
) -> None:
    known_ids = {custom["id"] for custom in board["custom_columns"]}
    if set(column_ids) != known_ids or len(column_ids) != len(known_ids):
        raise ColumnError("reorder must list every custom column exactly once")
    positions = {column_id: index for index, column_id in enumerate(column_ids)}
    for custom in board["custom_columns"]:
        custom["order"] = positions[custom["id"]]
    board["updated"] = clock.now()


def set_layout(board: Board, layout: BoardLayout, clock: Clock) -> None:
    board["layout"] = layout
    board["updated"] = clock.now()


def board_tasks(board: Board, tasks: list[Task]) -> list[Task]:
    """Tasks that belong on the board: all of them, or one project's."""
    if board["project"] is None:
        return list(tasks)
    return [task for task in tasks if task["project"] == board["project"]]
