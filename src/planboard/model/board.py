# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import Optional, TypedDict

import pendulum

from planboard.model.column import KanbanColumnType
from planboard.model.entity_id import EntityId
from planboard.model.task import Task, TaskStatus


class BoardLayout(StrEnum):
    STANDARD = "standard"
    SIMPLE = "simple"
    DETAILED = "detailed"
    CUSTOM = "custom"


LAYOUT_COLUMNS: dict[BoardLayout, tuple[KanbanColumnType, ...]] = {
    BoardLayout.STANDARD: (
        KanbanColumnType.BACKLOG,
        KanbanColumnType.TODO,
        KanbanColumnType.IN_PROGRESS,
        KanbanColumnType.REVIEW,
        KanbanColumnType.DONE,
    ),
    BoardLayout.SIMPLE: (
        KanbanColumnType.TODO,
        KanbanColumnType.IN_PROGRESS,
        KanbanColumnType.DONE,
    ),
    BoardLayout.DETAILED: (
        KanbanColumnType.BACKLOG,
        KanbanColumnType.READY,
        KanbanColumnType.IN_PROGRESS,
        KanbanColumnType.CODE_REVIEW,
        KanbanColumnType.TESTING,
        KanbanColumnType.DEPLOYMENT,
        KanbanColumnType.DONE,
    ),
}

# Custom layouts always open with these and close with done.
CUSTOM_LAYOUT_HEAD: tuple[KanbanColumnType, ...] = (
    KanbanColumnType.BACKLOG,
    KanbanColumnType.TODO,
)
CUSTOM_LAYOUT_TAIL: KanbanColumnType = KanbanColumnType.DONE

COLUMN_STATUS: dict[KanbanColumnType, TaskStatus] = {
    KanbanColumnType.BACKLOG: TaskStatus.PENDING,
    KanbanColumnType.READY: TaskStatus.PENDING,
    KanbanColumnType.TODO: TaskStatus.PENDING,
    KanbanColumnType.IN_PROGRESS: TaskStatus.IN_PROGRESS,
    KanbanColumnType.CODE_REVIEW: TaskStatus.IN_REVIEW,
    KanbanColumnType.TESTING: TaskStatus.IN_REVIEW,
    KanbanColumnType.REVIEW: TaskStatus.IN_REVIEW,
    KanbanColumnType.DEPLOYMENT: TaskStatus.IN_PROGRESS,
    KanbanColumnType.DONE: TaskStatus.COMPLETED,
    KanbanColumnType.BLOCKED: TaskStatus.BLOCKED,
}

# Classification of tasks that have never been placed on a column.
STATUS_COLUMN: dict[TaskStatus, KanbanColumnType] = {
    TaskStatus.PENDING: KanbanColumnType.TODO,
    TaskStatus.IN_PROGRESS: KanbanColumnType.IN_PROGRESS,
    TaskStatus.IN_REVIEW: KanbanColumnType.REVIEW,
    TaskStatus.COMPLETED: KanbanColumnType.DONE,
    TaskStatus.CANCELLED: KanbanColumnType.DONE,
    TaskStatus.BLOCKED: KanbanColumnType.BLOCKED,
    TaskStatus.ON_HOLD: KanbanColumnType.BACKLOG,
}


class CustomColumn(TypedDict):
    id: EntityId
    title: str
    column_type: KanbanColumnType
    wip_limit: Optional[int]
    order: int


class Board(TypedDict):
    id: Optional[EntityId]
    entity_type: str
    name: str
    project: Optional[str]
    layout: BoardLayout
    custom_columns: list[CustomColumn]
    start: Optional[pendulum.DateTime]
    target_end: Optional[pendulum.DateTime]
    created: pendulum.DateTime
    updated: pendulum.DateTime


class KanbanColumn(TypedDict):
    id: EntityId
    column_type: KanbanColumnType
    title: str
    tasks: list[Task]
    wip_limit: Optional[int]
    collapsed: bool
