# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import Optional, TypedDict

import pendulum

from planboard.model.column import KanbanColumnType
from planboard.model.entity_id import EntityId


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


PRIORITY_RANK: dict[Priority, int] = {
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
    Priority.URGENT: 4,
}

PRIORITY_POINTS: dict[Priority, int] = {
    Priority.LOW: 5,
    Priority.MEDIUM: 10,
    Priority.HIGH: 15,
    Priority.URGENT: 20,
}

PRIORITY_LABELS: dict[Priority, str] = {
    Priority.LOW: "Low",
    Priority.MEDIUM: "Medium",
    Priority.HIGH: "High",
    Priority.URGENT: "Urgent",
}

PRIORITY_COLORS: dict[Priority, str] = {
    Priority.LOW: "green",
    Priority.MEDIUM: "yellow",
    Priority.HIGH: "dark_orange",
    Priority.URGENT: "red",
}


class TaskStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    IN_REVIEW = "in_review"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    BLOCKED = "blocked"
    ON_HOLD = "on_hold"


TERMINAL_STATUSES: frozenset[TaskStatus] = frozenset(
    {TaskStatus.COMPLETED, TaskStatus.CANCELLED}
)

# Workflow order used when sorting by status.
STATUS_ORDINAL: dict[TaskStatus, int] = {
    TaskStatus.PENDING: 0,
    TaskStatus.IN_PROGRESS: 1,
    TaskStatus.IN_REVIEW: 2,
    TaskStatus.BLOCKED: 3,
    TaskStatus.ON_HOLD: 4,
    TaskStatus.COMPLETED: 5,
    TaskStatus.CANCELLED: 6,
}

STATUS_TRANSITIONS: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.PENDING: frozenset(
        {
            TaskStatus.IN_PROGRESS,
            TaskStatus.ON_HOLD,
            TaskStatus.BLOCKED,
            TaskStatus.CANCELLED,
        }
    ),
    TaskStatus.IN_PROGRESS: frozenset(
        {
            TaskStatus.PENDING,
            TaskStatus.IN_REVIEW,
            TaskStatus.ON_HOLD,
            TaskStatus.BLOCKED,
            TaskStatus.COMPLETED,
            TaskStatus.CANCELLED,
        }
    ),
    TaskStatus.IN_REVIEW: frozenset(
        {
            TaskStatus.IN_PROGRESS,
            TaskStatus.PENDING,
            TaskStatus.BLOCKED,
            TaskStatus.COMPLETED,
            TaskStatus.CANCELLED,
        }
    ),
    TaskStatus.BLOCKED: frozenset(
        {TaskStatus.PENDING, TaskStatus.IN_PROGRESS, TaskStatus.CANCELLED}
    ),
    TaskStatus.ON_HOLD: frozenset(
        {TaskStatus.PENDING, TaskStatus.IN_PROGRESS, TaskStatus.CANCELLED}
    ),
    # terminal: only reopening leaves these
    TaskStatus.COMPLETED: frozenset({TaskStatus.PENDING}),
    TaskStatus.CANCELLED: frozenset({TaskStatus.PENDING}),
}

STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.IN_REVIEW: "In Review",
    TaskStatus.COMPLETED: "Completed",
    TaskStatus.CANCELLED: "Cancelled",
    TaskStatus.BLOCKED: "Blocked",
    TaskStatus.ON_HOLD: "On Hold",
}

STATUS_SYMBOLS: dict[TaskStatus, str] = {
    TaskStatus.PENDING: " ",
    TaskStatus.IN_PROGRESS: ">",
    TaskStatus.IN_REVIEW: "?",
    TaskStatus.COMPLETED: "X",
    TaskStatus.CANCELLED: "/",
    TaskStatus.BLOCKED: "!",
    TaskStatus.ON_HOLD: "~",
}


class Task(TypedDict):
    id: Optional[EntityId]
    entity_type: str
    title: str
    description: Optional[str]
    priority: Priority
    status: TaskStatus
    # explicit board column; None means classified from status
    column: Optional[KanbanColumnType]
    project: Optional[str]
    category_id: Optional[EntityId]
    tags: list[str]
    assignee: Optional[str]
    estimate: Optional[pendulum.Duration]
    actual: Optional[pendulum.Duration]
    due: Optional[pendulum.DateTime]
    created: pendulum.DateTime
    updated: pendulum.DateTime
    started: Optional[pendulum.DateTime]
    completed: Optional[pendulum.DateTime]
    status_changed: Optional[pendulum.DateTime]
    archived: Optional[pendulum.DateTime]
    parent_id: Optional[EntityId]
    prerequisite_ids: list[EntityId]
