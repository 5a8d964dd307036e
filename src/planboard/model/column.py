# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import Optional


class KanbanColumnType(StrEnum):
    BACKLOG = "backlog"
    READY = "ready"
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    CODE_REVIEW = "code_review"
    TESTING = "testing"
    REVIEW = "review"
    DEPLOYMENT = "deployment"
    DONE = "done"
    BLOCKED = "blocked"


COLUMN_TITLES: dict[KanbanColumnType, str] = {
    KanbanColumnType.BACKLOG: "Backlog",
    KanbanColumnType.READY: "Ready",
    KanbanColumnType.TODO: "To Do",
    KanbanColumnType.IN_PROGRESS: "In Progress",
    KanbanColumnType.CODE_REVIEW: "Code Review",
    KanbanColumnType.TESTING: "Testing",
    KanbanColumnType.REVIEW: "Review",
    KanbanColumnType.DEPLOYMENT: "Deployment",
    KanbanColumnType.DONE: "Done",
    KanbanColumnType.BLOCKED: "Blocked",
}

# None means unlimited
DEFAULT_WIP_LIMITS: dict[KanbanColumnType, Optional[int]] = {
    KanbanColumnType.BACKLOG: None,
    KanbanColumnType.READY: None,
    KanbanColumnType.TODO: None,
    KanbanColumnType.IN_PROGRESS: 3,
    KanbanColumnType.CODE_REVIEW: 2,
    KanbanColumnType.TESTING: 2,
    KanbanColumnType.REVIEW: 2,
    KanbanColumnType.DEPLOYMENT: None,
    KanbanColumnType.DONE: None,
    KanbanColumnType.BLOCKED: None,
}
