# SPDX-License-Identifier: MIT

from typing import Optional

from planboard.model.task import (
    PRIORITY_COLORS,
    PRIORITY_LABELS,
    STATUS_SYMBOLS,
    TERMINAL_STATUSES,
    Task,
)
from planboard.time import Clock

COMPLETED_TASK_COLOR = "bright_black"
OVERDUE_COLOR = "red"
WIP_VIOLATION_COLOR = "bold red"


def task_state(task: Task) -> str:
    return STATUS_SYMBOLS[task["status"]]


def task_age(task: Task, clock: Clock) -> str:
    return clock.now().diff_for_humans(task["created"], absolute=True)


def render_priority(task: Task) -> str:
    color = PRIORITY_COLORS[task["priority"]]
    return f"[{color}]{PRIORITY_LABELS[task['priority']]}[/{color}]"


def format_tags(tags: Optional[list[str]]) -> str:
    """Format a list of tags as a comma-separated string without brackets or quotes."""
    if tags is None or len(tags) == 0:
        return ""
    return ", ".join(tags)


def is_task_closed(task: Task) -> bool:
    return task["status"] in TERMINAL_STATUSES


def colorize(value: str, task: Task, overdue: bool) -> str:
    if is_task_closed(task):
        return f"[{COMPLETED_TASK_COLOR}]{value}[/{COMPLETED_TASK_COLOR}]"
    if overdue:
        return f"[{OVERDUE_COLOR}]{value}[/{OVERDUE_COLOR}]"
    return value
