# SPDX-License-Identifier: MIT

import logging
import math
from typing import Optional

import pendulum

from planboard.errors import DependencyError, InvalidTransitionError
from planboard.model.board import COLUMN_STATUS
from planboard.model.entity_id import EntityId
from planboard.model.task import (
    PRIORITY_POINTS,
    STATUS_TRANSITIONS,
    TERMINAL_STATUSES,
    Priority,
    Task,
    TaskStatus,
)
from planboard.query.filter import is_overdue
from planboard.time import Clock

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600


def transition(task: Task, status: TaskStatus, clock: Clock) -> None:
    """Move a task to a new status if the workflow allows it."""
    current = task["status"]
    if status == current:
        return
    if status not in STATUS_TRANSITIONS[current]:
        raise InvalidTransitionError(current, status)
    _apply_status(task, status, clock)


def _apply_status(task: Task, status: TaskStatus, clock: Clock) -> None:
    now = clock.now()
    task["status"] = status
    # an explicit column must always agree with the status
    if task["column"] is not None and COLUMN_STATUS[task["column"]] != status:
        task["column"] = None
    task["status_changed"] = now
    task["updated"] = now


def can_start(task: Task, tasks_by_id: dict[EntityId, Task]) -> bool:
    return all(
        prerequisite_id in tasks_by_id
        and tasks_by_id[prerequisite_id]["status"] == TaskStatus.COMPLETED
        for prerequisite_id in task["prerequisite_ids"]
    )


def start(task: Task, tasks_by_id: dict[EntityId, Task], clock: Clock) -> None:
    if not can_start(task, tasks_by_id):
        raise InvalidTransitionError(
            task["status"], TaskStatus.IN_PROGRESS, "prerequisites are not completed"
        )
    transition(task, TaskStatus.IN_PROGRESS, clock)
    if task["started"] is None:
        task["started"] = clock.now()


def pause(task: Task, clock: Clock) -> None:
    if task["status"] == TaskStatus.IN_PROGRESS:
        transition(task, TaskStatus.PENDING, clock)


def hold(task: Task, clock: Clock) -> None:
    transition(task, TaskStatus.ON_HOLD, clock)


def block(task: Task, clock: Clock) -> None:
    transition(task, TaskStatus.BLOCKED, clock)


def submit_for_review(task: Task, clock: Clock) -> None:
    transition(task, TaskStatus.IN_REVIEW, clock)


def complete(task: Task, clock: Clock) -> None:
    """Finish a task from any open status."""
    if task["status"] == TaskStatus.COMPLETED:
        return
    if task["status"] == TaskStatus.CANCELLED:
        raise InvalidTransitionError(
            task["status"], TaskStatus.COMPLETED, "reopen the task first"
        )
    _apply_status(task, TaskStatus.COMPLETED, clock)
    now = clock.now()
    task["completed"] = now
    if task["started"] is not None:
        task["actual"] = pendulum.duration(
            seconds=(now - task["started"]).total_seconds()
        )


def cancel(task: Task, clock: Clock) -> None:
    transition(task, TaskStatus.CANCELLED, clock)


def reopen(task: Task, clock: Clock) -> None:
    if task["status"] not in TERMINAL_STATUSES:
        raise InvalidTransitionError(
            task["status"], TaskStatus.PENDING, "only completed or cancelled tasks reopen"
        )
    _apply_status(task, TaskStatus.PENDING, clock)
    task["completed"] = None
    task["column"] = None


def toggle_completion(task: Task, clock: Clock) -> None:
    if task["status"] == TaskStatus.COMPLETED:
        reopen(task, clock)
    else:
        complete(task, clock)


def archive(task: Task, clock: Clock) -> None:
    now = clock.now()
    task["archived"] = now
    task["updated"] = now


def set_priority(task: Task, priority: Priority, clock: Clock) -> None:
    task["priority"] = priority
    task["updated"] = clock.now()


def set_due(task: Task, due: Optional[pendulum.DateTime], clock: Clock) -> None:
    task["due"] = due
    task["updated"] = clock.now()


def add_tag(task: Task, tag: str, clock: Clock) -> None:
    clean_tag = tag.strip()
    if clean_tag and clean_tag not in task["tags"]:
        task["tags"].append(clean_tag)
        task["updated"] = clock.now()


def remove_tag(task: Task, tag: str, clock: Clock) -> None:
    if tag in task["tags"]:
        task["tags"] = [existing for existing in task["tags"] if existing != tag]
        task["updated"] = clock.now()


def add_prerequisite(
    task: Task,
    prerequisite_id: EntityId,
    tasks_by_id: dict[EntityId, Task],
    clock: Clock,
) -> None:
    """Make task depend on prerequisite_id, refusing edges that close a cycle."""
    if prerequisite_id == task["id"]:
        raise DependencyError("a task cannot be its own prerequisite")
    if prerequisite_id not in tasks_by_id:
        raise DependencyError(f"unknown prerequisite: {prerequisite_id}")
    if prerequisite_id in task["prerequisite_ids"]:
        return
    if task["id"] is not None and _depends_on(
        prerequisite_id, task["id"], tasks_by_id
    ):
        logger.debug("rejected edge %s -> %s", task["id"], prerequisite_id)
        raise DependencyError(
            f"adding {prerequisite_id} as a prerequisite would create a cycle"
        )
    task["prerequisite_ids"].append(prerequisite_id)
    task["updated"] = clock.now()


def remove_prerequisite(task: Task, prerequisite_id: EntityId, clock: Clock) -> None:
    if prerequisite_id in task["prerequisite_ids"]:
        task["prerequisite_ids"].remove(prerequisite_id)
        task["updated"] = clock.now()


def _depends_on(
    start_id: EntityId, target_id: EntityId, tasks_by_id: dict[EntityId, Task]
) -> bool:
    """Whether target_id is reachable from start_id along prerequisite edges."""
    stack = [start_id]
    seen: set[EntityId] = set()
    while stack:
        current_id = stack.pop()
        if current_id == target_id:
            return True
        if current_id in seen or current_id not in tasks_by_id:
            continue
        seen.add(current_id)
        stack.extend(tasks_by_id[current_id]["prerequisite_ids"])
    return False


def dependents(task: Task, tasks: list[Task]) -> list[Task]:
    return [other for other in tasks if task["id"] in other["prerequisite_ids"]]


def blocked_dependents(task: Task, tasks: list[Task]) -> list[Task]:
    """Tasks waiting on this one that cannot start yet."""
    tasks_by_id = index_tasks(tasks)
    return [
        dependent
        for dependent in dependents(task, tasks)
        if not can_start(dependent, tasks_by_id)
    ]


def subtasks(task: Task, tasks: list[Task]) -> list[Task]:
    return [
        other
        for other in tasks
        if other["parent_id"] == task["id"] and other["archived"] is None
    ]


def progress(task: Task, tasks: list[Task]) -> float:
    children = subtasks(task, tasks)
    if not children:
        return 1.0 if task["status"] == TaskStatus.COMPLETED else 0.0
    completed = [child for child in children if child["status"] == TaskStatus.COMPLETED]
    return len(completed) / len(children)


def story_points(task: Task) -> Optional[int]:
    """One point per started hour of estimate, at least one."""
    if task["estimate"] is None:
        return None
    return max(1, math.ceil(task["estimate"].total_seconds() / SECONDS_PER_HOUR))


def days_until_due(task: Task, clock: Clock) -> Optional[int]:
    if task["due"] is None:
        return None
    return int((task["due"] - clock.now()).total_seconds() // 86400)


def task_points(task: Task, tasks: list[Task], clock: Clock) -> int:
    base_points = PRIORITY_POINTS[task["priority"]]
    if is_overdue(task, clock):
        urgency_bonus = -5
    else:
        remaining_days = days_until_due(task, clock)
        urgency_bonus = 5 if (remaining_days or 0) < 3 else 0
    completion_bonus = 10 if task["status"] == TaskStatus.COMPLETED else 0
    subtask_bonus = 2 * len(
        [
            child
            for child in subtasks(task, tasks)
            if child["status"] == TaskStatus.COMPLETED
        ]
    )
    return max(0, base_points + urgency_bonus + completion_bonus + subtask_bonus)


def index_tasks(tasks: list[Task]) -> dict[EntityId, Task]:
    return {task["id"]: task for task in tasks if task["id"] is not None}
