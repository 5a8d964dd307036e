# SPDX-License-Identifier: MIT

from typing import Callable, Optional

from planboard.model.entity_id import EntityId
from planboard.model.group import TaskGroup
from planboard.model.preferences import GroupKey, TimeFilter
from planboard.model.task import (
    PRIORITY_LABELS,
    STATUS_LABELS,
    Priority,
    Task,
    TaskStatus,
)
from planboard.query.filter import DueWithin, is_overdue
from planboard.time import Clock

ALL_TASKS_TITLE = "All Tasks"
UNCATEGORIZED_TITLE = "Uncategorized"

DUE_DATE_BUCKETS: tuple[tuple[str, TimeFilter], ...] = (
    ("Overdue", TimeFilter.OVERDUE),
    ("Today", TimeFilter.TODAY),
    ("Tomorrow", TimeFilter.TOMORROW),
    ("This Week", TimeFilter.THIS_WEEK),
    ("Later", TimeFilter.LATER),
)

PRIORITY_BUCKETS: tuple[Priority, ...] = (
    Priority.URGENT,
    Priority.HIGH,
    Priority.MEDIUM,
    Priority.LOW,
)

STATUS_BUCKETS: tuple[TaskStatus, ...] = (
    TaskStatus.PENDING,
    TaskStatus.IN_PROGRESS,
    TaskStatus.IN_REVIEW,
    TaskStatus.BLOCKED,
    TaskStatus.ON_HOLD,
    TaskStatus.COMPLETED,
)


def group_tasks(
    tasks: list[Task],
    group_key: GroupKey,
    clock: Clock,
    categories: Optional[dict[EntityId, str]] = None,
    include_cancelled: bool = False,
) -> list[TaskGroup]:
    """Partition already filtered and sorted tasks into titled groups.

    Tasks keep their incoming order inside each group and empty groups are
    never returned.
    """
    match group_key:
        case GroupKey.NONE:
            return _non_empty([TaskGroup(title=ALL_TASKS_TITLE, tasks=list(tasks))])
        case GroupKey.DUE_DATE:
            return group_by_due_date(tasks, clock)
        case GroupKey.PRIORITY:
            return _bucket(
                tasks,
                [
                    (PRIORITY_LABELS[priority], _priority_is(priority))
                    for priority in PRIORITY_BUCKETS
                ],
            )
        case GroupKey.STATUS:
            statuses = STATUS_BUCKETS
            if include_cancelled:
                statuses = statuses + (TaskStatus.CANCELLED,)
            return _bucket(
                tasks,
                [(STATUS_LABELS[status], _status_is(status)) for status in statuses],
            )
        case GroupKey.CATEGORY:
            return group_by_category(tasks, categories or {})
    raise ValueError(f"unknown group key: {group_key!r}")


def group_by_due_date(tasks: list[Task], clock: Clock) -> list[TaskGroup]:
    groups: dict[str, list[Task]] = {title: [] for title, _ in DUE_DATE_BUCKETS}
    predicates = [
        (title, DueWithin(time_filter, clock))
        for title, time_filter in DUE_DATE_BUCKETS[1:-1]
    ]
    overdue_title = DUE_DATE_BUCKETS[0][0]
    later_title = DUE_DATE_BUCKETS[-1][0]
    for task in tasks:
        if is_overdue(task, clock):
            groups[overdue_title].append(task)
            continue
        for title, predicate in predicates:
            if predicate.include(task):
                groups[title].append(task)
                break
        else:
            # undated, a week or more out, or finished past its due date
            groups[later_title].append(task)
    return _non_empty(
        [TaskGroup(title=title, tasks=group) for title, group in groups.items()]
    )


def group_by_category(
    tasks: list[Task], categories: dict[EntityId, str]
) -> list[TaskGroup]:
    groups: dict[str, list[Task]] = {}
    for task in tasks:
        title = UNCATEGORIZED_TITLE
        if task["category_id"] is not None:
            title = categories.get(task["category_id"], UNCATEGORIZED_TITLE)
        groups.setdefault(title, []).append(task)
    return [
        TaskGroup(title=title, tasks=groups[title])
        for title in sorted(groups, key=str.casefold)
    ]


def _bucket(
    tasks: list[Task], buckets: list[tuple[str, Callable[[Task], bool]]]
) -> list[TaskGroup]:
    return _non_empty(
        [
            TaskGroup(title=title, tasks=[task for task in tasks if predicate(task)])
            for title, predicate in buckets
        ]
    )


def _priority_is(priority: Priority) -> Callable[[Task], bool]:
    return lambda task: task["priority"] == priority


def _status_is(status: TaskStatus) -> Callable[[Task], bool]:
    return lambda task: task["status"] == status


def _non_empty(groups: list[TaskGroup]) -> list[TaskGroup]:
    return [group for group in groups if group["tasks"]]
