# SPDX-License-Identifier: MIT

from typing import Optional

from planboard.model.entity_id import EntityId
from planboard.model.group import TaskGroup
from planboard.model.preferences import Preferences
from planboard.model.task import Task
from planboard.query.filter import filter_tasks
from planboard.query.group import group_tasks
from planboard.query.sort import sort_tasks
from planboard.time import Clock


def organize(
    tasks: list[Task],
    preferences: Preferences,
    clock: Clock,
    categories: Optional[dict[EntityId, str]] = None,
    strict: Optional[bool] = None,
    include_cancelled: bool = False,
) -> list[TaskGroup]:
    """Filter, sort and group a task snapshot for display.

    Pure over its inputs: the same snapshot, preferences and clock always
    give the same groups.
    """
    filtered = filter_tasks(tasks, preferences, clock)
    ordered = sort_tasks(filtered, preferences["sort_key"], strict=strict)
    return group_tasks(
        ordered,
        preferences["group_key"],
        clock,
        categories=categories,
        include_cancelled=include_cancelled,
    )


def filter_and_sort(
    tasks: list[Task],
    preferences: Preferences,
    clock: Clock,
    strict: Optional[bool] = None,
) -> list[Task]:
    return sort_tasks(
        filter_tasks(tasks, preferences, clock), preferences["sort_key"], strict=strict
    )
