# SPDX-License-Identifier: MIT

from planboard.model.entity_type import EntityType
from planboard.model.task import Priority, Task, TaskStatus
from planboard.time import Clock, SystemClock


def get_task_template(clock: Clock = SystemClock()) -> Task:
    now = clock.now()
    return {
        "id": None,
        "entity_type": EntityType.TASK,
        "title": "",
        "description": None,
        "priority": Priority.MEDIUM,
        "status": TaskStatus.PENDING,
        "column": None,
        "project": None,
        "category_id": None,
        "tags": [],
        "assignee": None,
        "estimate": None,
        "actual": None,
        "due": None,
        "created": now,
        "updated": now,
        "started": None,
        "completed": None,
        "status_changed": None,
        "archived": None,
        "parent_id": None,
        "prerequisite_ids": [],
    }
