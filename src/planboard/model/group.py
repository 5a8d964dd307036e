# SPDX-License-Identifier: MIT

from typing import TypedDict

from planboard.model.task import Task


class TaskGroup(TypedDict):
    title: str
    tasks: list[Task]
