# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from planboard import configuration, time
from planboard.errors import DataSourceError, TaskNotFoundError
from planboard.model.column import KanbanColumnType
from planboard.model.entity_id import EntityId, generate_entity_id
from planboard.model.task import Priority, Task, TaskStatus

logger = logging.getLogger(__name__)


class TaskRepository:
    def __init__(self) -> None:
        self._tasks: Optional[list[Task]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def tasks(self) -> list[Task]:
        if self._tasks is None:
            self.__load_data()
        if self._tasks is None:
            raise ValueError()
        return self._tasks

    def __load_data(self) -> None:
        tasks: list[Task] = []
        try:
            for file_path in sorted(configuration.DATA_TASKS_DIR.iterdir()):
                if file_path.suffix != ".yaml":
                    continue
                raw_task = load(file_path.read_text(), Loader=Loader)
                if raw_task is not None:
                    tasks.append(self.__convert_task_for_deserialization(raw_task))
        except (OSError, YAMLError, KeyError, ValueError) as e:
            raise DataSourceError(
                f"could not load tasks from {configuration.DATA_TASKS_DIR}: {e}"
            ) from e
        logger.debug("loaded %d tasks", len(tasks))
        self._tasks = tasks

    def __save_data(self) -> None:
        # Write dirty entities
        for task in self.tasks:
            if task["id"] in self._dirty_ids:
                serializable_task = self.__convert_task_for_serialization(
                    deepcopy(task)
                )
                file_path = configuration.DATA_TASKS_DIR / f"{task['id']}.yaml"
                file_path.write_text(dump(serializable_task, Dumper=Dumper))

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = configuration.DATA_TASKS_DIR / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        logger.debug(
            "flushed %d tasks, removed %d", len(self._dirty_ids), len(self._deleted_ids)
        )
        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._tasks is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_task_for_serialization(self, task: Task) -> dict[str, Any]:
        serializable_task = cast(dict[str, Any], task)
        serializable_task["priority"] = str(task["priority"])
        serializable_task["status"] = str(task["status"])
        serializable_task["column"] = (
            str(task["column"]) if task["column"] is not None else None
        )
        serializable_task["tags"] = list(task["tags"])
        serializable_task["prerequisite_ids"] = list(task["prerequisite_ids"])
        for key in ("estimate", "actual"):
            serializable_task[key] = time.duration_to_str_optional(
                serializable_task[key]
            )
        serializable_task["created"] = time.datetime_to_iso_str(
            serializable_task["created"]
        )
        serializable_task["updated"] = time.datetime_to_iso_str(
            serializable_task["updated"]
        )
        for key in ("due", "started", "completed", "status_changed", "archived"):
            serializable_task[key] = time.datetime_to_iso_str_optional(
                serializable_task[key]
            )
        return serializable_task

    def __convert_task_for_deserialization(self, task: dict[str, Any]) -> Task:
        deserializable_task = task
        deserializable_task["priority"] = Priority(deserializable_task["priority"])
        deserializable_task["status"] = TaskStatus(deserializable_task["status"])
        column = deserializable_task.get("column")
        deserializable_task["column"] = (
            KanbanColumnType(column) if column is not None else None
        )
        deserializable_task["tags"] = list(deserializable_task.get("tags") or [])
        deserializable_task["prerequisite_ids"] = list(
            deserializable_task.get("prerequisite_ids") or []
        )
        for key in ("estimate", "actual"):
            deserializable_task[key] = time.duration_from_str_optional(
                deserializable_task.get(key)
            )
        deserializable_task["created"] = time.datetime_from_str(
            deserializable_task["created"]
        )
        deserializable_task["updated"] = time.datetime_from_str(
            deserializable_task["updated"]
        )
        for key in ("due", "started", "completed", "status_changed", "archived"):
            deserializable_task[key] = time.datetime_from_str_optional(
                deserializable_task.get(key)
            )
        return cast(Task, deserializable_task)

    def save_new_task(self, task: Task) -> EntityId:
        self.is_dirty = True

        task["id"] = generate_entity_id()

        # Deduplicate tags
        task["tags"] = list(dict.fromkeys(task["tags"]))

        self.tasks.append(deepcopy(task))
        self._dirty_ids.add(task["id"])

        return task["id"]

    def update_task(self, task: Task) -> None:
        """Replace the stored copy of a task with the given one."""
        if task["id"] is None:
            raise ValueError("task has no id")
        index = self.__index_of(task["id"])
        self.is_dirty = True
        self._dirty_ids.add(task["id"])
        self.tasks[index] = deepcopy(task)

    def update_tasks(self, tasks: list[Task]) -> None:
        for task in tasks:
            self.update_task(task)

    def delete_task(self, id: EntityId) -> None:
        index = self.__index_of(id)
        self.is_dirty = True
        del self.tasks[index]
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

    def get_all_tasks(self, include_archived: bool = False) -> list[Task]:
        return deepcopy(
            [
                task
                for task in self.tasks
                if include_archived or task["archived"] is None
            ]
        )

    def get_task(self, id: EntityId) -> Task:
        return deepcopy(self.tasks[self.__index_of(id)])

    def reset(self) -> None:
        self._tasks = None
        self.is_dirty = False
        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def __index_of(self, id: EntityId) -> int:
        for index, task in enumerate(self.tasks):
            if task["id"] == id:
                return index
        raise TaskNotFoundError(id)


TASK_REPO = TaskRepository()
