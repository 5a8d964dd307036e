# SPDX-License-Identifier: MIT


class PlanboardError(Exception):
    """Base class for errors raised by planboard."""


class DataSourceError(PlanboardError):
    """Stored data could not be read or parsed."""


class TaskNotFoundError(PlanboardError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"task not found: {task_id}")
        self.task_id = task_id


class InvalidTransitionError(PlanboardError):
    def __init__(self, current: str, requested: str, reason: str = "") -> None:
        message = f"cannot move task from {current} to {requested}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.current = current
        self.requested = requested


class DependencyError(PlanboardError):
    """A prerequisite edge would be a self loop, a cycle, or dangle."""


class UnknownSortKeyError(PlanboardError):
    def __init__(self, sort_key: object) -> None:
        super().__init__(f"no comparator registered for sort key {sort_key!r}")
        self.sort_key = sort_key


class ColumnError(PlanboardError):
    """A custom column is unknown or clashes with an existing one."""
