# SPDX-License-Identifier: MIT

import logging
from copy import copy
from enum import StrEnum
from typing import Any, Callable, NotRequired, Optional, TypeAlias, TypedDict

from planboard.errors import DataSourceError
from planboard.model.entity_id import EntityId
from planboard.model.group import TaskGroup
from planboard.model.preferences import Preferences
from planboard.model.task import Task
from planboard.service.pipeline import organize
from planboard.template.preferences import get_preferences_template
from planboard.time import Clock

logger = logging.getLogger(__name__)


class ActionType(StrEnum):
    LOAD_TASKS = "load_tasks"
    LOAD_FAILED = "load_failed"
    SET_SEARCH_TEXT = "set_search_text"
    SET_CATEGORY = "set_category"
    SET_PRIORITY = "set_priority"
    SET_STATUS = "set_status"
    SET_ASSIGNEE = "set_assignee"
    SET_TAGS = "set_tags"
    SET_TIME_FILTER = "set_time_filter"
    SET_SHOW_COMPLETED = "set_show_completed"
    SET_SORT = "set_sort"
    SET_GROUP = "set_group"
    CLEAR_FILTERS = "clear_filters"


# Actions that write a single preference key
PREFERENCE_ACTIONS: dict[ActionType, str] = {
    ActionType.SET_SEARCH_TEXT: "search_text",
    ActionType.SET_CATEGORY: "category_id",
    ActionType.SET_PRIORITY: "priority",
    ActionType.SET_STATUS: "status",
    ActionType.SET_ASSIGNEE: "assignee",
    ActionType.SET_TAGS: "tags",
    ActionType.SET_TIME_FILTER: "time_filter",
    ActionType.SET_SHOW_COMPLETED: "show_completed",
    ActionType.SET_SORT: "sort_key",
    ActionType.SET_GROUP: "group_key",
}

FILTER_KEYS = (
    "search_text",
    "category_id",
    "priority",
    "status",
    "assignee",
    "tags",
    "time_filter",
)


class Action(TypedDict):
    type: ActionType
    value: NotRequired[Any]


class SessionState(TypedDict):
    tasks: list[Task]
    preferences: Preferences
    categories: dict[EntityId, str]
    groups: list[TaskGroup]
    error: Optional[str]


Listener: TypeAlias = Callable[[SessionState], None]


def initial_state(
    preferences: Optional[Preferences] = None,
    categories: Optional[dict[EntityId, str]] = None,
) -> SessionState:
    return {
        "tasks": [],
        "preferences": preferences or get_preferences_template(),
        "categories": categories or {},
        "groups": [],
        "error": None,
    }


def reduce(
    state: SessionState,
    action: Action,
    clock: Clock,
    include_cancelled: bool = False,
) -> SessionState:
    """Return the next snapshot; the given one is left untouched."""
    tasks = state["tasks"]
    preferences = copy(state["preferences"])
    error = state["error"]

    match action["type"]:
        case ActionType.LOAD_TASKS:
            tasks = list(action["value"])
            error = None
        case ActionType.LOAD_FAILED:
            tasks = []
            error = str(action["value"])
        case ActionType.CLEAR_FILTERS:
            defaults = get_preferences_template()
            for key in FILTER_KEYS:
                preferences[key] = defaults[key]  # type: ignore[literal-required]
        case action_type if action_type in PREFERENCE_ACTIONS:
            preferences[PREFERENCE_ACTIONS[action_type]] = action["value"]  # type: ignore[literal-required]
        case _:
            raise ValueError(f"unknown action: {action['type']!r}")

    return {
        "tasks": tasks,
        "preferences": preferences,
        "categories": state["categories"],
        "groups": organize(
            tasks,
            preferences,
            clock,
            categories=state["categories"],
            include_cancelled=include_cancelled,
        ),
        "error": error,
    }


class Session:
    """Holds the current snapshot and tells subscribers about each new one."""

    def __init__(
        self,
        clock: Clock,
        state: Optional[SessionState] = None,
        include_cancelled: bool = False,
    ) -> None:
        self.clock = clock
        self.include_cancelled = include_cancelled
        self._state = state or initial_state()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> SessionState:
        self._state = reduce(
            self._state, action, self.clock, include_cancelled=self.include_cancelled
        )
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def load(self, fetch: Callable[[], list[Task]]) -> SessionState:
        """Run a fetch and record its outcome; a failed fetch leaves no tasks."""
        try:
            tasks = fetch()
        except DataSourceError as e:
            logger.warning("task fetch failed: %s", e)
            return self.dispatch({"type": ActionType.LOAD_FAILED, "value": e})
        return self.dispatch({"type": ActionType.LOAD_TASKS, "value": tasks})
