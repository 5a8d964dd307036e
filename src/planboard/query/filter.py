# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from typing import Optional

import pendulum

from planboard.model.entity_id import EntityId
from planboard.model.preferences import Preferences, TimeFilter
from planboard.model.task import TERMINAL_STATUSES, Priority, Task, TaskStatus
from planboard.time import Clock


def generate_filter(preferences: Preferences, clock: Clock) -> "And":
    """Build the conjunction of every active filter in the preferences.

    Filters left unset are simply not added, so an empty preference set
    produces a predicate that accepts every task.
    """
    predicate = And()
    if preferences["search_text"]:
        predicate.add_predicate(SearchText(preferences["search_text"]))
    if preferences["category_id"] is not None:
        predicate.add_predicate(CategoryIs(preferences["category_id"]))
    if preferences["priority"] is not None:
        predicate.add_predicate(PriorityIs(preferences["priority"]))
    if preferences["status"] is not None:
        predicate.add_predicate(StatusIs(preferences["status"]))
    if preferences["assignee"] is not None:
        predicate.add_predicate(AssigneeIs(preferences["assignee"]))
    if preferences["tags"]:
        predicate.add_predicate(TagsIntersect(preferences["tags"]))
    if preferences["time_filter"] != TimeFilter.ALL:
        predicate.add_predicate(DueWithin(preferences["time_filter"], clock))
    if not preferences["show_completed"]:
        predicate.add_predicate(HideTerminal())
    return predicate


def filter_tasks(
    tasks: list[Task], preferences: Preferences, clock: Clock
) -> list[Task]:
    return generate_filter(preferences, clock).filter(tasks)


def is_overdue(task: Task, clock: Clock) -> bool:
    if task["due"] is None or task["status"] == TaskStatus.COMPLETED:
        return False
    return clock.now() > task["due"]


class Predicate(ABC):
    @abstractmethod
    def include(self, task: Task) -> bool: ...

    def filter(self, tasks: list[Task]) -> list[Task]:
        return [task for task in tasks if self.include(task)]


class And(Predicate):
    def __init__(self) -> None:
        self.predicates: list[Predicate] = []

    def add_predicate(self, predicate: Predicate) -> None:
        self.predicates.append(predicate)

    def include(self, task: Task) -> bool:
        return all(predicate.include(task) for predicate in self.predicates)


class SearchText(Predicate):
    def __init__(self, text: str) -> None:
        self.text = text.casefold()

    def include(self, task: Task) -> bool:
        if self.text in task["title"].casefold():
            return True
        if task["description"] is not None and self.text in task["description"].casefold():
            return True
        return any(self.text in tag.casefold() for tag in task["tags"])


class CategoryIs(Predicate):
    def __init__(self, category_id: EntityId) -> None:
        self.category_id = category_id

    def include(self, task: Task) -> bool:
        return task["category_id"] == self.category_id


class PriorityIs(Predicate):
    def __init__(self, priority: Priority) -> None:
        self.priority = priority

    def include(self, task: Task) -> bool:
        return task["priority"] == self.priority


class StatusIs(Predicate):
    def __init__(self, status: TaskStatus) -> None:
        self.status = status

    def include(self, task: Task) -> bool:
        return task["status"] == self.status


class AssigneeIs(Predicate):
    def __init__(self, assignee: str) -> None:
        self.assignee = assignee

    def include(self, task: Task) -> bool:
        return task["assignee"] == self.assignee


class TagsIntersect(Predicate):
    def __init__(self, tags: set[str]) -> None:
        self.tags = set(tags)

    def include(self, task: Task) -> bool:
        return not self.tags.isdisjoint(task["tags"])


class HideTerminal(Predicate):
    def include(self, task: Task) -> bool:
        return task["status"] not in TERMINAL_STATUSES


class DueWithin(Predicate):
    def __init__(self, time_filter: TimeFilter, clock: Clock) -> None:
        self.time_filter = time_filter
        self.clock = clock
        self.today = clock.today()
        self.tomorrow = self.today.add(days=1)
        self.day_after_tomorrow = self.today.add(days=2)
        self.week_from_today = self.today.add(weeks=1)

    def include(self, task: Task) -> bool:
        due: Optional[pendulum.DateTime] = task["due"]
        match self.time_filter:
            case TimeFilter.ALL:
                return True
            case TimeFilter.OVERDUE:
                return is_overdue(task, self.clock)
            case TimeFilter.LATER:
                return due is None or due >= self.week_from_today
        if due is None:
            return False
        match self.time_filter:
            case TimeFilter.TODAY:
                return self.today <= due < self.tomorrow
            case TimeFilter.TOMORROW:
                return self.tomorrow <= due < self.day_after_tomorrow
            case TimeFilter.THIS_WEEK:
                return self.day_after_tomorrow <= due < self.week_from_today
        return False
