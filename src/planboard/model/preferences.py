# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import Optional, TypedDict

from planboard.model.entity_id import EntityId
from planboard.model.task import Priority, TaskStatus


class TimeFilter(StrEnum):
    ALL = "all"
    TODAY = "today"
    TOMORROW = "tomorrow"
    THIS_WEEK = "this_week"
    LATER = "later"
    OVERDUE = "overdue"


class SortKey(StrEnum):
    PRIORITY = "priority"
    DUE_DATE = "due_date"
    TITLE = "title"
    CREATED_DATE = "created_date"
    STATUS = "status"


class GroupKey(StrEnum):
    NONE = "none"
    DUE_DATE = "due_date"
    PRIORITY = "priority"
    STATUS = "status"
    CATEGORY = "category"


TIME_FILTER_LABELS: dict[TimeFilter, str] = {
    TimeFilter.ALL: "All",
    TimeFilter.TODAY: "Today",
    TimeFilter.TOMORROW: "Tomorrow",
    TimeFilter.THIS_WEEK: "This Week",
    TimeFilter.LATER: "Later",
    TimeFilter.OVERDUE: "Overdue",
}

SORT_KEY_LABELS: dict[SortKey, str] = {
    SortKey.PRIORITY: "sorted by priority",
    SortKey.DUE_DATE: "sorted by due date",
    SortKey.TITLE: "sorted by title",
    SortKey.CREATED_DATE: "sorted by creation date",
    SortKey.STATUS: "sorted by status",
}

GROUP_KEY_LABELS: dict[GroupKey, str] = {
    GroupKey.NONE: "ungrouped",
    GroupKey.DUE_DATE: "grouped by due date",
    GroupKey.PRIORITY: "grouped by priority",
    GroupKey.STATUS: "grouped by status",
    GroupKey.CATEGORY: "grouped by category",
}


class Preferences(TypedDict):
    search_text: str
    category_id: Optional[EntityId]
    priority: Optional[Priority]
    status: Optional[TaskStatus]
    assignee: Optional[str]
    tags: Optional[set[str]]
    time_filter: TimeFilter
    show_completed: bool
    sort_key: SortKey
    group_key: GroupKey
