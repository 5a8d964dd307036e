# SPDX-License-Identifier: MIT

import locale
import logging
import unicodedata
from typing import Any, Callable, Optional

from planboard import state as app_state
from planboard.errors import UnknownSortKeyError
from planboard.model.preferences import SortKey
from planboard.model.task import PRIORITY_RANK, STATUS_ORDINAL, Task

logger = logging.getLogger(__name__)


def _sort_by_priority(tasks: list[Task]) -> list[Task]:
    return sorted(tasks, key=lambda task: PRIORITY_RANK[task["priority"]], reverse=True)


def _sort_by_due_date(tasks: list[Task]) -> list[Task]:
    # undated tasks always trail the dated ones
    dated = [task for task in tasks if task["due"] is not None]
    undated = [task for task in tasks if task["due"] is None]
    dated.sort(key=lambda task: task["due"])
    return dated + undated


def _title_key(title: str) -> tuple[str, str]:
    folded = title.casefold()
    # accents only break ties between otherwise equal titles
    base = "".join(
        char
        for char in unicodedata.normalize("NFKD", folded)
        if not unicodedata.combining(char)
    )
    return locale.strxfrm(base), locale.strxfrm(folded)


def _sort_by_title(tasks: list[Task]) -> list[Task]:
    return sorted(tasks, key=lambda task: _title_key(task["title"]))


def _sort_by_created_date(tasks: list[Task]) -> list[Task]:
    return sorted(tasks, key=lambda task: task["created"], reverse=True)


def _sort_by_status(tasks: list[Task]) -> list[Task]:
    return sorted(tasks, key=lambda task: STATUS_ORDINAL[task["status"]])


SORT_KEYS: dict[SortKey, Callable[[list[Task]], list[Task]]] = {
    SortKey.PRIORITY: _sort_by_priority,
    SortKey.DUE_DATE: _sort_by_due_date,
    SortKey.TITLE: _sort_by_title,
    SortKey.CREATED_DATE: _sort_by_created_date,
    SortKey.STATUS: _sort_by_status,
}


def sort_tasks(
    tasks: list[Task], sort_key: Any, strict: Optional[bool] = None
) -> list[Task]:
    """Return a new list ordered by the given key.

    Every comparator relies on Python's stable sort, so tasks with equal keys
    keep their incoming order. An unregistered key raises in strict mode and
    otherwise falls back to newest-first creation order.
    """
    if strict is None:
        strict = app_state.get_strict()

    sorter = SORT_KEYS.get(sort_key)
    if sorter is None:
        if strict:
            raise UnknownSortKeyError(sort_key)
        logger.warning("unknown sort key %r, using creation date", sort_key)
        sorter = _sort_by_created_date
    return sorter(list(tasks))
