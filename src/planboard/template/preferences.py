# SPDX-License-Identifier: MIT

from planboard.model.preferences import GroupKey, Preferences, SortKey, TimeFilter


def get_preferences_template() -> Preferences:
    return {
        "search_text": "",
        "category_id": None,
        "priority": None,
        "status": None,
        "assignee": None,
        "tags": None,
        "time_filter": TimeFilter.ALL,
        "show_completed": True,
        "sort_key": SortKey.PRIORITY,
        "group_key": GroupKey.DUE_DATE,
    }
