# SPDX-License-Identifier: MIT

from planboard.model.preferences import GroupKey, SortKey
from planboard.model.task import Priority, TaskStatus
from planboard.service.pipeline import filter_and_sort, organize
from planboard.template.preferences import get_preferences_template


def test_sort_by_priority_then_group_by_due_date(make_task, clock):
    today = clock.today()
    a = make_task(title="A", priority=Priority.HIGH, due=today.add(hours=18))
    b = make_task(title="B", priority=Priority.LOW, due=today.add(days=1, hours=9))
    c = make_task(title="C", priority=Priority.URGENT, due=None)
    preferences = get_preferences_template()
    preferences["sort_key"] = SortKey.PRIORITY
    preferences["group_key"] = GroupKey.DUE_DATE

    assert [task["title"] for task in filter_and_sort([a, b, c], preferences, clock)] == [
        "C",
        "A",
        "B",
    ]
    groups = organize([a, b, c], preferences, clock)
    assert [(group["title"], group["tasks"]) for group in groups] == [
        ("Today", [a]),
        ("Tomorrow", [b]),
        ("Later", [c]),
    ]


def test_organize_is_idempotent(make_task, clock):
    tasks = [
        make_task(title=f"t{index}", priority=priority, status=status)
        for index, (priority, status) in enumerate(
            zip(list(Priority) * 2, list(TaskStatus) + [TaskStatus.PENDING])
        )
    ]
    preferences = get_preferences_template()
    preferences["group_key"] = GroupKey.STATUS
    preferences["show_completed"] = False

    assert organize(tasks, preferences, clock) == organize(tasks, preferences, clock)


def test_organize_only_returns_tasks_from_the_input(make_task, clock):
    tasks = [
        make_task(title="Drink water", tags=["health"]),
        make_task(title="Exercise", description="Drink more water daily"),
        make_task(title="Exercise"),
    ]
    preferences = get_preferences_template()
    preferences["search_text"] = "water"
    preferences["group_key"] = GroupKey.NONE

    groups = organize(tasks, preferences, clock)

    grouped = [task for group in groups for task in group["tasks"]]
    assert [task["title"] for task in grouped] == ["Drink water", "Exercise"]
    assert grouped[1]["description"] == "Drink more water daily"
    assert all(task in tasks for task in grouped)


def test_organize_does_not_mutate_its_input(make_task, clock):
    tasks = [make_task(title="b"), make_task(title="a")]
    before = [dict(task) for task in tasks]
    preferences = get_preferences_template()
    preferences["sort_key"] = SortKey.TITLE

    organize(tasks, preferences, clock)

    assert [dict(task) for task in tasks] == before
