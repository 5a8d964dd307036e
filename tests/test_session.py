# SPDX-License-Identifier: MIT

import pytest

from planboard.errors import DataSourceError
from planboard.model.preferences import GroupKey, SortKey
from planboard.model.task import Priority
from planboard.service.session import ActionType, Session, initial_state, reduce


def test_reduce_returns_a_new_snapshot(make_task, clock):
    state = initial_state()
    tasks = [make_task(title="a")]

    loaded = reduce(state, {"type": ActionType.LOAD_TASKS, "value": tasks}, clock)
    filtered = reduce(
        loaded, {"type": ActionType.SET_SEARCH_TEXT, "value": "zzz"}, clock
    )

    assert state["tasks"] == []
    assert loaded["preferences"]["search_text"] == ""
    assert filtered["preferences"]["search_text"] == "zzz"
    assert [group["title"] for group in loaded["groups"]] == ["Later"]
    assert filtered["groups"] == []


def test_preference_actions_regroup(make_task, clock):
    state = reduce(
        initial_state(),
        {
            "type": ActionType.LOAD_TASKS,
            "value": [
                make_task(title="a", priority=Priority.LOW),
                make_task(title="b", priority=Priority.URGENT),
            ],
        },
        clock,
    )

    state = reduce(state, {"type": ActionType.SET_GROUP, "value": GroupKey.PRIORITY}, clock)
    assert [group["title"] for group in state["groups"]] == ["Urgent", "Low"]

    state = reduce(state, {"type": ActionType.SET_SORT, "value": SortKey.TITLE}, clock)
    state = reduce(state, {"type": ActionType.SET_GROUP, "value": GroupKey.NONE}, clock)
    assert [task["title"] for task in state["groups"][0]["tasks"]] == ["a", "b"]


def test_clear_filters_keeps_sort_and_group(make_task, clock):
    state = initial_state()
    for action in (
        {"type": ActionType.SET_SEARCH_TEXT, "value": "x"},
        {"type": ActionType.SET_PRIORITY, "value": Priority.HIGH},
        {"type": ActionType.SET_TAGS, "value": {"a"}},
        {"type": ActionType.SET_SORT, "value": SortKey.TITLE},
    ):
        state = reduce(state, action, clock)

    state = reduce(state, {"type": ActionType.CLEAR_FILTERS}, clock)

    assert state["preferences"]["search_text"] == ""
    assert state["preferences"]["priority"] is None
    assert state["preferences"]["tags"] is None
    assert state["preferences"]["sort_key"] == SortKey.TITLE


def test_session_notifies_subscribers_until_unsubscribed(make_task, clock):
    session = Session(clock)
    seen = []
    unsubscribe = session.subscribe(lambda state: seen.append(len(state["tasks"])))

    session.dispatch({"type": ActionType.LOAD_TASKS, "value": [make_task()]})
    unsubscribe()
    session.dispatch({"type": ActionType.LOAD_TASKS, "value": []})

    assert seen == [1]
    assert session.state["tasks"] == []


def test_failed_load_records_the_error_and_empties_tasks(make_task, clock):
    session = Session(clock)
    session.load(lambda: [make_task()])

    def broken_fetch():
        raise DataSourceError("disk on fire")

    state = session.load(broken_fetch)

    assert state["tasks"] == []
    assert state["groups"] == []
    assert state["error"] == "disk on fire"

    state = session.load(lambda: [make_task()])
    assert state["error"] is None


def test_unknown_action_is_rejected(clock):
    with pytest.raises(ValueError):
        reduce(initial_state(), {"type": "explode"}, clock)
