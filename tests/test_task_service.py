# SPDX-License-Identifier: MIT

import pendulum
import pytest

from planboard.errors import DependencyError, InvalidTransitionError
from planboard.model.task import Priority, TaskStatus
from planboard.service import task as task_service


def test_start_sets_started_once(make_task, clock):
    task = make_task()

    task_service.start(task, {}, clock)
    started = task["started"]
    task_service.pause(task, clock)
    clock.advance(hours=1)
    task_service.start(task, {}, clock)

    assert task["status"] == TaskStatus.IN_PROGRESS
    assert task["started"] == started
    assert task["status_changed"] == clock.now()


def test_start_waits_for_prerequisites(make_task, clock):
    prerequisite = make_task(title="design")
    task = make_task(title="build", prerequisite_ids=[prerequisite["id"]])
    tasks_by_id = task_service.index_tasks([prerequisite, task])

    with pytest.raises(InvalidTransitionError):
        task_service.start(task, tasks_by_id, clock)

    task_service.complete(prerequisite, clock)
    task_service.start(task, tasks_by_id, clock)
    assert task["status"] == TaskStatus.IN_PROGRESS


def test_pause_only_affects_running_tasks(make_task, clock):
    task = make_task(status=TaskStatus.ON_HOLD)

    task_service.pause(task, clock)

    assert task["status"] == TaskStatus.ON_HOLD


def test_transitions_outside_the_table_are_rejected(make_task, clock):
    task = make_task(status=TaskStatus.COMPLETED)

    with pytest.raises(InvalidTransitionError):
        task_service.block(task, clock)
    with pytest.raises(InvalidTransitionError):
        task_service.submit_for_review(make_task(status=TaskStatus.PENDING), clock)


def test_complete_records_actual_time(make_task, clock):
    task = make_task()
    task_service.start(task, {}, clock)
    clock.advance(minutes=90)

    task_service.complete(task, clock)

    assert task["status"] == TaskStatus.COMPLETED
    assert task["completed"] == clock.now()
    assert task["actual"] == pendulum.duration(minutes=90)


def test_complete_from_pending_and_refuse_cancelled(make_task, clock):
    pending = make_task()
    task_service.complete(pending, clock)
    assert pending["status"] == TaskStatus.COMPLETED
    assert pending["actual"] is None

    cancelled = make_task(status=TaskStatus.CANCELLED)
    with pytest.raises(InvalidTransitionError):
        task_service.complete(cancelled, clock)


def test_reopen_clears_completion(make_task, clock):
    task = make_task()
    task_service.complete(task, clock)

    task_service.reopen(task, clock)

    assert task["status"] == TaskStatus.PENDING
    assert task["completed"] is None
    with pytest.raises(InvalidTransitionError):
        task_service.reopen(task, clock)


def test_cancelled_task_needs_reopen_before_starting(make_task, clock):
    task = make_task(status=TaskStatus.CANCELLED)

    with pytest.raises(InvalidTransitionError):
        task_service.start(task, {}, clock)
    assert task["status"] == TaskStatus.CANCELLED
    assert task["started"] is None

    task_service.reopen(task, clock)
    task_service.start(task, {}, clock)
    assert task["status"] == TaskStatus.IN_PROGRESS


def test_toggle_completion_flips_between_pending_and_completed(make_task, clock):
    task = make_task()

    task_service.toggle_completion(task, clock)
    assert task["status"] == TaskStatus.COMPLETED
    task_service.toggle_completion(task, clock)
    assert task["status"] == TaskStatus.PENDING


def test_tags_are_trimmed_and_deduplicated(make_task, clock):
    task = make_task(tags=["home"])

    task_service.add_tag(task, " home ", clock)
    task_service.add_tag(task, "errand", clock)
    task_service.add_tag(task, "   ", clock)
    task_service.remove_tag(task, "home", clock)

    assert task["tags"] == ["errand"]


def test_prerequisites_reject_self_unknown_and_cycles(make_task, clock):
    a = make_task(title="a")
    b = make_task(title="b")
    c = make_task(title="c")
    tasks_by_id = task_service.index_tasks([a, b, c])

    task_service.add_prerequisite(b, a["id"], tasks_by_id, clock)
    task_service.add_prerequisite(c, b["id"], tasks_by_id, clock)

    with pytest.raises(DependencyError):
        task_service.add_prerequisite(a, a["id"], tasks_by_id, clock)
    with pytest.raises(DependencyError):
        task_service.add_prerequisite(a, "missing", tasks_by_id, clock)
    with pytest.raises(DependencyError):
        task_service.add_prerequisite(a, c["id"], tasks_by_id, clock)
    assert a["prerequisite_ids"] == []

    task_service.remove_prerequisite(c, b["id"], clock)
    task_service.add_prerequisite(a, c["id"], tasks_by_id, clock)
    assert a["prerequisite_ids"] == [c["id"]]


def test_blocked_dependents(make_task, clock):
    a = make_task(title="a")
    b = make_task(title="b", prerequisite_ids=[a["id"]])
    tasks = [a, b]

    assert task_service.blocked_dependents(a, tasks) == [b]
    task_service.complete(a, clock)
    assert task_service.blocked_dependents(a, tasks) == []


def test_story_points_round_up_started_hours(make_task):
    assert task_service.story_points(make_task(estimate=None)) is None
    assert task_service.story_points(make_task(estimate=pendulum.duration(minutes=10))) == 1
    assert task_service.story_points(make_task(estimate=pendulum.duration(hours=2))) == 2
    assert (
        task_service.story_points(make_task(estimate=pendulum.duration(hours=2, minutes=1)))
        == 3
    )


def test_progress_follows_subtasks(make_task, clock):
    parent = make_task(title="parent")
    children = [make_task(parent_id=parent["id"]) for _ in range(4)]
    task_service.complete(children[0], clock)

    assert task_service.progress(parent, [parent] + children) == 0.25
    assert task_service.progress(make_task(), []) == 0.0


def test_task_points(make_task, clock):
    urgent_soon = make_task(priority=Priority.URGENT, due=clock.now().add(days=1))
    low_overdue = make_task(priority=Priority.LOW, due=clock.now().subtract(days=1))
    done = make_task(priority=Priority.MEDIUM, status=TaskStatus.COMPLETED)

    assert task_service.task_points(urgent_soon, [], clock) == 25
    assert task_service.task_points(low_overdue, [], clock) == 0
    assert task_service.task_points(done, [], clock) == 25
