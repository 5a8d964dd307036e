# SPDX-License-Identifier: MIT

import pendulum

from planboard.model.column import KanbanColumnType
from planboard.model.task import TaskStatus
from planboard.service import metrics
from planboard.service import task as task_service
from planboard.template.board import get_board_template


def done(make_task, clock, started_hours_ago, completed_hours_ago, **fields):
    now = clock.now()
    return make_task(
        status=TaskStatus.COMPLETED,
        started=now.subtract(hours=started_hours_ago),
        completed=now.subtract(hours=completed_hours_ago),
        **fields,
    )


def test_cycle_time_without_samples_is_none(make_task):
    assert metrics.average_cycle_time([]) is None
    assert metrics.average_cycle_time([make_task(status=TaskStatus.PENDING)]) is None
    assert (
        metrics.average_cycle_time(
            [make_task(status=TaskStatus.COMPLETED, started=None)]
        )
        is None
    )


def test_cycle_time_averages_completed_tasks(make_task, clock):
    tasks = [
        done(make_task, clock, started_hours_ago=10, completed_hours_ago=8),
        done(make_task, clock, started_hours_ago=6, completed_hours_ago=2),
        make_task(status=TaskStatus.IN_PROGRESS, started=clock.now()),
    ]

    assert metrics.average_cycle_time(tasks).total_seconds() == 3 * 3600


def test_throughput_counts_the_trailing_week(make_task, clock):
    tasks = [
        done(make_task, clock, 30, 24),
        done(make_task, clock, 24 * 8, 24 * 8),
        make_task(status=TaskStatus.PENDING),
    ]

    assert metrics.throughput(tasks, clock) == 1


def test_column_metrics_report_violations():
    column = {
        "id": "in_progress",
        "column_type": KanbanColumnType.IN_PROGRESS,
        "title": "In Progress",
        "tasks": [{}] * 5,
        "wip_limit": 3,
        "collapsed": False,
    }

    assert metrics.column_metrics(column) == {
        "column_type": KanbanColumnType.IN_PROGRESS,
        "task_count": 5,
        "wip_limit": 3,
        "wip_violations": 2,
    }
    assert metrics.wip_violations({**column, "wip_limit": None}) == 0


def test_velocity_has_eight_weeks_oldest_first(make_task, clock):
    tasks = [
        done(make_task, clock, 3, 2, estimate=pendulum.duration(hours=2)),
        done(make_task, clock, 24 * 9, 24 * 9, estimate=pendulum.duration(minutes=30)),
    ]

    velocity = metrics.velocity(tasks, clock)

    assert len(velocity) == 8
    assert velocity[0]["week"] < velocity[-1]["week"]
    assert velocity[-1]["story_points"] == 2
    assert velocity[-2]["story_points"] == 1
    assert sum(point["story_points"] for point in velocity) == 3


def test_burndown_ideal_line_and_actual_cut_off(make_task, clock):
    board = get_board_template(clock)
    board["start"] = clock.today().subtract(days=2)
    board["target_end"] = clock.today().add(days=2)
    tasks = [
        make_task(estimate=pendulum.duration(hours=3)),
        done(make_task, clock, 5, 1, estimate=pendulum.duration(hours=1)),
    ]

    burndown = metrics.burndown(board, tasks, clock)

    assert len(burndown) == 5
    assert [point["ideal_remaining"] for point in burndown] == [4.0, 3.0, 2.0, 1.0, 0.0]
    assert [point["actual_remaining"] for point in burndown] == [
        3.0,
        3.0,
        3.0,
        None,
        None,
    ]


def test_burndown_on_a_single_day_board(clock):
    board = get_board_template(clock)
    board["start"] = clock.now()
    board["target_end"] = clock.now()

    burndown = metrics.burndown(board, [], clock)

    assert len(burndown) == 1
    assert burndown[0]["ideal_remaining"] == 0.0


def test_board_metrics_on_an_empty_board(clock):
    summary = metrics.board_metrics([], clock)

    assert summary["total_tasks"] == 0
    assert summary["completion_rate"] == 0.0
    assert summary["average_cycle_time"] is None


def test_board_metrics_summary(make_task, clock):
    tasks = [
        done(make_task, clock, 4, 2),
        make_task(status=TaskStatus.IN_PROGRESS),
        make_task(status=TaskStatus.BLOCKED),
        make_task(status=TaskStatus.PENDING),
    ]

    summary = metrics.board_metrics(tasks, clock)

    assert summary["total_tasks"] == 4
    assert summary["completed_tasks"] == 1
    assert summary["in_progress_tasks"] == 1
    assert summary["blocked_tasks"] == 1
    assert summary["completion_rate"] == 0.25
    assert summary["throughput"] == 1


def test_velocity_counts_a_task_finished_this_instant(make_task, clock):
    task = make_task(estimate=pendulum.duration(hours=2))
    task_service.start(task, {}, clock)
    clock.advance(hours=1)
    task_service.complete(task, clock)

    velocity = metrics.velocity([task], clock)

    assert velocity[-1]["story_points"] == 2
    assert metrics.throughput([task], clock) == 1
