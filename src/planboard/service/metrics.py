# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from planboard.model.board import Board, KanbanColumn
from planboard.model.metrics import (
    BoardMetrics,
    BurndownPoint,
    ColumnMetrics,
    VelocityPoint,
)
from planboard.model.task import Task, TaskStatus
from planboard.service.task import story_points
from planboard.time import Clock

THROUGHPUT_WINDOW_DAYS = 7
VELOCITY_WEEKS = 8


def average_cycle_time(tasks: list[Task]) -> Optional[pendulum.Duration]:
    """Mean start-to-completion time of completed tasks.

    Tasks missing either timestamp are left out of the average rather than
    counted as zero; with no usable samples the result is None.
    """
    samples = [
        (task["completed"] - task["started"]).total_seconds()
        for task in tasks
        if task["status"] == TaskStatus.COMPLETED
        and task["started"] is not None
        and task["completed"] is not None
    ]
    if not samples:
        return None
    return pendulum.duration(seconds=sum(samples) / len(samples))


def throughput(tasks: list[Task], clock: Clock) -> int:
    window_start = clock.now().subtract(days=THROUGHPUT_WINDOW_DAYS)
    return len(
        [
            task
            for task in tasks
            if task["completed"] is not None and task["completed"] >= window_start
        ]
    )


def wip_violations(column: KanbanColumn) -> int:
    if column["wip_limit"] is None:
        return 0
    return max(0, len(column["tasks"]) - column["wip_limit"])


def column_metrics(column: KanbanColumn) -> ColumnMetrics:
    return {
        "column_type": column["column_type"],
        "task_count": len(column["tasks"]),
        "wip_limit": column["wip_limit"],
        "wip_violations": wip_violations(column),
    }


def velocity(tasks: list[Task], clock: Clock) -> list[VelocityPoint]:
    """Story points completed per trailing week, oldest week first."""
    end = clock.now()
    points: list[VelocityPoint] = []
    for week_offset in range(VELOCITY_WEEKS):
        week_start = end.subtract(weeks=week_offset + 1)
        week_end = end.subtract(weeks=week_offset)
        week_points = sum(
            story_points(task) or 0
            for task in tasks
            if task["completed"] is not None
            and week_start < task["completed"] <= week_end
        )
        points.append({"week": week_start, "story_points": week_points})
    points.reverse()
    return points


def remaining_story_points(tasks: list[Task]) -> int:
    return sum(
        story_points(task) or 0
        for task in tasks
        if task["status"] != TaskStatus.COMPLETED
    )


def burndown(board: Board, tasks: list[Task], clock: Clock) -> list[BurndownPoint]:
    """Ideal versus actual remaining points for each day of the board's span.

    The actual line is not a historical reconstruction: every day up to and
    including today carries today's remaining total, later days carry None.
    """
    now = clock.now()
    start = clock.start_of_day(board["start"] or board["created"])
    end = clock.start_of_day(board["target_end"] or now.add(months=1))
    day_count = max(0, (end - start).in_days())

    total = sum(story_points(task) or 0 for task in tasks)
    remaining = float(remaining_story_points(tasks))

    points: list[BurndownPoint] = []
    for day_offset in range(day_count + 1):
        date = start.add(days=day_offset)
        if day_count == 0:
            ideal = 0.0
        else:
            ideal = total * (1.0 - day_offset / day_count)
        points.append(
            {
                "date": date,
                "ideal_remaining": ideal,
                "actual_remaining": remaining if date <= now else None,
            }
        )
    return points


def board_metrics(tasks: list[Task], clock: Clock) -> BoardMetrics:
    total = len(tasks)
    completed = len([task for task in tasks if task["status"] == TaskStatus.COMPLETED])
    return {
        "total_tasks": total,
        "completed_tasks": completed,
        "in_progress_tasks": len(
            [task for task in tasks if task["status"] == TaskStatus.IN_PROGRESS]
        ),
        "blocked_tasks": len(
            [task for task in tasks if task["status"] == TaskStatus.BLOCKED]
        ),
        "completion_rate": completed / total if total > 0 else 0.0,
        "average_cycle_time": average_cycle_time(tasks),
        "throughput": throughput(tasks, clock),
    }
