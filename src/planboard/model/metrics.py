# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from planboard.model.column import KanbanColumnType


class BoardMetrics(TypedDict):
    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int
    blocked_tasks: int
    completion_rate: float
    average_cycle_time: Optional[pendulum.Duration]
    throughput: int


class ColumnMetrics(TypedDict):
    column_type: KanbanColumnType
    task_count: int
    wip_limit: Optional[int]
    wip_violations: int


class VelocityPoint(TypedDict):
    week: pendulum.DateTime
    story_points: int


class BurndownPoint(TypedDict):
    date: pendulum.DateTime
    ideal_remaining: float
    actual_remaining: Optional[float]
