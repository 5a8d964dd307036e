# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from planboard.model.column import COLUMN_TITLES
from planboard.model.metrics import (
    BoardMetrics,
    BurndownPoint,
    ColumnMetrics,
    VelocityPoint,
)
from planboard.time import duration_to_str_optional
from planboard.view.util import WIP_VIOLATION_COLOR
from planboard.view.views.header import header


def metrics_view(
    board_name: str,
    metrics: BoardMetrics,
    columns: list[ColumnMetrics],
    velocity: list[VelocityPoint],
    burndown: list[BurndownPoint],
) -> None:
    header(f"metrics: {board_name}")
    console = Console()

    summary_table = Table(box=box.SIMPLE, title="summary", title_justify="left")
    summary_table.add_column("metric")
    summary_table.add_column("value", justify="right")
    summary_table.add_row("total tasks", str(metrics["total_tasks"]))
    summary_table.add_row("completed", str(metrics["completed_tasks"]))
    summary_table.add_row("in progress", str(metrics["in_progress_tasks"]))
    summary_table.add_row("blocked", str(metrics["blocked_tasks"]))
    summary_table.add_row("completion rate", f"{metrics['completion_rate']:.0%}")
    summary_table.add_row(
        "average cycle time", duration_to_str_optional(metrics["average_cycle_time"]) or "-"
    )
    summary_table.add_row("throughput (7d)", str(metrics["throughput"]))
    console.print(summary_table)

    columns_table = Table(box=box.SIMPLE, title="columns", title_justify="left")
    columns_table.add_column("column")
    columns_table.add_column("tasks", justify="right")
    columns_table.add_column("wip limit", justify="right")
    columns_table.add_column("over limit", justify="right")
    for column in columns:
        over = str(column["wip_violations"]) if column["wip_violations"] else ""
        if over:
            over = f"[{WIP_VIOLATION_COLOR}]{over}[/{WIP_VIOLATION_COLOR}]"
        columns_table.add_row(
            COLUMN_TITLES[column["column_type"]],
            str(column["task_count"]),
            "" if column["wip_limit"] is None else str(column["wip_limit"]),
            over,
        )
    console.print(columns_table)

    velocity_table = Table(box=box.SIMPLE, title="velocity", title_justify="left")
    velocity_table.add_column("week of")
    velocity_table.add_column("points", justify="right")
    for point in velocity:
        velocity_table.add_row(
            point["week"].to_date_string(), str(point["story_points"])
        )
    console.print(velocity_table)

    burndown_table = Table(box=box.SIMPLE, title="burndown", title_justify="left")
    burndown_table.add_column("date")
    burndown_table.add_column("ideal", justify="right")
    burndown_table.add_column("actual", justify="right")
    for day in burndown:
        actual = day["actual_remaining"]
        burndown_table.add_row(
            day["date"].to_date_string(),
            f"{day['ideal_remaining']:.1f}",
            "" if actual is None else f"{actual:.1f}",
        )
    console.print(burndown_table)
