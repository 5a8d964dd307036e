# SPDX-License-Identifier: MIT

from typing import Optional, cast

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from planboard.model.entity_id import EntityId
from planboard.model.group import TaskGroup
from planboard.model.task import STATUS_LABELS, Task
from planboard.query.filter import is_overdue
from planboard.repository.id_map import ID_MAP_REPO
from planboard.service.board import classify
from planboard.service.task import blocked_dependents, progress, story_points, task_points
from planboard.time import (
    Clock,
    datetime_to_display_local_date_str_optional,
    duration_to_str_optional,
)
from planboard.view.util import (
    colorize,
    format_tags,
    render_priority,
    task_age,
    task_state,
)
from planboard.view.views.header import header

DEFAULT_COLUMNS = [
    "id",
    "state",
    "age",
    "priority",
    "due",
    "title",
    "tags",
]


def tasks_view(
    report_name: str,
    groups: list[TaskGroup],
    clock: Clock,
    categories: Optional[dict[EntityId, str]] = None,
    columns: list[str] = DEFAULT_COLUMNS,
) -> None:
    header(report_name)
    console = Console()

    if not groups:
        console.print("  [bright_black]no tasks[/bright_black]")
        return

    for group in groups:
        tasks_table = Table(
            box=box.SIMPLE,
            title=f"{group['title']} ({len(group['tasks'])})",
            title_justify="left",
            title_style="bold plum1",
        )
        for column in columns:
            tasks_table.add_column(column)

        for task in group["tasks"]:
            overdue = is_overdue(task, clock)
            row = []
            for column in columns:
                column_value = ""
                if column == "id":
                    column_value = str(
                        ID_MAP_REPO.associate_id("tasks", cast(str, task["id"]))
                    )
                elif column == "state":
                    column_value = task_state(task)
                elif column == "age":
                    column_value = task_age(task, clock)
                elif column == "priority":
                    row.append(render_priority(task))
                    continue
                elif column == "status":
                    column_value = STATUS_LABELS[task["status"]]
                elif column == "column":
                    column_value = str(classify(task))
                elif column == "tags":
                    column_value = format_tags(task["tags"])
                elif column == "estimate":
                    column_value = duration_to_str_optional(task["estimate"]) or ""
                elif column == "points":
                    column_value = str(story_points(task) or "")
                elif column == "category":
                    if task["category_id"] is not None and categories:
                        column_value = categories.get(task["category_id"], "")
                elif isinstance(task.get(column), pendulum.DateTime):
                    column_value = task[column].to_date_string()  # type: ignore[literal-required]
                elif task.get(column) is not None:
                    column_value = str(task[column])  # type: ignore[literal-required]

                row.append(colorize(column_value, task, overdue))
            tasks_table.add_row(*row)

        console.print(tasks_table)


def single_task_view(
    task: Task,
    tasks: list[Task],
    clock: Clock,
    category_name: Optional[str] = None,
) -> None:
    header("task")

    task_table = Table(box=box.SIMPLE)
    task_table.add_column("property")
    task_table.add_column("value")

    def id_of(entity_id: Optional[EntityId]) -> str:
        if entity_id is None:
            return ""
        return str(ID_MAP_REPO.associate_id("tasks", entity_id))

    task_table.add_row("id", id_of(task["id"]))
    task_table.add_row("title", task["title"])
    task_table.add_row("description", task["description"] or "")
    task_table.add_row("status", STATUS_LABELS[task["status"]])
    task_table.add_row("column", str(classify(task)))
    task_table.add_row("priority", render_priority(task))
    task_table.add_row("project", task["project"] or "")
    task_table.add_row("category", category_name or "")
    task_table.add_row("tags", format_tags(task["tags"]))
    task_table.add_row("assignee", task["assignee"] or "")
    task_table.add_row("estimate", duration_to_str_optional(task["estimate"]) or "")
    task_table.add_row("actual", duration_to_str_optional(task["actual"]) or "")
    task_table.add_row("story points", str(story_points(task) or ""))
    task_table.add_row("points", str(task_points(task, tasks, clock)))
    task_table.add_row("progress", f"{progress(task, tasks):.0%}")
    task_table.add_row("due", datetime_to_display_local_date_str_optional(task["due"]))
    task_table.add_row("overdue", "yes" if is_overdue(task, clock) else "")
    task_table.add_row("parent", id_of(task["parent_id"]))
    task_table.add_row(
        "prerequisites",
        ", ".join(id_of(prerequisite) for prerequisite in task["prerequisite_ids"]),
    )
    task_table.add_row(
        "blocking",
        ", ".join(id_of(blocked["id"]) for blocked in blocked_dependents(task, tasks)),
    )
    task_table.add_row(
        "started", datetime_to_display_local_date_str_optional(task["started"])
    )
    task_table.add_row(
        "completed", datetime_to_display_local_date_str_optional(task["completed"])
    )
    task_table.add_row(
        "archived", datetime_to_display_local_date_str_optional(task["archived"])
    )
    task_table.add_row(
        "created", datetime_to_display_local_date_str_optional(task["created"])
    )
    task_table.add_row(
        "updated", datetime_to_display_local_date_str_optional(task["updated"])
    )

    console = Console()
    console.print(task_table)
