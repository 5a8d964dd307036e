# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Callable, Optional, TypeAlias

import pendulum
import typer

from planboard import state as app_state
from planboard.errors import PlanboardError
from planboard.id_map import clear_id_map_if_required
from planboard.model.entity_id import EntityId
from planboard.model.preferences import (
    GROUP_KEY_LABELS,
    SORT_KEY_LABELS,
    TIME_FILTER_LABELS,
    GroupKey,
    Preferences,
    SortKey,
    TimeFilter,
)
from planboard.model.task import Priority, Task, TaskStatus
from planboard.repository.category import CATEGORY_REPO
from planboard.repository.configuration import CONFIGURATION_REPO
from planboard.repository.id_map import ID_MAP_REPO
from planboard.repository.task import TASK_REPO
from planboard.service import task as task_service
from planboard.service.session import Session, initial_state
from planboard.template.preferences import get_preferences_template
from planboard.template.task import get_task_template
from planboard.terminal.custom_typer import AliasedTyperGroup
from planboard.terminal.error import report_errors
from planboard.terminal.parse import parse_datetime, parse_id_list, parse_tags
from planboard.terminal.validate import validate_duration
from planboard.time import Clock, duration_from_str_optional
from planboard.view.views import task as task_report

logger = logging.getLogger(__name__)

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DATETIME_HELP = (
    "valid inputs: YYYY-MM-DD, HH:mm, now, today, yesterday, tomorrow, eod, "
    "or day offset like 1, -1"
)

TaskOperation: TypeAlias = Callable[[Task, dict[EntityId, Task], Clock], None]


def resolve_task_id(synthetic_id: int) -> EntityId:
    return ID_MAP_REPO.get_real_id("tasks", synthetic_id)


def resolve_category_id(name: Optional[str]) -> Optional[EntityId]:
    if name is None:
        return None
    category = CATEGORY_REPO.get_category_by_name(name)
    if category is None:
        raise PlanboardError(f"unknown category: {name}")
    return category["id"]


def describe_report(preferences: Preferences) -> str:
    sort_label = SORT_KEY_LABELS.get(
        preferences["sort_key"], SORT_KEY_LABELS[SortKey.CREATED_DATE]
    )
    return ", ".join(
        [
            f"tasks: {TIME_FILTER_LABELS[preferences['time_filter']].lower()}",
            GROUP_KEY_LABELS[preferences["group_key"]],
            sort_label,
        ]
    )


def show_task(task: Task) -> None:
    category_name = None
    if task["category_id"] is not None:
        category_name = CATEGORY_REPO.get_category_names().get(task["category_id"])
    task_report.single_task_view(
        task, TASK_REPO.get_all_tasks(), app_state.get_clock(), category_name
    )


def apply_to_tasks(id: str, operation: TaskOperation) -> None:
    """Run a lifecycle operation on every task an id list names, then show them."""
    clock = app_state.get_clock()
    with report_errors():
        tasks_by_id = task_service.index_tasks(
            TASK_REPO.get_all_tasks(include_archived=True)
        )
        changed: list[Task] = []
        for synthetic_id in parse_id_list(id):
            task = TASK_REPO.get_task(resolve_task_id(synthetic_id))
            tasks_by_id[task["id"]] = task
            operation(task, tasks_by_id, clock)
            TASK_REPO.update_task(task)
            changed.append(task)

    for task in changed:
        show_task(task)


@app.command("add, a", no_args_is_help=True)
def add(
    title: str,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    priority: Annotated[
        Priority, typer.Option("--priority", "-pr", case_sensitive=False)
    ] = Priority.MEDIUM,
    project: Annotated[Optional[str], typer.Option("--project", "-p")] = None,
    category: Annotated[
        Optional[str], typer.Option("--category", "-cat", help="category name")
    ] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-t", help="accepts multiple tag options"),
    ] = None,
    assignee: Annotated[Optional[str], typer.Option("--assignee", "-as")] = None,
    estimate: Annotated[
        Optional[str],
        typer.Option(
            "--estimate", "-e", callback=validate_duration, help="valid input: H:mm"
        ),
    ] = None,
    due: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--due", "-u", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    parent_id: Annotated[Optional[int], typer.Option("--parent", "-pa")] = None,
) -> None:
    clock = app_state.get_clock()

    with report_errors():
        task = get_task_template(clock)
        task["title"] = title
        task["description"] = description
        task["priority"] = priority
        task["project"] = project
        task["category_id"] = resolve_category_id(category)
        task["tags"] = tags or []
        task["assignee"] = assignee
        task["estimate"] = duration_from_str_optional(estimate)
        task["due"] = due
        if parent_id is not None:
            task["parent_id"] = TASK_REPO.get_task(resolve_task_id(parent_id))["id"]

        id = TASK_REPO.save_new_task(task)
        logger.info("added task %s", id)

    show_task(TASK_REPO.get_task(id))


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: str,
    title: Annotated[Optional[str], typer.Option("--title", "-ti")] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    priority: Annotated[
        Optional[Priority], typer.Option("--priority", "-pr", case_sensitive=False)
    ] = None,
    project: Annotated[Optional[str], typer.Option("--project", "-p")] = None,
    category: Annotated[Optional[str], typer.Option("--category", "-cat")] = None,
    add_tags: Annotated[
        Optional[list[str]], typer.Option("--add-tag", "-at")
    ] = None,
    remove_tag_list: Annotated[
        Optional[list[str]], typer.Option("--remove-tag", "-rt")
    ] = None,
    assignee: Annotated[Optional[str], typer.Option("--assignee", "-as")] = None,
    estimate: Annotated[
        Optional[str],
        typer.Option(
            "--estimate", "-e", callback=validate_duration, help="valid input: H:mm"
        ),
    ] = None,
    due: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--due", "-u", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    remove_description: Annotated[
        bool, typer.Option("--remove-description", "-rd")
    ] = False,
    remove_project: Annotated[bool, typer.Option("--remove-project", "-rp")] = False,
    remove_category: Annotated[
        bool, typer.Option("--remove-category", "-rcat")
    ] = False,
    remove_assignee: Annotated[
        bool, typer.Option("--remove-assignee", "-ras")
    ] = False,
    remove_estimate: Annotated[bool, typer.Option("--remove-estimate", "-re")] = False,
    remove_due: Annotated[bool, typer.Option("--remove-due", "-ru")] = False,
) -> None:
    def modify_task(task: Task, tasks_by_id: dict[EntityId, Task], clock: Clock) -> None:
        if title is not None:
            task["title"] = title
        if description is not None:
            task["description"] = description
        if remove_description:
            task["description"] = None
        if priority is not None:
            task_service.set_priority(task, priority, clock)
        if project is not None:
            task["project"] = project
        if remove_project:
            task["project"] = None
        if category is not None:
            task["category_id"] = resolve_category_id(category)
        if remove_category:
            task["category_id"] = None
        for tag in add_tags or []:
            task_service.add_tag(task, tag, clock)
        for tag in remove_tag_list or []:
            task_service.remove_tag(task, tag, clock)
        if assignee is not None:
            task["assignee"] = assignee
        if remove_assignee:
            task["assignee"] = None
        if estimate is not None:
            task["estimate"] = duration_from_str_optional(estimate)
        if remove_estimate:
            task["estimate"] = None
        if due is not None:
            task_service.set_due(task, due, clock)
        if remove_due:
            task_service.set_due(task, None, clock)
        task["updated"] = clock.now()

    apply_to_tasks(id, modify_task)


@app.command("start, s", no_args_is_help=True)
def start(id: str) -> None:
    apply_to_tasks(id, task_service.start)


@app.command("pause, p", no_args_is_help=True)
def pause(id: str) -> None:
    apply_to_tasks(id, lambda task, _, clock: task_service.pause(task, clock))


@app.command("hold, h", no_args_is_help=True)
def hold(id: str) -> None:
    apply_to_tasks(id, lambda task, _, clock: task_service.hold(task, clock))


@app.command("block, b", no_args_is_help=True)
def block(id: str) -> None:
    apply_to_tasks(id, lambda task, _, clock: task_service.block(task, clock))


@app.command("review, r", no_args_is_help=True)
def review(id: str) -> None:
    apply_to_tasks(
        id, lambda task, _, clock: task_service.submit_for_review(task, clock)
    )


@app.command("complete, c", no_args_is_help=True)
def complete(id: str) -> None:
    apply_to_tasks(id, lambda task, _, clock: task_service.complete(task, clock))


@app.command("cancel, ca", no_args_is_help=True)
def cancel(id: str) -> None:
    apply_to_tasks(id, lambda task, _, clock: task_service.cancel(task, clock))


@app.command("reopen, ro", no_args_is_help=True)
def reopen(id: str) -> None:
    apply_to_tasks(id, lambda task, _, clock: task_service.reopen(task, clock))


@app.command("archive, ar", no_args_is_help=True)
def archive(id: str) -> None:
    apply_to_tasks(id, lambda task, _, clock: task_service.archive(task, clock))


@app.command("depend, dp", no_args_is_help=True)
def depend(id: str, prerequisite_id: int) -> None:
    """Make the given tasks wait on a prerequisite task."""

    def add_prerequisite(
        task: Task, tasks_by_id: dict[EntityId, Task], clock: Clock
    ) -> None:
        task_service.add_prerequisite(
            task, resolve_task_id(prerequisite_id), tasks_by_id, clock
        )

    apply_to_tasks(id, add_prerequisite)


@app.command("undepend, udp", no_args_is_help=True)
def undepend(id: str, prerequisite_id: int) -> None:
    def remove_prerequisite(
        task: Task, tasks_by_id: dict[EntityId, Task], clock: Clock
    ) -> None:
        task_service.remove_prerequisite(task, resolve_task_id(prerequisite_id), clock)

    apply_to_tasks(id, remove_prerequisite)


@app.command("show, sh", no_args_is_help=True)
def show(id: int) -> None:
    with report_errors():
        task = TASK_REPO.get_task(resolve_task_id(id))
    show_task(task)


@app.command("list, ls")
def list_tasks(
    search: Annotated[Optional[str], typer.Option("--search", "-q")] = None,
    category: Annotated[Optional[str], typer.Option("--category", "-cat")] = None,
    priority: Annotated[
        Optional[Priority], typer.Option("--priority", "-pr", case_sensitive=False)
    ] = None,
    status: Annotated[
        Optional[TaskStatus], typer.Option("--status", "-st", case_sensitive=False)
    ] = None,
    assignee: Annotated[Optional[str], typer.Option("--assignee", "-as")] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-t", help="matches tasks carrying any of the tags"),
    ] = None,
    time_filter: Annotated[
        TimeFilter, typer.Option("--time", "-tm", case_sensitive=False)
    ] = TimeFilter.ALL,
    show_completed: Annotated[
        Optional[bool],
        typer.Option("--show-completed/--hide-completed", "-sc/-hc"),
    ] = None,
    sort_key: Annotated[Optional[str], typer.Option("--sort", "-so")] = None,
    group_key: Annotated[
        Optional[GroupKey], typer.Option("--group", "-g", case_sensitive=False)
    ] = None,
    columns: Annotated[
        Optional[list[str]],
        typer.Option("--column", "-col", help="task fields to show, in order"),
    ] = None,
) -> None:
    """List tasks filtered, sorted and grouped."""
    config = CONFIGURATION_REPO.get_config()
    clock = app_state.get_clock()

    with report_errors():
        preferences: Preferences = get_preferences_template()
        preferences["search_text"] = search or ""
        preferences["category_id"] = resolve_category_id(category)
        preferences["priority"] = priority
        preferences["status"] = status
        preferences["assignee"] = assignee
        preferences["tags"] = parse_tags(tags)
        preferences["time_filter"] = time_filter
        preferences["show_completed"] = (
            config["show_completed"] if show_completed is None else show_completed
        )
        # Unrecognised sort keys go through so the sorter can apply its fallback
        requested_sort = sort_key or config["default_sort"]
        preferences["sort_key"] = (
            SortKey(requested_sort)
            if requested_sort in {key.value for key in SortKey}
            else requested_sort  # type: ignore[typeddict-item]
        )
        preferences["group_key"] = group_key or GroupKey(config["default_group"])

        session = Session(
            clock,
            initial_state(preferences, CATEGORY_REPO.get_category_names()),
            include_cancelled=config["status_groups_include_cancelled"],
        )
        state = session.load(TASK_REPO.get_all_tasks)
        if state["error"] is not None:
            raise PlanboardError(state["error"])

    clear_id_map_if_required()
    task_report.tasks_view(
        describe_report(preferences),
        state["groups"],
        clock,
        categories=state["categories"],
        columns=columns or task_report.DEFAULT_COLUMNS,
    )
