# SPDX-License-Identifier: MIT

import pytest
from typer.testing import CliRunner

from planboard.model.column import KanbanColumnType
from planboard.model.task import Priority, TaskStatus
from planboard.repository.board import BOARD_REPO
from planboard.repository.configuration import CONFIGURATION_REPO
from planboard.repository.task import TASK_REPO
from planboard.terminal.app import app

runner = CliRunner(env={"COLUMNS": "200"})


@pytest.fixture(autouse=True)
def isolated(data_dir):
    return data_dir


def invoke(*args):
    return runner.invoke(app, ["--no-header", "--no-clear-ids", *args])


def only_task():
    (task,) = TASK_REPO.get_all_tasks(include_archived=True)
    return task


def test_add_and_list_tasks():
    result = invoke(
        "task", "add", "Drink water", "--priority", "high", "--due", "tomorrow",
        "--tag", "health",
    )
    assert result.exit_code == 0, result.output
    assert "Drink water" in result.output

    invoke("task", "add", "Exercise", "--description", "Drink more water daily")
    invoke("task", "add", "Read")

    result = invoke("task", "list", "--search", "water", "--group", "none")
    assert result.exit_code == 0, result.output
    assert "Drink water" in result.output
    assert "Exercise" in result.output
    assert "Read" not in result.output

    task = [t for t in TASK_REPO.get_all_tasks() if t["title"] == "Drink water"][0]
    assert task["priority"] == Priority.HIGH
    assert task["tags"] == ["health"]


def test_lifecycle_commands():
    invoke("task", "add", "Write report", "--estimate", "1:30")

    assert invoke("task", "start", "1").exit_code == 0
    assert only_task()["status"] == TaskStatus.IN_PROGRESS

    assert invoke("task", "review", "1").exit_code == 0
    assert invoke("task", "complete", "1").exit_code == 0
    assert only_task()["status"] == TaskStatus.COMPLETED

    assert invoke("task", "reopen", "1").exit_code == 0
    assert only_task()["status"] == TaskStatus.PENDING

    assert invoke("task", "archive", "1").exit_code == 0
    assert only_task()["archived"] is not None


def test_invalid_transition_exits_with_an_error():
    invoke("task", "add", "Plan")
    invoke("task", "cancel", "1")

    result = invoke("task", "complete", "1")

    assert result.exit_code == 1
    assert "error" in result.output
    assert only_task()["status"] == TaskStatus.CANCELLED


def test_unknown_task_id():
    result = invoke("task", "show", "42")

    assert result.exit_code == 1
    assert "unknown tasks id: 42" in result.output


def test_dependency_cycle_is_refused():
    invoke("task", "add", "design")
    invoke("task", "add", "build")

    assert invoke("task", "depend", "2", "1").exit_code == 0
    result = invoke("task", "depend", "1", "2")

    assert result.exit_code == 1
    assert "cycle" in result.output


def test_modify_updates_fields():
    invoke("task", "add", "Draft", "--tag", "old")

    result = invoke(
        "task", "modify", "1", "--title", "Final", "--add-tag", "new",
        "--remove-tag", "old", "--priority", "urgent", "--assignee", "sam",
    )

    assert result.exit_code == 0, result.output
    task = only_task()
    assert task["title"] == "Final"
    assert task["tags"] == ["new"]
    assert task["priority"] == Priority.URGENT
    assert task["assignee"] == "sam"


def test_unknown_sort_key_only_fails_when_strict():
    invoke("task", "add", "a")

    assert invoke("task", "list", "--sort", "effort").exit_code == 0
    result = runner.invoke(
        app, ["--no-header", "--strict", "task", "list", "--sort", "effort"]
    )
    assert result.exit_code == 1
    assert "effort" in result.output


def test_board_flow():
    invoke("task", "add", "a")
    invoke("task", "add", "b")

    result = invoke("board", "create", "team", "--layout", "simple")
    assert result.exit_code == 0, result.output
    assert "To Do" in result.output

    result = invoke("board", "move", "team", "1", "in_progress")
    assert result.exit_code == 0, result.output
    moved = [task for task in TASK_REPO.get_all_tasks() if task["title"] == "a"][0]
    assert moved["column"] == KanbanColumnType.IN_PROGRESS
    assert moved["status"] == TaskStatus.IN_PROGRESS

    result = invoke("board", "move", "team", "2", "review")
    assert result.exit_code == 1

    result = invoke("board", "metrics", "team")
    assert result.exit_code == 0, result.output
    assert "velocity" in result.output
    assert "burndown" in result.output


def test_custom_board_columns():
    invoke("board", "create", "flow", "--layout", "custom")

    result = invoke("board", "column-add", "flow", "testing", "--wip-limit", "2")
    assert result.exit_code == 0, result.output
    assert BOARD_REPO.get_board_by_name("flow")["custom_columns"][0]["wip_limit"] == 2

    invoke("task", "add", "check")
    assert invoke("board", "move", "flow", "1", "testing").exit_code == 0

    result = invoke("board", "column-remove", "flow", "testing")
    assert result.exit_code == 0, result.output
    task = only_task()
    assert task["column"] == KanbanColumnType.BACKLOG
    assert task["status"] == TaskStatus.PENDING


def test_categories():
    assert invoke("category", "add", "Work").exit_code == 0
    assert invoke("category", "add", "work").exit_code == 1

    invoke("task", "add", "email", "--category", "Work")
    result = invoke("task", "list", "--group", "category")

    assert result.exit_code == 0, result.output
    assert "Work" in result.output


def test_config_set_and_show():
    result = invoke("config", "set", "--default-sort", "title", "--hide-completed")

    assert result.exit_code == 0, result.output
    config = CONFIGURATION_REPO.get_config()
    assert config["default_sort"] == "title"
    assert config["show_completed"] is False


def test_aliases_resolve_to_commands():
    result = runner.invoke(app, ["--no-header", "t", "a", "aliased"])

    assert result.exit_code == 0, result.output
    assert only_task()["title"] == "aliased"
