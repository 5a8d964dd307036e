# SPDX-License-Identifier: MIT

import pytest

from planboard.errors import ColumnError
from planboard.model.board import COLUMN_STATUS, CUSTOM_LAYOUT_HEAD, BoardLayout
from planboard.model.column import COLUMN_TITLES, KanbanColumnType
from planboard.model.task import TaskStatus
from planboard.service import board as board_service
from planboard.service.task import start
from planboard.template.board import get_board_template
from planboard.template.preferences import get_preferences_template


@pytest.fixture
def board(clock):
    board = get_board_template(clock)
    board["id"] = "board-1"
    board["name"] = "team"
    return board


def counts(columns):
    return {column["column_type"]: len(column["tasks"]) for column in columns}


def test_simple_layout_rebuild(board, make_task):
    board["layout"] = BoardLayout.SIMPLE
    tasks = [
        make_task(status=TaskStatus.PENDING),
        make_task(status=TaskStatus.PENDING),
        make_task(status=TaskStatus.IN_PROGRESS),
        make_task(status=TaskStatus.COMPLETED),
    ]

    columns = board_service.build_columns(board, tasks)

    assert [column["column_type"] for column in columns] == [
        KanbanColumnType.TODO,
        KanbanColumnType.IN_PROGRESS,
        KanbanColumnType.DONE,
    ]
    assert counts(columns) == {
        KanbanColumnType.TODO: 2,
        KanbanColumnType.IN_PROGRESS: 1,
        KanbanColumnType.DONE: 1,
    }
    in_progress = board_service.find_column(columns, KanbanColumnType.IN_PROGRESS)
    assert in_progress["wip_limit"] == 3
    assert not any(board_service.is_wip_violated(column) for column in columns)


def test_rebuild_is_deterministic_and_skips_archived(board, make_task, clock):
    tasks = [
        make_task(status=TaskStatus.PENDING),
        make_task(status=TaskStatus.PENDING, archived=clock.now()),
    ]

    first = board_service.build_columns(board, tasks)
    second = board_service.build_columns(board, tasks)

    assert first == second
    assert counts(first)[KanbanColumnType.TODO] == 1


def test_wip_violation_grows_with_task_count(board, make_task):
    violations = []
    tasks = []
    for _ in range(6):
        tasks.append(make_task(status=TaskStatus.IN_PROGRESS))
        columns = board_service.build_columns(board, tasks)
        column = board_service.find_column(columns, KanbanColumnType.IN_PROGRESS)
        violations.append(board_service.is_wip_violated(column))

    assert violations == [False, False, False, True, True, True]


def test_wip_overrides_replace_default_limits(board, make_task):
    tasks = [make_task(status=TaskStatus.IN_PROGRESS) for _ in range(2)]

    columns = board_service.build_columns(board, tasks, {"in_progress": 1})

    column = board_service.find_column(columns, KanbanColumnType.IN_PROGRESS)
    assert column["wip_limit"] == 1
    assert board_service.is_wip_violated(column)


@pytest.mark.parametrize("column_type", list(KanbanColumnType))
def test_move_keeps_column_and_status_together(board, make_task, clock, column_type):
    board["layout"] = BoardLayout.CUSTOM
    for extra in KanbanColumnType:
        if extra in CUSTOM_LAYOUT_HEAD or extra == KanbanColumnType.DONE:
            continue
        board_service.add_custom_column(board, COLUMN_TITLES[extra], extra, None, clock)
    task = make_task(status=TaskStatus.PENDING, column=KanbanColumnType.BACKLOG)
    other = make_task(status=TaskStatus.PENDING, column=KanbanColumnType.BACKLOG)

    moved = board_service.move_task(task, column_type, clock)
    columns = board_service.build_columns(board, [task, other])

    assert moved is (column_type != KanbanColumnType.BACKLOG)
    assert board_service.classify(task) == column_type
    assert task["status"] == COLUMN_STATUS[column_type]
    holding = [column["column_type"] for column in columns if task in column["tasks"]]
    assert holding == [column_type]
    assert board_service.find_column(columns, column_type)["tasks"].count(task) == 1
    assert other in board_service.find_column(columns, KanbanColumnType.BACKLOG)["tasks"]


def test_move_into_same_column_is_a_no_op(make_task, clock):
    task = make_task(status=TaskStatus.IN_PROGRESS)
    before = dict(task)

    assert board_service.move_task(task, KanbanColumnType.IN_PROGRESS, clock) is False
    assert task == before


def test_move_stamps_started_and_completed(make_task, clock):
    task = make_task(status=TaskStatus.PENDING)

    board_service.move_task(task, KanbanColumnType.IN_PROGRESS, clock)
    assert task["started"] == clock.now()

    clock.advance(hours=2)
    board_service.move_task(task, KanbanColumnType.DONE, clock)
    assert task["completed"] == clock.now()
    assert task["actual"].total_seconds() == 2 * 3600

    board_service.move_task(task, KanbanColumnType.TODO, clock)
    assert task["completed"] is None
    assert task["status"] == TaskStatus.PENDING


def test_lifecycle_change_clears_a_stale_column(make_task, clock):
    task = make_task(status=TaskStatus.PENDING, column=KanbanColumnType.BACKLOG)

    start(task, {}, clock)

    assert task["column"] is None
    assert board_service.classify(task) == KanbanColumnType.IN_PROGRESS


def test_custom_layout_wraps_custom_columns(board, clock):
    board["layout"] = BoardLayout.CUSTOM
    board_service.add_custom_column(board, "Testing", KanbanColumnType.TESTING, 1, clock)
    board_service.add_custom_column(
        board, "Working", KanbanColumnType.IN_PROGRESS, 4, clock
    )

    columns = board_service.build_columns(board, [])

    assert [column["column_type"] for column in columns] == [
        KanbanColumnType.BACKLOG,
        KanbanColumnType.TODO,
        KanbanColumnType.TESTING,
        KanbanColumnType.IN_PROGRESS,
        KanbanColumnType.DONE,
    ]
    assert [column["wip_limit"] for column in columns][2:] == [1, 4, None]


def test_custom_columns_reject_fixed_and_duplicate_types(board, clock):
    board["layout"] = BoardLayout.CUSTOM
    board_service.add_custom_column(board, "Testing", KanbanColumnType.TESTING, 1, clock)

    with pytest.raises(ColumnError):
        board_service.add_custom_column(board, "Done", KanbanColumnType.DONE, None, clock)
    with pytest.raises(ColumnError):
        board_service.add_custom_column(
            board, "More testing", KanbanColumnType.TESTING, None, clock
        )


def test_removing_a_custom_column_sends_tasks_to_backlog(board, make_task, clock):
    board["layout"] = BoardLayout.CUSTOM
    testing = board_service.add_custom_column(
        board, "Testing", KanbanColumnType.TESTING, None, clock
    )
    in_testing = [
        make_task(title=f"t{index}", status=TaskStatus.IN_REVIEW, column=KanbanColumnType.TESTING)
        for index in range(2)
    ]
    already_backlog = make_task(
        title="b", status=TaskStatus.PENDING, column=KanbanColumnType.BACKLOG
    )
    tasks = in_testing + [already_backlog]

    migrated = board_service.remove_custom_column(board, testing["id"], tasks, clock)

    assert migrated == in_testing
    for task in migrated:
        assert task["column"] == KanbanColumnType.BACKLOG
        assert task["status"] == TaskStatus.PENDING
    columns = board_service.build_columns(board, tasks)
    backlog = board_service.find_column(columns, KanbanColumnType.BACKLOG)
    assert {task["title"] for task in backlog["tasks"]} == {"t0", "t1", "b"}
    assert KanbanColumnType.TESTING not in counts(columns)


def test_reorder_requires_every_custom_column(board, clock):
    board["layout"] = BoardLayout.CUSTOM
    first = board_service.add_custom_column(
        board, "Ready", KanbanColumnType.READY, None, clock
    )
    second = board_service.add_custom_column(
        board, "Testing", KanbanColumnType.TESTING, None, clock
    )

    board_service.reorder_custom_columns(board, [second["id"], first["id"]], clock)
    assert board_service.column_types(board)[2:4] == [
        KanbanColumnType.TESTING,
        KanbanColumnType.READY,
    ]

    with pytest.raises(ColumnError):
        board_service.reorder_custom_columns(board, [first["id"]], clock)


def test_filter_columns_narrows_each_column(board, make_task, clock):
    tasks = [
        make_task(title="write docs", status=TaskStatus.PENDING),
        make_task(title="write code", status=TaskStatus.IN_PROGRESS),
        make_task(title="review", status=TaskStatus.IN_PROGRESS),
    ]
    preferences = get_preferences_template()
    preferences["search_text"] = "write"

    columns = board_service.filter_columns(
        board_service.build_columns(board, tasks), preferences, clock
    )

    assert counts(columns)[KanbanColumnType.TODO] == 1
    assert counts(columns)[KanbanColumnType.IN_PROGRESS] == 1


def test_board_tasks_follow_the_board_project(board, make_task):
    tasks = [make_task(project="web"), make_task(project="api"), make_task(project=None)]

    assert len(board_service.board_tasks(board, tasks)) == 3
    board["project"] = "web"
    assert [task["project"] for task in board_service.board_tasks(board, tasks)] == [
        "web"
    ]
