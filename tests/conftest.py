# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Any, Callable, Iterator

import pendulum
import pytest

from planboard import configuration
from planboard import state as app_state
from planboard.initialize import initialize
from planboard.model.entity_id import generate_entity_id
from planboard.model.task import Task
from planboard.repository.board import BOARD_REPO
from planboard.repository.category import CATEGORY_REPO
from planboard.repository.configuration import CONFIGURATION_REPO
from planboard.repository.id_map import ID_MAP_REPO
from planboard.repository.task import TASK_REPO
from planboard.template.task import get_task_template
from planboard.time import FixedClock, SystemClock

NOW = pendulum.datetime(2026, 10, 18, 9, 0, tz="UTC")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW, timezone="UTC")


@pytest.fixture
def make_task(clock: FixedClock) -> Callable[..., Task]:
    def factory(**fields: Any) -> Task:
        task = get_task_template(clock)
        task["id"] = generate_entity_id()
        for key, value in fields.items():
            task[key] = value  # type: ignore[literal-required]
        return task

    return factory


def reset_repositories() -> None:
    for repository in (
        CONFIGURATION_REPO,
        ID_MAP_REPO,
        TASK_REPO,
        CATEGORY_REPO,
        BOARD_REPO,
    ):
        repository.reset()


@pytest.fixture
def data_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clock: FixedClock
) -> Iterator[Path]:
    """Point every repository at an empty data directory under tmp_path."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    configuration.set_data_path(tmp_path / "data")
    reset_repositories()

    initialize()
    app_state.set_show_header(False)
    app_state.set_clock(clock)

    yield tmp_path / "data"

    reset_repositories()
    app_state.set_clock(SystemClock())
    app_state.set_strict(False)
    app_state.set_clear_ids(True)
    app_state.set_show_header(True)
