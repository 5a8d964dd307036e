# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "planboard"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_TASKS_DIR: Path = DATA_PATH / "tasks"
DATA_CATEGORIES_DIR: Path = DATA_PATH / "categories"
DATA_BOARDS_DIR: Path = DATA_PATH / "boards"
DATA_ID_MAP_PATH: Path = DATA_PATH / "id_map.yaml"


class Configuration(TypedDict):
    show_header: bool
    data_path: Optional[str]
    clear_ids_on_view: bool
    show_completed: bool
    default_sort: str
    default_group: str
    default_layout: str
    status_groups_include_cancelled: bool
    strict_sort_keys: bool
    log_level: str
    wip_limits: NotRequired[Optional[dict[str, int]]]


def get_default_configuration() -> Configuration:
    return {
        "show_header": True,
        "data_path": None,
        "clear_ids_on_view": True,
        "show_completed": False,
        "default_sort": "priority",
        "default_group": "due_date",
        "default_layout": "standard",
        "status_groups_include_cancelled": False,
        "strict_sort_keys": False,
        "log_level": "WARNING",
        "wip_limits": None,
    }


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_TASKS_DIR, DATA_CATEGORIES_DIR, DATA_BOARDS_DIR, DATA_ID_MAP_PATH

    DATA_PATH = data_path
    DATA_TASKS_DIR = DATA_PATH / "tasks"
    DATA_CATEGORIES_DIR = DATA_PATH / "categories"
    DATA_BOARDS_DIR = DATA_PATH / "boards"
    DATA_ID_MAP_PATH = DATA_PATH / "id_map.yaml"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories load their data.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))
