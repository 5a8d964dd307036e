# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from planboard import configuration
from planboard import state as app_state
from planboard.model.id_map import IdMap
from planboard.repository.configuration import CONFIGURATION_REPO
from planboard.template.id_map import get_id_map_template


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()
    __ensure_data_files()

    config = CONFIGURATION_REPO.get_config()
    app_state.set_show_header(config["show_header"])
    app_state.set_clear_ids(config["clear_ids_on_view"])
    app_state.set_strict(config["strict_sort_keys"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))


def __ensure_data_files() -> None:
    if not configuration.DATA_ID_MAP_PATH.is_file():
        configuration.DATA_ID_MAP_PATH.touch()
        id_map: IdMap = get_id_map_template()
        configuration.DATA_ID_MAP_PATH.write_text(dump(dict(id_map), Dumper=Dumper))

    # Directory-based entity stores (one file per entity)
    for directory in (
        configuration.DATA_TASKS_DIR,
        configuration.DATA_CATEGORIES_DIR,
        configuration.DATA_BOARDS_DIR,
    ):
        if not directory.is_dir():
            directory.mkdir(parents=True, exist_ok=True)
