# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from planboard import configuration
from planboard.errors import DataSourceError


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        try:
            loaded = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)
        except (OSError, YAMLError) as e:
            raise DataSourceError(
                f"could not read {configuration.APP_CONFIG_PATH}: {e}"
            ) from e

        if loaded is None:
            loaded = {}

        # Migration: add any keys introduced after the file was written
        for key, value in configuration.get_default_configuration().items():
            if key not in loaded:
                loaded[key] = value
                self.is_dirty = True

        self._config = cast(configuration.Configuration, loaded)

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(self, key: str, value: Any) -> None:
        if key not in configuration.Configuration.__annotations__:
            raise KeyError(key)
        self.is_dirty = True
        self.config[key] = value  # type: ignore[literal-required]

    def set_wip_limit(self, column_type: str, limit: Optional[int]) -> None:
        self.is_dirty = True
        wip_limits = dict(self.config.get("wip_limits") or {})
        if limit is None:
            wip_limits.pop(column_type, None)
        else:
            wip_limits[column_type] = limit
        self.config["wip_limits"] = wip_limits or None

    def reset(self) -> None:
        self._config = None
        self.is_dirty = False


CONFIGURATION_REPO = ConfigurationRepository()
