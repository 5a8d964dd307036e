# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from planboard import configuration, time
from planboard.errors import DataSourceError, PlanboardError
from planboard.model.category import Category
from planboard.model.entity_id import EntityId, generate_entity_id


class CategoryRepository:
    def __init__(self) -> None:
        self._categories: Optional[list[Category]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()

    @property
    def categories(self) -> list[Category]:
        if self._categories is None:
            self.__load_data()
        if self._categories is None:
            raise ValueError()
        return self._categories

    def __load_data(self) -> None:
        categories: list[Category] = []
        try:
            for file_path in sorted(configuration.DATA_CATEGORIES_DIR.iterdir()):
                if file_path.suffix != ".yaml":
                    continue
                raw_category = load(file_path.read_text(), Loader=Loader)
                if raw_category is not None:
                    raw_category["created"] = time.datetime_from_str(
                        raw_category["created"]
                    )
                    categories.append(cast(Category, raw_category))
        except (OSError, YAMLError, KeyError, ValueError) as e:
            raise DataSourceError(
                f"could not load categories from {configuration.DATA_CATEGORIES_DIR}: {e}"
            ) from e
        self._categories = categories

    def __save_data(self) -> None:
        for category in self.categories:
            if category["id"] in self._dirty_ids:
                serializable_category = cast(dict[str, Any], deepcopy(category))
                serializable_category["created"] = time.datetime_to_iso_str(
                    category["created"]
                )
                file_path = configuration.DATA_CATEGORIES_DIR / f"{category['id']}.yaml"
                file_path.write_text(dump(serializable_category, Dumper=Dumper))
        self._dirty_ids.clear()

    def flush(self) -> bool:
        if self._categories is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def save_new_category(self, category: Category) -> EntityId:
        if self.get_category_by_name(category["name"]) is not None:
            raise PlanboardError(f"category already exists: {category['name']}")

        self.is_dirty = True
        category["id"] = generate_entity_id()
        self.categories.append(deepcopy(category))
        self._dirty_ids.add(category["id"])
        return category["id"]

    def get_all_categories(self) -> list[Category]:
        return deepcopy(sorted(self.categories, key=lambda c: c["name"].lower()))

    def get_category(self, id: EntityId) -> Category:
        for category in self.categories:
            if category["id"] == id:
                return deepcopy(category)
        raise PlanboardError(f"category not found: {id}")

    def get_category_by_name(self, name: str) -> Optional[Category]:
        for category in self.categories:
            if category["name"].lower() == name.lower():
                return deepcopy(category)
        return None

    def get_category_names(self) -> dict[EntityId, str]:
        return {
            category["id"]: category["name"]
            for category in self.categories
            if category["id"] is not None
        }

    def reset(self) -> None:
        self._categories = None
        self.is_dirty = False
        self._dirty_ids.clear()


CATEGORY_REPO = CategoryRepository()
