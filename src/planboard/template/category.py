# SPDX-License-Identifier: MIT

from planboard.model.category import Category
from planboard.model.entity_type import EntityType
from planboard.time import Clock, SystemClock


def get_category_template(clock: Clock = SystemClock()) -> Category:
    return {
        "id": None,
        "entity_type": EntityType.CATEGORY,
        "name": "",
        "color": None,
        "created": clock.now(),
    }
