# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from planboard.model.entity_id import EntityId


class Category(TypedDict):
    id: Optional[EntityId]
    entity_type: str
    name: str
    color: Optional[str]
    created: pendulum.DateTime
