# SPDX-License-Identifier: MIT

from typing import Literal, TypeAlias, TypedDict

EntityType = Literal[
    "tasks",
    "categories",
    "boards",
]


IdMapDict: TypeAlias = dict[EntityType, "IdMapMapping"]


class IdMap(TypedDict):
    """
    Synthetic ids are short integers handed out for display and CLI input.

    Example:

    Task with an id of "5b0e...".
    Synthetic id for that task is 7.

    real_task_id = id_map["tasks"]["synthetic_to_real"][7]  # returns "5b0e..."
    """

    tasks: "IdMapMapping"
    categories: "IdMapMapping"
    boards: "IdMapMapping"


class IdMapMapping(TypedDict):
    synthetic_to_real: dict[int, str]
    real_to_synthetic: dict[str, int]
