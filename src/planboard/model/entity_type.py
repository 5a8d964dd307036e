# SPDX-License-Identifier: MIT


class EntityType:
    TASK = "task"
    CATEGORY = "category"
    BOARD = "board"
