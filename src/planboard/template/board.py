# SPDX-License-Identifier: MIT

from planboard.model.board import Board, BoardLayout
from planboard.model.entity_type import EntityType
from planboard.time import Clock, SystemClock


def get_board_template(clock: Clock = SystemClock()) -> Board:
    now = clock.now()
    return {
        "id": None,
        "entity_type": EntityType.BOARD,
        "name": "",
        "project": None,
        "layout": BoardLayout.STANDARD,
        "custom_columns": [],
        "start": None,
        "target_end": None,
        "created": now,
        "updated": now,
    }
