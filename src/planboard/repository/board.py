# SPDX-License-Identifier: MIT

import logging
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
from planboard.model.board import Board, BoardLayout, CustomColumn
from planboard.model.column import KanbanColumnType
from planboard.model.entity_id import EntityId, generate_entity_id

logger = logging.getLogger(__name__)


class BoardRepository:
    def __init__(self) -> None:
        self._boards: Optional[list[Board]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()

    @property
    def boards(self) -> list[Board]:
        if self._boards is None:
            self.__load_data()
        if self._boards is None:
            raise ValueError()
        return self._boards

    def __load_data(self) -> None:
        boards: list[Board] = []
        try:
            for file_path in sorted(configuration.DATA_BOARDS_DIR.iterdir()):
                if file_path.suffix != ".yaml":
                    continue
                raw_board = load(file_path.read_text(), Loader=Loader)
                if raw_board is not None:
                    boards.append(self.__convert_board_for_deserialization(raw_board))
        except (OSError, YAMLError, KeyError, ValueError) as e:
            raise DataSourceError(
                f"could not load boards from {configuration.DATA_BOARDS_DIR}: {e}"
            ) from e
        logger.debug("loaded %d boards", len(boards))
        self._boards = boards

    def __save_data(self) -> None:
        for board in self.boards:
            if board["id"] in self._dirty_ids:
                serializable_board = self.__convert_board_for_serialization(
                    deepcopy(board)
                )
                file_path = configuration.DATA_BOARDS_DIR / f"{board['id']}.yaml"
                file_path.write_text(dump(serializable_board, Dumper=Dumper))
        self._dirty_ids.clear()

    def flush(self) -> bool:
        if self._boards is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_board_for_serialization(self, board: Board) -> dict[str, Any]:
        serializable_board = cast(dict[str, Any], board)
        serializable_board["layout"] = str(board["layout"])
        serializable_board["custom_columns"] = [
            {**custom_column, "column_type": str(custom_column["column_type"])}
            for custom_column in board["custom_columns"]
        ]
        serializable_board["start"] = time.datetime_to_iso_str_optional(
            serializable_board["start"]
        )
        serializable_board["target_end"] = time.datetime_to_iso_str_optional(
            serializable_board["target_end"]
        )
        serializable_board["created"] = time.datetime_to_iso_str(
            serializable_board["created"]
        )
        serializable_board["updated"] = time.datetime_to_iso_str(
            serializable_board["updated"]
        )
        return serializable_board

    def __convert_board_for_deserialization(self, board: dict[str, Any]) -> Board:
        deserializable_board = board
        deserializable_board["layout"] = BoardLayout(deserializable_board["layout"])
        deserializable_board["custom_columns"] = [
            cast(
                CustomColumn,
                {
                    **custom_column,
                    "column_type": KanbanColumnType(custom_column["column_type"]),
                },
            )
            for custom_column in deserializable_board.get("custom_columns") or []
        ]
        deserializable_board["start"] = time.datetime_from_str_optional(
            deserializable_board.get("start")
        )
        deserializable_board["target_end"] = time.datetime_from_str_optional(
            deserializable_board.get("target_end")
        )
        deserializable_board["created"] = time.datetime_from_str(
            deserializable_board["created"]
        )
        deserializable_board["updated"] = time.datetime_from_str(
            deserializable_board["updated"]
        )
        return cast(Board, deserializable_board)

    def save_new_board(self, board: Board) -> EntityId:
        if self.get_board_by_name(board["name"]) is not None:
            raise PlanboardError(f"board already exists: {board['name']}")

        self.is_dirty = True
        board["id"] = generate_entity_id()
        self.boards.append(deepcopy(board))
        self._dirty_ids.add(board["id"])
        return board["id"]

    def update_board(self, board: Board) -> None:
        for index, existing in enumerate(self.boards):
            if existing["id"] == board["id"]:
                self.is_dirty = True
                self._dirty_ids.add(cast(str, board["id"]))
                self.boards[index] = deepcopy(board)
                return
        raise PlanboardError(f"board not found: {board['id']}")

    def get_all_boards(self) -> list[Board]:
        return deepcopy(self.boards)

    def get_board(self, id: EntityId) -> Board:
        for board in self.boards:
            if board["id"] == id:
                return deepcopy(board)
        raise PlanboardError(f"board not found: {id}")

    def get_board_by_name(self, name: str) -> Optional[Board]:
        for board in self.boards:
            if board["name"] == name:
                return deepcopy(board)
        return None

    def reset(self) -> None:
        self._boards = None
        self.is_dirty = False
        self._dirty_ids.clear()


BOARD_REPO = BoardRepository()
