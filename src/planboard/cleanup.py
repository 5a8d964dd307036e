# SPDX-License-Identifier: MIT

import atexit
import logging

from planboard.repository.board import BOARD_REPO
from planboard.repository.category import CATEGORY_REPO
from planboard.repository.configuration import CONFIGURATION_REPO
from planboard.repository.id_map import ID_MAP_REPO
from planboard.repository.task import TASK_REPO

logger = logging.getLogger(__name__)


def flush() -> None:
    CONFIGURATION_REPO.flush()
    ID_MAP_REPO.flush()

    # Flush entity repositories
    flushed = [
        name
        for name, repository in (
            ("categories", CATEGORY_REPO),
            ("boards", BOARD_REPO),
            ("tasks", TASK_REPO),
        )
        if repository.flush()
    ]
    if flushed:
        logger.debug("flushed %s", ", ".join(flushed))


def register_cleanup() -> None:
    atexit.register(flush)
