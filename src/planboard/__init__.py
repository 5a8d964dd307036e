# SPDX-License-Identifier: MIT

import locale
import logging

from planboard.cleanup import register_cleanup
from planboard.initialize import initialize
from planboard.terminal.app import run

logger = logging.getLogger(__name__)


def main() -> None:
    try:
        # title sorting collates with the user's locale
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as error:
        logger.warning("keeping default collation: %s", error)
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
