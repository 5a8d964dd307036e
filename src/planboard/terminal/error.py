# SPDX-License-Identifier: MIT

import logging
from contextlib import contextmanager
from typing import Iterator

import typer
from rich.console import Console
from rich.markup import escape

from planboard.errors import PlanboardError

logger = logging.getLogger(__name__)


@contextmanager
def report_errors() -> Iterator[None]:
    """Turn a PlanboardError into a red message and exit status 1."""
    try:
        yield
    except PlanboardError as e:
        logger.debug("command failed", exc_info=e)
        Console(stderr=True).print(f"[red]error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e
