# SPDX-License-Identifier: MIT

import re
from typing import Optional

import typer


def validate_duration(duration: Optional[str]) -> Optional[str]:
    if duration is None:
        return None
    if not re.match(r"^\d{1,3}:([0-5]\d)$", duration):
        raise typer.BadParameter("Incorrect duration format, expected H:mm")
    return duration


def validate_wip_limit(wip_limit: Optional[int]) -> Optional[int]:
    if wip_limit is None:
        return None
    if wip_limit < 1:
        raise typer.BadParameter("WIP limit must be at least 1")
    return wip_limit
