# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from planboard import state as app_state
from planboard.time import datetime_from_str_utc

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")
DAY_OFFSET_PATTERN = re.compile(r"^-?\d+$")
ID_RANGE_PATTERN = re.compile(r"^(\d+)\s*-\s*(\d+)$")

# Keywords naming the start of a day relative to today
RELATIVE_DAYS: dict[str, int] = {
    "today": 0,
    "t": 0,
    "yesterday": -1,
    "y": -1,
    "tomorrow": 1,
    "o": 1,
}


def parse_datetime(datetime_param: Optional[str | int]) -> Optional[pendulum.DateTime]:
    """Read a CLI date against the active clock and return it in UTC."""
    if datetime_param is None:
        return None

    value = str(datetime_param).strip().lower()
    clock = app_state.get_clock()

    if DATE_PATTERN.match(value):
        return datetime_from_str_utc(value)

    time_match = TIME_PATTERN.match(value)
    if time_match:
        hour, minute = int(time_match.group(1)), int(time_match.group(2))
        if hour > 23 or minute > 59:
            raise typer.BadParameter(f"Not a time of day: {value}")
        return clock.today().set(hour=hour, minute=minute).in_tz("UTC")

    if DAY_OFFSET_PATTERN.match(value):
        return clock.today().add(days=int(value)).in_tz("UTC")
    if value in RELATIVE_DAYS:
        return clock.today().add(days=RELATIVE_DAYS[value]).in_tz("UTC")
    if value in ("now", "n"):
        return clock.now()
    if value == "eod":
        return clock.today().end_of("day").in_tz("UTC")
    raise typer.BadParameter("Incorrect datetime format")


def parse_id_list(id_param: str) -> list[int]:
    """
    Expand an id argument such as "3", "1,4" or "2-5,9".

    Returns the ids sorted and deduplicated.
    """
    ids: set[int] = set()
    for part in (piece.strip() for piece in id_param.split(",")):
        if not part:
            continue
        range_match = ID_RANGE_PATTERN.match(part)
        if range_match:
            first, last = int(range_match.group(1)), int(range_match.group(2))
            if first > last:
                raise typer.BadParameter(
                    f"Invalid range: '{part}' (start must be <= end)"
                )
            ids.update(range(first, last + 1))
        elif part.isdigit():
            ids.add(int(part))
        else:
            raise typer.BadParameter(f"Invalid ID: '{part}'")

    if not ids:
        raise typer.BadParameter("No valid IDs provided")
    return sorted(ids)


def parse_tags(tags_param: Optional[list[str]]) -> Optional[set[str]]:
    if not tags_param:
        return None
    return {tag.strip() for tag in tags_param if tag.strip()}
