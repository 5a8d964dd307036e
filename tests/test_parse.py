# SPDX-License-Identifier: MIT

import pendulum
import pytest
import typer

from planboard import state as app_state
from planboard.terminal.parse import parse_datetime, parse_id_list, parse_tags
from planboard.time import SystemClock

NOW = pendulum.datetime(2026, 10, 18, 9, 0, tz="UTC")


@pytest.fixture(autouse=True)
def pinned_clock(clock):
    app_state.set_clock(clock)
    yield clock
    app_state.set_clock(SystemClock())


def test_relative_keywords_follow_the_clock():
    assert parse_datetime("now") == NOW
    assert parse_datetime("today") == pendulum.datetime(2026, 10, 18, tz="UTC")
    assert parse_datetime("o") == pendulum.datetime(2026, 10, 19, tz="UTC")
    assert parse_datetime("-1") == pendulum.datetime(2026, 10, 17, tz="UTC")
    assert parse_datetime("14:30") == pendulum.datetime(2026, 10, 18, 14, 30, tz="UTC")
    assert parse_datetime("eod") == pendulum.datetime(2026, 10, 18, tz="UTC").end_of("day")


def test_calendar_dates_are_read_as_local_days():
    parsed = parse_datetime("2026-12-01")

    assert parsed.timezone_name == "UTC"
    assert parsed.in_tz("local").to_date_string() == "2026-12-01"


def test_unreadable_dates_are_rejected():
    assert parse_datetime(None) is None
    with pytest.raises(typer.BadParameter):
        parse_datetime("next thursday")
    with pytest.raises(typer.BadParameter):
        parse_datetime("25:00")


def test_id_lists_expand_ranges():
    assert parse_id_list("4") == [4]
    assert parse_id_list("1, 3-5,3") == [1, 3, 4, 5]


@pytest.mark.parametrize("bad", ["", "x", "5-2", "1-2-3"])
def test_bad_id_lists_are_rejected(bad):
    with pytest.raises(typer.BadParameter):
        parse_id_list(bad)


def test_tags_are_trimmed_and_blank_ones_dropped():
    assert parse_tags(None) is None
    assert parse_tags([" home ", "", "errand"]) == {"home", "errand"}
