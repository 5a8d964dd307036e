# SPDX-License-Identifier: MIT

from contextvars import ContextVar

from planboard.time import Clock, SystemClock

_show_header: ContextVar[bool] = ContextVar("show_header", default=True)

_clear_ids: ContextVar[bool] = ContextVar("clear_ids", default=True)

# Unknown sort keys raise instead of falling back to creation order
_strict: ContextVar[bool] = ContextVar("strict", default=False)

_clock: ContextVar[Clock] = ContextVar("clock", default=SystemClock())


def set_show_header(value: bool) -> None:
    _show_header.set(value)


def get_show_header() -> bool:
    return _show_header.get()


def set_clear_ids(value: bool) -> None:
    _clear_ids.set(value)


def get_clear_ids() -> bool:
    return _clear_ids.get()


def set_strict(value: bool) -> None:
    _strict.set(value)


def get_strict() -> bool:
    return _strict.get()


def set_clock(value: Clock) -> None:
    _clock.set(value)


def get_clock() -> Clock:
    return _clock.get()
