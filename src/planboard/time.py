# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from typing import Optional, cast

import pendulum


class Clock(ABC):
    """Source of the current instant and of local calendar boundaries.

    Everything that needs "now" takes a clock so results stay reproducible.
    """

    def __init__(self, timezone: str = "local") -> None:
        self.timezone = timezone

    @abstractmethod
    def now(self) -> pendulum.DateTime: ...

    def local(self, value: pendulum.DateTime) -> pendulum.DateTime:
        return value.in_tz(self.timezone)

    def today(self) -> pendulum.DateTime:
        """Start of the current local day."""
        return self.local(self.now()).start_of("day")

    def start_of_day(self, value: pendulum.DateTime) -> pendulum.DateTime:
        return self.local(value).start_of("day")


class SystemClock(Clock):
    def now(self) -> pendulum.DateTime:
        return pendulum.now("UTC")


class FixedClock(Clock):
    def __init__(self, instant: pendulum.DateTime, timezone: str = "UTC") -> None:
        super().__init__(timezone)
        self.instant = instant.in_tz("UTC")

    def now(self) -> pendulum.DateTime:
        return self.instant

    def advance(self, **kwargs: int) -> None:
        self.instant = self.instant.add(**kwargs)


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_to_display_local_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD ddd")


def datetime_to_display_local_date_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_date_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def datetime_from_str_utc(datetime: str) -> pendulum.DateTime:
    pendulum_date_time = cast(pendulum.DateTime, pendulum.parse(datetime))
    pendulum_date_time = pendulum_date_time.set(tz="local")
    pendulum_date_time = pendulum_date_time.in_tz("UTC")
    return pendulum_date_time


def duration_to_str(duration: pendulum.Duration) -> str:
    """Format as H:MM, adding :SS only when there are leftover seconds."""
    total_minutes, seconds = divmod(int(duration.total_seconds()), 60)
    text = f"{total_minutes // 60}:{total_minutes % 60:02d}"
    if seconds:
        text += f":{seconds:02d}"
    return text


def duration_to_str_optional(duration: Optional[pendulum.Duration]) -> Optional[str]:
    if duration is None:
        return None
    return duration_to_str(duration)


def duration_from_str(duration: str) -> pendulum.Duration:
    hours, minutes, *seconds = map(int, duration.split(":"))
    return pendulum.duration(hours=hours, minutes=minutes, seconds=sum(seconds))


def duration_from_str_optional(duration: Optional[str]) -> Optional[pendulum.Duration]:
    if duration is None:
        return None
    return duration_from_str(duration)
