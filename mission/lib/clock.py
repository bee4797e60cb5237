"""Injectable clock for timestamping and schedule calculation."""

from datetime import datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now().astimezone()


class FixedClock:
    """Clock pinned to one instant. Naive instants are read as local time."""

    def __init__(self, instant: datetime):
        self.instant = instant if instant.tzinfo else instant.astimezone()

    def now(self) -> datetime:
        return self.instant

    def advance(self, **kwargs) -> None:
        self.instant = self.instant + timedelta(**kwargs)


_clock: Clock = SystemClock()


def get_clock() -> Clock:
    return _clock


def set_clock(clock: Clock | None) -> None:
    """Install a clock. None restores the system clock."""
    global _clock
    _clock = clock if clock is not None else SystemClock()


def to_ms(instant: datetime) -> int:
    if instant.tzinfo is None:
        instant = instant.astimezone()
    return int(instant.timestamp() * 1000)


def from_ms(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / 1000).astimezone()


def now_ms(clock: Clock | None = None) -> int:
    return to_ms((clock or _clock).now())
