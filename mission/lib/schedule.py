"""Next-occurrence calculation for 5-field recurrence expressions.

Supported subset: exact minute and hour, day-of-week as `*` or 0-6
(0 = Sunday). Day-of-month and month are read but not interpreted.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from mission.errors import ValidationError

from . import clock as clock_mod


@dataclass(frozen=True)
class Recurrence:
    minute: int
    hour: int
    day_of_week: int | None = None


def parse(expr: str) -> Recurrence:
    parts = expr.split()
    if len(parts) != 5:
        raise ValidationError(f"Recurrence '{expr}' must have 5 fields, got {len(parts)}")

    minute = _field(parts[0], "minute", expr, 0, 59)
    hour = _field(parts[1], "hour", expr, 0, 23)
    dow = None if parts[4] == "*" else _field(parts[4], "day-of-week", expr, 0, 6)
    return Recurrence(minute=minute, hour=hour, day_of_week=dow)


def _field(raw: str, name: str, expr: str, low: int, high: int) -> int:
    try:
        value = int(raw)
    except ValueError as e:
        raise ValidationError(f"Recurrence '{expr}': {name} must be an integer, got '{raw}'") from e
    if not low <= value <= high:
        raise ValidationError(f"Recurrence '{expr}': {name} {value} out of range {low}-{high}")
    return value


def cron_weekday(instant: datetime) -> int:
    """Day of week with Sunday = 0."""
    return (instant.weekday() + 1) % 7


def next_occurrence(expr: str | Recurrence, now: datetime) -> datetime:
    """First instant strictly after now matching the recurrence.

    Works in now's timezone. Pass naive local time to keep wall-clock hours
    across DST shifts.
    """
    rec = parse(expr) if isinstance(expr, str) else expr

    candidate = now.replace(hour=rec.hour, minute=rec.minute, second=0, microsecond=0)
    if candidate <= now:
        candidate += timedelta(days=1)

    if rec.day_of_week is not None:
        while cron_weekday(candidate) != rec.day_of_week:
            candidate += timedelta(days=1)

    return candidate


def next_run_ms(expr: str, clock: clock_mod.Clock | None = None) -> int:
    """Next occurrence in epoch ms, measured from the installed clock."""
    now = (clock or clock_mod.get_clock()).now()
    local_now = now.astimezone().replace(tzinfo=None)
    return clock_mod.to_ms(next_occurrence(expr, local_now))
