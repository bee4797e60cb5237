"""Calendar entries: recurring jobs keyed by title for idempotent seeding."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from mission.api.refs import require_record, require_text
from mission.errors import MissionError, ValidationError
from mission.lib import clock, ids, store
from mission.lib.schedule import next_run_ms
from mission.models import CalendarEntry, EntryType, parse_enum

logger = logging.getLogger(__name__)

SEED_FIELDS = {
    "title",
    "description",
    "schedule",
    "cron_expr",
    "enabled",
    "type",
    "agent_id",
    "next_run_at",
    "last_run_at",
}


def _row_to_entry(row: store.Record) -> CalendarEntry:
    return store.from_row(row, CalendarEntry)


def _entry_fields(
    title: str,
    description: str,
    schedule: str,
    cron_expr: str,
    enabled: bool,
    type: EntryType | str,
    agent_id: str,
    next_run_at: int | None,
    last_run_at: int | None,
) -> dict[str, Any]:
    require_text(title, "title")
    require_text(cron_expr, "cron_expr")
    entry_type = parse_enum(EntryType, type, "entry type")
    if not isinstance(enabled, bool):
        raise ValidationError(f"enabled must be a boolean, got {enabled!r}")
    return {
        "title": title,
        "description": description or "",
        "schedule": schedule or "",
        "cron_expr": cron_expr,
        "enabled": enabled,
        "type": entry_type.value,
        "agent_id": agent_id or "",
        "next_run_at": next_run_at,
        "last_run_at": last_run_at,
    }


def create_entry(
    title: str,
    description: str,
    schedule: str,
    cron_expr: str,
    enabled: bool,
    type: EntryType | str,
    agent_id: str,
    next_run_at: int | None = None,
    last_run_at: int | None = None,
) -> str:
    """Insert entry. Titles are not checked for uniqueness here."""
    fields = _entry_fields(
        title, description, schedule, cron_expr, enabled, type, agent_id, next_run_at, last_run_at
    )
    return store.ensure().insert("calendar", fields)


def list_entries() -> list[CalendarEntry]:
    """All entries ordered by their human schedule text."""
    entries = [_row_to_entry(row) for row in store.ensure().scan("calendar")]
    return sorted(entries, key=lambda e: e.schedule.casefold())


def get_entry(entry_id: str) -> CalendarEntry | None:
    row = store.ensure().get("calendar", entry_id)
    return _row_to_entry(row) if row else None


def get_entry_by_title(title: str) -> CalendarEntry | None:
    rows = store.ensure().scan("calendar", index="by_title", eq=title, limit=1)
    return _row_to_entry(rows[0]) if rows else None


def toggle_entry(entry_id: str) -> bool:
    """Flip enabled. Returns the new value."""
    row = require_record("calendar", entry_id)
    enabled = not row.get("enabled", False)
    store.ensure().patch("calendar", entry_id, {"enabled": enabled})
    logger.info(f"Calendar entry {ids.short_id(entry_id)} enabled={enabled}")
    return enabled


def upsert_entry(
    title: str,
    description: str,
    schedule: str,
    cron_expr: str,
    enabled: bool,
    type: EntryType | str,
    agent_id: str,
    next_run_at: int | None = None,
    last_run_at: int | None = None,
) -> str:
    """Overwrite the entry with this title, or create it.

    Lookup and write are separate store calls: two concurrent first upserts
    of one title can both insert.
    """
    fields = _entry_fields(
        title, description, schedule, cron_expr, enabled, type, agent_id, next_run_at, last_run_at
    )
    existing = get_entry_by_title(title)
    if existing is None:
        entry_id = store.ensure().insert("calendar", fields)
        logger.info(f"Inserted calendar entry '{title}' ({ids.short_id(entry_id)})")
        return entry_id

    store.ensure().patch("calendar", existing.id, fields)
    logger.info(f"Replaced calendar entry '{title}' ({ids.short_id(existing.id)})")
    return existing.id


def record_run(entry_id: str) -> int:
    """Stamp last_run_at with now and roll next_run_at forward. Returns next_run_at."""
    row = require_record("calendar", entry_id)
    current = clock.get_clock()
    next_run_at = next_run_ms(row["cron_expr"], current)
    store.ensure().patch(
        "calendar",
        entry_id,
        {"last_run_at": clock.now_ms(current), "next_run_at": next_run_at},
    )
    return next_run_at


@dataclass
class SeedResult:
    upserted: list[tuple[str, str]] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)


def _seed_one(raw: Mapping[str, Any]) -> str:
    if not isinstance(raw, Mapping):
        raise ValidationError(f"Calendar entry must be a mapping: {raw!r}")
    entry = dict(raw)
    missing = [k for k in ("title", "cron_expr") if not entry.get(k)]
    if missing:
        raise ValidationError(f"Calendar entry missing {', '.join(missing)}: {raw!r}")

    unknown = set(entry) - SEED_FIELDS
    if unknown:
        raise ValidationError(f"Unknown calendar fields: {sorted(unknown)}")

    entry.setdefault("description", "")
    entry.setdefault("schedule", "")
    entry.setdefault("enabled", True)
    entry.setdefault("type", EntryType.CRON.value)
    entry.setdefault("agent_id", "")
    if entry["enabled"] and entry.get("next_run_at") is None:
        entry["next_run_at"] = next_run_ms(entry["cron_expr"])
    return upsert_entry(**entry)


def seed_entries(entries: Iterable[Mapping[str, Any]]) -> SeedResult:
    """Upsert each entry by title, independently of the others.

    Enabled entries without next_run_at get one computed from cron_expr. An
    entry that fails is recorded in `failed` with the reason and the rest are
    still attempted.
    """
    result = SeedResult()
    for raw in entries:
        title = str(raw.get("title") or "<untitled>") if isinstance(raw, Mapping) else repr(raw)
        try:
            result.upserted.append((title, _seed_one(raw)))
        except MissionError as e:
            logger.warning(f"Failed to seed calendar entry '{title}': {e}")
            result.failed.append((title, str(e)))
    return result
