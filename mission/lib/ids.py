from __future__ import annotations

import secrets
import threading
import time
import uuid as _uuid
from collections.abc import Iterable
from typing import Protocol, TypeVar

from mission.errors import AmbiguousIdError, NotFoundError, ValidationError

# Monotonic state for same-millisecond IDs (RFC 9562 Method 2)
_state_lock = threading.Lock()
_last_timestamp_ms = 0
_counter = 0

_USE_NATIVE = hasattr(_uuid, "uuid7")


class HasId(Protocol):
    id: str


class HasName(Protocol):
    name: str


R = TypeVar("R", bound=HasId)
N = TypeVar("N", bound=HasName)


def uuid7() -> str:
    """Generate UUID v7 (time-ordered) record IDs."""
    if _USE_NATIVE:
        return str(_uuid.uuid7())

    global _last_timestamp_ms, _counter

    with _state_lock:
        timestamp_ms = int(time.time() * 1000)

        if timestamp_ms == _last_timestamp_ms:
            _counter = (_counter + 1) & 0xFFF  # 12-bit counter wraps
        else:
            _counter = secrets.randbits(12)
            _last_timestamp_ms = timestamp_ms

        # RFC 9562: 48-bit timestamp + 4-bit version + 12-bit counter
        time_high = (timestamp_ms >> 16) & 0xFFFFFFFF
        time_low = timestamp_ms & 0xFFFF
        time_low_and_version = (time_low << 16) | (7 << 12) | _counter

        # Variant 10, then 62 random bits
        rand_b_high = secrets.randbits(14)
        rand_b_low = secrets.randbits(48)
        variant_and_rand = (0b10 << 62) | (rand_b_high << 48) | rand_b_low

        uuid_int = (time_high << 96) | (time_low_and_version << 64) | variant_and_rand

        return str(_uuid.UUID(int=uuid_int))


def short_id(full_id: str) -> str:
    """Return last 8 chars, the form users type back in.

    UUID7 prefix is timestamp-only (collides on rapid generation). Suffix is
    always high-entropy.
    """
    return full_id[-8:]


def resolve(fragment: str, candidates: Iterable[R], *, strict: bool = False) -> R | None:
    """Find the record whose id equals or ends with fragment.

    Matching is case-sensitive: ids are opaque tokens. On multiple matches the
    first in iteration order wins unless strict, which raises AmbiguousIdError.
    Returns None when nothing matches.
    """
    if not fragment:
        raise ValidationError("ID fragment must be a non-empty string")

    matches = []
    for record in candidates:
        if record.id == fragment:
            return record
        if record.id.endswith(fragment):
            if not strict:
                return record
            matches.append(record)

    if not matches:
        return None

    if len(matches) > 1:
        ambiguous = [short_id(r.id) for r in matches]
        raise AmbiguousIdError(f"Ambiguous ID: '{fragment}' matches multiple entries: {ambiguous}")

    return matches[0]


def require(fragment: str, candidates: Iterable[R], kind: str, *, strict: bool = False) -> R:
    """resolve(), converting a miss into NotFoundError."""
    record = resolve(fragment, candidates, strict=strict)
    if record is None:
        raise NotFoundError(f"{kind} not found: {fragment}")
    return record


def match_name(name: str, candidates: Iterable[N]) -> N | None:
    """Case-insensitive exact match on name. First match wins."""
    wanted = name.casefold()
    for record in candidates:
        if record.name.casefold() == wanted:
            return record
    return None
