"""Partial-merge support: distinguish "not supplied" from "explicitly None"."""

from typing import Any


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def compact(**fields: Any) -> dict[str, Any]:
    """Drop every field still UNSET. None survives and overwrites."""
    return {key: value for key, value in fields.items() if value is not UNSET}


def is_set(value: Any) -> bool:
    return value is not UNSET
