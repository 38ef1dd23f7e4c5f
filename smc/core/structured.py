"""Typed accessors for parsed TOML tables.

TOML gives back ``dict[str, Any]``; these helpers check the runtime type of
each value they hand out so config code stays fully typed.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict keyed by strings."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table, or None if missing or not a table."""
    return as_str_dict(table.get(key))


def get_int(table: Mapping[str, object], key: str) -> int | None:
    """Get an integer value.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    value = table.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def get_float(table: Mapping[str, object], key: str) -> float | None:
    """Get a number as float; integers are widened, booleans rejected."""
    value = table.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)
