"""Runtime-checked access to parsed TOML and `gh --json` payloads.

Both arrive as plain `object`; these accessors check shapes at runtime and
return None on anything unexpected instead of raising.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    if not isinstance(obj, dict):
        return False
    return all(isinstance(key, str) for key in cast(dict[object, object], obj))


def as_str_dict(obj: object) -> StrDict | None:
    return obj if is_str_dict(obj) else None


def as_obj_list(obj: object) -> ObjList | None:
    return cast(ObjList, obj) if isinstance(obj, list) else None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Stripped string at `key`; None when missing, not a string, or blank."""
    raw = table.get(key)
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return None


def get_int(table: Mapping[str, object], key: str) -> int | None:
    """Integer at `key`. JSON/TOML booleans are rejected."""
    raw = table.get(key)
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))


def get_str_list(table: Mapping[str, object], key: str) -> list[str] | None:
    """List of non-blank strings at `key`; a bare string counts as one item.

    None when the key is missing or any item is not a non-blank string.
    """
    raw = table.get(key)
    items = [raw] if isinstance(raw, str) else as_obj_list(raw)
    if items is None:
        return None

    names: list[str] = []
    for item in items:
        if not isinstance(item, str) or not item.strip():
            return None
        names.append(item.strip())
    return names
