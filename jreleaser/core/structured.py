"""Helpers for reading untyped config mappings.

Parsed TOML, YAML and JSON all land here as plain dicts and lists. These
helpers narrow them at runtime so the model can be built without casts.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value, stripped.

    Returns None if missing, not a str, or empty after stripping. YAML turns
    bare versions such as ``1.0`` into floats, so numbers are accepted too
    (``ReleaseModel.validate`` flags a float version).
    """
    value = table.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_bool(table: Mapping[str, object], key: str, default: bool = False) -> bool:
    value = table.get(key)
    if isinstance(value, bool):
        return value
    return default


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys)."""
    return as_str_dict(table.get(key))


def get_tables(table: Mapping[str, object], key: str) -> list[StrDict]:
    """Get a list of tables, dropping entries that are not tables."""
    value = table.get(key)
    if not isinstance(value, list):
        return []
    out: list[StrDict] = []
    for item in cast(list[object], value):
        d = as_str_dict(item)
        if d is not None:
            out.append(d)
    return out


def get_str_list(table: Mapping[str, object], key: str) -> list[str] | None:
    """Get a list of non-empty strings.

    A single string is accepted as a one-element list. Returns None when the
    key is missing or holds something else.
    """
    value = table.get(key)
    if isinstance(value, str):
        s = value.strip()
        return [s] if s else []
    if not isinstance(value, list):
        return None
    out: list[str] = []
    for item in cast(list[object], value):
        if isinstance(item, str) and item.strip():
            out.append(item.strip())
    return out


def get_str_map(table: Mapping[str, object], key: str) -> dict[str, str]:
    """Get a table of string values (e.g. HTTP headers)."""
    d = get_table(table, key) or {}
    return {k: str(v) for k, v in d.items() if isinstance(v, (str, int, float))}
