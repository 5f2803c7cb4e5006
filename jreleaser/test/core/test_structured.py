"""Tests for jreleaser.core.structured helpers."""

from __future__ import annotations

from jreleaser.core.structured import (
    as_str_dict,
    get_bool,
    get_str,
    get_str_list,
    get_str_map,
    get_tables,
)


def test_as_str_dict_rejects_non_string_keys() -> None:
    assert as_str_dict({"a": 1}) == {"a": 1}
    assert as_str_dict({1: "a"}) is None
    assert as_str_dict(["a"]) is None


def test_get_str_strips_and_accepts_numbers() -> None:
    table: dict[str, object] = {"name": "  app ", "blank": "   ", "version": 1.5, "flag": True}
    assert get_str(table, "name") == "app"
    assert get_str(table, "blank") is None
    assert get_str(table, "version") == "1.5"
    assert get_str(table, "flag") is None
    assert get_str(table, "missing") is None


def test_get_bool_default() -> None:
    assert get_bool({"x": True}, "x") is True
    assert get_bool({"x": "yes"}, "x") is False
    assert get_bool({}, "x", default=True) is True


def test_get_str_list() -> None:
    assert get_str_list({"a": ["x", " y ", "", 3]}, "a") == ["x", "y"]
    assert get_str_list({"a": "single"}, "a") == ["single"]
    assert get_str_list({"a": 3}, "a") is None
    assert get_str_list({}, "a") is None


def test_get_tables_drops_non_tables() -> None:
    data: dict[str, object] = {"upload": [{"name": "a"}, "junk", {"name": "b"}]}
    assert get_tables(data, "upload") == [{"name": "a"}, {"name": "b"}]
    assert get_tables({"upload": {"name": "a"}}, "upload") == []


def test_get_str_map() -> None:
    data: dict[str, object] = {"headers": {"X-A": "1", "X-B": 2, "X-C": ["no"]}}
    assert get_str_map(data, "headers") == {"X-A": "1", "X-B": "2"}
