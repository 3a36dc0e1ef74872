"""Tests for json_fastpath.shapes."""

from __future__ import annotations

import datetime
import enum
import uuid
from dataclasses import dataclass, field

import pytest

from json_fastpath.shapes import (
    coerce_key,
    find_hook,
    foreign_keys,
    hidden_attributes,
    is_index_key,
    is_leaf,
    iter_children,
    own_attributes,
    own_keys,
    serialized_items,
)


class Level(enum.IntEnum):
    LOW = 1


class MyStr(str):
    pass


@dataclass
class Item:
    name: str
    tags: list = field(default_factory=list)
    _cache: dict = field(default_factory=dict)


class Slotted:
    __slots__ = ("a", "_b", "unset")

    def __init__(self) -> None:
        self.a = 1
        self._b = 2


class TestIsLeaf:
    @pytest.mark.parametrize(
        "value",
        [
            None,
            True,
            0,
            1.5,
            "s",
            Level.LOW,
            uuid.uuid4(),
            datetime.date(2024, 1, 1),
            datetime.time(12, 0),
            len,
            lambda: None,
            dict,
        ],
    )
    def test_leaves(self, value: object) -> None:
        assert is_leaf(value)

    @pytest.mark.parametrize("value", [[], (), {}, Item("x"), MyStr("s"), object()])
    def test_non_leaves(self, value: object) -> None:
        assert not is_leaf(value)


class TestIndexKeys:
    @pytest.mark.parametrize("key", ["0", "7", "42", "1000", 0, 12])
    def test_index_keys(self, key: object) -> None:
        assert is_index_key(key)

    @pytest.mark.parametrize("key", ["", "00", "01", "-1", "1.5", "1e2", " 1", "١", -1, True, 1.0])
    def test_not_index_keys(self, key: object) -> None:
        assert not is_index_key(key)


class TestCoerceKey:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("a", "a"),
            (True, "true"),
            (False, "false"),
            (None, "null"),
            (3, "3"),
            (Level.LOW, "1"),
            (1.5, "1.5"),
            (float("inf"), "null"),
            (("a",), None),
            (frozenset(), None),
        ],
    )
    def test_coercion(self, key: object, expected: str | None) -> None:
        assert coerce_key(key) == expected


class TestFindHook:
    def test_first_matching_name_wins(self) -> None:
        class Both:
            def toJSON(self) -> None: ...

            def __json__(self) -> None: ...

        assert find_hook(Both()) == "__json__"
        assert find_hook(Both(), ("toJSON",)) == "toJSON"

    def test_class_lookup(self) -> None:
        class Hooked:
            def for_json(self) -> None: ...

        assert find_hook(Hooked) == "for_json"
        assert find_hook(dict) is None


class TestAttributes:
    def test_dataclass_fields_first(self) -> None:
        item = Item("x")
        item.extra = 1  # type: ignore[attr-defined]
        assert list(own_attributes(item)) == ["name", "tags", "_cache", "extra"]

    def test_slots(self) -> None:
        assert own_attributes(Slotted()) == {"a": 1, "_b": 2}

    def test_own_keys(self) -> None:
        assert own_keys({"a": 1, 2: 3}) == ["a", 2]
        assert own_keys([1, 2]) == []
        assert own_keys(Slotted()) == ["a", "_b"]

    def test_foreign_keys(self) -> None:
        assert foreign_keys({"a": 1, 2: 3, None: 4}) == [2, None]
        assert foreign_keys(Slotted()) == []

    def test_hidden_on_objects(self) -> None:
        assert hidden_attributes(Item("x")) == ["_cache"]

    def test_hidden_on_container_subclass(self) -> None:
        class Rows(list):
            pass

        rows = Rows()
        rows.total = 0  # type: ignore[attr-defined]
        assert hidden_attributes(rows) == ["total"]
        assert hidden_attributes([1]) == []


class TestChildren:
    def test_serialized_items_of_mapping(self) -> None:
        assert list(serialized_items({"a": 1, 2: "b", ("t",): "c"})) == [("a", 1), ("2", "b")]

    def test_serialized_items_of_object(self) -> None:
        assert list(serialized_items(Item("x", ["t"]))) == [("name", "x"), ("tags", ["t"])]

    def test_sequence_paths(self) -> None:
        assert list(iter_children(["a", "b"], "root")) == [("root[0]", "a"), ("root[1]", "b")]

    def test_keyed_paths(self) -> None:
        assert list(iter_children({"a": 1}, "root.x")) == [("root.x.a", 1)]
