"""Tests for json_fastpath.encoder."""

from __future__ import annotations

import datetime
import enum
import uuid
from dataclasses import dataclass

import pytest

from json_fastpath.encoder import SKIP, dumps


class Color(enum.Enum):
    RED = "red"


class WithHook:
    def __json__(self) -> dict:
        return {"kind": "hooked"}


class Plain:
    def __init__(self) -> None:
        self.a = 1
        self._b = 2


@dataclass
class Point:
    x: int
    y: int


class TestFastPath:
    def test_compact_output(self) -> None:
        assert dumps({"x": 1, "items": [1, 2, 3], "ok": True, "none": None}) == (
            '{"x":1,"items":[1,2,3],"ok":true,"none":null}'
        )

    def test_primitives(self) -> None:
        assert dumps(None) == "null"
        assert dumps("text") == '"text"'
        assert dumps(1.5) == "1.5"

    def test_tuple_is_array(self) -> None:
        assert dumps((1, "a")) == '[1,"a"]'

    def test_non_ascii_kept(self) -> None:
        assert dumps({"name": "café"}) == '{"name":"café"}'

    def test_native_scalars(self) -> None:
        value = uuid.UUID("12345678-1234-5678-1234-567812345678")
        assert dumps([Color.RED, value]) == '["red","12345678-1234-5678-1234-567812345678"]'

    def test_non_finite_floats_become_null(self) -> None:
        assert dumps({"v": float("nan"), "w": float("inf")}) == '{"v":null,"w":null}'


class TestGenericPath:
    def test_dataclass(self) -> None:
        assert dumps(Point(1, 2)) == '{"x":1,"y":2}'

    def test_object_public_attributes(self) -> None:
        assert dumps(Plain()) == '{"a":1}'

    def test_dict_subclass(self) -> None:
        class Record(dict):
            pass

        assert dumps({"r": Record(a=1)}) == '{"r":{"a":1}}'

    def test_coerced_keys(self) -> None:
        assert dumps({1: "a", False: "b", None: "c", 1.5: "d"}) == (
            '{"1":"a","false":"b","null":"c","1.5":"d"}'
        )

    def test_uncoercible_keys_dropped(self) -> None:
        assert dumps({("a",): 1, "b": 2}) == '{"b":2}'

    def test_datetimes_are_iso_strings(self) -> None:
        when = datetime.datetime(2024, 1, 2, 3, 4, 5)
        assert dumps({"when": when, "day": datetime.date(2024, 1, 2)}) == (
            '{"when":"2024-01-02T03:04:05","day":"2024-01-02"}'
        )

    def test_functions_are_skipped(self) -> None:
        assert dumps({"f": print, "a": 1}) == '{"a":1}'
        assert dumps([print, 1]) == "[null,1]"
        assert dumps({"cls": Plain, "a": 1}) == '{"a":1}'

    def test_skipped_root(self) -> None:
        assert dumps(print) == "null"

    def test_cycle_raises(self) -> None:
        data: list = []
        data.append(data)
        with pytest.raises(ValueError, match="Circular reference detected"):
            dumps(data)

    def test_shared_reference_is_not_a_cycle(self) -> None:
        shared = Point(1, 2)
        assert dumps([shared, shared]) == '[{"x":1,"y":2},{"x":1,"y":2}]'

    def test_unsupported_type_raises(self) -> None:
        with pytest.raises(TypeError, match="set"):
            dumps({"values": {1, 2}})


class TestHooks:
    def test_hook_is_called(self) -> None:
        assert dumps({"item": WithHook()}) == '{"item":{"kind":"hooked"}}'

    def test_hook_on_root(self) -> None:
        assert dumps(WithHook()) == '{"kind":"hooked"}'

    def test_hook_on_dict_subclass(self) -> None:
        class Record(dict):
            def toJSON(self) -> str:
                return "record"

        assert dumps([Record(a=1)]) == '["record"]'

    def test_custom_hook_names(self) -> None:
        class Custom:
            def __init__(self) -> None:
                self.raw = 1

            def as_json(self) -> int:
                return 42

        assert dumps(Custom(), hook_names=("as_json",)) == "42"
        assert dumps(Custom(), hook_names=("toJSON",)) == '{"raw":1}'

    def test_hook_result_goes_through_replacer(self) -> None:
        seen = []

        def replacer(key: str, value: object) -> object:
            seen.append((key, value))
            return value

        dumps({"item": WithHook()}, replacer=replacer)
        assert ("item", {"kind": "hooked"}) in seen


class TestReplacer:
    def test_function_sees_every_member(self) -> None:
        keys = []

        def replacer(key: str, value: object) -> object:
            keys.append(key)
            return value

        assert dumps({"a": [1, 2]}, replacer=replacer) == '{"a":[1,2]}'
        assert keys == ["", "a", "0", "1"]

    def test_function_transforms_values(self) -> None:
        def double(key: str, value: object) -> object:
            return value * 2 if isinstance(value, int) else value

        assert dumps({"a": 1, "b": [2]}, replacer=double) == '{"a":2,"b":[4]}'

    def test_skip_omits_mapping_member(self) -> None:
        def drop_b(key: str, value: object) -> object:
            return SKIP if key == "b" else value

        assert dumps({"a": 1, "b": 2}, replacer=drop_b) == '{"a":1}'

    def test_skip_in_sequence_becomes_null(self) -> None:
        def drop_first(key: str, value: object) -> object:
            return SKIP if key == "0" else value

        assert dumps([1, 2], replacer=drop_first) == "[null,2]"

    def test_skip_root(self) -> None:
        assert dumps({"a": 1}, replacer=lambda key, value: SKIP) == "null"

    def test_allowlist(self) -> None:
        tree = {"a": 1, "b": {"a": 2, "c": 3}, "c": 4}
        assert dumps(tree, replacer=["a", "b"]) == '{"a":1,"b":{"a":2}}'

    def test_allowlist_with_int_entries(self) -> None:
        assert dumps({1: "x", 2: "y"}, replacer=[1]) == '{"1":"x"}'

    def test_allowlist_keeps_sequence_items(self) -> None:
        assert dumps({"a": [{"a": 1, "b": 2}]}, replacer=["a"]) == '{"a":[{"a":1}]}'


class TestSpace:
    def test_int_space(self) -> None:
        assert dumps({"x": [1]}, space=2) == '{\n  "x": [\n    1\n  ]\n}'

    def test_str_space(self) -> None:
        assert dumps([1], space="--") == "[\n--1\n]"

    @pytest.mark.parametrize("space", [0, -3, ""])
    def test_empty_gap_is_compact(self, space: int | str) -> None:
        assert dumps({"x": 1}, space=space) == '{"x":1}'

    def test_int_space_clamped(self) -> None:
        assert dumps([1], space=20) == "[\n" + " " * 10 + "1\n]"

    def test_str_space_truncated(self) -> None:
        assert dumps([1], space="abcdefghijkl") == "[\nabcdefghij1\n]"

    def test_non_ascii_kept_when_indented(self) -> None:
        assert dumps({"name": "café"}, space=1) == '{\n "name": "café"\n}'

    def test_enum_when_indented(self) -> None:
        assert dumps({"c": Color.RED}, space=1) == '{\n "c": "red"\n}'

    def test_non_finite_floats_when_indented(self) -> None:
        assert dumps([float("nan")], space=1) == "[\n null\n]"

    @pytest.mark.parametrize("space", [True, 1.5, [2]])
    def test_invalid_space_type(self, space: object) -> None:
        with pytest.raises(TypeError, match="space must be"):
            dumps({"x": 1}, space=space)  # type: ignore[arg-type]


def nested_lists(depth: int) -> list:
    tree: list = []
    for _ in range(depth - 1):
        tree = [tree]
    return tree


class TestBeyondOrjsonLimits:
    def test_wide_int(self) -> None:
        assert dumps({"x": 2**64}) == '{"x":18446744073709551616}'

    def test_wide_negative_int_in_object(self) -> None:
        assert dumps(Point(-(2**70), 0)) == '{"x":-1180591620717411303424,"y":0}'

    def test_wide_int_keeps_non_ascii(self) -> None:
        assert dumps(["é", 2**64]) == '["é",18446744073709551616]'

    def test_wide_int_indented(self) -> None:
        assert dumps([2**64], space=1) == "[\n 18446744073709551616\n]"

    def test_deep_plain_tree(self) -> None:
        assert dumps(nested_lists(400)) == "[" * 400 + "]" * 400

    def test_deep_tree_with_replacer(self) -> None:
        keys = []

        def replacer(key: str, value: object) -> object:
            keys.append(key)
            return value

        assert dumps(nested_lists(450), replacer=replacer) == "[" * 450 + "]" * 450
        assert len(keys) == 450

    def test_deep_objects(self) -> None:
        tree: object = Point(0, 0)
        for _ in range(300):
            tree = Point(tree, 1)  # type: ignore[arg-type]
        text = dumps(tree)
        assert text.startswith('{"x":{"x":')
        assert text.count('"y":1') == 300

    def test_deep_cycle_still_detected(self) -> None:
        tree = nested_lists(300)
        inner = tree
        while inner:
            inner = inner[0]
        inner.append(tree)
        with pytest.raises(ValueError, match="Circular reference detected"):
            dumps(tree)
