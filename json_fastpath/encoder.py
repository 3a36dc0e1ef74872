"""JSON encoder with a native fast path and a generic slow path.

The fast path hands the tree to ``orjson`` untouched. orjson only accepts
exact ``dict``/``list``/``tuple``/``str``/``int``/``float``/``bool``/``None``
values (plus the scalars it understands natively) with string keys; any
subclass, dataclass or other object makes it bail out, and the generic
encoder takes over.

The generic encoder walks the tree in Python, the way ``JSON.stringify``
does: a serialization hook is called first, then the replacer, then the
value is rendered by type. Its output is compact text from orjson, or from
the standard ``json`` module when orjson refuses the converted value
(integers wider than 64 bits, nesting deeper than orjson allows). Indented
text always comes from the ``json`` module.
"""

from __future__ import annotations

import dataclasses
import datetime
import enum
import inspect
import json
import math
import uuid
from collections.abc import Callable, Iterator, Sequence
from typing import Any

import orjson

from json_fastpath.logging import get_logger
from json_fastpath.shapes import (
    DEFAULT_HOOK_NAMES,
    find_hook,
    is_mapping,
    is_sequence,
    serialized_items,
)

logger = get_logger(__name__)

_FAST_OPTIONS = (
    orjson.OPT_PASSTHROUGH_SUBCLASS
    | orjson.OPT_PASSTHROUGH_DATACLASS
    | orjson.OPT_PASSTHROUGH_DATETIME
)

_MAX_GAP = 10

Replacer = Callable[[str, Any], Any] | Sequence[str | int]


class _Skip:
    """Sentinel returned by a replacer to leave a member out."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "SKIP"


SKIP: Any = _Skip()


def dumps(
    value: Any,
    replacer: Replacer | None = None,
    space: int | str | None = None,
    hook_names: tuple[str, ...] = DEFAULT_HOOK_NAMES,
) -> str:
    """Serialize ``value`` to JSON text.

    Parameters
    ----------
    value : Any
        Tree to serialize
    replacer : Callable[[str, Any], Any] | Sequence[str | int] | None
        Either a function called with ``(key, value)`` for every member (key
        ``""`` for the root, the index as a string for sequence items) whose
        return value is written instead (``SKIP`` leaves the member out), or
        an allowlist of mapping keys
    space : int | str | None
        Indentation: a number of spaces (at most 10) or an indent string (first
        10 characters). Zero, negative numbers and ``""`` mean compact output
    hook_names : tuple[str, ...]
        Method names called to obtain a substitute representation

    Returns
    -------
    str
        JSON text, or ``"null"`` when the root itself is skipped (a function,
        a class, or ``SKIP`` returned by the replacer)

    Raises
    ------
    ValueError
        If the tree contains a reference cycle
    TypeError
        If a value has no JSON representation
    """
    gap = _gap(space)
    if replacer is None and not gap:
        try:
            return orjson.dumps(value, option=_FAST_OPTIONS).decode("utf-8")
        except orjson.JSONEncodeError as exc:
            logger.debug("Fast path rejected value; using generic encoder: {}", exc)

    plain = _Walker(replacer, hook_names).convert(value)
    if plain is SKIP:
        return "null"
    if gap:
        return json.dumps(plain, indent=gap, ensure_ascii=False, allow_nan=False)
    try:
        return orjson.dumps(plain).decode("utf-8")
    except orjson.JSONEncodeError as exc:
        # Integers beyond 64 bits and nesting past orjson's limit
        logger.debug("orjson rejected converted value; using json module: {}", exc)
        return json.dumps(plain, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def _gap(space: int | str | None) -> str:
    if space is None:
        return ""
    if isinstance(space, bool):
        raise TypeError("space must be an int or a str, not bool")
    if isinstance(space, int):
        return " " * min(_MAX_GAP, space) if space >= 1 else ""
    if isinstance(space, str):
        return space[:_MAX_GAP]
    raise TypeError(f"space must be an int or a str, not {type(space).__name__}")


class _Frame:
    """A container being filled: its output and the members still to convert."""

    __slots__ = ("marker", "members", "result")

    def __init__(
        self, marker: int, result: list | dict, members: Iterator[tuple[str, Any]]
    ) -> None:
        self.marker = marker
        self.result = result
        self.members = members

    def add(self, key: str, rendered: Any) -> None:
        if isinstance(self.result, list):
            self.result.append(None if rendered is SKIP else rendered)
        elif rendered is not SKIP:
            self.result[key] = rendered


class _Walker:
    """Converts a tree into plain JSON-native values.

    Containers are filled from an explicit stack, so nesting depth is not
    bounded by the interpreter recursion limit.
    """

    def __init__(self, replacer: Replacer | None, hook_names: tuple[str, ...]) -> None:
        self.hook_names = hook_names
        self.replacer_fn: Callable[[str, Any], Any] | None = None
        self.allowlist: set[str] | None = None
        if callable(replacer):
            self.replacer_fn = replacer
        elif replacer is not None:
            self.allowlist = {str(item) for item in replacer}
        self._active: set[int] = set()

    def convert(self, value: Any) -> Any:
        root, frame = self._open(self._member("", value))
        stack = [frame] if frame is not None else []
        while stack:
            frame = stack[-1]
            step = next(frame.members, None)
            if step is None:
                stack.pop()
                self._active.discard(frame.marker)
                continue
            key, item = step
            rendered, child = self._open(self._member(key, item))
            frame.add(key, rendered)
            if child is not None:
                stack.append(child)
        return root

    def _member(self, key: str, value: Any) -> Any:
        hook = None if isinstance(value, type) else find_hook(value, self.hook_names)
        if hook is not None:
            value = getattr(value, hook)()
        if self.replacer_fn is not None:
            value = self.replacer_fn(key, value)
        return value

    def _open(self, value: Any) -> tuple[Any, _Frame | None]:
        """Render ``value``; containers come back empty, with a frame to fill them."""
        if isinstance(value, enum.Enum):
            value = value.value
        if value is SKIP or value is None or isinstance(value, (bool, str)):
            return value, None
        if isinstance(value, int):
            return int(value), None
        if isinstance(value, float):
            return (float(value) if math.isfinite(value) else None), None
        if isinstance(value, (datetime.date, datetime.time)):
            return value.isoformat(), None
        if isinstance(value, uuid.UUID):
            return str(value), None
        if inspect.isroutine(value) or isinstance(value, type):
            return SKIP, None

        marker = id(value)
        if marker in self._active:
            raise ValueError("Circular reference detected")
        if is_sequence(value):
            result: list | dict = []
            members = ((str(index), item) for index, item in enumerate(value))
        elif is_mapping(value) or dataclasses.is_dataclass(value) or _has_attributes(value):
            result = {}
            members = self._keyed_members(value)
        else:
            raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
        self._active.add(marker)
        return result, _Frame(marker, result, members)

    def _keyed_members(self, value: Any) -> Iterator[tuple[str, Any]]:
        for key, item in serialized_items(value):
            if self.allowlist is None or key in self.allowlist:
                yield key, item


def _has_attributes(value: Any) -> bool:
    return isinstance(getattr(value, "__dict__", None), dict) or bool(
        getattr(type(value), "__slots__", ())
    )


__all__ = ["SKIP", "Replacer", "dumps"]
