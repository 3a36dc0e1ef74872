"""Structural introspection shared by the validator, optimizer and encoder.

The validator and the encoder must agree on what a node looks like to the
serializer: which values are leaves, which keys are emitted and which
attributes are carried along without ever being written. Everything that
answers those questions lives here.
"""

from __future__ import annotations

import dataclasses
import datetime
import enum
import inspect
import math
import uuid
from collections.abc import Iterator, Mapping
from typing import Any

DEFAULT_HOOK_NAMES: tuple[str, ...] = ("__json__", "toJSON", "for_json")

# Exact types only: subclasses may carry hooks and are inspected like objects.
_PRIMITIVE_TYPES: frozenset[type] = frozenset({str, int, float, bool, type(None)})

# Classes the serializer handles without consulting a hook.
DEFAULT_CONTAINER_TYPES: frozenset[type] = frozenset({dict, list, tuple})

# Values the encoder renders as a single JSON scalar.
SCALAR_TYPES: tuple[type, ...] = (enum.Enum, uuid.UUID, datetime.date, datetime.time)


def is_leaf(node: Any) -> bool:
    """Return True for values the traversal never descends into.

    Functions, methods and classes are leaves too: the serializer skips them
    the same way it skips plain scalars.
    """
    if type(node) in _PRIMITIVE_TYPES or isinstance(node, SCALAR_TYPES):
        return True
    return inspect.isroutine(node) or isinstance(node, type)


def is_sequence(node: Any) -> bool:
    return isinstance(node, (list, tuple))


def is_mapping(node: Any) -> bool:
    return isinstance(node, Mapping)


def find_hook(target: Any, hook_names: tuple[str, ...] = DEFAULT_HOOK_NAMES) -> str | None:
    """Return the name of the first callable serialization hook on ``target``.

    ``target`` may be an instance (attribute lookup includes its class) or a
    class (only the class and its bases are consulted).
    """
    for name in hook_names:
        if callable(getattr(target, name, None)):
            return name
    return None


def is_index_key(key: Any) -> bool:
    """Check whether ``key`` serializes as a canonical non-negative integer.

    >>> is_index_key("42"), is_index_key("042"), is_index_key("1e2"), is_index_key(7)
    (True, False, False, True)
    """
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return key >= 0
    if isinstance(key, str):
        return key.isascii() and key.isdigit() and str(int(key)) == key
    return False


def coerce_key(key: Any) -> str | None:
    """Convert a mapping key the way ``json`` does, or None if it is dropped."""
    if isinstance(key, str):
        return key
    if key is True:
        return "true"
    if key is False:
        return "false"
    if key is None:
        return "null"
    if isinstance(key, int):
        return str(int(key))
    if isinstance(key, float):
        return repr(key) if math.isfinite(key) else "null"
    return None


def own_attributes(node: Any) -> dict[str, Any]:
    """Instance attributes of ``node``, in definition order.

    Dataclass fields come first, followed by any other ``__dict__`` entries
    and set ``__slots__`` members.
    """
    attrs: dict[str, Any] = {}
    if dataclasses.is_dataclass(node) and not isinstance(node, type):
        for field in dataclasses.fields(node):
            if hasattr(node, field.name):
                attrs[field.name] = getattr(node, field.name)
    instance_dict = getattr(node, "__dict__", None)
    if isinstance(instance_dict, dict):
        for name, value in instance_dict.items():
            attrs.setdefault(name, value)
    for cls in type(node).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__") or name in attrs:
                continue
            if hasattr(node, name):
                attrs[name] = getattr(node, name)
    return attrs


def own_keys(node: Any) -> list[Any]:
    """Keys the node exposes as its own members, serialized or not."""
    if is_mapping(node):
        return list(node.keys())
    if is_sequence(node):
        return []
    return list(own_attributes(node))


def foreign_keys(node: Any) -> list[Any]:
    """Mapping keys that are not strings."""
    if not is_mapping(node):
        return []
    return [key for key in node.keys() if not isinstance(key, str)]


def hidden_attributes(node: Any) -> list[str]:
    """Attributes the node carries that serialization never writes.

    For mappings and sequences every instance attribute is hidden, since only
    items are serialized. For other objects, underscore-prefixed attributes
    are hidden.
    """
    if is_mapping(node) or is_sequence(node):
        instance_dict = getattr(node, "__dict__", None)
        return list(instance_dict) if isinstance(instance_dict, dict) else []
    return [name for name in own_attributes(node) if name.startswith("_")]


def serialized_items(node: Any) -> Iterator[tuple[str, Any]]:
    """Yield ``(key, value)`` pairs a serializer writes for a keyed node.

    Mapping keys are coerced like ``json`` does and uncoercible keys are
    skipped. Objects contribute their public attributes.
    """
    if is_mapping(node):
        for key, value in node.items():
            coerced = coerce_key(key)
            if coerced is not None:
                yield coerced, value
        return
    for name, value in own_attributes(node).items():
        if not name.startswith("_"):
            yield name, value


def iter_children(node: Any, path: str) -> Iterator[tuple[str, Any]]:
    """Yield ``(child_path, child)`` pairs in serialization order."""
    if is_sequence(node):
        for index, item in enumerate(node):
            yield f"{path}[{index}]", item
        return
    for key, value in serialized_items(node):
        yield f"{path}.{key}", value
