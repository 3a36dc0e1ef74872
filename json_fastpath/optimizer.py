"""Best-effort rewrite of a value tree into fast-path friendly shapes.

Only integer-looking mapping keys are addressed. Hooks, custom classes and
hidden attributes are left as they are: objects that are neither mappings
nor sequences pass through by reference.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from functools import partial
from typing import Any

from json_fastpath.logging import get_logger
from json_fastpath.shapes import is_index_key, is_mapping, is_sequence

logger = get_logger(__name__)

Deliver = Callable[[Any], None]


def optimize(tree: Any) -> Any:
    """Return a copy of ``tree`` with integer-looking mapping keys removed.

    Every mapping is rebuilt as a plain ``dict``; lists and tuples are rebuilt
    element by element and keep their kind. Each dropped key is logged at
    WARNING level. Shared references stay shared and reference cycles are
    reproduced in the copy. The copy is built from an explicit stack, so
    nesting depth is not limited by the interpreter recursion limit.

    Examples
    --------
    >>> optimize({"a": 1, "0": 2, "items": [1, 2, 3]})
    {'a': 1, 'items': [1, 2, 3]}
    """
    memo: dict[int, Any] = {}
    stack: list[_Frame] = []
    root: list[Any] = []

    _enter(tree, "root", memo, stack, root.append)
    while stack:
        frame = stack[-1]
        step = next(frame.children, None)
        if step is None:
            stack.pop()
            frame.finish(memo)
            continue
        key, path, value = step
        _enter(value, path, memo, stack, partial(frame.add, key))
    return root[0]


class _Frame:
    """A container copy being filled.

    Lists and dicts are handed to their parent as soon as they are created.
    Tuples are collected into a buffer and handed over when complete.
    """

    __slots__ = ("children", "deliver", "marker", "result")

    def __init__(
        self,
        marker: int,
        result: list | dict,
        children: Iterator[tuple[Any, str, Any]],
        deliver: Deliver | None = None,
    ) -> None:
        self.marker = marker
        self.result = result
        self.children = children
        self.deliver = deliver

    def add(self, key: Any, value: Any) -> None:
        if isinstance(self.result, dict):
            self.result[key] = value
        else:
            self.result.append(value)

    def finish(self, memo: dict[int, Any]) -> None:
        if self.deliver is not None:
            self.deliver(memo.setdefault(self.marker, tuple(self.result)))


def _enter(
    node: Any, path: str, memo: dict[int, Any], stack: list[_Frame], deliver: Deliver
) -> None:
    if not (is_mapping(node) or is_sequence(node)):
        deliver(node)
        return

    marker = id(node)
    if marker in memo:
        deliver(memo[marker])
        return

    if isinstance(node, tuple):
        stack.append(_Frame(marker, [], _items(node, path), deliver))
        return

    result: list | dict = [] if isinstance(node, list) else {}
    children = _items(node, path) if isinstance(node, list) else _members(node, path)
    memo[marker] = result
    deliver(result)
    stack.append(_Frame(marker, result, children))


def _items(node: list | tuple, path: str) -> Iterator[tuple[Any, str, Any]]:
    for index, item in enumerate(node):
        yield index, f"{path}[{index}]", item


def _members(node: Any, path: str) -> Iterator[tuple[Any, str, Any]]:
    for key, value in node.items():
        if is_index_key(key):
            logger.warning("Skipping indexed property: {key}", key=key, path=path)
            continue
        yield key, f"{path}.{key}", value
