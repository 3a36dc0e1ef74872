"""Detector rules for JSON fast path serialization.

Call rules look at the arguments of a serialization call and fire at most
once per ``validate``. Node rules look at one node of the value tree and fire
at most once per node. Rules are independent: one node can trigger several.
"""

from __future__ import annotations

from typing import Any, Protocol

from json_fastpath.models import FastPathWarning, Impact, WarningType
from json_fastpath.shapes import (
    DEFAULT_CONTAINER_TYPES,
    DEFAULT_HOOK_NAMES,
    find_hook,
    foreign_keys,
    hidden_attributes,
    is_index_key,
    is_sequence,
    own_keys,
)


class CallRule(Protocol):
    """Protocol for a rule evaluated against the call arguments."""

    type: WarningType
    impact: Impact
    description: str

    def check(self, replacer: Any, space: Any) -> FastPathWarning | None:
        """Return a warning if the arguments force the slow path."""
        ...


class NodeRule(Protocol):
    """Protocol for a rule evaluated against one node of the value tree."""

    type: WarningType
    impact: Impact
    description: str

    def check(self, node: Any, path: str) -> FastPathWarning | None:
        """Return a warning if ``node`` slows serialization down."""
        ...


# ---------------------------------------------------------------------------
# Call rules
# ---------------------------------------------------------------------------


class ReplacerRule:
    """A replacer is applied to every member, so the fast path is never taken."""

    type: WarningType = "replacer"
    impact: Impact = "high"
    description = "Replacer argument supplied"

    def check(self, replacer: Any, space: Any) -> FastPathWarning | None:
        if replacer is None:
            return None
        return FastPathWarning(
            type=self.type,
            message="Replacer function prevents fast path optimization",
            impact=self.impact,
            suggestion="Remove replacer if possible, or transform data before serialization",
        )


class SpaceRule:
    """Pretty-printing goes through the generic encoder."""

    type: WarningType = "space"
    impact: Impact = "high"
    description = "Space/indentation argument supplied"

    def check(self, replacer: Any, space: Any) -> FastPathWarning | None:
        if space is None:
            return None
        return FastPathWarning(
            type=self.type,
            message="Space/gap argument prevents fast path optimization",
            impact=self.impact,
            suggestion=(
                "Remove space parameter for compact serialization, or format after serialization"
            ),
        )


# ---------------------------------------------------------------------------
# Node rules
# ---------------------------------------------------------------------------


class CustomHookRule:
    """The node exposes a callable serialization hook."""

    type: WarningType = "toJSON"
    impact: Impact = "high"
    description = "Custom serialization hook on node"

    def __init__(self, hook_names: tuple[str, ...] = DEFAULT_HOOK_NAMES) -> None:
        self.hook_names = hook_names

    def check(self, node: Any, path: str) -> FastPathWarning | None:
        hook = find_hook(node, self.hook_names)
        if hook is None:
            return None
        return FastPathWarning(
            type=self.type,
            path=path,
            message=f"Custom {hook}() method found at {path}",
            impact=self.impact,
            suggestion=f"Remove {hook}() or call it manually before serialization",
        )


class ClassHookRule:
    """The node's class is not a plain container and defines a serialization hook."""

    type: WarningType = "prototype-toJSON"
    impact: Impact = "high"
    description = "Custom serialization hook on node class"

    def __init__(self, hook_names: tuple[str, ...] = DEFAULT_HOOK_NAMES) -> None:
        self.hook_names = hook_names

    def check(self, node: Any, path: str) -> FastPathWarning | None:
        cls = type(node)
        if cls in DEFAULT_CONTAINER_TYPES:
            return None
        hook = find_hook(cls, self.hook_names)
        if hook is None:
            return None
        return FastPathWarning(
            type=self.type,
            path=path,
            message=f"Class {cls.__name__} has custom {hook}() at {path}",
            impact=self.impact,
            suggestion="Use plain dicts and lists instead of custom classes",
        )


class IndexedKeysRule:
    """A keyed node uses integer-looking keys, which belong in a list."""

    type: WarningType = "indexed-properties"
    impact: Impact = "medium"
    description = "Integer-like keys on a mapping or object"

    def check(self, node: Any, path: str) -> FastPathWarning | None:
        if is_sequence(node):
            return None
        if not any(is_index_key(key) for key in own_keys(node)):
            return None
        return FastPathWarning(
            type=self.type,
            path=path,
            message=f"Object has indexed properties at {path}",
            impact=self.impact,
            suggestion="Use lists for indexed data or rename keys to non-numeric strings",
        )


class ForeignKeysRule:
    """A mapping has keys that are not strings."""

    type: WarningType = "symbol-keys"
    impact: Impact = "low"
    description = "Non-string mapping keys"

    def check(self, node: Any, path: str) -> FastPathWarning | None:
        if not foreign_keys(node):
            return None
        return FastPathWarning(
            type=self.type,
            path=path,
            message=f"Object has non-string keys at {path}",
            impact=self.impact,
            suggestion="Non-string keys are coerced or dropped and slow down serialization",
        )


class HiddenAttributesRule:
    """The node carries attributes serialization walks past without writing."""

    type: WarningType = "non-enumerable"
    impact: Impact = "low"
    description = "Attributes skipped by serialization"

    def check(self, node: Any, path: str) -> FastPathWarning | None:
        hidden = hidden_attributes(node)
        if not hidden:
            return None
        return FastPathWarning(
            type=self.type,
            path=path,
            message=f"Non-enumerable properties found at {path}: {', '.join(hidden)}",
            impact=self.impact,
            suggestion=(
                "These properties slow down serialization even though they're not included"
            ),
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

ALL_CALL_RULES: list[CallRule] = [
    ReplacerRule(),
    SpaceRule(),
]

ALL_NODE_RULES: list[NodeRule] = [
    CustomHookRule(),
    ClassHookRule(),
    IndexedKeysRule(),
    ForeignKeysRule(),
    HiddenAttributesRule(),
]


def node_rules_for(hook_names: tuple[str, ...]) -> list[NodeRule]:
    """Build the ordered node rule set for a custom list of hook names."""
    if hook_names == DEFAULT_HOOK_NAMES:
        return list(ALL_NODE_RULES)
    return [
        CustomHookRule(hook_names),
        ClassHookRule(hook_names),
        IndexedKeysRule(),
        ForeignKeysRule(),
        HiddenAttributesRule(),
    ]


def run_call_rules(
    rules: list[CallRule], replacer: Any, space: Any, into: list[FastPathWarning]
) -> None:
    """Append the warnings of every call rule that fires to ``into``."""
    for rule in rules:
        if warning := rule.check(replacer, space):
            into.append(warning)


def run_node_rules(
    rules: list[NodeRule], node: Any, path: str, into: list[FastPathWarning]
) -> None:
    """Append the warnings of every node rule that fires to ``into``."""
    for rule in rules:
        if warning := rule.check(node, path):
            into.append(warning)
