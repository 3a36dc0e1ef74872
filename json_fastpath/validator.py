"""Fast path validator: traversal engine, serialize wrapper and benchmark runner.

Each ``validate`` call collects warnings into its own list, so a single
validator can be shared between threads.
"""

from __future__ import annotations

import math
from typing import Any

from json_fastpath import encoder
from json_fastpath.config import FastPathConfig
from json_fastpath.exceptions import CycleDetectedError, DepthExceededError, ValidationError
from json_fastpath.logging import get_logger
from json_fastpath.models import BenchmarkResult, FastPathWarning, StringifyResult, ValidationResult
from json_fastpath.optimizer import optimize
from json_fastpath.rules import (
    ALL_CALL_RULES,
    CallRule,
    NodeRule,
    node_rules_for,
    run_call_rules,
    run_node_rules,
)
from json_fastpath.shapes import is_leaf, iter_children
from json_fastpath.timing import stopwatch

logger = get_logger(__name__)

ROOT_PATH = "root"
DEFAULT_ITERATIONS = 1000


class FastPathValidator:
    """Checks value trees against the JSON fast path heuristics.

    Parameters
    ----------
    strict : bool, default=False
        Reserved for stricter rule tiers. Stored as ``strict_mode``; no rule
        reads it yet, so it has no effect on results.
    config : FastPathConfig | None
        Depth limit and hook names. ``strict=True`` overrides ``config.strict``.

    Examples
    --------
    >>> validator = FastPathValidator()
    >>> validator.validate({"name": "John", "items": ["a", "b"]}).is_optimized
    True
    >>> validator.validate({"0": "zero"}).summary
    'Found 1 issue(s): 0 high, 1 medium, 0 low impact'
    """

    def __init__(self, strict: bool = False, config: FastPathConfig | None = None) -> None:
        config = config or FastPathConfig()
        if strict and not config.strict:
            config = config.model_copy(update={"strict": True})
        self.config = config
        self.call_rules: list[CallRule] = list(ALL_CALL_RULES)
        self.node_rules: list[NodeRule] = node_rules_for(config.hook_names)

    @property
    def strict_mode(self) -> bool:
        return self.config.strict

    def validate(self, tree: Any, replacer: Any = None, space: Any = None) -> ValidationResult:
        """Report what would keep ``tree`` off the serializer's fast path.

        Parameters
        ----------
        tree : Any
            Value tree to inspect; never modified
        replacer : Any
            Replacer the caller intends to serialize with, if any
        space : Any
            Indentation the caller intends to serialize with, if any

        Returns
        -------
        ValidationResult
            Warnings in firing order: call-level first, then per node in
            depth-first order starting at ``root``

        Raises
        ------
        CycleDetectedError
            If a node contains itself
        DepthExceededError
            If nesting goes deeper than ``config.max_depth``
        """
        warnings: list[FastPathWarning] = []
        run_call_rules(self.call_rules, replacer, space, warnings)
        self._walk(tree, ROOT_PATH, 0, set(), warnings)

        result = ValidationResult.from_warnings(warnings)
        logger.debug("Validated tree: {summary}", summary=result.summary)
        return result

    def _walk(
        self,
        node: Any,
        path: str,
        depth: int,
        ancestors: set[int],
        warnings: list[FastPathWarning],
    ) -> None:
        if is_leaf(node):
            return
        if depth > self.config.max_depth:
            raise DepthExceededError(path, self.config.max_depth)
        marker = id(node)
        if marker in ancestors:
            raise CycleDetectedError(path)

        run_node_rules(self.node_rules, node, path, warnings)

        ancestors.add(marker)
        try:
            for child_path, child in iter_children(node, path):
                self._walk(child, child_path, depth + 1, ancestors, warnings)
        finally:
            ancestors.discard(marker)

    def optimize(self, tree: Any) -> Any:
        """Copy ``tree`` without integer-looking mapping keys (see ``optimizer.optimize``)."""
        return optimize(tree)

    def stringify(self, tree: Any, replacer: Any = None, space: Any = None) -> StringifyResult:
        """Validate ``tree`` then serialize it with the same arguments.

        The tree is serialized as given; diagnostics are advisory and the
        optimizer is not applied. Serializer errors propagate unchanged.
        """
        validation = self.validate(tree, replacer, space)
        text = encoder.dumps(tree, replacer, space, hook_names=self.config.hook_names)
        return StringifyResult(json=text, validation=validation, optimized=validation.is_optimized)

    def benchmark(self, tree: Any, iterations: int = DEFAULT_ITERATIONS) -> BenchmarkResult:
        """Time ``iterations`` compact serializations of ``tree``.

        Raises
        ------
        ValidationError
            If ``iterations`` is not a positive integer
        """
        if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations < 1:
            raise ValidationError("iterations", "must be a positive integer", iterations)

        hook_names = self.config.hook_names
        with stopwatch() as timer:
            for _ in range(iterations):
                encoder.dumps(tree, hook_names=hook_names)

        total_time = timer.duration_ms
        average_time = total_time / iterations
        ops_per_second = 1000 / average_time if average_time > 0 else math.inf
        logger.debug(
            "Benchmarked {iterations} iterations in {total:.3f} ms",
            iterations=iterations,
            total=total_time,
        )
        return BenchmarkResult(
            iterations=iterations,
            total_time=total_time,
            average_time=average_time,
            ops_per_second=ops_per_second,
            validation=self.validate(tree),
        )
