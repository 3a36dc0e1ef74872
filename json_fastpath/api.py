"""Module-level shortcuts bound to a shared default validator.

Examples
--------
>>> from json_fastpath import stringify
>>> stringify({"x": 1}).json
'{"x":1}'
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from json_fastpath.models import BenchmarkResult, StringifyResult, ValidationResult
from json_fastpath.optimizer import optimize
from json_fastpath.validator import DEFAULT_ITERATIONS, FastPathValidator


@lru_cache(maxsize=1)
def default_validator() -> FastPathValidator:
    """Validator with default configuration, shared by the shortcuts below."""
    return FastPathValidator()


def validate(tree: Any, replacer: Any = None, space: Any = None) -> ValidationResult:
    return default_validator().validate(tree, replacer, space)


def stringify(tree: Any, replacer: Any = None, space: Any = None) -> StringifyResult:
    return default_validator().stringify(tree, replacer, space)


def benchmark(tree: Any, iterations: int = DEFAULT_ITERATIONS) -> BenchmarkResult:
    return default_validator().benchmark(tree, iterations)


__all__ = ["benchmark", "default_validator", "optimize", "stringify", "validate"]
