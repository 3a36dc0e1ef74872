"""Result models for json-fastpath."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from json_fastpath.summary import build_summary, count_by_impact

Impact = Literal["low", "medium", "high"]

WarningType = Literal[
    "replacer",
    "space",
    "toJSON",
    "prototype-toJSON",
    "indexed-properties",
    "symbol-keys",
    "non-enumerable",
]

IMPACT_ORDER: tuple[Impact, ...] = ("high", "medium", "low")


@dataclass(frozen=True, slots=True)
class FastPathWarning:
    """A single structural finding that pushes serialization off the fast path."""

    type: WarningType
    message: str
    impact: Impact
    suggestion: str
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.path is not None:
            data["path"] = self.path
        data.update(message=self.message, impact=self.impact, suggestion=self.suggestion)
        return data


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of one ``validate`` call.

    Build it with :meth:`from_warnings` so the flags and the summary always
    agree with the warnings: ``is_optimized`` implies ``can_use_fast_path``.
    """

    is_optimized: bool
    can_use_fast_path: bool
    warnings: tuple[FastPathWarning, ...] = ()
    summary: str = ""

    @classmethod
    def from_warnings(cls, warnings: list[FastPathWarning] | tuple[FastPathWarning, ...]) -> ValidationResult:
        """Snapshot ``warnings`` into a result."""
        frozen = tuple(warnings)
        return cls(
            is_optimized=not frozen,
            can_use_fast_path=not any(w.impact == "high" for w in frozen),
            warnings=frozen,
            summary=build_summary(frozen),
        )

    @property
    def high(self) -> list[FastPathWarning]:
        """Warnings that block the fast path."""
        return [w for w in self.warnings if w.impact == "high"]

    @property
    def medium(self) -> list[FastPathWarning]:
        return [w for w in self.warnings if w.impact == "medium"]

    @property
    def low(self) -> list[FastPathWarning]:
        return [w for w in self.warnings if w.impact == "low"]

    def counts(self) -> dict[Impact, int]:
        return count_by_impact(self.warnings)

    def of_type(self, warning_type: WarningType) -> list[FastPathWarning]:
        return [w for w in self.warnings if w.type == warning_type]

    def to_dict(self) -> dict[str, Any]:
        """camelCase representation used in JSON output."""
        return {
            "isOptimized": self.is_optimized,
            "canUseFastPath": self.can_use_fast_path,
            "warnings": [w.to_dict() for w in self.warnings],
            "summary": self.summary,
        }


@dataclass(frozen=True, slots=True)
class StringifyResult:
    """Serialized text bundled with the diagnostics gathered before serializing."""

    json: str
    validation: ValidationResult
    optimized: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "json": self.json,
            "validation": self.validation.to_dict(),
            "optimized": self.optimized,
        }


@dataclass(frozen=True, slots=True)
class BenchmarkResult:
    """Timing metrics for repeated serialization of one tree.

    Times are in milliseconds. ``ops_per_second`` is ``math.inf`` when the
    clock could not resolve a single iteration.
    """

    iterations: int
    total_time: float
    average_time: float
    ops_per_second: float
    validation: ValidationResult = field(
        default_factory=lambda: ValidationResult.from_warnings(())
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "iterations": self.iterations,
            "totalTime": self.total_time,
            "averageTime": self.average_time,
            "opsPerSecond": self.ops_per_second,
            "validation": self.validation.to_dict(),
        }
