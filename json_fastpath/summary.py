"""One-line summaries of validation findings."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from json_fastpath.models import FastPathWarning, Impact

OPTIMIZED_SUMMARY = "Object is fully optimized for fast path serialization"


def count_by_impact(warnings: Sequence[FastPathWarning]) -> dict[Impact, int]:
    """Count warnings per impact tier, always in high, medium, low order."""
    counts: dict[Impact, int] = {"high": 0, "medium": 0, "low": 0}
    for warning in warnings:
        counts[warning.impact] += 1
    return counts


def build_summary(warnings: Sequence[FastPathWarning]) -> str:
    """Summarize ``warnings`` in one line.

    Examples
    --------
    >>> build_summary([])
    'Object is fully optimized for fast path serialization'
    """
    if not warnings:
        return OPTIMIZED_SUMMARY
    counts = count_by_impact(warnings)
    return (
        f"Found {len(warnings)} issue(s): "
        f"{counts['high']} high, {counts['medium']} medium, {counts['low']} low impact"
    )
