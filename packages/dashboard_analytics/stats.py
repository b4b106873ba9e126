"""Zero-guarded arithmetic shared by every analyzer.

No analyzer divides directly; a zero (or non-finite) denominator yields
``0.0`` so snapshots never carry NaN or infinity.
"""

from __future__ import annotations

import math
from collections.abc import Iterable


def safe_div(numerator: float, denominator: float) -> float:
    if denominator == 0 or not math.isfinite(denominator):
        return 0.0
    return numerator / denominator


def percent_of(part: float, whole: float) -> float:
    return safe_div(part, whole) * 100.0


def percent_change(current: float, previous: float) -> float:
    """Signed change of ``current`` over ``previous`` in percent (0 when undefined)."""

    return safe_div(current - previous, previous) * 100.0


def change_vs_previous(current: float, previous: float) -> float:
    """Percent change where a category appearing from nothing counts as +100."""

    if previous > 0:
        return percent_change(current, previous)
    return 100.0 if current > 0 else 0.0


def mean(values: Iterable[float]) -> float:
    items = list(values)
    return safe_div(math.fsum(items), len(items))


__all__ = ["safe_div", "percent_of", "percent_change", "change_vs_previous", "mean"]
