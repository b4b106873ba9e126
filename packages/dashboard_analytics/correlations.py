"""Same-day co-occurrence of expense categories."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import date
from itertools import combinations

from .categories import CategoryForest
from .models import Correlation, Transaction
from .settings import AnalyticsSettings, resolve_settings
from .stats import safe_div


def category_correlations(
    transactions: Iterable[Transaction],
    forest: CategoryForest,
    *,
    settings: AnalyticsSettings | None = None,
) -> tuple[Correlation, ...]:
    """Count category pairs that appear on the same calendar day.

    ``strength`` is the share of expense-bearing days on which the pair
    co-occurred. Pairs below ``correlation_min_count`` are dropped.
    """

    cfg = resolve_settings(settings)

    # day -> distinct categories; pairs are keyed in sorted order
    by_day: dict[date, dict[str, None]] = {}
    for tx in transactions:
        if tx.is_expense:
            by_day.setdefault(tx.transaction_date.date(), {})[forest.category_of(tx)] = None

    pairs: Counter[tuple[str, str]] = Counter()
    for names in by_day.values():
        for a, b in combinations(sorted(names), 2):
            pairs[(a, b)] += 1

    total_days = len(by_day)
    rows = [
        Correlation(a, b, count, safe_div(count, total_days))
        for (a, b), count in pairs.items()
        if count >= cfg.correlation_min_count
    ]
    rows.sort(key=lambda c: c.co_occurrence_count, reverse=True)
    return tuple(rows[: cfg.top_n])


__all__ = ["category_correlations"]
