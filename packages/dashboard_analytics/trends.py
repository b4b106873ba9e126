"""Trend analyses.

Two independent views:

- :func:`half_split_trend` compares the recent half of a timeline with the
  earlier half (midpoint by floor division).
- :func:`category_month_trends` compares each category's spend in the
  current calendar month with the previous calendar month over the *full*
  transaction set, whatever period the dashboard shows.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from dateutil.relativedelta import relativedelta

from .categories import CategoryForest
from .models import ChangeType, CategoryTrend, TimelineBucket, Transaction, TrendSummary
from .periods import start_of_month
from .settings import AnalyticsSettings, resolve_settings
from .stats import percent_change


def half_split_trend(timeline: Sequence[TimelineBucket]) -> TrendSummary:
    if len(timeline) <= 1:
        return TrendSummary()

    mid = len(timeline) // 2
    earlier, recent = timeline[:mid], timeline[mid:]
    return TrendSummary(
        expense_trend_pct=percent_change(
            sum(b.expense_sum for b in recent), sum(b.expense_sum for b in earlier)
        ),
        income_trend_pct=percent_change(
            sum(b.income_sum for b in recent), sum(b.income_sum for b in earlier)
        ),
    )


def classify_change(
    current: float, previous: float, *, stable_threshold_pct: float = 5.0
) -> tuple[float, ChangeType]:
    """Return ``(change_percent, change_type)`` for one category."""

    if previous == 0 and current > 0:
        return 100.0, ChangeType.NEW
    if current == 0 and previous > 0:
        return -100.0, ChangeType.DECREASE
    pct = percent_change(current, previous)
    if abs(pct) < stable_threshold_pct:
        return pct, ChangeType.STABLE
    return pct, ChangeType.INCREASE if pct > 0 else ChangeType.DECREASE


def category_month_trends(
    transactions: Iterable[Transaction],
    forest: CategoryForest,
    now: datetime | None = None,
    *,
    settings: AnalyticsSettings | None = None,
) -> tuple[CategoryTrend, ...]:
    """Month-over-month trend per expense category, largest swing first."""

    cfg = resolve_settings(settings)
    now = now or datetime.now()
    current_start = start_of_month(now)
    next_start = current_start + relativedelta(months=1)
    previous_start = current_start - relativedelta(months=1)

    # category -> [current, previous]
    amounts: dict[str, list[float]] = {}
    for tx in transactions:
        if not tx.is_expense:
            continue
        ts = tx.transaction_date
        if current_start <= ts < next_start:
            slot = 0
        elif previous_start <= ts < current_start:
            slot = 1
        else:
            continue
        pair = amounts.setdefault(forest.category_of(tx), [0.0, 0.0])
        pair[slot] += tx.amount

    trends: list[CategoryTrend] = []
    for category, (current, previous) in amounts.items():
        pct, change_type = classify_change(
            current, previous, stable_threshold_pct=cfg.stable_threshold_pct
        )
        trends.append(CategoryTrend(category, current, previous, pct, change_type))
    trends.sort(key=lambda t: abs(t.change_percent), reverse=True)
    return tuple(trends)


__all__ = ["half_split_trend", "classify_change", "category_month_trends"]
