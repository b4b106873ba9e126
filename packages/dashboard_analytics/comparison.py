"""Current period versus the immediately preceding period of equal length."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .aggregation import expense_income_totals
from .categories import CategoryForest
from .models import (
    CategoryDelta,
    Delta,
    PeriodComparison,
    PeriodKind,
    PeriodRange,
    Totals,
    TotalsDelta,
    Transaction,
)
from .periods import previous_range
from .settings import AnalyticsSettings, resolve_settings
from .stats import change_vs_previous

_SKIPPED_KINDS = frozenset({PeriodKind.DAY, PeriodKind.CUSTOM})


def _delta(current: float, previous: float) -> Delta:
    return Delta(current - previous, change_vs_previous(current, previous))


def _expenses_by_category(
    transactions: Iterable[Transaction], forest: CategoryForest
) -> dict[str, float]:
    totals: dict[str, float] = {}
    for tx in transactions:
        if tx.is_expense:
            name = forest.category_of(tx)
            totals[name] = totals.get(name, 0.0) + tx.amount
    return totals


def compare_periods(
    current: Sequence[Transaction],
    all_transactions: Iterable[Transaction],
    period: PeriodRange,
    forest: CategoryForest,
    *,
    settings: AnalyticsSettings | None = None,
) -> PeriodComparison | None:
    """Compare ``current`` (already filtered) with the preceding period.

    The previous period is ``[start - (end - start), start)`` recomputed from
    the unfiltered ``all_transactions``. Returns ``None`` for day and custom
    selectors.
    """

    if period.kind in _SKIPPED_KINDS:
        return None

    cfg = resolve_settings(settings)
    prev_start, prev_end = previous_range(period)
    previous = [t for t in all_transactions if prev_start <= t.transaction_date < prev_end]

    cur_expenses, cur_income = expense_income_totals(current)
    prev_expenses, prev_income = expense_income_totals(previous)

    cur_by_cat = _expenses_by_category(current, forest)
    prev_by_cat = _expenses_by_category(previous, forest)

    deltas: list[CategoryDelta] = []
    for name in dict.fromkeys([*cur_by_cat, *prev_by_cat]):
        cur = cur_by_cat.get(name, 0.0)
        prev = prev_by_cat.get(name, 0.0)
        d = _delta(cur, prev)
        deltas.append(CategoryDelta(name, cur, prev, d.absolute_change, d.percentage_change))
    deltas.sort(key=lambda d: abs(d.absolute_change), reverse=True)

    return PeriodComparison(
        previous_start=prev_start,
        previous_end=prev_end,
        previous_totals=Totals(prev_expenses, prev_income),
        deltas=TotalsDelta(
            expenses=_delta(cur_expenses, prev_expenses),
            income=_delta(cur_income, prev_income),
        ),
        category_deltas=tuple(deltas[: cfg.top_n]),
    )


__all__ = ["compare_periods"]
