"""Category by month spending table.

Backs the "totals" view: one row per expense category, one column per
calendar month ending with the current one (oldest first). Each cell carries
the month's amount and its change against the month before it.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from dateutil.relativedelta import relativedelta

from .categories import CategoryForest
from .models import (
    CustomCategory,
    MonthColumn,
    MonthlyCategoryRow,
    MonthlyCategoryTable,
    MonthlyCell,
    Transaction,
)
from .periods import month_key, month_labels, start_of_month
from .stats import change_vs_previous, safe_div

ALLOWED_MONTH_SPANS: frozenset[int] = frozenset({3, 6, 12})


def build_monthly_category_table(
    transactions: Iterable[Transaction],
    categories: Iterable[CustomCategory] | CategoryForest,
    months: int = 6,
    now: datetime | None = None,
) -> MonthlyCategoryTable:
    if months not in ALLOWED_MONTH_SPANS:
        raise ValueError(f"months must be one of {sorted(ALLOWED_MONTH_SPANS)}, got {months!r}")

    forest = categories if isinstance(categories, CategoryForest) else CategoryForest(categories)
    now = now or datetime.now()
    first = start_of_month(now) - relativedelta(months=months - 1)
    columns: list[MonthColumn] = []
    for i in range(months):
        m = first + relativedelta(months=i)
        short, full = month_labels(m)
        columns.append(MonthColumn(month_key(m), short, full))
    keys = {c.key for c in columns}

    # category -> month key -> amount
    amounts: dict[str, dict[str, float]] = {}
    for tx in transactions:
        if not tx.is_expense:
            continue
        k = month_key(tx.transaction_date)
        if k not in keys:
            continue
        by_month = amounts.setdefault(forest.category_of(tx), {})
        by_month[k] = by_month.get(k, 0.0) + tx.amount

    rows: list[MonthlyCategoryRow] = []
    for category, by_month in amounts.items():
        cells: list[MonthlyCell] = []
        previous: float | None = None
        for col in columns:
            amount = by_month.get(col.key, 0.0)
            change = 0.0 if previous is None else change_vs_previous(amount, previous)
            cells.append(MonthlyCell(col.key, amount, change))
            previous = amount
        total = sum(c.amount for c in cells)
        if total > 0:
            rows.append(MonthlyCategoryRow(category, tuple(cells), total))

    grand_total = sum(r.total for r in rows)
    return MonthlyCategoryTable(
        months=tuple(columns),
        rows=tuple(rows),
        grand_total=grand_total,
        average_per_month=safe_div(grand_total, months),
    )


__all__ = ["ALLOWED_MONTH_SPANS", "build_monthly_category_table"]
