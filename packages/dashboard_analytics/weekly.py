"""Spend by day of week."""

from __future__ import annotations

from collections.abc import Iterable

from .models import Transaction, WeekdayPattern
from .periods import WEEKDAY_NAMES
from .stats import safe_div


def weekly_patterns(transactions: Iterable[Transaction]) -> tuple[WeekdayPattern, ...]:
    """Total, count and average expense per weekday, highest total first.

    Only weekdays with at least one expense are listed.
    """

    totals: dict[int, float] = {}
    counts: dict[int, int] = {}
    for tx in transactions:
        if not tx.is_expense:
            continue
        wd = tx.transaction_date.weekday()
        totals[wd] = totals.get(wd, 0.0) + tx.amount
        counts[wd] = counts.get(wd, 0) + 1

    rows = [
        WeekdayPattern(
            day=WEEKDAY_NAMES[wd],
            total=totals[wd],
            average=safe_div(totals[wd], counts[wd]),
            count=counts[wd],
        )
        for wd in sorted(totals)
    ]
    rows.sort(key=lambda r: r.total, reverse=True)
    return tuple(rows)


__all__ = ["weekly_patterns"]
