"""Zero-filled timeline buckets for a resolved period.

One bucket is emitted per granularity unit from ``period.start`` through
``period.timeline_end``; units without transactions are kept with zero sums.
Transactions are matched to buckets by unit key (calendar hour, calendar day
or calendar month), so the builder is a single pass over the input.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator
from datetime import datetime, timedelta

from .models import Granularity, PeriodRange, TimelineBucket, Transaction
from .periods import (
    day_labels,
    hour_labels,
    iter_months,
    month_labels,
    start_of_day,
)


def _unit_key(granularity: Granularity) -> Callable[[datetime], Hashable]:
    if granularity is Granularity.HOUR:
        return lambda ts: (ts.date(), ts.hour)
    if granularity is Granularity.MONTH:
        return lambda ts: (ts.year, ts.month)
    return lambda ts: ts.date()


def _iter_units(period: PeriodRange) -> Iterator[datetime]:
    if period.is_empty:
        return
    if period.granularity is Granularity.HOUR:
        cur = period.start.replace(minute=0, second=0, microsecond=0)
        while cur <= period.timeline_end:
            yield cur
            cur += timedelta(hours=1)
    elif period.granularity is Granularity.MONTH:
        yield from iter_months(period.start, period.timeline_end)
    else:
        cur = start_of_day(period.start)
        while cur <= period.timeline_end:
            yield cur
            cur += timedelta(days=1)


_LABELS: dict[Granularity, Callable[[datetime], tuple[str, str]]] = {
    Granularity.HOUR: hour_labels,
    Granularity.DAY: day_labels,
    Granularity.MONTH: month_labels,
}


def bucket_count(period: PeriodRange) -> int:
    return sum(1 for _ in _iter_units(period))


def build_timeline(
    transactions: Iterable[Transaction], period: PeriodRange
) -> tuple[TimelineBucket, ...]:
    """Return one bucket per unit of ``period`` with expense/income sums.

    ``transactions`` is expected to be already filtered to ``period``;
    anything outside the bucketed units is ignored.
    """

    key = _unit_key(period.granularity)
    expenses: dict[Hashable, float] = {}
    income: dict[Hashable, float] = {}
    for tx in transactions:
        k = key(tx.transaction_date)
        target = expenses if tx.is_expense else income
        target[k] = target.get(k, 0.0) + tx.amount

    label = _LABELS[period.granularity]
    buckets: list[TimelineBucket] = []
    for unit in _iter_units(period):
        k = key(unit)
        short, full = label(unit)
        buckets.append(
            TimelineBucket(
                start=unit,
                label=short,
                full_label=full,
                expense_sum=expenses.get(k, 0.0),
                income_sum=income.get(k, 0.0),
            )
        )
    return tuple(buckets)


__all__ = ["build_timeline", "bucket_count"]
