"""Category, bank and headline totals for a filtered transaction set.

Totals are accumulated into insertion-ordered dicts and then sorted with a
stable sort, so ties keep the order in which each name was first seen.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from .categories import CategoryForest, bank_label
from .models import CategoryTotal, PeriodRange, Summary, Transaction
from .periods import covered_days
from .stats import percent_of, safe_div


def _expense_totals_by(
    transactions: Iterable[Transaction], key: Callable[[Transaction], str]
) -> dict[str, float]:
    totals: dict[str, float] = {}
    for tx in transactions:
        if not tx.is_expense:
            continue
        name = key(tx)
        totals[name] = totals.get(name, 0.0) + tx.amount
    return totals


def _ranked(totals: dict[str, float]) -> tuple[CategoryTotal, ...]:
    grand = sum(totals.values())
    rows = [CategoryTotal(name, total, percent_of(total, grand)) for name, total in totals.items()]
    rows.sort(key=lambda r: r.total, reverse=True)
    return tuple(rows)


def category_totals(
    transactions: Iterable[Transaction], forest: CategoryForest
) -> tuple[CategoryTotal, ...]:
    """Expense totals per full category path, largest first."""

    return _ranked(_expense_totals_by(transactions, forest.category_of))


def parent_category_totals(
    transactions: Iterable[Transaction], forest: CategoryForest
) -> tuple[CategoryTotal, ...]:
    """Expense totals rolled up to the root category of each path."""

    return _ranked(_expense_totals_by(transactions, lambda tx: forest.root_name(tx.category_id)))


def bank_totals(transactions: Iterable[Transaction]) -> tuple[CategoryTotal, ...]:
    return _ranked(_expense_totals_by(transactions, bank_label))


def expense_income_totals(transactions: Iterable[Transaction]) -> tuple[float, float]:
    expenses = 0.0
    income = 0.0
    for tx in transactions:
        if tx.is_expense:
            expenses += tx.amount
        else:
            income += tx.amount
    return expenses, income


def summarize(transactions: Sequence[Transaction], period: PeriodRange) -> Summary:
    """Headline figures: totals, balance, daily average and pending count."""

    expenses, income = expense_income_totals(transactions)
    return Summary(
        total_expenses=expenses,
        total_income=income,
        balance=income - expenses,
        daily_average=safe_div(expenses, covered_days(period)),
        transaction_count=len(transactions),
        pending_count=sum(1 for tx in transactions if not tx.reported),
    )


__all__ = [
    "category_totals",
    "parent_category_totals",
    "bank_totals",
    "expense_income_totals",
    "summarize",
]
