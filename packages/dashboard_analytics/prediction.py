"""Linear month-end spend extrapolation."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from .aggregation import expense_income_totals
from .models import PeriodKind, PeriodRange, Prediction, Transaction
from .periods import days_in_month
from .stats import percent_of, safe_div


def predict_month_end(
    transactions: Iterable[Transaction],
    period: PeriodRange,
    now: datetime | None = None,
) -> Prediction | None:
    """Extrapolate the current month's spend from its daily average so far.

    Only month periods qualify; anything else returns ``None``.
    """

    if period.kind is not PeriodKind.MONTH:
        return None

    now = now or period.end
    day = now.day
    month_days = days_in_month(now)
    current_total, _income = expense_income_totals(transactions)
    daily_average = safe_div(current_total, day)

    return Prediction(
        current_total=current_total,
        predicted_total=daily_average * month_days,
        predicted_remaining=daily_average * (month_days - day),
        daily_average=daily_average,
        days_remaining=month_days - day,
        progress_pct=percent_of(day, month_days),
    )


__all__ = ["predict_month_end"]
