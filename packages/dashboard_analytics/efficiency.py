"""Best and worst spending days of the month."""

from __future__ import annotations

from collections.abc import Sequence

from .models import DayAmount, EfficiencyAnalysis, PeriodKind, PeriodRange, TimelineBucket
from .settings import AnalyticsSettings, resolve_settings
from .stats import mean


def analyze_efficiency(
    timeline: Sequence[TimelineBucket],
    period: PeriodRange,
    *,
    settings: AnalyticsSettings | None = None,
) -> EfficiencyAnalysis | None:
    """Rank the month's days that carry spending.

    ``best_days`` lists the cheapest days (ascending), ``worst_days`` the
    most expensive ones, most severe first. Returns ``None`` outside month
    periods or when no day has spending.
    """

    if period.kind is not PeriodKind.MONTH:
        return None

    cfg = resolve_settings(settings)
    spent = [b for b in timeline if b.expense_sum > 0]
    if not spent:
        return None

    spent.sort(key=lambda b: b.expense_sum)
    days = [DayAmount(b.label, b.full_label, b.expense_sum) for b in spent]
    n = cfg.efficiency_days
    return EfficiencyAnalysis(
        best_days=tuple(days[:n]),
        worst_days=tuple(reversed(days[-n:])),
        average_daily_spend=mean(d.amount for d in days),
    )


__all__ = ["analyze_efficiency"]
