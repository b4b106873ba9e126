"""Public API for the ``dashboard_analytics`` package.

:func:`build_snapshot` is the combined entry point: it resolves the period,
filters the transactions once and runs every analyzer over the same inputs.
Each analyzer is also re-exported here so consumers that render a single
panel can call it directly.

The engine is pure. It performs no I/O, keeps no module-level mutable state
and rebuilds the category forest on every call, so concurrent calls with
different inputs cannot interfere.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from .aggregation import (
    bank_totals,
    category_totals,
    parent_category_totals,
    summarize,
)
from .anomalies import detect_anomalies
from .categories import CategoryForest
from .comparison import compare_periods
from .correlations import category_correlations
from .efficiency import analyze_efficiency
from .logging_setup import get_logger
from .models import (
    AnalyticsSnapshot,
    CustomCategory,
    PeriodKind,
    PeriodSelector,
    Transaction,
)
from .monthly_table import build_monthly_category_table  # noqa: F401  (re-export)
from .periods import filter_transactions, resolve_period
from .prediction import predict_month_end
from .recurring import detect_recurring_patterns
from .settings import AnalyticsSettings, resolve_settings
from .timeline import build_timeline
from .trends import category_month_trends, half_split_trend
from .weekly import weekly_patterns

_logger = get_logger("dashboard_analytics.api")


def _as_selector(period: PeriodSelector | PeriodKind | str) -> PeriodSelector:
    if isinstance(period, PeriodSelector):
        return period
    return PeriodSelector(PeriodKind(period))


def build_snapshot(
    transactions: Iterable[Transaction],
    categories: Iterable[CustomCategory],
    period: PeriodSelector | PeriodKind | str,
    *,
    now: datetime | None = None,
    settings: AnalyticsSettings | None = None,
) -> AnalyticsSnapshot:
    """Compute every dashboard section for ``period``.

    Parameters
    ----------
    transactions:
        The user's full transaction history. Analyzers that look outside the
        selected period (month trends, recurring patterns, period
        comparison) read from this unfiltered set.
    categories:
        Flat category list; parent pointers are resolved per call.
    period:
        A :class:`PeriodSelector`, or a bare kind (``"month"``) for the
        non-custom periods.
    now:
        Reference instant. Defaults to the current local time; tests pin it.
    settings:
        Analyzer thresholds; ``None`` uses the defaults.
    """

    cfg = resolve_settings(settings)
    now = now or datetime.now()
    selector = _as_selector(period)

    history = list(transactions)
    forest = CategoryForest(categories)
    resolved = resolve_period(selector, now, settings=cfg)
    current = filter_transactions(history, resolved)

    timeline = build_timeline(current, resolved)

    snapshot = AnalyticsSnapshot(
        period=resolved,
        summary=summarize(current, resolved),
        category_totals=category_totals(current, forest),
        parent_category_totals=parent_category_totals(current, forest),
        bank_totals=bank_totals(current),
        timeline=timeline,
        trends=half_split_trend(timeline),
        category_trends=category_month_trends(history, forest, now, settings=cfg),
        recurring_patterns=detect_recurring_patterns(history, forest, now, settings=cfg),
        period_comparison=compare_periods(current, history, resolved, forest, settings=cfg),
        anomalies=detect_anomalies(current, forest, settings=cfg),
        predictions=predict_month_end(current, resolved, now),
        weekly_patterns=weekly_patterns(current),
        efficiency_analysis=analyze_efficiency(timeline, resolved, settings=cfg),
        correlations=category_correlations(current, forest, settings=cfg),
    )
    _logger.debug(
        "snapshot %s: %d/%d transactions, %d categories, %d buckets",
        resolved.kind.value,
        len(current),
        len(history),
        len(forest),
        len(timeline),
    )
    return snapshot


__all__ = [
    "build_snapshot",
    "build_monthly_category_table",
    "bank_totals",
    "category_totals",
    "parent_category_totals",
    "summarize",
    "build_timeline",
    "half_split_trend",
    "category_month_trends",
    "detect_recurring_patterns",
    "compare_periods",
    "detect_anomalies",
    "predict_month_end",
    "weekly_patterns",
    "analyze_efficiency",
    "category_correlations",
    "resolve_period",
    "filter_transactions",
]
