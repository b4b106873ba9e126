"""Public interface for the ``dashboard_analytics`` package.

This module exposes the package's API functions and public models/types as the
stable import surface. There is no runtime logic here, only symbol re-exports.
"""

from .api import (
    analyze_efficiency,
    bank_totals,
    build_monthly_category_table,
    build_snapshot,
    build_timeline,
    category_correlations,
    category_month_trends,
    category_totals,
    compare_periods,
    detect_anomalies,
    detect_recurring_patterns,
    filter_transactions,
    half_split_trend,
    parent_category_totals,
    predict_month_end,
    resolve_period,
    summarize,
    weekly_patterns,
)
from .categories import UNCATEGORIZED, UNKNOWN_BANK, CategoryForest
from .models import (
    AnalyticsSnapshot,
    ChangeType,
    CustomCategory,
    Granularity,
    PaymentMethod,
    PeriodKind,
    PeriodRange,
    PeriodSelector,
    Transaction,
    TransactionKind,
)
from .settings import AnalyticsSettings

__all__ = [
    # API
    "build_snapshot",
    "build_monthly_category_table",
    "resolve_period",
    "filter_transactions",
    "category_totals",
    "parent_category_totals",
    "bank_totals",
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
    # Models / types
    "Transaction",
    "TransactionKind",
    "PaymentMethod",
    "CustomCategory",
    "CategoryForest",
    "PeriodKind",
    "PeriodSelector",
    "PeriodRange",
    "Granularity",
    "ChangeType",
    "AnalyticsSnapshot",
    "AnalyticsSettings",
    "UNCATEGORIZED",
    "UNKNOWN_BANK",
]
