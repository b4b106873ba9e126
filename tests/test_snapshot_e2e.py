from datetime import datetime, timedelta

import pytest

from dashboard_analytics import AnalyticsSettings, PeriodKind, PeriodSelector, build_snapshot
from dashboard_analytics.models import Granularity

from tests.helpers.factories import CATEGORIES, expense, income


def _october():
    return [
        expense(50000, datetime(2026, 10, 1, 12), category_id="food", bank="Nu"),
        expense(70000, datetime(2026, 10, 15, 18), category_id="transport", bank="Nu"),
    ]


def test_month_snapshot_headline_sections(now):
    snap = build_snapshot(_october(), CATEGORIES, "month", now=now)

    assert snap.period.kind is PeriodKind.MONTH
    assert snap.period.granularity is Granularity.DAY
    assert [(c.name, c.total) for c in snap.category_totals] == [
        ("Transporte", 70000),
        ("Alimentación", 50000),
    ]
    assert [c.percentage for c in snap.category_totals] == pytest.approx([58.333333, 41.666667])
    assert snap.summary.total_expenses == 120000
    assert snap.summary.balance == -120000
    assert [(b.name, b.total) for b in snap.bank_totals] == [("Nu", 120000)]

    assert len(snap.timeline) == 31
    assert snap.timeline[0].expense_sum == 50000
    assert snap.timeline[14].expense_sum == 70000

    assert snap.predictions is not None
    assert snap.predictions.current_total == 120000
    assert snap.predictions.predicted_total == pytest.approx(120000 / 19 * 31)
    assert snap.efficiency_analysis is not None
    assert snap.efficiency_analysis.worst_days[0].amount == 70000
    assert snap.period_comparison is not None
    assert snap.anomalies == ()


def test_snapshot_is_deterministic(now):
    txs = _october() + [income(2_000_000, datetime(2026, 10, 5))]
    first = build_snapshot(txs, CATEGORIES, PeriodSelector("month"), now=now)
    second = build_snapshot(list(txs), list(CATEGORIES), PeriodKind.MONTH, now=now)
    assert first == second


def test_empty_inputs_produce_zeroed_sections(now):
    snap = build_snapshot([], [], "week", now=now)
    assert snap.summary.total_expenses == 0
    assert snap.summary.daily_average == 0
    assert snap.category_totals == ()
    assert snap.parent_category_totals == ()
    assert [b.expense_sum for b in snap.timeline] == [0.0] * 7
    assert snap.trends.expense_trend_pct == 0
    assert snap.category_trends == ()
    assert snap.recurring_patterns == ()
    assert snap.period_comparison is not None
    assert snap.period_comparison.deltas.expenses.percentage_change == 0
    assert snap.anomalies == ()
    assert snap.predictions is None
    assert snap.weekly_patterns == ()
    assert snap.efficiency_analysis is None
    assert snap.correlations == ()


def test_history_outside_period_feeds_trends_and_recurring(now):
    txs = [
        expense(39900, now - timedelta(days=25), description="Netflix 111", category_id="services"),
        expense(39900, now - timedelta(days=10), description="Netflix 222", category_id="services"),
        expense(80000, datetime(2026, 9, 20), category_id="food"),
    ]
    snap = build_snapshot(txs, CATEGORIES, "day", now=now)
    assert snap.summary.transaction_count == 0
    assert snap.period.granularity is Granularity.HOUR
    assert snap.period_comparison is None
    assert [p.description for p in snap.recurring_patterns] == ["Netflix 222"]
    assert {t.category for t in snap.category_trends} == {"Alimentación", "Hogar > Servicios"}


def test_custom_period_and_settings(now):
    txs = [expense(10 * i, datetime(2026, 9, i), category_id="food") for i in range(1, 8)]
    selector = PeriodSelector.custom(datetime(2026, 9, 2).date(), datetime(2026, 9, 4).date())
    snap = build_snapshot(txs, CATEGORIES, selector, now=now, settings=AnalyticsSettings(top_n=1))
    assert snap.summary.total_expenses == 90
    assert len(snap.timeline) == 3
    assert snap.period_comparison is None
    assert snap.predictions is None


def test_unknown_period_kind_is_rejected(now):
    with pytest.raises(ValueError):
        build_snapshot([], [], "fortnight", now=now)
