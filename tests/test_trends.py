from datetime import datetime

import pytest

from dashboard_analytics.categories import CategoryForest
from dashboard_analytics.models import ChangeType, TimelineBucket
from dashboard_analytics.trends import category_month_trends, classify_change, half_split_trend

from tests.helpers.factories import CATEGORIES, expense, income


def _bucket(expense_sum: float, income_sum: float = 0.0) -> TimelineBucket:
    return TimelineBucket(datetime(2026, 10, 1), "x", "x", expense_sum, income_sum)


def test_half_split_compares_recent_half_with_earlier_half():
    timeline = [_bucket(10, 100), _bucket(10, 0), _bucket(15, 0), _bucket(15, 50)]
    trend = half_split_trend(timeline)
    assert trend.expense_trend_pct == pytest.approx(50.0)
    assert trend.income_trend_pct == pytest.approx(-50.0)


def test_half_split_uses_floor_midpoint():
    # mid = 1: earlier = [10], recent = [5, 5]
    trend = half_split_trend([_bucket(10), _bucket(5), _bucket(5)])
    assert trend.expense_trend_pct == pytest.approx(0.0)


def test_half_split_skipped_for_single_bucket_and_zero_guarded():
    assert half_split_trend([_bucket(10)]).expense_trend_pct == 0
    assert half_split_trend([]).income_trend_pct == 0
    trend = half_split_trend([_bucket(0), _bucket(10)])
    assert trend.expense_trend_pct == 0.0


@pytest.mark.parametrize(
    ("current", "previous", "pct", "change_type"),
    [
        (50000, 0, 100.0, ChangeType.NEW),
        (0, 40000, -100.0, ChangeType.DECREASE),
        (103000, 100000, 3.0, ChangeType.STABLE),
        (95500, 100000, -4.5, ChangeType.STABLE),
        (150, 100, 50.0, ChangeType.INCREASE),
        (50, 100, -50.0, ChangeType.DECREASE),
        (0, 0, 0.0, ChangeType.STABLE),
    ],
)
def test_classify_change(current, previous, pct, change_type):
    got_pct, got_type = classify_change(current, previous)
    assert got_pct == pytest.approx(pct)
    assert got_type is change_type


def test_category_month_trends_use_full_history_and_sort_by_swing(now):
    forest = CategoryForest(CATEGORIES)
    txs = [
        # previous month (September)
        expense(100000, datetime(2026, 9, 3), category_id="internet"),
        expense(40000, datetime(2026, 9, 20), category_id="transport"),
        expense(200, datetime(2026, 9, 21), category_id="food"),
        # current month (October)
        expense(103000, datetime(2026, 10, 3), category_id="internet"),
        expense(50000, datetime(2026, 10, 2), category_id="food"),
        expense(60000, datetime(2026, 10, 28), category_id="food"),
        # ignored: older than the previous month, and income
        expense(999999, datetime(2026, 8, 31), category_id="transport"),
        income(5000, datetime(2026, 10, 5)),
    ]
    trends = category_month_trends(txs, forest, now)
    by_name = {t.category: t for t in trends}

    assert by_name["Hogar > Servicios > Internet"].change_type is ChangeType.STABLE
    assert by_name["Transporte"].change_type is ChangeType.DECREASE
    assert by_name["Transporte"].change_percent == -100.0
    assert by_name["Alimentación"].current_amount == 110000
    assert by_name["Alimentación"].change_type is ChangeType.INCREASE

    swings = [abs(t.change_percent) for t in trends]
    assert swings == sorted(swings, reverse=True)
    assert trends[0].category == "Alimentación"


def test_new_category_this_month(now):
    forest = CategoryForest(CATEGORIES)
    trends = category_month_trends([expense(50000, datetime(2026, 10, 1), category_id="food")], forest, now)
    assert len(trends) == 1
    assert trends[0].change_type is ChangeType.NEW
    assert trends[0].change_percent == 100.0
    assert trends[0].previous_amount == 0
