from datetime import datetime

import pytest

from dashboard_analytics.categories import CategoryForest
from dashboard_analytics.monthly_table import build_monthly_category_table

from tests.helpers.factories import CATEGORIES, expense, income


def _txs():
    return [
        expense(100, datetime(2026, 8, 10), category_id="food"),
        expense(150, datetime(2026, 9, 2), category_id="food"),
        expense(120, datetime(2026, 10, 1), category_id="food"),
        expense(60, datetime(2026, 10, 9), category_id="internet"),
        # outside the three month window, and income
        expense(5000, datetime(2026, 7, 31), category_id="transport"),
        income(3000, datetime(2026, 9, 1)),
    ]


def test_three_month_table(now):
    table = build_monthly_category_table(_txs(), CATEGORIES, months=3, now=now)
    assert [m.key for m in table.months] == ["2026-08", "2026-09", "2026-10"]
    assert [m.label for m in table.months] == ["Aug 2026", "Sep 2026", "Oct 2026"]
    assert table.months[-1].full_label == "October 2026"

    food, internet = table.rows
    assert food.category == "Alimentación"
    assert [c.amount for c in food.cells] == [100, 150, 120]
    assert [c.change_percent for c in food.cells] == pytest.approx([0.0, 50.0, -20.0])
    assert food.total == 370

    assert internet.category == "Hogar > Servicios > Internet"
    assert [c.change_percent for c in internet.cells] == [0.0, 0.0, 100.0]

    assert table.grand_total == 430
    assert table.average_per_month == pytest.approx(430 / 3)


def test_table_spans_year_boundary():
    table = build_monthly_category_table([], CategoryForest(CATEGORIES), months=3, now=datetime(2027, 1, 15))
    assert [m.key for m in table.months] == ["2026-11", "2026-12", "2027-01"]
    assert table.rows == ()
    assert table.average_per_month == 0


def test_twelve_months_covers_the_year(now):
    table = build_monthly_category_table(_txs(), CATEGORIES, months=12, now=now)
    assert table.months[0].key == "2025-11"
    assert "Transporte" in [r.category for r in table.rows]


@pytest.mark.parametrize("months", [0, 1, 4, 24])
def test_unsupported_month_span_is_rejected(now, months):
    with pytest.raises(ValueError, match="months must be one of"):
        build_monthly_category_table([], CATEGORIES, months=months, now=now)
