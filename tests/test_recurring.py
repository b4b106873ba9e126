from datetime import datetime, timedelta

import pytest

from dashboard_analytics.categories import CategoryForest
from dashboard_analytics.recurring import (
    detect_recurring_patterns,
    frequency_label,
    normalize_description,
)

from tests.helpers.factories import CATEGORIES, expense, income


@pytest.mark.parametrize(
    ("raw", "key"),
    [
        ("Netflix 12345", "netflix"),
        ("NETFLIX-67890", "netflix"),
        ("  Spotify P0001 ", "spotify p"),
        ("Supermercado La Economía Central 123", "supermercado la econ"),
        ("12345 ***", ""),
    ],
)
def test_normalize_description(raw, key):
    assert normalize_description(raw) == key


@pytest.mark.parametrize(
    ("days", "label"),
    [(1, "Weekly"), (7, "Weekly"), (7.5, "Biweekly"), (15, "Biweekly"), (30, "Monthly"), (32, "Monthly"), (45, "Every 45 days")],
)
def test_frequency_label(days, label):
    assert frequency_label(days) == label


def test_netflix_payments_collapse_into_one_biweekly_pattern(now):
    forest = CategoryForest(CATEGORIES)
    txs = [
        expense(39900, datetime(2026, 10, 1, 10), description="Netflix 12345", bank="Nu"),
        expense(39900, datetime(2026, 10, 16, 10), description="Netflix 67890", category_id="services", bank="Davivienda"),
    ]
    patterns = detect_recurring_patterns(txs, forest, now)
    assert len(patterns) == 1
    p = patterns[0]
    assert p.frequency_label == "Biweekly"
    assert p.occurrence_count == 2
    assert p.average_amount == 39900
    assert p.average_interval_days == pytest.approx(15.0)
    assert p.estimated_monthly_impact == pytest.approx(79800.0)
    # The most recent payment supplies the representative fields.
    assert p.description == "Netflix 67890"
    assert p.category == "Hogar > Servicios"
    assert p.bank == "Davivienda"


def test_window_income_and_singletons_are_excluded(now):
    forest = CategoryForest(CATEGORIES)
    txs = [
        expense(100, now - timedelta(days=40), description="Gym 1"),
        expense(100, now - timedelta(days=5), description="Gym 2"),
        income(500, now - timedelta(days=3), description="Gym 3"),
        expense(80, now - timedelta(days=2), description="Bakery"),
    ]
    assert detect_recurring_patterns(txs, forest, now) == ()


def test_patterns_ranked_by_monthly_impact_and_capped(now):
    forest = CategoryForest(CATEGORIES)
    txs = []
    for i, name in enumerate(["alpha", "bravo", "charlie", "delta", "echo", "foxtrot", "golf"]):
        amount = 100 * (i + 1)
        txs.append(expense(amount, now - timedelta(days=20), description=name))
        txs.append(expense(amount, now - timedelta(days=10), description=name))
    patterns = detect_recurring_patterns(txs, forest, now)
    assert len(patterns) == 5
    assert [p.description for p in patterns] == ["golf", "foxtrot", "echo", "delta", "charlie"]


def test_weekly_cadence_impact(now):
    forest = CategoryForest(CATEGORIES)
    txs = [
        expense(70, now - timedelta(days=d), description=f"Uber *trip {d:03d}")
        for d in (1, 8, 15)
    ]
    (p,) = detect_recurring_patterns(txs, forest, now)
    assert p.frequency_label == "Weekly"
    assert p.occurrence_count == 3
    assert p.estimated_monthly_impact == pytest.approx(70 * 30 / 7)


def test_same_instant_duplicates_use_default_interval_for_impact(now):
    forest = CategoryForest(CATEGORIES)
    when = now - timedelta(days=1)
    txs = [expense(50, when, description="Parking"), expense(50, when, description="Parking")]
    (p,) = detect_recurring_patterns(txs, forest, now)
    assert p.estimated_monthly_impact == pytest.approx(50.0)
    assert p.frequency_label == "Weekly"
