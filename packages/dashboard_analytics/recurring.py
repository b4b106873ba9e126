"""Recurring payment detection.

Expenses from the trailing window (30 days before ``now`` by default) are
grouped by a normalized description key; every group with at least two
members is treated as a candidate recurring payment. Normalization drops
reference numbers and punctuation, so one subscription stays one group::

    "Netflix 12345"  -> "netflix"
    "NETFLIX-67890"  -> "netflix"
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime, timedelta

from .categories import CategoryForest, bank_label
from .logging_setup import get_logger
from .models import RecurringPattern, Transaction
from .settings import AnalyticsSettings, resolve_settings
from .stats import mean

_DIGITS_RE = re.compile(r"\d+")
_NON_WORD_RE = re.compile(r"[^\w\s]")
_DEFAULT_INTERVAL_DAYS = 30.0
_SECONDS_PER_DAY = 86400.0

_logger = get_logger("dashboard_analytics.recurring")


def normalize_description(description: str, *, key_length: int = 20) -> str:
    """Return the grouping key for ``description``.

    Lowercases, strips digits and non-word characters, trims, and keeps the
    first ``key_length`` characters.
    """

    s = _DIGITS_RE.sub("", description.lower())
    s = _NON_WORD_RE.sub("", s).strip()
    return s[:key_length]


def frequency_label(average_interval_days: float) -> str:
    if average_interval_days <= 7:
        return "Weekly"
    if average_interval_days <= 15:
        return "Biweekly"
    if average_interval_days <= 32:
        return "Monthly"
    return f"Every {round(average_interval_days)} days"


def _average_interval_days(members: list[Transaction]) -> float | None:
    stamps = sorted(tx.transaction_date for tx in members)
    intervals = [
        (later - earlier).total_seconds() / _SECONDS_PER_DAY
        for earlier, later in zip(stamps, stamps[1:], strict=False)
    ]
    if not intervals:
        return None
    return mean(intervals)


def detect_recurring_patterns(
    transactions: Iterable[Transaction],
    forest: CategoryForest,
    now: datetime | None = None,
    *,
    settings: AnalyticsSettings | None = None,
) -> tuple[RecurringPattern, ...]:
    """Return up to ``top_n`` recurring patterns ranked by monthly impact."""

    cfg = resolve_settings(settings)
    now = now or datetime.now()
    window_start = now - timedelta(days=cfg.recurring_window_days)

    groups: dict[str, list[Transaction]] = {}
    for tx in transactions:
        if not tx.is_expense or not (window_start <= tx.transaction_date <= now):
            continue
        key = normalize_description(tx.description, key_length=cfg.recurring_key_length)
        if not key:
            # Descriptions made only of digits/punctuation carry no identity.
            continue
        groups.setdefault(key, []).append(tx)

    patterns: list[RecurringPattern] = []
    for members in groups.values():
        if len(members) < 2:
            continue
        average_amount = mean(tx.amount for tx in members)
        latest = max(members, key=lambda tx: tx.transaction_date)
        interval = _average_interval_days(members)
        label_interval = interval if interval is not None else _DEFAULT_INTERVAL_DAYS
        # Same-instant duplicates have no usable cadence for the impact estimate.
        impact_interval = interval if interval else _DEFAULT_INTERVAL_DAYS
        patterns.append(
            RecurringPattern(
                description=latest.description,
                category=forest.category_of(latest),
                average_amount=average_amount,
                frequency_label=frequency_label(label_interval),
                occurrence_count=len(members),
                bank=bank_label(latest),
                estimated_monthly_impact=average_amount * (30.0 / impact_interval),
                average_interval_days=label_interval,
            )
        )

    patterns.sort(key=lambda p: p.estimated_monthly_impact, reverse=True)
    _logger.debug("recurring: %d groups, %d patterns", len(groups), len(patterns))
    return tuple(patterns[: cfg.top_n])


__all__ = ["normalize_description", "frequency_label", "detect_recurring_patterns"]
