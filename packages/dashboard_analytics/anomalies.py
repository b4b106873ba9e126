"""Statistical outliers among the period's expenses."""

from __future__ import annotations

import statistics
from collections.abc import Iterable

from .categories import CategoryForest
from .logging_setup import get_logger
from .models import Anomaly, Transaction
from .settings import AnalyticsSettings, resolve_settings

_logger = get_logger("dashboard_analytics.anomalies")


def detect_anomalies(
    transactions: Iterable[Transaction],
    forest: CategoryForest,
    *,
    settings: AnalyticsSettings | None = None,
) -> tuple[Anomaly, ...]:
    """Flag expenses above ``mean + z * stddev`` (population stddev).

    Returns an empty tuple when fewer than ``anomaly_min_sample`` expenses
    are available or when every amount is identical.
    """

    cfg = resolve_settings(settings)
    expenses = [tx for tx in transactions if tx.is_expense]
    if len(expenses) < cfg.anomaly_min_sample:
        _logger.debug(
            "anomalies: %d expenses below sample size %d", len(expenses), cfg.anomaly_min_sample
        )
        return ()

    amounts = [tx.amount for tx in expenses]
    mu = statistics.fmean(amounts)
    sigma = statistics.pstdev(amounts, mu)
    if sigma == 0:
        return ()

    threshold = mu + cfg.anomaly_z_threshold * sigma
    flagged = [
        Anomaly(tx, (tx.amount - mu) / sigma, forest.category_of(tx))
        for tx in expenses
        if tx.amount > threshold
    ]
    flagged.sort(key=lambda a: a.deviation_factor, reverse=True)
    return tuple(flagged[: cfg.top_n])


__all__ = ["detect_anomalies"]
