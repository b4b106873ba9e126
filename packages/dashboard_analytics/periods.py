"""Period resolution, transaction filtering and calendar helpers.

A :class:`~dashboard_analytics.models.PeriodSelector` is resolved against a
reference instant (``now``) into a concrete
:class:`~dashboard_analytics.models.PeriodRange`:

========  ==================================  ===========  ====================
kind      range                               granularity  buckets
========  ==================================  ===========  ====================
day       today 00:00 .. now                  hour         current hour + 1
week      last 7 calendar days .. now         day          7
month     first of month 00:00 .. now         day          every day of month
quarter   last 90 calendar days .. now        month        3 or 4
custom    start_date 00:00 .. end_date 23:59  day          inclusive day count
========  ==================================  ===========  ====================

Labels are locale independent (English month and weekday names); turning
them into a localized display is left to the rendering collaborator.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable, Iterator
from datetime import date, datetime, time, timedelta

from dateutil.relativedelta import relativedelta

from .models import (
    Granularity,
    PeriodKind,
    PeriodRange,
    PeriodSelector,
    Transaction,
)
from .settings import AnalyticsSettings, resolve_settings

MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
WEEKDAY_NAMES: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------


def start_of_day(d: date | datetime) -> datetime:
    return datetime.combine(d if not isinstance(d, datetime) else d.date(), time.min)


def end_of_day(d: date | datetime) -> datetime:
    return datetime.combine(d if not isinstance(d, datetime) else d.date(), time.max)


def start_of_month(d: date | datetime) -> datetime:
    return datetime(d.year, d.month, 1)


def days_in_month(d: date | datetime) -> int:
    return calendar.monthrange(d.year, d.month)[1]


def end_of_month(d: date | datetime) -> datetime:
    return end_of_day(date(d.year, d.month, days_in_month(d)))


def month_key(d: date | datetime) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def iter_months(start: date | datetime, end: date | datetime) -> Iterator[datetime]:
    """Yield the first instant of every calendar month touching ``[start, end]``."""

    cur = start_of_month(start)
    last = start_of_month(end)
    while cur <= last:
        yield cur
        cur = cur + relativedelta(months=1)


def covered_days(period: PeriodRange) -> int:
    """Number of calendar days touched by ``[start, end]`` (0 when empty)."""

    if period.is_empty:
        return 0
    return (period.end.date() - period.start.date()).days + 1


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


def hour_labels(ts: datetime) -> tuple[str, str]:
    return (
        f"{ts.hour:02d}:00",
        f"{WEEKDAY_NAMES[ts.weekday()]} {ts.day} {MONTH_NAMES[ts.month - 1]} {ts.year}, "
        f"{ts.hour:02d}:00-{ts.hour:02d}:59",
    )


def day_labels(ts: datetime) -> tuple[str, str]:
    return (
        f"{ts.day:02d} {MONTH_NAMES[ts.month - 1][:3]}",
        f"{WEEKDAY_NAMES[ts.weekday()]}, {ts.day} {MONTH_NAMES[ts.month - 1]} {ts.year}",
    )


def month_labels(ts: datetime) -> tuple[str, str]:
    return (
        f"{MONTH_NAMES[ts.month - 1][:3]} {ts.year}",
        f"{MONTH_NAMES[ts.month - 1]} {ts.year}",
    )


# ---------------------------------------------------------------------------
# Resolution and filtering
# ---------------------------------------------------------------------------


def resolve_period(
    selector: PeriodSelector,
    now: datetime | None = None,
    *,
    settings: AnalyticsSettings | None = None,
) -> PeriodRange:
    """Map ``selector`` to a concrete range relative to ``now``."""

    cfg = resolve_settings(settings)
    now = now or datetime.now()
    today = start_of_day(now)

    match selector.kind:
        case PeriodKind.DAY:
            return PeriodRange(selector.kind, today, now, Granularity.HOUR, now)
        case PeriodKind.WEEK:
            start = today - timedelta(days=cfg.week_days - 1)
            return PeriodRange(selector.kind, start, now, Granularity.DAY, now)
        case PeriodKind.MONTH:
            return PeriodRange(
                selector.kind, start_of_month(now), now, Granularity.DAY, end_of_month(now)
            )
        case PeriodKind.QUARTER:
            start = today - timedelta(days=cfg.quarter_days - 1)
            return PeriodRange(selector.kind, start, now, Granularity.MONTH, now)
        case PeriodKind.CUSTOM:
            start_date, end_date = selector.start_date, selector.end_date
            if start_date is None or end_date is None:
                raise ValueError("custom period requires both start_date and end_date")
            start = start_of_day(start_date)
            end = end_of_day(end_date)
            return PeriodRange(selector.kind, start, end, Granularity.DAY, end)
    raise ValueError(f"Unsupported period kind: {selector.kind!r}")  # pragma: no cover


def filter_transactions(
    transactions: Iterable[Transaction], period: PeriodRange
) -> list[Transaction]:
    """Return the transactions inside ``period``, preserving input order."""

    if period.is_empty:
        return []
    return [t for t in transactions if period.contains(t.transaction_date)]


def previous_range(period: PeriodRange) -> tuple[datetime, datetime]:
    """Return ``[prev_start, prev_end)`` of equal length ending at ``period.start``."""

    length = period.end - period.start
    return period.start - length, period.start


__all__ = [
    "MONTH_NAMES",
    "WEEKDAY_NAMES",
    "start_of_day",
    "end_of_day",
    "start_of_month",
    "end_of_month",
    "days_in_month",
    "month_key",
    "iter_months",
    "covered_days",
    "hour_labels",
    "day_labels",
    "month_labels",
    "resolve_period",
    "filter_transactions",
    "previous_range",
]
