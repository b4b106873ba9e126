"""Data models and type aliases for ``dashboard_analytics``.

Input records (:class:`Transaction`, :class:`CustomCategory`) are pydantic
models: they are validated once at the ingest boundary and are read-only to
the engine. Everything the engine produces is a frozen ``dataclass`` so a
snapshot can be compared structurally and shared between consumers without
copying.

Field aliases follow the dashboard's export columns (``type``,
``transaction_type``, ``banco``) so rows coming from the hosted store
validate without renaming.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------


class TransactionKind(StrEnum):
    EXPENSE = "gasto"
    INCOME = "ingreso"


class PaymentMethod(StrEnum):
    """Closed set of payment methods recorded with each transaction."""

    MANUAL_EXPENSE = "gasto manual"
    CARD_PURCHASE = "compra con tarjeta"
    PSE_PAYMENT = "pago por pse"
    TRANSFER = "transferencia"
    SCHEDULED_PAYMENT = "pago programado"


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


class Transaction(BaseModel):
    """A single financial movement owned by the persistence collaborator.

    ``amount`` is always non-negative; the direction lives in ``kind``.
    Timezone-aware timestamps are converted to naive local time so the
    engine only ever compares naive values.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        str_strip_whitespace=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    id: str
    amount: float = Field(ge=0)
    description: str = ""
    transaction_date: datetime
    kind: TransactionKind = Field(alias="type")
    payment_method: PaymentMethod = Field(
        default=PaymentMethod.MANUAL_EXPENSE, alias="transaction_type"
    )
    category_id: str | None = None
    reported: bool = False
    bank: str | None = Field(default=None, alias="banco")
    comment: str | None = None

    @field_validator("description", mode="before")
    @classmethod
    def _description_default(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("category_id", "bank", "comment", mode="before")
    @classmethod
    def _blank_optional(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("transaction_date", mode="before")
    @classmethod
    def _date_only_to_midnight(cls, v: Any) -> Any:
        # Bare dates are read as local midnight.
        if isinstance(v, str) and len(v.strip()) == 10:
            return v.strip() + "T00:00:00"
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime(v.year, v.month, v.day)
        return v

    @field_validator("transaction_date")
    @classmethod
    def _to_naive_local(cls, v: datetime) -> datetime:
        if v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

    @property
    def is_expense(self) -> bool:
        return self.kind is TransactionKind.EXPENSE

    @property
    def is_income(self) -> bool:
        return self.kind is TransactionKind.INCOME


class CustomCategory(BaseModel):
    """A user-defined category; ``parent_id`` links it into a forest."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    id: str
    name: str = ""
    parent_id: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_default(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("parent_id", mode="before")
    @classmethod
    def _blank_parent(cls, v: Any) -> Any:
        return _blank_to_none(v)


# ---------------------------------------------------------------------------
# Period selection
# ---------------------------------------------------------------------------


class PeriodKind(StrEnum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    CUSTOM = "custom"


class Granularity(StrEnum):
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"


@dataclass(frozen=True, slots=True)
class PeriodSelector:
    """The period a dashboard panel asks for.

    ``start_date``/``end_date`` are inclusive calendar dates and are only
    meaningful (and required) for ``custom``. A custom range whose end
    precedes its start is accepted; it resolves to an empty range.
    """

    kind: PeriodKind
    start_date: date | None = None
    end_date: date | None = None

    def __post_init__(self) -> None:
        # Accept plain strings ("month") and normalize to the enum.
        object.__setattr__(self, "kind", PeriodKind(self.kind))

        if self.kind is PeriodKind.CUSTOM:
            if self.start_date is None or self.end_date is None:
                raise ValueError("PeriodSelector(custom) requires both start_date and end_date")
        elif self.start_date is not None or self.end_date is not None:
            raise ValueError(
                f"PeriodSelector({self.kind.value}) does not accept start_date/end_date"
            )

    @classmethod
    def custom(cls, start_date: date, end_date: date) -> PeriodSelector:
        return cls(PeriodKind.CUSTOM, start_date=start_date, end_date=end_date)


@dataclass(frozen=True, slots=True)
class PeriodRange:
    """A resolved period.

    ``start``/``end`` bound the transactions that belong to the period (both
    inclusive). ``timeline_end`` is where bucketing stops; it equals ``end``
    except for ``month``, whose buckets run to the last day of the month.
    """

    kind: PeriodKind
    start: datetime
    end: datetime
    granularity: Granularity
    timeline_end: datetime

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    def contains(self, ts: datetime) -> bool:
        return self.start <= ts <= self.end


# ---------------------------------------------------------------------------
# Snapshot sections
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CategoryTotal:
    name: str
    total: float
    percentage: float


@dataclass(frozen=True, slots=True)
class Summary:
    total_expenses: float
    total_income: float
    balance: float
    daily_average: float
    transaction_count: int
    pending_count: int


@dataclass(frozen=True, slots=True)
class TimelineBucket:
    """One granularity unit of the timeline.

    ``label`` is the short axis label, ``full_label`` the tooltip text.
    """

    start: datetime
    label: str
    full_label: str
    expense_sum: float = 0.0
    income_sum: float = 0.0


@dataclass(frozen=True, slots=True)
class TrendSummary:
    expense_trend_pct: float = 0.0
    income_trend_pct: float = 0.0


class ChangeType(StrEnum):
    INCREASE = "increase"
    DECREASE = "decrease"
    NEW = "new"
    STABLE = "stable"


@dataclass(frozen=True, slots=True)
class CategoryTrend:
    category: str
    current_amount: float
    previous_amount: float
    change_percent: float
    change_type: ChangeType


@dataclass(frozen=True, slots=True)
class RecurringPattern:
    description: str
    category: str
    average_amount: float
    frequency_label: str
    occurrence_count: int
    bank: str
    estimated_monthly_impact: float
    average_interval_days: float


@dataclass(frozen=True, slots=True)
class Totals:
    expenses: float
    income: float


@dataclass(frozen=True, slots=True)
class Delta:
    absolute_change: float
    percentage_change: float


@dataclass(frozen=True, slots=True)
class TotalsDelta:
    expenses: Delta
    income: Delta


@dataclass(frozen=True, slots=True)
class CategoryDelta:
    category: str
    current: float
    previous: float
    absolute_change: float
    percentage_change: float


@dataclass(frozen=True, slots=True)
class PeriodComparison:
    previous_start: datetime
    previous_end: datetime
    previous_totals: Totals
    deltas: TotalsDelta
    category_deltas: tuple[CategoryDelta, ...]


@dataclass(frozen=True, slots=True)
class Anomaly:
    transaction: Transaction
    deviation_factor: float
    category: str


@dataclass(frozen=True, slots=True)
class Prediction:
    current_total: float
    predicted_total: float
    predicted_remaining: float
    daily_average: float
    days_remaining: int
    progress_pct: float


@dataclass(frozen=True, slots=True)
class WeekdayPattern:
    day: str
    total: float
    average: float
    count: int


@dataclass(frozen=True, slots=True)
class DayAmount:
    label: str
    full_label: str
    amount: float


@dataclass(frozen=True, slots=True)
class EfficiencyAnalysis:
    best_days: tuple[DayAmount, ...]
    worst_days: tuple[DayAmount, ...]
    average_daily_spend: float


@dataclass(frozen=True, slots=True)
class Correlation:
    category_a: str
    category_b: str
    co_occurrence_count: int
    strength: float


@dataclass(frozen=True, slots=True)
class AnalyticsSnapshot:
    """Every derived section a dashboard renders for one period.

    Optional sections are ``None`` when the analyzer does not apply to the
    period (e.g. ``predictions`` outside month granularity).
    """

    period: PeriodRange
    summary: Summary
    category_totals: tuple[CategoryTotal, ...]
    parent_category_totals: tuple[CategoryTotal, ...]
    bank_totals: tuple[CategoryTotal, ...]
    timeline: tuple[TimelineBucket, ...]
    trends: TrendSummary
    category_trends: tuple[CategoryTrend, ...]
    recurring_patterns: tuple[RecurringPattern, ...]
    period_comparison: PeriodComparison | None
    anomalies: tuple[Anomaly, ...]
    predictions: Prediction | None
    weekly_patterns: tuple[WeekdayPattern, ...]
    efficiency_analysis: EfficiencyAnalysis | None
    correlations: tuple[Correlation, ...]


# ---------------------------------------------------------------------------
# Monthly category table
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MonthColumn:
    key: str
    label: str
    full_label: str


@dataclass(frozen=True, slots=True)
class MonthlyCell:
    month_key: str
    amount: float
    change_percent: float


@dataclass(frozen=True, slots=True)
class MonthlyCategoryRow:
    category: str
    cells: tuple[MonthlyCell, ...]
    total: float


@dataclass(frozen=True, slots=True)
class MonthlyCategoryTable:
    months: tuple[MonthColumn, ...]
    rows: tuple[MonthlyCategoryRow, ...]
    grand_total: float
    average_per_month: float
