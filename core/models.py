"""Shared data model definitions for the Capflow projection engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

import pandas as pd

__all__ = [
    "InvalidWindowError",
    "RecordCategory",
    "EventCategory",
    "INFLOW_CATEGORIES",
    "OUTFLOW_CATEGORIES",
    "CAPITAL_CATEGORIES",
    "OPERATIONAL_CATEGORIES",
    "ClusterStrategy",
    "MinimumBalanceGranularity",
    "RecurringPaymentRule",
    "OneOffRecord",
    "RecurringInstance",
    "SourceRef",
    "CashEvent",
    "EventCluster",
    "BalancePoint",
    "MonthBucket",
    "ProjectionWindow",
    "ClusterThresholds",
    "ProjectionContext",
]


class InvalidWindowError(ValueError):
    """Raised when a projection window does not satisfy ``start < end``."""


class RecordCategory(str, Enum):
    """Raw record collections exposed by a record store."""

    RECURRING_PAYMENT_RULE = "recurringPaymentRule"
    NON_RECURRING_PAYMENT = "nonRecurringPayment"
    INVOICE = "invoice"
    SUPPLIER_PAYMENT = "supplierPayment"
    CAPITAL_TRANSACTION = "capitalTransaction"


class EventCategory(str, Enum):
    """Canonical cash event categories."""

    RECURRING = "recurring"
    NON_RECURRING = "nonRecurring"
    INVOICE = "invoice"
    SUPPLIER_PAYMENT = "supplierPayment"
    CAPITAL_BUY = "capitalBuy"
    CAPITAL_SALE = "capitalSale"

    @property
    def is_inflow(self) -> bool:
        return self in INFLOW_CATEGORIES

    @property
    def is_capital(self) -> bool:
        return self in CAPITAL_CATEGORIES


INFLOW_CATEGORIES = frozenset({EventCategory.INVOICE, EventCategory.CAPITAL_SALE})
OUTFLOW_CATEGORIES = frozenset(
    {
        EventCategory.RECURRING,
        EventCategory.NON_RECURRING,
        EventCategory.SUPPLIER_PAYMENT,
        EventCategory.CAPITAL_BUY,
    }
)
CAPITAL_CATEGORIES = frozenset({EventCategory.CAPITAL_BUY, EventCategory.CAPITAL_SALE})
OPERATIONAL_CATEGORIES = frozenset(
    {
        EventCategory.RECURRING,
        EventCategory.NON_RECURRING,
        EventCategory.INVOICE,
        EventCategory.SUPPLIER_PAYMENT,
    }
)


class ClusterStrategy(str, Enum):
    """Proximity clustering strategies.

    ``DRIFTING`` compares each event with the running mean of the open cluster,
    so the admission radius moves as members are added. ``ANCHORED`` compares
    with the first member only.
    """

    DRIFTING = "drifting"
    ANCHORED = "anchored"


class MinimumBalanceGranularity(str, Enum):
    """Resolution at which the minimum balance is reported."""

    EVENT = "event"
    MONTH = "month"


@dataclass(frozen=True)
class RecurringPaymentRule:
    id: Any
    description: str
    amount: Optional[float]
    day_of_month: int


@dataclass(frozen=True)
class OneOffRecord:
    id: Any
    description: str
    amount: Optional[float]
    date: pd.Timestamp
    kind: EventCategory
    source: RecordCategory = RecordCategory.NON_RECURRING_PAYMENT


@dataclass(frozen=True)
class RecurringInstance:
    """A single dated occurrence of a recurring rule, amount kept positive."""

    rule_id: Any
    description: str
    amount: float
    date: pd.Timestamp


@dataclass(frozen=True)
class SourceRef:
    category: RecordCategory
    record_id: Any


@dataclass(frozen=True)
class CashEvent:
    id: str
    category: EventCategory
    date: pd.Timestamp
    signed_amount: float
    description: str
    source_ref: SourceRef


@dataclass(frozen=True)
class EventCluster:
    centroid_date: pd.Timestamp
    members: tuple[CashEvent, ...]

    @property
    def total_inflow(self) -> float:
        return float(sum(e.signed_amount for e in self.members if e.signed_amount > 0))

    @property
    def total_outflow(self) -> float:
        return float(sum(-e.signed_amount for e in self.members if e.signed_amount < 0))

    @property
    def net_flow(self) -> float:
        return self.total_inflow - self.total_outflow


@dataclass(frozen=True)
class BalancePoint:
    date: pd.Timestamp
    balance: float
    triggering_event: Optional[CashEvent] = None


@dataclass(frozen=True)
class MonthBucket:
    month_key: str
    capital_in: float
    capital_out: float
    operational_in: float
    operational_out: float
    net_flow: float
    closing_balance: float

    @property
    def period(self) -> pd.Period:
        return pd.Period(self.month_key, freq="M")


def _naive_midnight(value: Any) -> pd.Timestamp:
    stamp = pd.Timestamp(value)
    if stamp.tzinfo is not None:
        stamp = stamp.tz_localize(None)
    return stamp.normalize()


@dataclass(frozen=True)
class ProjectionWindow:
    """Inclusive ``[start, end]`` date range, normalised to midnight."""

    start: pd.Timestamp
    end: pd.Timestamp

    def __post_init__(self) -> None:
        if self.start is None or self.end is None:
            raise InvalidWindowError("Projection window requires both a start and an end date.")
        start = _naive_midnight(self.start)
        end = _naive_midnight(self.end)
        if start >= end:
            raise InvalidWindowError(
                f"Window start {start:%Y-%m-%d} must be before end {end:%Y-%m-%d}."
            )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @classmethod
    def around(cls, today: pd.Timestamp, days_before: int, days_after: int) -> "ProjectionWindow":
        today = pd.Timestamp(today).normalize()
        return cls(today - pd.Timedelta(days=days_before), today + pd.Timedelta(days=days_after))

    def contains(self, when: pd.Timestamp) -> bool:
        return self.start <= when <= self.end

    @property
    def months(self) -> pd.PeriodIndex:
        return pd.period_range(self.start.to_period("M"), self.end.to_period("M"), freq="M")


@dataclass(frozen=True)
class ClusterThresholds:
    operational_days: float = 7
    capital_days: float = 14


@dataclass(frozen=True)
class ProjectionContext:
    """Explicit inputs for one projection run."""

    window: ProjectionWindow
    opening_balance: float
    cluster_thresholds: ClusterThresholds = field(default_factory=ClusterThresholds)
    granularity: MinimumBalanceGranularity = MinimumBalanceGranularity.EVENT
    cluster_strategy: ClusterStrategy = ClusterStrategy.DRIFTING
