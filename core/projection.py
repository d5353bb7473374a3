"""Core logic for assembling a full cash flow projection."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from analytics.balance import BalanceProjection, project_balance
from analytics.clustering import cluster_events
from analytics.monthly import MonthlyProjection, aggregate_monthly
from analytics.normalization import normalize_events
from analytics.recurring import expand_recurring_rules
from config.logging import get_logger
from core.models import (
    CAPITAL_CATEGORIES,
    BalancePoint,
    CashEvent,
    EventCluster,
    MinimumBalanceGranularity,
    MonthBucket,
    ProjectionContext,
    ProjectionWindow,
)
from core.records import RecordSet, parse_record_set

__all__ = ["ProjectionResult", "compute_projection"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProjectionResult:
    """Everything derived from one projection run.

    Both minimum balance figures are kept: ``balance.minimum_balance`` is taken
    over every event, ``monthly.minimum_balance`` over month-end closing
    balances only. ``minimum_balance`` reports the one chosen by ``granularity``.
    """

    context: ProjectionContext
    events: tuple[CashEvent, ...]
    operational_clusters: tuple[EventCluster, ...]
    capital_clusters: tuple[EventCluster, ...]
    balance: BalanceProjection
    monthly: MonthlyProjection

    @property
    def granularity(self) -> MinimumBalanceGranularity:
        return self.context.granularity

    @property
    def balance_series(self) -> tuple[BalancePoint, ...]:
        return self.balance.points

    @property
    def monthly_buckets(self) -> tuple[MonthBucket, ...]:
        return self.monthly.buckets

    @property
    def minimum_balance(self) -> float:
        if self.granularity is MinimumBalanceGranularity.MONTH:
            return self.monthly.minimum_balance
        return self.balance.minimum_balance

    @property
    def minimum_balance_date(self) -> pd.Timestamp:
        if self.granularity is MinimumBalanceGranularity.MONTH:
            return self.monthly.minimum_balance_date
        return self.balance.minimum_balance_date

    @property
    def minimum_balance_divergence(self) -> float:
        """Month-end minimum less event-level minimum (never negative)."""

        return self.monthly.minimum_balance - self.balance.minimum_balance


def _validate_arguments(records: RecordSet | None, context: ProjectionContext | None) -> None:
    if records is None:
        raise TypeError("compute_projection() requires a record set")
    if context is None:
        raise TypeError("compute_projection() requires a projection context")
    if not isinstance(context.window, ProjectionWindow):
        raise ValueError("Projection context has no valid window")
    if context.opening_balance is None:
        raise ValueError("Projection context has no opening balance")


def compute_projection(records: RecordSet, context: ProjectionContext) -> ProjectionResult:
    """Rebuild events, clusters, balance series and month buckets from scratch.

    The function is pure: it performs no I/O and keeps no state between calls.
    """

    _validate_arguments(records, context)
    window = context.window

    parsed = parse_record_set(records)
    instances = expand_recurring_rules(parsed.rules, window)
    events = normalize_events(instances, parsed.one_offs)

    visible = [event for event in events if window.contains(event.date)]
    capital = [event for event in visible if event.category in CAPITAL_CATEGORIES]
    operational = [event for event in visible if event.category not in CAPITAL_CATEGORIES]
    thresholds = context.cluster_thresholds

    result = ProjectionResult(
        context=context,
        events=tuple(events),
        operational_clusters=tuple(
            cluster_events(operational, thresholds.operational_days, context.cluster_strategy)
        ),
        capital_clusters=tuple(cluster_events(capital, thresholds.capital_days, context.cluster_strategy)),
        balance=project_balance(events, context.opening_balance, window),
        monthly=aggregate_monthly(events, context.opening_balance, window),
    )

    logger.debug(
        "Projected %d events (%d in window) from %s to %s",
        len(events),
        len(visible),
        f"{window.start:%Y-%m-%d}",
        f"{window.end:%Y-%m-%d}",
    )
    if result.minimum_balance_divergence:
        logger.info(
            "Event-level minimum %.2f differs from month-end minimum %.2f",
            result.balance.minimum_balance,
            result.monthly.minimum_balance,
        )
    return result
