"""Projection engine stages shared across Capflow services."""

from analytics.balance import BalanceProjection, build_balance_frame, project_balance
from analytics.clustering import cluster_events
from analytics.monthly import MonthlyProjection, aggregate_monthly, build_monthly_frame
from analytics.normalization import normalize_events, signed_amount_for
from analytics.recurring import expand_recurring_rules, expand_rule

__all__ = [
    "BalanceProjection",
    "build_balance_frame",
    "project_balance",
    "cluster_events",
    "MonthlyProjection",
    "aggregate_monthly",
    "build_monthly_frame",
    "normalize_events",
    "signed_amount_for",
    "expand_recurring_rules",
    "expand_rule",
]
