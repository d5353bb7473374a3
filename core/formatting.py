"""Formatting helpers for Capflow summaries."""

from __future__ import annotations

import pandas as pd

from core.models import MinimumBalanceGranularity
from core.projection import ProjectionResult

__all__ = [
    "build_insights",
    "format_currency",
    "format_month_label",
    "format_percentage",
]


def format_currency(value: float, symbol: str = "$") -> str:
    amount = float(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_percentage(value: float) -> str:
    return f"{float(value):g}%"


def format_month_label(month_key: str) -> str:
    """Return ``"Mar 2025"`` style labels for ``"2025-03"`` month keys."""

    return pd.Period(month_key, freq="M").strftime("%b %Y")


def build_insights(result: ProjectionResult, symbol: str = "$") -> list[str]:
    insights: list[str] = []

    balance = result.balance
    event_low = format_currency(balance.minimum_balance, symbol)
    insights.append(
        f"Lowest balance: <strong>{event_low}</strong> on {balance.minimum_balance_date:%d %b %Y}."
    )

    monthly = result.monthly
    if result.minimum_balance_divergence > 0:
        month_low = format_currency(monthly.minimum_balance, symbol)
        insights.append(
            f"Month-end view bottoms out at <strong>{month_low}</strong>; "
            "an intra-month dip recovers before the month closes."
        )

    if result.balance.minimum_balance < 0:
        insights.append("The balance goes <strong>negative</strong> inside this window.")

    net = format_currency(monthly.total_net_flow, symbol)
    direction = "inflow" if monthly.total_net_flow >= 0 else "outflow"
    insights.append(f"Net {direction} over the window: <strong>{net}</strong>.")

    if result.granularity is MinimumBalanceGranularity.MONTH:
        insights.append("Minimum balance is reported at month-end checkpoints.")

    return insights
