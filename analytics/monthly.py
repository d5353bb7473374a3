"""Calendar-month cash flow aggregation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from core.models import CAPITAL_CATEGORIES, INFLOW_CATEGORIES, CashEvent, MonthBucket, ProjectionWindow

__all__ = ["MonthlyProjection", "aggregate_monthly", "build_monthly_frame"]

_COLUMNS = ("capital_in", "capital_out", "operational_in", "operational_out")


@dataclass(frozen=True)
class MonthlyProjection:
    """Month buckets plus the minimum balance seen at month-end checkpoints."""

    buckets: tuple[MonthBucket, ...]
    opening_balance: float
    minimum_balance: float
    minimum_balance_date: pd.Timestamp
    total_net_flow: float

    @property
    def closing_balance(self) -> float:
        if not self.buckets:
            return self.opening_balance
        return self.buckets[-1].closing_balance


def _column_for(event: CashEvent) -> str:
    scope = "capital" if event.category in CAPITAL_CATEGORIES else "operational"
    direction = "in" if event.category in INFLOW_CATEGORIES else "out"
    return f"{scope}_{direction}"


def _month_totals(events: Iterable[CashEvent], window: ProjectionWindow) -> pd.DataFrame:
    totals = pd.DataFrame(0.0, index=window.months, columns=list(_COLUMNS))
    for event in events:
        if not window.contains(event.date):
            continue
        totals.loc[event.date.to_period("M"), _column_for(event)] += abs(event.signed_amount)
    return totals


def aggregate_monthly(
    events: Iterable[CashEvent],
    opening_balance: float,
    window: ProjectionWindow,
) -> MonthlyProjection:
    """Bucket in-window events by calendar month and chain closing balances.

    Every month touched by the window gets a bucket, including partial months
    at either edge. The minimum balance starts from ``opening_balance`` and is
    compared against each month's closing balance only, so a dip that recovers
    before month end is not visible here.
    """

    totals = _month_totals(events, window)

    buckets: list[MonthBucket] = []
    running = float(opening_balance)
    minimum = running
    minimum_date = window.start
    total_net_flow = 0.0

    for period, row in totals.iterrows():
        capital_in, capital_out = float(row["capital_in"]), float(row["capital_out"])
        operational_in, operational_out = float(row["operational_in"]), float(row["operational_out"])
        net_flow = (capital_in + operational_in) - (capital_out + operational_out)
        running += net_flow
        total_net_flow += net_flow

        if running < minimum:
            minimum = running
            minimum_date = min(period.end_time.normalize(), window.end)

        buckets.append(
            MonthBucket(
                month_key=str(period),
                capital_in=capital_in,
                capital_out=capital_out,
                operational_in=operational_in,
                operational_out=operational_out,
                net_flow=net_flow,
                closing_balance=running,
            )
        )

    return MonthlyProjection(
        buckets=tuple(buckets),
        opening_balance=float(opening_balance),
        minimum_balance=minimum,
        minimum_balance_date=minimum_date,
        total_net_flow=total_net_flow,
    )


def build_monthly_frame(monthly: MonthlyProjection) -> pd.DataFrame:
    """Return month buckets as a frame indexed by month key."""

    records = [
        {
            "Month": bucket.month_key,
            "CapitalIn": bucket.capital_in,
            "CapitalOut": bucket.capital_out,
            "OperationalIn": bucket.operational_in,
            "OperationalOut": bucket.operational_out,
            "NetFlow": bucket.net_flow,
            "ClosingBalance": bucket.closing_balance,
        }
        for bucket in monthly.buckets
    ]
    columns = ["Month", "CapitalIn", "CapitalOut", "OperationalIn", "OperationalOut", "NetFlow", "ClosingBalance"]
    return pd.DataFrame(records, columns=columns)
