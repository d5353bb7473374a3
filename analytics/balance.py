"""Event-level running balance projection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np
import pandas as pd

from core.models import BalancePoint, CashEvent, ProjectionWindow

__all__ = ["BalanceProjection", "project_balance", "build_balance_frame"]


@dataclass(frozen=True)
class BalanceProjection:
    """Running balance series over a window with its event-level minimum."""

    points: tuple[BalancePoint, ...]
    opening_balance: float
    final_balance: float
    minimum_balance: float
    minimum_balance_date: pd.Timestamp

    @property
    def events(self) -> tuple[CashEvent, ...]:
        return tuple(p.triggering_event for p in self.points if p.triggering_event is not None)


def project_balance(
    events: Iterable[CashEvent],
    opening_balance: float,
    window: ProjectionWindow,
) -> BalanceProjection:
    """Walk in-window events chronologically and accumulate the balance.

    Same-date events keep their incoming order (the sort is stable). The
    minimum covers the opening and closing boundary points, and its date is
    the earliest point that reaches it. Negative balances are reported as-is.
    """

    in_window = sorted(
        (event for event in events if window.contains(event.date)),
        key=lambda event: event.date,
    )

    running = float(opening_balance)
    points: list[BalancePoint] = [BalancePoint(window.start, running)]
    for event in in_window:
        running += event.signed_amount
        points.append(BalancePoint(event.date, running, event))
    points.append(BalancePoint(window.end, running))

    balances = np.fromiter((point.balance for point in points), dtype=float, count=len(points))
    lowest = int(np.argmin(balances))

    return BalanceProjection(
        points=tuple(points),
        opening_balance=float(opening_balance),
        final_balance=running,
        minimum_balance=float(balances[lowest]),
        minimum_balance_date=points[lowest].date,
    )


def build_balance_frame(projection: BalanceProjection) -> pd.DataFrame:
    """Return the balance series as a frame for charting."""

    records: list[dict[str, object]] = []
    for point in projection.points:
        event = point.triggering_event
        records.append(
            {
                "Date": point.date,
                "Balance": point.balance,
                "Category": event.category.value if event is not None else None,
                "Amount": event.signed_amount if event is not None else 0.0,
                "Description": event.description if event is not None else "",
            }
        )
    return pd.DataFrame(records, columns=["Date", "Balance", "Category", "Amount", "Description"])
