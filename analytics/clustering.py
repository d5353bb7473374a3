"""Date-proximity grouping of cash events for timeline layout."""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from core.models import CashEvent, ClusterStrategy, EventCluster

__all__ = ["cluster_events"]

_NANOS_PER_DAY = 24 * 60 * 60 * 1_000_000_000


def _mean_timestamp(members: list[CashEvent]) -> pd.Timestamp:
    total = sum(member.date.value for member in members)
    return pd.Timestamp(total // len(members))


def _days_between(left: pd.Timestamp, right: pd.Timestamp) -> float:
    return abs(left.value - right.value) / _NANOS_PER_DAY


def cluster_events(
    events: Iterable[CashEvent],
    threshold_days: float,
    strategy: ClusterStrategy = ClusterStrategy.DRIFTING,
) -> list[EventCluster]:
    """Group date-sorted events into display clusters.

    With ``DRIFTING`` (the default) an event joins the open cluster when it is
    within ``threshold_days`` of the cluster's current centroid, and the
    centroid is recomputed as the mean member timestamp after each admission.
    The result depends on admission order: events further apart than the
    threshold can share a cluster once earlier members have pulled the
    centroid forward.

    ``ANCHORED`` measures the distance to the first member instead, so every
    member lies within ``threshold_days`` of every other.

    Clusters are for layout only and should not feed totals or balances.
    """

    if threshold_days < 0:
        raise ValueError("threshold_days must be non-negative")

    ordered = sorted(events, key=lambda event: event.date)
    clusters: list[EventCluster] = []
    members: list[CashEvent] = []
    centroid: pd.Timestamp | None = None

    for event in ordered:
        if centroid is not None:
            reference = centroid if strategy is ClusterStrategy.DRIFTING else members[0].date
            if _days_between(event.date, reference) <= threshold_days:
                members.append(event)
                centroid = _mean_timestamp(members)
                continue
            clusters.append(EventCluster(centroid_date=centroid, members=tuple(members)))

        members = [event]
        centroid = event.date

    if centroid is not None:
        clusters.append(EventCluster(centroid_date=centroid, members=tuple(members)))

    return clusters
