"""Core domain package for the Capflow application."""

from .models import (
    BalancePoint,
    CashEvent,
    ClusterStrategy,
    ClusterThresholds,
    EventCategory,
    EventCluster,
    InvalidWindowError,
    MinimumBalanceGranularity,
    MonthBucket,
    ProjectionContext,
    ProjectionWindow,
    RecordCategory,
)
from .records import RecordSet, parse_record_set
from .projection import ProjectionResult, compute_projection
from .store import InMemoryRecordStore, JsonRecordStore, RecordStore, fetch_record_set
from .session import ProjectionSession

__all__ = [
    "BalancePoint",
    "CashEvent",
    "ClusterStrategy",
    "ClusterThresholds",
    "EventCategory",
    "EventCluster",
    "InvalidWindowError",
    "MinimumBalanceGranularity",
    "MonthBucket",
    "ProjectionContext",
    "ProjectionWindow",
    "RecordCategory",
    "RecordSet",
    "parse_record_set",
    "ProjectionResult",
    "compute_projection",
    "InMemoryRecordStore",
    "JsonRecordStore",
    "RecordStore",
    "fetch_record_set",
    "ProjectionSession",
]
