import logging

import pandas as pd
import pytest

from core.models import (
    CAPITAL_CATEGORIES,
    InvalidWindowError,
    MinimumBalanceGranularity,
    ProjectionContext,
    ProjectionWindow,
)
from core.projection import compute_projection
from core.records import RecordSet


@pytest.fixture()
def context() -> ProjectionContext:
    window = ProjectionWindow(pd.Timestamp("2025-01-01"), pd.Timestamp("2025-02-28"))
    return ProjectionContext(window=window, opening_balance=50000.0)


def test_end_to_end_projection(sample_raw_records, context):
    result = compute_projection(RecordSet.from_mapping(sample_raw_records), context)

    assert len(result.events) == 10
    assert result.balance.final_balance == pytest.approx(42600.0)
    assert result.balance.minimum_balance == pytest.approx(-21100.0)
    assert result.balance.minimum_balance_date == pd.Timestamp("2025-02-14")
    assert [bucket.closing_balance for bucket in result.monthly_buckets] == pytest.approx([5900.0, 42600.0])
    assert result.monthly.minimum_balance == pytest.approx(5900.0)
    assert result.monthly.minimum_balance_date == pd.Timestamp("2025-01-31")


def test_clamped_recurring_day_lands_on_last_day_of_february(sample_raw_records, context):
    result = compute_projection(RecordSet.from_mapping(sample_raw_records), context)

    licence_dates = [event.date for event in result.events if event.id.startswith("recurring-2-")]
    assert licence_dates == [pd.Timestamp("2025-01-31"), pd.Timestamp("2025-02-28")]


def test_capital_and_operational_events_cluster_separately(sample_raw_records, context):
    result = compute_projection(RecordSet.from_mapping(sample_raw_records), context)

    capital_members = [m for cluster in result.capital_clusters for m in cluster.members]
    operational_members = [m for cluster in result.operational_clusters for m in cluster.members]

    assert len(result.capital_clusters) == 2
    assert all(member.category in CAPITAL_CATEGORIES for member in capital_members)
    assert all(member.category not in CAPITAL_CATEGORIES for member in operational_members)
    assert len(capital_members) + len(operational_members) == len(result.events)


def test_adjacent_month_end_payments_share_an_operational_cluster(sample_raw_records, context):
    result = compute_projection(RecordSet.from_mapping(sample_raw_records), context)

    ids_by_cluster = [[m.id for m in cluster.members] for cluster in result.operational_clusters]
    assert ["recurring-2-20250131", "recurring-1-20250201"] in ids_by_cluster


def test_granularity_selects_reported_minimum(sample_raw_records, context):
    records = RecordSet.from_mapping(sample_raw_records)
    month_context = ProjectionContext(
        window=context.window,
        opening_balance=context.opening_balance,
        granularity=MinimumBalanceGranularity.MONTH,
    )

    by_event = compute_projection(records, context)
    by_month = compute_projection(records, month_context)

    assert by_event.minimum_balance == pytest.approx(-21100.0)
    assert by_month.minimum_balance == pytest.approx(5900.0)
    assert by_month.minimum_balance_date == pd.Timestamp("2025-01-31")
    assert by_event.minimum_balance_divergence == pytest.approx(27000.0)
    assert by_month.minimum_balance_divergence == pytest.approx(27000.0)


def test_divergence_is_logged(sample_raw_records, context, caplog):
    with caplog.at_level(logging.INFO, logger="capflow"):
        compute_projection(RecordSet.from_mapping(sample_raw_records), context)

    assert "differs from month-end minimum" in caplog.text


def test_empty_record_set_gives_flat_projection(context):
    result = compute_projection(RecordSet(), context)

    assert result.events == ()
    assert result.operational_clusters == ()
    assert result.capital_clusters == ()
    assert result.balance.final_balance == 50000.0
    assert result.minimum_balance == 50000.0
    assert result.minimum_balance_divergence == 0.0
    assert len(result.monthly_buckets) == 2


def test_projection_is_repeatable(sample_raw_records, context):
    records = RecordSet.from_mapping(sample_raw_records)

    first = compute_projection(records, context)
    second = compute_projection(records, context)

    assert first == second


def test_missing_arguments_raise_type_error(context):
    with pytest.raises(TypeError):
        compute_projection(None, context)
    with pytest.raises(TypeError):
        compute_projection(RecordSet(), None)


def test_missing_opening_balance_is_rejected(context):
    broken = ProjectionContext(window=context.window, opening_balance=None)

    with pytest.raises(ValueError):
        compute_projection(RecordSet(), broken)


@pytest.mark.parametrize(
    "start, end",
    [
        ("2025-03-01", "2025-03-01"),
        ("2025-03-10", "2025-03-01"),
        (None, "2025-03-01"),
    ],
)
def test_invalid_window_is_rejected(start, end):
    with pytest.raises(InvalidWindowError):
        ProjectionWindow(pd.Timestamp(start) if start else None, pd.Timestamp(end))


def test_timezone_aware_window_is_compared_as_naive_dates():
    window = ProjectionWindow(pd.Timestamp("2025-03-01", tz="UTC"), pd.Timestamp("2025-03-31", tz="UTC"))
    records = RecordSet.from_mapping(
        {"invoice": [{"id": 1, "invoice_code": "INV-1", "client_name": "Acme", "amount": 250, "due_date": "2025-03-31"}]}
    )

    result = compute_projection(records, ProjectionContext(window=window, opening_balance=1000.0))

    assert window.start == pd.Timestamp("2025-03-01")
    assert window.end.tzinfo is None
    assert result.balance.final_balance == 1250.0
