"""Tests for the record boundary and event normalisation."""

from __future__ import annotations

import logging
from decimal import Decimal

import numpy as np
import pandas as pd
import pytest

from analytics.normalization import normalize_events
from core.models import (
    EventCategory,
    OneOffRecord,
    ProjectionContext,
    ProjectionWindow,
    RecordCategory,
    RecurringInstance,
    RecurringPaymentRule,
)
from core.projection import compute_projection
from core.records import RecordSet, parse_amount, parse_one_off, parse_record_set


def _one_off(kind: EventCategory, amount, record_id=1) -> OneOffRecord:
    return OneOffRecord(
        id=record_id,
        description=kind.value,
        amount=amount,
        date=pd.Timestamp("2025-03-05"),
        kind=kind,
    )


def test_supplier_payment_sign_is_independent_of_stored_sign():
    events = normalize_events(
        [],
        [
            _one_off(EventCategory.SUPPLIER_PAYMENT, 200.0, record_id=1),
            _one_off(EventCategory.SUPPLIER_PAYMENT, -200.0, record_id=2),
        ],
    )

    assert [event.signed_amount for event in events] == [-200.0, -200.0]


@pytest.mark.parametrize(
    ("kind", "stored", "expected"),
    [
        (EventCategory.INVOICE, -500.0, 500.0),
        (EventCategory.INVOICE, 500.0, 500.0),
        (EventCategory.CAPITAL_SALE, -900.0, 900.0),
        (EventCategory.CAPITAL_BUY, 900.0, -900.0),
        (EventCategory.NON_RECURRING, 75.0, -75.0),
    ],
)
def test_sign_follows_category(kind, stored, expected):
    (event,) = normalize_events([], [_one_off(kind, stored)])

    assert event.category is kind
    assert event.signed_amount == pytest.approx(expected)


def test_recurring_instances_become_outflows():
    instance = RecurringInstance(rule_id=4, description="Payroll", amount=15000.0, date=pd.Timestamp("2025-01-01"))

    (event,) = normalize_events([instance], [])

    assert event.category is EventCategory.RECURRING
    assert event.signed_amount == -15000.0
    assert event.id == "recurring-4-20250101"
    assert event.source_ref.category is RecordCategory.RECURRING_PAYMENT_RULE
    assert event.source_ref.record_id == 4


@pytest.mark.parametrize("amount", [None, float("nan")])
def test_missing_amount_becomes_zero_event_with_warning(amount, caplog):
    with caplog.at_level(logging.WARNING, logger="capflow"):
        (event,) = normalize_events([], [_one_off(EventCategory.INVOICE, amount)])

    assert event.signed_amount == 0.0
    assert "as 0" in caplog.text


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1,250.50", 1250.5), (" 42 ", 42.0), ("abc", None), ("", None), (None, None), (True, None), (7, 7.0)],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


def test_parse_record_set_builds_descriptions_and_kinds(sample_raw_records):
    parsed = parse_record_set(RecordSet.from_mapping(sample_raw_records))

    assert len(parsed.rules) == 2
    assert parsed.rules[0].amount == 15000.0
    assert parsed.rules[0].day_of_month == 1

    descriptions = {record.description for record in parsed.one_offs}
    assert "INV-001 - ABC Corporation" in descriptions
    assert "SUP-001 - Office Supplies Co" in descriptions

    capital_kinds = [record.kind for record in parsed.one_offs if record.source is RecordCategory.CAPITAL_TRANSACTION]
    assert capital_kinds == [EventCategory.CAPITAL_BUY, EventCategory.CAPITAL_SALE]


def test_record_without_date_is_skipped_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="capflow"):
        record = parse_one_off(RecordCategory.INVOICE, {"id": 3, "invoice_code": "INV-3", "amount": 10})

    assert record is None
    assert "due_date" in caplog.text


def test_unknown_capital_transaction_type_is_rejected(caplog):
    raw = {"id": 5, "transaction_type": "swap", "amount": 10, "transaction_date": "2025-01-01"}

    with caplog.at_level(logging.WARNING, logger="capflow"):
        record = parse_one_off(RecordCategory.CAPITAL_TRANSACTION, raw)

    assert record is None
    assert "unknown transaction type" in caplog.text


def test_non_mapping_records_are_skipped(caplog):
    with caplog.at_level(logging.WARNING, logger="capflow"):
        parsed = parse_record_set(RecordSet(recurring_rules=("oops",), invoices=(42,)))

    assert parsed.rules == ()
    assert parsed.one_offs == ()
    assert caplog.text.count("unexpected shape") == 2


def test_missing_amount_survives_parsing_for_the_normaliser():
    record = parse_one_off(
        RecordCategory.NON_RECURRING_PAYMENT,
        {"id": 1, "description": "Mystery", "amount": "n/a", "payment_date": "2025-04-01"},
    )

    assert record is not None
    assert record.amount is None
    assert record.date == pd.Timestamp("2025-04-01")


@pytest.mark.parametrize("amount", [np.int64(200), np.float64(200.0), Decimal("200")])
def test_numeric_amount_types_keep_their_value(amount):
    (event,) = normalize_events([], [_one_off(EventCategory.SUPPLIER_PAYMENT, amount)])

    assert event.signed_amount == -200.0


@pytest.mark.parametrize("amount", [float("inf"), Decimal("NaN"), "200"])
def test_non_finite_or_text_amount_becomes_zero(amount, caplog):
    with caplog.at_level(logging.WARNING, logger="capflow"):
        (event,) = normalize_events([], [_one_off(EventCategory.INVOICE, amount)])

    assert event.signed_amount == 0.0
    assert "as 0" in caplog.text


def _typed(record_date, amount=100.0) -> OneOffRecord:
    return OneOffRecord(
        id=9,
        description="Typed",
        amount=amount,
        date=record_date,
        kind=EventCategory.NON_RECURRING,
    )


def test_typed_record_without_date_is_skipped_with_warning(caplog):
    window = ProjectionWindow(pd.Timestamp("2025-03-01"), pd.Timestamp("2025-03-31"))
    records = RecordSet(non_recurring_payments=(_typed(None),))

    with caplog.at_level(logging.WARNING, logger="capflow"):
        result = compute_projection(records, ProjectionContext(window=window, opening_balance=1000.0))

    assert result.events == ()
    assert result.balance.final_balance == 1000.0
    assert "missing or invalid date" in caplog.text


def test_typed_record_date_is_normalised_to_midnight():
    window = ProjectionWindow(pd.Timestamp("2025-03-01"), pd.Timestamp("2025-03-31"))
    records = RecordSet(non_recurring_payments=(_typed(pd.Timestamp("2025-03-31 15:00")),))

    result = compute_projection(records, ProjectionContext(window=window, opening_balance=1000.0))

    assert result.events[0].date == pd.Timestamp("2025-03-31")
    assert result.balance.final_balance == 900.0
    assert result.monthly.closing_balance == 900.0


def test_typed_record_amount_goes_through_the_same_coercion():
    record = parse_one_off(RecordCategory.NON_RECURRING_PAYMENT, _typed("2025-03-04", amount="1,200"))

    assert record.amount == 1200.0
    assert record.date == pd.Timestamp("2025-03-04")


def test_typed_recurring_rule_is_revalidated():
    rule = RecurringPaymentRule(id=1, description="Rent", amount="950", day_of_month="28")

    (parsed,) = parse_record_set(RecordSet(recurring_rules=(rule,))).rules

    assert parsed.amount == 950.0
    assert parsed.day_of_month == 28
