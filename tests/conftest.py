"""Shared fixtures for the Capflow test suite."""

from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd
import pytest
import streamlit as st

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.models import CashEvent, EventCategory, RecordCategory, SourceRef  # noqa: E402


@pytest.fixture(autouse=True)
def clear_streamlit_secrets(monkeypatch):
    """Provide an empty secrets mapping so tests don't rely on Streamlit runtime."""

    monkeypatch.setattr(st, "secrets", {}, raising=False)


def make_event(
    when: str,
    amount: float,
    category: EventCategory = EventCategory.NON_RECURRING,
    event_id: str | None = None,
) -> CashEvent:
    """Build a cash event whose ``signed_amount`` is taken as given."""

    timestamp = pd.Timestamp(when)
    return CashEvent(
        id=event_id or f"{category.value}-{when}-{amount}",
        category=category,
        date=timestamp,
        signed_amount=float(amount),
        description=event_id or category.value,
        source_ref=SourceRef(RecordCategory.NON_RECURRING_PAYMENT, event_id),
    )


@pytest.fixture()
def sample_raw_records() -> dict[str, list[dict]]:
    return {
        "recurringPaymentRule": [
            {"id": 1, "description": "Staff Salaries", "amount": "15000", "day_of_month": "1"},
            {"id": 2, "description": "Licences", "amount": 300, "day_of_month": 31},
        ],
        "nonRecurringPayment": [
            {"id": 1, "description": "Annual Insurance", "amount": "12000", "payment_date": "2025-02-14"},
        ],
        "invoice": [
            {"id": 1, "invoice_code": "INV-001", "client_name": "ABC Corporation", "amount": "25000", "due_date": "2025-01-20"},
            {"id": 2, "invoice_code": "INV-002", "client_name": "Northwind", "amount": -4000, "due_date": "2025-02-27"},
        ],
        "supplierPayment": [
            {"id": 1, "invoice_code": "SUP-001", "supplier_name": "Office Supplies Co", "amount": "2800", "due_date": "2025-01-10"},
        ],
        "capitalTransaction": [
            {"id": 1, "entity_id": 7, "entity_type": "land", "transaction_type": "buy", "amount": 51000, "transaction_date": "2025-01-08", "notes": "Riverside Plot"},
            {"id": 2, "entity_id": 7, "entity_type": "land", "transaction_type": "sale", "amount": -60000, "transaction_date": "2025-02-20", "notes": "Riverside Plot"},
        ],
    }
