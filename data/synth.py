"""Synthetic business cash flow records for the Capflow dashboard.

Produces a small but realistic record set for development and testing: a
monthly payroll rule, a handful of one-off payments, client invoices,
supplier bills, and a couple of capital purchases and disposals. The output
mirrors the record store layout, keyed by record category.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd

from core.capital import Investment, Land, capital_transaction_record
from core.models import RecordCategory

__all__ = ["generate_sample_records", "write_seed_file"]


@dataclass(frozen=True)
class CounterpartyProfile:
    """Metadata describing a client or supplier used in synthetic records."""

    name: str
    code_prefix: str
    low: float
    high: float


RECURRING_RULES: Sequence[dict[str, Any]] = (
    {"description": "Staff Salaries", "amount": 15000, "day_of_month": 1},
    {"description": "Office Rent", "amount": 4200, "day_of_month": 28},
    {"description": "Software Licences", "amount": 650, "day_of_month": 31},
)

ONE_OFF_PAYMENTS: Sequence[tuple[str, float, int]] = (
    ("Annual Insurance", 12000.0, 45),
    ("Equipment Servicing", 1800.0, 12),
)

CLIENTS: Sequence[CounterpartyProfile] = (
    CounterpartyProfile("ABC Corporation", "INV", 18000.0, 32000.0),
    CounterpartyProfile("Northwind Traders", "INV", 6000.0, 14000.0),
)

SUPPLIERS: Sequence[CounterpartyProfile] = (
    CounterpartyProfile("Office Supplies Co", "SUP", 1500.0, 3500.0),
    CounterpartyProfile("Tech Hardware Inc", "SUP", 9000.0, 16000.0),
)

INVESTMENTS: Sequence[Investment] = (
    Investment(name="Harbour Fund II", size=400000.0, share_percentage=10.0, debt_percentage=40.0, id=1),
)

LANDS: Sequence[Land] = (
    Land(land_name="Riverside Plot", size_sqm=1200.0, price_per_sqm=85.0, debt_percentage=50.0, id=1),
)


def generate_sample_records(
    today: date | datetime | str | None = None,
    *,
    seed: Optional[int] = None,
) -> dict[str, list[dict[str, Any]]]:
    """Generate a record set centred on ``today`` (defaults to the current date).

    Dated records are spread from roughly two weeks before ``today`` to two
    months after it so the default dashboard window always has activity.
    """

    rng = np.random.default_rng(seed)
    anchor = pd.Timestamp(today if today is not None else date.today()).normalize()

    def _on(offset_days: int) -> str:
        return (anchor + pd.Timedelta(days=int(offset_days))).strftime("%Y-%m-%d")

    recurring = [{"id": index, **rule} for index, rule in enumerate(RECURRING_RULES, start=1)]

    non_recurring = [
        {"id": index, "description": description, "amount": amount, "payment_date": _on(offset)}
        for index, (description, amount, offset) in enumerate(ONE_OFF_PAYMENTS, start=1)
    ]

    invoices: list[dict[str, Any]] = []
    for client in CLIENTS:
        for _ in range(2):
            number = len(invoices) + 1
            invoices.append(
                {
                    "id": number,
                    "invoice_code": f"{client.code_prefix}-{number:03d}",
                    "client_name": client.name,
                    "amount": round(float(rng.uniform(client.low, client.high)), 2),
                    "due_date": _on(rng.integers(-10, 60)),
                }
            )

    supplier_payments: list[dict[str, Any]] = []
    for supplier in SUPPLIERS:
        number = len(supplier_payments) + 1
        supplier_payments.append(
            {
                "id": number,
                "invoice_code": f"{supplier.code_prefix}-{number:03d}",
                "supplier_name": supplier.name,
                "amount": round(float(rng.uniform(supplier.low, supplier.high)), 2),
                "due_date": _on(rng.integers(5, 35)),
            }
        )

    capital: list[dict[str, Any]] = []
    for asset in (*INVESTMENTS, *LANDS):
        capital.append(
            capital_transaction_record(asset, "buy", anchor + pd.Timedelta(days=int(rng.integers(-12, 20))))
        )
    sale_asset = LANDS[0]
    capital.append(
        capital_transaction_record(
            sale_asset,
            "sale",
            anchor + pd.Timedelta(days=int(rng.integers(40, 70))),
            amount=round(sale_asset.value * float(rng.uniform(1.05, 1.25)), 2),
        )
    )
    for index, record in enumerate(capital, start=1):
        record["id"] = index

    return {
        RecordCategory.RECURRING_PAYMENT_RULE.value: recurring,
        RecordCategory.NON_RECURRING_PAYMENT.value: non_recurring,
        RecordCategory.INVOICE.value: invoices,
        RecordCategory.SUPPLIER_PAYMENT.value: supplier_payments,
        RecordCategory.CAPITAL_TRANSACTION.value: capital,
    }


def write_seed_file(
    path: str | Path,
    *,
    seed: Optional[int] = None,
    **kwargs: Any,
) -> dict[str, list[dict[str, Any]]]:
    """Generate sample records and persist them to ``path`` as JSON.

    Additional keyword arguments are forwarded to
    :func:`generate_sample_records`.
    """

    records = generate_sample_records(seed=seed, **kwargs)
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(records, indent=2), encoding="utf-8")
    return records


if __name__ == "__main__":  # pragma: no cover - manual seeding helper
    write_seed_file(Path(__file__).resolve().parent / "seed.json", seed=7)
