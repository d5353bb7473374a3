"""Capital asset helpers for investments and land holdings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import pandas as pd

__all__ = [
    "Investment",
    "Land",
    "CapitalAsset",
    "capital_transaction_record",
]


@dataclass(frozen=True)
class Investment:
    """A share in a larger investment vehicle, part funded by debt."""

    name: str
    size: float
    share_percentage: float
    debt_percentage: float = 0.0
    id: Any = None

    entity_type = "investment"

    @property
    def investment_amount(self) -> float:
        return self.size * (self.share_percentage / 100)

    @property
    def debt_amount(self) -> float:
        return self.investment_amount * (self.debt_percentage / 100)

    @property
    def cash_investment(self) -> float:
        return self.investment_amount - self.debt_amount

    @property
    def cash_portion(self) -> float:
        return self.cash_investment


@dataclass(frozen=True)
class Land:
    """A land holding valued per square metre, part funded by debt."""

    land_name: str
    size_sqm: float
    price_per_sqm: float
    debt_percentage: float = 0.0
    id: Any = None

    entity_type = "land"

    @property
    def name(self) -> str:
        return self.land_name

    @property
    def value(self) -> float:
        return self.size_sqm * self.price_per_sqm

    @property
    def debt_amount(self) -> float:
        return self.value * (self.debt_percentage / 100)

    @property
    def cash_injection(self) -> float:
        return self.value - self.debt_amount

    @property
    def cash_portion(self) -> float:
        return self.cash_injection


CapitalAsset = Union[Investment, Land]


def capital_transaction_record(
    asset: CapitalAsset,
    transaction_type: str,
    transaction_date: pd.Timestamp,
    amount: float | None = None,
    *,
    record_id: Any = None,
) -> dict[str, Any]:
    """Build a raw capital transaction for ``asset``.

    ``amount`` defaults to the asset's cash portion, i.e. the part not funded
    by debt.
    """

    if transaction_type not in {"buy", "sale"}:
        raise ValueError(f"transaction_type must be 'buy' or 'sale', got {transaction_type!r}")

    return {
        "id": record_id,
        "entity_id": asset.id,
        "entity_type": asset.entity_type,
        "transaction_type": transaction_type,
        "amount": round(asset.cash_portion if amount is None else float(amount), 2),
        "transaction_date": pd.Timestamp(transaction_date).strftime("%Y-%m-%d"),
        "notes": asset.name,
    }
