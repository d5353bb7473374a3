"""Validation boundary turning raw store records into tagged record variants."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping

import pandas as pd

from config.logging import get_logger
from core.models import EventCategory, OneOffRecord, RecordCategory, RecurringPaymentRule

__all__ = [
    "RecordSet",
    "ParsedRecords",
    "parse_amount",
    "parse_date",
    "parse_recurring_rule",
    "parse_one_off",
    "parse_record_set",
]

logger = get_logger(__name__)

_DATE_FIELDS: dict[RecordCategory, str] = {
    RecordCategory.NON_RECURRING_PAYMENT: "payment_date",
    RecordCategory.INVOICE: "due_date",
    RecordCategory.SUPPLIER_PAYMENT: "due_date",
    RecordCategory.CAPITAL_TRANSACTION: "transaction_date",
}

_CAPITAL_KINDS: dict[str, EventCategory] = {
    "buy": EventCategory.CAPITAL_BUY,
    "sale": EventCategory.CAPITAL_SALE,
}


@dataclass(frozen=True)
class RecordSet:
    """Raw records grouped by store category, as fetched from a record store."""

    recurring_rules: tuple[Any, ...] = ()
    non_recurring_payments: tuple[Any, ...] = ()
    invoices: tuple[Any, ...] = ()
    supplier_payments: tuple[Any, ...] = ()
    capital_transactions: tuple[Any, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[RecordCategory | str, Iterable[Any]]) -> "RecordSet":
        by_category = {RecordCategory(key): tuple(value or ()) for key, value in data.items()}
        return cls(
            recurring_rules=by_category.get(RecordCategory.RECURRING_PAYMENT_RULE, ()),
            non_recurring_payments=by_category.get(RecordCategory.NON_RECURRING_PAYMENT, ()),
            invoices=by_category.get(RecordCategory.INVOICE, ()),
            supplier_payments=by_category.get(RecordCategory.SUPPLIER_PAYMENT, ()),
            capital_transactions=by_category.get(RecordCategory.CAPITAL_TRANSACTION, ()),
        )

    def by_category(self) -> dict[RecordCategory, tuple[Any, ...]]:
        return {
            RecordCategory.RECURRING_PAYMENT_RULE: self.recurring_rules,
            RecordCategory.NON_RECURRING_PAYMENT: self.non_recurring_payments,
            RecordCategory.INVOICE: self.invoices,
            RecordCategory.SUPPLIER_PAYMENT: self.supplier_payments,
            RecordCategory.CAPITAL_TRANSACTION: self.capital_transactions,
        }

    def __len__(self) -> int:
        return sum(len(records) for records in self.by_category().values())


@dataclass(frozen=True)
class ParsedRecords:
    rules: tuple[RecurringPaymentRule, ...] = ()
    one_offs: tuple[OneOffRecord, ...] = field(default_factory=tuple)


def parse_amount(value: Any) -> float | None:
    """Return ``value`` as a finite float, or ``None`` when it is unusable."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(amount) or math.isinf(amount):
        return None
    return amount


def parse_date(value: Any) -> pd.Timestamp | None:
    """Return a midnight-normalised timestamp, or ``None`` when unparseable."""

    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        parsed = pd.Timestamp(value)
    except (TypeError, ValueError):
        return None
    if pd.isna(parsed):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.tz_localize(None)
    return parsed.normalize()


def _parse_day_of_month(value: Any) -> int | None:
    amount = parse_amount(value)
    if amount is None or not float(amount).is_integer():
        return None
    return int(amount)


def parse_recurring_rule(raw: Any) -> RecurringPaymentRule | None:
    """Coerce a raw mapping or typed rule into a :class:`RecurringPaymentRule`.

    Range checks on ``day_of_month`` and ``amount`` happen during expansion so
    that a bad rule is reported with its expansion context.
    """

    if isinstance(raw, RecurringPaymentRule):
        day_of_month = _parse_day_of_month(raw.day_of_month)
        return replace(
            raw,
            amount=parse_amount(raw.amount),
            day_of_month=day_of_month if day_of_month is not None else 0,
        )
    if not isinstance(raw, Mapping):
        logger.warning("Skipping recurring rule with unexpected shape %r", type(raw).__name__)
        return None

    day_of_month = _parse_day_of_month(raw.get("day_of_month"))
    return RecurringPaymentRule(
        id=raw.get("id"),
        description=str(raw.get("description") or ""),
        amount=parse_amount(raw.get("amount")),
        day_of_month=day_of_month if day_of_month is not None else 0,
    )


def _describe(category: RecordCategory, raw: Mapping[str, Any]) -> str:
    if category is RecordCategory.INVOICE:
        return f"{raw.get('invoice_code', '')} - {raw.get('client_name', '')}"
    if category is RecordCategory.SUPPLIER_PAYMENT:
        return f"{raw.get('invoice_code', '')} - {raw.get('supplier_name', '')}"
    if category is RecordCategory.CAPITAL_TRANSACTION:
        label = raw.get("notes") or raw.get("entity_type") or "capital"
        return f"{str(raw.get('transaction_type', '')).title()} {label}".strip()
    return str(raw.get("description") or "")


def _resolve_kind(category: RecordCategory, raw: Mapping[str, Any]) -> EventCategory | None:
    if category is RecordCategory.NON_RECURRING_PAYMENT:
        return EventCategory.NON_RECURRING
    if category is RecordCategory.INVOICE:
        return EventCategory.INVOICE
    if category is RecordCategory.SUPPLIER_PAYMENT:
        return EventCategory.SUPPLIER_PAYMENT
    if category is RecordCategory.CAPITAL_TRANSACTION:
        transaction_type = str(raw.get("transaction_type") or "").strip().lower()
        return _CAPITAL_KINDS.get(transaction_type)
    return None


def _revalidate_one_off(category: RecordCategory, record: OneOffRecord) -> OneOffRecord | None:
    when = parse_date(record.date)
    if when is None:
        logger.warning(
            "Skipping %s record %r: missing or invalid date %r",
            category.value,
            record.id,
            record.date,
        )
        return None
    return replace(record, date=when, amount=parse_amount(record.amount))


def parse_one_off(category: RecordCategory, raw: Any) -> OneOffRecord | None:
    """Coerce a raw dated record into a :class:`OneOffRecord`.

    Records without a usable date, or capital transactions that are neither a
    ``buy`` nor a ``sale``, are skipped with a warning. A missing amount is
    kept as ``None`` for the normaliser to report.
    """

    if isinstance(raw, OneOffRecord):
        return _revalidate_one_off(category, raw)
    if not isinstance(raw, Mapping):
        logger.warning("Skipping %s record with unexpected shape %r", category.value, type(raw).__name__)
        return None

    record_id = raw.get("id")
    kind = _resolve_kind(category, raw)
    if kind is None:
        logger.warning(
            "Skipping %s record %r: unknown transaction type %r",
            category.value,
            record_id,
            raw.get("transaction_type"),
        )
        return None

    date_field = _DATE_FIELDS[category]
    when = parse_date(raw.get(date_field))
    if when is None:
        logger.warning(
            "Skipping %s record %r: missing or invalid %s %r",
            category.value,
            record_id,
            date_field,
            raw.get(date_field),
        )
        return None

    return OneOffRecord(
        id=record_id,
        description=_describe(category, raw),
        amount=parse_amount(raw.get("amount")),
        date=when,
        kind=kind,
        source=category,
    )


def parse_record_set(records: RecordSet) -> ParsedRecords:
    """Validate every raw record once and return the tagged variants."""

    rules: list[RecurringPaymentRule] = []
    for raw in records.recurring_rules:
        rule = parse_recurring_rule(raw)
        if rule is not None:
            rules.append(rule)

    one_offs: list[OneOffRecord] = []
    for category, raw_records in records.by_category().items():
        if category is RecordCategory.RECURRING_PAYMENT_RULE:
            continue
        for raw in raw_records:
            record = parse_one_off(category, raw)
            if record is not None:
                one_offs.append(record)

    return ParsedRecords(rules=tuple(rules), one_offs=tuple(one_offs))
