"""Normalisation of expanded rules and one-off records into signed cash events."""

from __future__ import annotations

import math
import numbers
from decimal import Decimal
from typing import Any, Iterable

from config.logging import get_logger
from core.models import (
    INFLOW_CATEGORIES,
    CashEvent,
    EventCategory,
    OneOffRecord,
    RecordCategory,
    RecurringInstance,
    SourceRef,
)

__all__ = ["signed_amount_for", "normalize_events"]

logger = get_logger(__name__)


def signed_amount_for(category: EventCategory, amount: float) -> float:
    """Apply the category sign convention to ``amount``, ignoring its stored sign."""

    magnitude = abs(float(amount))
    if category in INFLOW_CATEGORIES:
        return magnitude
    return -magnitude


def _coerce_amount(amount: Any, record_label: str) -> float:
    if isinstance(amount, (numbers.Real, Decimal)) and not isinstance(amount, bool):
        value = float(amount)
        if math.isfinite(value):
            return value
    logger.warning("Treating missing or non-numeric amount %r on %s as 0", amount, record_label)
    return 0.0


def _recurring_event(instance: RecurringInstance) -> CashEvent:
    label = f"recurring rule {instance.rule_id!r} on {instance.date:%Y-%m-%d}"
    amount = _coerce_amount(instance.amount, label)
    return CashEvent(
        id=f"recurring-{instance.rule_id}-{instance.date:%Y%m%d}",
        category=EventCategory.RECURRING,
        date=instance.date,
        signed_amount=signed_amount_for(EventCategory.RECURRING, amount),
        description=instance.description,
        source_ref=SourceRef(RecordCategory.RECURRING_PAYMENT_RULE, instance.rule_id),
    )


def _one_off_event(record: OneOffRecord) -> CashEvent:
    label = f"{record.source.value} record {record.id!r}"
    amount = _coerce_amount(record.amount, label)
    return CashEvent(
        id=f"{record.kind.value}-{record.id}",
        category=record.kind,
        date=record.date,
        signed_amount=signed_amount_for(record.kind, amount),
        description=record.description,
        source_ref=SourceRef(record.source, record.id),
    )


def normalize_events(
    instances: Iterable[RecurringInstance],
    one_offs: Iterable[OneOffRecord],
) -> list[CashEvent]:
    """Return one :class:`CashEvent` per input record.

    The output carries no ordering guarantee; consumers sort by ``date``.
    """

    events = [_recurring_event(instance) for instance in instances]
    events.extend(_one_off_event(record) for record in one_offs)
    return events
