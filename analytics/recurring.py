"""Recurring payment rule expansion."""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from config.logging import get_logger
from core.models import ProjectionWindow, RecurringInstance, RecurringPaymentRule

__all__ = ["expand_recurring_rules", "expand_rule"]

logger = get_logger(__name__)

_DAY_RANGE = range(1, 32)


def expand_rule(rule: RecurringPaymentRule, window: ProjectionWindow) -> list[RecurringInstance]:
    """Return one instance per covered month whose clamped payment day is in-window."""

    instances: list[RecurringInstance] = []
    for period in window.months:
        payment_day = min(int(rule.day_of_month), period.days_in_month)
        payment_date = pd.Timestamp(year=period.year, month=period.month, day=payment_day)
        if not window.contains(payment_date):
            continue
        instances.append(
            RecurringInstance(
                rule_id=rule.id,
                description=rule.description,
                amount=float(rule.amount),
                date=payment_date,
            )
        )
    return instances


def expand_recurring_rules(
    rules: Iterable[RecurringPaymentRule],
    window: ProjectionWindow,
) -> list[RecurringInstance]:
    """Expand monthly recurring rules into dated instances within ``window``.

    Parameters
    ----------
    rules:
        Recurring payment rules with a positive ``amount`` and a ``day_of_month``
        between 1 and 31.
    window:
        Inclusive date range. Months are walked from the month containing
        ``window.start`` to the month containing ``window.end``.

    Returns
    -------
    list[RecurringInstance]
        Instances with positive amounts. Rules that fail validation are logged
        and skipped.
    """

    instances: list[RecurringInstance] = []
    for rule in rules:
        if rule.day_of_month not in _DAY_RANGE:
            logger.warning(
                "Skipping recurring rule %r: day_of_month %r outside 1-31",
                rule.id,
                rule.day_of_month,
            )
            continue
        if rule.amount is None or rule.amount <= 0:
            logger.warning(
                "Skipping recurring rule %r: amount %r is not a positive number",
                rule.id,
                rule.amount,
            )
            continue
        instances.extend(expand_rule(rule, window))
    return instances
