"""Recurring payment detection.

A charge is considered recurring (a likely subscription or bill) when the
same description is charged the same amount in several distinct calendar
months.

Detection algorithm:
- Spending transactions are grouped by (description, amount rounded to cents)
- Months are compared by calendar month only (January 2025 and January 2026
  count as one month)
- A group is recurring if it appears in 3+ distinct months
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal

from spending_dashboard.models import MONTH_ABBREVIATIONS, RecurringPayment, Transaction

CENTS = Decimal("0.01")
DEFAULT_MIN_MONTHS = 3


def detect_recurring(
    transactions: list[Transaction],
    min_months: int = DEFAULT_MIN_MONTHS,
) -> list[RecurringPayment]:
    """Detect (description, amount) pairs charged in several months.

    Args:
        transactions: Canonical transactions. Income is ignored.
        min_months: Minimum number of distinct calendar months a charge
            must appear in. Default: 3.

    Returns:
        One :class:`RecurringPayment` per qualifying group, sorted by
        amount descending. Groups with equal amounts keep first-seen order.
    """
    # dicts preserve insertion order, which keeps the final sort stable
    months_by_key: dict[tuple[str, Decimal], set[int]] = defaultdict(set)
    for txn in transactions:
        if not txn.is_spending:
            continue
        key = (txn.description, abs(txn.amount).quantize(CENTS))
        months_by_key[key].add(txn.date.month - 1)

    recurring: list[RecurringPayment] = []
    for (description, amount), months in months_by_key.items():
        if len(months) < min_months:
            continue
        recurring.append(
            RecurringPayment(
                description=description,
                amount=amount,
                months_charged=format_months(months),
            )
        )

    recurring.sort(key=lambda p: p.amount, reverse=True)
    return recurring


def format_months(months: set[int]) -> str:
    """Format 0-based month indexes as ``"Jan, Feb, Mar"`` in calendar order."""
    return ", ".join(MONTH_ABBREVIATIONS[m] for m in sorted(months))
