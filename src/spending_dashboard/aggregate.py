"""Spending metrics over a pooled set of canonical transactions.

:func:`aggregate` is the single entry point. It is a pure function: the same
transaction list always yields an equal :class:`AggregateResult`, and any
list (including an empty one) yields a well-formed result without raising.

Conventions used by every metric:

- A transaction is *spending* when its amount is negative, *income*
  otherwise.
- Spend figures (totals, averages, breakdowns, period buckets) use
  ``|amount|``. Only the balance trend uses signed amounts.
- Ratios whose denominator could be zero fall back to a safe default
  (0% change, a span of at least one day/month).
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal

from spending_dashboard.models import (
    DAY_ABBREVIATIONS,
    MONTH_ABBREVIATIONS,
    AggregateResult,
    BalancePoint,
    CategoryTotal,
    CategoryTrendPoint,
    DateRange,
    DayOfWeekAverage,
    LargestExpense,
    MerchantTotal,
    PeriodAmount,
    Transaction,
)
from spending_dashboard.recurring import DEFAULT_MIN_MONTHS, detect_recurring

logger = logging.getLogger(__name__)

DEFAULT_TOP_CATEGORIES = 5
OTHER_CATEGORY = "Other"
UNCATEGORIZED = "Uncategorized"

ZERO = Decimal("0")
HUNDRED = Decimal("100")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def aggregate(
    transactions: list[Transaction],
    top_categories: int = DEFAULT_TOP_CATEGORIES,
    recurring_min_months: int = DEFAULT_MIN_MONTHS,
) -> AggregateResult:
    """Compute every dashboard metric for *transactions*.

    Args:
        transactions: Pooled canonical transactions, in source order. They
            need not be chronological.
        top_categories: Categories listed individually in the breakdown
            before the remainder is collapsed into ``Other``. Default: 5.
        recurring_min_months: Distinct calendar months a charge must span
            to be reported as recurring. Default: 3.

    Returns:
        A fully populated :class:`AggregateResult`, or
        :meth:`AggregateResult.empty` when *transactions* is empty.
    """
    if not transactions:
        logger.info("No transactions to aggregate; returning empty result")
        return AggregateResult.empty()

    spending = [t for t in transactions if t.is_spending]
    total_spent = sum((abs(t.amount) for t in spending), ZERO)
    total_income = sum((t.amount for t in transactions if not t.is_spending), ZERO)

    earliest = min(t.date for t in transactions)
    latest = max(t.date for t in transactions)
    days = days_span(earliest, latest)
    months = months_span(earliest, latest)

    has_category_data = any(t.category for t in transactions)
    monthly = monthly_spending(spending)
    yearly = yearly_totals(spending)

    logger.debug(
        "Aggregating %d transactions (%d spending) from %s to %s",
        len(transactions),
        len(spending),
        earliest,
        latest,
    )

    return AggregateResult(
        total_spent=total_spent,
        total_income=total_income,
        transaction_count=len(transactions),
        avg_transaction=total_spent / len(spending) if spending else ZERO,
        avg_monthly_spend=total_spent / months,
        avg_daily_spend=total_spent / days,
        month_over_month_change=period_change(monthly),
        year_over_year_change=period_change(yearly),
        top_merchant=top_merchant(spending),
        largest_expense=largest_expense(spending),
        category_breakdown=tuple(
            category_breakdown(spending, total_spent, has_category_data, top_categories)
        ),
        monthly_spending=tuple(monthly),
        yearly_spending=tuple(month_name_spending(spending)),
        avg_spending_by_day_of_week=tuple(spending_by_day_of_week(spending)),
        recurring_payments=tuple(detect_recurring(spending, recurring_min_months)),
        balance_trend=tuple(balance_trend(transactions)),
        category_trend=tuple(category_trend(spending)),
        date_range=DateRange(earliest=earliest, latest=latest),
        has_category_data=has_category_data,
    )


# ---------------------------------------------------------------------------
# Spans
# ---------------------------------------------------------------------------


def days_span(earliest: date, latest: date) -> int:
    """Inclusive number of days between two dates, at least 1."""
    return max((latest - earliest).days + 1, 1)


def months_span(earliest: date, latest: date) -> int:
    """Inclusive number of calendar months between two dates, at least 1."""
    span = (latest.year - earliest.year) * 12 + (latest.month - earliest.month) + 1
    return max(span, 1)


# ---------------------------------------------------------------------------
# Per-metric helpers (all take spending-only lists unless noted)
# ---------------------------------------------------------------------------


def top_merchant(spending: list[Transaction]) -> MerchantTotal:
    """Description with the highest cumulative spend.

    Ties go to the description seen first in input order.
    """
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for txn in spending:
        totals[txn.description] += abs(txn.amount)

    if not totals:
        return MerchantTotal(name="", amount=ZERO)

    # max() keeps the first of equal keys; dict order is first-seen order
    name = max(totals, key=lambda k: totals[k])
    return MerchantTotal(name=name, amount=totals[name])


def largest_expense(spending: list[Transaction]) -> LargestExpense | None:
    """The single biggest spending transaction, first seen on ties."""
    if not spending:
        return None
    txn = max(spending, key=lambda t: abs(t.amount))
    return LargestExpense(description=txn.description, amount=abs(txn.amount), date=txn.date)


def category_breakdown(
    spending: list[Transaction],
    total_spent: Decimal,
    has_category_data: bool,
    top_n: int = DEFAULT_TOP_CATEGORIES,
) -> list[CategoryTotal]:
    """Top *top_n* categories by spend, followed by an ``Other`` bucket.

    ``Other`` is always appended and holds the sum of every category past
    the cutoff (zero when there are none). Spend the bank itself labels
    ``Other`` goes straight into that bucket and is never ranked, so the
    name appears once. Blank categories are ranked as ``Uncategorized``.
    When the transaction set has no category data at all, the breakdown is
    a single ``Uncategorized`` bucket equal to *total_spent*.
    """
    if not has_category_data:
        return [CategoryTotal(name=UNCATEGORIZED, value=total_spent)]

    totals: dict[str, Decimal] = defaultdict(Decimal)
    other = ZERO
    for txn in spending:
        if txn.category == OTHER_CATEGORY:
            other += abs(txn.amount)
        else:
            totals[txn.category or UNCATEGORIZED] += abs(txn.amount)

    ranked = sorted(totals.items(), key=lambda pair: pair[1], reverse=True)
    breakdown = [CategoryTotal(name=name, value=value) for name, value in ranked[:top_n]]
    other += sum((value for _, value in ranked[top_n:]), ZERO)
    breakdown.append(CategoryTotal(name=OTHER_CATEGORY, value=other))
    return breakdown


def monthly_spending(spending: list[Transaction]) -> list[PeriodAmount]:
    """Spend per absolute ``YYYY-MM`` month, ascending."""
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for txn in spending:
        totals[txn.date.strftime("%Y-%m")] += abs(txn.amount)
    return [PeriodAmount(period=k, amount=totals[k]) for k in sorted(totals)]


def yearly_totals(spending: list[Transaction]) -> list[PeriodAmount]:
    """Spend per calendar year (``"2026"``), ascending."""
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for txn in spending:
        totals[str(txn.date.year)] += abs(txn.amount)
    return [PeriodAmount(period=k, amount=totals[k]) for k in sorted(totals)]


def month_name_spending(spending: list[Transaction]) -> list[PeriodAmount]:
    """Spend per month name, ``Jan``..``Dec``, summed across all years.

    Always returns 12 entries; months without spending are zero.
    """
    totals = [ZERO] * 12
    for txn in spending:
        totals[txn.date.month - 1] += abs(txn.amount)
    return [PeriodAmount(period=m, amount=a) for m, a in zip(MONTH_ABBREVIATIONS, totals)]


def period_change(buckets: list[PeriodAmount]) -> Decimal:
    """Percent change from the second-latest to the latest bucket.

    *buckets* must already be sorted ascending by period. Returns 0 when
    there are fewer than two buckets or the previous bucket is zero. The
    sign is preserved: positive means spending went up.
    """
    if len(buckets) < 2:
        return ZERO
    previous = buckets[-2].amount
    latest = buckets[-1].amount
    if previous == 0:
        return ZERO
    return (latest - previous) / previous * HUNDRED


def spending_by_day_of_week(spending: list[Transaction]) -> list[DayOfWeekAverage]:
    """Mean spend per transaction for each weekday, ``Sun``..``Sat``."""
    sums = [ZERO] * 7
    counts = [0] * 7
    for txn in spending:
        # date.weekday() is Monday=0; shift so Sunday=0
        day = (txn.date.weekday() + 1) % 7
        sums[day] += abs(txn.amount)
        counts[day] += 1

    return [
        DayOfWeekAverage(day=name, average=sums[i] / counts[i] if counts[i] else ZERO)
        for i, name in enumerate(DAY_ABBREVIATIONS)
    ]


def balance_trend(transactions: list[Transaction]) -> list[BalancePoint]:
    """Running balance after each transaction, in chronological order.

    Takes the full set (income and spending). ``sorted`` is stable, so
    same-day transactions keep their source order.
    """
    running = ZERO
    points: list[BalancePoint] = []
    for txn in sorted(transactions, key=lambda t: t.date):
        running += txn.amount
        points.append(BalancePoint(date=txn.date, running_balance=running))
    return points


def category_trend(spending: list[Transaction]) -> list[CategoryTrendPoint]:
    """Spend per (``YYYY-MM``, category), one point per month, ascending.

    Each point only carries the categories that had spending that month.
    """
    matrix: dict[str, dict[str, Decimal]] = defaultdict(lambda: defaultdict(Decimal))
    for txn in spending:
        month = txn.date.strftime("%Y-%m")
        matrix[month][txn.category or UNCATEGORIZED] += abs(txn.amount)

    return [
        CategoryTrendPoint(month=month, totals=dict(matrix[month]))
        for month in sorted(matrix)
    ]
