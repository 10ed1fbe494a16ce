"""Core data models for Spending Dashboard.

This module defines all dataclasses used throughout the pipeline. It has zero
internal imports -- everything depends on it, but it depends on nothing within
the package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
DAY_ABBREVIATIONS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

DEFAULT_INSIGHTS_MODEL = "claude-sonnet-4-20250514"


class BankFormat(Enum):
    """Closed set of CSV layouts the normalizers understand.

    ``GENERIC`` is the headerless fallback chosen by the loader; the header
    detector never returns it.
    """

    AMEX = "amex"
    CHASE = "chase"
    CAPITAL_ONE = "capital_one"
    GENERIC = "generic"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Transaction:
    """A single canonical transaction, independent of the source bank format.

    Attributes:
        date: Transaction date at day granularity.
        description: Payee/merchant label. May be empty.
        category: Category label from the bank export, or empty string when
            the source format carries none.
        amount: Signed decimal amount. Negative means money leaving the
            account (spending), positive means income. Never zero.
        source_file: Path of the CSV the row came from (for diagnostics;
            not used by any metric).
    """

    date: date
    description: str
    category: str
    amount: Decimal
    source_file: str = ""

    @property
    def is_spending(self) -> bool:
        return self.amount < 0


@dataclass
class StageResult:
    """Return type for the file loading stage.

    Each stage processes what it can and reports what it could not.

    Attributes:
        transactions: Canonical transactions produced so far.
        warnings: Non-fatal issues, such as dropped malformed rows.
        errors: Per-file failures, such as unreadable files or unknown
            formats. The stage still returns whatever it could process.
    """

    transactions: list[Transaction] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Aggregate result records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MerchantTotal:
    name: str
    amount: Decimal


@dataclass(frozen=True)
class LargestExpense:
    description: str
    amount: Decimal
    date: date


@dataclass(frozen=True)
class CategoryTotal:
    name: str
    value: Decimal


@dataclass(frozen=True)
class PeriodAmount:
    """Spend total for one period label (``"2026-01"`` or ``"Jan"``)."""

    period: str
    amount: Decimal


@dataclass(frozen=True)
class DayOfWeekAverage:
    day: str
    average: Decimal


@dataclass(frozen=True)
class RecurringPayment:
    """A (description, amount) pair charged in several distinct months.

    Attributes:
        description: Merchant description shared by every charge.
        amount: Positive charge amount, rounded to cents.
        months_charged: Ascending, comma-joined month abbreviations, e.g.
            ``"Jan, Feb, Mar"``.
    """

    description: str
    amount: Decimal
    months_charged: str


@dataclass(frozen=True)
class BalancePoint:
    date: date
    running_balance: Decimal


@dataclass(frozen=True)
class CategoryTrendPoint:
    """Spend per category for one ``YYYY-MM`` month.

    Only categories with spending in that month appear in ``totals``; the
    consumer treats a missing category as zero.
    """

    month: str
    totals: dict[str, Decimal]


@dataclass(frozen=True)
class DateRange:
    earliest: date | None = None
    latest: date | None = None


def _empty_yearly() -> tuple[PeriodAmount, ...]:
    return tuple(PeriodAmount(period=m, amount=Decimal("0")) for m in MONTH_ABBREVIATIONS)


def _empty_weekdays() -> tuple[DayOfWeekAverage, ...]:
    return tuple(DayOfWeekAverage(day=d, average=Decimal("0")) for d in DAY_ABBREVIATIONS)


@dataclass(frozen=True)
class AggregateResult:
    """Every derived metric computed from one pooled transaction set.

    Instances are immutable and recomputed wholesale for every run. The
    default-constructed value (see :meth:`empty`) is what an empty
    transaction set aggregates to.

    Attributes:
        total_spent: Sum of ``|amount|`` over spending transactions.
        total_income: Sum of ``amount`` over non-negative transactions.
        transaction_count: Number of transactions aggregated.
        avg_transaction: ``total_spent`` divided by the number of spending
            transactions.
        avg_monthly_spend: ``total_spent`` over the inclusive month span.
        avg_daily_spend: ``total_spent`` over the inclusive day span.
        month_over_month_change: Percent change between the two latest
            ``YYYY-MM`` spend buckets. Positive means spending went up.
        year_over_year_change: Percent change between the two latest
            calendar-year spend buckets.
        top_merchant: Description with the highest cumulative spend.
        largest_expense: Single biggest spending transaction, or ``None``.
        category_breakdown: Top categories by spend plus an ``Other``
            bucket, or a single ``Uncategorized`` bucket.
        monthly_spending: Spend per absolute ``YYYY-MM`` month, ascending.
        yearly_spending: Spend per month name (``Jan``..``Dec``) summed
            across all years.
        avg_spending_by_day_of_week: Mean spend per transaction for each
            weekday, ``Sun``..``Sat``.
        recurring_payments: Candidate subscriptions, amount descending.
        balance_trend: Running balance after each transaction in date order.
        category_trend: Sparse month x category spend matrix.
        date_range: Earliest and latest transaction dates.
        has_category_data: True if any transaction carries a category.
    """

    total_spent: Decimal = Decimal("0")
    total_income: Decimal = Decimal("0")
    transaction_count: int = 0
    avg_transaction: Decimal = Decimal("0")
    avg_monthly_spend: Decimal = Decimal("0")
    avg_daily_spend: Decimal = Decimal("0")
    month_over_month_change: Decimal = Decimal("0")
    year_over_year_change: Decimal = Decimal("0")
    top_merchant: MerchantTotal = field(
        default_factory=lambda: MerchantTotal(name="", amount=Decimal("0"))
    )
    largest_expense: LargestExpense | None = None
    category_breakdown: tuple[CategoryTotal, ...] = ()
    monthly_spending: tuple[PeriodAmount, ...] = ()
    yearly_spending: tuple[PeriodAmount, ...] = field(default_factory=_empty_yearly)
    avg_spending_by_day_of_week: tuple[DayOfWeekAverage, ...] = field(
        default_factory=_empty_weekdays
    )
    recurring_payments: tuple[RecurringPayment, ...] = ()
    balance_trend: tuple[BalancePoint, ...] = ()
    category_trend: tuple[CategoryTrendPoint, ...] = ()
    date_range: DateRange = field(default_factory=DateRange)
    has_category_data: bool = False

    @classmethod
    def empty(cls) -> AggregateResult:
        """Return the result for an empty transaction set."""
        return cls()


@dataclass
class PipelineResult:
    """Final output of a full pipeline run.

    Attributes:
        transactions: The pooled canonical transaction set.
        aggregate: Metrics computed from ``transactions``.
        warnings: Accumulated non-fatal warnings from loading.
        errors: Accumulated per-file errors from loading.
    """

    transactions: list[Transaction] = field(default_factory=list)
    aggregate: AggregateResult = field(default_factory=AggregateResult.empty)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass
class AppConfig:
    """Application configuration loaded from ``config.toml``.

    Attributes:
        top_categories: How many categories the breakdown lists
            individually before collapsing the rest into ``Other``.
            Default: 5.
        recurring_min_months: Distinct calendar months a charge must span
            to count as recurring. Default: 3.
        insights_provider: Insight service provider. "anthropic" or "none".
        insights_model: Model identifier. Default:
            :data:`DEFAULT_INSIGHTS_MODEL`.
        insights_api_key_env: Name of the environment variable containing
            the API key.
    """

    top_categories: int = 5
    recurring_min_months: int = 3
    insights_provider: str = "none"
    insights_model: str = DEFAULT_INSIGHTS_MODEL
    insights_api_key_env: str = "ANTHROPIC_API_KEY"
