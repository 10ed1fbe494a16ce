"""JSON export and processing summary printer.

This module is the hand-off to the presentation layer:

- :func:`to_dict` converts an :class:`AggregateResult` into a JSON-ready
  dict using the chart layer's camelCase field names.
- :func:`write_json` writes that dict (and optionally the canonical
  transaction set) to a file.
- :func:`print_summary` prints a human-readable summary to stdout.
"""

from __future__ import annotations

import json
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

from spending_dashboard.models import AggregateResult, PipelineResult, Transaction

CENTS = Decimal("0.01")


def _money(value: Decimal) -> float:
    """Round a Decimal to cents and convert it for JSON output."""
    return float(value.quantize(CENTS, rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------------
# JSON export
# ---------------------------------------------------------------------------


def to_dict(result: AggregateResult) -> dict:
    """Convert *result* to a JSON-serializable dict.

    Decimals are rounded to cents and emitted as numbers, dates as ISO
    strings. Category trend rows are flattened to
    ``{"month": "2026-01", "<category>": amount, ...}``.
    """
    largest = result.largest_expense
    return {
        "totalSpent": _money(result.total_spent),
        "totalIncome": _money(result.total_income),
        "transactionCount": result.transaction_count,
        "avgTransaction": _money(result.avg_transaction),
        "avgMonthlySpend": _money(result.avg_monthly_spend),
        "avgDailySpend": _money(result.avg_daily_spend),
        "monthOverMonthChange": _money(result.month_over_month_change),
        "yearOverYearChange": _money(result.year_over_year_change),
        "topMerchant": {
            "name": result.top_merchant.name,
            "amount": _money(result.top_merchant.amount),
        },
        "largestExpense": (
            {
                "description": largest.description,
                "amount": _money(largest.amount),
                "date": largest.date.isoformat(),
            }
            if largest is not None
            else None
        ),
        "categoryBreakdown": [
            {"name": c.name, "value": _money(c.value)} for c in result.category_breakdown
        ],
        "monthlySpending": [
            {"month": p.period, "amount": _money(p.amount)} for p in result.monthly_spending
        ],
        "yearlySpending": [
            {"month": p.period, "amount": _money(p.amount)} for p in result.yearly_spending
        ],
        "avgSpendingByDayOfWeek": [
            {"day": d.day, "amount": _money(d.average)}
            for d in result.avg_spending_by_day_of_week
        ],
        "recurringPayments": [
            {
                "description": p.description,
                "amount": _money(p.amount),
                "monthsCharged": p.months_charged,
            }
            for p in result.recurring_payments
        ],
        "balanceTrend": [
            {"date": b.date.isoformat(), "runningBalance": _money(b.running_balance)}
            for b in result.balance_trend
        ],
        "categoryTrend": [
            {"month": point.month, **{k: _money(v) for k, v in point.totals.items()}}
            for point in result.category_trend
        ],
        "dateRange": {
            "earliest": result.date_range.earliest.isoformat()
            if result.date_range.earliest
            else None,
            "latest": result.date_range.latest.isoformat()
            if result.date_range.latest
            else None,
        },
        "hasCategoryData": result.has_category_data,
    }


def transaction_to_dict(txn: Transaction) -> dict:
    """Canonical transaction as a plain dict (``source_file`` omitted)."""
    return {
        "date": txn.date.isoformat(),
        "description": txn.description,
        "category": txn.category,
        "amount": str(txn.amount),
    }


def write_json(
    result: AggregateResult,
    output_path: str | Path,
    transactions: list[Transaction] | None = None,
) -> Path:
    """Write *result* as indented JSON to *output_path*.

    Overwrites the file if it already exists and creates missing parent
    directories.

    Args:
        result: Aggregate to export.
        output_path: Destination file.
        transactions: If given, the canonical transaction set is included
            under a ``"transactions"`` key.

    Returns:
        The :class:`~pathlib.Path` to the written file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    payload = to_dict(result)
    if transactions is not None:
        payload["transactions"] = [transaction_to_dict(t) for t in transactions]

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
        f.write("\n")

    return output_path


# ---------------------------------------------------------------------------
# Summary printer
# ---------------------------------------------------------------------------


def print_summary(pipeline_result: PipelineResult) -> None:
    """Print a human-readable processing summary to stdout.

    The summary includes:

    - Transaction count and date range.
    - Totals and averages.
    - Top merchant and largest expense.
    - Category breakdown.
    - Recurring payments.
    - Warnings and errors, if any.

    Args:
        pipeline_result: The :class:`~spending_dashboard.models.PipelineResult`
            from a completed pipeline run.
    """
    agg = pipeline_result.aggregate

    print()
    print("== Spending Summary ==")

    if agg.date_range.earliest is not None:
        print(
            f"Period:   {agg.date_range.earliest.isoformat()} to "
            f"{agg.date_range.latest.isoformat()} ({agg.transaction_count} transactions)"
        )
    else:
        print("Period:   (no transactions)")

    print(f"Spent:    ${agg.total_spent:,.2f}")
    print(f"Income:   ${agg.total_income:,.2f}")
    print(f"Averages: ${agg.avg_transaction:,.2f}/transaction, "
          f"${agg.avg_monthly_spend:,.2f}/month, ${agg.avg_daily_spend:,.2f}/day")
    print(f"Change:   {agg.month_over_month_change:+.1f}% month over month, "
          f"{agg.year_over_year_change:+.1f}% year over year")

    if agg.top_merchant.name:
        print(f"Top merchant:    {agg.top_merchant.name} (${agg.top_merchant.amount:,.2f})")
    if agg.largest_expense is not None:
        print(
            f"Largest expense: {agg.largest_expense.description} "
            f"(${agg.largest_expense.amount:,.2f} on {agg.largest_expense.date.isoformat()})"
        )

    if agg.category_breakdown:
        print()
        print("Spending by category:")
        for cat in agg.category_breakdown:
            print(f"  {cat.name + ':':<25} ${cat.value:,.2f}")

    if agg.recurring_payments:
        print()
        print("Recurring payments:")
        for payment in agg.recurring_payments:
            print(f"  {payment.description:<30} ${payment.amount:,.2f}  ({payment.months_charged})")

    # Warnings
    if pipeline_result.warnings:
        print()
        print(f"Warnings: {len(pipeline_result.warnings)}")
        for w in pipeline_result.warnings:
            print(f"  - {w}")

    # Errors
    if pipeline_result.errors:
        print()
        print(f"Errors: {len(pipeline_result.errors)}")
        for e in pipeline_result.errors:
            print(f"  - {e}")

    print()
