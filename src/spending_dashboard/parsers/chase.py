"""Chase credit card CSV normalizer.

Chase CSV format:
    Transaction Date, Post Date, Description, Category, Type, Amount, Memo

Sign convention:
    Negative amounts are charges (expenses).
    Positive amounts are refunds/credits.

Transaction Date (not Post Date) is used as the transaction date.
"""

from __future__ import annotations

from collections.abc import Mapping

from spending_dashboard.models import Transaction
from spending_dashboard.parsers.common import cell, parse_amount, parse_date

EXPECTED_COLUMNS = {"Transaction Date", "Description", "Amount", "Category"}


def normalize(row: Mapping[str, str], source_file: str = "") -> Transaction | None:
    """Normalize one Chase row, or return ``None`` to reject it.

    The amount is already signed the canonical way and is used as-is.
    """
    txn_date = parse_date(row.get("Transaction Date"))
    amount = parse_amount(row.get("Amount"))
    if txn_date is None or amount is None:
        return None

    return Transaction(
        date=txn_date,
        description=cell(row, "Description"),
        category=cell(row, "Category"),
        amount=amount,
        source_file=source_file,
    )
