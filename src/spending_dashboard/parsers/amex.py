"""American Express CSV normalizer.

AMEX CSV format:
    Date, Description, Amount[, Category, ...]

Sign convention:
    AMEX reports charges as positive amounts and payments/credits as
    negative, so the raw value is negated to put spending below zero.
"""

from __future__ import annotations

from collections.abc import Mapping

from spending_dashboard.models import Transaction
from spending_dashboard.parsers.common import cell, parse_amount, parse_date

EXPECTED_COLUMNS = {"Date", "Description", "Amount"}


def normalize(row: Mapping[str, str], source_file: str = "") -> Transaction | None:
    """Normalize one AMEX row, or return ``None`` to reject it."""
    txn_date = parse_date(row.get("Date"))
    amount = parse_amount(row.get("Amount"))
    if txn_date is None or amount is None:
        return None

    return Transaction(
        date=txn_date,
        description=cell(row, "Description"),
        category=cell(row, "Category"),
        amount=-amount,
        source_file=source_file,
    )
