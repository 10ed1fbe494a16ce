"""Capital One bank account CSV normalizer.

Capital One CSV format:
    Account Number, Transaction Description, Transaction Date,
    Transaction Type, Transaction Amount, Balance

Sign convention:
    Transaction Amount is unsigned; the Transaction Type column says which
    way the money moved. "Debit" rows become negative, everything else
    ("Credit") is used as-is. The type is matched case-insensitively after
    stripping whitespace, so "DEBIT" and " debit " also count.

The export has no category column, so category is always empty.
"""

from __future__ import annotations

from collections.abc import Mapping

from spending_dashboard.models import Transaction
from spending_dashboard.parsers.common import cell, parse_amount, parse_date

EXPECTED_COLUMNS = {
    "Account Number",
    "Transaction Description",
    "Transaction Date",
    "Transaction Amount",
    "Balance",
}


def normalize(row: Mapping[str, str], source_file: str = "") -> Transaction | None:
    """Normalize one Capital One row, or return ``None`` to reject it."""
    txn_date = parse_date(row.get("Transaction Date"))
    amount = parse_amount(row.get("Transaction Amount"))
    if txn_date is None or amount is None:
        return None

    # Debit = money leaving the account -> negative amount
    if cell(row, "Transaction Type").lower() == "debit":
        amount = -amount

    return Transaction(
        date=txn_date,
        description=cell(row, "Transaction Description"),
        category="",
        amount=amount,
        source_file=source_file,
    )
