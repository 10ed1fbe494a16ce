"""Generic fallback normalizer for files without a recognized bank layout.

Columns are matched by case-insensitive substring of the header name: the
first header containing "date" supplies the date, "description" the
description, "category" the category and "amount" the amount. Amounts are
used as-is.

Headerless files are read positionally as date, description, amount; the
loader labels those cells with :data:`HEADERLESS_COLUMNS` before calling
:func:`normalize`.
"""

from __future__ import annotations

from collections.abc import Mapping

from spending_dashboard.models import Transaction
from spending_dashboard.parsers.common import cell, parse_amount, parse_date

HEADERLESS_COLUMNS = ("date", "description", "amount")


def _find_column(headers: list[str], needle: str) -> str | None:
    """Return the first header containing *needle* (case-insensitive)."""
    for header in headers:
        if needle in header.lower():
            return header
    return None


def label_headerless(cells: list[str]) -> dict[str, str]:
    """Turn a positional row into a mapping keyed by :data:`HEADERLESS_COLUMNS`.

    Extra cells are ignored; missing cells become empty strings.
    """
    padded = list(cells) + [""] * (len(HEADERLESS_COLUMNS) - len(cells))
    return dict(zip(HEADERLESS_COLUMNS, padded))


def normalize(row: Mapping[str, str], source_file: str = "") -> Transaction | None:
    """Normalize one generic row, or return ``None`` to reject it."""
    headers = [h for h in row.keys() if h is not None]
    date_col = _find_column(headers, "date")
    amount_col = _find_column(headers, "amount")

    txn_date = parse_date(row.get(date_col) if date_col else None)
    amount = parse_amount(row.get(amount_col) if amount_col else None)
    if txn_date is None or amount is None:
        return None

    return Transaction(
        date=txn_date,
        description=cell(row, _find_column(headers, "description")),
        category=cell(row, _find_column(headers, "category")),
        amount=amount,
        source_file=source_file,
    )
