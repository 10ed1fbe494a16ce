"""Bank format detection from a CSV header row.

Detection is a pure function of the set of header names. Formats are tested
most specific first so that a header set satisfying several layouts is given
the one with the most required columns.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from spending_dashboard.models import BankFormat
from spending_dashboard.parsers import amex, capital_one, chase
from spending_dashboard.parsers.common import parse_amount, parse_date

# Checked in order; first match wins.
_SIGNATURES: list[tuple[BankFormat, set[str]]] = [
    (BankFormat.CAPITAL_ONE, capital_one.EXPECTED_COLUMNS),
    (BankFormat.CHASE, chase.EXPECTED_COLUMNS),
    (BankFormat.AMEX, amex.EXPECTED_COLUMNS),
]


def clean_header(name: str | None) -> str:
    """Strip whitespace and a leading UTF-8 byte order mark from a header."""
    if name is None:
        return ""
    return name.lstrip("\ufeff").strip()


def detect_format(headers: Iterable[str | None]) -> BankFormat:
    """Classify a file by its header names.

    Args:
        headers: Column names from the file's header row.

    Returns:
        The matching :class:`BankFormat`, or ``BankFormat.UNKNOWN`` when no
        known layout matches. ``GENERIC`` is never returned here.
    """
    present = {clean_header(h) for h in headers}
    for fmt, required in _SIGNATURES:
        if required <= present:
            return fmt
    return BankFormat.UNKNOWN


def looks_like_data_row(cells: Sequence[str]) -> bool:
    """Return True if a first row is a transaction rather than a header.

    A headerless export starts straight away with ``date, description,
    amount``: the first cell parses as a date and the third as a number.
    """
    if len(cells) < 3:
        return False
    return parse_date(cells[0]) is not None and parse_amount(cells[2]) is not None
