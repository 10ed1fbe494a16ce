"""Cell-level parsing shared by every bank normalizer.

The parse helpers return ``None`` instead of raising so that normalizers can
reject a row with a single check.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

# US exports first; ISO dates are handled by ``date.fromisoformat``.
_DATE_FORMATS = ("%m/%d/%Y", "%m/%d/%y", "%Y/%m/%d", "%m-%d-%Y")

# Trailing time-of-day such as " 14:03", " 2:03:10 PM" or "T14:03:10Z".
_TIME_SUFFIX = re.compile(r"[ T]\d{1,2}:\d{2}(:\d{2}(\.\d+)?)?\s*([AaPp][Mm])?(Z|[+-]\d{2}:?\d{2})?$")

# Larger magnitudes cannot be rounded to cents within the default Decimal
# context, so they are rejected like any other malformed amount.
MAX_AMOUNT = Decimal("1e15")


def parse_date(value: str | None) -> date | None:
    """Parse a bank date cell to a calendar date, discarding any time of day.

    Accepts ``YYYY-MM-DD``, ``MM/DD/YYYY``, ``MM/DD/YY``, ``YYYY/MM/DD`` and
    ``MM-DD-YYYY``, each optionally followed by a time.

    Returns:
        The parsed date, or ``None`` if the cell is empty or unparseable.
    """
    if value is None:
        return None
    s = _TIME_SUFFIX.sub("", value.strip())
    if not s:
        return None

    try:
        return date.fromisoformat(s)
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None


def parse_amount(value: str | None) -> Decimal | None:
    """Parse a currency cell into a signed Decimal.

    Strips whitespace, ``$`` and thousands separators. Accounting-style
    parentheses mean a negative value: ``(12.34)`` is ``-12.34``.

    Returns:
        The amount, or ``None`` if the cell is empty, not a number, not
        finite, zero, or at least :data:`MAX_AMOUNT` in magnitude.
    """
    if value is None:
        return None
    s = value.strip().replace("$", "").replace(",", "").replace(" ", "")
    if not s:
        return None

    negative = s.startswith("(") and s.endswith(")")
    if negative:
        s = s[1:-1]

    try:
        amount = Decimal(s)
    except InvalidOperation:
        return None

    if not amount.is_finite() or amount == 0 or abs(amount) >= MAX_AMOUNT:
        return None
    return -amount if negative else amount


def cell(row: Mapping[str, str], column: str | None) -> str:
    """Return the stripped value of *column* in *row*, or ``""``."""
    if column is None:
        return ""
    return (row.get(column) or "").strip()
