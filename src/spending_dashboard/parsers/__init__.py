"""Row normalizer registry for bank CSV formats.

Each format is a module exposing a ``normalize(row, source_file)`` function
that returns a canonical :class:`~spending_dashboard.models.Transaction`, or
``None`` when the row must be dropped. The ``NORMALIZERS`` dict maps each
:class:`~spending_dashboard.models.BankFormat` to its normalize function, and
``get_normalizer()`` provides a lookup with a clear error on ``UNKNOWN``.
"""

from __future__ import annotations

from collections.abc import Callable

from spending_dashboard.models import BankFormat
from spending_dashboard.parsers import amex, capital_one, chase, generic

NORMALIZERS: dict[BankFormat, Callable] = {
    BankFormat.AMEX: amex.normalize,
    BankFormat.CHASE: chase.normalize,
    BankFormat.CAPITAL_ONE: capital_one.normalize,
    BankFormat.GENERIC: generic.normalize,
}


def get_normalizer(fmt: BankFormat) -> Callable:
    """Look up the row normalizer for a detected format.

    Args:
        fmt: Format returned by the detector, or ``GENERIC`` for
            headerless files.

    Returns:
        The normalize function for *fmt*.

    Raises:
        KeyError: If no normalizer handles *fmt* (i.e. ``UNKNOWN``).
    """
    return NORMALIZERS[fmt]
