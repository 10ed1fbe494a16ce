"""Shared pytest fixtures for Spending Dashboard tests.

Provides reusable fixtures for:
- Paths to the bank CSV fixture files in tests/fixtures/.
- sample_transactions: A list of canonical Transaction objects spanning two
  years, with income, spending, a recurring subscription, and a mix of
  categorized and uncategorized rows.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from spending_dashboard.models import Transaction

# ---------------------------------------------------------------------------
# Path constants
# ---------------------------------------------------------------------------

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Fixture file path helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the tests/fixtures/ directory."""
    return FIXTURES_DIR


@pytest.fixture
def chase_sample_csv() -> Path:
    """Path to the Chase sample CSV fixture file."""
    return FIXTURES_DIR / "chase_valid.csv"


@pytest.fixture
def amex_sample_csv() -> Path:
    """Path to the AMEX sample CSV fixture file."""
    return FIXTURES_DIR / "amex_valid.csv"


@pytest.fixture
def capital_one_sample_csv() -> Path:
    """Path to the Capital One sample CSV fixture file."""
    return FIXTURES_DIR / "capital_one_valid.csv"


# ---------------------------------------------------------------------------
# sample_transactions -- canonical Transaction objects for aggregation tests
# ---------------------------------------------------------------------------


def _txn(d: date, description: str, amount: str, category: str = "") -> Transaction:
    return Transaction(date=d, description=description, category=category, amount=Decimal(amount))


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Realistic canonical transactions across Dec 2025 - Feb 2026.

    Deliberately not in chronological order. Contents:
    - Paychecks (income) on the 1st of each month.
    - NETFLIX -15.49 in Dec, Jan and Feb (recurring).
    - SPOTIFY -9.99 in Jan and Feb only (not recurring).
    - Groceries, dining and one large travel expense.
    - One uncategorized spending row.
    """
    return [
        _txn(date(2026, 1, 1), "PAYROLL", "3000.00", "Income"),
        _txn(date(2026, 1, 3), "NETFLIX", "-15.49", "Entertainment"),
        _txn(date(2026, 1, 10), "KING SOOPERS", "-120.00", "Groceries"),
        _txn(date(2026, 1, 12), "SPOTIFY", "-9.99", "Entertainment"),
        _txn(date(2025, 12, 3), "NETFLIX", "-15.49", "Entertainment"),
        _txn(date(2025, 12, 20), "DELTA AIR LINES", "-640.00", "Travel"),
        _txn(date(2025, 12, 1), "PAYROLL", "3000.00", "Income"),
        _txn(date(2026, 2, 1), "PAYROLL", "3000.00", "Income"),
        _txn(date(2026, 2, 3), "NETFLIX", "-15.49", "Entertainment"),
        _txn(date(2026, 2, 12), "SPOTIFY", "-9.99", "Entertainment"),
        _txn(date(2026, 2, 14), "CHEZ PANISSE", "-180.00", "Food & Drink"),
        _txn(date(2026, 2, 15), "KING SOOPERS", "-95.50", "Groceries"),
        _txn(date(2026, 2, 20), "VENMO", "-40.00"),
    ]
