"""Pipeline orchestration for Spending Dashboard.

Composes the processing stages: read each CSV, detect its bank format,
normalize its rows, pool the canonical transactions of every file, and
aggregate the pool.  File-level problems are reported in the returned
:class:`~spending_dashboard.models.StageResult` rather than raised, so one
bad file never stops the rest of the batch.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from spending_dashboard.aggregate import aggregate
from spending_dashboard.detect import clean_header, detect_format, looks_like_data_row
from spending_dashboard.models import (
    AppConfig,
    BankFormat,
    PipelineResult,
    StageResult,
    Transaction,
)
from spending_dashboard.parsers import get_normalizer
from spending_dashboard.parsers.generic import label_headerless

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def run(paths: list[Path], config: AppConfig | None = None) -> PipelineResult:
    """Run the full pipeline over *paths*.

    Stages executed in order:

    1. **Load** -- read, detect and normalize every file, pooling the
       transactions in file order.
    2. **Aggregate** -- compute all metrics over the pooled set.

    Args:
        paths: CSV files to process. Any mix of supported bank formats.
        config: Application configuration. Defaults to :class:`AppConfig`.

    Returns:
        A :class:`PipelineResult` with the pooled transactions, their
        aggregate, and all accumulated warnings and errors.
    """
    if config is None:
        config = AppConfig()

    load_result = load_files(paths)
    result = aggregate(
        load_result.transactions,
        top_categories=config.top_categories,
        recurring_min_months=config.recurring_min_months,
    )

    return PipelineResult(
        transactions=load_result.transactions,
        aggregate=result,
        warnings=load_result.warnings,
        errors=load_result.errors,
    )


def load_files(paths: list[Path]) -> StageResult:
    """Load every file in *paths* and concatenate the results in order."""
    all_transactions: list[Transaction] = []
    warnings: list[str] = []
    errors: list[str] = []

    for path in paths:
        result = load_file(Path(path))
        all_transactions.extend(result.transactions)
        warnings.extend(result.warnings)
        errors.extend(result.errors)

    logger.info("Loaded %d transactions from %d file(s)", len(all_transactions), len(paths))
    return StageResult(transactions=all_transactions, warnings=warnings, errors=errors)


def load_file(file_path: Path) -> StageResult:
    """Read one CSV file and normalize its rows into canonical transactions.

    The first row is treated as a header unless it already looks like a
    transaction, in which case the file is read positionally as
    ``date, description, amount``.

    Args:
        file_path: Path to the CSV file.

    Returns:
        A StageResult containing the normalized transactions, a warning if
        any rows were dropped, and an error if the file could not be used
        at all (missing, unreadable, empty, or an unknown format).
    """
    source = str(file_path)

    try:
        with open(file_path, newline="", encoding="utf-8-sig") as f:
            rows = [r for r in csv.reader(f) if any(c.strip() for c in r)]
    except FileNotFoundError:
        return _file_error(source, "file not found")
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        return _file_error(source, str(exc))

    if not rows:
        return _file_error(source, "empty file or no header row")

    if looks_like_data_row(rows[0]):
        fmt = BankFormat.GENERIC
        records = [label_headerless(r) for r in rows]
    else:
        headers = [clean_header(h) for h in rows[0]]
        fmt = detect_format(headers)
        if fmt is BankFormat.UNKNOWN:
            return _file_error(
                source, f"unrecognized CSV format (headers: {', '.join(headers)})"
            )
        records = [dict(zip(headers, r)) for r in rows[1:]]

    logger.info("%s: detected %s format, %d rows", source, fmt.value, len(records))
    return normalize_rows(records, fmt, source)


def normalize_rows(records: list[dict[str, str]], fmt: BankFormat, source: str = "") -> StageResult:
    """Normalize already-tokenized rows of one file.

    Rejected rows (unparseable date, non-numeric or zero amount) are
    dropped and summarized in a single warning.
    """
    normalize = get_normalizer(fmt)
    transactions: list[Transaction] = []
    dropped = 0

    for row_ordinal, row in enumerate(records):
        txn = normalize(row, source)
        if txn is None:
            dropped += 1
            logger.debug("%s: dropped malformed row %d: %r", source, row_ordinal, row)
            continue
        transactions.append(txn)

    warnings: list[str] = []
    if dropped:
        warnings.append(f"{source}: skipped {dropped} malformed row(s)")

    return StageResult(transactions=transactions, warnings=warnings)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _file_error(source: str, message: str) -> StageResult:
    """Log and wrap a file-level failure; the file contributes nothing."""
    logger.warning("%s: %s", source, message)
    return StageResult(errors=[f"{source}: {message}"])
