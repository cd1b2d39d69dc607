"""Sanity checks for a parse result.

Fatal problems raise typed errors; everything else comes back as
human-readable warnings for the review screen.
"""

import logging
import re

from statement_ingest.config import settings
from statement_ingest.core.exceptions import NoTransactionsError, TooManyInvalidRowsError
from statement_ingest.schemas.internal import ParsedTransaction

logger = logging.getLogger(__name__)

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def count_invalid_dates(transactions: list[ParsedTransaction]) -> int:
    return sum(1 for t in transactions if not t.date or not ISO_DATE.match(t.date))


def validate_transactions(
    transactions: list[ParsedTransaction],
    bank_name: str,
    high_water_mark: int | None = None,
    max_invalid_ratio: float | None = None,
) -> list[str]:
    """Validate parsed transactions.

    Args:
        transactions: Parsed rows
        bank_name: Display name of the detected bank (used in messages)
        high_water_mark: Row count above which a warning is added
        max_invalid_ratio: Largest tolerated share of rows with malformed dates

    Returns:
        Non-fatal warnings

    Raises:
        NoTransactionsError: If there are no rows
        TooManyInvalidRowsError: If malformed dates exceed the tolerated share
    """
    if high_water_mark is None:
        high_water_mark = settings.high_transaction_count
    if max_invalid_ratio is None:
        max_invalid_ratio = settings.max_invalid_row_ratio

    if not transactions:
        raise NoTransactionsError(
            f"No transactions found in the {bank_name} statement. "
            "The statement format may have changed or the file may be invalid. "
            f"Please ensure you're uploading a valid {bank_name} account statement.",
            details={"bank": bank_name},
        )

    warnings: list[str] = []
    total = len(transactions)

    if total > high_water_mark:
        warnings.append(f"High transaction count: {total} transactions found.")

    invalid = count_invalid_dates(transactions)
    if invalid > total * max_invalid_ratio:
        raise TooManyInvalidRowsError(
            f"Too many invalid transactions ({invalid}/{total}). "
            "The statement format may not be compatible or the file may be corrupted.",
            details={"bank": bank_name, "invalid": invalid, "total": total},
        )
    if invalid:
        warnings.append(f"{invalid} of {total} transactions have unrecognized dates.")

    if warnings:
        logger.info("Validation produced warnings", extra={"bank": bank_name, "count": len(warnings)})
    return warnings
