"""Fixed-column CSV statement parser.

Expected layout, with one header row that is always skipped:

    date,debit,credit,description...

Lines are split naively on commas; everything after the third column is
rejoined as the description. Dates in DD-MM-YYYY are converted to ISO,
ISO dates pass through, anything else is kept verbatim for the validator
to flag.
"""

import logging
import re
from decimal import Decimal, InvalidOperation

from statement_ingest.cleaning.sanitizer import sanitize_description
from statement_ingest.schemas.internal import ParsedTransaction

logger = logging.getLogger(__name__)

CSV_BANK_ID = "csv"
CSV_BANK_NAME = "CSV"
DEFAULT_DESCRIPTION = "Imported from CSV"

_DD_MM_YYYY = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$")
_LEADING_NUMBER = re.compile(r"^\s*[-+]?(?:\d+(?:\.\d*)?|\.\d+)")


def convert_date_to_iso(date_text: str) -> str:
    """Normalize a CSV date cell.

    Args:
        date_text: Raw date cell

    Returns:
        ISO date, or the input unchanged when the format is not recognized
    """
    match = _DD_MM_YYYY.match(date_text)
    if match:
        day, month, year = match.groups()
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"

    return date_text


def parse_amount_cell(cell: str) -> Decimal:
    """Read the leading number of a cell; blanks and junk read as zero."""
    match = _LEADING_NUMBER.match(cell)
    if not match:
        return Decimal("0")
    try:
        return abs(Decimal(match.group(0).strip()))
    except InvalidOperation:
        return Decimal("0")


def parse_csv(csv_content: str) -> list[ParsedTransaction]:
    """Parse CSV statement content.

    Args:
        csv_content: Decoded CSV text

    Returns:
        Transactions in file order; rows with fewer than three columns or
        with both amounts zero are skipped
    """
    lines = (csv_content or "").strip().splitlines()
    if len(lines) < 2:
        return []

    transactions: list[ParsedTransaction] = []
    skipped = 0

    for line in lines[1:]:
        parts = line.split(",")
        if len(parts) < 3:
            skipped += 1
            continue

        date_text, debit_text, credit_text, *description_parts = parts
        date_text = date_text.strip()
        debit = parse_amount_cell(debit_text)
        credit = parse_amount_cell(credit_text)
        if debit == 0 and credit == 0:
            skipped += 1
            continue

        description = ",".join(description_parts).strip()
        description = re.sub(r'^"|"$', "", description).strip()

        transactions.append(
            ParsedTransaction(
                date=convert_date_to_iso(date_text),
                original_date=date_text,
                debit=debit,
                credit=credit,
                description=sanitize_description(description or DEFAULT_DESCRIPTION),
            )
        )

    if skipped:
        logger.debug("Skipped CSV rows", extra={"count": skipped})

    return transactions
