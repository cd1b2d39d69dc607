"""HBL (Habib Bank Limited) statement profile.

HBL account activity prints one transaction per row:

    DD-MM-YYYY DD-MM-YYYY DESCRIPTION ... AMOUNT BALANCE

with long descriptions wrapping onto continuation lines. Only one of the
debit/credit columns is filled, so direction is inferred from keywords.
Descriptions stay close to the raw text; the LLM enhancement step is
expected to shorten them.
"""

import logging
import re
from decimal import Decimal

from statement_ingest.cleaning.sanitizer import sanitize_description
from statement_ingest.config import settings
from statement_ingest.parsers.generic import BankProfile
from statement_ingest.schemas.internal import ParsedTransaction

logger = logging.getLogger(__name__)


class HblProfile(BankProfile):
    """Profile for HBL account activity statements."""

    bank_id = "hbl"
    name = "HBL"
    INDICATORS = (
        "HBL Mobile",
        "Habib Bank",
        "Account Activity generated through HBL",
        "IBAN: PK",
        "Transaction\n Date",
        "Value Date",
        "Account Number",
        "CNIC Number",
    )
    DEFAULT_THRESHOLD = 3

    SECTION_START = "Transaction"
    HEADER_COLUMNS = ("Date", "Description", "Debit", "Credit", "Balance")
    ROW_START = re.compile(r"^(\d{2}-\d{2}-\d{4})\s+")
    AMOUNT_BALANCE = re.compile(r"\s+([\d,]+\.\d+)\s+([\d,]+\.\d+)\s*$")
    CREDIT_KEYWORDS = (" fr ", " from ", "transfer fr", "received")

    TRAILING_AMOUNTS = (
        re.compile(r"\s+[\d,]+\.\d+\s+[\d,]+\.\d+\s+[\d,]+\.\d+\s*$"),
        re.compile(r"\s+[\d,]+\.\d+\s+[\d,]+\.\d+\s*$"),
        re.compile(r"\s+[\d,]+\.\d+\s*$"),
    )
    CARD_NUMBER = re.compile(r"\d{16,}")

    def __init__(self, detection_threshold: int | None = None):
        super().__init__(
            settings.hbl_detection_threshold
            if detection_threshold is None
            else detection_threshold
        )

    def parse(self, text: str) -> list[ParsedTransaction]:
        """Walk the statement line by line.

        A dated line opens a transaction, undated lines extend it and a
        blank line closes it.
        """
        transactions: list[ParsedTransaction] = []
        current: list[str] = []
        in_section = False

        def flush() -> None:
            if current:
                transaction = self.parse_row(current)
                if transaction is not None:
                    transactions.append(transaction)
                current.clear()

        for line in text.split("\n"):
            stripped = line.strip()

            if not in_section and self.SECTION_START in stripped:
                in_section = True
                continue

            if in_section and self._is_header(stripped):
                continue

            if not stripped:
                flush()
                continue

            if not in_section:
                continue

            if self.ROW_START.match(stripped):
                flush()
                current.append(stripped)
            elif current:
                current.append(stripped)

        flush()

        logger.debug("Parsed HBL transactions", extra={"count": len(transactions)})
        return transactions

    def parse_row(self, lines: list[str]) -> ParsedTransaction | None:
        """Extract one transaction from its first line and continuation lines."""
        if not lines:
            return None

        first_line = lines[0]
        date_match = self.ROW_START.match(first_line)
        if not date_match:
            return None

        date_text = date_match.group(1)
        debit = Decimal("0")
        credit = Decimal("0")

        # Amounts are always on the first line: amount then running balance.
        amount_match = self.AMOUNT_BALANCE.search(first_line)
        if amount_match:
            amount = self._parse_amount(amount_match.group(1))
            full_text = " ".join(lines).lower()
            if any(keyword in full_text for keyword in self.CREDIT_KEYWORDS):
                credit = amount
            else:
                debit = amount

        if debit == 0 and credit == 0:
            return None

        description = self.clean_row_description(lines, date_text)
        return ParsedTransaction(
            date=self._dashed_date_to_iso(date_text),
            original_date=date_text,
            debit=debit,
            credit=credit,
            description=sanitize_description(description),
        )

    def clean_row_description(self, lines: list[str], date_text: str) -> str:
        """Strip dates, amounts and card numbers, leaving the narrative."""
        first_line = self._strip_trailing_amounts(lines[0])
        cleaned = " ".join([first_line, *lines[1:]])

        cleaned = cleaned.replace(date_text, "").strip()
        cleaned = re.sub(r"^\d{2}-\d{2}-\d{4}\s+", "", cleaned).strip()
        cleaned = self._strip_trailing_amounts(cleaned)
        cleaned = self.CARD_NUMBER.sub("", cleaned)
        cleaned = " ".join(cleaned.split())

        return cleaned or "Transaction"

    def _strip_trailing_amounts(self, text: str) -> str:
        for pattern in self.TRAILING_AMOUNTS:
            text = pattern.sub("", text)
        return text

    def _is_header(self, line: str) -> bool:
        return all(column in line for column in self.HEADER_COLUMNS)
