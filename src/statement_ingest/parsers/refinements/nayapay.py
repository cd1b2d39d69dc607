"""NayaPay statement profile.

NayaPay statements print each transaction over several lines (date, time,
type, description, transaction ID, counterparty bank) and close it with an
amount line such as "-Rs. 1,500" or "-Rs. 1,500Rs. 10,783.02" (amount and
running balance). Transaction tables repeat per page and end at
"CARRIED FORWARD" or the support phone number in the footer.
"""

import logging
import re
from decimal import Decimal

from statement_ingest.cleaning.rules import clean_description
from statement_ingest.cleaning.sanitizer import sanitize_description
from statement_ingest.config import settings
from statement_ingest.parsers.generic import BankProfile
from statement_ingest.schemas.internal import HeaderTotals, ParsedTransaction

logger = logging.getLogger(__name__)

_MONTH_NAMES = "Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec"


class NayaPayProfile(BankProfile):
    """Profile for NayaPay account statements."""

    bank_id = "nayapay"
    name = "NayaPay"
    INDICATORS = (
        "nayapay",
        "NayaPay",
        "NAYAPAY",
        "(021) 111-222-729",
        "www.nayapay.com",
        "support@nayapay.com",
        "TIME TYPE DESCRIPTION",
        "AMOUNT BALANCE",
    )
    DEFAULT_THRESHOLD = 2

    HEADER_COLUMNS = ("TIME", "TYPE", "DESCRIPTION", "AMOUNT")
    SECTION_END = "CARRIED FORWARD"
    FOOTER_PHONE = "(021) 111-222-729"

    # A block ends at a line closing with an amount (optionally amount + balance).
    BLOCK_END_PATTERNS = (
        re.compile(r"Rs\.\s+[\d,]+\.?\d*$"),
        re.compile(r"-?Rs\.\s+[\d,]+\.?\d*Rs\.\s+[\d,]+\.?\d*$"),
    )
    DATE_PATTERN = re.compile(rf"\b(\d{{1,2}}\s+(?:{_MONTH_NAMES})\s+\d{{4}})\b")
    FEE_PATTERN = re.compile(r"Fees and Government Taxes Rs\.\s*([\d,]+\.?\d*)")
    # A charge prefix and its own "Rs. x"; the row may go on with the amount.
    CHARGE_PREFIX = re.compile(
        r"^(?:Fees and Government Taxes|Service Charges)(?:\s*Rs\.\s*[\d,]+\.?\d*)?"
    )
    AMOUNT_PATTERN = re.compile(r"([-+]?)Rs\.\s+([\d,]+\.?\d*)")
    EMBEDDED_AMOUNT = re.compile(r"[-+]?Rs\.\s+[\d,]+\.?\d*")

    # Lines that never contribute to a description.
    NOISE_PATTERNS = [
        re.compile(rf"^\d{{1,2}}\s+(?:{_MONTH_NAMES})\s+\d{{4}}$"),
        re.compile(r"^\d{1,2}:\d{2}\s+(?:AM|PM)$"),
        re.compile(r"^Transaction ID [a-f0-9]+$"),
        re.compile(r"^United Bank-\d+$"),
        re.compile(r"^Meezan Bank-\d+$"),
        re.compile(r"^easypaisa Bank-\d+$"),
        re.compile(r"^Bank.*-\d+$"),
        re.compile(r"^Visa xxxx\d+$"),
        re.compile(r"^(?:USD|EUR|PKR) \d+$"),
        re.compile(r"^Raast (?:In|Out)$"),
        re.compile(r"^Online Transaction$"),
        re.compile(r"^Online$"),
        re.compile(r"^IBFT (?:In|Out)$"),
        re.compile(r"^Peer to Peer$"),
        re.compile(r"^Mobile Top-up$"),
        re.compile(r"^VISA Refund Transaction$"),
        re.compile(r"^Reversal$"),
        re.compile(r"^Service Charges Rs\. 0$"),
        re.compile(r"^[-+]?Rs\.\s+[\d,]+\.?\d*$"),
        re.compile(r"^Fees and Government Taxes"),
        re.compile(r"^Transaction$"),
    ]

    def __init__(
        self,
        detection_threshold: int | None = None,
        max_block_lines: int | None = None,
    ):
        """Initialize the NayaPay profile.

        Args:
            detection_threshold: Indicators required (default: NAYAPAY_DETECTION_THRESHOLD)
            max_block_lines: Safety cap on lines per block (default: MAX_BLOCK_LINES)
        """
        super().__init__(
            settings.nayapay_detection_threshold
            if detection_threshold is None
            else detection_threshold
        )
        self.max_block_lines = (
            settings.max_block_lines if max_block_lines is None else max_block_lines
        )

    def parse(self, text: str) -> list[ParsedTransaction]:
        """Parse every transaction table in the statement.

        Args:
            text: Reconstructed statement text

        Returns:
            Transactions in statement order
        """
        sections = self.split_sections(text)
        logger.debug("Found NayaPay transaction sections", extra={"count": len(sections)})

        transactions: list[ParsedTransaction] = []
        for section in sections:
            for block in self.split_blocks(section):
                transaction = self.parse_block(block)
                if transaction is not None:
                    transactions.append(transaction)
        return transactions

    def split_sections(self, text: str) -> list[list[str]]:
        """Collect the lines of each transaction table."""
        sections: list[list[str]] = []
        current: list[str] = []
        in_section = False

        for line in text.split("\n"):
            stripped = line.strip()

            if all(column in stripped for column in self.HEADER_COLUMNS):
                in_section = True
                continue

            if stripped == self.SECTION_END or self.FOOTER_PHONE in stripped:
                if current:
                    sections.append(current)
                    current = []
                in_section = False
                continue

            if in_section and stripped:
                current.append(stripped)

        if current:
            sections.append(current)

        return sections

    def split_blocks(self, lines: list[str]) -> list[list[str]]:
        """Split section lines into one block per transaction.

        A block closes at an amount line. A fee or service-charge row counts
        only when the transaction amount follows the charge on the same row.
        A block growing past max_block_lines is closed anyway and still
        handed to extraction.
        """
        blocks: list[list[str]] = []
        block: list[str] = []

        for line in lines:
            block.append(line)
            if self._ends_block(line):
                blocks.append(block)
                block = []
            elif len(block) > self.max_block_lines:
                logger.warning(
                    "NayaPay block exceeded line cap; closing it early",
                    extra={"count": len(block)},
                )
                blocks.append(block)
                block = []

        if block:
            blocks.append(block)

        return blocks

    def parse_block(self, lines: list[str]) -> ParsedTransaction | None:
        """Extract one transaction from a block.

        Returns:
            The transaction, or None when no date or no non-zero amount is found
        """
        date_text = ""
        amount = Decimal("0")
        fee = Decimal("0")
        description_parts: list[str] = []

        for line in lines:
            if not date_text:
                date_match = self.DATE_PATTERN.search(line)
                if date_match:
                    date_text = date_match.group(1)

            fee_match = self.FEE_PATTERN.search(line)
            if fee_match:
                fee = self._safe_amount(fee_match.group(1))
                amount_text = line[fee_match.end():]
            else:
                amount_text = self._after_charge(line)
            if amount == 0:
                amount_match = self.AMOUNT_PATTERN.search(amount_text)
                if amount_match:
                    sign, value = amount_match.groups()
                    amount = self._safe_amount(value)
                    if sign == "-":
                        amount = -amount

            if not self._is_noise(line):
                cleaned = self.EMBEDDED_AMOUNT.sub("", line)
                cleaned = " ".join(cleaned.split())
                if cleaned:
                    description_parts.append(cleaned)

        if fee > 0 and amount < 0:
            amount -= fee

        if not date_text or amount == 0:
            return None

        iso_date = self._month_date_to_iso(date_text)
        if not iso_date:
            return None

        description = clean_description(" ".join(description_parts))
        return ParsedTransaction(
            date=iso_date,
            original_date=date_text,
            debit=-amount if amount < 0 else Decimal("0"),
            credit=amount if amount > 0 else Decimal("0"),
            description=sanitize_description(description),
        )

    def extract_header_totals(self, text: str) -> HeaderTotals:
        """Read "Total Spent" / "Total Income" from the statement header."""
        totals = HeaderTotals()

        spent = re.search(r"Total\s+Spent[^\d]*Rs\.\s*([\d,]+\.?\d*)", text, re.IGNORECASE)
        income = re.search(r"Total\s+Income[^\d]*Rs\.\s*([\d,]+\.?\d*)", text, re.IGNORECASE)

        if spent:
            totals.expenses = self._safe_amount(spent.group(1))
        if income:
            totals.income = self._safe_amount(income.group(1))

        return totals

    def _ends_block(self, line: str) -> bool:
        text = self._after_charge(line)
        return any(pattern.search(text) for pattern in self.BLOCK_END_PATTERNS)

    def _after_charge(self, line: str) -> str:
        """Text following a leading fee or service charge, else the whole line."""
        match = self.CHARGE_PREFIX.match(line)
        return line[match.end():] if match else line

    def _is_noise(self, line: str) -> bool:
        return any(pattern.search(line) for pattern in self.NOISE_PATTERNS)

    def _safe_amount(self, text: str) -> Decimal:
        try:
            return self._parse_amount(text)
        except ValueError:
            return Decimal("0")
