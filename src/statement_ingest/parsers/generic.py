"""Base class for bank statement profiles.

A profile bundles everything specific to one bank's statement layout:
fingerprint phrases for detection, the transaction parser, and an
optional header-totals extractor. Concrete profiles live in
parsers/refinements and override only what differs.
"""

import re
from decimal import Decimal, InvalidOperation

from statement_ingest.schemas.internal import HeaderTotals, ParsedTransaction

MONTHS = {
    "Jan": "01",
    "Feb": "02",
    "Mar": "03",
    "Apr": "04",
    "May": "05",
    "Jun": "06",
    "Jul": "07",
    "Aug": "08",
    "Sep": "09",
    "Oct": "10",
    "Nov": "11",
    "Dec": "12",
}


class BankProfile:
    """Detection and parsing strategy for one bank's statements.

    Subclasses set the class attributes and implement parse():
        - bank_id: Stable identifier (e.g., "nayapay")
        - name: Display name (e.g., "NayaPay")
        - INDICATORS: Fingerprint phrases searched in the statement text
        - DEFAULT_THRESHOLD: How many indicators must be present

    Example:
        >>> profile = NayaPayProfile()
        >>> if profile.detect(text):
        ...     transactions = profile.parse(text)
    """

    bank_id: str = ""
    name: str = ""
    INDICATORS: tuple[str, ...] = ()
    DEFAULT_THRESHOLD: int = 2

    def __init__(self, detection_threshold: int | None = None):
        """Initialize the profile.

        Args:
            detection_threshold: Override for the number of indicators required
        """
        self.detection_threshold = (
            self.DEFAULT_THRESHOLD if detection_threshold is None else detection_threshold
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(bank_id={self.bank_id!r})"

    def count_indicators(self, text: str) -> int:
        """Count fingerprint phrases present (exact or case-insensitive)."""
        lower_text = text.lower()
        return sum(
            1
            for indicator in self.INDICATORS
            if indicator in text or indicator.lower() in lower_text
        )

    def detect(self, text: str) -> bool:
        """Return True if the text looks like this bank's statement."""
        return self.count_indicators(text) >= self.detection_threshold

    def parse(self, text: str) -> list[ParsedTransaction]:
        """Parse statement text into transactions."""
        raise NotImplementedError

    def extract_header_totals(self, text: str) -> HeaderTotals | None:
        """Return totals printed in the statement header, if the bank shows any."""
        return None

    @staticmethod
    def _parse_amount(text: str) -> Decimal:
        """Parse an amount string, stripping thousands separators.

        Raises:
            ValueError: If the string is not a number
        """
        cleaned = text.replace(",", "").strip()
        try:
            return Decimal(cleaned)
        except InvalidOperation as e:
            raise ValueError(f"Could not parse amount '{text}'") from e

    @staticmethod
    def _month_date_to_iso(text: str) -> str:
        """Convert "5 Jan 2025" to "2025-01-05"; empty string if unparseable."""
        match = re.fullmatch(r"(\d{1,2})\s+([A-Za-z]{3})\s+(\d{4})", text.strip())
        if not match:
            return ""
        day, month_name, year = match.groups()
        month = MONTHS.get(month_name)
        if not month:
            return ""
        return f"{year}-{month}-{day.zfill(2)}"

    @staticmethod
    def _dashed_date_to_iso(text: str) -> str:
        """Convert "DD-MM-YYYY" to "YYYY-MM-DD"; empty string if unparseable."""
        match = re.fullmatch(r"(\d{1,2})-(\d{1,2})-(\d{4})", text.strip())
        if not match:
            return ""
        day, month, year = match.groups()
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"
