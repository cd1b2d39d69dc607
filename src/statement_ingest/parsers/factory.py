"""Parser factory for routing statements to bank profiles.

This module orchestrates the parsing workflow:
1. Extract text from PDF bytes (or take CSV/plain text as-is)
2. Detect the bank using BankDetector
3. Parse with the matched profile
4. Validate and summarize into a ParseResult
"""

import logging
import threading
from decimal import Decimal

from statement_ingest.core.exceptions import ExtractionError, UnsupportedFormatError
from statement_ingest.parsers.csv_parser import CSV_BANK_ID, CSV_BANK_NAME, parse_csv
from statement_ingest.parsers.detector import BankDetector
from statement_ingest.parsers.extractor import PDFTextExtractor
from statement_ingest.parsers.generic import BankProfile
from statement_ingest.parsers.refinements import HblProfile, NayaPayProfile
from statement_ingest.parsers.validator import validate_transactions
from statement_ingest.schemas.internal import (
    BankInfo,
    HeaderTotals,
    ParsedTransaction,
    ParseResult,
    ParseSummary,
)

logger = logging.getLogger(__name__)

HEADER_TOTALS_TOLERANCE = Decimal("1.00")


class ParserFactory:
    """Factory for parsing bank statements.

    The factory handles the complete parsing workflow:
    - Extracts text from PDF bytes
    - Detects which bank issued the statement
    - Runs the matching profile's parser
    - Validates rows and returns a ParseResult

    Example:
        >>> factory = ParserFactory()
        >>> factory.register_profile(NayaPayProfile())
        >>> result = factory.parse_pdf(pdf_bytes)
        >>> print(result.bank.name, result.summary.transaction_count)
    """

    def __init__(
        self,
        extractor: PDFTextExtractor | None = None,
        detector: BankDetector | None = None,
    ):
        """Initialize the parser factory.

        Args:
            extractor: PDF text extractor (default: new PDFTextExtractor)
            detector: Bank detector (default: empty BankDetector)
        """
        self.extractor = extractor or PDFTextExtractor()
        self.detector = detector or BankDetector()

    def register_profile(self, profile: BankProfile) -> None:
        """Register a bank profile; registration order is detection priority.

        Raises:
            ValueError: If the object is not a BankProfile
        """
        if not isinstance(profile, BankProfile):
            raise ValueError(f"Profile must inherit from BankProfile, got {profile!r}")
        self.detector.register(profile)

    def unregister_profile(self, bank_id: str) -> None:
        self.detector.unregister(bank_id)

    def get_supported_bank_names(self) -> list[str]:
        return self.detector.get_supported_banks()

    def parse_pdf(self, pdf_bytes: bytes) -> ParseResult:
        """Parse a bank statement PDF.

        Raises:
            ExtractionError: If the PDF has no readable text
            UnsupportedFormatError: If no profile matches
            NoTransactionsError: If the matched parser finds nothing
            TooManyInvalidRowsError: If most rows have malformed dates
        """
        text = self.extractor.extract_text(pdf_bytes)
        return self.parse_text(text)

    def parse_text(self, text: str) -> ParseResult:
        """Parse already-extracted statement text.

        Args:
            text: Reconstructed statement text

        Returns:
            ParseResult with transactions, summary and warnings
        """
        if not text or not text.strip():
            raise ExtractionError(
                "PDF appears to be empty or corrupted. "
                "Could not extract any text from the PDF file. "
                "Please ensure the PDF is not password-protected or corrupted.",
                details={"reason": "empty_text"},
            )

        profile = self.detector.detect(text)
        if profile is None:
            supported = ", ".join(self.get_supported_bank_names())
            raise UnsupportedFormatError(
                "Unsupported bank statement format. "
                "Could not detect which bank this statement belongs to. "
                f"Currently supported banks: {supported}",
                details={"supported_banks": self.get_supported_bank_names()},
            )

        logger.info("Parsing statement", extra={"bank": profile.bank_id})
        transactions = profile.parse(text)
        logger.info(
            "Parsed statement",
            extra={"bank": profile.bank_id, "count": len(transactions)},
        )

        warnings = validate_transactions(transactions, profile.name)
        return self._build_result(
            BankInfo(id=profile.bank_id, name=profile.name),
            transactions,
            warnings,
            header_totals=profile.extract_header_totals(text),
        )

    def parse_csv(self, csv_content: str) -> ParseResult:
        """Parse a fixed-column CSV statement into a ParseResult."""
        transactions = parse_csv(csv_content)
        warnings = validate_transactions(transactions, CSV_BANK_NAME)
        return self._build_result(
            BankInfo(id=CSV_BANK_ID, name=CSV_BANK_NAME), transactions, warnings
        )

    def _build_result(
        self,
        bank: BankInfo,
        transactions: list[ParsedTransaction],
        warnings: list[str],
        header_totals: HeaderTotals | None = None,
    ) -> ParseResult:
        summary = ParseSummary.from_transactions(transactions)
        return ParseResult(
            bank=bank,
            transactions=transactions,
            summary=summary,
            warnings=warnings + self._check_header_totals(header_totals, summary),
            header_totals=header_totals,
        )

    @staticmethod
    def _check_header_totals(
        header_totals: HeaderTotals | None, summary: ParseSummary
    ) -> list[str]:
        if header_totals is None:
            return []

        warnings = []
        checks = (
            ("expenses", header_totals.expenses, summary.total_expenses),
            ("income", header_totals.income, summary.total_income),
        )
        for label, printed, parsed in checks:
            if printed is not None and abs(printed - parsed) > HEADER_TOTALS_TOLERANCE:
                warnings.append(
                    f"Parsed {label} ({parsed}) differ from the statement header ({printed})."
                )
        return warnings


_factory_instance: ParserFactory | None = None
_factory_lock = threading.Lock()


def get_parser_factory() -> ParserFactory:
    """Get or create the global ParserFactory with the built-in profiles.

    Returns:
        Global ParserFactory singleton
    """
    global _factory_instance
    if _factory_instance is None:
        with _factory_lock:
            if _factory_instance is None:
                factory = ParserFactory()
                factory.register_profile(NayaPayProfile())
                factory.register_profile(HblProfile())
                _factory_instance = factory
    return _factory_instance


def parse_statement(text: str) -> ParseResult:
    """Parse extracted statement text using the global factory."""
    return get_parser_factory().parse_text(text)


def parse_bank_pdf(pdf_bytes: bytes) -> ParseResult:
    """Parse a statement PDF using the global factory."""
    return get_parser_factory().parse_pdf(pdf_bytes)


def parse_csv_statement(csv_content: str) -> ParseResult:
    """Parse CSV statement content using the global factory."""
    return get_parser_factory().parse_csv(csv_content)
