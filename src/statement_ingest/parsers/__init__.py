"""Statement parsing: text extraction, bank detection and per-bank parsers.

The pipeline is hybrid:
- BankProfile holds detection and helpers shared by every bank
- Bank-specific profiles in refinements/ implement each layout
"""

from statement_ingest.parsers.detector import BankDetector
from statement_ingest.parsers.extractor import PDFTextExtractor
from statement_ingest.parsers.factory import (
    ParserFactory,
    get_parser_factory,
    parse_bank_pdf,
    parse_csv_statement,
    parse_statement,
)
from statement_ingest.parsers.generic import BankProfile

__all__ = [
    "BankDetector",
    "BankProfile",
    "PDFTextExtractor",
    "ParserFactory",
    "get_parser_factory",
    "parse_bank_pdf",
    "parse_csv_statement",
    "parse_statement",
]
