from statement_ingest.schemas.internal import (
    BankInfo,
    HeaderTotals,
    ImportTransaction,
    ParsedTransaction,
    ParseResult,
    ParseSummary,
)

__all__ = [
    "BankInfo",
    "HeaderTotals",
    "ImportTransaction",
    "ParsedTransaction",
    "ParseResult",
    "ParseSummary",
]
