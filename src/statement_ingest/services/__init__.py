"""Services layered over the parsing core."""

from statement_ingest.services.importer import (
    EnhancementOutcome,
    ImportStats,
    RecordSink,
    TransactionImporter,
    convert_to_import_format,
    enhance_transactions,
)
from statement_ingest.services.statement import StatementPreviewService

__all__ = [
    "EnhancementOutcome",
    "ImportStats",
    "RecordSink",
    "StatementPreviewService",
    "TransactionImporter",
    "convert_to_import_format",
    "enhance_transactions",
]
