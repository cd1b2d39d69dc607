"""Import hand-off for reviewed transactions.

This module covers what happens after parsing:
1. Convert parsed rows to the import form shown for review
2. Optionally rewrite descriptions with the LLM enhancer
3. Hand the user's selection to a persistence sink in fixed-size batches
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

from statement_ingest.cleaning.enhancer import DescriptionEnhancer
from statement_ingest.config import settings
from statement_ingest.core.exceptions import EnhancementError
from statement_ingest.schemas.internal import ImportTransaction, ParsedTransaction

logger = logging.getLogger(__name__)

EXPENSES_COLLECTION = "expenses"
INCOME_COLLECTION = "income"
DEFAULT_IMPORT_DESCRIPTION = "Imported from bank statement"

ProgressCallback = Callable[[int, int], None]


def convert_to_import_format(
    transactions: list[ParsedTransaction],
) -> list[ImportTransaction]:
    """Convert parsed rows to the import form, preserving order."""
    return [ImportTransaction.from_parsed(t) for t in transactions]


@dataclass
class EnhancementOutcome:
    """Result of an enhancement attempt.

    When enhancement fails, ``transactions`` are the inputs unchanged and
    ``error`` carries the reason.
    """

    transactions: list[ImportTransaction]
    enhanced: bool = False
    error: str | None = None


def enhance_transactions(
    transactions: list[ImportTransaction],
    enhancer: DescriptionEnhancer,
) -> EnhancementOutcome:
    """Rewrite descriptions with the enhancer, keeping originals on failure.

    Args:
        transactions: Rows to enhance
        enhancer: Configured DescriptionEnhancer

    Returns:
        EnhancementOutcome; never raises EnhancementError
    """
    if not transactions:
        return EnhancementOutcome(transactions=[], enhanced=False)

    try:
        cleaned = enhancer.enhance([t.description for t in transactions])
    except EnhancementError as e:
        logger.warning(
            "Description enhancement failed, keeping rule-based descriptions",
            extra={"error_code": e.error_code, "count": len(transactions)},
        )
        return EnhancementOutcome(transactions=list(transactions), error=e.message)

    enhanced = [
        t.model_copy(update={"description": new or t.description})
        for t, new in zip(transactions, cleaned)
    ]
    logger.info("Enhanced descriptions", extra={"count": len(enhanced)})
    return EnhancementOutcome(transactions=enhanced, enhanced=True)


class RecordSink(Protocol):
    """Persistence collaborator; raising from insert marks the batch failed."""

    def insert(self, collection: str, records: list[dict[str, Any]]) -> None: ...


@dataclass
class ImportStats:
    succeeded: int = 0
    failed: int = 0
    failed_collections: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.succeeded + self.failed


class TransactionImporter:
    """Hands selected transactions to a sink in fixed-size batches.

    Each batch succeeds or fails on its own; a failing batch is counted
    and later batches still run.

    Example:
        >>> importer = TransactionImporter(sink)
        >>> stats = importer.import_transactions(selected, user_id="u-1")
        >>> print(stats.succeeded, stats.failed)
    """

    def __init__(
        self,
        sink: RecordSink,
        batch_size: int | None = None,
        progress: ProgressCallback | None = None,
    ):
        """Initialize the importer.

        Args:
            sink: Persistence collaborator
            batch_size: Records per insert call (default: IMPORT_BATCH_SIZE setting)
            progress: Called with (processed, total) after every batch
        """
        self.sink = sink
        self.batch_size = batch_size or settings.import_batch_size
        if self.batch_size < 1:
            raise ValueError("batch_size must be positive")
        self.progress = progress

    def import_transactions(
        self, selected: list[ImportTransaction], user_id: str
    ) -> ImportStats:
        """Persist the selected rows, expenses first, then income.

        Raises:
            ValueError: If user_id is empty
        """
        if not user_id:
            raise ValueError("user_id is required to import transactions")

        stats = ImportStats()
        total = len(selected)
        if total == 0:
            logger.info("No transactions selected for import")
            return stats

        expenses = [
            self._expense_record(t, user_id) for t in selected if t.type == "expense"
        ]
        income = [
            self._income_record(t, user_id) for t in selected if t.type == "income"
        ]

        processed = 0
        for collection, records in (
            (EXPENSES_COLLECTION, expenses),
            (INCOME_COLLECTION, income),
        ):
            for start in range(0, len(records), self.batch_size):
                batch = records[start : start + self.batch_size]
                try:
                    self.sink.insert(collection, batch)
                except Exception as e:
                    logger.error(
                        f"{collection} batch insert failed",
                        extra={"error_type": type(e).__name__, "count": len(batch)},
                    )
                    stats.failed += len(batch)
                    if collection not in stats.failed_collections:
                        stats.failed_collections.append(collection)
                else:
                    stats.succeeded += len(batch)

                processed += len(batch)
                if self.progress is not None:
                    self.progress(processed, total)

        logger.info(
            f"Import finished: {stats.succeeded} succeeded, {stats.failed} failed",
            extra={"count": total},
        )
        return stats

    @staticmethod
    def _expense_record(t: ImportTransaction, user_id: str) -> dict[str, Any]:
        return {
            "amount": t.amount,
            "category_id": t.category_id,
            "date": t.date,
            "description": t.description or DEFAULT_IMPORT_DESCRIPTION,
            "user_id": user_id,
        }

    @classmethod
    def _income_record(cls, t: ImportTransaction, user_id: str) -> dict[str, Any]:
        record = cls._expense_record(t, user_id)
        record["is_recurring"] = False
        record["recurring_period"] = None
        return record
