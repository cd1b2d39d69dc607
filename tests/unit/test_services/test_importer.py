"""Tests for import conversion, enhancement fallback and batched hand-off."""

from decimal import Decimal
from unittest.mock import Mock

import pytest

from statement_ingest.cleaning.enhancer import DescriptionEnhancer
from statement_ingest.core.exceptions import EnhancementError
from statement_ingest.schemas.internal import ImportTransaction, ParsedTransaction
from statement_ingest.services.importer import (
    ImportStats,
    TransactionImporter,
    convert_to_import_format,
    enhance_transactions,
)


def _parsed(debit="0", credit="0", description="Netflix", date="2025-01-12"):
    return ParsedTransaction(
        date=date,
        original_date=date,
        debit=Decimal(debit),
        credit=Decimal(credit),
        description=description,
    )


def _import(type_="expense", amount="10", description="Item"):
    return ImportTransaction(
        date="2025-01-12", amount=Decimal(amount), type=type_, description=description
    )


class RecordingSink:
    """Sink that records every insert and can fail chosen calls."""

    def __init__(self, fail_calls=()):
        self.calls = []
        self.fail_calls = set(fail_calls)

    def insert(self, collection, records):
        self.calls.append((collection, list(records)))
        if len(self.calls) in self.fail_calls:
            raise RuntimeError("insert failed")


class TestConvertToImportFormat:
    """Test suite for convert_to_import_format."""

    def test_expense_and_income(self):
        rows = convert_to_import_format(
            [_parsed(debit="1500"), _parsed(credit="2500", description="Salary payment")]
        )

        assert rows[0].type == "expense"
        assert rows[0].amount == Decimal("1500")
        assert rows[1].type == "income"
        assert rows[1].amount == Decimal("2500")
        assert rows[1].description == "Salary payment"
        assert all(r.category_id is None for r in rows)

    def test_lossless(self):
        """debit/credit can be reconstructed from the import form."""
        parsed = [_parsed(debit="12.50"), _parsed(credit="99.99"), _parsed(debit="0.01")]
        for original, converted in zip(parsed, convert_to_import_format(parsed)):
            assert converted.to_debit_credit() == (original.debit, original.credit)
            assert converted.date == original.date

    def test_empty_description_default(self):
        rows = convert_to_import_format([_parsed(debit="5", description="")])
        assert rows[0].description == "Imported from PDF"

    def test_order_preserved(self):
        parsed = [_parsed(debit=str(i)) for i in range(1, 6)]
        amounts = [r.amount for r in convert_to_import_format(parsed)]
        assert amounts == [Decimal(i) for i in range(1, 6)]


class TestEnhanceTransactions:
    """Test suite for enhance_transactions."""

    def test_success_replaces_descriptions(self):
        enhancer = Mock(spec=DescriptionEnhancer)
        enhancer.enhance.return_value = ["Netflix", "Salary"]
        rows = [_import(description="Paid to NETFLIX.COM"), _import("income", description="SAL MAR")]

        outcome = enhance_transactions(rows, enhancer)

        assert outcome.enhanced is True
        assert outcome.error is None
        assert [r.description for r in outcome.transactions] == ["Netflix", "Salary"]
        assert rows[0].description == "Paid to NETFLIX.COM"

    def test_blank_result_keeps_original(self):
        enhancer = Mock(spec=DescriptionEnhancer)
        enhancer.enhance.return_value = ["", "Salary"]
        rows = [_import(description="Keep me"), _import("income", description="SAL MAR")]

        outcome = enhance_transactions(rows, enhancer)

        assert [r.description for r in outcome.transactions] == ["Keep me", "Salary"]

    def test_mismatch_keeps_originals(self):
        """Three inputs with a two-item reply leaves descriptions untouched."""
        llm = Mock()
        llm.invoke.return_value = Mock(content='["a", "b"]')
        enhancer = DescriptionEnhancer(llm=llm)
        rows = [_import(description=d) for d in ("one", "two", "three")]

        outcome = enhance_transactions(rows, enhancer)

        assert outcome.enhanced is False
        assert "Mismatch" in outcome.error
        assert [r.description for r in outcome.transactions] == ["one", "two", "three"]

    def test_error_is_not_raised(self):
        enhancer = Mock(spec=DescriptionEnhancer)
        enhancer.enhance.side_effect = EnhancementError("Groq API Error: boom")

        outcome = enhance_transactions([_import()], enhancer)

        assert outcome.error == "Groq API Error: boom"
        assert outcome.transactions[0].description == "Item"

    def test_empty(self):
        enhancer = Mock(spec=DescriptionEnhancer)
        outcome = enhance_transactions([], enhancer)
        assert outcome.transactions == []
        enhancer.enhance.assert_not_called()


class TestTransactionImporter:
    """Test suite for TransactionImporter."""

    def test_records_split_by_type(self):
        sink = RecordingSink()
        selected = [
            _import("expense", "10", "Netflix"),
            _import("income", "2500", "Salary"),
            _import("expense", "5", ""),
        ]

        stats = TransactionImporter(sink).import_transactions(selected, user_id="user-1")

        assert stats == ImportStats(succeeded=3, failed=0)
        (expense_collection, expenses), (income_collection, income) = sink.calls
        assert expense_collection == "expenses"
        assert income_collection == "income"
        assert expenses[0] == {
            "amount": Decimal("10"),
            "category_id": None,
            "date": "2025-01-12",
            "description": "Netflix",
            "user_id": "user-1",
        }
        assert expenses[1]["description"] == "Imported from bank statement"
        assert income[0]["is_recurring"] is False
        assert income[0]["recurring_period"] is None

    def test_batches_of_fifty(self):
        sink = RecordingSink()
        selected = [_import() for _ in range(120)]

        TransactionImporter(sink).import_transactions(selected, user_id="u")

        assert [len(records) for _, records in sink.calls] == [50, 50, 20]

    def test_failed_batch_does_not_stop_later_batches(self):
        """Partial success: one failing batch is counted, the rest continue."""
        sink = RecordingSink(fail_calls={2})
        selected = [_import() for _ in range(120)] + [_import("income") for _ in range(3)]

        stats = TransactionImporter(sink).import_transactions(selected, user_id="u")

        assert len(sink.calls) == 4
        assert stats.succeeded == 73
        assert stats.failed == 50
        assert stats.total == 123
        assert stats.failed_collections == ["expenses"]

    def test_progress_callback(self):
        progress = Mock()
        selected = [_import() for _ in range(3)] + [_import("income") for _ in range(2)]

        TransactionImporter(RecordingSink(), batch_size=2, progress=progress).import_transactions(
            selected, user_id="u"
        )

        assert [c.args for c in progress.call_args_list] == [(2, 5), (3, 5), (5, 5)]

    def test_empty_selection(self):
        sink = RecordingSink()
        stats = TransactionImporter(sink).import_transactions([], user_id="u")
        assert stats == ImportStats()
        assert sink.calls == []

    def test_user_required(self):
        with pytest.raises(ValueError):
            TransactionImporter(RecordingSink()).import_transactions([_import()], user_id="")

    def test_invalid_batch_size(self):
        with pytest.raises(ValueError):
            TransactionImporter(RecordingSink(), batch_size=-1)
