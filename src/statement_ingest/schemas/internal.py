"""Internal data schemas for parsed statement data.

These models are the unit handed between the parsing core and its
collaborators (review layer, persistence hand-off). Amounts are Decimal
major units as printed on the statement.
"""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator

TransactionType = Literal["expense", "income"]


class ParsedTransaction(BaseModel):
    """A single transaction extracted from a statement.

    Exactly one of debit/credit is normally non-zero. Parsers drop rows
    where both are zero.
    """

    date: str = Field(..., description="ISO date (YYYY-MM-DD) when parseable")
    debit: Decimal = Field(default=Decimal("0"), ge=0, description="Money out")
    credit: Decimal = Field(default=Decimal("0"), ge=0, description="Money in")
    description: str = Field(..., description="Cleaned, sanitized description")
    original_date: str = Field(..., description="Date exactly as printed on the statement")


class ImportTransaction(BaseModel):
    """Normalized transfer form consumed by the import-review layer."""

    date: str
    amount: Decimal = Field(..., ge=0, description="Positive magnitude")
    type: TransactionType
    description: str
    category_id: str | None = Field(None, description="Resolved later by the user")

    @classmethod
    def from_parsed(cls, transaction: ParsedTransaction) -> "ImportTransaction":
        """Derive the import form: expense iff debit > 0."""
        is_expense = transaction.debit > 0
        return cls(
            date=transaction.date,
            amount=transaction.debit if is_expense else transaction.credit,
            type="expense" if is_expense else "income",
            description=transaction.description or "Imported from PDF",
        )

    def to_debit_credit(self) -> tuple[Decimal, Decimal]:
        """Reconstruct the (debit, credit) pair this row was derived from."""
        if self.type == "expense":
            return self.amount, Decimal("0")
        return Decimal("0"), self.amount


class HeaderTotals(BaseModel):
    """Totals printed in a statement header, used for cross-checking."""

    expenses: Decimal | None = None
    income: Decimal | None = None


class BankInfo(BaseModel):
    id: str
    name: str


class ParseSummary(BaseModel):
    total_income: Decimal
    total_expenses: Decimal
    net: Decimal
    transaction_count: int

    @classmethod
    def from_transactions(cls, transactions: list[ParsedTransaction]) -> "ParseSummary":
        total_income = sum((t.credit for t in transactions), Decimal("0"))
        total_expenses = sum((t.debit for t in transactions), Decimal("0"))
        return cls(
            total_income=total_income,
            total_expenses=total_expenses,
            net=total_income - total_expenses,
            transaction_count=len(transactions),
        )


class ParseResult(BaseModel):
    """Outcome of parsing one statement."""

    bank: BankInfo
    transactions: list[ParsedTransaction] = Field(default_factory=list)
    summary: ParseSummary
    warnings: list[str] = Field(default_factory=list)
    header_totals: HeaderTotals | None = None

    @field_validator("warnings")
    @classmethod
    def drop_blank_warnings(cls, v: list[str]) -> list[str]:
        return [w for w in v if w and w.strip()]
