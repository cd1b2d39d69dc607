"""Custom exception classes for statement ingestion.

This module defines the hierarchy of exceptions raised by the ingestion
pipeline. Each exception carries an error_code that maps to the error
catalog in errors.py, plus a descriptive message meant for the user.
"""

from typing import Any


class StatementProcessingError(Exception):
    """Base exception for all statement ingestion errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "PARSE_001")
        message: Descriptive message (safe to show to the user)
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    default_code = "SYS_001"
    default_status = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable description (defaults to the error code)
            error_code: Error code from errors.py (defaults to the class code)
            details: Additional error context (not shown to users)
            http_status: HTTP status code (defaults to the class status)
        """
        self.error_code = error_code or self.default_code
        self.message = message or self.error_code
        self.details = details or {}
        self.http_status = http_status or self.default_status
        super().__init__(self.message)


class ExtractionError(StatementProcessingError):
    """Raised when a document yields no usable text.

    Common causes:
    - Corrupted or non-PDF file
    - Password-protected PDF
    - Scanned image without a text layer
    """

    default_code = "PARSE_002"
    default_status = 400


class UnsupportedFormatError(StatementProcessingError):
    """Raised when no registered bank profile recognizes the statement."""

    default_code = "PARSE_001"
    default_status = 400


class NoTransactionsError(StatementProcessingError):
    """Raised when a profile matched but its parser produced zero rows."""

    default_code = "PARSE_005"
    default_status = 422


class TooManyInvalidRowsError(StatementProcessingError):
    """Raised when more than half of the parsed rows carry malformed dates."""

    default_code = "VAL_001"
    default_status = 422


class EnhancementError(StatementProcessingError):
    """Raised when the optional LLM description cleanup fails.

    Never fatal to an import: callers keep the rule-based descriptions.
    """

    default_code = "LLM_001"
    default_status = 502
