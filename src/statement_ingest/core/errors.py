"""Error codes and user-friendly messages.

This module defines the error catalog for statement ingestion.
Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

ERROR_CATALOG: dict[str, dict] = {
    "PARSE_001": {
        "code": "PARSE_001",
        "message": "Unsupported bank statement format",
        "user_message": "We couldn't recognize which bank this statement belongs to.",
        "suggestion": "Please upload a statement from one of the supported banks.",
        "retry_allowed": False,
    },
    "PARSE_002": {
        "code": "PARSE_002",
        "message": "Text extraction failed: empty, corrupted or image-only document",
        "user_message": "We couldn't read any text from this file.",
        "suggestion": "Please ensure the PDF is not password-protected or corrupted.",
        "retry_allowed": True,
    },
    "PARSE_005": {
        "code": "PARSE_005",
        "message": "Statement matched a bank profile but no transactions were parsed",
        "user_message": "We couldn't find any transactions in this statement.",
        "suggestion": "The statement format may have changed. Please upload a valid account statement.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Too many parsed rows have malformed dates",
        "user_message": "The statement data appears to be corrupted or incompatible.",
        "suggestion": "Try downloading the statement again from your bank.",
        "retry_allowed": False,
    },
    "VAL_002": {
        "code": "VAL_002",
        "message": "Request payload failed validation",
        "user_message": "Invalid input data.",
        "suggestion": "Please check your input and try again.",
        "retry_allowed": True,
    },
    "LLM_001": {
        "code": "LLM_001",
        "message": "Description enhancement failed",
        "user_message": "We couldn't tidy up the transaction descriptions.",
        "suggestion": "The original descriptions were kept. You can retry later.",
        "retry_allowed": True,
    },
    # API-specific errors
    "API_001": {
        "code": "API_001",
        "message": "Invalid file type uploaded",
        "user_message": "Only PDF and CSV files are supported.",
        "suggestion": "Please upload a PDF or CSV bank statement.",
        "retry_allowed": False,
    },
    "API_002": {
        "code": "API_002",
        "message": "File size exceeds maximum limit",
        "user_message": "The file is too large.",
        "suggestion": "Please upload a smaller statement file.",
        "retry_allowed": False,
    },
    "API_005": {
        "code": "API_005",
        "message": "Empty upload or invalid PDF magic bytes",
        "user_message": "This file appears to be empty or is not a valid PDF.",
        "suggestion": "Please ensure you're uploading an actual PDF file, not a renamed file.",
        "retry_allowed": False,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "user_message": "An unexpected error occurred.",
        "suggestion": "Please try again later or contact support.",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details (a generic entry for unknown codes)
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    """Get user-friendly message for an error code."""
    return get_error(error_code)["user_message"]


def get_suggestion(error_code: str) -> str:
    """Get actionable suggestion for an error code."""
    return get_error(error_code)["suggestion"]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code)["retry_allowed"]
