"""Request and response schemas for the HTTP layer."""

from pydantic import BaseModel, Field

from statement_ingest.schemas.internal import ImportTransaction, ParseResult


class StatementPreview(BaseModel):
    """Parsed statement plus the rows offered for import review."""

    result: ParseResult
    transactions: list[ImportTransaction] = Field(default_factory=list)
    enhanced: bool = Field(False, description="Whether LLM cleanup was applied")
    enhancement_error: str | None = Field(
        None, description="Why enhancement was skipped, when it failed"
    )


class EnhanceRequest(BaseModel):
    descriptions: list[str] = Field(..., max_length=1000)


class EnhanceResponse(BaseModel):
    descriptions: list[str]


class SupportedBanksResponse(BaseModel):
    banks: list[str]


class ErrorResponse(BaseModel):
    """Body returned by every error handler."""

    error_code: str
    message: str
    user_message: str
    suggestion: str
    retry_allowed: bool
