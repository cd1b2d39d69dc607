"""Statement preview endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.concurrency import run_in_threadpool

from statement_ingest.api.deps import get_enhancer, get_factory
from statement_ingest.cleaning.enhancer import DescriptionEnhancer
from statement_ingest.config import settings
from statement_ingest.core.exceptions import StatementProcessingError
from statement_ingest.parsers.factory import ParserFactory
from statement_ingest.schemas.api import (
    ErrorResponse,
    StatementPreview,
    SupportedBanksResponse,
)
from statement_ingest.services.statement import (
    PDF_CONTENT_TYPE,
    SUPPORTED_CONTENT_TYPES,
    StatementPreviewService,
)

router = APIRouter(prefix="/statements", tags=["statements"])

PDF_MAGIC_BYTES = b"%PDF-"


async def read_upload(request: Request) -> tuple[bytes, str]:
    """Read a raw statement body with a strict size cap.

    Returns:
        (body, normalized content type)

    Raises:
        StatementProcessingError: API_001 wrong type, API_002 too large,
            API_005 empty body or missing PDF magic bytes
    """
    content_type = (request.headers.get("content-type") or "").split(";")[0].strip().lower()
    if content_type not in SUPPORTED_CONTENT_TYPES:
        raise StatementProcessingError(
            f"Unsupported content type: {content_type or 'missing'}",
            error_code="API_001",
            http_status=status.HTTP_400_BAD_REQUEST,
        )

    max_bytes = settings.upload_max_size_mb * 1024 * 1024
    buf = bytearray()
    async for chunk in request.stream():
        if not chunk:
            continue
        if len(buf) + len(chunk) > max_bytes:
            raise StatementProcessingError(
                f"Upload exceeds {settings.upload_max_size_mb}MB",
                error_code="API_002",
                http_status=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            )
        buf.extend(chunk)
    body = bytes(buf)

    if not body:
        raise StatementProcessingError(
            "Empty upload", error_code="API_005", http_status=status.HTTP_400_BAD_REQUEST
        )
    if content_type == PDF_CONTENT_TYPE and not body.startswith(PDF_MAGIC_BYTES):
        raise StatementProcessingError(
            "File is not a PDF", error_code="API_005", http_status=status.HTTP_400_BAD_REQUEST
        )

    return body, content_type


@router.post(
    "/preview",
    response_model=StatementPreview,
    summary="Parse a bank statement for review",
    description="""
    Parse a NayaPay or HBL statement PDF, or a fixed-column CSV, into
    transactions ready for import review. Nothing is persisted.

    ## Request
    - Raw body with `Content-Type: application/pdf` or `text/csv`
    - Maximum size: configurable via `UPLOAD_MAX_SIZE_MB` (default: 25MB)
    - `enhance=false` skips LLM description cleanup

    ## Error Codes
    - PARSE_001: Unsupported bank format
    - PARSE_002: No readable text in the PDF
    - PARSE_005: No transactions found
    - VAL_001: Too many rows with unrecognized dates
    - API_001 / API_002 / API_005: Upload problems
    """,
    responses={
        400: {"description": "Bad upload or unreadable statement", "model": ErrorResponse},
        413: {"description": "File too large", "model": ErrorResponse},
        422: {"description": "Statement parsed but unusable", "model": ErrorResponse},
    },
)
async def preview_statement(
    request: Request,
    enhance: Annotated[bool, Query(description="Apply LLM description cleanup")] = True,
    factory: ParserFactory = Depends(get_factory),
    enhancer: DescriptionEnhancer | None = Depends(get_enhancer),
) -> StatementPreview:
    body, content_type = await read_upload(request)
    service = StatementPreviewService(parser_factory=factory, enhancer=enhancer)
    return await run_in_threadpool(service.preview, body, content_type, enhance)


@router.get("/banks", response_model=SupportedBanksResponse)
async def list_supported_banks(
    factory: ParserFactory = Depends(get_factory),
) -> SupportedBanksResponse:
    """List the banks whose statements can be parsed."""
    return SupportedBanksResponse(banks=factory.get_supported_bank_names())
