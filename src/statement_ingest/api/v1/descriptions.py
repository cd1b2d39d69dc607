"""Description enhancement endpoint."""

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from statement_ingest.api.deps import get_enhancer
from statement_ingest.cleaning.enhancer import DescriptionEnhancer
from statement_ingest.core.exceptions import EnhancementError
from statement_ingest.schemas.api import EnhanceRequest, EnhanceResponse, ErrorResponse

router = APIRouter(prefix="/descriptions", tags=["descriptions"])


@router.post(
    "/enhance",
    response_model=EnhanceResponse,
    responses={502: {"description": "LLM call failed", "model": ErrorResponse}},
)
async def enhance_descriptions(
    payload: EnhanceRequest,
    enhancer: DescriptionEnhancer | None = Depends(get_enhancer),
) -> EnhanceResponse:
    """Rewrite descriptions with the LLM; the response keeps input order and length."""
    if enhancer is None:
        raise EnhancementError(
            "Description enhancement is not configured (GROQ_API_KEY is not set)",
            http_status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    cleaned = await run_in_threadpool(enhancer.enhance, payload.descriptions)
    return EnhanceResponse(
        descriptions=[new or old for new, old in zip(cleaned, payload.descriptions)]
    )
