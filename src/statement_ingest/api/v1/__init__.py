"""API version 1 routes."""

from fastapi import APIRouter

from statement_ingest.api.v1 import descriptions, statements

router = APIRouter(prefix="/api/v1")

router.include_router(statements.router)
router.include_router(descriptions.router)
