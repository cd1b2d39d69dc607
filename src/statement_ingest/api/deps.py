"""Shared dependencies for API routes."""

from statement_ingest.cleaning.enhancer import DescriptionEnhancer
from statement_ingest.config import settings
from statement_ingest.parsers.factory import ParserFactory, get_parser_factory


def get_factory() -> ParserFactory:
    return get_parser_factory()


def get_enhancer() -> DescriptionEnhancer | None:
    """Enhancer when a Groq key is configured, else None (enhancement skipped)."""
    if not settings.groq_api_key:
        return None
    return DescriptionEnhancer(api_key=settings.groq_api_key)
