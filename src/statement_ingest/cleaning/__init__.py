"""Description cleaning: rule chain, sanitizer and optional LLM enhancement."""

from statement_ingest.cleaning.enhancer import DescriptionEnhancer
from statement_ingest.cleaning.rules import clean_description
from statement_ingest.cleaning.sanitizer import sanitize_description

__all__ = ["DescriptionEnhancer", "clean_description", "sanitize_description"]
