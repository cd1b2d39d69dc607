"""Statement preview service.

Runs one upload through the parsing pipeline and prepares the rows the
review screen shows:
1. Parse the PDF or CSV into a ParseResult
2. Convert to import form
3. Optionally enhance descriptions (failures keep rule-based text)
"""

import logging
import time

from statement_ingest.cleaning.enhancer import DescriptionEnhancer
from statement_ingest.parsers.factory import ParserFactory, get_parser_factory
from statement_ingest.schemas.api import StatementPreview
from statement_ingest.services.importer import (
    convert_to_import_format,
    enhance_transactions,
)

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
CSV_CONTENT_TYPE = "text/csv"
SUPPORTED_CONTENT_TYPES = (PDF_CONTENT_TYPE, CSV_CONTENT_TYPE)


class StatementPreviewService:
    """Builds a review preview from an uploaded statement."""

    def __init__(
        self,
        parser_factory: ParserFactory | None = None,
        enhancer: DescriptionEnhancer | None = None,
    ):
        self.parser_factory = parser_factory or get_parser_factory()
        self.enhancer = enhancer

    def preview(
        self, content: bytes, content_type: str, enhance: bool = True
    ) -> StatementPreview:
        """Parse an upload and prepare it for review.

        Args:
            content: Raw request body
            content_type: PDF_CONTENT_TYPE or CSV_CONTENT_TYPE
            enhance: Whether to attempt LLM description cleanup

        Returns:
            StatementPreview

        Raises:
            StatementProcessingError: Any parsing-stage failure
            ValueError: If the content type is not supported
        """
        start_time = time.time()

        if content_type == PDF_CONTENT_TYPE:
            result = self.parser_factory.parse_pdf(content)
        elif content_type == CSV_CONTENT_TYPE:
            result = self.parser_factory.parse_csv(content.decode("utf-8-sig", errors="replace"))
        else:
            raise ValueError(f"Unsupported content type: {content_type}")

        rows = convert_to_import_format(result.transactions)
        enhanced = False
        enhancement_error = None

        if enhance and self.enhancer is not None:
            outcome = enhance_transactions(rows, self.enhancer)
            rows = outcome.transactions
            enhanced = outcome.enhanced
            enhancement_error = outcome.error

        logger.info(
            "Preview ready",
            extra={
                "bank": result.bank.id,
                "count": len(rows),
                "duration_ms": int((time.time() - start_time) * 1000),
            },
        )

        return StatementPreview(
            result=result,
            transactions=rows,
            enhanced=enhanced,
            enhancement_error=enhancement_error,
        )
