"""PDF text extraction with row reconstruction.

Statement PDFs lay transactions out in columns (date, description, debit,
credit, balance). Reading the raw content stream loses that structure, so
the extractor pulls positioned words from each page through pdfplumber
and rebuilds visual rows from their coordinates.
"""

import importlib
import io
import logging
import threading
from dataclasses import dataclass
from functools import cmp_to_key
from types import ModuleType

from statement_ingest.config import settings
from statement_ingest.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)

_REMEDIATION_HINT = "Please ensure the PDF is not password-protected or corrupted."

_pdf_library: ModuleType | None = None
_pdf_library_lock = threading.Lock()


def get_pdf_library() -> ModuleType:
    """Return the process-wide pdfplumber module, importing it on first use.

    The import is guarded so concurrent first calls initialize it once.
    """
    global _pdf_library
    if _pdf_library is None:
        with _pdf_library_lock:
            if _pdf_library is None:
                _pdf_library = importlib.import_module("pdfplumber")
                logger.debug("Initialized PDF library")
    return _pdf_library


@dataclass(frozen=True)
class TextFragment:
    """A run of text at a position in PDF user space (y grows upwards)."""

    text: str
    x: float
    y: float


def reconstruct_lines(fragments: list[TextFragment], tolerance: float = 5.0) -> list[str]:
    """Rebuild visual rows from positioned fragments.

    Fragments are ordered top-to-bottom, then left-to-right; fragments whose
    y differs by no more than `tolerance` belong to the same row and are
    joined with a single space.

    Args:
        fragments: Positioned text fragments of a single page
        tolerance: Maximum y distance for two fragments to share a row

    Returns:
        Non-empty, stripped lines in reading order
    """

    def compare(a: TextFragment, b: TextFragment) -> float:
        y_diff = b.y - a.y
        if abs(y_diff) > tolerance:
            return y_diff
        return a.x - b.x

    ordered = sorted((f for f in fragments if f.text.strip()), key=cmp_to_key(compare))
    if not ordered:
        return []

    lines: list[str] = []
    current_y = ordered[0].y
    current_line = ""

    for fragment in ordered:
        if abs(fragment.y - current_y) > tolerance:
            if current_line.strip():
                lines.append(current_line.strip())
            current_line = fragment.text
            current_y = fragment.y
        else:
            current_line = f"{current_line} {fragment.text}" if current_line else fragment.text

    if current_line.strip():
        lines.append(current_line.strip())

    return lines


class PDFTextExtractor:
    """Turns PDF bytes into newline-separated reconstructed lines.

    Example:
        >>> extractor = PDFTextExtractor()
        >>> text = extractor.extract_text(pdf_bytes)
        >>> lines = text.splitlines()
    """

    def __init__(self, row_tolerance: float | None = None):
        """Initialize the extractor.

        Args:
            row_tolerance: Row grouping tolerance in PDF units (default: ROW_TOLERANCE setting)
        """
        self.row_tolerance = settings.row_tolerance if row_tolerance is None else row_tolerance

    def extract_text(self, pdf_bytes: bytes) -> str:
        """Extract reconstructed text from a PDF.

        Args:
            pdf_bytes: PDF file content as bytes

        Returns:
            Newline-separated lines for all pages

        Raises:
            ExtractionError: If the PDF cannot be opened or has no text layer
        """
        if not pdf_bytes:
            raise ExtractionError(
                f"PDF appears to be empty. {_REMEDIATION_HINT}",
                details={"reason": "empty_bytes"},
            )

        pdfplumber = get_pdf_library()
        lines: list[str] = []

        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                for page in pdf.pages:
                    lines.extend(self._page_lines(page))
                page_count = len(pdf.pages)
        except ExtractionError:
            raise
        except Exception as e:
            error_msg = str(e).lower()
            if "password" in error_msg or "encrypt" in error_msg:
                reason = "PDF is password-protected."
            else:
                reason = "PDF could not be opened."
            raise ExtractionError(
                f"{reason} {_REMEDIATION_HINT}",
                details={"error_type": type(e).__name__},
            ) from e

        if not lines:
            raise ExtractionError(
                "PDF appears to be empty or corrupted. "
                "Could not extract any text from the PDF file (scanned documents need OCR). "
                f"{_REMEDIATION_HINT}",
                details={"reason": "no_text_layer", "pages": page_count},
            )

        logger.info("Extracted PDF text", extra={"count": len(lines)})
        return "\n".join(lines)

    def _page_lines(self, page) -> list[str]:
        words = page.extract_words()
        if not words:
            return []
        height = float(page.height)
        fragments = [
            TextFragment(
                text=word["text"],
                x=float(word["x0"]),
                y=height - float(word["bottom"]),
            )
            for word in words
        ]
        return reconstruct_lines(fragments, self.row_tolerance)
