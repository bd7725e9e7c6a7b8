"""
Direct PDF text extraction using pypdf.
Provides the page text that field captions are matched against.
"""
import logging
from typing import Tuple

from pypdf import PdfReader

from app.services.errors import TextExtractionFailed

logger = logging.getLogger(__name__)


class TextExtractor:
    """Extracts the full text and page count of a PDF."""

    def extract(self, pdf_path: str) -> Tuple[str, int]:
        """
        Extract newline-separated text from every page.

        Args:
            pdf_path: Path to the PDF file

        Returns:
            Tuple of (full_text, page_count)

        Raises:
            TextExtractionFailed: the PDF could not be read as text
        """
        try:
            reader = PdfReader(pdf_path)
            pages_text = [page.extract_text() or '' for page in reader.pages]
        except Exception as e:
            raise TextExtractionFailed(f"Failed to extract text from {pdf_path}: {e}") from e

        full_text = '\n'.join(pages_text)
        logger.info(f"Extracted {len(full_text):,} chars of text from {len(pages_text)} page(s)")
        return full_text, len(pages_text)
