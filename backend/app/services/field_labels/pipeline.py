"""
Field Extraction Pipeline
=========================

Coordinates field dump parsing, page text classification and label
inference for one PDF.

Stages:
-------
1. FIELD DUMP: pdftk dump_data_fields -> FieldRecord list
2. PAGE TEXT: pypdf text -> classified TextElement list
3. LABELING: LabelInferenceEngine per field
4. OUTPUT: organized fields, statistics, text report, clean JSON

A missing pdftk or unreadable file fails the request. A text extraction
failure does not: the document is processed with empty page text and no
labeling, so every field keeps its structure with label None and confidence 0.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Any, Optional

from app.services.errors import TextExtractionFailed
from .field_records import FieldRecord, parse_field_dump
from .inference import EnrichedField, LabelInferenceEngine
from .organizer import organize_fields, get_statistics
from .reports import generate_text_report, to_clean_dict
from .text_elements import TextContent, TextElementClassifier

logger = logging.getLogger(__name__)


@dataclass
class ExtractionOutput:
    """Complete extraction result for one document."""
    filename: str
    records: List[FieldRecord]
    fields: List[EnrichedField]
    text_content: TextContent
    file_size_kb: int = 0
    text_extraction_error: Optional[str] = None
    extraction_date: datetime = field(default_factory=datetime.now)

    @property
    def total_fields(self) -> int:
        return len(self.records)

    @property
    def has_fields(self) -> bool:
        return self.total_fields > 0

    @property
    def statistics(self) -> Dict[str, Any]:
        return get_statistics(self.records)

    @property
    def text_output(self) -> str:
        return generate_text_report(self.fields, extraction_date=self.extraction_date)

    def to_clean_json(self) -> List[Dict[str, Any]]:
        return [to_clean_dict(enriched) for enriched in self.fields]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'filename': self.filename,
            'total_fields': self.total_fields,
            'file_size_kb': self.file_size_kb,
            'has_fields': self.has_fields,
            'pages': self.text_content.pages,
            'statistics': self.statistics,
            'fields': organize_fields(self.records),
            'raw_fields': [record.to_dict() for record in self.records],
            'enhanced_fields': [enriched.to_dict() for enriched in self.fields],
            'clean_fields': self.to_clean_json(),
            'text_output': self.text_output,
            'text_extraction_error': self.text_extraction_error,
        }


class FieldExtractionPipeline:
    """
    Pipeline from a PDF on disk to labeled form fields.

    Example usage:

        pipeline = FieldExtractionPipeline()
        result = pipeline.process_pdf('i-130.pdf')

        print(result.text_output)
        clean = result.to_clean_json()
    """

    def __init__(
        self,
        pdftk_service=None,
        text_extractor=None,
        classifier: Optional[TextElementClassifier] = None,
        engine: Optional[LabelInferenceEngine] = None
    ):
        """
        Initialize the extraction pipeline.

        Args:
            pdftk_service: Field dump source (defaults to PdftkService)
            text_extractor: Page text source (defaults to TextExtractor)
            classifier: Text line classifier
            engine: Label inference engine
        """
        if pdftk_service is None:
            from app.services.pdftk_service import PdftkService
            pdftk_service = PdftkService()
        if text_extractor is None:
            from app.services.text_extractor import TextExtractor
            text_extractor = TextExtractor()

        self.pdftk_service = pdftk_service
        self.text_extractor = text_extractor
        self.classifier = classifier or TextElementClassifier()
        self.engine = engine or LabelInferenceEngine()

    def process_pdf(self, pdf_path: str, filename: Optional[str] = None) -> ExtractionOutput:
        """
        Extract and label the form fields of a PDF.

        Args:
            pdf_path: Path to the PDF file
            filename: Display name (defaults to the path's basename)

        Returns:
            ExtractionOutput for the document

        Raises:
            ToolUnavailable: pdftk is not installed
            ExtractionFailed: the file is unreadable or pdftk failed
        """
        filename = filename or os.path.basename(pdf_path)
        logger.info(f"Processing PDF: {filename}")

        dump_text = self.pdftk_service.dump_data_fields(pdf_path)
        file_size_kb = round(os.path.getsize(pdf_path) / 1024)

        text_error = None
        try:
            full_text, pages = self.text_extractor.extract(pdf_path)
        except TextExtractionFailed as e:
            logger.warning(f"Text extraction failed for {filename}, continuing without labels: {e}")
            full_text, pages = '', 0
            text_error = str(e)

        output = self.process_dump(
            dump_text,
            full_text=full_text,
            pages=pages,
            filename=filename,
            label_fields=text_error is None
        )
        output.file_size_kb = file_size_kb
        output.text_extraction_error = text_error
        return output

    def process_dump(
        self,
        dump_text: str,
        full_text: str = '',
        pages: int = 0,
        filename: str = '',
        label_fields: bool = True
    ) -> ExtractionOutput:
        """
        Process pre-extracted field dump and page text.

        Useful when pdftk and text extraction were run separately.

        Args:
            dump_text: pdftk dump_data_fields output
            full_text: Newline-separated page text
            pages: Page count of the document
            filename: Display name of the document
            label_fields: Run label inference; when False every field is left unlabeled

        Returns:
            ExtractionOutput for the document
        """
        records = parse_field_dump(dump_text)
        text_content = self.classifier.build_content(full_text, pages)
        if label_fields:
            fields = self.engine.enrich(records, text_content)
        else:
            fields = self.engine.unlabeled(records)

        logger.info(
            f"Extraction complete for {filename or 'document'}: "
            f"{len(records)} fields, {len(text_content.elements)} text lines, "
            f"{text_content.pages} page(s)"
        )

        return ExtractionOutput(
            filename=filename,
            records=records,
            fields=fields,
            text_content=text_content
        )
