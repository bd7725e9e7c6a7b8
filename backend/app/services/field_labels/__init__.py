"""
PDF Form Field Labeling
=======================

Maps a PDF's fillable form fields to structured records and infers a
human-readable caption for each one from the document's own text.

Pipeline Stages:
1. FIELD DUMP: parse pdftk dump_data_fields output into field records
2. PAGE TEXT: classify extracted text lines as likely captions
3. NAME DECOMPOSITION: split field names into comparable words
4. SIMILARITY: score field names against caption candidates
5. INFERENCE: best text match, else name-based fallbacks
6. OUTPUT: text report and clean JSON projection

Design Principles:
- Malformed input degrades to fewer fields or missing labels, never errors
- Deterministic outputs (same input = same output)
- A label is never just the raw field name
"""

from .field_records import FieldRecord, parse_field_dump
from .text_elements import TextElement, TextContent, TextElementClassifier
from .field_names import FieldNameParts, parse_field_name
from .similarity import calculate_similarity
from .label_patterns import LABEL_PATTERNS, lookup_label
from .inference import (
    LabelInferenceEngine,
    LabelMatch,
    LabelStrategy,
    EnrichedField,
    TextMatchStrategy,
    PatternStrategy,
    LineReferenceStrategy,
    PartReferenceStrategy,
    CheckboxStrategy,
)
from .organizer import organize_fields, get_statistics
from .reports import generate_text_report, to_clean_dict, to_clean_json
from .pipeline import FieldExtractionPipeline, ExtractionOutput

__all__ = [
    'FieldExtractionPipeline',
    'ExtractionOutput',
    'FieldRecord',
    'parse_field_dump',
    'TextElement',
    'TextContent',
    'TextElementClassifier',
    'FieldNameParts',
    'parse_field_name',
    'calculate_similarity',
    'LABEL_PATTERNS',
    'lookup_label',
    # Inference
    'LabelInferenceEngine',
    'LabelMatch',
    'LabelStrategy',
    'EnrichedField',
    'TextMatchStrategy',
    'PatternStrategy',
    'LineReferenceStrategy',
    'PartReferenceStrategy',
    'CheckboxStrategy',
    # Output
    'organize_fields',
    'get_statistics',
    'generate_text_report',
    'to_clean_dict',
    'to_clean_json',
]
