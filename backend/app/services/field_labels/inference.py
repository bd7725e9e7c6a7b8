"""
Label Inference Engine
======================

Assigns each form field a best-guess caption and a confidence score.

Strategies are tried in order and the first one that commits a label wins:

1. TextMatchStrategy      - best-scoring likely-label line of page text,
                            accepted when the score reaches the threshold
2. PatternStrategy        - ordered field-name substring dictionary
3. LineReferenceStrategy  - "Line5A" in the name -> "Line 5A"
4. PartReferenceStrategy  - "Part2" in the name -> "Part 2"
5. CheckboxStrategy       - caption recovered from checkbox naming
                            conventions ("CB_AppType" -> "AppType Selection")

Strategies 2-5 are name-based inferences and share one fixed confidence.
When nothing commits, the field has no label and confidence 0. A label is
never the raw field name itself: that adds nothing over the name.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Dict, Any, Optional

from app.config import Config
from .field_records import FieldRecord
from .field_names import FieldNameParts, parse_field_name
from .label_patterns import LABEL_PATTERNS, LabelPattern, lookup_label
from .similarity import calculate_similarity
from .text_elements import TextContent

logger = logging.getLogger(__name__)


@dataclass
class LabelMatch:
    """A committed label and how it was found."""
    label: str
    confidence: float
    method: str  # strategy name, e.g. "text_match", "pattern"


@dataclass
class EnrichedField:
    """A field record plus its inferred label."""
    record: FieldRecord
    field_name_parts: FieldNameParts
    label: Optional[str] = None
    label_confidence: float = 0.0
    label_method: Optional[str] = None

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def type(self) -> Optional[str]:
        return self.record.type

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary: the record's keys plus label information."""
        data = self.record.to_dict()
        data.update({
            'label': self.label,
            'labelConfidence': self.label_confidence,
            'labelMethod': self.label_method,
            'fieldNameParts': self.field_name_parts.to_dict(),
        })
        return data


class LabelStrategy:
    """One rule in the inference chain."""

    name = 'base'

    def match(
        self,
        record: FieldRecord,
        parts: FieldNameParts,
        text_content: TextContent
    ) -> Optional[LabelMatch]:
        raise NotImplementedError


class TextMatchStrategy(LabelStrategy):
    """Pick the likely-label text line that best matches the field name."""

    name = 'text_match'

    def __init__(self, threshold: float):
        self.threshold = threshold

    def match(self, record, parts, text_content):
        best_text = None
        best_score = 0.0

        for element in text_content.label_elements:
            if element.text == record.name:
                continue
            score = calculate_similarity(parts, element.text)
            if score > best_score:
                best_score = score
                best_text = element.text

        if best_text is None or best_score < self.threshold:
            if best_text is not None:
                logger.debug(
                    f"Best text match for '{record.name}' scored {best_score:.2f} "
                    f"(threshold {self.threshold}): '{best_text}'"
                )
            return None

        return LabelMatch(
            label=best_text,
            confidence=min(best_score, 1.0),
            method=self.name
        )


class PatternStrategy(LabelStrategy):
    """Look the raw field name up in the ordered pattern dictionary."""

    name = 'pattern'

    def __init__(self, confidence: float, patterns: List[LabelPattern] = LABEL_PATTERNS):
        self.confidence = confidence
        self.patterns = patterns

    def match(self, record, parts, text_content):
        label = lookup_label(record.name, self.patterns)
        if label is None:
            return None
        return LabelMatch(label=label, confidence=self.confidence, method=self.name)


class LineReferenceStrategy(LabelStrategy):
    """Name the field after the form line it belongs to."""

    name = 'line_reference'
    PATTERN = re.compile(r'Line([A-Z0-9]+)', re.IGNORECASE)

    def __init__(self, confidence: float):
        self.confidence = confidence

    def match(self, record, parts, text_content):
        match = self.PATTERN.search(record.name)
        if not match:
            return None
        return LabelMatch(label=f"Line {match.group(1)}", confidence=self.confidence, method=self.name)


class PartReferenceStrategy(LabelStrategy):
    """Name the field after the form part it belongs to."""

    name = 'part_reference'
    PATTERN = re.compile(r'Part(\d+)', re.IGNORECASE)

    def __init__(self, confidence: float):
        self.confidence = confidence

    def match(self, record, parts, text_content):
        match = self.PATTERN.search(record.name)
        if not match:
            return None
        return LabelMatch(label=f"Part {match.group(1)}", confidence=self.confidence, method=self.name)


class CheckboxStrategy(LabelStrategy):
    """Recover a caption from checkbox naming conventions on Button fields."""

    name = 'checkbox'
    MARKERS = ('CB', 'Check')
    PREFIX = re.compile(r'^.*(?:CB|Check)_')
    ARRAY_SUFFIX = re.compile(r'(?:\[\d+\])+$')
    YES_NO = re.compile(r'(?:YN|Y/N|YesNo|Yes No|\bYes|\bNo)$')
    YES_NO_LABEL = 'Yes/No Selection'

    def __init__(self, confidence: float):
        self.confidence = confidence

    def residue(self, field_name: str) -> str:
        """Field name with checkbox prefix, array indices and underscores removed."""
        residue = self.PREFIX.sub('', field_name, count=1)
        residue = self.ARRAY_SUFFIX.sub('', residue)
        return residue.replace('_', ' ').strip()

    def match(self, record, parts, text_content):
        if record.type != 'Button':
            return None
        if not any(marker in record.name for marker in self.MARKERS):
            return None

        residue = self.residue(record.name)
        if not residue or len(residue) <= 2 or residue == record.name:
            return None

        if self.YES_NO.search(residue):
            label = self.YES_NO_LABEL
        else:
            label = f"{residue} Selection"
        return LabelMatch(label=label, confidence=self.confidence, method=self.name)


class LabelInferenceEngine:
    """
    Runs the label strategies for every field of a document.

    Example usage:

        engine = LabelInferenceEngine()
        enriched = engine.enrich(records, text_content)
    """

    def __init__(
        self,
        threshold: Optional[float] = None,
        inferred_confidence: Optional[float] = None,
        strategies: Optional[List[LabelStrategy]] = None
    ):
        """
        Initialize the inference engine.

        Args:
            threshold: Minimum text-match score (defaults to Config.LABEL_MATCH_THRESHOLD)
            inferred_confidence: Confidence for name-based labels
                (defaults to Config.INFERRED_LABEL_CONFIDENCE)
            strategies: Replace the default strategy chain
        """
        self.threshold = Config.LABEL_MATCH_THRESHOLD if threshold is None else threshold
        self.inferred_confidence = (
            Config.INFERRED_LABEL_CONFIDENCE if inferred_confidence is None else inferred_confidence
        )
        self.strategies = strategies if strategies is not None else self.default_strategies()

    def default_strategies(self) -> List[LabelStrategy]:
        return [
            TextMatchStrategy(self.threshold),
            PatternStrategy(self.inferred_confidence),
            LineReferenceStrategy(self.inferred_confidence),
            PartReferenceStrategy(self.inferred_confidence),
            CheckboxStrategy(self.inferred_confidence),
        ]

    def infer(self, record: FieldRecord, text_content: TextContent) -> EnrichedField:
        """
        Infer the label of a single field.

        Args:
            record: Parsed field record
            text_content: Classified page text of the same document

        Returns:
            EnrichedField with label, confidence and the strategy that produced it
        """
        parts = parse_field_name(record.name)
        enriched = EnrichedField(record=record, field_name_parts=parts)

        for strategy in self.strategies:
            result = strategy.match(record, parts, text_content)
            if result is None:
                continue

            if result.label == record.name:
                # Echoing the name is not a label
                logger.debug(f"Strategy {strategy.name} only echoed '{record.name}'; leaving unlabeled")
                return enriched

            enriched.label = result.label
            enriched.label_confidence = result.confidence
            enriched.label_method = result.method
            logger.debug(
                f"Labeled '{record.name}' as '{result.label}' "
                f"via {result.method} ({result.confidence:.2f})"
            )
            return enriched

        return enriched

    def unlabeled(self, records: List[FieldRecord]) -> List[EnrichedField]:
        """Decompose names only; every field keeps label None and confidence 0."""
        return [
            EnrichedField(record=record, field_name_parts=parse_field_name(record.name))
            for record in records
        ]

    def enrich(self, records: List[FieldRecord], text_content: TextContent) -> List[EnrichedField]:
        """Infer labels for all fields, preserving their order."""
        enriched = [self.infer(record, text_content) for record in records]

        labeled = sum(1 for item in enriched if item.label)
        logger.info(f"Inferred labels for {labeled}/{len(enriched)} fields")
        return enriched
