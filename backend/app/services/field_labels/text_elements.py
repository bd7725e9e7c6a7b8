"""
Text element classification for extracted page text.
Tags each non-empty line as a likely label or not.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import List, Dict, Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextElement:
    """One trimmed, non-empty line of page text."""
    text: str
    line_number: int  # zero-based index into the extracted text lines
    is_likely_label: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.text,
            'lineNumber': self.line_number,
            'isLikelyLabel': self.is_likely_label,
        }


@dataclass
class TextContent:
    """Page text of one document with its classified lines."""
    full_text: str = ''
    elements: List[TextElement] = field(default_factory=list)
    pages: int = 0

    @property
    def label_elements(self) -> List[TextElement]:
        return [element for element in self.elements if element.is_likely_label]


class TextElementClassifier:
    """Classifies lines of page text as likely field captions."""

    # Numbered, lettered and parenthetical list markers
    LIST_MARKER_PATTERNS: List[str] = [
        r'^\d+\.',      # "1." numbered items
        r'^[A-Z]\.',    # "A." lettered items
        r'^\([a-z]\)',  # "(a)" parenthetical items
    ]

    # Structural references, case-insensitive
    REFERENCE_PATTERNS: List[str] = [
        r'^Part \d+',
        r'^Section \d+',
        r'^Item \d+',
    ]

    # Case-sensitive substrings common on form captions
    LABEL_VOCABULARY: List[str] = [
        'Name', 'Address', 'Date', 'Phone', 'Email', 'Number', 'Code',
        'Country', 'State', 'City', 'ZIP', 'Yes', 'No', 'Type', 'Status',
        'Application', 'Applicant', 'Beneficiary', 'Petitioner', 'Employer',
        'Form', 'Part', 'Section', 'Information', 'Select', 'Check', 'Mark',
        'Indicate',
    ]

    def __init__(self):
        """Initialize text classifier."""
        self.list_markers = [re.compile(pattern) for pattern in self.LIST_MARKER_PATTERNS]
        self.references = [re.compile(pattern, re.IGNORECASE) for pattern in self.REFERENCE_PATTERNS]

    def is_likely_label(self, line: str) -> bool:
        """
        Decide whether a trimmed line looks like a field caption.

        Recall is deliberately high: weak candidates are filtered later by
        the similarity score, not here.
        """
        if line.endswith(':') or line.endswith('?'):
            return True

        if any(pattern.match(line) for pattern in self.list_markers):
            return True

        if any(pattern.match(line) for pattern in self.references):
            return True

        return any(word in line for word in self.LABEL_VOCABULARY)

    def classify(self, full_text: str) -> List[TextElement]:
        """
        Split text into lines and classify each non-empty one.

        Args:
            full_text: Newline-separated document text

        Returns:
            One TextElement per non-empty line, in original order
        """
        elements: List[TextElement] = []
        for index, raw_line in enumerate((full_text or '').split('\n')):
            line = raw_line.strip()
            if not line:
                continue
            elements.append(TextElement(
                text=line,
                line_number=index,
                is_likely_label=self.is_likely_label(line),
            ))

        label_count = sum(1 for element in elements if element.is_likely_label)
        logger.debug(f"Classified {len(elements)} text lines, {label_count} likely labels")
        return elements

    def build_content(self, full_text: str, pages: int) -> TextContent:
        """Wrap extracted text and its classification in a TextContent."""
        return TextContent(
            full_text=full_text or '',
            elements=self.classify(full_text),
            pages=pages,
        )
