"""
Field name decomposition.

Form authoring tools name fields like ``form[0].Pt1Line1a_FamilyName[0]``.
This module strips the structural noise and splits what is left into words
that can be compared against page text.

Tokenization splits a lowercase->uppercase boundary first, then an
acronym->word boundary, so ``USCISFormNumber`` becomes
``['USCIS', 'Form', 'Number']``. Letters followed by digits are never split:
``Line5A`` stays a single token while ``line`` is reported as ``'5A'``.
"""

import re
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

# Applied in order
_FORM_PREFIX = re.compile(r'^form\d*\[\d*\]\.', re.IGNORECASE)
_ARRAY_SUFFIX = re.compile(r'\[\d+\]$')
_PAGE_PREFIX = re.compile(r'^P\d+\.', re.IGNORECASE)
_PART_PREFIX = re.compile(r'^Pt\d+', re.IGNORECASE)
_SEPARATORS = re.compile(r'[_.]')

_LINE_REF = re.compile(r'Line([A-Z0-9]+)', re.IGNORECASE)
_SECTION_REF = re.compile(r'Section([A-Z0-9]+)', re.IGNORECASE)

_LOWER_UPPER = re.compile(r'([a-z])([A-Z])')
_ACRONYM_WORD = re.compile(r'([A-Z]+)([A-Z][a-z])')
_TOKEN_SPLIT = re.compile(r'[\s_\-.]+')


@dataclass
class FieldNameParts:
    """A field name split into comparable words and structural references."""
    original: str
    cleaned: str
    words: List[str] = field(default_factory=list)
    line: Optional[str] = None
    section: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'original': self.original,
            'cleaned': self.cleaned,
            'words': list(self.words),
            'line': self.line,
            'section': self.section,
        }


def clean_field_name(field_name: str) -> str:
    """Strip form/page/part prefixes and array suffixes, turn separators into spaces."""
    cleaned = _FORM_PREFIX.sub('', field_name, count=1)
    cleaned = _ARRAY_SUFFIX.sub('', cleaned)
    cleaned = _PAGE_PREFIX.sub('', cleaned, count=1)
    cleaned = _PART_PREFIX.sub('', cleaned, count=1)
    return _SEPARATORS.sub(' ', cleaned)


def split_words(text: str) -> List[str]:
    """Split camelCase, acronyms and separators into words."""
    spaced = _LOWER_UPPER.sub(r'\1 \2', text)
    spaced = _ACRONYM_WORD.sub(r'\1 \2', spaced)
    return [word for word in _TOKEN_SPLIT.split(spaced) if word]


def parse_field_name(field_name: str) -> FieldNameParts:
    """
    Decompose a raw field name.

    Args:
        field_name: Name as reported by the field dump

    Returns:
        FieldNameParts with cleaned name, words and line/section references
    """
    field_name = field_name or ''
    cleaned = clean_field_name(field_name)

    line_match = _LINE_REF.search(cleaned)
    section_match = _SECTION_REF.search(cleaned)

    return FieldNameParts(
        original=field_name,
        cleaned=cleaned,
        words=split_words(cleaned),
        line=line_match.group(1) if line_match else None,
        section=section_match.group(1) if section_match else None,
    )
