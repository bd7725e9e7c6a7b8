import pytest

from app.services.errors import TextExtractionFailed
from app.services.field_labels import (
    FieldExtractionPipeline,
    LabelInferenceEngine,
    TextElementClassifier,
)

SAMPLE_DUMP = """---
FieldType: Text
FieldName: form[0].Pt1Line1a_FamilyName[0]
FieldFlags: 8388608
FieldJustification: Left
FieldMaxLength: 34
---
FieldType: Button
FieldName: form1[0].#subform[0].CB_AppType[0]
FieldFlags: 0
FieldValue: Off
FieldJustification: Left
FieldStateOption: A
FieldStateOption: Off
---
"""

SAMPLE_TEXT = """Form I-130
Part 1. Relationship

Family Name:
Given Name (First Name)
For USCIS Use Only
"""


class FakePdftk:
    """Stands in for PdftkService with a fixed dump."""

    def __init__(self, dump=SAMPLE_DUMP, error=None):
        self.dump = dump
        self.error = error
        self.calls = []

    def dump_data_fields(self, pdf_path):
        self.calls.append(pdf_path)
        if self.error:
            raise self.error
        return self.dump

    def is_available(self):
        return self.error is None


class FakeTextExtractor:
    """Stands in for TextExtractor with fixed page text."""

    def __init__(self, text=SAMPLE_TEXT, pages=2, fail=False):
        self.text = text
        self.pages = pages
        self.fail = fail

    def extract(self, pdf_path):
        if self.fail:
            raise TextExtractionFailed(f"Failed to extract text from {pdf_path}: bad xref")
        return self.text, self.pages


@pytest.fixture
def classifier():
    return TextElementClassifier()


@pytest.fixture
def engine():
    return LabelInferenceEngine(threshold=0.5, inferred_confidence=0.7)


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / "form.pdf"
    path.write_bytes(b"%PDF-1.4\n" + b"0" * 2039)
    return path


@pytest.fixture
def make_pipeline(engine):
    def _make(dump=SAMPLE_DUMP, text=SAMPLE_TEXT, pages=2, text_fails=False, pdftk_error=None):
        return FieldExtractionPipeline(
            pdftk_service=FakePdftk(dump, error=pdftk_error),
            text_extractor=FakeTextExtractor(text, pages, fail=text_fails),
            engine=engine,
        )
    return _make
