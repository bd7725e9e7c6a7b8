import subprocess

import pytest

from app.services import pdftk_service, text_extractor
from app.services.errors import ToolUnavailable, ExtractionFailed, TextExtractionFailed
from app.services.pdftk_service import PdftkService
from app.services.text_extractor import TextExtractor


@pytest.fixture
def pdftk_on_path(monkeypatch):
    monkeypatch.setattr(pdftk_service.shutil, 'which', lambda command: f'/usr/bin/{command}')


def _completed(returncode=0, stdout='', stderr=''):
    return subprocess.CompletedProcess(args=['pdftk'], returncode=returncode, stdout=stdout, stderr=stderr)


def test_missing_tool(monkeypatch, pdf_file):
    monkeypatch.setattr(pdftk_service.shutil, 'which', lambda command: None)

    with pytest.raises(ToolUnavailable) as excinfo:
        PdftkService(command='pdftk').dump_data_fields(str(pdf_file))
    assert 'install pdftk' in str(excinfo.value)


def test_unreadable_file(pdftk_on_path, tmp_path):
    with pytest.raises(ExtractionFailed):
        PdftkService().dump_data_fields(str(tmp_path / 'missing.pdf'))


def test_dump_success_ignores_warnings(monkeypatch, pdftk_on_path, pdf_file, caplog):
    calls = []

    def fake_run(args, **kwargs):
        calls.append(args)
        return _completed(stdout='FieldName: A\n---\n', stderr='Warning: unusual xref')

    monkeypatch.setattr(pdftk_service.subprocess, 'run', fake_run)

    output = PdftkService(command='pdftk', timeout=5).dump_data_fields(str(pdf_file))

    assert output == 'FieldName: A\n---\n'
    assert calls == [['pdftk', str(pdf_file), 'dump_data_fields']]
    assert 'pdftk stderr' not in caplog.text


def test_non_warning_stderr_is_logged(monkeypatch, pdftk_on_path, pdf_file, caplog):
    monkeypatch.setattr(
        pdftk_service.subprocess, 'run',
        lambda args, **kwargs: _completed(stdout='', stderr='Unhandled Java Exception')
    )

    with caplog.at_level('WARNING'):
        PdftkService().dump_data_fields(str(pdf_file))

    assert 'Unhandled Java Exception' in caplog.text


def test_non_zero_exit(monkeypatch, pdftk_on_path, pdf_file):
    monkeypatch.setattr(
        pdftk_service.subprocess, 'run',
        lambda args, **kwargs: _completed(returncode=1, stderr='Error: Failed to open PDF file')
    )

    with pytest.raises(ExtractionFailed) as excinfo:
        PdftkService().dump_data_fields(str(pdf_file))
    assert 'Failed to open PDF file' in str(excinfo.value)


def test_tool_vanishes_before_run(monkeypatch, pdftk_on_path, pdf_file):
    def fake_run(args, **kwargs):
        raise FileNotFoundError(args[0])

    monkeypatch.setattr(pdftk_service.subprocess, 'run', fake_run)

    with pytest.raises(ToolUnavailable):
        PdftkService().dump_data_fields(str(pdf_file))


class FakePage:
    def __init__(self, text):
        self.text = text

    def extract_text(self):
        return self.text


def test_text_extractor_joins_pages(monkeypatch):
    class FakeReader:
        def __init__(self, path):
            self.pages = [FakePage('Family Name:'), FakePage(None), FakePage('Date of Birth:')]

    monkeypatch.setattr(text_extractor, 'PdfReader', FakeReader)

    full_text, pages = TextExtractor().extract('form.pdf')

    assert full_text == 'Family Name:\n\nDate of Birth:'
    assert pages == 3


def test_text_extractor_failure(monkeypatch):
    def broken_reader(path):
        raise ValueError('EOF marker not found')

    monkeypatch.setattr(text_extractor, 'PdfReader', broken_reader)

    with pytest.raises(TextExtractionFailed) as excinfo:
        TextExtractor().extract('form.pdf')
    assert 'EOF marker not found' in str(excinfo.value)


def test_timeout_is_extraction_failure(monkeypatch, pdftk_on_path, pdf_file):
    def fake_run(args, **kwargs):
        raise subprocess.TimeoutExpired(args, kwargs['timeout'])

    monkeypatch.setattr(pdftk_service.subprocess, 'run', fake_run)

    with pytest.raises(ExtractionFailed) as excinfo:
        PdftkService(command='pdftk', timeout=3).dump_data_fields(str(pdf_file))
    assert 'timed out after 3s' in str(excinfo.value)
