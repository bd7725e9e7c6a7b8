import pytest

from app.services.errors import ToolUnavailable, ExtractionFailed


def test_process_pdf(make_pipeline, pdf_file):
    result = make_pipeline().process_pdf(str(pdf_file))

    assert result.filename == 'form.pdf'
    assert result.file_size_kb == 2
    assert result.total_fields == 2
    assert result.has_fields
    assert result.text_content.pages == 2
    assert result.text_extraction_error is None
    assert [f.label for f in result.fields] == ['Family Name:', 'AppType Selection']


def test_to_dict(make_pipeline, pdf_file):
    data = make_pipeline().process_pdf(str(pdf_file), filename='i-130.pdf').to_dict()

    assert data['filename'] == 'i-130.pdf'
    assert data['total_fields'] == 2
    assert data['pages'] == 2
    assert data['statistics']['by_type']['checkbox'] == 1
    assert data['statistics']['by_part'] == {'Part 1': 1, 'Other': 1}
    assert data['raw_fields'][1]['stateOptions'] == ['A', 'Off']
    assert data['enhanced_fields'][0]['labelMethod'] == 'text_match'
    assert data['clean_fields'][1]['checkboxValues']['toCheck'] == ['A']
    assert 'CHECKBOX/RADIO VALUE GUIDE' in data['text_output']


def test_text_extraction_failure_keeps_fields_without_labels(make_pipeline, pdf_file):
    result = make_pipeline(text_fails=True).process_pdf(str(pdf_file))

    assert result.total_fields == 2
    assert result.text_content.full_text == ''
    assert result.text_content.elements == []
    assert result.text_content.pages == 0
    assert 'bad xref' in result.text_extraction_error
    for field in result.fields:
        assert field.label is None
        assert field.label_confidence == 0.0


@pytest.mark.parametrize('error', [ToolUnavailable(), ExtractionFailed('exit status 1')])
def test_field_dump_errors_fail_the_request(make_pipeline, pdf_file, error):
    with pytest.raises(type(error)):
        make_pipeline(pdftk_error=error).process_pdf(str(pdf_file))


def test_process_dump_without_fields(make_pipeline):
    result = make_pipeline().process_dump('', full_text='Family Name:', pages=1)

    assert result.total_fields == 0
    assert not result.has_fields
    assert result.statistics['total_fields'] == 0
