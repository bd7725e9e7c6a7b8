import json
from datetime import datetime

import pytest

from app.services.field_labels import (
    FieldRecord,
    generate_text_report,
    get_statistics,
    organize_fields,
    parse_field_dump,
    to_clean_dict,
    to_clean_json,
)
from app.services.field_labels.reports import format_confidence

from conftest import SAMPLE_DUMP, SAMPLE_TEXT


@pytest.fixture
def fields(engine, classifier):
    content = classifier.build_content(SAMPLE_TEXT, 2)
    return engine.enrich(parse_field_dump(SAMPLE_DUMP), content)


@pytest.mark.parametrize('confidence,expected', [
    (2 / 3, '67%'),
    (0.7, '70%'),
    (0.125, '13%'),
    (0.0, '0%'),
    (1.0, '100%'),
    (None, 'N/A'),
])
def test_format_confidence(confidence, expected):
    assert format_confidence(confidence) == expected


def test_clean_projection(fields):
    text_field, checkbox = [to_clean_dict(f) for f in fields]

    assert text_field == {
        'type': 'Text',
        'name': 'form[0].Pt1Line1a_FamilyName[0]',
        'label': 'Family Name:',
        'labelConfidence': '67%',
        'flags': '8388608',
        'justification': 'Left',
        'maxLength': 34,
        'value': None,
        'options': None,
        'checkboxValues': None,
    }
    assert checkbox['label'] == 'AppType Selection'
    assert checkbox['labelConfidence'] == '70%'
    assert checkbox['options'] == ['A', 'Off']
    assert checkbox['checkboxValues'] == {'toCheck': ['A'], 'toUncheck': 'Off'}


def test_clean_projection_defaults(engine, classifier):
    field = engine.infer(FieldRecord(name='Misc'), classifier.build_content('', 0))
    clean = to_clean_dict(field)

    assert clean['label'] is None
    assert clean['labelConfidence'] == '0%'
    assert clean['flags'] == '1'
    assert clean['justification'] == 'Left'
    assert clean['maxLength'] is None


def test_json_round_trip_keeps_record_attributes(fields):
    loaded = json.loads(to_clean_json(fields))

    for item, field in zip(loaded, fields):
        assert item['name'] == field.record.name
        assert item['type'] == field.record.type
        assert item['value'] == field.record.value


def test_text_report(fields):
    report = generate_text_report(fields, extraction_date=datetime(2024, 5, 1, 12, 0))

    assert 'PDF FIELD EXTRACTION REPORT' in report
    assert 'Total Fields: 2' in report
    assert 'Extraction Date: 2024-05-01T12:00:00' in report
    assert '[TEXT FIELDS] (1 fields)' in report
    assert '[BUTTON FIELDS] (1 fields)' in report
    assert 'Label: Family Name: (67% confidence)' in report
    assert 'Max Length: 34' in report
    assert '"A" = Selected/Checked' in report
    assert '"Off" = Unchecked/Unselected' in report
    assert 'Found 1 checkbox/radio fields:' in report
    assert '→ To check/select: Use value "A"' in report
    assert '→ To uncheck: Use value "Off" or leave empty' in report
    assert report.rstrip().endswith('form1[0].#subform[0].CB_AppType[0]')


def test_text_report_without_checkboxes(engine, classifier):
    fields = engine.enrich(
        [FieldRecord(name='Pt1_Notes', type='Text', flags='0')],
        classifier.build_content('', 0)
    )
    report = generate_text_report(fields)

    assert 'No checkbox or radio button fields found in this PDF.' in report
    assert 'Flags:' not in report


def test_organize_fields():
    records = parse_field_dump(SAMPLE_DUMP + "FieldName: Pt2_Sign\nFieldType: Sig\n---\n")
    organized = organize_fields(records)

    assert list(organized['byPart']) == ['Part 1', 'Other', 'Part 2']
    assert [f['name'] for f in organized['byType']['checkbox']] == ['form1[0].#subform[0].CB_AppType[0]']
    assert len(organized['byType']['signature']) == 1
    assert organized['all'][1]['checkboxValues'] == {'toCheck': ['A'], 'toUncheck': 'Off'}
    assert organized['all'][0]['value'] == ''


def test_statistics():
    records = [
        FieldRecord(name='Pt1_A', type='Text'),
        FieldRecord(name='Pt1_B', type='Button'),
        FieldRecord(name='Choice_YN', type='Button'),
        FieldRecord(name='Other', type='Widget'),
    ]
    stats = get_statistics(records)

    assert stats['total_fields'] == 4
    assert stats['by_type'] == {
        'text': 1, 'checkbox': 1, 'button': 1, 'choice': 0, 'signature': 0, 'other': 1,
    }
    assert stats['by_part'] == {'Part 1': 2, 'Other': 2}


def test_text_report_state_meanings_and_alternatives(engine, classifier):
    dump = (
        "FieldType: Button\nFieldName: Pt2Line4_CB_Married[0]\n"
        "FieldStateOption: Yes\nFieldStateOption: No\nFieldStateOption: Off\n---\n"
        "FieldType: Button\nFieldName: Pt2Line5_CB_Citizen[0]\n"
        "FieldStateOption: Y\nFieldStateOption: 1\nFieldStateOption: Off\n---\n"
    )
    fields = engine.enrich(parse_field_dump(dump), classifier.build_content('', 0))
    report = generate_text_report(fields)

    assert '"Yes" = Checked (Yes)' in report
    assert '"No" = Checked (No)' in report
    assert '"Y" = Checked/Selected' in report
    assert '"1" = Checked/Selected' in report
    assert '→ To check/select: Use value "Yes"' in report
    assert '→ Alternative values: "No"' in report
    assert '→ Alternative values: "1"' in report
    assert 'Found 2 checkbox/radio fields:' in report


def test_field_name_list_heading(fields):
    report = generate_text_report(fields)

    heading = report[report.index('FIELD NAME LIST'):]
    assert heading.splitlines()[1].strip() == '(For easy copy/paste)'
