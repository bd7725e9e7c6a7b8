"""
Report rendering for enriched fields.

Two outputs are produced from the same field list:
- a sectioned plain-text report for download, grouped by field type, with a
  checkbox/radio value guide and a copy/paste list of field names
- a clean JSON projection with the keys consumers of the extractor expect
"""
import json
from datetime import datetime
from typing import List, Dict, Any, Optional

from .field_records import OFF_STATE
from .inference import EnrichedField
from .organizer import checkbox_values

BANNER = '=' * 33
RULE = '-' * 33
SECTION_RULE = '─' * 50

# Selected-state meanings for the report
STATE_MEANINGS: Dict[str, str] = {
    OFF_STATE: 'Unchecked/Unselected',
    'Yes': 'Checked (Yes)',
    'No': 'Checked (No)',
    'Y': 'Checked/Selected',
    '1': 'Checked/Selected',
}
DEFAULT_STATE_MEANING = 'Selected/Checked'

CHECKBOX_NAME_MARKERS = ('checkbox', 'CB', '_YN', 'RadioButton')


def format_confidence(confidence: Optional[float]) -> str:
    """Render a [0, 1] confidence as a whole percentage, rounding half up."""
    if confidence is None:
        return 'N/A'
    return f"{int(confidence * 100 + 0.5)}%"


def _heading(title: str, rule: str = BANNER, subtitle: Optional[str] = None) -> str:
    lines = [rule, title.center(len(rule)).rstrip()]
    if subtitle:
        lines.append(subtitle.center(len(rule)).rstrip())
    lines.append(rule)
    return '\n'.join(lines) + '\n'


def _is_checkbox_like(field: EnrichedField) -> bool:
    if field.type == 'Button' and field.record.is_selectable:
        return True
    return any(marker in field.name for marker in CHECKBOX_NAME_MARKERS)


def _field_listing(field: EnrichedField) -> List[str]:
    record = field.record
    lines = [f"\nField Name: {record.name}"]

    if field.label:
        lines.append(f"  Label: {field.label} ({format_confidence(field.label_confidence)} confidence)")
    if record.value:
        lines.append(f"  Current Value: {record.value}")
    if record.max_length:
        lines.append(f"  Max Length: {record.max_length}")

    if record.state_options:
        lines.append("  ✓ CHECKBOX/RADIO VALUES:")
        for option in record.state_options:
            meaning = STATE_MEANINGS.get(option, DEFAULT_STATE_MEANING)
            lines.append(f"    • \"{option}\" = {meaning}")
    elif record.options:
        lines.append(f"  Options: {', '.join(record.options)}")

    if record.flags and record.flags != '0':
        lines.append(f"  Flags: {record.flags}")
    return lines


def generate_text_report(fields: List[EnrichedField], extraction_date: Optional[datetime] = None) -> str:
    """
    Render the human-readable extraction report.

    Args:
        fields: Enriched fields in document order
        extraction_date: Timestamp printed in the header (defaults to now)

    Returns:
        Report text
    """
    extraction_date = extraction_date or datetime.now()

    output = _heading('PDF FIELD EXTRACTION REPORT')
    output += f"\nTotal Fields: {len(fields)}\n"
    output += f"Extraction Date: {extraction_date.isoformat()}\n"
    output += '\n' + _heading('FIELD LISTING', RULE)

    # Group by type, sections in first-seen order
    by_type: Dict[str, List[EnrichedField]] = {}
    for field in fields:
        by_type.setdefault(field.type or 'Unknown', []).append(field)

    for field_type, type_fields in by_type.items():
        output += f"\n[{field_type.upper()} FIELDS] ({len(type_fields)} fields)\n"
        output += SECTION_RULE + '\n'
        for field in type_fields:
            output += '\n'.join(_field_listing(field)) + '\n'

    output += '\n\n' + _heading('CHECKBOX/RADIO VALUE GUIDE') + '\n'

    checkbox_fields = [field for field in fields if _is_checkbox_like(field)]
    if checkbox_fields:
        output += f"Found {len(checkbox_fields)} checkbox/radio fields:\n\n"
        for field in checkbox_fields:
            output += f"{field.name}\n"
            values = checkbox_values(field.record)
            if values:
                to_check = values['toCheck']
                if to_check:
                    output += f"  → To check/select: Use value \"{to_check[0]}\"\n"
                    if len(to_check) > 1:
                        alternatives = ', '.join(f'"{value}"' for value in to_check[1:])
                        output += f"  → Alternative values: {alternatives}\n"
                output += f"  → To uncheck: Use value \"{OFF_STATE}\" or leave empty\n"
            output += '\n'
    else:
        output += 'No checkbox or radio button fields found in this PDF.\n'

    output += '\n' + _heading('FIELD NAME LIST', subtitle='(For easy copy/paste)') + '\n'
    output += '\n'.join(field.name for field in fields)
    if fields:
        output += '\n'

    return output


def to_clean_dict(field: EnrichedField) -> Dict[str, Any]:
    """
    Project an enriched field onto the clean JSON shape.

    name, type and value pass through unchanged; flags and justification
    fall back to the PDF defaults ("1", "Left").
    """
    record = field.record
    return {
        'type': record.type,
        'name': record.name,
        'label': field.label,
        'labelConfidence': format_confidence(field.label_confidence),
        'flags': record.flags or '1',
        'justification': record.justification or 'Left',
        'maxLength': record.max_length,
        'value': record.value,
        'options': list(record.state_options) or record.options or None,
        'checkboxValues': checkbox_values(record),
    }


def to_clean_json(fields: List[EnrichedField], indent: int = 2) -> str:
    """Serialize the clean projection of all fields."""
    return json.dumps([to_clean_dict(field) for field in fields], indent=indent, ensure_ascii=False)
